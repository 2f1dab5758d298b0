"""
Command-line interface for Hashtree.
"""
