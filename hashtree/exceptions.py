"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Hashtree, a product of Garudex Labs

Exception hierarchy for Hashtree.

All custom exceptions inherit from HashTreeError base class. Tree errors also
inherit from the matching built-in exception so callers catching ValueError,
IndexError or TypeError keep working.
"""


class HashTreeError(Exception):
    """Base exception for all Hashtree errors."""
    pass


# Tree Errors
class TreeError(HashTreeError):
    """Base exception for tree construction and proof generation errors."""
    pass


class EmptyInputError(TreeError, ValueError):
    """Raised when a tree is constructed from zero leaves."""
    pass


class IndexOutOfRangeError(TreeError, IndexError):
    """Raised when a proof is requested for a leaf index outside the tree."""
    pass


class InvalidLeafError(TreeError, TypeError):
    """Raised when a leaf value is neither bytes nor text."""
    pass


# Encoding Errors
class EncodingError(HashTreeError):
    """Base exception for digest and proof encoding errors."""
    pass


class InvalidDigestError(EncodingError, ValueError):
    """Raised when a digest is not valid hex or has the wrong length."""
    pass


class InvalidProofFormatError(EncodingError, ValueError):
    """Raised when a serialized proof is malformed."""
    pass


# Configuration Errors
class ConfigurationError(HashTreeError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass
