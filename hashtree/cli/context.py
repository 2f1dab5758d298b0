"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Hashtree, a product of Garudex Labs

CLI context for Hashtree.

Provides shared context object and decorators for CLI commands.
"""

import click

from hashtree.config.settings import get_default_config


class CLIContext:
    """Context object for CLI commands."""

    def __init__(self):
        self.config = get_default_config()
        self.config_path = None
        self.verbose = False


pass_context = click.make_pass_decorator(CLIContext, ensure=True)
