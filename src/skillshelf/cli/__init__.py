"""
CLI module for skillshelf.

Provides the command-line interface using Click.
"""

from skillshelf.cli.main import cli, main

__all__ = ["main", "cli"]
