"""
CLI module for rpnkey.

The command-line interface providing hash, compare, dedup and states commands.
"""

from rpnkey_cli.main import app

__all__ = ["app"]
