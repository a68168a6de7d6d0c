"""
Debug module for rpnkey.

This module provides a registry of named output streams for diagnostics.
"""

from rpnkey.debug.streams import DebugStreams, NoSuchStreamError

__all__ = [
    "DebugStreams",
    "NoSuchStreamError",
]
