"""
Exploration module for rpnkey.

This module provides a NetworkX-based store of explored symbolic states,
deduplicated by structural formula equality.
"""

from rpnkey.explore.state_space import StateSpace

__all__ = ["StateSpace"]
