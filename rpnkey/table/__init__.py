"""
Table module for rpnkey.

This module provides KeyTable, a hash table that hashes and compares its
keys through explicit KeyTraits.
"""

from rpnkey.table.keyed_table import DEFAULT_BUCKETS, MAX_LOAD_FACTOR, KeyTable

__all__ = [
    "DEFAULT_BUCKETS",
    "MAX_LOAD_FACTOR",
    "KeyTable",
]
