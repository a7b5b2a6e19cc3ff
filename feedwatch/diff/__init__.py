"""Diff package for feedwatch.

Submodules:
    fields       -- Recursive document diff producing FieldDiff lists.
    collections  -- Identity-keyed comparison of item collections.
"""

from feedwatch.diff.collections import DEFAULT_KEYS, ItemKeys, compare_snapshots, diff_collections
from feedwatch.diff.fields import diff_fields

__all__ = [
    "DEFAULT_KEYS",
    "ItemKeys",
    "compare_snapshots",
    "diff_collections",
    "diff_fields",
]
