"""
Domain objects that are not plain database rows.
"""

from .snapshots import DisplayOverride, ProductSnapshot, SnapshotResolver, resolve_snapshots

__all__ = [
    "DisplayOverride",
    "ProductSnapshot",
    "SnapshotResolver",
    "resolve_snapshots",
]
