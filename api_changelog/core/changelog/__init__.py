"""
API Changelog System

Normalizes per-version API dumps, diffs them against the previous recorded
version and keeps a bounded history of snapshots and changelogs.
"""

from .models import (
    CategoryChanges,
    CategorySnapshot,
    HistoryStore,
    Item,
    ItemKind,
    VersionRecord,
)
from .categories import CategoryDefinition, DocumentShape, DEFAULT_CATEGORIES

__all__ = [
    "CategoryChanges",
    "CategorySnapshot",
    "HistoryStore",
    "Item",
    "ItemKind",
    "VersionRecord",
    "CategoryDefinition",
    "DocumentShape",
    "DEFAULT_CATEGORIES",
]
