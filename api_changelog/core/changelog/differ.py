"""
Snapshot Differ

Computes added and removed items per category between a snapshot and the
snapshot of the preceding version. Only presence is compared; items keep
their declaration order.
"""

from __future__ import annotations
from typing import Optional, Tuple

from .models import CategoryChanges, ChangeSet, Snapshot
from ..logger import get_logger

log = get_logger(__name__)


def diff_snapshots(current: Snapshot, previous: Optional[Snapshot]) -> ChangeSet:
    """
    Compare two snapshots.

    Args:
        current: Snapshot of the version being recorded
        previous: Snapshot of its predecessor, or None

    Returns:
        Change set with one entry per category that changed
    """
    changes: ChangeSet = {}
    previous = previous or {}

    for key, curr_data in current.items():
        prev_data = previous.get(key)

        if prev_data is None:
            # Newly tracked category: everything is new, nothing removed
            if curr_data.items:
                changes[key] = CategoryChanges(name=curr_data.name, added=list(curr_data.items))
            continue

        prev_keys = {item.key for item in prev_data.items}
        curr_keys = {item.key for item in curr_data.items}

        added = [item for item in curr_data.items if item.key not in prev_keys]
        removed = [item for item in prev_data.items if item.key not in curr_keys]

        if added or removed:
            changes[key] = CategoryChanges(name=curr_data.name, added=added, removed=removed)

    # Categories that disappeared entirely
    for key, prev_data in previous.items():
        if key not in current and prev_data.items:
            log.info(f"  {prev_data.name} no longer present, all {len(prev_data.items)} items removed")
            changes[key] = CategoryChanges(name=prev_data.name, removed=list(prev_data.items))

    return changes


def count_changes(changes: ChangeSet) -> Tuple[int, int]:
    """Total (added, removed) item counts of a change set."""
    added = sum(len(c.added) for c in changes.values())
    removed = sum(len(c.removed) for c in changes.values())
    return added, removed
