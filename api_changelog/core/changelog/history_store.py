"""
History Store

Loads, updates and persists the bounded per-version history: version records
(newest first), snapshots and change sets. The three are always added,
replaced and evicted together.
"""

from __future__ import annotations
from pathlib import Path
from typing import List
import json
import os

from pydantic import ValidationError

from .errors import StoreCorruptError
from .models import ChangeSet, HistoryStore, Snapshot, VersionRecord
from ..logger import get_logger

log = get_logger(__name__)

MAX_VERSIONS = 50


def load_store(path: Path) -> HistoryStore:
    """
    Load the history store.

    A store file that does not exist yields a fresh empty store. A store that
    exists but cannot be read is never reinitialized.

    Args:
        path: Store JSON path

    Returns:
        Loaded store

    Raises:
        StoreCorruptError: File exists but is not a valid store document
    """
    path = Path(path)
    if not path.exists():
        log.info(f"No history store at {path}, starting a new one")
        return HistoryStore()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise StoreCorruptError(path, str(e)) from e

    try:
        store = HistoryStore.model_validate(data)
    except ValidationError as e:
        raise StoreCorruptError(path, f"{e.error_count()} validation errors") from e

    _prune_orphans(store)
    sort_versions(store)
    log.debug(f"Loaded history store with {len(store.versions)} versions")
    return store


def save_store(store: HistoryStore, path: Path) -> None:
    """Write the whole store via a temp file and an atomic rename."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(store.to_json_dict(), f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(temp_path, path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise
    log.info(f"Saved history store: {path} ({len(store.versions)} versions)")


def sort_versions(store: HistoryStore) -> None:
    store.versions.sort(key=lambda r: r.sort_key, reverse=True)


def drop_version(store: HistoryStore, version_id: str) -> bool:
    """
    Remove a version's record, snapshot and change set.

    Returns:
        True if the version was recorded
    """
    before = len(store.versions)
    store.versions = [r for r in store.versions if r.version_id != version_id]
    store.snapshots.pop(version_id, None)
    store.changes.pop(version_id, None)
    return len(store.versions) != before


def record_version(
    store: HistoryStore,
    record: VersionRecord,
    snapshot: Snapshot,
    changes: ChangeSet,
) -> None:
    """Insert or replace a version with its snapshot and change set."""
    drop_version(store, record.version_id)
    store.versions.append(record)
    store.snapshots[record.version_id] = snapshot
    store.changes[record.version_id] = changes
    sort_versions(store)


def evict_oldest(store: HistoryStore, max_versions: int = MAX_VERSIONS) -> List[str]:
    """
    Drop the lowest versions beyond the retention cap.

    Returns:
        Evicted version ids
    """
    sort_versions(store)
    overflow = store.versions[max_versions:]
    evicted = [r.version_id for r in overflow]
    for version_id in evicted:
        drop_version(store, version_id)
    if evicted:
        log.info(f"Evicted {len(evicted)} old versions: {', '.join(evicted)}")
    return evicted


def _prune_orphans(store: HistoryStore) -> None:
    incomplete = [
        r.version_id for r in store.versions
        if r.version_id not in store.snapshots or r.version_id not in store.changes
    ]
    for version_id in incomplete:
        log.warning(f"Dropping record of version {version_id} without a snapshot or change set")
        drop_version(store, version_id)

    known = {r.version_id for r in store.versions}
    for mapping, label in ((store.snapshots, "snapshot"), (store.changes, "change set")):
        for version_id in [v for v in mapping if v not in known]:
            log.warning(f"Dropping orphaned {label} for unrecorded version {version_id}")
            del mapping[version_id]
