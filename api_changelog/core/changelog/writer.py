"""
Changelog Writer

Main orchestrator: resolves the dump's version, builds the current snapshot,
diffs it against the preceding recorded version and records the result in the
history store.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from .differ import count_changes, diff_snapshots
from .history_store import evict_oldest, drop_version, load_store, record_version, save_store
from .models import ChangeSet, VersionRecord
from .snapshot_builder import SnapshotBuilder
from .version_resolver import find_predecessor, resolve_version_or_unknown
from ..config import ChangelogConfig
from ..logger import get_logger

log = get_logger(__name__)


@dataclass
class RunSummary:
    """Outcome of one changelog run."""

    version_id: str
    previous_version: Optional[str]
    changes: ChangeSet = field(default_factory=dict)
    added_count: int = 0
    removed_count: int = 0
    replaced: bool = False
    skipped: Dict[str, str] = field(default_factory=dict)
    evicted: List[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.added_count or self.removed_count)

    def summary_lines(self) -> List[str]:
        lines = [f"Changes: +{self.added_count} added, -{self.removed_count} removed"]
        for category in self.changes.values():
            lines.append(f"  {category.name}: +{len(category.added)} -{len(category.removed)}")
        return lines


class ChangelogWriter:
    """Records one version's snapshot and changelog in the history store."""

    def __init__(self, config: ChangelogConfig):
        """
        Initialize changelog writer.

        Args:
            config: Store location, source paths, tracked categories and cap
        """
        self.config = config

    def run(self, dump_text: Optional[str] = None, today: Optional[date] = None) -> RunSummary:
        """
        Process the current version.

        The store is loaded first and written once at the end, so a failing
        run leaves it untouched.

        Args:
            dump_text: Raw dump text (read from config.dump_path when omitted)
            today: Fallback release date when the dump has none

        Returns:
            Summary of what was recorded

        Raises:
            StoreCorruptError: The existing store cannot be read
        """
        store = load_store(self.config.store_path)

        if dump_text is None:
            dump_text = self._read_dump(self.config.dump_path)
        info = resolve_version_or_unknown(dump_text, today)
        log.info(f"Processing version {info.version_id}...")

        previous_version = find_predecessor(store.versions, info.version_id)
        log.info(f"Previous version: {previous_version or 'none'}")

        replaced = drop_version(store, info.version_id)
        if replaced:
            log.info(f"  Replacing existing record for {info.version_id}")

        builder = SnapshotBuilder(self.config.files_dir, self.config.categories)
        snapshot = builder.build()

        previous_snapshot = None
        if previous_version is not None:
            previous_snapshot = store.snapshots.get(previous_version)
            if previous_snapshot is None:
                log.warning(f"No snapshot stored for {previous_version}")

        changes = diff_snapshots(snapshot, previous_snapshot)
        added_count, removed_count = count_changes(changes)

        record = VersionRecord(
            version_id=info.version_id,
            date=info.date,
            time=info.time,
            added_count=added_count,
            removed_count=removed_count,
        )
        record_version(store, record, snapshot, changes)
        evicted = evict_oldest(store, self.config.max_versions)
        if info.version_id in evicted:
            log.warning(f"Version {info.version_id} is older than every retained version and was evicted")

        save_store(store, self.config.store_path)

        summary = RunSummary(
            version_id=info.version_id,
            previous_version=previous_version,
            changes=changes,
            added_count=added_count,
            removed_count=removed_count,
            replaced=replaced,
            skipped=dict(builder.skipped),
            evicted=evicted,
        )
        log.info(f"Generated changelog for version {info.version_id}")
        for line in summary.summary_lines():
            log.info(line)
        if summary.skipped:
            log.info(f"Skipped categories: {', '.join(sorted(summary.skipped))}")
        return summary

    def _read_dump(self, path: Path) -> str:
        path = Path(path)
        if not path.exists():
            log.warning(f"Dump file not found: {path}")
            return ""
        return path.read_text(encoding="utf-8", errors="replace")
