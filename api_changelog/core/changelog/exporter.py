"""
Exporter

Exports the history store as a changelog index plus one changelog file per
version, the layout served to the docs site.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List
import json

from .models import HistoryStore, VersionRecord
from ..logger import get_logger

log = get_logger(__name__)


class ChangelogExporter:
    """Exports recorded changelogs to JSON files."""

    def __init__(self, output_dir: Path, pretty: bool = False):
        """
        Initialize exporter.

        Args:
            output_dir: Output directory
            pretty: Pretty-print JSON
        """
        self.output_dir = Path(output_dir)
        self.pretty = pretty

    def export(self, store: HistoryStore) -> List[Path]:
        """
        Export the index and per-version changelogs.

        Creates structure:
            output_dir/
                changelog-index.json
                changelogs/
                    <version>.json

        Files of versions no longer in the store are removed.

        Args:
            store: History store to export

        Returns:
            Paths of the written changelog files
        """
        changelogs_dir = self.output_dir / "changelogs"
        changelogs_dir.mkdir(parents=True, exist_ok=True)

        self._write_json(
            self.output_dir / "changelog-index.json",
            [self._index_entry(r) for r in store.versions],
        )

        written = []
        for record in store.versions:
            path = changelogs_dir / f"{record.version_id}.json"
            self._write_json(path, self.changelog_entry(store, record))
            written.append(path)

        known = {p.name for p in written}
        for stale in changelogs_dir.glob("*.json"):
            if stale.name not in known:
                log.info(f"  Removing changelog of evicted version: {stale.name}")
                stale.unlink()

        log.info(f"Exported {len(written)} changelogs to {self.output_dir}")
        return written

    def changelog_entry(self, store: HistoryStore, record: VersionRecord) -> Dict[str, Any]:
        """Changelog of one version, with changes keyed by display name."""
        changes = {}
        for category in store.changes.get(record.version_id, {}).values():
            dumped = category.model_dump(mode="json", exclude_none=True)
            changes[category.name] = {"added": dumped["added"], "removed": dumped["removed"]}
        return {
            "version": record.version_id,
            "date": record.date,
            "time": record.time,
            "changes": changes,
        }

    def _index_entry(self, record: VersionRecord) -> Dict[str, Any]:
        return {
            "version": record.version_id,
            "date": record.date,
            "time": record.time,
            "addedCount": record.added_count,
            "removedCount": record.removed_count,
        }

    def _write_json(self, path: Path, data: Any) -> None:
        """Write data to JSON file."""
        indent = 2 if self.pretty else None
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=indent)
