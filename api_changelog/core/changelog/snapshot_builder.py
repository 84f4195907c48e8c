"""
Snapshot Builder

Reads every tracked category document for the current version and
normalizes it into a snapshot.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional
import json

from .categories import CategoryDefinition, default_categories
from .errors import ChangelogError, MalformedDocumentError, MissingInputError
from .models import CategorySnapshot, Snapshot
from .normalizer import normalize_document
from ..logger import get_logger

log = get_logger(__name__)


class SnapshotBuilder:
    """Builds the current snapshot from per-category JSON files."""

    def __init__(
        self,
        files_dir: Path,
        categories: Optional[List[CategoryDefinition]] = None,
    ):
        """
        Initialize snapshot builder.

        Args:
            files_dir: Directory that category file paths are relative to
            categories: Tracked categories (defaults to the built-in set)
        """
        self.files_dir = Path(files_dir)
        self.categories = categories if categories is not None else default_categories()

        # Populated by build(): category key -> reason it contributed nothing
        self.skipped: Dict[str, str] = {}

    def build(self) -> Snapshot:
        """
        Build the snapshot for the current version.

        Categories whose file is missing or unparsable are left out of the
        snapshot and recorded in ``skipped``.

        Returns:
            Mapping of category key to its normalized state
        """
        self.skipped = {}
        snapshot: Snapshot = {}

        for category in self.categories:
            try:
                document = self._read_document(category)
            except MissingInputError as e:
                log.info(f"  Skipping {category.name}: {e}")
                self.skipped[category.key] = "missing"
                continue
            except MalformedDocumentError as e:
                log.warning(f"  Skipping {category.name}: {e}")
                self.skipped[category.key] = "malformed"
                continue

            errors: List[ChangelogError] = []
            items = normalize_document(category, document, errors)
            if errors:
                self.skipped[category.key] = "malformed"

            snapshot[category.key] = CategorySnapshot(
                name=category.name,
                items=items,
                detail=document if category.include_detail else None,
            )
            log.debug(f"  {category.name}: {len(items)} items")

        return snapshot

    def _read_document(self, category: CategoryDefinition) -> Any:
        path = self.files_dir / category.file
        if not path.exists():
            raise MissingInputError(category.key, path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedDocumentError(category.key, str(e)) from e
