"""
Export Command

CLI command for exporting recorded changelogs as an index plus per-version files.
"""

from __future__ import annotations
from pathlib import Path
from argparse import Namespace

from ...core.changelog.errors import StoreCorruptError
from ...core.changelog.exporter import ChangelogExporter
from ...core.changelog.history_store import load_store
from ...core.logger import get_logger


log = get_logger(__name__)


def run(args: Namespace) -> int:
    store_path = Path(args.store)
    if not store_path.exists():
        log.error(f"History store does not exist: {store_path}")
        return 1

    try:
        store = load_store(store_path)
    except StoreCorruptError as e:
        log.error(str(e))
        return 1

    ChangelogExporter(Path(args.out), pretty=getattr(args, "pretty", False)).export(store)
    log.info(f"✅ Changelogs exported: {args.out}")
    return 0
