"""
History Command

CLI command for listing recorded versions or viewing one version's changes.
"""

from __future__ import annotations
from pathlib import Path
from argparse import Namespace

from ...core.changelog.errors import StoreCorruptError
from ...core.changelog.history_store import load_store
from ...core.logger import get_logger


log = get_logger(__name__)


def run(args: Namespace) -> int:
    """
    Run history command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Process exit status
    """
    store_path = Path(args.store)
    if not store_path.exists():
        log.error(f"History store does not exist: {store_path}")
        return 1

    try:
        store = load_store(store_path)
    except StoreCorruptError as e:
        log.error(str(e))
        return 1

    # No version given: list everything recorded
    if args.version is None:
        if not store.versions:
            log.info("No versions recorded")
            return 0
        log.info(f"{len(store.versions)} versions recorded:")
        for record in store.versions:
            when = f"{record.date} {record.time}".strip()
            log.info(
                f"  {record.version_id}  {when}  "
                f"+{record.added_count} -{record.removed_count}"
            )
        return 0

    record = store.get_record(args.version)
    if record is None:
        log.error(f"Version {args.version} is not recorded")
        return 1

    changes = store.changes.get(record.version_id, {})
    when = f"{record.date} {record.time}".strip()
    log.info(f"Version {record.version_id} ({when})")
    if not changes:
        log.info("  No changes")
        return 0

    for category in changes.values():
        log.info(f"  {category.name}: +{len(category.added)} -{len(category.removed)}")
        for item in category.added:
            log.info(f"    + {item.display_name}")
        for item in category.removed:
            log.info(f"    - {item.display_name}")
    return 0
