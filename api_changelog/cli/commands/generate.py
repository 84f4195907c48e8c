"""
Generate Command

CLI command for recording the current dump's version snapshot and changelog.
"""

from __future__ import annotations
from pathlib import Path
from argparse import Namespace

from ...core.config import load_config
from ...core.changelog.errors import ChangelogError
from ...core.changelog.exporter import ChangelogExporter
from ...core.changelog.history_store import load_store
from ...core.changelog.writer import ChangelogWriter
from ...core.logger import get_logger


log = get_logger(__name__)


def run(args: Namespace) -> int:
    """
    Run changelog generation.

    Args:
        args: Parsed command-line arguments

    Returns:
        Process exit status
    """
    try:
        config = load_config(Path(args.config) if args.config else None)
    except ChangelogError as e:
        log.error(str(e))
        return 1

    # Command-line flags override the config file
    if args.dump:
        config.dump_path = Path(args.dump)
    if args.files:
        config.files_dir = Path(args.files)
    if args.store:
        config.store_path = Path(args.store)
    if args.max_versions is not None:
        if args.max_versions < 1:
            log.error("--max-versions must be at least 1")
            return 1
        config.max_versions = args.max_versions

    if not config.files_dir.exists():
        log.warning(f"Files directory does not exist: {config.files_dir}")

    try:
        ChangelogWriter(config).run()
    except ChangelogError as e:
        log.error(f"Failed to generate changelog: {e}")
        return 1

    export_dir = getattr(args, "export", None)
    if export_dir:
        store = load_store(config.store_path)
        ChangelogExporter(Path(export_dir), pretty=getattr(args, "pretty", False)).export(store)

    return 0
