"""
Version Resolver

Extracts the client version and release metadata from the raw dump text and
locates the predecessor among recorded versions.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date as date_cls
from typing import List, Optional
import re

from .errors import MissingVersionError
from .models import VersionRecord
from ..logger import get_logger

log = get_logger(__name__)

UNKNOWN_VERSION = "unknown"

_VERSION_RE = re.compile(r"ClientVersion=(\d+)")
_DATE_RE = re.compile(r"VersionDate=(.+)")
_TIME_RE = re.compile(r"VersionTime=(.+)")


@dataclass
class VersionInfo:
    """Version identifier and release metadata of a dump."""

    version_id: str
    date: str
    time: str = ""


def resolve_version(dump_text: str, today: Optional[date_cls] = None) -> VersionInfo:
    """
    Extract version info from dump text.

    Args:
        dump_text: Captured console output
        today: Date used when the dump has no VersionDate line

    Returns:
        Resolved version info

    Raises:
        MissingVersionError: No ClientVersion=<digits> line present
    """
    version_match = _VERSION_RE.search(dump_text)
    if not version_match:
        raise MissingVersionError()
    return VersionInfo(
        version_id=version_match.group(1),
        date=_release_date(dump_text, today),
        time=_release_time(dump_text),
    )


def resolve_version_or_unknown(
    dump_text: str, today: Optional[date_cls] = None
) -> VersionInfo:
    """Like resolve_version, but substitutes the 'unknown' sentinel id."""
    try:
        return resolve_version(dump_text, today)
    except MissingVersionError as e:
        log.warning(f"{e}; recording as '{UNKNOWN_VERSION}'")
        return VersionInfo(
            version_id=UNKNOWN_VERSION,
            date=_release_date(dump_text, today),
            time=_release_time(dump_text),
        )


def _release_date(dump_text: str, today: Optional[date_cls]) -> str:
    match = _DATE_RE.search(dump_text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return (today or date_cls.today()).isoformat()


def _release_time(dump_text: str) -> str:
    match = _TIME_RE.search(dump_text)
    return match.group(1).strip() if match else ""


def find_predecessor(versions: List[VersionRecord], version_id: str) -> Optional[str]:
    """
    Find the version the given one should be compared against.

    ``versions`` is ordered newest first. A numeric id is compared against
    the highest recorded numeric id below it, so the answer is the same
    whether or not the version is already recorded. A non-numeric id (the
    'unknown' sentinel) is compared against the first entry with a
    different id.

    Args:
        versions: Recorded versions, descending
        version_id: Version being processed

    Returns:
        Predecessor version id, or None
    """
    if version_id.isdigit():
        current = int(version_id)
        for record in versions:
            if 0 <= record.sort_key < current:
                return record.version_id
        return None

    for record in versions:
        if record.version_id != version_id:
            return record.version_id
    return None
