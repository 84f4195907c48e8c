"""
Core data models for the API changelog history.

These Pydantic models define normalized API items, per-version snapshots,
change sets and the persisted history store document.
"""

from __future__ import annotations
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

STORE_SCHEMA_VERSION = "1.0.0"


class ItemKind(str, Enum):
    """Kind of a normalized API item."""

    CLASS = "class"
    METHOD = "method"
    FUNCTION = "function"
    CONSTANT = "constant"
    ENUM = "enum"
    ENUM_MEMBER = "enum_member"
    MODIFIER = "modifier"
    EVENT = "event"
    CONVAR = "convar"
    TYPE = "type"


def _escape_key_part(part: str) -> str:
    return part.replace("\\", "\\\\").replace(":", "\\:")


class Item(BaseModel):
    """A single diffable API item."""

    kind: ItemKind
    name: str
    parent: Optional[str] = Field(
        None, description="Owning class, owning enum or modifier bucket"
    )
    tag: Optional[str] = Field(
        None, description="Declared kind of a type entry: 'interface', 'object', ..."
    )
    signature: Optional[str] = Field(
        None, description="Display only: 'SetTeam(team)'"
    )
    value: Optional[Any] = Field(None, description="Display only: constant or member value")

    @property
    def key(self) -> str:
        """
        Identity key: kind, qualifiers and name joined by colons.

        Backslashes and colons inside a part are escaped, so parent 'a:b'
        with name 'c' and parent 'a' with name 'b:c' get different keys.
        """
        parts = [self.kind.value]
        parts.extend(q for q in (self.parent, self.tag) if q)
        parts.append(self.name)
        return ":".join(_escape_key_part(p) for p in parts)

    @property
    def display_name(self) -> str:
        label = self.signature or self.name
        if self.parent and self.kind in (ItemKind.METHOD, ItemKind.ENUM_MEMBER):
            return f"{self.parent}.{label}"
        return label


class CategorySnapshot(BaseModel):
    """Normalized state of one category for one version."""

    name: str = Field(..., description="Display name: 'Lua API'")
    items: List[Item] = Field(default_factory=list)
    detail: Optional[Any] = Field(
        None, description="Raw sub-detail blob for categories that keep it"
    )


Snapshot = Dict[str, CategorySnapshot]


class CategoryChanges(BaseModel):
    """Added and removed items of one category between two versions."""

    name: str
    added: List[Item] = Field(default_factory=list)
    removed: List[Item] = Field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed)


ChangeSet = Dict[str, CategoryChanges]


class VersionRecord(BaseModel):
    """Metadata about one recorded client version."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    version_id: str = Field(..., description="Numeric client version: '6340'")
    date: str = Field("", description="Release date from the dump")
    time: str = Field("", description="Release time from the dump")
    captured_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    added_count: int = 0
    removed_count: int = 0

    @property
    def sort_key(self) -> int:
        """Numeric ordering key; non-numeric ids sort below every real version."""
        return int(self.version_id) if self.version_id.isdigit() else -1


class HistoryStore(BaseModel):
    """Persisted history: version records, snapshots and change sets."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    schema_version: str = STORE_SCHEMA_VERSION
    versions: List[VersionRecord] = Field(
        default_factory=list, description="Newest (highest version id) first"
    )
    snapshots: Dict[str, Snapshot] = Field(default_factory=dict)
    changes: Dict[str, ChangeSet] = Field(default_factory=dict)

    def get_record(self, version_id: str) -> Optional[VersionRecord]:
        for record in self.versions:
            if record.version_id == version_id:
                return record
        return None

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
