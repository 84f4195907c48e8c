"""
Tracked Categories

Registry of the API facets recorded per version and the document shape each
one is normalized from.
"""

from __future__ import annotations
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from .models import ItemKind


class DocumentShape(str, Enum):
    """Shape of a category's raw JSON document."""

    RANKED_ENTITIES = "ranked_entities"  # [{kind: class|function|constant, ...}]
    ENUMS = "enums"  # [{name, members: [{name, value}]}]
    TYPES = "types"  # [{kind, name}]
    BUCKETED = "bucketed"  # {bucket: [name, ...]}
    KEY_SET = "key_set"  # {name: <ignored>}


class CategoryDefinition(BaseModel):
    """One tracked category."""

    key: str = Field(..., description="Stable category key: 'api'")
    file: str = Field(..., description="Source path relative to the files dir")
    name: str = Field(..., description="Display name: 'Lua API'")
    shape: DocumentShape
    item_kind: Optional[ItemKind] = Field(
        None, description="Item kind produced by KEY_SET documents (event or convar)"
    )
    include_detail: bool = Field(
        False, description="Keep the raw document as the snapshot's sub-detail"
    )

    @model_validator(mode="after")
    def _check_item_kind(self) -> "CategoryDefinition":
        if self.shape == DocumentShape.KEY_SET and self.item_kind is None:
            raise ValueError(f"Category '{self.key}' needs an item_kind for key_set documents")
        return self


DEFAULT_CATEGORIES: List[CategoryDefinition] = [
    CategoryDefinition(
        key="api", file="vscripts/api.json", name="Lua API",
        shape=DocumentShape.RANKED_ENTITIES,
    ),
    CategoryDefinition(
        key="types", file="vscripts/api-types.json", name="Lua Types",
        shape=DocumentShape.TYPES,
    ),
    CategoryDefinition(
        key="enums", file="vscripts/enums.json", name="Lua Enums",
        shape=DocumentShape.ENUMS,
    ),
    CategoryDefinition(
        key="modifiers", file="vscripts/modifier_list.json", name="Modifiers",
        shape=DocumentShape.BUCKETED,
    ),
    CategoryDefinition(
        key="events", file="events.json", name="Game Events",
        shape=DocumentShape.KEY_SET, item_kind=ItemKind.EVENT,
    ),
    CategoryDefinition(
        key="panorama_api", file="panorama/api.json", name="Panorama API",
        shape=DocumentShape.RANKED_ENTITIES,
    ),
    CategoryDefinition(
        key="panorama_events", file="panorama/events.json", name="Panorama Events",
        shape=DocumentShape.KEY_SET, item_kind=ItemKind.EVENT,
    ),
    CategoryDefinition(
        key="panorama_enums", file="panorama/enums.json", name="Panorama Enums",
        shape=DocumentShape.ENUMS,
    ),
    CategoryDefinition(
        key="convars", file="convars.json", name="Console Variables",
        shape=DocumentShape.KEY_SET, item_kind=ItemKind.CONVAR,
    ),
    CategoryDefinition(
        key="engine_enums", file="engine-enums.json", name="Engine Enums",
        shape=DocumentShape.ENUMS,
    ),
]


def default_categories() -> List[CategoryDefinition]:
    return [c.model_copy() for c in DEFAULT_CATEGORIES]
