"""
Item Normalizer

Converts one category's raw JSON document into an ordered list of flat,
comparable items. Each document shape has its own extraction strategy.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional

from .categories import CategoryDefinition, DocumentShape
from .errors import MalformedDocumentError
from .models import Item, ItemKind
from ..logger import get_logger

log = get_logger(__name__)


def format_signature(func: Dict[str, Any], category: str = "") -> str:
    """
    Render a function entry as 'Name(arg1, arg2)'.

    Args:
        func: Function entry with 'name' and optional 'args' list
        category: Category key reported when 'args' is not a list

    Returns:
        Display signature

    Raises:
        MalformedDocumentError: 'args' is present but not a list
    """
    args = _optional_list(category, func, "args")
    names = [a.get("name", "") if isinstance(a, dict) else str(a) for a in args]
    return f"{func['name']}({', '.join(names)})"


def _entry_name(category: str, entry: Any) -> str:
    if not isinstance(entry, dict):
        raise MalformedDocumentError(category, f"expected an object entry, got {type(entry).__name__}")
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise MalformedDocumentError(category, f"entry without a name: {entry!r:.80}")
    return name


def _optional_list(category: str, entry: Dict[str, Any], field: str) -> List[Any]:
    value = entry.get(field)
    if value is None:
        return []
    if not isinstance(value, list):
        name = entry.get("name")
        raise MalformedDocumentError(
            category, f"'{field}' of {name!r} is {type(value).__name__}, expected an array"
        )
    return value


def _require_list(category: str, document: Any) -> List[Any]:
    if not isinstance(document, list):
        raise MalformedDocumentError(category, f"expected an array, got {type(document).__name__}")
    return document


def _require_mapping(category: str, document: Any) -> Dict[str, Any]:
    if not isinstance(document, dict):
        raise MalformedDocumentError(category, f"expected an object, got {type(document).__name__}")
    return document


def extract_ranked_entities(category: CategoryDefinition, document: Any) -> List[Item]:
    """Classes with their methods, free functions and constants."""
    items: List[Item] = []
    for entry in _require_list(category.key, document):
        name = _entry_name(category.key, entry)
        kind = entry.get("kind")

        if kind == "class":
            items.append(Item(kind=ItemKind.CLASS, name=name))
            for member in _optional_list(category.key, entry, "members"):
                if not isinstance(member, dict) or member.get("kind") != "function":
                    continue
                member_name = _entry_name(category.key, member)
                items.append(
                    Item(
                        kind=ItemKind.METHOD,
                        name=member_name,
                        parent=name,
                        signature=format_signature(member, category.key),
                    )
                )
        elif kind == "function":
            items.append(
                Item(kind=ItemKind.FUNCTION, name=name, signature=format_signature(entry, category.key))
            )
        elif kind == "constant":
            items.append(Item(kind=ItemKind.CONSTANT, name=name, value=entry.get("value")))
        else:
            log.debug(f"  Skipping '{name}' in {category.key}: unknown kind {kind!r}")
    return items


def extract_enums(category: CategoryDefinition, document: Any) -> List[Item]:
    """Enums followed by their members."""
    items: List[Item] = []
    for entry in _require_list(category.key, document):
        name = _entry_name(category.key, entry)
        items.append(Item(kind=ItemKind.ENUM, name=name))
        for member in _optional_list(category.key, entry, "members"):
            items.append(
                Item(
                    kind=ItemKind.ENUM_MEMBER,
                    name=_entry_name(category.key, member),
                    parent=name,
                    value=member.get("value"),
                )
            )
    return items


def extract_types(category: CategoryDefinition, document: Any) -> List[Item]:
    """Declared types, tagged with their declared kind."""
    items: List[Item] = []
    for entry in _require_list(category.key, document):
        name = _entry_name(category.key, entry)
        declared = entry.get("kind")
        items.append(
            Item(kind=ItemKind.TYPE, name=name, tag=str(declared) if declared else None)
        )
    return items


def extract_bucketed(category: CategoryDefinition, document: Any) -> List[Item]:
    """Modifier names grouped by bucket."""
    items: List[Item] = []
    for bucket, names in _require_mapping(category.key, document).items():
        if not isinstance(names, list):
            continue
        for name in names:
            if isinstance(name, str):
                items.append(Item(kind=ItemKind.MODIFIER, name=name, parent=bucket))
    return items


def extract_key_set(category: CategoryDefinition, document: Any) -> List[Item]:
    """One item per top-level key; values are ignored."""
    kind = category.item_kind
    return [Item(kind=kind, name=key) for key in _require_mapping(category.key, document)]


_STRATEGIES: Dict[DocumentShape, Callable[[CategoryDefinition, Any], List[Item]]] = {
    DocumentShape.RANKED_ENTITIES: extract_ranked_entities,
    DocumentShape.ENUMS: extract_enums,
    DocumentShape.TYPES: extract_types,
    DocumentShape.BUCKETED: extract_bucketed,
    DocumentShape.KEY_SET: extract_key_set,
}


def _drop_duplicate_keys(category: str, items: List[Item]) -> List[Item]:
    seen = set()
    unique: List[Item] = []
    for item in items:
        key = item.key
        if key in seen:
            log.debug(f"  Duplicate item {key} in {category}, keeping first occurrence")
            continue
        seen.add(key)
        unique.append(item)
    return unique


def normalize_document(
    category: CategoryDefinition,
    document: Any,
    errors: Optional[List[MalformedDocumentError]] = None,
) -> List[Item]:
    """
    Normalize a category document into items in declaration order.

    Never raises for bad input: a malformed document yields an empty list,
    and the error is logged (and appended to ``errors`` when given).

    Args:
        category: Category definition selecting the extraction strategy
        document: Parsed JSON document
        errors: Optional list collecting malformed-document errors

    Returns:
        Items with unique identity keys
    """
    strategy = _STRATEGIES[category.shape]
    try:
        items = strategy(category, document)
    except MalformedDocumentError as e:
        log.warning(f"  {e}")
        if errors is not None:
            errors.append(e)
        return []
    return _drop_duplicate_keys(category.key, items)
