"""
Test item normalization for every document shape.
"""

import pytest

from api_changelog.core.changelog.categories import CategoryDefinition, DocumentShape
from api_changelog.core.changelog.errors import MalformedDocumentError
from api_changelog.core.changelog.models import ItemKind
from api_changelog.core.changelog.normalizer import format_signature, normalize_document


def _category(shape, item_kind=None, key="test"):
    return CategoryDefinition(key=key, file=f"{key}.json", name="Test", shape=shape, item_kind=item_kind)


API_DOC = [
    {
        "kind": "class",
        "name": "CBaseEntity",
        "members": [
            {"kind": "function", "name": "GetOrigin", "args": []},
            {"kind": "function", "name": "SetTeam", "args": [{"name": "team", "types": ["DotaTeam"]}]},
            {"kind": "field", "name": "m_iHealth"},
        ],
    },
    {"kind": "function", "name": "CreateUnitByName", "args": [{"name": "name"}, {"name": "location"}]},
    {"kind": "constant", "name": "DOTA_MAX_PLAYERS", "value": 64},
]


class TestRankedEntities:
    def test_class_methods_functions_constants(self):
        items = normalize_document(_category(DocumentShape.RANKED_ENTITIES), API_DOC)

        assert [i.key for i in items] == [
            "class:CBaseEntity",
            "method:CBaseEntity:GetOrigin",
            "method:CBaseEntity:SetTeam",
            "function:CreateUnitByName",
            "constant:DOTA_MAX_PLAYERS",
        ]

    def test_method_signature_and_parent(self):
        items = normalize_document(_category(DocumentShape.RANKED_ENTITIES), API_DOC)
        set_team = items[2]

        assert set_team.kind == ItemKind.METHOD
        assert set_team.parent == "CBaseEntity"
        assert set_team.signature == "SetTeam(team)"

    def test_constant_value_is_display_only(self):
        items = normalize_document(_category(DocumentShape.RANKED_ENTITIES), API_DOC)
        constant = items[-1]

        assert constant.value == 64
        assert constant.key == "constant:DOTA_MAX_PLAYERS"

    def test_unknown_kinds_are_skipped(self):
        doc = [{"kind": "namespace", "name": "GameRules"}, {"kind": "function", "name": "Msg"}]
        items = normalize_document(_category(DocumentShape.RANKED_ENTITIES), doc)
        assert [i.key for i in items] == ["function:Msg"]

    def test_method_and_function_with_same_name_coexist(self):
        doc = [
            {"kind": "class", "name": "Foo", "members": [{"kind": "function", "name": "Bar"}]},
            {"kind": "function", "name": "Bar"},
        ]
        items = normalize_document(_category(DocumentShape.RANKED_ENTITIES), doc)
        assert {i.key for i in items} == {"class:Foo", "method:Foo:Bar", "function:Bar"}


def test_format_signature():
    assert format_signature({"name": "Foo"}) == "Foo()"
    assert format_signature({"name": "Foo", "args": []}) == "Foo()"
    assert format_signature({"name": "Foo", "args": [{"name": "a"}, {"name": "b"}]}) == "Foo(a, b)"


def test_format_signature_rejects_non_list_args():
    with pytest.raises(MalformedDocumentError, match="args"):
        format_signature({"name": "Foo", "args": 3}, "api")


def test_enums_with_members():
    doc = [
        {"name": "DotaTeam", "members": [{"name": "GOODGUYS", "value": 2}, {"name": "BADGUYS", "value": 3}]},
        {"name": "DamageTypes", "members": []},
    ]
    items = normalize_document(_category(DocumentShape.ENUMS), doc)

    assert [i.key for i in items] == [
        "enum:DotaTeam",
        "enum_member:DotaTeam:GOODGUYS",
        "enum_member:DotaTeam:BADGUYS",
        "enum:DamageTypes",
    ]
    assert items[1].value == 2


def test_same_member_name_in_two_enums():
    doc = [
        {"name": "A", "members": [{"name": "NONE"}]},
        {"name": "B", "members": [{"name": "NONE"}]},
    ]
    items = normalize_document(_category(DocumentShape.ENUMS), doc)
    assert len({i.key for i in items}) == 4


def test_types_are_tagged_with_declared_kind():
    doc = [{"kind": "interface", "name": "Vector"}, {"kind": "nominal", "name": "EntityIndex"}]
    items = normalize_document(_category(DocumentShape.TYPES), doc)

    assert [i.key for i in items] == ["type:interface:Vector", "type:nominal:EntityIndex"]
    assert items[0].tag == "interface"


def test_bucketed_modifiers():
    doc = {
        "items": ["modifier_item_blink", "modifier_item_bfury"],
        "heroes": ["modifier_axe_berserkers_call"],
        "broken": "not-a-list",
    }
    items = normalize_document(_category(DocumentShape.BUCKETED), doc)

    assert [i.key for i in items] == [
        "modifier:items:modifier_item_blink",
        "modifier:items:modifier_item_bfury",
        "modifier:heroes:modifier_axe_berserkers_call",
    ]


def test_key_set_events_ignore_values():
    doc = {"dota_player_killed": {"PlayerID": "short"}, "dota_item_purchased": {}}
    items = normalize_document(_category(DocumentShape.KEY_SET, ItemKind.EVENT), doc)

    assert [i.key for i in items] == ["event:dota_player_killed", "event:dota_item_purchased"]


def test_key_set_convars():
    doc = {"sv_cheats": {"default": "0", "flags": ["notify"], "description": ""}}
    items = normalize_document(_category(DocumentShape.KEY_SET, ItemKind.CONVAR), doc)
    assert [i.key for i in items] == ["convar:sv_cheats"]


@pytest.mark.parametrize(
    "shape, document",
    [
        (DocumentShape.RANKED_ENTITIES, {"not": "a list"}),
        (DocumentShape.ENUMS, "text"),
        (DocumentShape.TYPES, None),
        (DocumentShape.BUCKETED, ["a", "b"]),
        (DocumentShape.RANKED_ENTITIES, [{"kind": "function"}]),
        (DocumentShape.ENUMS, [{"name": "E", "members": ["bare-string"]}]),
        (DocumentShape.RANKED_ENTITIES, [{"kind": "class", "name": "C", "members": 5}]),
        (DocumentShape.RANKED_ENTITIES, [{"kind": "function", "name": "F", "args": 3}]),
        (
            DocumentShape.RANKED_ENTITIES,
            [{"kind": "class", "name": "C", "members": [{"kind": "function", "name": "M", "args": "x"}]}],
        ),
        (DocumentShape.ENUMS, [{"name": "E", "members": True}]),
    ],
)
def test_malformed_documents_yield_no_items(shape, document):
    errors = []
    items = normalize_document(_category(shape), document, errors)

    assert items == []
    assert len(errors) == 1
    assert isinstance(errors[0], MalformedDocumentError)


def test_key_set_with_array_is_malformed():
    errors = []
    items = normalize_document(_category(DocumentShape.KEY_SET, ItemKind.EVENT), ["a"], errors)
    assert items == []
    assert errors


def test_duplicate_keys_keep_first_occurrence():
    doc = [
        {"kind": "function", "name": "Foo", "args": []},
        {"kind": "function", "name": "Foo", "args": [{"name": "x"}]},
    ]
    items = normalize_document(_category(DocumentShape.RANKED_ENTITIES), doc)

    assert len(items) == 1
    assert items[0].signature == "Foo()"


def test_keys_are_unique_per_category():
    items = normalize_document(_category(DocumentShape.RANKED_ENTITIES), API_DOC + API_DOC)
    keys = [i.key for i in items]
    assert len(keys) == len(set(keys))


def test_key_set_category_requires_item_kind():
    with pytest.raises(ValueError):
        CategoryDefinition(key="events", file="events.json", name="Events", shape=DocumentShape.KEY_SET)
