"""
Test changelog models.
"""

from api_changelog.core.changelog.models import (
    CategoryChanges,
    CategorySnapshot,
    HistoryStore,
    Item,
    ItemKind,
    VersionRecord,
)


def test_item_kind_enum():
    """Test ItemKind enum values."""
    assert ItemKind.METHOD == "method"
    assert ItemKind.ENUM_MEMBER == "enum_member"
    assert ItemKind.CONVAR == "convar"


def test_item_key_without_parent():
    item = Item(kind=ItemKind.FUNCTION, name="GetMapName", signature="GetMapName()")
    assert item.key == "function:GetMapName"


def test_item_key_with_parent():
    item = Item(kind=ItemKind.METHOD, name="SetTeam", parent="CBaseEntity")
    assert item.key == "method:CBaseEntity:SetTeam"


def test_item_key_with_tag():
    item = Item(kind=ItemKind.TYPE, name="Vector", tag="interface")
    assert item.key == "type:interface:Vector"


def test_same_name_different_kind_or_parent_are_distinct():
    """A method Foo.Bar and a function Bar must not collide."""
    method = Item(kind=ItemKind.METHOD, name="Bar", parent="Foo")
    function = Item(kind=ItemKind.FUNCTION, name="Bar")
    constant = Item(kind=ItemKind.CONSTANT, name="Bar")
    other_method = Item(kind=ItemKind.METHOD, name="Bar", parent="Baz")

    keys = {method.key, function.key, constant.key, other_method.key}
    assert len(keys) == 4


def test_signature_and_value_do_not_affect_key():
    a = Item(kind=ItemKind.FUNCTION, name="Foo", signature="Foo()")
    b = Item(kind=ItemKind.FUNCTION, name="Foo", signature="Foo(a, b)")
    c = Item(kind=ItemKind.CONSTANT, name="X", value=1)
    d = Item(kind=ItemKind.CONSTANT, name="X", value=2)
    assert a.key == b.key
    assert c.key == d.key


def test_colons_in_names_do_not_collide():
    a = Item(kind=ItemKind.METHOD, name="c", parent="a:b")
    b = Item(kind=ItemKind.METHOD, name="b:c", parent="a")
    assert a.key != b.key
    assert a.key == "method:a\\:b:c"
    assert b.key == "method:a:b\\:c"


def test_backslashes_in_names_are_escaped():
    a = Item(kind=ItemKind.MODIFIER, name="b", parent="a\\")
    b = Item(kind=ItemKind.MODIFIER, name="a:b")
    assert a.key == "modifier:a\\\\:b"
    assert b.key == "modifier:a\\:b"


def test_item_display_name():
    method = Item(kind=ItemKind.METHOD, name="SetTeam", parent="CBaseEntity", signature="SetTeam(team)")
    member = Item(kind=ItemKind.ENUM_MEMBER, name="GOODGUYS", parent="DotaTeam")
    modifier = Item(kind=ItemKind.MODIFIER, name="modifier_stunned", parent="generic")

    assert method.display_name == "CBaseEntity.SetTeam(team)"
    assert member.display_name == "DotaTeam.GOODGUYS"
    assert modifier.display_name == "modifier_stunned"


def test_category_changes_has_changes():
    assert not CategoryChanges(name="Lua API").has_changes
    changes = CategoryChanges(name="Lua API", added=[Item(kind=ItemKind.FUNCTION, name="Foo")])
    assert changes.has_changes


def test_version_record_sort_key():
    assert VersionRecord(version_id="6340").sort_key == 6340
    assert VersionRecord(version_id="unknown").sort_key == -1
    assert VersionRecord(version_id="100").sort_key > VersionRecord(version_id="99").sort_key


def test_version_record_serializes_camel_case():
    record = VersionRecord(version_id="100", date="Jan 01 2025", time="10:00:00")
    data = record.model_dump(mode="json", by_alias=True)

    assert data["versionId"] == "100"
    assert data["date"] == "Jan 01 2025"
    assert "capturedAt" in data
    assert data["addedCount"] == 0
    assert data["removedCount"] == 0


def test_history_store_round_trip_drops_none_fields():
    store = HistoryStore(
        versions=[VersionRecord(version_id="100")],
        snapshots={
            "100": {
                "api": CategorySnapshot(
                    name="Lua API",
                    items=[Item(kind=ItemKind.FUNCTION, name="Foo", signature="Foo()")],
                )
            }
        },
        changes={"100": {}},
    )
    data = store.to_json_dict()

    item = data["snapshots"]["100"]["api"]["items"][0]
    assert item == {"kind": "function", "name": "Foo", "signature": "Foo()"}
    assert "detail" not in data["snapshots"]["100"]["api"]
    assert data["schemaVersion"] == store.schema_version

    reloaded = HistoryStore.model_validate(data)
    assert reloaded.versions[0].version_id == "100"
    assert reloaded.snapshots["100"]["api"].items[0].key == "function:Foo"


def test_history_store_get_record():
    store = HistoryStore(versions=[VersionRecord(version_id="100"), VersionRecord(version_id="99")])
    assert store.get_record("99").version_id == "99"
    assert store.get_record("98") is None
