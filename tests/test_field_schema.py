from types import SimpleNamespace

import pytest

from inventory_hub.services.field_schema import (
    SLOT_KEYS,
    apply_schema,
    columns_to_schema,
    schema_to_columns,
    slot_key,
)


def _row(fields):
    return SimpleNamespace(**schema_to_columns(fields))


def test_slot_keys_are_fixed_and_ordered():
    assert slot_key("boolean", 2) == "custom_boolean2"
    assert len(SLOT_KEYS) == 15
    assert SLOT_KEYS[:4] == ("custom_string1", "custom_string2", "custom_string3", "custom_text1")
    assert SLOT_KEYS[-1] == "custom_link3"


def test_empty_schema_resets_every_slot():
    columns = schema_to_columns([])
    assert len(columns) == 30
    assert all(columns[f"{key}_name"] is None for key in SLOT_KEYS)
    assert all(columns[f"{key}_state"] is False for key in SLOT_KEYS)


def test_fourth_field_of_a_type_is_dropped():
    fields = [{"type": "string", "label": f"S{n}"} for n in range(1, 5)]
    schema = columns_to_schema(_row(fields))

    assert [f["key"] for f in schema] == ["custom_string1", "custom_string2", "custom_string3"]
    assert [f["label"] for f in schema] == ["S1", "S2", "S3"]


def test_schema_is_emitted_in_type_then_slot_order():
    fields = [
        {"type": "link", "label": "Manual"},
        {"type": "number", "label": "Weight"},
        {"type": "string", "label": "Title"},
        {"type": "number", "label": "Price"},
    ]
    schema = columns_to_schema(_row(fields))

    assert schema == [
        {"key": "custom_string1", "label": "Title", "type": "string"},
        {"key": "custom_number1", "label": "Weight", "type": "number"},
        {"key": "custom_number2", "label": "Price", "type": "number"},
        {"key": "custom_link1", "label": "Manual", "type": "link"},
    ]


def test_round_trip_discards_client_keys():
    fields = [
        {"type": "boolean", "label": "In stock", "key": "boolean_x1", "id": 17},
        {"type": "text", "label": "Notes", "key": "text_zz"},
    ]
    schema = columns_to_schema(_row(fields))

    assert [f["key"] for f in schema] == ["custom_text1", "custom_boolean1"]
    assert all(set(f) == {"key", "label", "type"} for f in schema)


def test_apply_schema_replaces_previous_slots():
    row = _row([{"type": "string", "label": "A"}, {"type": "string", "label": "B"}])
    apply_schema(row, [{"type": "text", "label": "Only"}])

    assert row.custom_string1_state is False
    assert row.custom_string1_name is None
    assert columns_to_schema(row) == [{"key": "custom_text1", "label": "Only", "type": "text"}]


def test_entries_may_be_objects():
    fields = [SimpleNamespace(type="number", label="Qty")]
    assert schema_to_columns(fields)["custom_number1_name"] == "Qty"


def test_unknown_type_is_rejected():
    with pytest.raises(ValueError):
        schema_to_columns([{"type": "date", "label": "When"}])
