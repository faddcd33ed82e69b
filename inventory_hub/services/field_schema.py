"""Custom field schema <-> fixed slot column mapping.

An inventory stores its custom field definitions in fifteen fixed slots:
three per field type. Each slot is a pair of columns, a nullable label
(``custom_<type><n>_name``) and an enabled flag (``custom_<type><n>_state``).

The externally visible schema is the list of enabled slots, always emitted
in type-then-index order. The slot key (e.g. ``custom_string2``) is the
durable key under which item values are stored. Writing a schema assigns
slots in input order, so the caller's ordering and keys are not preserved
on the way back out.
"""
from typing import Any, Dict, Iterable, List, Mapping

FIELD_TYPES = ("string", "text", "number", "boolean", "link")
SLOTS_PER_TYPE = 3


def slot_key(field_type: str, index: int) -> str:
    """Return the durable key of a slot, e.g. ``custom_number2``."""
    return f"custom_{field_type}{index}"


def name_column(key: str) -> str:
    return f"{key}_name"


def state_column(key: str) -> str:
    return f"{key}_state"


def iter_slot_keys():
    """Yield ``(field_type, slot_key)`` for all slots in fixed order."""
    for field_type in FIELD_TYPES:
        for index in range(1, SLOTS_PER_TYPE + 1):
            yield field_type, slot_key(field_type, index)


SLOT_KEYS = tuple(key for _, key in iter_slot_keys())


def _entry_value(entry: Any, name: str):
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def schema_to_columns(fields: Iterable[Any]) -> Dict[str, Any]:
    """
    Map an ordered list of ``{type, label}`` entries onto slot columns.

    Every slot is first reset to ``(None, False)``. The first three entries
    of each type, in input order, then take slots 1..3 of that type. Further
    entries of a full type are dropped.

    Raises:
        ValueError: if an entry has an unknown field type.
    """
    columns: Dict[str, Any] = {}
    for _, key in iter_slot_keys():
        columns[name_column(key)] = None
        columns[state_column(key)] = False

    used = {field_type: 0 for field_type in FIELD_TYPES}
    for entry in fields:
        field_type = _entry_value(entry, "type")
        if field_type not in used:
            raise ValueError(f"Unknown field type: {field_type!r}")
        if used[field_type] >= SLOTS_PER_TYPE:
            continue
        used[field_type] += 1
        key = slot_key(field_type, used[field_type])
        columns[name_column(key)] = _entry_value(entry, "label")
        columns[state_column(key)] = True

    return columns


def columns_to_schema(row: Any) -> List[Dict[str, Any]]:
    """Rebuild the field schema from a row's slot columns."""
    schema = []
    for field_type, key in iter_slot_keys():
        if getattr(row, state_column(key), False):
            schema.append({
                "key": key,
                "label": getattr(row, name_column(key), None),
                "type": field_type,
            })
    return schema


def apply_schema(inventory: Any, fields: Iterable[Any]) -> None:
    """Overwrite all slot columns of ``inventory`` from ``fields``."""
    for column, value in schema_to_columns(fields).items():
        setattr(inventory, column, value)
