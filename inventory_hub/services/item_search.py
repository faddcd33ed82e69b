"""Search text maintenance and global item search."""
from typing import Any, List, Mapping

import structlog
from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session

from inventory_hub.models.inventory import Inventory
from inventory_hub.models.item import Item
from inventory_hub.models.user import User

logger = structlog.get_logger(__name__)

MIN_QUERY_LENGTH = 2
_LIKE_ESCAPE = "\\"


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_search_text(data: Mapping[str, Any]) -> str:
    """Join the non-null values of an item document into lowercase text."""
    return " ".join(
        _to_text(value) for value in data.values() if value is not None
    ).lower()


def _like_pattern(query: str) -> str:
    escaped = (
        query.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def search_items(db: Session, user: User, q: str, limit: int) -> List[dict]:
    """
    Substring search over the user's own items.

    Matches item search text, custom id, or inventory name, case-insensitive.
    Custom id matches rank first, then search text matches, then inventory
    name matches; newest first within each group.
    """
    query = (q or "").strip().lower()
    if len(query) < MIN_QUERY_LENGTH:
        return []

    pattern = _like_pattern(query)
    custom_id_match = func.lower(Item.custom_id).like(pattern, escape=_LIKE_ESCAPE)
    text_match = func.lower(Item.search_text).like(pattern, escape=_LIKE_ESCAPE)
    name_match = func.lower(Inventory.name).like(pattern, escape=_LIKE_ESCAPE)
    rank = case((custom_id_match, 1), (text_match, 2), else_=3)

    rows = (
        db.query(Item, Inventory.name)
        .join(Inventory, Item.inventory_id == Inventory.id)
        .filter(Inventory.user_id == user.uid)
        .filter(or_(text_match, custom_id_match, name_match))
        .order_by(rank, Item.created_at.desc(), Item.id.desc())
        .limit(limit)
        .all()
    )

    results = [
        {
            "id": item.id,
            "custom_id": item.custom_id,
            "search_text": item.search_text,
            "inventory_id": item.inventory_id,
            "inventory_name": inventory_name,
            "created_at": item.created_at,
        }
        for item, inventory_name in rows
    ]
    logger.info("search_completed", query=query, result_count=len(results))
    return results
