"""Item routes."""
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inventory_hub.auth import get_current_user
from inventory_hub.config import settings
from inventory_hub.database import get_db
from inventory_hub.models.item import Item
from inventory_hub.models.user import User
from inventory_hub.schemas.item import ItemCreate, ItemListResponse, ItemResponse, ItemUpdate
from inventory_hub.services.inventory_access import get_owned_inventory, get_readable_inventory
from inventory_hub.services.item_search import build_search_text

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/items", tags=["Items"])


def _commit_item(db: Session, item: Item) -> Item:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Custom ID already exists"
        )
    db.refresh(item)
    return item


def _get_item(db: Session, item_id: int) -> Item:
    item = db.query(Item).filter(Item.id == item_id).first()
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found"
        )
    return item


@router.get("", response_model=ItemListResponse)
@router.get("/", response_model=ItemListResponse, include_in_schema=False)
async def list_items(
    inventory_id: int = Query(..., description="Inventory to list"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List items of an inventory, newest first, with its field schema."""
    inventory = get_readable_inventory(db, inventory_id, current_user)

    items = (
        db.query(Item)
        .filter(Item.inventory_id == inventory.id)
        .order_by(Item.created_at.desc(), Item.id.desc())
        .limit(limit or settings.ITEMS_DEFAULT_LIMIT)
        .all()
    )
    return {"items": items, "inventory": inventory}


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=ItemResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_item(
    item_data: ItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create an item in one of the caller's inventories."""
    inventory = get_owned_inventory(db, item_data.inventory_id, current_user)

    item = Item(
        inventory_id=inventory.id,
        custom_id=item_data.custom_id or None,
        data=item_data.data,
        search_text=build_search_text(item_data.data),
    )
    db.add(item)
    _commit_item(db, item)
    logger.info("item_created", item_id=item.id, inventory_id=inventory.id)
    return item


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get a specific item."""
    item = _get_item(db, item_id)
    get_readable_inventory(db, item.inventory_id, current_user)
    return item


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: int,
    item_update: ItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Replace an item's data and custom id (inventory owner only)."""
    item = _get_item(db, item_id)
    if item_update.inventory_id is not None and item_update.inventory_id != item.inventory_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found"
        )
    get_owned_inventory(db, item.inventory_id, current_user)

    item.data = item_update.data
    item.custom_id = item_update.custom_id or None
    item.search_text = build_search_text(item_update.data)
    _commit_item(db, item)
    logger.info("item_updated", item_id=item.id, inventory_id=item.inventory_id)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete an item (inventory owner only)."""
    item = _get_item(db, item_id)
    get_owned_inventory(db, item.inventory_id, current_user)

    db.delete(item)
    db.commit()
    logger.info("item_deleted", item_id=item_id)
    return None
