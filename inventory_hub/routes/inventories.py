"""Inventory routes."""
from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from inventory_hub.auth import get_current_user
from inventory_hub.database import get_db
from inventory_hub.models.inventory import Inventory
from inventory_hub.models.user import User
from inventory_hub.schemas.inventory import InventoryCreate, InventoryResponse, InventoryUpdate
from inventory_hub.services.field_schema import apply_schema
from inventory_hub.services.inventory_access import get_owned_inventory, get_readable_inventory

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/inventories", tags=["Inventories"])


@router.get("", response_model=List[InventoryResponse])
@router.get("/", response_model=List[InventoryResponse], include_in_schema=False)
async def list_inventories(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List the caller's own inventories, newest first."""
    return (
        db.query(Inventory)
        .filter(Inventory.user_id == current_user.uid)
        .order_by(Inventory.created_at.desc(), Inventory.id.desc())
        .all()
    )


@router.get("/public", response_model=List[InventoryResponse])
async def list_public_inventories(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List inventories that their owners made public."""
    return (
        db.query(Inventory)
        .filter(Inventory.is_public == True)  # noqa: E712
        .order_by(Inventory.created_at.desc(), Inventory.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


@router.post("", response_model=InventoryResponse, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=InventoryResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_inventory(
    inventory_data: InventoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create an inventory owned by the caller."""
    inventory = Inventory(
        user_id=current_user.uid,
        name=inventory_data.name,
        description=inventory_data.description,
        is_public=inventory_data.is_public,
    )
    apply_schema(inventory, inventory_data.fields_schema)
    db.add(inventory)
    db.commit()
    db.refresh(inventory)
    logger.info("inventory_created", inventory_id=inventory.id, uid=current_user.uid)
    return inventory


@router.get("/{inventory_id}", response_model=InventoryResponse)
async def get_inventory(
    inventory_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get an inventory (owner, admin, or anyone if public)."""
    return get_readable_inventory(db, inventory_id, current_user)


@router.put("/{inventory_id}", response_model=InventoryResponse)
async def update_inventory(
    inventory_id: int,
    inventory_update: InventoryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update an inventory (owner only).

    A submitted field schema replaces the stored one entirely.
    """
    # Explicit nulls count as absent
    update_data = inventory_update.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update"
        )

    inventory = get_owned_inventory(db, inventory_id, current_user)

    fields_schema = update_data.pop("fields_schema", None)
    for field, value in update_data.items():
        setattr(inventory, field, value)
    if fields_schema is not None:
        apply_schema(inventory, fields_schema)

    db.commit()
    db.refresh(inventory)
    logger.info("inventory_updated", inventory_id=inventory.id, uid=current_user.uid)
    return inventory


@router.delete("/{inventory_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_inventory(
    inventory_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete an inventory and all of its items (owner only)."""
    inventory = get_owned_inventory(db, inventory_id, current_user)
    db.delete(inventory)
    db.commit()
    logger.info("inventory_deleted", inventory_id=inventory_id, uid=current_user.uid)
    return None
