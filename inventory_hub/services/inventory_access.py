"""Per-request inventory ownership and visibility checks."""
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from inventory_hub.models.inventory import Inventory
from inventory_hub.models.user import User


def _load_inventory(db: Session, inventory_id: int) -> Inventory:
    inventory = db.query(Inventory).filter(Inventory.id == inventory_id).first()
    if not inventory:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Inventory not found"
        )
    return inventory


def get_owned_inventory(db: Session, inventory_id: int, user: User) -> Inventory:
    """
    Fetch an inventory the user is allowed to modify.

    Only the owner may modify an inventory or its items; admins get no
    write bypass. Runs before every write and is not cached.
    """
    inventory = _load_inventory(db, inventory_id)
    if inventory.user_id != user.uid:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden"
        )
    return inventory


def get_readable_inventory(db: Session, inventory_id: int, user: User) -> Inventory:
    """Fetch an inventory the user may read: own, public, or any for admins."""
    inventory = _load_inventory(db, inventory_id)
    if inventory.user_id != user.uid and not inventory.is_public and not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden"
        )
    return inventory
