"""Admin routes - user management and system-wide inventory overview."""
import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from inventory_hub.auth import require_admin
from inventory_hub.database import get_db
from inventory_hub.models.inventory import Inventory
from inventory_hub.models.item import Item
from inventory_hub.models.user import User
from inventory_hub.schemas.admin import AdminInventoryList, AdminStats
from inventory_hub.schemas.user import SuccessResponse, UserAdminUpdate, UserList

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


def _get_user(db: Session, uid: str) -> User:
    user = db.query(User).filter(User.uid == uid).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user


@router.get("/users", response_model=UserList)
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """List all users, newest first (admin only)."""
    users = (
        db.query(User)
        .order_by(User.created_at.desc(), User.uid)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return {"users": users, "total": db.query(User).count()}


@router.put("/users/{uid}", response_model=SuccessResponse)
async def update_user(
    uid: str,
    user_update: UserAdminUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Grant/revoke admin rights or block/unblock a user (admin only)."""
    user = _get_user(db, uid)

    update_data = user_update.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(user, field, value)

    if update_data:
        db.commit()
        logger.info("user_updated", uid=uid, changes=update_data, admin_uid=current_user.uid)
    return SuccessResponse()


@router.delete("/users/{uid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    uid: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Delete a user with all their inventories and items (admin only)."""
    user = _get_user(db, uid)
    db.delete(user)
    db.commit()
    logger.info("user_deleted", uid=uid, admin_uid=current_user.uid)
    return None


@router.get("/inventories", response_model=AdminInventoryList)
async def list_all_inventories(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """List every inventory with owner and item count (admin only)."""
    item_counts = (
        db.query(Item.inventory_id, func.count(Item.id).label("item_count"))
        .group_by(Item.inventory_id)
        .subquery()
    )
    rows = (
        db.query(Inventory, User.email, func.coalesce(item_counts.c.item_count, 0))
        .join(User, Inventory.user_id == User.uid)
        .outerjoin(item_counts, item_counts.c.inventory_id == Inventory.id)
        .order_by(Inventory.created_at.desc(), Inventory.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    inventories = [
        {
            "id": inventory.id,
            "name": inventory.name,
            "description": inventory.description,
            "is_public": inventory.is_public,
            "user_id": inventory.user_id,
            "owner_email": owner_email,
            "item_count": item_count,
            "field_count": len(inventory.fields_schema),
            "created_at": inventory.created_at,
        }
        for inventory, owner_email, item_count in rows
    ]
    return {"inventories": inventories, "total": db.query(Inventory).count()}


@router.get("/stats", response_model=AdminStats)
async def get_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """System-wide totals (admin only)."""
    return AdminStats(
        total_users=db.query(User).count(),
        total_admins=db.query(User).filter(User.is_admin == True).count(),  # noqa: E712
        blocked_users=db.query(User).filter(User.is_blocked == True).count(),  # noqa: E712
        total_inventories=db.query(Inventory).count(),
        public_inventories=db.query(Inventory).filter(Inventory.is_public == True).count(),  # noqa: E712
        total_items=db.query(Item).count(),
    )
