"""Admin overview schemas."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class AdminInventoryEntry(BaseModel):
    """One inventory in the system-wide listing."""
    id: int
    name: str
    description: str = ""
    is_public: bool
    user_id: str
    owner_email: Optional[str] = None
    item_count: int
    field_count: int
    created_at: datetime


class AdminInventoryList(BaseModel):
    inventories: List[AdminInventoryEntry]
    total: int


class AdminStats(BaseModel):
    """System-wide totals."""
    total_users: int
    total_admins: int
    blocked_users: int
    total_inventories: int
    public_inventories: int
    total_items: int
