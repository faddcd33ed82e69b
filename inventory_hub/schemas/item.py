"""Item schemas for request/response validation."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from inventory_hub.schemas.inventory import InventorySummary


class ItemCreate(BaseModel):
    """Schema for creating an item."""
    inventory_id: int = Field(..., alias="inventoryId")
    data: Dict[str, Any]
    custom_id: Optional[str] = Field(None, max_length=255, alias="customId")

    class Config:
        populate_by_name = True


class ItemUpdate(BaseModel):
    """Schema for updating an item.

    ``data`` and ``custom_id`` replace the stored values. ``inventory_id``,
    if given, must be the item's inventory.
    """
    data: Dict[str, Any]
    custom_id: Optional[str] = Field(None, max_length=255, alias="customId")
    inventory_id: Optional[int] = Field(None, alias="inventoryId")

    class Config:
        populate_by_name = True


class ItemResponse(BaseModel):
    """Schema for item response."""
    id: int
    inventory_id: int
    custom_id: Optional[str] = None
    data: Dict[str, Any]
    search_text: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ItemListResponse(BaseModel):
    """Items of one inventory together with its field schema."""
    items: List[ItemResponse]
    inventory: InventorySummary
