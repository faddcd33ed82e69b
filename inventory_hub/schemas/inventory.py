"""Inventory schemas for request/response validation."""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

FieldType = Literal["string", "text", "number", "boolean", "link"]


class FieldSpec(BaseModel):
    """A custom field as submitted by the client.

    Client-side ids or keys are accepted and ignored; slots are assigned
    on save.
    """
    type: FieldType
    label: Optional[str] = Field(None, max_length=255)


class FieldDefinition(BaseModel):
    """A custom field as stored: bound to a slot key."""
    key: str
    label: Optional[str] = None
    type: FieldType


class InventoryCreate(BaseModel):
    """Schema for creating an inventory."""
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    is_public: bool = Field(False, alias="isPublic")
    fields_schema: List[FieldSpec] = Field(default_factory=list, alias="fieldsSchema")

    class Config:
        populate_by_name = True


class InventoryUpdate(BaseModel):
    """Schema for updating an inventory. Only provided fields change."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_public: Optional[bool] = Field(None, alias="isPublic")
    fields_schema: Optional[List[FieldSpec]] = Field(None, alias="fieldsSchema")

    class Config:
        populate_by_name = True


class InventorySummary(BaseModel):
    """Inventory header embedded in item listings."""
    id: int
    name: str
    description: str = ""
    is_public: bool = False
    fields_schema: List[FieldDefinition] = []

    class Config:
        from_attributes = True


class InventoryResponse(InventorySummary):
    """Schema for inventory response."""
    user_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None
