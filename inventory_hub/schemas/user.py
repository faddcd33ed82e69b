"""User schemas for request/response validation."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """Schema for user response."""
    uid: str
    email: Optional[str] = None
    is_admin: bool
    is_blocked: bool
    created_at: datetime

    class Config:
        from_attributes = True


class UserList(BaseModel):
    users: List[UserResponse]
    total: int


class UserAdminUpdate(BaseModel):
    """Admin changes to a user. Omitted flags stay unchanged."""
    is_admin: Optional[bool] = Field(None, alias="isAdmin")
    is_blocked: Optional[bool] = Field(None, alias="isBlocked")

    class Config:
        populate_by_name = True


class UserRecordResponse(BaseModel):
    """Result of registering the caller's user record."""
    success: bool = True
    is_admin: bool
    message: str


class SuccessResponse(BaseModel):
    success: bool = True
