"""
User Pydantic schemas.
"""

from typing import Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserUpsert(BaseModel):
    """
    Identity hand-off used to sign a user in.

    Fields left out are not touched on an existing user.
    """

    open_id: str = Field(min_length=1, max_length=64)
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    login_method: Optional[str] = Field(default=None, max_length=64)
    role: Optional[str] = Field(default=None, pattern="^(user|admin)$")
    last_signed_in: Optional[datetime] = None


class UserRead(BaseModel):
    """Schema for reading user data (API response)."""

    id: int
    open_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    login_method: Optional[str] = None
    role: str
    created_at: datetime
    updated_at: datetime
    last_signed_in: datetime

    model_config = ConfigDict(from_attributes=True)

