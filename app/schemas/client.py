"""
Client Pydantic schemas.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.base import TimestampedRead


class ClientCreate(BaseModel):
    """Schema for creating a new client."""

    company_name: str = Field(min_length=1, max_length=255)
    industry: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = None


class ClientUpdate(BaseModel):
    """Schema for updating a client. All fields optional."""

    company_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    industry: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = None

    @field_validator("company_name")
    @classmethod
    def company_name_not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("company_name cannot be null")
        return value


class ClientRead(TimestampedRead):
    """Schema for reading client data (API response)."""

    user_id: int
    company_name: str
    industry: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    notes: Optional[str] = None
