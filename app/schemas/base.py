"""
Base Pydantic schemas with common fields.

These are templates that other schemas inherit from.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class RecordRead(BaseModel):
    """
    Base schema for reading a stored record.

    Includes the auto-generated id and creation timestamp.
    """

    id: int
    created_at: datetime

    # This tells Pydantic to work with SQLAlchemy models
    model_config = ConfigDict(from_attributes=True)


class TimestampedRead(RecordRead):
    """Base schema for records that also track updated_at."""

    updated_at: datetime


class CreatedResponse(BaseModel):
    """Response for create operations."""

    id: int


class SuccessResponse(BaseModel):
    """Response for update/delete operations."""

    success: bool = True
