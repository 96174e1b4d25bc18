"""
SQLAlchemy declarative base.

This is the foundation for all database models.
All models inherit from this Base class.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All database tables/models inherit from this class so SQLAlchemy
    can track their metadata together (used by Alembic and the test suite).
    """
    pass
