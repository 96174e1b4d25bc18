"""
INSERT ... ON CONFLICT constructs for the session's database.

PostgreSQL in production, SQLite in the test suite. Both dialects accept
on_conflict_do_update(index_elements=..., set_=...) and .excluded.
"""

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


def dialect_insert(db: AsyncSession, model):
    """Return an INSERT for model that supports ON CONFLICT on db's dialect."""
    if db.get_bind().dialect.name == "sqlite":
        return sqlite.insert(model)
    return postgresql.insert(model)
