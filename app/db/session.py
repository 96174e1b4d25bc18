"""
Database session and engine configuration.

This file sets up the async database connection using SQLAlchemy + asyncpg.
The engine is created once per process and disposed on application shutdown.
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from typing import AsyncGenerator

from app.core.config import settings


# Create the async database engine
# One shared engine (and its connection pool) per process
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,  # When DEBUG=True, prints SQL queries to console
    future=True,
)

# Create a session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Keeps data accessible after commit
)

# Alias for dependencies
AsyncSessionLocal = async_session_maker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session.

    This is used by FastAPI to provide a database connection to API endpoints.
    Whatever is still pending when the request finishes is committed; on error
    the session is rolled back. Writes that were already committed inside the
    request (see AssessmentService.complete_assessment) are not undone.

    Usage in a FastAPI endpoint:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine() -> None:
    """Release pooled connections. Called from the app lifespan on shutdown."""
    await engine.dispose()
