"""
Database configuration and async session management
"""
import asyncio
import logging
from typing import Any, AsyncGenerator, Awaitable, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import AsyncAdaptedQueuePool

from movie_booking.core.config import settings
from movie_booking.core.exceptions import StoreError

logger = logging.getLogger(__name__)

# Create async engine
# asyncpg in production, aiosqlite in tests
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,  # Log SQL queries in debug mode
    poolclass=AsyncAdaptedQueuePool,
    pool_pre_ping=True,  # Verify connections before using
    pool_size=settings.POOL_SIZE,
    max_overflow=settings.MAX_OVERFLOW,
    pool_timeout=settings.POOL_TIMEOUT,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Don't expire objects after commit
    autoflush=False,
)

# Create declarative base for models
Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for FastAPI to provide database sessions.

    The session (and its pooled connection) is released when the request
    finishes, whether the handler returned or raised.

    Usage:
        @router.get("/movies")
        async def list_movies(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def bounded(awaitable: Awaitable[Any], timeout: Optional[float] = None) -> Any:
    """
    Await a database operation with the per-query time bound.

    Integrity violations are re-raised untouched so callers can map them to
    domain errors; every other driver failure becomes StoreError.
    """
    timeout = settings.QUERY_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.error(f"⏱️ Query exceeded {timeout}s bound")
        raise StoreError("Database query timed out") from e
    except IntegrityError:
        raise
    except SQLAlchemyError as e:
        logger.error(f"❌ Database error: {e.__class__.__name__}")
        raise StoreError("Database operation failed") from e


async def execute(db: AsyncSession, statement, params: Optional[dict] = None):
    """Execute a statement on the session within the query time bound"""
    return await bounded(db.execute(statement, params))


async def flush(db: AsyncSession) -> None:
    """Flush pending ORM changes within the query time bound"""
    await bounded(db.flush())


async def server_version(db: AsyncSession) -> str:
    """Return the database server version string"""
    if engine.dialect.name == "sqlite":
        query = text("SELECT sqlite_version()")
    else:
        query = text("SELECT version()")
    result = await execute(db, query)
    return result.scalar_one()


async def check_database_health() -> bool:
    """Check database connection"""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


async def init_db():
    """
    Initialize database tables.
    Only for development and tests - production schemas are provisioned separately.
    """
    async with engine.begin() as conn:
        # Import all models to register them with Base
        from movie_booking.models import (  # noqa: F401
            User, Movie, Timeslot, Seat, Booking
        )

        await conn.run_sync(Base.metadata.create_all)


async def drop_db():
    """
    Drop all database tables.
    WARNING: Use only in development/testing!
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
