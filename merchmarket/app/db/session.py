"""
Database session configuration.

This module handles database engine creation and session management
using SQLAlchemy with async support for PostgreSQL.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from merchmarket.app.core.config import settings
from merchmarket.app.core.exceptions import InternalError

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.db_echo,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    future=True,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Create declarative base for models
Base = declarative_base()


async def get_db():
    """
    FastAPI dependency for database sessions.

    Yields an async database session and ensures it's properly closed.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def atomic(db: AsyncSession, error_message: str = "Ошибка при сохранении данных") -> AsyncIterator[AsyncSession]:
    """
    Atomic unit of work over a session.

    Commits when the block exits cleanly. Any exception rolls back every
    change made in the block before it propagates; storage errors are
    re-raised as InternalError carrying error_message.

    Args:
        db: Database session
        error_message: Message reported when the storage layer fails
    """
    try:
        yield db
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        raise InternalError(error_message) from exc
    except BaseException:
        await db.rollback()
        raise
