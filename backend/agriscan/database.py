"""
AgriScan Backend - SQL Engine & Session Management
===================================================

What:  Async SQLAlchemy engine construction, declarative Base, and a
       transactional session scope for the SQL document store.
How:   build_engine() turns settings into an AsyncEngine; session_scope()
       commits on success and rolls back on error.
Who:   SqlDocumentStore, Alembic (Base.metadata) and the test suite.
When:  Only when DOCUMENT_STORE=sql. The Firestore and in-memory backends
       never create an engine.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


def build_engine(
    database_url: str,
    pool_pre_ping: bool = True,
    echo: bool = False,
) -> AsyncEngine:
    """
    Create the async engine for `database_url`.

    Pool sizing is left to the dialect: SQLite (aiosqlite) and PostgreSQL
    (asyncpg) pick different pool classes and not all accept size options.
    """
    return create_async_engine(
        database_url,
        pool_pre_ping=pool_pre_ping,
        echo=echo,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    # expire_on_commit=False: rows stay readable after the commit
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide one session per unit of work.

        1. Create a session from the factory
        2. Yield it to the caller
        3. On success: commit
        4. On error: roll back and re-raise
        5. Always: close
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
