"""Async SQLAlchemy engine, session factory and declarative base."""

from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine for ``database_url``.

    Raises:
        ValueError: If a SQLite database file would live in a missing directory.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        # aiosqlite cannot create the directory; fail before its worker thread starts
        parent = Path(url.database).parent
        if not parent.is_dir():
            raise ValueError(f"Database directory does not exist: {parent}")
    return create_async_engine(database_url, echo=echo)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory bound to ``engine``."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables.

    Call at application start (in the lifespan) or from ``wit-seed``.
    """
    # Register the ORM models on Base.metadata
    from wit.models import inventory  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db(engine: AsyncEngine) -> None:
    """Dispose of pooled connections."""
    await engine.dispose()
