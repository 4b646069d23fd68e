"""Database engine and session helpers.

Tenant collections are stored as JSON documents, so any async SQLAlchemy
dialect with a JSON type works. SQLite is used for development and tests.
"""

import logging
from collections.abc import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from .config import settings

logger = logging.getLogger(__name__)

ASYNC_DRIVERS = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}


def resolve_async_database_url(raw_url: str) -> str:
    """Return DATABASE_URL with its async driver, keeping credentials and query."""
    url = make_url(raw_url)
    backend = url.get_backend_name()
    target_driver = ASYNC_DRIVERS.get(backend)
    if target_driver is None:
        raise ValueError(
            f"Unsupported database dialect '{url.drivername}'. "
            "Use PostgreSQL (asyncpg) or SQLite (aiosqlite)."
        )
    if url.drivername == target_driver:
        return raw_url
    return url.set(drivername=target_driver).render_as_string(hide_password=False)


def is_sqlite(database_url: str) -> bool:
    return make_url(database_url).get_backend_name() == "sqlite"


class Base(DeclarativeBase):
    """Declarative base for the studio tables."""


DATABASE_URL = resolve_async_database_url(settings.database_url)

engine = create_async_engine(
    DATABASE_URL,
    echo=settings.debug,
    future=True,
)
AsyncSessionLocal = async_sessionmaker(
    engine,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create missing tables; SQLite databases are not managed by Alembic."""
    from src.modules.studios import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready on %s", bind.url.render_as_string(hide_password=True))


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields an async session."""
    async with AsyncSessionLocal() as session:
        yield session
