"""SQLite engine and session handling for the catalog database."""

import contextlib
import logging
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,  # type: ignore[attr-defined]
    create_async_engine,
)
from sqlmodel import SQLModel

# Registers profiles, species and species_comments on SQLModel.metadata
from speciescatalog.catalog import models  # noqa: F401

logger = logging.getLogger(__name__)

# Applied once per process after the schema exists
STARTUP_PRAGMAS = (
    "PRAGMA journal_mode = WAL",
    "PRAGMA synchronous = NORMAL",
    "PRAGMA optimize",
)


def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:  # noqa: ANN401
    # Comment authors and species ids are foreign keys; SQLite ignores them unless asked
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def create_catalog_engine(db_path: Path) -> AsyncEngine:
    """Create the aiosqlite engine for a catalog file, creating its directory."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", pool_pre_ping=True)
    event.listen(engine.sync_engine, "connect", _on_connect)
    return engine


class DatabaseService:
    """Owns the catalog engine and hands out sessions.

    The schema is not created on construction; call ``initialize()`` once
    from async code before the first query.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.async_engine = create_catalog_engine(db_path)
        self.async_session_local = async_sessionmaker(
            bind=self.async_engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    async def initialize(self) -> None:
        """Create missing catalog tables and tune the connection."""
        async with self.async_engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        async with self.get_async_db() as session:
            try:
                for pragma in STARTUP_PRAGMAS:
                    await session.execute(text(pragma))
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.warning("Could not apply startup pragmas to %s: %s", self.db_path, e)

        logger.info("Catalog database ready at %s", self.db_path)

    @contextlib.asynccontextmanager
    async def get_async_db(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session that is closed when the block exits."""
        async with self.async_session_local() as session:
            yield session

    async def clear_database(self) -> None:
        """Delete every catalog row, comments before species before profiles.

        Raises:
            SQLAlchemyError: If any delete fails; nothing is removed in that case
        """
        async with self.get_async_db() as session:
            try:
                for table in reversed(SQLModel.metadata.sorted_tables):
                    await session.execute(table.delete())
                await session.commit()
            except SQLAlchemyError:
                await session.rollback()
                raise
        logger.info("Catalog database cleared")

    async def dispose(self) -> None:
        """Close pooled connections; the service is unusable afterwards."""
        await self.async_engine.dispose()
        logger.debug("Catalog database engine disposed")
