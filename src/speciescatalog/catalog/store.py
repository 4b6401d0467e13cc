"""Data store access for profiles, species and species comments.

Every store call either returns plain model instances or raises StoreError
carrying a message that is safe to show to the user.
"""

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select

from speciescatalog.catalog.models import Profile, Species, SpeciesComment
from speciescatalog.database.core import DatabaseService

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the data store rejects or fails an operation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @classmethod
    def from_sqlalchemy(cls, error: SQLAlchemyError) -> "StoreError":
        """Build a StoreError from the driver-level message of a SQLAlchemy error."""
        orig = getattr(error, "orig", None)
        return cls(str(orig) if orig is not None else str(error))


class CatalogStore:
    """Relational data store for the catalog tables."""

    def __init__(self, database_service: DatabaseService):
        self.database_service = database_service

    # Comments

    async def list_comments(self, species_id: int) -> list[SpeciesComment]:
        """Select all comments for a species, newest first."""
        stmt = (
            select(SpeciesComment)
            .where(SpeciesComment.species_id == species_id)
            .order_by(col(SpeciesComment.created_at).desc(), col(SpeciesComment.id).desc())
        )
        async with self.database_service.get_async_db() as session:
            try:
                result = await session.execute(stmt)
                return list(result.scalars().all())
            except SQLAlchemyError as e:
                logger.error("Failed to list comments for species %s: %s", species_id, e)
                raise StoreError.from_sqlalchemy(e) from e

    async def get_profiles(self, profile_ids: Iterable[str]) -> list[Profile]:
        """Select the profiles whose id is in the given set."""
        ids = list(profile_ids)
        if not ids:
            return []
        stmt = select(Profile).where(col(Profile.id).in_(ids))
        async with self.database_service.get_async_db() as session:
            try:
                result = await session.execute(stmt)
                return list(result.scalars().all())
            except SQLAlchemyError as e:
                logger.error("Failed to load profiles: %s", e)
                raise StoreError.from_sqlalchemy(e) from e

    async def insert_comment(self, species_id: int, author: str, content: str) -> SpeciesComment:
        """Insert a comment; id and created_at are assigned by the store."""
        comment = SpeciesComment(species_id=species_id, author=author, content=content)
        async with self.database_service.get_async_db() as session:
            try:
                session.add(comment)
                await session.commit()
                await session.refresh(comment)
                return comment
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Failed to insert comment on species %s: %s", species_id, e)
                raise StoreError.from_sqlalchemy(e) from e

    async def delete_comment(self, species_id: int, comment_id: int, author: str) -> None:
        """Delete one comment of a species, restricted to rows written by ``author``.

        Raises:
            StoreError: If nothing matched (missing, on another species, or not the author's)
        """
        stmt = delete(SpeciesComment).where(
            col(SpeciesComment.id) == comment_id,
            col(SpeciesComment.species_id) == species_id,
            col(SpeciesComment.author) == author,
        )
        async with self.database_service.get_async_db() as session:
            try:
                result = await session.execute(stmt)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Failed to delete comment %s: %s", comment_id, e)
                raise StoreError.from_sqlalchemy(e) from e

        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise StoreError("Comment not found or not owned by you")

    # Species

    async def list_species(self) -> list[Species]:
        """Select all species ordered by scientific name."""
        stmt = select(Species).order_by(col(Species.scientific_name))
        async with self.database_service.get_async_db() as session:
            try:
                result = await session.execute(stmt)
                return list(result.scalars().all())
            except SQLAlchemyError as e:
                raise StoreError.from_sqlalchemy(e) from e

    async def get_species(self, species_id: int) -> Species | None:
        """Select one species by id."""
        async with self.database_service.get_async_db() as session:
            try:
                return await session.get(Species, species_id)
            except SQLAlchemyError as e:
                raise StoreError.from_sqlalchemy(e) from e

    async def update_species(self, species_id: int, changes: dict[str, Any]) -> Species | None:
        """Apply a partial update to a species and return the stored row."""
        async with self.database_service.get_async_db() as session:
            try:
                species = await session.get(Species, species_id)
                if species is None:
                    return None
                for field, value in changes.items():
                    setattr(species, field, value)
                session.add(species)
                await session.commit()
                await session.refresh(species)
                return species
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Failed to update species %s: %s", species_id, e)
                raise StoreError.from_sqlalchemy(e) from e

    # Bulk loading

    async def add_all(self, rows: Iterable[Profile | Species | SpeciesComment]) -> int:
        """Insert rows in one transaction and return how many were added."""
        items = list(rows)
        async with self.database_service.get_async_db() as session:
            try:
                session.add_all(items)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise StoreError.from_sqlalchemy(e) from e
        return len(items)
