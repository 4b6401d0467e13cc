"""Tests for the catalog DatabaseService."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from speciescatalog.catalog.models import Kingdom, Species, SpeciesComment
from speciescatalog.database.core import DatabaseService

AUTHOR_ID = "3f1c2a9e-5d6b-4c1a-9e7f-0b2d4a6c8e10"


class TestDatabaseService:
    async def test_initialize_creates_catalog_tables(self, database_service):
        """Should create the three catalog tables."""
        async with database_service.get_async_db() as session:
            result = await session.execute(
                text("SELECT name FROM sqlite_master WHERE type = 'table'")
            )
            tables = {row[0] for row in result}

        assert {"profiles", "species", "species_comments"} <= tables

    async def test_initialize_is_repeatable(self, database_service):
        """Should leave an existing schema alone."""
        await database_service.initialize()

    async def test_creates_missing_directory(self, tmp_path):
        """Should create the parent directory of the database file."""
        db_path = tmp_path / "nested" / "dir" / "catalog.db"
        service = DatabaseService(db_path)
        try:
            await service.initialize()
        finally:
            await service.dispose()

        assert db_path.exists()

    async def test_foreign_keys_enforced(self, database_service):
        """Should refuse a comment whose species and author do not exist."""
        async with database_service.get_async_db() as session:
            session.add(SpeciesComment(species_id=42, author="nobody", content="Orphan"))
            with pytest.raises(IntegrityError):
                await session.commit()

    async def test_clear_database(self, seeded_store, database_service):
        """Should remove every row from every table."""
        await seeded_store.insert_comment(1, AUTHOR_ID, "Hello")

        await database_service.clear_database()

        async with database_service.get_async_db() as session:
            for table in ("profiles", "species", "species_comments"):
                count = (await session.execute(text(f"SELECT COUNT(*) FROM {table}"))).scalar()
                assert count == 0

    async def test_species_requires_existing_author(self, seeded_store, database_service):
        """Should refuse a species owned by an unknown profile."""
        async with database_service.get_async_db() as session:
            session.add(
                Species(scientific_name="Quercus robur", kingdom=Kingdom.PLANTAE, author="ghost")
            )
            with pytest.raises(IntegrityError):
                await session.commit()
