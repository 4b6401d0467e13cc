from collections.abc import AsyncIterator
from datetime import UTC, datetime
from pathlib import Path
from typing import cast

import pytest
from dependency_injector import providers
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from speciescatalog.catalog.models import Kingdom, Profile, Species, SpeciesComment
from speciescatalog.catalog.store import CatalogStore
from speciescatalog.config import CatalogConfig, ConfigManager
from speciescatalog.database.core import DatabaseService
from speciescatalog.system.path_resolver import PathResolver
from speciescatalog.web.core.container import Container
from speciescatalog.web.core.factory import create_app

AUTHOR_ID = "3f1c2a9e-5d6b-4c1a-9e7f-0b2d4a6c8e10"
OTHER_ID = "8b7e6d5c-4a3b-4c2d-8e1f-9a0b1c2d3e4f"


@pytest.fixture(scope="session")
def repo_root() -> Path:
    """Get the absolute path to the repository root."""
    return Path(__file__).parent.parent.resolve()


@pytest.fixture
def path_resolver(tmp_path: Path, repo_root: Path) -> PathResolver:
    """Provide a PathResolver reading assets from the repo and writing into tmp_path.

    Templates, static files and config templates come from the checkout; the
    database and the config file live in the test's temporary directory.
    """
    resolver = PathResolver()

    temp_data_dir = tmp_path / "data"
    (temp_data_dir / "database").mkdir(parents=True)
    (temp_data_dir / "config").mkdir(parents=True)

    resolver.app_dir = repo_root
    resolver.data_dir = temp_data_dir
    resolver.get_database_path = lambda: temp_data_dir / "database" / "speciescatalog.db"
    resolver.get_config_path = lambda: temp_data_dir / "config" / "speciescatalog.yaml"
    resolver.get_repo_path = lambda: repo_root

    return resolver


@pytest.fixture
def test_config(path_resolver: PathResolver) -> CatalogConfig:
    """Should load test configuration from the test config file."""
    return ConfigManager(path_resolver).load()


@pytest.fixture
async def database_service(path_resolver: PathResolver) -> AsyncIterator[DatabaseService]:
    """A file-backed database with the catalog schema, disposed after the test."""
    service = DatabaseService(path_resolver.get_database_path())
    await service.initialize()
    try:
        yield service
    finally:
        await service.dispose()


@pytest.fixture
def catalog_store(database_service: DatabaseService) -> CatalogStore:
    return CatalogStore(database_service)


@pytest.fixture
async def seeded_store(catalog_store: CatalogStore) -> CatalogStore:
    """Store holding two profiles and two species, one by each author."""
    await catalog_store.add_all(
        [
            Profile(id=AUTHOR_ID, email="ada@example.org", display_name="Ada Okafor"),
            Profile(id=OTHER_ID, email="lin@example.org", display_name="Lin Moreau"),
        ]
    )
    await catalog_store.add_all(
        [
            Species(
                id=1,
                scientific_name="Acinonyx jubatus",
                common_name="Cheetah",
                total_population=6517,
                kingdom=Kingdom.ANIMALIA,
                description="Fastest land animal.",
                author=AUTHOR_ID,
            ),
            Species(
                id=2,
                scientific_name="Amanita muscaria",
                kingdom=Kingdom.FUNGI,
                author=OTHER_ID,
            ),
        ]
    )
    return catalog_store


@pytest.fixture
async def app_with_temp_data(
    path_resolver: PathResolver, database_service: DatabaseService
) -> AsyncIterator[FastAPI]:
    """Create the FastAPI app with isolated paths and no completion client.

    Container providers are overridden at the class level BEFORE app creation
    so the container built by create_app() picks up the test versions.
    """
    Container.path_resolver.override(providers.Singleton(lambda: path_resolver))
    Container.database_path.override(providers.Factory(lambda: path_resolver.get_database_path()))

    test_config = ConfigManager(path_resolver).load()
    Container.config.override(providers.Singleton(lambda: test_config))
    Container.core_database.override(providers.Singleton(lambda: database_service))

    # Never reach the real completion API, even when OPENAI_API_KEY is set
    Container.completion_client.override(providers.Object(None))

    app = create_app()

    yield app

    Container.path_resolver.reset_override()
    Container.database_path.reset_override()
    Container.config.reset_override()
    Container.core_database.reset_override()
    Container.completion_client.reset_override()


@pytest.fixture
async def async_in_memory_session() -> AsyncIterator[AsyncSession]:
    """Create real in-memory async SQLite session with the catalog schema.

    Use this when a test needs real table behaviour without a CatalogStore.
    """
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_local = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    session = cast(AsyncSession, session_local())
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest.fixture(scope="session")
def model_factory():
    """Build unsaved catalog rows with sensible defaults."""

    class ModelFactory:
        @staticmethod
        def create_profile(**kwargs) -> Profile:
            defaults = {
                "id": AUTHOR_ID,
                "email": "ada@example.org",
                "display_name": "Ada Okafor",
            }
            defaults.update(kwargs)
            return Profile(**defaults)

        @staticmethod
        def create_comment(**kwargs) -> SpeciesComment:
            defaults = {
                "id": 1,
                "species_id": 1,
                "author": AUTHOR_ID,
                "content": "Seen near the river.",
                "created_at": datetime(2025, 3, 14, 9, 30, tzinfo=UTC),
            }
            defaults.update(kwargs)
            return SpeciesComment(**defaults)

    return ModelFactory()
