"""CLI command for loading profiles, species and comments into the catalog database."""

import asyncio
import logging
from datetime import datetime
from pathlib import Path

import click
import yaml
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.exc import SQLAlchemyError

from speciescatalog.catalog.models import Kingdom, Profile, Species, SpeciesComment
from speciescatalog.catalog.store import CatalogStore, StoreError
from speciescatalog.database.core import DatabaseService
from speciescatalog.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


class ProfileFixture(BaseModel):
    id: str
    email: str
    display_name: str
    biography: str | None = None


class SpeciesFixture(BaseModel):
    scientific_name: str = Field(..., min_length=1)
    common_name: str | None = None
    total_population: int | None = Field(default=None, ge=0)
    kingdom: Kingdom
    description: str | None = None
    image: str | None = None
    author: str


class CommentFixture(BaseModel):
    species: str = Field(..., description="Scientific name of the species commented on")
    author: str
    content: str = Field(..., min_length=1)
    created_at: datetime | None = None


class CatalogFixture(BaseModel):
    """Contents of a catalog seed file."""

    profiles: list[ProfileFixture] = Field(default_factory=list)
    species: list[SpeciesFixture] = Field(default_factory=list)
    comments: list[CommentFixture] = Field(default_factory=list)


def load_fixture(path: Path) -> CatalogFixture:
    """Parse and validate a YAML seed file."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return CatalogFixture.model_validate(raw)


async def seed_catalog(
    catalog: CatalogFixture, db_path: Path, reset: bool = False
) -> dict[str, int]:
    """Insert the fixture rows and return how many of each were added.

    Comments reference species by scientific name, so species are inserted
    and read back before comments are built.

    Raises:
        StoreError: If the database rejects a row
        ValueError: If a comment names a species that does not exist
    """
    database_service = DatabaseService(db_path)
    try:
        await database_service.initialize()
        if reset:
            try:
                await database_service.clear_database()
            except SQLAlchemyError as e:
                raise StoreError.from_sqlalchemy(e) from e

        store = CatalogStore(database_service)
        counts = {
            "profiles": await store.add_all(
                Profile(**profile.model_dump()) for profile in catalog.profiles
            ),
            "species": await store.add_all(
                Species(**species.model_dump()) for species in catalog.species
            ),
        }

        species_ids = {s.scientific_name: s.id for s in await store.list_species()}
        comments = []
        for comment in catalog.comments:
            species_id = species_ids.get(comment.species)
            if species_id is None:
                raise ValueError(f"Comment refers to unknown species '{comment.species}'")
            row = SpeciesComment(
                species_id=species_id, author=comment.author, content=comment.content
            )
            if comment.created_at is not None:
                row.created_at = comment.created_at
            comments.append(row)
        counts["comments"] = await store.add_all(comments)

        logger.info("Catalog seeded", extra=counts)
        return counts
    finally:
        await database_service.dispose()


@click.command()
@click.argument(
    "fixture",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--database",
    type=click.Path(dir_okay=False, path_type=Path),
    help="SQLite database to seed (default: the configured data directory)",
)
@click.option(
    "--reset",
    is_flag=True,
    help="Delete all existing rows before loading",
)
def cli(fixture: Path | None, database: Path | None, reset: bool) -> None:
    """Load a catalog seed file into the database.

    Examples:
        # Load the bundled sample catalog
        seed-catalog

        # Replace everything with a custom fixture
        seed-catalog my_catalog.yaml --reset
    """
    path_resolver = PathResolver()
    fixture = fixture or path_resolver.get_sample_catalog_path()
    db_path = database or path_resolver.get_database_path()

    try:
        catalog = load_fixture(fixture)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        raise click.ClickException(f"Could not read fixture {fixture}: {e}") from e

    click.echo(f"Seeding {db_path} from {fixture}")
    try:
        counts = asyncio.run(seed_catalog(catalog, db_path, reset=reset))
    except StoreError as e:
        raise click.ClickException(f"Database rejected the fixture: {e.message}") from e
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    click.echo(
        click.style(
            f"Added {counts['profiles']} profiles, {counts['species']} species "
            f"and {counts['comments']} comments",
            fg="green",
        )
    )


def main() -> None:
    """Entry point for the seed-catalog CLI."""
    cli()


if __name__ == "__main__":
    main()
