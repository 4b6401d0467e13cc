"""Database models for the catalog domain.

These tables mirror the hosted schema: profiles, species and species_comments.
"""

from datetime import UTC, datetime
from enum import Enum

from sqlalchemy import Column, Index, String, Text
from sqlmodel import Field, SQLModel


class Kingdom(str, Enum):
    """Biological kingdoms a species can belong to."""

    ANIMALIA = "Animalia"
    PLANTAE = "Plantae"
    FUNGI = "Fungi"
    PROTISTA = "Protista"
    ARCHAEA = "Archaea"
    BACTERIA = "Bacteria"


class Profile(SQLModel, table=True):
    """Identity record created by the external identity provider."""

    __tablename__: str = "profiles"  # type: ignore[assignment]

    id: str = Field(primary_key=True)
    email: str = Field(sa_column=Column(String(320), nullable=False))
    display_name: str = Field(sa_column=Column(String(100), nullable=False))
    biography: str | None = Field(default=None, sa_column=Column(Text))


class Species(SQLModel, table=True):
    """A catalogued species owned by the profile that created it."""

    __tablename__: str = "species"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    scientific_name: str = Field(sa_column=Column(String(200), nullable=False, index=True))
    common_name: str | None = Field(default=None, sa_column=Column(String(200)))
    total_population: int | None = None
    kingdom: Kingdom
    description: str | None = Field(default=None, sa_column=Column(Text))
    image: str | None = None
    author: str = Field(foreign_key="profiles.id", index=True)


class SpeciesComment(SQLModel, table=True):
    """A comment left by a profile on a species."""

    __tablename__: str = "species_comments"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    species_id: int = Field(foreign_key="species.id")
    author: str = Field(foreign_key="profiles.id")
    content: str = Field(sa_column=Column(Text, nullable=False))
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    __table_args__ = (
        # Thread listing is always per species, newest first
        Index("idx_species_comments_species_created", "species_id", "created_at"),
    )
