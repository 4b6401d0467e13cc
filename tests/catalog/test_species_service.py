"""Tests for SpeciesService."""

import pytest

from speciescatalog.catalog.models import Kingdom
from speciescatalog.catalog.species import (
    NotSpeciesAuthorError,
    SpeciesNotFoundError,
    SpeciesService,
    SpeciesUpdate,
)

AUTHOR_ID = "3f1c2a9e-5d6b-4c1a-9e7f-0b2d4a6c8e10"
OTHER_ID = "8b7e6d5c-4a3b-4c2d-8e1f-9a0b1c2d3e4f"


@pytest.fixture
def species_service(seeded_store):
    return SpeciesService(seeded_store)


class TestSpeciesDetail:
    """Should present species for a viewer."""

    async def test_author_can_edit(self, species_service):
        """Should flag the species editable for its author only."""
        assert (await species_service.get_species(1, AUTHOR_ID)).can_edit is True
        assert (await species_service.get_species(1, OTHER_ID)).can_edit is False
        assert (await species_service.get_species(1, None)).can_edit is False

    async def test_display_fields(self, species_service):
        """Should format the population and the subtitle."""
        detail = await species_service.get_species(1)

        assert detail.formatted_population == "6,517"
        assert detail.subtitle == "Common name: Cheetah"

    async def test_display_fields_without_optional_values(self, species_service):
        """Should fall back when common name and population are missing."""
        detail = await species_service.get_species(2)

        assert detail.formatted_population is None
        assert detail.subtitle == "Species information"

    async def test_missing_species(self, species_service):
        """Should raise SpeciesNotFoundError for an unknown id."""
        with pytest.raises(SpeciesNotFoundError):
            await species_service.get_species(404)


class TestUpdateSpecies:
    """Should let only the author edit a species."""

    async def test_author_updates(self, species_service):
        """Should apply only the fields that were set."""
        updated = await species_service.update_species(
            1, AUTHOR_ID, SpeciesUpdate(total_population=7100)
        )

        assert updated.total_population == 7100
        assert updated.common_name == "Cheetah"
        assert updated.kingdom == Kingdom.ANIMALIA

    async def test_non_author_rejected(self, species_service):
        """Should refuse edits from anyone but the author."""
        with pytest.raises(NotSpeciesAuthorError):
            await species_service.update_species(1, OTHER_ID, SpeciesUpdate(common_name="Cat"))

        assert (await species_service.get_species(1)).common_name == "Cheetah"

    async def test_blank_scientific_name_rejected(self, species_service):
        """Should require a scientific name."""
        with pytest.raises(ValueError, match="Scientific name is required"):
            await species_service.update_species(1, AUTHOR_ID, SpeciesUpdate(scientific_name=" "))

    def test_unknown_fields_forbidden(self):
        """Should reject fields that are not editable."""
        with pytest.raises(ValueError):
            SpeciesUpdate.model_validate({"author": OTHER_ID})
