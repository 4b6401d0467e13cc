"""Tests for CatalogStore against a real SQLite database."""

from datetime import UTC, datetime, timedelta

import pytest

from speciescatalog.catalog.models import Kingdom, SpeciesComment
from speciescatalog.catalog.store import StoreError

AUTHOR_ID = "3f1c2a9e-5d6b-4c1a-9e7f-0b2d4a6c8e10"
OTHER_ID = "8b7e6d5c-4a3b-4c2d-8e1f-9a0b1c2d3e4f"


class TestComments:
    """Should store and list species comments."""

    async def test_insert_assigns_id_and_timestamp(self, seeded_store):
        """Should let the store assign id and created_at."""
        comment = await seeded_store.insert_comment(1, AUTHOR_ID, "First sighting")

        assert comment.id is not None
        assert comment.created_at is not None
        assert comment.author == AUTHOR_ID

    async def test_list_newest_first(self, seeded_store):
        """Should order comments by creation time, newest first."""
        base = datetime(2025, 1, 1, tzinfo=UTC)
        await seeded_store.add_all(
            [
                SpeciesComment(
                    species_id=1,
                    author=AUTHOR_ID,
                    content=f"comment {i}",
                    created_at=base + timedelta(hours=i),
                )
                for i in range(3)
            ]
        )

        comments = await seeded_store.list_comments(1)

        assert [c.content for c in comments] == ["comment 2", "comment 1", "comment 0"]

    async def test_list_is_per_species(self, seeded_store):
        """Should only return comments of the requested species."""
        await seeded_store.insert_comment(1, AUTHOR_ID, "cheetah")
        await seeded_store.insert_comment(2, AUTHOR_ID, "mushroom")

        comments = await seeded_store.list_comments(2)

        assert [c.content for c in comments] == ["mushroom"]

    async def test_insert_unknown_species_fails(self, seeded_store):
        """Should reject a comment on a species that does not exist."""
        with pytest.raises(StoreError) as exc_info:
            await seeded_store.insert_comment(999, AUTHOR_ID, "orphan")

        assert "FOREIGN KEY" in exc_info.value.message

    async def test_delete_own_comment(self, seeded_store):
        """Should delete a comment written by the given author."""
        comment = await seeded_store.insert_comment(1, AUTHOR_ID, "bye")

        await seeded_store.delete_comment(1, comment.id, AUTHOR_ID)

        assert await seeded_store.list_comments(1) == []

    async def test_delete_other_authors_comment_has_no_effect(self, seeded_store):
        """Should refuse and keep the row when the author does not match."""
        comment = await seeded_store.insert_comment(1, AUTHOR_ID, "mine")

        with pytest.raises(StoreError, match="not found or not owned"):
            await seeded_store.delete_comment(1, comment.id, OTHER_ID)

        assert len(await seeded_store.list_comments(1)) == 1

    async def test_delete_scoped_to_species(self, seeded_store):
        """Should refuse to delete a comment through another species."""
        comment = await seeded_store.insert_comment(2, AUTHOR_ID, "fungus")

        with pytest.raises(StoreError, match="not found or not owned"):
            await seeded_store.delete_comment(1, comment.id, AUTHOR_ID)

        assert len(await seeded_store.list_comments(2)) == 1


class TestProfiles:
    """Should look up profiles by id set."""

    async def test_empty_ids_return_empty(self, catalog_store):
        """Should return nothing for an empty id set."""
        assert await catalog_store.get_profiles(set()) == []

    async def test_returns_only_requested(self, seeded_store):
        """Should return the profiles whose ids were requested."""
        profiles = await seeded_store.get_profiles({OTHER_ID, "missing"})

        assert [p.display_name for p in profiles] == ["Lin Moreau"]


class TestSpecies:
    """Should read and update species."""

    async def test_list_ordered_by_scientific_name(self, seeded_store):
        """Should order species alphabetically by scientific name."""
        species = await seeded_store.list_species()

        assert [s.scientific_name for s in species] == ["Acinonyx jubatus", "Amanita muscaria"]

    async def test_get_missing_returns_none(self, seeded_store):
        """Should return None for an unknown id."""
        assert await seeded_store.get_species(42) is None

    async def test_update_applies_changes(self, seeded_store):
        """Should persist the changed fields."""
        updated = await seeded_store.update_species(2, {"common_name": "Fly Agaric"})

        assert updated.common_name == "Fly Agaric"
        assert (await seeded_store.get_species(2)).common_name == "Fly Agaric"
        assert updated.kingdom == Kingdom.FUNGI

    async def test_update_missing_returns_none(self, seeded_store):
        """Should return None when the species does not exist."""
        assert await seeded_store.update_species(42, {"common_name": "x"}) is None
