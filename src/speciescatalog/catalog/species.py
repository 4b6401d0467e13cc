"""Species browsing and editing."""

import logging

from pydantic import BaseModel, ConfigDict, computed_field

from speciescatalog.catalog.models import Kingdom, Species
from speciescatalog.catalog.store import CatalogStore

logger = logging.getLogger(__name__)


class SpeciesNotFoundError(LookupError):
    """Raised when a species id does not exist."""

    def __init__(self, species_id: int):
        super().__init__(f"Species {species_id} not found")
        self.species_id = species_id


class NotSpeciesAuthorError(PermissionError):
    """Raised when someone other than the author tries to change a species."""

    def __init__(self, species_id: int):
        super().__init__(f"Only the author can edit species {species_id}")
        self.species_id = species_id


class SpeciesDetail(BaseModel):
    """A species record as shown to one viewer."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    scientific_name: str
    common_name: str | None = None
    total_population: int | None = None
    kingdom: Kingdom
    description: str | None = None
    image: str | None = None
    author: str
    can_edit: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def subtitle(self) -> str:
        """Dialog description line under the scientific name."""
        if self.common_name:
            return f"Common name: {self.common_name}"
        return "Species information"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formatted_population(self) -> str | None:
        """Population with thousands separators, or None when unknown."""
        if self.total_population is None:
            return None
        return f"{self.total_population:,}"


class SpeciesUpdate(BaseModel):
    """Partial update of a species; omitted fields are left untouched."""

    model_config = ConfigDict(extra="forbid")

    scientific_name: str | None = None
    common_name: str | None = None
    total_population: int | None = None
    kingdom: Kingdom | None = None
    description: str | None = None
    image: str | None = None


class SpeciesService:
    """Read and edit species records, enforcing author ownership on writes."""

    def __init__(self, store: CatalogStore):
        self.store = store

    @staticmethod
    def to_detail(species: Species, viewer_id: str | None) -> SpeciesDetail:
        """Build the viewer-specific detail of a species."""
        detail = SpeciesDetail.model_validate(species)
        detail.can_edit = viewer_id is not None and species.author == viewer_id
        return detail

    async def list_species(self, viewer_id: str | None = None) -> list[SpeciesDetail]:
        """List all species ordered by scientific name."""
        return [self.to_detail(s, viewer_id) for s in await self.store.list_species()]

    async def get_species(self, species_id: int, viewer_id: str | None = None) -> SpeciesDetail:
        """Get one species.

        Raises:
            SpeciesNotFoundError: If the species does not exist
        """
        species = await self.store.get_species(species_id)
        if species is None:
            raise SpeciesNotFoundError(species_id)
        return self.to_detail(species, viewer_id)

    async def update_species(
        self, species_id: int, viewer_id: str, changes: SpeciesUpdate
    ) -> SpeciesDetail:
        """Apply a partial update on behalf of the species' author.

        Raises:
            SpeciesNotFoundError: If the species does not exist
            NotSpeciesAuthorError: If the viewer is not the author
        """
        current = await self.get_species(species_id, viewer_id)
        if not current.can_edit:
            raise NotSpeciesAuthorError(species_id)

        update = changes.model_dump(exclude_unset=True)
        if "scientific_name" in update and not (update["scientific_name"] or "").strip():
            raise ValueError("Scientific name is required")

        updated = await self.store.update_species(species_id, update)
        if updated is None:
            raise SpeciesNotFoundError(species_id)
        logger.info("Species updated", extra={"species_id": species_id, "fields": list(update)})
        return self.to_detail(updated, viewer_id)
