"""Species API contract models."""

from pydantic import BaseModel, Field

from speciescatalog.catalog.species import SpeciesDetail


class SpeciesListResponse(BaseModel):
    """All species in the catalog."""

    species: list[SpeciesDetail] = Field(..., description="Species ordered by scientific name")
    count: int = Field(..., description="Number of species")
