"""Species browsing and editing API."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from speciescatalog.catalog.species import (
    NotSpeciesAuthorError,
    SpeciesDetail,
    SpeciesNotFoundError,
    SpeciesService,
    SpeciesUpdate,
)
from speciescatalog.catalog.store import StoreError
from speciescatalog.utils.auth import get_viewer_id, require_viewer
from speciescatalog.web.core.container import Container
from speciescatalog.web.models.species import SpeciesListResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/species")


@router.get("", response_model=SpeciesListResponse)
@inject
async def list_species(
    species_service: Annotated[SpeciesService, Depends(Provide[Container.species_service])],
    viewer_id: Annotated[str | None, Depends(get_viewer_id)],
) -> SpeciesListResponse:
    """List every species, ordered by scientific name."""
    try:
        species = await species_service.list_species(viewer_id)
    except StoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message
        ) from e
    return SpeciesListResponse(species=species, count=len(species))


@router.get("/{species_id}", response_model=SpeciesDetail)
@inject
async def get_species(
    species_id: int,
    species_service: Annotated[SpeciesService, Depends(Provide[Container.species_service])],
    viewer_id: Annotated[str | None, Depends(get_viewer_id)],
) -> SpeciesDetail:
    """Get one species, including whether the viewer may edit it."""
    try:
        return await species_service.get_species(species_id, viewer_id)
    except SpeciesNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except StoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message
        ) from e


@router.patch("/{species_id}", response_model=SpeciesDetail)
@inject
async def update_species(
    species_id: int,
    changes: SpeciesUpdate,
    species_service: Annotated[SpeciesService, Depends(Provide[Container.species_service])],
    viewer_id: Annotated[str, Depends(require_viewer)],
) -> SpeciesDetail:
    """Edit a species. Only its author may do so."""
    try:
        return await species_service.update_species(species_id, viewer_id, changes)
    except SpeciesNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except NotSpeciesAuthorError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except StoreError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
