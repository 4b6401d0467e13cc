"""Species comment thread API."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from speciescatalog.catalog.species import SpeciesNotFoundError, SpeciesService
from speciescatalog.catalog.store import StoreError
from speciescatalog.comments.manager import CommentThread, SpeciesCommentService
from speciescatalog.comments.models import MutationResult
from speciescatalog.utils.auth import get_viewer_id, require_viewer
from speciescatalog.web.core.container import Container
from speciescatalog.web.models.comments import CommentThreadResponse, CreateCommentRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/species/{species_id}/comments")

CREATE_STATUS = {
    MutationResult.APPLIED: status.HTTP_201_CREATED,
    MutationResult.INVALID: status.HTTP_400_BAD_REQUEST,
    MutationResult.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    MutationResult.IN_PROGRESS: status.HTTP_409_CONFLICT,
    MutationResult.FAILED: status.HTTP_400_BAD_REQUEST,
}

DELETE_STATUS = {
    MutationResult.APPLIED: status.HTTP_200_OK,
    MutationResult.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    MutationResult.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    MutationResult.IN_PROGRESS: status.HTTP_409_CONFLICT,
    MutationResult.FAILED: status.HTTP_404_NOT_FOUND,
}


async def _open_thread(
    species_id: int,
    viewer_id: str | None,
    species_service: SpeciesService,
    comment_service: SpeciesCommentService,
) -> CommentThread:
    try:
        await species_service.get_species(species_id)
    except SpeciesNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except StoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message
        ) from e
    return await comment_service.open_thread(species_id, viewer_id)


def _thread_response(thread: CommentThread, status_code: int) -> JSONResponse:
    return JSONResponse(
        CommentThreadResponse.from_thread(thread).model_dump(mode="json"),
        status_code=status_code,
    )


@router.get("", response_model=CommentThreadResponse)
@inject
async def list_comments(
    species_id: int,
    species_service: Annotated[SpeciesService, Depends(Provide[Container.species_service])],
    comment_service: Annotated[
        SpeciesCommentService, Depends(Provide[Container.comment_service])
    ],
    viewer_id: Annotated[str | None, Depends(get_viewer_id)],
) -> CommentThreadResponse:
    """List a species' comments, newest first, with author names.

    A failed comment query is reported in ``notices`` rather than as an error.
    """
    thread = await _open_thread(species_id, viewer_id, species_service, comment_service)
    return CommentThreadResponse.from_thread(thread)


@router.post(
    "",
    response_model=CommentThreadResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {}, 401: {}, 404: {}, 409: {}},
)
@inject
async def create_comment(
    species_id: int,
    payload: CreateCommentRequest,
    species_service: Annotated[SpeciesService, Depends(Provide[Container.species_service])],
    comment_service: Annotated[
        SpeciesCommentService, Depends(Provide[Container.comment_service])
    ],
    viewer_id: Annotated[str, Depends(require_viewer)],
) -> JSONResponse:
    """Post a comment as the viewer and return the refreshed thread."""
    thread = await _open_thread(species_id, viewer_id, species_service, comment_service)
    result = await thread.submit(payload.content)
    return _thread_response(thread, CREATE_STATUS[result])


@router.delete(
    "/{comment_id}",
    response_model=CommentThreadResponse,
    responses={401: {}, 403: {}, 404: {}, 409: {}},
)
@inject
async def delete_comment(
    species_id: int,
    comment_id: int,
    species_service: Annotated[SpeciesService, Depends(Provide[Container.species_service])],
    comment_service: Annotated[
        SpeciesCommentService, Depends(Provide[Container.comment_service])
    ],
    viewer_id: Annotated[str, Depends(require_viewer)],
) -> JSONResponse:
    """Delete one of the viewer's own comments and return the refreshed thread."""
    thread = await _open_thread(species_id, viewer_id, species_service, comment_service)
    result = await thread.delete(comment_id)
    return _thread_response(thread, DELETE_STATUS[result])
