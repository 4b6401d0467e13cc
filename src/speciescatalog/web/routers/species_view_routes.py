"""Species pages: catalog list, species detail with comments, and form posts."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from speciescatalog.catalog.models import Kingdom
from speciescatalog.catalog.species import (
    NotSpeciesAuthorError,
    SpeciesDetail,
    SpeciesNotFoundError,
    SpeciesService,
    SpeciesUpdate,
)
from speciescatalog.catalog.store import StoreError
from speciescatalog.comments.manager import CommentThread, SpeciesCommentService
from speciescatalog.comments.models import MutationResult, Notice, NoticeVariant
from speciescatalog.config import CatalogConfig
from speciescatalog.utils.auth import get_viewer_id
from speciescatalog.web.core.container import Container
from speciescatalog.web.models.comments import CommentView
from speciescatalog.web.models.template_contexts import (
    SpeciesDetailPageContext,
    SpeciesListPageContext,
)
from speciescatalog.web.routers.comments_api_routes import CREATE_STATUS, DELETE_STATUS

logger = logging.getLogger(__name__)
router = APIRouter()

# Success notices carried across the post/redirect/get round trip
REDIRECT_NOTICES = {
    "comment-added": Notice(title="Comment added!"),
    "comment-deleted": Notice(title="Comment deleted"),
    "species-updated": Notice(title="Species updated"),
}


async def _load_species(
    species_service: SpeciesService, species_id: int, viewer_id: str | None
) -> SpeciesDetail:
    try:
        return await species_service.get_species(species_id, viewer_id)
    except SpeciesNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except StoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message
        ) from e


def _render_detail(
    request: Request,
    templates: Jinja2Templates,
    config: CatalogConfig,
    species: SpeciesDetail,
    thread: CommentThread,
    notices: list[Notice],
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    context = SpeciesDetailPageContext(
        site_name=config.site_name,
        viewer_id=thread.viewer_id,
        page_name=species.scientific_name,
        active_page="species",
        notices=notices,
        species=species,
        comments=[CommentView.from_comment(c, thread) for c in thread.comments],
        draft=thread.draft,
        can_comment=thread.viewer_id is not None,
    )
    return templates.TemplateResponse(
        request,
        "species_detail.html.j2",
        context.model_dump(mode="json"),
        status_code=status_code,
    )


def _redirect_to_detail(species_id: int, notice: str) -> RedirectResponse:
    return RedirectResponse(
        url=f"/species/{species_id}?notice={notice}", status_code=status.HTTP_303_SEE_OTHER
    )


@router.get("/", response_class=HTMLResponse)
@inject
async def species_list_page(
    request: Request,
    species_service: Annotated[SpeciesService, Depends(Provide[Container.species_service])],
    templates: Annotated[Jinja2Templates, Depends(Provide[Container.templates])],
    config: Annotated[CatalogConfig, Depends(Provide[Container.config])],
) -> HTMLResponse:
    """Render the catalog of all species."""
    viewer_id = get_viewer_id(request)
    notices: list[Notice] = []
    try:
        species = await species_service.list_species(viewer_id)
    except StoreError as e:
        logger.error("Error loading species list: %s", e.message)
        species = []
        notices.append(
            Notice(
                title="Error loading species",
                description=e.message,
                variant=NoticeVariant.DESTRUCTIVE,
            )
        )

    context = SpeciesListPageContext(
        site_name=config.site_name,
        viewer_id=viewer_id,
        page_name="Species",
        active_page="species",
        notices=notices,
        species=species,
    )
    return templates.TemplateResponse(
        request, "species_list.html.j2", context.model_dump(mode="json")
    )


@router.get("/species/{species_id}", response_class=HTMLResponse)
@inject
async def species_detail_page(
    request: Request,
    species_id: int,
    species_service: Annotated[SpeciesService, Depends(Provide[Container.species_service])],
    comment_service: Annotated[
        SpeciesCommentService, Depends(Provide[Container.comment_service])
    ],
    templates: Annotated[Jinja2Templates, Depends(Provide[Container.templates])],
    config: Annotated[CatalogConfig, Depends(Provide[Container.config])],
    notice: str | None = None,
) -> HTMLResponse:
    """Render one species followed by its comment thread."""
    viewer_id = get_viewer_id(request)
    species = await _load_species(species_service, species_id, viewer_id)
    thread = await comment_service.open_thread(species_id, viewer_id)

    notices = list(thread.notices)
    if notice in REDIRECT_NOTICES:
        notices.insert(0, REDIRECT_NOTICES[notice])
    return _render_detail(request, templates, config, species, thread, notices)


@router.post("/species/{species_id}/comments", response_class=HTMLResponse)
@inject
async def post_comment_form(
    request: Request,
    species_id: int,
    content: Annotated[str, Form()],
    species_service: Annotated[SpeciesService, Depends(Provide[Container.species_service])],
    comment_service: Annotated[
        SpeciesCommentService, Depends(Provide[Container.comment_service])
    ],
    templates: Annotated[Jinja2Templates, Depends(Provide[Container.templates])],
    config: Annotated[CatalogConfig, Depends(Provide[Container.config])],
) -> Response:
    """Post a comment from the detail page form."""
    viewer_id = get_viewer_id(request)
    species = await _load_species(species_service, species_id, viewer_id)
    thread = await comment_service.open_thread(species_id, viewer_id)

    result = await thread.submit(content)
    if result is MutationResult.APPLIED:
        return _redirect_to_detail(species_id, "comment-added")
    return _render_detail(
        request, templates, config, species, thread, thread.notices, CREATE_STATUS[result]
    )


@router.post("/species/{species_id}/comments/{comment_id}/delete", response_class=HTMLResponse)
@inject
async def delete_comment_form(
    request: Request,
    species_id: int,
    comment_id: int,
    species_service: Annotated[SpeciesService, Depends(Provide[Container.species_service])],
    comment_service: Annotated[
        SpeciesCommentService, Depends(Provide[Container.comment_service])
    ],
    templates: Annotated[Jinja2Templates, Depends(Provide[Container.templates])],
    config: Annotated[CatalogConfig, Depends(Provide[Container.config])],
) -> Response:
    """Delete a comment from the detail page form."""
    viewer_id = get_viewer_id(request)
    species = await _load_species(species_service, species_id, viewer_id)
    thread = await comment_service.open_thread(species_id, viewer_id)

    result = await thread.delete(comment_id)
    if result is MutationResult.APPLIED:
        return _redirect_to_detail(species_id, "comment-deleted")
    return _render_detail(
        request, templates, config, species, thread, thread.notices, DELETE_STATUS[result]
    )


@router.post("/species/{species_id}/edit", response_class=HTMLResponse)
@inject
async def edit_species_form(
    request: Request,
    species_id: int,
    scientific_name: Annotated[str, Form()],
    kingdom: Annotated[Kingdom, Form()],
    species_service: Annotated[SpeciesService, Depends(Provide[Container.species_service])],
    comment_service: Annotated[
        SpeciesCommentService, Depends(Provide[Container.comment_service])
    ],
    templates: Annotated[Jinja2Templates, Depends(Provide[Container.templates])],
    config: Annotated[CatalogConfig, Depends(Provide[Container.config])],
    common_name: Annotated[str, Form()] = "",
    total_population: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    image: Annotated[str, Form()] = "",
) -> Response:
    """Apply the author's edit form. Blank optional fields are cleared."""
    viewer_id = get_viewer_id(request)
    species = await _load_species(species_service, species_id, viewer_id)

    notices: list[Notice] = []
    status_code = status.HTTP_400_BAD_REQUEST
    try:
        population = int(total_population.replace(",", "")) if total_population.strip() else None
        changes = SpeciesUpdate(
            scientific_name=scientific_name.strip(),
            common_name=common_name.strip() or None,
            total_population=population,
            kingdom=kingdom,
            description=description.strip() or None,
            image=image.strip() or None,
        )
        if viewer_id is None:
            raise NotSpeciesAuthorError(species_id)
        await species_service.update_species(species_id, viewer_id, changes)
        return _redirect_to_detail(species_id, "species-updated")
    except NotSpeciesAuthorError as e:
        status_code = status.HTTP_403_FORBIDDEN
        notices.append(_error_notice("Error updating species", str(e)))
    except StoreError as e:
        notices.append(_error_notice("Error updating species", e.message))
    except ValueError as e:
        notices.append(_error_notice("Error updating species", str(e)))

    thread = await comment_service.open_thread(species_id, viewer_id)
    return _render_detail(
        request, templates, config, species, thread, notices + thread.notices, status_code
    )


def _error_notice(title: str, description: str) -> Notice:
    return Notice(title=title, description=description, variant=NoticeVariant.DESTRUCTIVE)
