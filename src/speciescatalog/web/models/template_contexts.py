"""Pydantic models for template context validation.

These models define the context variables each template needs, so a missing
value fails when the context is built rather than halfway through rendering.
"""

from pydantic import BaseModel, Field

from speciescatalog.catalog.species import SpeciesDetail
from speciescatalog.comments.models import Notice
from speciescatalog.web.models.comments import CommentView


class BaseTemplateContext(BaseModel):
    """Base context required by base.html.j2."""

    site_name: str = Field(..., description="Site title shown in the header")
    viewer_id: str | None = Field(default=None, description="Signed-in viewer, if any")
    page_name: str | None = Field(default=None, description="Page title to display in header")
    active_page: str = Field(default="", description="Active navigation item identifier")
    notices: list[Notice] = Field(default_factory=list, description="Toasts to display")


class SpeciesListPageContext(BaseTemplateContext):
    """Context for species_list.html.j2."""

    species: list[SpeciesDetail]


class SpeciesDetailPageContext(BaseTemplateContext):
    """Context for species_detail.html.j2."""

    species: SpeciesDetail
    comments: list[CommentView]
    draft: str = Field(default="", description="Comment text to put back in the form")
    can_comment: bool = Field(..., description="Whether the comment form is shown")


class SpeedChartPageContext(BaseTemplateContext):
    """Context for species_speed.html.j2."""

    animal_count: int
    figure: dict = Field(..., description="Plotly figure as data and layout")
