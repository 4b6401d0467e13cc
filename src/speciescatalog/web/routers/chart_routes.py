"""Animal speed chart: JSON data endpoint and HTML page."""

import asyncio
import json
import logging
from typing import Annotated

import plotly.io as pio
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from speciescatalog.charts.speed_chart import AnimalSpeedChart
from speciescatalog.config import CatalogConfig
from speciescatalog.utils.auth import get_viewer_id
from speciescatalog.web.core.container import Container
from speciescatalog.web.models.charts import AnimalSpeedChartResponse
from speciescatalog.web.models.template_contexts import SpeedChartPageContext

logger = logging.getLogger(__name__)

api_router = APIRouter(prefix="/charts")
view_router = APIRouter()


@api_router.get("/animal-speeds", response_model=AnimalSpeedChartResponse)
@inject
async def get_animal_speeds(
    speed_chart: Annotated[AnimalSpeedChart, Depends(Provide[Container.speed_chart])],
) -> AnimalSpeedChartResponse:
    """Return the representative animals and the rendered figure."""
    try:
        records = await asyncio.to_thread(speed_chart.get_records)
    except (OSError, ValueError) as e:
        logger.error("Failed to load animal speed data: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Animal speed data unavailable",
        ) from e

    figure = speed_chart.build_figure(records)
    return AnimalSpeedChartResponse(
        animals=records,
        y_axis_max=(
            speed_chart.y_axis_max(max(r.speed for r in records)) if records else None
        ),
        figure=json.loads(pio.to_json(figure)),
    )


@view_router.get("/species-speed", response_class=HTMLResponse)
@inject
async def species_speed_page(
    request: Request,
    speed_chart: Annotated[AnimalSpeedChart, Depends(Provide[Container.speed_chart])],
    templates: Annotated[Jinja2Templates, Depends(Provide[Container.templates])],
    config: Annotated[CatalogConfig, Depends(Provide[Container.config])],
) -> HTMLResponse:
    """Render the top speed chart page."""
    try:
        records = await asyncio.to_thread(speed_chart.get_records)
        figure = speed_chart.build_figure(records)
    except (OSError, ValueError) as e:
        logger.error("Failed to load animal speed data: %s", e)
        records = []
        figure = speed_chart.create_empty_plot("Animal speed data unavailable")

    context = SpeedChartPageContext(
        site_name=config.site_name,
        viewer_id=get_viewer_id(request),
        page_name="Top Speeds",
        active_page="speeds",
        animal_count=len(records),
        figure=json.loads(pio.to_json(figure)),
    )
    return templates.TemplateResponse(
        request, "species_speed.html.j2", context.model_dump(mode="json")
    )
