"""Chart API contract models."""

from typing import Any

from pydantic import BaseModel, Field

from speciescatalog.charts.speed_chart import AnimalSpeed


class AnimalSpeedChartResponse(BaseModel):
    """Data and plotly figure for the animal speed chart."""

    animals: list[AnimalSpeed] = Field(..., description="Selected animals, fastest first")
    y_axis_max: float | None = Field(None, description="Top of the speed axis")
    figure: dict[str, Any] = Field(..., description="Plotly figure as JSON")
