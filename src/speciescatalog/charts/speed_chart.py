"""Top-speed bar chart of representative animals, grouped by diet."""

import logging
from enum import Enum
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
from pydantic import BaseModel

from speciescatalog.config.models import ChartConfig

logger = logging.getLogger(__name__)

NAME_COLUMN = "Animal"
SPEED_COLUMN = "Top Speed (km/h)"
DIET_COLUMN = "Diet"


class Diet(str, Enum):
    """Diet categories shown on the chart, in legend order."""

    HERBIVORE = "herbivore"
    OMNIVORE = "omnivore"
    CARNIVORE = "carnivore"


DIET_COLORS = {
    Diet.HERBIVORE: "#22c55e",
    Diet.OMNIVORE: "#eab308",
    Diet.CARNIVORE: "#ef4444",
}


class AnimalSpeed(BaseModel):
    """One bar of the chart."""

    name: str
    speed: float
    diet: Diet


def clean_animal_speeds(frame: pd.DataFrame) -> pd.DataFrame:
    """Keep rows with a name, a numeric speed and a known diet.

    Returns a frame with ``name``, ``speed`` and ``diet`` columns.
    """
    frame = frame.reindex(columns=[NAME_COLUMN, SPEED_COLUMN, DIET_COLUMN], fill_value="")
    names = frame[NAME_COLUMN].fillna("").astype(str).str.strip()
    speeds = pd.to_numeric(frame[SPEED_COLUMN], errors="coerce")
    diets = frame[DIET_COLUMN].fillna("").astype(str).str.strip().str.lower()

    cleaned = pd.DataFrame({"name": names, "speed": speeds, "diet": diets})
    valid = (
        (cleaned["name"] != "")
        & cleaned["speed"].notna()
        & cleaned["diet"].isin([diet.value for diet in Diet])
    )
    return cleaned[valid].reset_index(drop=True)


def load_animal_speeds(csv_path: Path) -> list[AnimalSpeed]:
    """Read and clean the animal speed CSV."""
    frame = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    cleaned = clean_animal_speeds(frame)
    dropped = len(frame) - len(cleaned)
    if dropped:
        logger.debug("Dropped %d invalid animal speed rows from %s", dropped, csv_path)
    return [AnimalSpeed(**row) for row in cleaned.to_dict(orient="records")]


def select_representative(records: list[AnimalSpeed], per_diet: int = 5) -> list[AnimalSpeed]:
    """Pick the fastest ``per_diet`` animals of each diet, fastest first overall."""
    selected: list[AnimalSpeed] = []
    for diet in Diet:
        of_diet = [record for record in records if record.diet == diet]
        of_diet.sort(key=lambda record: record.speed, reverse=True)
        selected.extend(of_diet[:per_diet])
    selected.sort(key=lambda record: record.speed, reverse=True)
    return selected


class AnimalSpeedChart:
    """Builds the animal speed bar chart from the bundled CSV."""

    def __init__(self, csv_path: Path, config: ChartConfig):
        self.csv_path = csv_path
        self.config = config
        self._records: list[AnimalSpeed] = []
        self._loaded_from: tuple[Path, int] | None = None

    def get_records(self) -> list[AnimalSpeed]:
        """Select the animals to display, reading the CSV only when it changed.

        Raises:
            OSError: If the CSV cannot be read
            ValueError: If it cannot be parsed
        """
        source = (self.csv_path, self.csv_path.stat().st_mtime_ns)
        if source != self._loaded_from:
            self._records = select_representative(
                load_animal_speeds(self.csv_path), self.config.per_diet_limit
            )
            self._loaded_from = source
            logger.info("Loaded %d animals for the speed chart", len(self._records))
        return list(self._records)

    def create_empty_plot(self, message: str) -> go.Figure:
        """Create an empty plot with a message when no data is available."""
        fig = go.Figure()
        fig.add_annotation(
            x=0.5,
            y=0.5,
            text=message,
            showarrow=False,
            font={"size": 16},
            xref="paper",
            yref="paper",
        )
        fig.update_layout(
            xaxis={"showgrid": False, "zeroline": False, "showticklabels": False},
            yaxis={"showgrid": False, "zeroline": False, "showticklabels": False},
        )
        return fig

    def build_figure(self, records: list[AnimalSpeed]) -> go.Figure:
        """Bar chart with one trace per diet so the legend doubles as a color key."""
        if not records:
            return self.create_empty_plot("No animal speed data available")

        fig = go.Figure()
        for diet in Diet:
            of_diet = [record for record in records if record.diet == diet]
            fig.add_trace(
                go.Bar(
                    x=[record.name for record in of_diet],
                    y=[record.speed for record in of_diet],
                    name=diet.value.capitalize(),
                    marker={"color": DIET_COLORS[diet], "line": {"color": "#1f2937", "width": 1}},
                )
            )

        max_speed = max(record.speed for record in records)
        fig.update_layout(
            barmode="overlay",
            xaxis={
                "title": {"text": "Animal"},
                "categoryorder": "array",
                "categoryarray": [record.name for record in records],
                "tickangle": -45,
            },
            yaxis={"title": {"text": "Speed (km/h)"}, "range": [0, self.y_axis_max(max_speed)]},
            legend={"title": {"text": "Diet"}},
            margin={"l": 100, "r": 150, "t": 70, "b": 150},
        )
        return fig

    def y_axis_max(self, max_speed: float) -> float:
        """Top of the speed axis, leaving headroom above the fastest animal."""
        return max_speed * (1 + self.config.headroom)
