from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from .classify import ClassifiedPoint, RiskStyle, classify_point, recent_rows
from .layout import FORECAST_LAYOUT, HISTORY_LAYOUT, ChartLayout
from .models import ForecastSample, Prediction
from .paths import area_path, line_points, polyline_points
from .scale import InputShape, Point, classify_input
from .stats import EMPTY_SUMMARY, RiskSummary, summarize_values
from .ticks import Tick, position_ticks, value_ticks


@dataclass(frozen=True)
class ForecastChart:
    shape: InputShape
    layout: ChartLayout
    value_ticks: list[Tick]
    summary: RiskSummary = EMPTY_SUMMARY
    points: list[Point] = field(default_factory=list)
    polyline: str = ""
    area: str = ""
    date_ticks: list[Tick] = field(default_factory=list)


@dataclass(frozen=True)
class Marker:
    point: Point
    style: RiskStyle
    known: bool
    title: str


@dataclass(frozen=True)
class HistoryChart:
    shape: InputShape
    layout: ChartLayout
    value_ticks: list[Tick]
    markers: list[Marker] = field(default_factory=list)
    polyline: str = ""
    recent: list[ClassifiedPoint] = field(default_factory=list)


def format_percent(value: float) -> str:
    return f"{value:g}%"


def format_timestamp(ts: datetime) -> str:
    return ts.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def build_forecast_chart(
    samples: Sequence[ForecastSample], layout: ChartLayout = FORECAST_LAYOUT
) -> ForecastChart:
    shape = classify_input(samples)
    if shape is InputShape.EMPTY:
        return ForecastChart(shape=shape, layout=layout, value_ticks=value_ticks(layout))

    values = [sample.premise_index for sample in samples]
    points = line_points(values, layout)
    return ForecastChart(
        shape=shape,
        layout=layout,
        value_ticks=value_ticks(layout),
        summary=summarize_values(values),
        points=points,
        polyline=polyline_points(points),
        area=area_path(points, layout),
        date_ticks=position_ticks(samples, layout),
    )


def build_history_chart(
    predictions: Sequence[Prediction],
    layout: ChartLayout = HISTORY_LAYOUT,
    *,
    recent_limit: int = 5,
) -> HistoryChart:
    """Plot oldest to newest; the companion list keeps newest first."""
    shape = classify_input(predictions)
    if shape is InputShape.EMPTY:
        return HistoryChart(shape=shape, layout=layout, value_ticks=value_ticks(layout))

    chronological = list(reversed(predictions))
    points = line_points([p.premise_index for p in chronological], layout)
    markers = []
    for prediction, point in zip(chronological, points):
        classified = classify_point(prediction)
        markers.append(
            Marker(
                point=point,
                style=classified.style,
                known=classified.known,
                title=(
                    f"{format_timestamp(prediction.timestamp)}: "
                    f"{format_percent(prediction.premise_index)}"
                ),
            )
        )

    return HistoryChart(
        shape=shape,
        layout=layout,
        value_ticks=value_ticks(layout),
        markers=markers,
        polyline=polyline_points(points) if shape is InputShape.NORMAL else "",
        recent=recent_rows(predictions, recent_limit),
    )
