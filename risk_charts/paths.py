from __future__ import annotations

from typing import Sequence

from .layout import ChartLayout
from .scale import Point, map_series


def format_coord(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def line_points(values: Sequence[float], layout: ChartLayout) -> list[Point]:
    return map_series(values, layout)


def polyline_points(points: Sequence[Point]) -> str:
    return " ".join(f"{format_coord(p.x)},{format_coord(p.y)}" for p in points)


def area_path(points: Sequence[Point], layout: ChartLayout) -> str:
    """Close the curve against the baseline so it can be filled."""
    if not points:
        return ""
    baseline = format_coord(layout.inner_height)
    first_x = format_coord(points[0].x)
    last_x = format_coord(points[-1].x)
    segments = [f"M{first_x},{baseline}"]
    segments.extend(f"L{format_coord(p.x)},{format_coord(p.y)}" for p in points)
    segments.append(f"L{last_x},{baseline}")
    segments.append("Z")
    return " ".join(segments)
