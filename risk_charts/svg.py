from __future__ import annotations

import logging
from html import escape
from pathlib import Path

from .charts import ForecastChart, HistoryChart
from .layout import ChartLayout
from .paths import format_coord
from .scale import InputShape

log = logging.getLogger(__name__)

LABEL_COLOR = "#6b7280"
GRID_COLOR = "#e5e7eb"
FORECAST_GRID_COLOR = "currentColor"
FORECAST_COLOR = "#4f46e5"
HISTORY_COLOR = "#2563eb"

FORECAST_PLACEHOLDER = ("No forecast data available", "Backend connection may be unavailable")
HISTORY_PLACEHOLDER = ("No prediction history available", "Generate predictions to see trends")


def _open(layout: ChartLayout) -> str:
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="100%" height="100%" '
        f'viewBox="0 0 {format_coord(layout.width)} {format_coord(layout.height)}" '
        f'preserveAspectRatio="none">'
    )


def _placeholder(layout: ChartLayout, lines: tuple[str, str]) -> str:
    cx = format_coord(layout.width / 2)
    cy = layout.height / 2
    title, hint = lines
    return "\n".join(
        [
            _open(layout),
            f'  <text x="{cx}" y="{format_coord(cy)}" font-size="14" fill="{LABEL_COLOR}" '
            f'text-anchor="middle">{escape(title)}</text>',
            f'  <text x="{cx}" y="{format_coord(cy + 18)}" font-size="12" fill="{LABEL_COLOR}" '
            f'text-anchor="middle">{escape(hint)}</text>',
            "</svg>",
        ]
    )


def _translate(layout: ChartLayout) -> str:
    margins = layout.margins
    return (
        f'  <g transform="translate({format_coord(margins.left)}, '
        f'{format_coord(margins.top)})">'
    )


def _grid(
    layout: ChartLayout,
    chart: ForecastChart | HistoryChart,
    *,
    stroke: str,
    stroke_width: float,
    label_offset: float,
) -> list[str]:
    margins = layout.margins
    lines = []
    for tick in chart.value_ticks:
        y = format_coord(tick.position + margins.top)
        label_y = format_coord(tick.position + margins.top + label_offset)
        lines.append(
            f'  <line x1="{format_coord(margins.left)}" y1="{y}" '
            f'x2="{format_coord(layout.width - margins.right)}" y2="{y}" '
            f'stroke="{stroke}" stroke-width="{format_coord(stroke_width)}"/>'
        )
        lines.append(
            f'  <text x="{format_coord(margins.left - 8)}" y="{label_y}" font-size="12" '
            f'fill="{LABEL_COLOR}" text-anchor="end">{escape(tick.label)}</text>'
        )
    return lines


def render_forecast_svg(chart: ForecastChart) -> str:
    layout = chart.layout
    if chart.shape is InputShape.EMPTY:
        return _placeholder(layout, FORECAST_PLACEHOLDER)

    margins = layout.margins
    label_y = format_coord(layout.height - margins.bottom + 15)
    parts = [_open(layout)]
    parts.append(
        "  <defs>\n"
        '    <linearGradient id="forecastGradient" x1="0" x2="0" y1="0" y2="1">\n'
        f'      <stop offset="0%" stop-color="{FORECAST_COLOR}" stop-opacity="0.3"/>\n'
        f'      <stop offset="100%" stop-color="{FORECAST_COLOR}" stop-opacity="0"/>\n'
        "    </linearGradient>\n"
        "  </defs>"
    )
    parts.extend(
        _grid(layout, chart, stroke=FORECAST_GRID_COLOR, stroke_width=0.5, label_offset=3)
    )
    for tick in chart.date_ticks:
        parts.append(
            f'  <text x="{format_coord(tick.position + margins.left)}" y="{label_y}" '
            f'font-size="12" fill="{LABEL_COLOR}" text-anchor="middle">'
            f"{escape(tick.label)}</text>"
        )
    parts.append(_translate(layout))
    parts.append(f'    <path fill="url(#forecastGradient)" d="{chart.area}"/>')
    if chart.shape is InputShape.NORMAL:
        parts.append(
            f'    <polyline fill="none" stroke="{FORECAST_COLOR}" stroke-width="2" '
            f'stroke-linecap="round" stroke-linejoin="round" points="{chart.polyline}"/>'
        )
    parts.append("  </g>")
    parts.append("</svg>")
    return "\n".join(parts)


def render_history_svg(chart: HistoryChart) -> str:
    layout = chart.layout
    if chart.shape is InputShape.EMPTY:
        return _placeholder(layout, HISTORY_PLACEHOLDER)

    parts = [_open(layout)]
    parts.extend(_grid(layout, chart, stroke=GRID_COLOR, stroke_width=1, label_offset=4))
    parts.append(_translate(layout))
    if chart.polyline:
        parts.append(
            f'    <polyline fill="none" stroke="{HISTORY_COLOR}" stroke-width="2" '
            f'stroke-linecap="round" stroke-linejoin="round" points="{chart.polyline}"/>'
        )
    for marker in chart.markers:
        css_class = "" if marker.known else ' class="risk-unknown"'
        parts.append(
            f'    <g{css_class}><circle cx="{format_coord(marker.point.x)}" '
            f'cy="{format_coord(marker.point.y)}" '
            f'r="5" fill="{marker.style.marker_color}" stroke="white" stroke-width="2"/>'
            f"<title>{escape(marker.title)}</title></g>"
        )
    parts.append("  </g>")
    parts.append("</svg>")
    return "\n".join(parts)


def write_svg(path: Path, markup: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(markup, encoding="utf-8")
    log.info("Saved chart to %s", path)
