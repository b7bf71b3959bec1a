from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .charts import (
    ForecastChart,
    build_forecast_chart,
    build_history_chart,
    format_percent,
    format_timestamp,
)
from .classify import ClassifiedPoint, group_by_level
from .loader import load_forecast, load_predictions, resolve_data_path
from .models import InvalidRecordError
from .scale import InputShape
from .sparkline import bar_graph, sparkline
from .stats import display_bounds
from .svg import (
    FORECAST_PLACEHOLDER,
    HISTORY_PLACEHOLDER,
    render_forecast_svg,
    render_history_svg,
    write_svg,
)

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()

_RICH_COLORS = {
    "red": "red",
    "amber": "dark_orange",
    "green": "green",
    "gray": "grey50",
}


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO, format="%(message)s"
    )


def _load(loader, path: Path):
    try:
        return loader(path)
    except FileNotFoundError:
        console.print(f"Input file not found: {path}")
        raise typer.Exit(code=2)
    except OSError as exc:
        console.print(f"Cannot read {path}: {exc.strerror or exc}")
        raise typer.Exit(code=2)
    except InvalidRecordError as exc:
        console.print(f"Invalid input in {path}: {exc}")
        raise typer.Exit(code=2)


@app.command("forecast")
def forecast_command(
    input_path: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="Forecast JSON file (or set RISK_CHARTS_FORECAST)",
    ),
    svg_path: Optional[Path] = typer.Option(None, "--svg", help="Write the chart as SVG"),
    graph_path: Optional[Path] = typer.Option(
        None, "--graph", help="Write the chart as an image (png/pdf/etc)"
    ),
    ascii_chart: bool = typer.Option(
        False, "--ascii", "-a", help="Print an ASCII chart to the terminal"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Summarize a risk forecast and optionally render its chart."""
    configure_logging(verbose)
    samples = _load(load_forecast, resolve_data_path(input_path, "forecast"))
    chart = build_forecast_chart(samples)

    if svg_path:
        write_svg(svg_path, render_forecast_svg(chart))
    if chart.shape is InputShape.EMPTY:
        console.print("\n".join(FORECAST_PLACEHOLDER))
        raise typer.Exit(code=1)

    if graph_path:
        # Import matplotlib lazily only when we actually render a graph.
        from .graph import render_plot

        render_plot(chart, show=False, output=graph_path)
    if ascii_chart:
        values = [sample.premise_index for sample in samples]
        console.print(sparkline(values), markup=False)
        console.print(bar_graph(values), markup=False)
    console.print(_forecast_table(chart))


@app.command("history")
def history_command(
    input_path: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="Prediction history JSON file (or set RISK_CHARTS_HISTORY)",
    ),
    limit: int = typer.Option(5, "--limit", "-n", min=0, help="Rows in the recent list"),
    by_level: bool = typer.Option(
        False, "--by-level", help="Order the recent list high risk first"
    ),
    svg_path: Optional[Path] = typer.Option(None, "--svg", help="Write the chart as SVG"),
    graph_path: Optional[Path] = typer.Option(
        None, "--graph", help="Write the chart as an image (png/pdf/etc)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """List recent predictions and optionally render the history chart."""
    configure_logging(verbose)
    predictions = _load(load_predictions, resolve_data_path(input_path, "history"))
    chart = build_history_chart(predictions, recent_limit=limit)

    if svg_path:
        write_svg(svg_path, render_history_svg(chart))
    if chart.shape is InputShape.EMPTY:
        console.print("\n".join(HISTORY_PLACEHOLDER))
        raise typer.Exit(code=1)

    if graph_path:
        from .graph import render_plot

        render_plot(chart, show=False, output=graph_path)
    rows = chart.recent
    if by_level:
        groups = group_by_level(row.prediction for row in rows)
        rows = [point for group in groups.values() for point in group]
    console.print(_recent_table(rows))


def _format_bound(value: Optional[int]) -> str:
    return f"{value}%" if value is not None else "--"


def _format_reading(value: Optional[float], unit: str) -> str:
    return f"{value:g}{unit}" if value is not None else "--"


def _forecast_table(chart: ForecastChart) -> Table:
    summary = chart.summary
    peak, lowest = display_bounds(summary)
    table = Table(
        title=f"Forecast summary ({summary.count} days)",
        show_lines=False,
        box=box.SIMPLE,
        header_style="bold",
    )
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Average Risk", f"{summary.average}%")
    table.add_row("Peak Risk", _format_bound(peak))
    table.add_row("Lowest Risk", _format_bound(lowest))
    table.add_row("High Risk Days", str(summary.high_risk_count))
    return table


def _recent_table(rows: list[ClassifiedPoint]) -> Table:
    recent = Table(
        title="Recent predictions",
        show_lines=False,
        box=box.SIMPLE,
        header_style="bold",
    )
    recent.add_column("When", no_wrap=True)
    recent.add_column("Index", justify="right")
    recent.add_column("Level", no_wrap=True)
    recent.add_column("Temp", justify="right")
    recent.add_column("Rain", justify="right")

    for row in rows:
        prediction = row.prediction
        level = prediction.risk_level if row.known else f"unknown ({prediction.risk_level})"
        recent.add_row(
            format_timestamp(prediction.timestamp),
            format_percent(prediction.premise_index),
            f"[{_RICH_COLORS[row.style.list_color]}]{escape(level)}[/]",
            _format_reading(prediction.temperature, "°C"),
            _format_reading(prediction.rainfall, "mm"),
        )
    return recent


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
