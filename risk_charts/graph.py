from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from .charts import ForecastChart, HistoryChart
from .scale import InputShape

log = logging.getLogger(__name__)


def render_plot(
    chart: Union[ForecastChart, HistoryChart],
    *,
    show: bool,
    output: Optional[Path],
) -> None:
    """Draw a built chart with matplotlib, reusing its logical geometry."""
    import matplotlib

    # Skip GUI backends when we only need file output; it shortens import time.
    if not show:
        matplotlib.use("Agg", force=True)

    import matplotlib.pyplot as plt

    if chart.shape is InputShape.EMPTY:
        log.warning("No records to plot")
        return

    layout = chart.layout
    fig, ax = plt.subplots(figsize=(layout.width / 50, layout.height / 50))
    ax.set_xlim(0, layout.inner_width)
    # Logical coordinates grow downwards.
    ax.set_ylim(layout.inner_height, 0)
    ax.set_yticks([tick.position for tick in chart.value_ticks])
    ax.set_yticklabels([tick.label for tick in chart.value_ticks])
    ax.grid(True, axis="y", linestyle="--", alpha=0.4)

    if isinstance(chart, ForecastChart):
        xs = [point.x for point in chart.points]
        ys = [point.y for point in chart.points]
        ax.plot(xs, ys, "-", color="#4f46e5", linewidth=2)
        ax.fill_between(xs, ys, layout.inner_height, color="#4f46e5", alpha=0.2)
        ax.set_xticks([tick.position for tick in chart.date_ticks])
        ax.set_xticklabels([tick.label for tick in chart.date_ticks])
        ax.set_title(f"Forecast (avg {chart.summary.average}%)")
    else:
        xs = [marker.point.x for marker in chart.markers]
        ys = [marker.point.y for marker in chart.markers]
        if chart.shape is InputShape.NORMAL:
            ax.plot(xs, ys, "-", color="#2563eb", linewidth=2)
        ax.scatter(
            xs,
            ys,
            c=[marker.style.marker_color for marker in chart.markers],
            edgecolors="white",
            zorder=3,
        )
        ax.set_xticks([])
        ax.set_title("Prediction history")

    fig.tight_layout()

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output)
        log.info("Saved plot to %s", output)
    if show:
        plt.show()
    else:
        plt.close(fig)
