from __future__ import annotations

from typing import Sequence

from .stats import summarize_values
from .ticks import VALUE_TICKS

SPARK_CHARS = ".:-=+*#%@"


def _downsample(values: Sequence[float], target: int) -> list[float]:
    if len(values) <= target:
        return list(values)
    step = len(values) / target
    return [values[int(i * step)] for i in range(target)]


def sparkline(values: Sequence[float]) -> str:
    """One-line preview scaled between the lowest and highest premise index."""
    if not values:
        return ""
    summary = summarize_values(values)
    low = summary.minimum
    high = summary.maximum
    span = high - low

    if span < 1e-9:
        line = "=" * len(values)
    else:
        scale = len(SPARK_CHARS) - 1

        def to_char(val: float) -> str:
            idx = int((val - low) / span * scale)
            return SPARK_CHARS[min(idx, scale)]

        line = "".join(to_char(v) for v in values)

    return f"{low:.0f}% {line} {high:.0f}%"


def bar_graph(values: Sequence[float], *, height: int = 9, target_width: int = 60) -> str:
    """Multi-line ASCII chart on a fixed 0-100% axis with 25% gridlines."""
    if not values:
        return ""

    rows = max(4, height - 1)
    rows = int(round(rows / 4.0) * 4)  # gridlines land on whole rows
    clamped = [max(0.0, min(100.0, v)) for v in values]
    downsampled = _downsample(clamped, target=target_width)
    levels = [int(round(v / 100 * rows)) for v in downsampled]

    tick_rows = {int(round(pct / 100 * rows)): pct for pct in VALUE_TICKS}

    lines: list[str] = []
    for row in range(rows, -1, -1):
        label = tick_rows.get(row)
        axis = f"{label:>3}%" if label is not None else "    "
        cells = []
        for level in levels:
            if level >= row:
                cells.append("#")
            elif label is not None:
                cells.append("-")
            else:
                cells.append(" ")
        lines.append(f"{axis} | {''.join(cells)}")

    summary = summarize_values(values)
    lines.append(f"{'':4} +{'-' * (len(levels) + 1)}")
    lines.append(
        f"{'':4} min {summary.minimum:>5.1f}%  avg {summary.average:>3d}%  "
        f"max {summary.maximum:>5.1f}%  high-risk {summary.high_risk_count}"
    )
    return "\n".join(lines)
