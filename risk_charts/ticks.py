from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from .layout import ChartLayout
from .models import ForecastSample
from .scale import x_position, y_position

VALUE_TICKS = (0, 25, 50, 75, 100)
MAX_POSITION_TICKS = 5


@dataclass(frozen=True)
class Tick:
    label: str
    position: float


def format_tick_date(value: date) -> str:
    return f"{value.strftime('%b')} {value.day}"


def value_ticks(layout: ChartLayout) -> list[Tick]:
    return [
        Tick(
            label=f"{tick}%",
            position=y_position(tick, layout.inner_height, domain=layout.value_domain),
        )
        for tick in VALUE_TICKS
    ]


def tick_stride(length: int) -> int:
    return max(1, length // MAX_POSITION_TICKS)


def position_ticks(samples: Sequence[ForecastSample], layout: ChartLayout) -> list[Tick]:
    """Label every stride-th sample; the final sample is not forced onto the axis."""
    length = len(samples)
    stride = tick_stride(length)
    return [
        Tick(
            label=format_tick_date(samples[index].date),
            position=x_position(index, length, layout.inner_width),
        )
        for index in range(0, length, stride)
    ]
