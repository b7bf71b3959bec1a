from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Sequence

from .layout import DEFAULT_VALUE_DOMAIN, ChartLayout


class InputShape(Enum):
    EMPTY = "empty"
    SINGLETON = "singleton"
    NORMAL = "normal"


class Point(NamedTuple):
    x: float
    y: float


def classify_input(sequence: Sequence[object]) -> InputShape:
    if not sequence:
        return InputShape.EMPTY
    if len(sequence) == 1:
        return InputShape.SINGLETON
    return InputShape.NORMAL


def x_position(index: int, length: int, inner_width: float) -> float:
    """Spread indexes evenly across the width; a lone sample sits at 0."""
    if length < 1:
        raise ValueError("cannot place a point in an empty sequence")
    if not 0 <= index < length:
        raise ValueError(f"index {index} outside sequence of length {length}")
    if length == 1:
        return 0.0
    return index / (length - 1) * inner_width


def y_position(
    value: float,
    inner_height: float,
    *,
    domain: tuple[float, float] = DEFAULT_VALUE_DOMAIN,
    clamp: bool = False,
) -> float:
    """Invert the value axis: the top of the domain maps to y=0."""
    low, high = domain
    if clamp:
        value = max(low, min(high, value))
    return inner_height - (value - low) / (high - low) * inner_height


def map_point(index: int, value: float, length: int, layout: ChartLayout) -> Point:
    return Point(
        x_position(index, length, layout.inner_width),
        y_position(
            value,
            layout.inner_height,
            domain=layout.value_domain,
            clamp=layout.clamp,
        ),
    )


def map_series(values: Sequence[float], layout: ChartLayout) -> list[Point]:
    length = len(values)
    return [map_point(index, value, length, layout) for index, value in enumerate(values)]
