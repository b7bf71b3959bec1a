from __future__ import annotations

from dataclasses import dataclass

DEFAULT_VALUE_DOMAIN = (0.0, 100.0)


@dataclass(frozen=True)
class Margins:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0


@dataclass(frozen=True)
class ChartLayout:
    """Logical drawing space; renderers scale it through a viewBox."""

    width: float
    height: float
    margins: Margins = Margins()
    value_domain: tuple[float, float] = DEFAULT_VALUE_DOMAIN
    clamp: bool = False

    @property
    def inner_width(self) -> float:
        return self.width - self.margins.left - self.margins.right

    @property
    def inner_height(self) -> float:
        return self.height - self.margins.top - self.margins.bottom


def _validate_non_negative(value: float, name: str) -> None:
    if value < 0:
        raise ValueError(f"{name} must be zero or greater")


def build_layout(
    width: float,
    height: float,
    *,
    top: float = 0,
    right: float = 0,
    bottom: float = 0,
    left: float = 0,
    value_domain: tuple[float, float] = DEFAULT_VALUE_DOMAIN,
    clamp: bool = False,
) -> ChartLayout:
    """Build a layout, rejecting margins that leave no drawing area."""
    for name, value in (("top", top), ("right", right), ("bottom", bottom), ("left", left)):
        _validate_non_negative(value, f"{name} margin")

    low, high = value_domain
    if low >= high:
        raise ValueError("value domain must be increasing")

    layout = ChartLayout(
        width=width,
        height=height,
        margins=Margins(top=top, right=right, bottom=bottom, left=left),
        value_domain=(float(low), float(high)),
        clamp=clamp,
    )
    if layout.inner_width <= 0 or layout.inner_height <= 0:
        raise ValueError("margins leave no room for the drawing area")
    return layout


FORECAST_LAYOUT = build_layout(500, 200, top=20, right=20, bottom=30, left=40)
HISTORY_LAYOUT = build_layout(500, 200, left=35)
