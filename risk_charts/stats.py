from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

HIGH_RISK_THRESHOLD = 60


@dataclass(frozen=True)
class RiskSummary:
    count: int
    average: int
    maximum: Optional[float]
    minimum: Optional[float]
    high_risk_count: int


EMPTY_SUMMARY = RiskSummary(
    count=0, average=0, maximum=None, minimum=None, high_risk_count=0
)


def round_half_up(value: float) -> int:
    # Dashboard figures round halves up (2.5 -> 3), unlike round().
    return math.floor(value + 0.5)


class RiskAccumulator:
    """Online sum/count/max/min so summaries can be built while streaming."""

    def __init__(self, threshold: float = HIGH_RISK_THRESHOLD) -> None:
        self.threshold = threshold
        self.count = 0
        self.total = 0.0
        self.maximum: Optional[float] = None
        self.minimum: Optional[float] = None
        self.high_risk_count = 0

    def add(self, value: float) -> None:
        self.count += 1
        self.total += value
        if self.maximum is None or value > self.maximum:
            self.maximum = value
        if self.minimum is None or value < self.minimum:
            self.minimum = value
        if value > self.threshold:
            self.high_risk_count += 1

    def extend(self, values: Iterable[float]) -> None:
        for value in values:
            self.add(value)

    def summary(self) -> RiskSummary:
        if not self.count:
            return EMPTY_SUMMARY
        return RiskSummary(
            count=self.count,
            average=round_half_up(self.total / self.count),
            maximum=self.maximum,
            minimum=self.minimum,
            high_risk_count=self.high_risk_count,
        )


def summarize_values(
    values: Iterable[float], *, threshold: float = HIGH_RISK_THRESHOLD
) -> RiskSummary:
    accumulator = RiskAccumulator(threshold)
    accumulator.extend(values)
    return accumulator.summary()


def display_bounds(summary: RiskSummary) -> tuple[Optional[int], Optional[int]]:
    if summary.maximum is None or summary.minimum is None:
        return (None, None)
    return (round_half_up(summary.maximum), round_half_up(summary.minimum))
