from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from .models import Prediction

log = logging.getLogger(__name__)


class UnknownRiskLevelError(ValueError):
    def __init__(self, level: object) -> None:
        super().__init__(f"unknown risk level: {level!r}")
        self.level = level


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, raw: object) -> RiskLevel:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            raise UnknownRiskLevelError(raw) from None


@dataclass(frozen=True)
class RiskStyle:
    name: str
    marker_color: str
    list_color: str
    rank: int


RISK_STYLES = {
    RiskLevel.HIGH: RiskStyle("high", "#dc2626", "red", 0),
    RiskLevel.MEDIUM: RiskStyle("medium", "#d97706", "amber", 1),
    RiskLevel.LOW: RiskStyle("low", "#059669", "green", 2),
}
UNKNOWN_STYLE = RiskStyle("unknown", "#6b7280", "gray", 3)


@dataclass(frozen=True)
class ClassifiedPoint:
    prediction: Prediction
    style: RiskStyle
    known: bool


def risk_style(level: object) -> RiskStyle:
    return RISK_STYLES[RiskLevel.parse(level)]


def classify_point(prediction: Prediction) -> ClassifiedPoint:
    """Attach a style; unknown tags get a visibly distinct grey instead of green."""
    try:
        style = risk_style(prediction.risk_level)
    except UnknownRiskLevelError as exc:
        log.warning("Prediction %s: %s", prediction.id, exc)
        return ClassifiedPoint(prediction, UNKNOWN_STYLE, known=False)
    return ClassifiedPoint(prediction, style, known=True)


def classify_points(predictions: Iterable[Prediction]) -> list[ClassifiedPoint]:
    return [classify_point(prediction) for prediction in predictions]


def group_by_level(
    predictions: Iterable[Prediction],
) -> dict[str, list[ClassifiedPoint]]:
    groups: dict[str, list[ClassifiedPoint]] = {}
    classified = sorted(classify_points(predictions), key=lambda point: point.style.rank)
    for point in classified:
        groups.setdefault(point.style.name, []).append(point)
    return groups


def recent_rows(predictions: Sequence[Prediction], limit: int = 5) -> list[ClassifiedPoint]:
    """Newest-first rows for the companion list, as delivered."""
    if limit < 0:
        raise ValueError("limit must be zero or greater")
    return classify_points(predictions[:limit])
