import logging
from datetime import datetime, timedelta, timezone

import pytest

from risk_charts.classify import (
    UNKNOWN_STYLE,
    RiskLevel,
    UnknownRiskLevelError,
    classify_point,
    group_by_level,
    recent_rows,
    risk_style,
)
from risk_charts.models import Prediction

START = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _prediction(pid: str, level: str, *, hours: int = 0, index: float = 50.0) -> Prediction:
    return Prediction(
        id=pid,
        timestamp=START + timedelta(hours=hours),
        premise_index=index,
        risk_level=level,
    )


def test_parse_normalizes_case_and_whitespace():
    assert RiskLevel.parse("HIGH ") is RiskLevel.HIGH
    assert RiskLevel.parse(RiskLevel.LOW) is RiskLevel.LOW


def test_styles_cover_every_level():
    assert risk_style("high").marker_color == "#dc2626"
    assert risk_style("medium").list_color == "amber"
    assert risk_style("low").list_color == "green"
    assert risk_style("high").rank < risk_style("medium").rank < risk_style("low").rank


def test_unknown_level_raises():
    with pytest.raises(UnknownRiskLevelError) as excinfo:
        risk_style("critical")

    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.level == "critical"


def test_classify_point_flags_unknown_level(caplog):
    with caplog.at_level(logging.WARNING):
        point = classify_point(_prediction("p1", "critical"))

    assert point.known is False
    assert point.style is UNKNOWN_STYLE
    assert point.style.marker_color != risk_style("low").marker_color
    assert "critical" in caplog.text


def test_group_by_level_orders_high_first():
    predictions = [
        _prediction("a", "low"),
        _prediction("b", "high"),
        _prediction("c", "bogus"),
        _prediction("d", "high"),
    ]

    groups = group_by_level(predictions)

    assert list(groups) == ["high", "low", "unknown"]
    assert [point.prediction.id for point in groups["high"]] == ["b", "d"]


def test_recent_rows_keep_newest_first():
    predictions = [_prediction(f"p{i}", "low", hours=-i) for i in range(7)]

    rows = recent_rows(predictions)

    assert [row.prediction.id for row in rows] == ["p0", "p1", "p2", "p3", "p4"]
    assert recent_rows(predictions, limit=0) == []
    with pytest.raises(ValueError):
        recent_rows(predictions, limit=-1)
