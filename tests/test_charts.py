from datetime import date, datetime, timedelta, timezone

import pytest

from risk_charts.charts import (
    build_forecast_chart,
    build_history_chart,
    format_percent,
)
from risk_charts.layout import HISTORY_LAYOUT, build_layout
from risk_charts.models import ForecastSample, Prediction
from risk_charts.scale import InputShape
from risk_charts.stats import EMPTY_SUMMARY

START = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _forecast(*values: float) -> list[ForecastSample]:
    return [
        ForecastSample(date(2024, 1, 1) + timedelta(days=i), value)
        for i, value in enumerate(values)
    ]


def _prediction(
    pid: str,
    index: float,
    level: str,
    *,
    hours: int = 0,
) -> Prediction:
    return Prediction(
        id=pid,
        timestamp=START + timedelta(hours=hours),
        premise_index=index,
        risk_level=level,
        temperature=27.0,
        rainfall=3.5,
    )


def test_empty_forecast_short_circuits():
    chart = build_forecast_chart([])

    assert chart.shape is InputShape.EMPTY
    assert chart.summary == EMPTY_SUMMARY
    assert chart.points == []
    assert chart.polyline == ""
    assert chart.area == ""
    assert chart.date_ticks == []
    assert len(chart.value_ticks) == 5


def test_single_day_forecast_does_not_divide_by_zero():
    chart = build_forecast_chart(_forecast(42))

    assert chart.shape is InputShape.SINGLETON
    assert chart.summary.average == 42
    assert chart.summary.maximum == 42
    assert chart.summary.minimum == 42
    assert chart.polyline == "0,87"
    assert chart.area == "M0,150 L0,87 L0,150 Z"
    assert [tick.label for tick in chart.date_ticks] == ["Jan 1"]


def test_two_day_forecast_geometry():
    layout = build_layout(440, 190)

    chart = build_forecast_chart(_forecast(10, 90), layout)

    assert chart.polyline == "0,171 440,19"
    assert chart.area == "M0,190 L0,171 L440,19 L440,190 Z"
    assert chart.summary.average == 50
    assert chart.summary.high_risk_count == 1


def test_ninety_day_forecast_summary_and_ticks():
    values = [float(i % 80) for i in range(90)]

    chart = build_forecast_chart(_forecast(*values))

    assert chart.shape is InputShape.NORMAL
    assert len(chart.points) == 90
    assert len(chart.date_ticks) == 5
    assert chart.summary.count == 90
    assert chart.summary.maximum == 79
    assert chart.summary.minimum == 0
    assert chart.summary.high_risk_count == sum(1 for v in values if v > 60)


def test_forecast_chart_is_repeatable():
    samples = _forecast(5, 70, 33)

    assert build_forecast_chart(samples) == build_forecast_chart(samples)


def test_history_plots_oldest_first_and_lists_newest_first():
    predictions = [
        _prediction("p3", 30, "low", hours=2),
        _prediction("p2", 50, "medium", hours=1),
        _prediction("p1", 70, "high", hours=0),
    ]

    chart = build_history_chart(predictions)

    first, middle, last = chart.markers
    assert first.point.x == 0
    assert first.point.y == pytest.approx(60)
    assert first.style.name == "high"
    assert middle.style.list_color == "amber"
    assert last.point.x == HISTORY_LAYOUT.inner_width
    assert last.point.y == pytest.approx(140)
    assert chart.polyline.startswith("0,60 ")
    assert [row.prediction.id for row in chart.recent] == ["p3", "p2", "p1"]


def test_history_single_prediction_has_no_line():
    chart = build_history_chart([_prediction("only", 42, "medium")])

    assert chart.shape is InputShape.SINGLETON
    assert chart.polyline == ""
    (marker,) = chart.markers
    assert marker.point.x == 0
    assert marker.title.endswith(": 42%")


def test_history_unknown_level_is_flagged_not_green():
    chart = build_history_chart(
        [_prediction("new", 80, "critical", hours=1), _prediction("old", 20, "low")]
    )

    flagged = chart.markers[-1]
    assert flagged.known is False
    assert flagged.style.marker_color != "#059669"
    assert chart.recent[0].known is False


def test_history_recent_limit():
    predictions = [_prediction(f"p{i}", 10 * i, "low", hours=-i) for i in range(8)]

    chart = build_history_chart(predictions, recent_limit=3)

    assert len(chart.markers) == 8
    assert [row.prediction.id for row in chart.recent] == ["p0", "p1", "p2"]


def test_empty_history():
    chart = build_history_chart([])

    assert chart.shape is InputShape.EMPTY
    assert chart.markers == []
    assert chart.recent == []


def test_format_percent():
    assert format_percent(42.0) == "42%"
    assert format_percent(42.5) == "42.5%"
