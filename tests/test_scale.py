import pytest

from risk_charts.layout import FORECAST_LAYOUT, build_layout
from risk_charts.scale import (
    InputShape,
    Point,
    classify_input,
    map_point,
    map_series,
    x_position,
    y_position,
)


def test_classify_input_has_three_states():
    assert classify_input([]) is InputShape.EMPTY
    assert classify_input([42]) is InputShape.SINGLETON
    assert classify_input([1, 2]) is InputShape.NORMAL


@pytest.mark.parametrize("length", [2, 3, 7, 90])
def test_x_spans_the_full_width(length):
    assert x_position(0, length, 440) == 0
    assert x_position(length - 1, length, 440) == 440


def test_single_sample_sits_at_origin():
    assert x_position(0, 1, 440) == 0.0
    assert map_point(0, 42, 1, FORECAST_LAYOUT).x == 0.0


def test_x_rejects_impossible_indexes():
    with pytest.raises(ValueError):
        x_position(0, 0, 440)
    with pytest.raises(ValueError):
        x_position(3, 3, 440)


def test_value_axis_is_inverted():
    assert y_position(100, 150) == 0
    assert y_position(0, 150) == 150
    assert y_position(50, 150) == 75


def test_out_of_range_values_leave_the_rectangle_unless_clamped():
    assert y_position(120, 150) == pytest.approx(-30)
    assert y_position(-10, 150) == pytest.approx(165)
    assert y_position(120, 150, clamp=True) == 0
    assert y_position(-10, 150, clamp=True) == 150


def test_layout_clamp_flag_reaches_mapping():
    layout = build_layout(500, 200, clamp=True)

    assert map_point(0, 150, 2, layout).y == 0


def test_two_samples_follow_height_law():
    layout = build_layout(440, 190)

    points = map_series([10, 90], layout)

    assert points[0] == Point(0, pytest.approx(171))
    assert points[1] == Point(440, pytest.approx(19))
    for point, value in zip(points, [10, 90]):
        assert point.y == pytest.approx(layout.inner_height * (1 - value / 100))


def test_map_series_is_repeatable():
    values = [12.5, 48.0, 77.0, 3.0]

    assert map_series(values, FORECAST_LAYOUT) == map_series(values, FORECAST_LAYOUT)
