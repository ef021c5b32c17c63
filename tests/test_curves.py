import pytest

from quadsim.curves import (
    WHITE,
    BatchedCurve,
    Color,
    ColorCurve,
    Curve,
    Interpolation,
)

RED = Color(1.0, 0.0, 0.0, 1.0)
GREEN = Color(0.0, 1.0, 0.0, 1.0)
BLUE = Color(0.0, 0.0, 1.0, 1.0)


def test_color_lerp_endpoints():
    assert RED.lerp(BLUE, 0.0) == RED
    assert RED.lerp(BLUE, 1.0) == BLUE


def test_color_lerp_midpoint_is_between():
    mid = RED.lerp(BLUE, 0.5)
    assert 0.0 < mid.r < 1.0
    assert 0.0 < mid.b < 1.0
    assert mid.r == pytest.approx(mid.b)
    assert mid.a == 1.0


def test_color_iterates_components():
    assert tuple(Color(0.1, 0.2, 0.3, 0.4)) == (0.1, 0.2, 0.3, 0.4)


def test_curve_defaults():
    curve = Curve()
    assert curve.resolution == 20
    assert curve.interpolation is Interpolation.LINEAR
    assert curve.points == ()


def test_bezier_batch_rejected():
    with pytest.raises(ValueError):
        Curve(points=[(0.0, 0.0), (1.0, 1.0)], interpolation=Interpolation.BEZIER).batch()


def test_non_positive_resolution_rejected():
    with pytest.raises(ValueError):
        Curve(points=[(0.0, 0.0), (1.0, 1.0)], resolution=0)


def test_identity_curve_batch_is_monotonic_with_fixed_ends():
    batched = Curve(points=[(0.0, 0.0), (1.0, 1.0)], resolution=4).batch()
    assert len(batched.points) == 5
    assert batched.points[0] == 0.0
    assert batched.points[-1] == 1.0
    assert list(batched.points) == sorted(batched.points)


def test_batch_follows_key_points():
    batched = Curve(points=[(0.0, 0.5), (0.5, 1.0), (1.0, 0.0)]).batch()
    assert batched.points[0] == 0.5
    assert max(batched.points) == pytest.approx(1.0)
    assert all(0.0 <= p <= 1.0 + 1e-9 for p in batched.points)


def test_batch_empty_curve_has_no_points():
    assert Curve().batch().points == ()


def test_batched_get_ends():
    batched = BatchedCurve([0.5, 1.0, 0.25])
    assert batched.get(0.0) == 0.5
    assert batched.get(1.0) == 0.25


def test_batched_get_interpolates():
    batched = BatchedCurve([0.0, 2.0])
    assert batched.get(0.25) == pytest.approx(1.0)
    value = batched.get(0.4)
    assert 0.0 < value < 2.0


def test_batched_get_empty_raises():
    with pytest.raises(ValueError):
        BatchedCurve([]).get(0.5)


def test_color_curve_default_is_white():
    assert ColorCurve().at(0.3) == WHITE
    assert ColorCurve().at(0.9) == WHITE


def test_color_curve_key_points():
    curve = ColorCurve(start=RED, mid=GREEN, end=BLUE)
    assert curve.at(0.0) == RED
    assert curve.at(0.5) == GREEN
    assert curve.at(1.0) == BLUE


def test_color_curve_first_half_has_no_end_colour():
    curve = ColorCurve(start=RED, mid=GREEN, end=BLUE)
    colour = curve.at(0.25)
    assert colour.b == 0.0
    assert colour.r > 0.0 and colour.g > 0.0