import pytest

from features.wind.utils.impact import calculate_wind_impact


@pytest.mark.parametrize("bearing", [0.0, 45.0, 90.0, 200.0, 359.0])
def test_wind_from_bearing_gives_full_speed(bearing):
    assert calculate_wind_impact(bearing, bearing, 12.0) == pytest.approx(12.0, abs=1e-6)


@pytest.mark.parametrize("bearing", [0.0, 45.0, 90.0, 200.0, 359.0])
def test_opposite_wind_gives_negative_full_speed(bearing):
    direction = (bearing + 180) % 360

    assert calculate_wind_impact(bearing, direction, 12.0) == pytest.approx(-12.0, abs=1e-6)


@pytest.mark.parametrize("bearing", [0.0, 45.0, 90.0, 200.0, 300.0])
def test_crosswind_gives_zero(bearing):
    assert calculate_wind_impact(bearing, bearing + 90, 12.0) == pytest.approx(0.0, abs=1e-6)
    assert calculate_wind_impact(bearing, bearing - 90, 12.0) == pytest.approx(0.0, abs=1e-6)


@pytest.mark.parametrize("k", [-2, -1, 1, 3])
def test_impact_is_periodic_in_wind_direction(k):
    base = calculate_wind_impact(30.0, 75.0, 8.0)

    assert calculate_wind_impact(30.0, 75.0 + 360 * k, 8.0) == pytest.approx(base, abs=1e-6)


def test_wraparound_uses_smaller_angle():
    # 350 and 10 are 20 degrees apart, not 340
    assert calculate_wind_impact(350.0, 10.0, 5.0) == pytest.approx(calculate_wind_impact(0.0, 20.0, 5.0))


def test_calm_wind_has_no_impact():
    assert calculate_wind_impact(123.0, 321.0, 0.0) == 0.0
