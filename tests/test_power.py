"""
Power model tests
"""

import math

import pytest

from veloratio.analysis.power import DEFAULT_PHYSICS, PhysicsConstants, compute_power_watts, power_breakdown


def test_standstill_needs_no_power():
    assert compute_power_watts(0, 20, 120, 7, 30) == 0
    assert compute_power_watts(0, -5, 40, 7, -30) == 0
    assert power_breakdown(0, 10, 70, 7, 10)["rider"] == 0


def test_flat_calm_road():
    speed_ms = 30 / 3.6
    rolling = 77 * 9.81 * 0.004 * speed_ms
    aero = 0.5 * 1.225 * 0.32 * speed_ms ** 2 * speed_ms

    breakdown = power_breakdown(30, 0, 70, 7, 0)

    assert breakdown["rolling"] == pytest.approx(rolling)
    assert breakdown["gravity"] == 0
    assert breakdown["aero"] == pytest.approx(aero)
    assert compute_power_watts(30, 0, 70, 7, 0) == pytest.approx((rolling + aero) / 0.96)


def test_gravity_uses_true_grade_angle():
    speed_ms = 10 / 3.6
    breakdown = power_breakdown(10, 20, 70, 7, 0)
    assert breakdown["gravity"] == pytest.approx(77 * 9.81 * math.sin(math.atan(0.2)) * speed_ms)
    assert breakdown["gravity"] < 77 * 9.81 * 0.2 * speed_ms


def test_headwind_costs_more_than_calm():
    assert compute_power_watts(25, 0, 70, 7, 20) > compute_power_watts(25, 0, 70, 7, 0)


def test_tailwind_faster_than_rider_pushes():
    speed_ms = 10 / 3.6
    v_air = speed_ms - 30 / 3.6
    assert v_air < 0

    breakdown = power_breakdown(10, 0, 70, 7, -30)

    assert breakdown["aero"] == pytest.approx(-0.5 * 1.225 * 0.32 * v_air ** 2 * speed_ms)
    assert breakdown["aero"] < 0
    assert breakdown["external"] < 0
    assert compute_power_watts(10, 0, 70, 7, -30) == 0


def test_air_speed_exactly_zero():
    # Tailwind matching ground speed: no drag at all
    breakdown = power_breakdown(20, 0, 70, 7, -20)
    assert breakdown["aero"] == 0
    assert breakdown["rider"] == pytest.approx(breakdown["rolling"] / 0.96)


@pytest.mark.parametrize("speed,slope,wind", [
    (40, -5, 0),
    (60, -20, -30),
    (15, -8, -30),
    (5, -1, -30),
])
def test_descents_floor_at_zero(speed, slope, wind):
    assert power_breakdown(speed, slope, 70, 7, wind)["external"] < 0
    assert compute_power_watts(speed, slope, 70, 7, wind) == 0


def test_power_never_negative():
    for speed in (0, 1, 5, 17.05, 30, 55):
        for slope in (-20, -5, 0, 5, 20):
            for wind in (-30, -10, 0, 10, 30):
                for mass in (40, 70, 120):
                    assert compute_power_watts(speed, slope, mass, 7, wind) >= 0


def test_custom_constants():
    lossless = PhysicsConstants(drivetrain_efficiency=1.0)
    assert compute_power_watts(30, 2, 70, 7, 0, lossless) == pytest.approx(
        compute_power_watts(30, 2, 70, 7, 0, DEFAULT_PHYSICS) * 0.96
    )
