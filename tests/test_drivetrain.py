"""
Drivetrain model tests - speed, gear geometry and shifting
"""

import pytest

from veloratio.analysis.drivetrain import (
    SHIFT_DOWN, SHIFT_UP, compute_speed_kmh, gear_chart, gear_inches, gear_ratio,
    kmh_to_mph, select_rear, shift_rear, toggle_chainring,
)
from veloratio.data.models import DrivetrainConfig, GearSelection

CONFIG = DrivetrainConfig()


def test_reference_speed():
    # 90 rpm in 48x32 on a 2105 mm wheel
    assert compute_speed_kmh(90, 48, 32, 2105) == pytest.approx(90 * 60 * 1.5 * 2105 / 1_000_000)
    assert compute_speed_kmh(90, 48, 32, 2105) == pytest.approx(17.0505)


@pytest.mark.parametrize("front,rear,circumference", [(32, 32, 2105), (48, 11, 2105), (50, 28, 2096)])
def test_zero_cadence_is_standstill(front, rear, circumference):
    assert compute_speed_kmh(0, front, rear, circumference) == 0


def test_speed_increases_with_cadence():
    speeds = [compute_speed_kmh(c, 48, 19, 2105) for c in range(40, 131, 10)]
    assert all(a < b for a, b in zip(speeds, speeds[1:]))


def test_speed_increases_with_ratio():
    # Cassette is largest cog first, so the ratio grows along it
    speeds = [compute_speed_kmh(90, 48, cog, 2105) for cog in CONFIG.cassette]
    assert all(a < b for a, b in zip(speeds, speeds[1:]))
    assert compute_speed_kmh(90, 32, 19, 2105) < compute_speed_kmh(90, 48, 19, 2105)


def test_gear_geometry():
    assert gear_ratio(48, 32) == 1.5
    # 2105 mm is roughly a 26.4 inch wheel
    assert gear_inches(48, 32, 2105) == pytest.approx(1.5 * 2105 / 3.141592653589793 / 25.4)
    assert kmh_to_mph(1.609344) == pytest.approx(1.0)


def test_gear_chart_covers_cassette():
    chart = gear_chart(CONFIG, 48, 90)

    assert [row["teeth"] for row in chart] == list(CONFIG.cassette)
    assert chart[0]["name"] == "32T"
    assert chart[0]["speed_kmh"] == pytest.approx(compute_speed_kmh(90, 48, 32, 2105))
    assert chart[-1]["speed_kmh"] > chart[0]["speed_kmh"]


def test_shift_up_moves_to_smaller_cog():
    selection = shift_rear(GearSelection(1, 5), CONFIG, SHIFT_UP)
    assert selection == GearSelection(1, 6)
    assert selection.rear_teeth(CONFIG) < GearSelection(1, 5).rear_teeth(CONFIG)


def test_shift_down_moves_to_larger_cog():
    assert shift_rear(GearSelection(1, 5), CONFIG, SHIFT_DOWN) == GearSelection(1, 4)


def test_shift_stays_within_cassette():
    last = len(CONFIG.cassette) - 1
    assert shift_rear(GearSelection(0, last), CONFIG, SHIFT_UP) == GearSelection(0, last)
    assert shift_rear(GearSelection(0, 0), CONFIG, SHIFT_DOWN) == GearSelection(0, 0)


def test_unknown_shift_direction():
    with pytest.raises(ValueError):
        shift_rear(GearSelection(), CONFIG, "sideways")


def test_select_rear_clamps():
    assert select_rear(GearSelection(1, 5), CONFIG, 99) == GearSelection(1, len(CONFIG.cassette) - 1)
    assert select_rear(GearSelection(1, 5), CONFIG, -3) == GearSelection(1, 0)
    assert select_rear(GearSelection(1, 5), CONFIG, 2) == GearSelection(1, 2)


def test_toggle_chainring_on_a_double():
    selection = toggle_chainring(GearSelection(1, 5), CONFIG)
    assert selection == GearSelection(0, 5)
    assert toggle_chainring(selection, CONFIG) == GearSelection(1, 5)


def test_toggle_chainring_cycles_a_triple():
    triple = DrivetrainConfig(chainrings=(30, 39, 50))
    indices = []
    selection = GearSelection(0, 0)
    for _ in range(3):
        selection = toggle_chainring(selection, triple)
        indices.append(selection.front_index)
    assert indices == [1, 2, 0]


@pytest.mark.parametrize("kwargs", [
    {"chainrings": ()},
    {"cassette": ()},
    {"chainrings": (48, 32)},
    {"cassette": (11, 12, 13)},
    {"cassette": (28, 28, 11)},
    {"chainrings": (0, 32)},
    {"cassette": (32, 2.5)},
    {"wheel_circumference_mm": 0},
])
def test_invalid_drivetrain_config(kwargs):
    with pytest.raises(ValueError):
        DrivetrainConfig(**kwargs)


def test_config_accepts_lists():
    config = DrivetrainConfig(chainrings=[34, 50], cassette=[28, 11])
    assert config.chainrings == (34, 50)
    assert config.describe() == "11-28T / 50-34T"
