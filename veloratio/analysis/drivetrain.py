#!/usr/bin/env python3
"""
Drivetrain Model - Ground speed and gear geometry from cadence and tooth counts
"""

import math
import logging
from typing import Dict, List, Any

from ..data.models import DrivetrainConfig, GearSelection

logger = logging.getLogger(__name__)

MM_PER_INCH = 25.4
KMH_PER_MPH = 1.609344

SHIFT_UP = "up"      # smaller cog, harder gear
SHIFT_DOWN = "down"  # larger cog, easier gear


def gear_ratio(front_teeth: int, rear_teeth: int) -> float:
    """Crank revolutions to wheel revolutions"""
    return front_teeth / rear_teeth


def compute_speed_kmh(cadence_rpm: float, front_teeth: int, rear_teeth: int,
                      wheel_circumference_mm: float) -> float:
    """Ground speed in km/h.

    Wheel RPM is cadence times the gear ratio; revolutions per hour times the
    circumference in km gives km/h. Inputs are expected to be clamped by the
    caller already, so no validation happens here.
    """
    wheel_rpm = cadence_rpm * gear_ratio(front_teeth, rear_teeth)
    return wheel_rpm * 60 * wheel_circumference_mm / 1_000_000


def kmh_to_mph(speed_kmh: float) -> float:
    return speed_kmh / KMH_PER_MPH


def gear_inches(front_teeth: int, rear_teeth: int, wheel_circumference_mm: float) -> float:
    """Classic gear inches: ratio times wheel diameter in inches"""
    wheel_diameter_in = wheel_circumference_mm / math.pi / MM_PER_INCH
    return gear_ratio(front_teeth, rear_teeth) * wheel_diameter_in


def gear_chart(config: DrivetrainConfig, front_teeth: int, cadence_rpm: float) -> List[Dict[str, Any]]:
    """Speed at the given cadence for every cog of the cassette, easiest first"""
    return [
        {
            "name": f"{teeth}T",
            "teeth": teeth,
            "speed_kmh": compute_speed_kmh(cadence_rpm, front_teeth, teeth, config.wheel_circumference_mm),
        }
        for teeth in config.cassette
    ]


def shift_rear(selection: GearSelection, config: DrivetrainConfig, direction: str) -> GearSelection:
    """Move one cog in either direction, staying put at the ends of the cassette"""
    if direction == SHIFT_UP:
        if selection.rear_index < len(config.cassette) - 1:
            return GearSelection(selection.front_index, selection.rear_index + 1)
    elif direction == SHIFT_DOWN:
        if selection.rear_index > 0:
            return GearSelection(selection.front_index, selection.rear_index - 1)
    else:
        raise ValueError(f"Unknown shift direction: {direction!r} (expected '{SHIFT_UP}' or '{SHIFT_DOWN}')")

    logger.debug(f"Rear shift '{direction}' ignored at cassette limit (index {selection.rear_index})")
    return selection


def select_rear(selection: GearSelection, config: DrivetrainConfig, rear_index: int) -> GearSelection:
    """Jump straight to a cog; out-of-range indices are clamped"""
    return GearSelection(selection.front_index, rear_index).clamped(config)


def toggle_chainring(selection: GearSelection, config: DrivetrainConfig) -> GearSelection:
    """Cycle to the next chainring (0 <-> 1 on a double)"""
    front = (selection.front_index + 1) % len(config.chainrings)
    return GearSelection(front, selection.rear_index)
