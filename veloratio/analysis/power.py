#!/usr/bin/env python3
"""
Power Model - Rider power needed to hold a speed against rolling, gravity and air
"""

import math
import logging
from dataclasses import dataclass
from typing import Dict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhysicsConstants:
    """Physical constants used by the power model"""
    gravity: float = 9.81  # m/s^2
    air_density: float = 1.225  # kg/m^3 at sea level
    crr: float = 0.004  # rolling resistance, good road tyres
    cda: float = 0.32  # drag coefficient * frontal area, rider on the hoods
    drivetrain_efficiency: float = 0.96


DEFAULT_PHYSICS = PhysicsConstants()


def power_breakdown(speed_kmh: float, slope_percent: float, rider_mass_kg: float,
                    bike_mass_kg: float, wind_kmh: float,
                    constants: PhysicsConstants = DEFAULT_PHYSICS) -> Dict[str, float]:
    """Component powers in watts plus the resulting rider power"""
    if speed_kmh == 0:
        return {"rolling": 0.0, "gravity": 0.0, "aero": 0.0, "external": 0.0, "rider": 0.0}

    speed_ms = speed_kmh / 3.6
    total_mass = rider_mass_kg + bike_mass_kg
    weight = total_mass * constants.gravity

    rolling = weight * constants.crr * speed_ms

    # True grade angle, so steep slopes stay exact
    gravity = weight * math.sin(math.atan(slope_percent / 100)) * speed_ms

    # Headwind adds to the airflow. Keeping the sign lets a tailwind faster
    # than the bike push instead of drag.
    v_air = speed_ms + wind_kmh / 3.6
    # |v_air|^2 * sign(v_air)
    drag_force = 0.5 * constants.air_density * constants.cda * v_air * abs(v_air)
    aero = drag_force * speed_ms

    external = rolling + gravity + aero
    rider = 0.0 if external < 0 else external / constants.drivetrain_efficiency

    return {"rolling": rolling, "gravity": gravity, "aero": aero, "external": external, "rider": rider}


def compute_power_watts(speed_kmh: float, slope_percent: float, rider_mass_kg: float,
                        bike_mass_kg: float, wind_kmh: float,
                        constants: PhysicsConstants = DEFAULT_PHYSICS) -> float:
    """Required rider power in watts, never negative.

    Net assisting forces (descents, strong tailwinds) give 0 W rather than a
    negative figure; otherwise the external power is divided by the drivetrain
    efficiency.
    """
    breakdown = power_breakdown(speed_kmh, slope_percent, rider_mass_kg, bike_mass_kg, wind_kmh, constants)
    if breakdown["external"] < 0:
        logger.debug(f"Net assisting forces ({breakdown['external']:.1f} W), rider power floored at 0")
    return breakdown["rider"]
