#!/usr/bin/env python3
"""
Gear Classifier - Human readable label for the current gear combination
"""

import logging
from dataclasses import dataclass

from ..data.models import DrivetrainConfig

logger = logging.getLogger(__name__)

GRINDING = "Grinding (Shift Down!)"
CLIMBING = "Climbing Gear"
SPRINT = "Speed/Sprint Gear"
CROSS_CHAIN = "Cross-chain (Avoid)"
CRUISING = "Cruising Gear"

WARNING_LABELS = (GRINDING, CROSS_CHAIN)


@dataclass(frozen=True)
class GearThresholds:
    """Tooth-count thresholds for the rules in classify_gear"""
    small_ring: int
    big_ring: int
    climbing_min_cog: int
    sprint_max_cog: int
    big_ring_cross_min_cog: int
    small_ring_cross_max_cog: int
    steep_gradient_percent: float = 5.0

    @classmethod
    def from_config(cls, config: DrivetrainConfig, steep_gradient_percent: float = 5.0) -> "GearThresholds":
        """Derive thresholds from the cassette so they follow drivetrain changes.

        Climbing covers the two largest cogs, sprinting the three smallest,
        and the three cogs at either end count as cross-chained on the
        opposite ring.
        """
        cassette = config.cassette
        last = len(cassette) - 1

        def cog(index: int) -> int:
            return cassette[min(max(index, 0), last)]

        thresholds = cls(
            small_ring=config.smallest_chainring,
            big_ring=config.largest_chainring,
            climbing_min_cog=cog(1),
            sprint_max_cog=cog(last - 2),
            big_ring_cross_min_cog=cog(2),
            small_ring_cross_max_cog=cog(last - 2),
            steep_gradient_percent=steep_gradient_percent,
        )
        logger.debug(f"Gear thresholds for {config.describe()}: {thresholds}")
        return thresholds


def classify_gear(front_teeth: int, rear_teeth: int, gradient_percent: float,
                  thresholds: GearThresholds) -> str:
    """Ordered rules, first match wins"""
    t = thresholds

    if gradient_percent > t.steep_gradient_percent and front_teeth == t.big_ring:
        return GRINDING
    if front_teeth == t.small_ring and rear_teeth >= t.climbing_min_cog:
        return CLIMBING
    if front_teeth == t.big_ring and rear_teeth <= t.sprint_max_cog:
        return SPRINT
    if front_teeth == t.big_ring and rear_teeth >= t.big_ring_cross_min_cog:
        return CROSS_CHAIN
    if front_teeth == t.small_ring and rear_teeth <= t.small_ring_cross_max_cog:
        return CROSS_CHAIN
    return CRUISING


def is_warning(label: str) -> bool:
    return label in WARNING_LABELS
