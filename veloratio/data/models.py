"""
Data models for drivetrain state, derived telemetry and coaching advice
"""

import math
from dataclasses import dataclass, field, astuple
from typing import Literal, Tuple

from pydantic import BaseModel, Field

AdviceCategory = Literal["climbing", "sprinting", "cruising", "cross-chain", "neutral"]

ADVICE_CATEGORIES: Tuple[str, ...] = ("climbing", "sprinting", "cruising", "cross-chain", "neutral")

FALLBACK_ADVICE_TEXT = "Keep pedaling! Maintain a smooth cadence for optimal efficiency."


@dataclass(frozen=True)
class DrivetrainConfig:
    """Chainrings (ascending), cassette (largest cog first) and wheel size"""
    chainrings: Tuple[int, ...] = (32, 48)
    cassette: Tuple[int, ...] = (32, 28, 25, 23, 21, 19, 17, 15, 13, 12, 11)
    wheel_circumference_mm: float = 2105  # 700x25c

    def __post_init__(self):
        # Accept lists from YAML but store tuples so the config stays hashable
        object.__setattr__(self, "chainrings", tuple(self.chainrings))
        object.__setattr__(self, "cassette", tuple(self.cassette))

        if not self.chainrings or not self.cassette:
            raise ValueError("Drivetrain needs at least one chainring and one cog")

        for teeth in self.chainrings + self.cassette:
            if not isinstance(teeth, int) or isinstance(teeth, bool) or teeth <= 0:
                raise ValueError(f"Tooth counts must be positive integers, got {teeth!r}")

        if any(a >= b for a, b in zip(self.chainrings, self.chainrings[1:])):
            raise ValueError(f"Chainrings must be strictly ascending: {self.chainrings}")
        if any(a <= b for a, b in zip(self.cassette, self.cassette[1:])):
            raise ValueError(f"Cassette must be strictly descending: {self.cassette}")

        if self.wheel_circumference_mm <= 0:
            raise ValueError(f"Wheel circumference must be positive, got {self.wheel_circumference_mm}")

    @property
    def smallest_chainring(self) -> int:
        return self.chainrings[0]

    @property
    def largest_chainring(self) -> int:
        return self.chainrings[-1]

    @property
    def largest_cog(self) -> int:
        return self.cassette[0]

    @property
    def smallest_cog(self) -> int:
        return self.cassette[-1]

    def describe(self) -> str:
        """Short label such as '11-32T / 48-32T'"""
        rings = "-".join(str(t) for t in reversed(self.chainrings))
        return f"{self.smallest_cog}-{self.largest_cog}T / {rings}T"


@dataclass(frozen=True)
class GearSelection:
    """Indices into the chainring and cassette sequences"""
    front_index: int = 1
    rear_index: int = 5

    def front_teeth(self, config: DrivetrainConfig) -> int:
        return config.chainrings[self.front_index]

    def rear_teeth(self, config: DrivetrainConfig) -> int:
        return config.cassette[self.rear_index]

    def clamped(self, config: DrivetrainConfig) -> "GearSelection":
        """Return a selection guaranteed to be within the config's bounds"""
        front = min(max(self.front_index, 0), len(config.chainrings) - 1)
        rear = min(max(self.rear_index, 0), len(config.cassette) - 1)
        return GearSelection(front_index=front, rear_index=rear)


@dataclass(frozen=True)
class ValueRange:
    """Inclusive range used to clamp a rider input"""
    minimum: float
    maximum: float

    def clamp(self, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError(f"Expected a finite number, got {value!r}")
        return min(max(value, self.minimum), self.maximum)


@dataclass(frozen=True)
class InputRanges:
    """Allowed ranges for every rider input"""
    cadence_rpm: ValueRange = field(default_factory=lambda: ValueRange(40, 130))
    rider_mass_kg: ValueRange = field(default_factory=lambda: ValueRange(40, 120))
    gradient_percent: ValueRange = field(default_factory=lambda: ValueRange(-5, 20))
    wind_kmh: ValueRange = field(default_factory=lambda: ValueRange(-30, 30))


@dataclass(frozen=True)
class RiderState:
    """Rider and environment inputs"""
    cadence_rpm: int = 90
    rider_mass_kg: float = 70.0
    gradient_percent: float = 0.0
    wind_kmh: float = 0.0  # positive = headwind, negative = tailwind

    def clamped(self, ranges: InputRanges) -> "RiderState":
        return RiderState(
            cadence_rpm=int(round(ranges.cadence_rpm.clamp(self.cadence_rpm))),
            rider_mass_kg=ranges.rider_mass_kg.clamp(self.rider_mass_kg),
            gradient_percent=ranges.gradient_percent.clamp(self.gradient_percent),
            wind_kmh=ranges.wind_kmh.clamp(self.wind_kmh),
        )


@dataclass(frozen=True)
class DerivedTelemetry:
    """Values derived from a gear selection and rider state"""
    front_teeth: int
    rear_teeth: int
    gear_ratio: float
    speed_kmh: float
    speed_mph: float
    gear_inches: float
    power_watts: float
    total_mass_kg: float
    gear_label: str


@dataclass(frozen=True)
class AdviceRequest:
    """Scalar snapshot sent to the advisory service"""
    front_teeth: int
    rear_teeth: int
    cadence_rpm: int
    speed_kmh: float
    gradient_percent: float
    wind_kmh: float
    power_watts: float
    total_mass_kg: float

    def key(self) -> Tuple:
        """Exact input tuple an advice result is valid for"""
        return astuple(self)


class AdviceResult(BaseModel):
    """Coaching tip returned by the advisory service"""
    advice: str = Field(description="Cycling tip, at most two sentences")
    category: AdviceCategory = Field(description="Which kind of gear usage the tip is about")


def fallback_advice() -> AdviceResult:
    """Fixed result used whenever the advisory service fails"""
    return AdviceResult(advice=FALLBACK_ADVICE_TEXT, category="neutral")
