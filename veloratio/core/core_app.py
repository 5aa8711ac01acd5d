#!/usr/bin/env python3
"""
Core Application - Single rider session: inputs, derived telemetry and advice
"""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

from ..config import Config
from ..analysis.drivetrain import (
    compute_speed_kmh, gear_chart, gear_inches, gear_ratio, kmh_to_mph,
    select_rear, shift_rear, toggle_chainring,
)
from ..analysis.gear_classifier import GearThresholds, classify_gear, is_warning
from ..analysis.power import compute_power_watts
from ..llm.llm_client import LLMClient
from ..data.models import (
    AdviceRequest, AdviceResult, DerivedTelemetry, GearSelection, RiderState,
)
from .advice_adapter import AdviceAdapter
from .cache_manager import AdviceCache
from .template_engine import TemplateEngine

logger = logging.getLogger(__name__)

class VeloRatioApp:
    """Main application class - holds the current input snapshot"""

    def __init__(self, config: Config, llm_client=None):
        self.config = config
        self.drivetrain = config.drivetrain()
        self.physics = config.physics()
        self.ranges = config.input_ranges()
        self.thresholds = GearThresholds.from_config(self.drivetrain, config.steep_gradient_percent)

        self.selection = GearSelection().clamped(self.drivetrain)
        self.rider = RiderState().clamped(self.ranges)

        self.template_engine = TemplateEngine(config.templates_dir)

        # One long-lived collaborator for the whole session
        self.llm_client = llm_client or LLMClient(
            config, system_prompt=self.template_engine.load_template("base/system_prompts/coach")
        )
        self.advice_adapter = AdviceAdapter(
            self.llm_client,
            self.template_engine,
            timeout_seconds=config.advice_timeout or None,
        )
        self.advice_cache = AdviceCache()
        self._request_token = 0

    async def initialize(self):
        """Initialize the advice collaborator"""
        logger.info("Initializing application components...")
        if hasattr(self.llm_client, "initialize"):
            await self.llm_client.initialize()
        logger.info("Application initialization complete")

    async def cleanup(self):
        if hasattr(self.llm_client, "cleanup"):
            await self.llm_client.cleanup()

    # Derived values

    @property
    def front_teeth(self) -> int:
        return self.selection.front_teeth(self.drivetrain)

    @property
    def rear_teeth(self) -> int:
        return self.selection.rear_teeth(self.drivetrain)

    @property
    def total_mass_kg(self) -> float:
        return self.rider.rider_mass_kg + self.config.bike_mass_kg

    def telemetry(self) -> DerivedTelemetry:
        """Recompute everything from the current snapshot"""
        front, rear = self.front_teeth, self.rear_teeth
        circumference = self.drivetrain.wheel_circumference_mm

        speed = compute_speed_kmh(self.rider.cadence_rpm, front, rear, circumference)
        power = compute_power_watts(
            speed,
            self.rider.gradient_percent,
            self.rider.rider_mass_kg,
            self.config.bike_mass_kg,
            self.rider.wind_kmh,
            self.physics,
        )

        return DerivedTelemetry(
            front_teeth=front,
            rear_teeth=rear,
            gear_ratio=gear_ratio(front, rear),
            speed_kmh=speed,
            speed_mph=kmh_to_mph(speed),
            gear_inches=gear_inches(front, rear, circumference),
            power_watts=power,
            total_mass_kg=self.total_mass_kg,
            gear_label=classify_gear(front, rear, self.rider.gradient_percent, self.thresholds),
        )

    def gear_chart(self) -> List[Dict[str, Any]]:
        """Speeds across the cassette for the current chainring and cadence"""
        return gear_chart(self.drivetrain, self.front_teeth, self.rider.cadence_rpm)

    # Inputs. Any change to a tracked input clears the advice.

    def _set_selection(self, selection: GearSelection) -> None:
        if selection != self.selection:
            self.selection = selection
            self._invalidate_advice()

    def _set_rider(self, **changes) -> None:
        requested = replace(self.rider, **changes)
        rider = requested.clamped(self.ranges)
        if rider != requested:
            logger.debug(f"Clamped rider input {changes} to {rider}")
        if rider != self.rider:
            self.rider = rider
            self._invalidate_advice()

    def shift_rear(self, direction: str) -> GearSelection:
        self._set_selection(shift_rear(self.selection, self.drivetrain, direction))
        return self.selection

    def select_rear(self, rear_index: int) -> GearSelection:
        self._set_selection(select_rear(self.selection, self.drivetrain, rear_index))
        return self.selection

    def toggle_chainring(self) -> GearSelection:
        self._set_selection(toggle_chainring(self.selection, self.drivetrain))
        return self.selection

    def set_cadence(self, cadence_rpm: int) -> None:
        self._set_rider(cadence_rpm=cadence_rpm)

    def set_rider_mass(self, rider_mass_kg: float) -> None:
        self._set_rider(rider_mass_kg=rider_mass_kg)

    def set_gradient(self, gradient_percent: float) -> None:
        self._set_rider(gradient_percent=gradient_percent)

    def set_wind(self, wind_kmh: float) -> None:
        self._set_rider(wind_kmh=wind_kmh)

    # Advice

    def advice_request(self) -> AdviceRequest:
        """Scalar snapshot of the current state for the advisory service"""
        t = self.telemetry()
        return AdviceRequest(
            front_teeth=t.front_teeth,
            rear_teeth=t.rear_teeth,
            cadence_rpm=self.rider.cadence_rpm,
            speed_kmh=t.speed_kmh,
            gradient_percent=self.rider.gradient_percent,
            wind_kmh=self.rider.wind_kmh,
            power_watts=t.power_watts,
            total_mass_kg=t.total_mass_kg,
        )

    @property
    def current_advice(self) -> Optional[AdviceResult]:
        """Advice still valid for the current inputs, if any"""
        return self.advice_cache.get(self.advice_request().key())

    def _invalidate_advice(self) -> None:
        self.advice_cache.clear()

    async def request_advice(self) -> AdviceResult:
        """Explicitly ask for advice about the current state.

        Only the most recent request may store its result, and only while the
        inputs still match what was sent.
        """
        self._request_token += 1
        token = self._request_token
        request = self.advice_request()
        label = classify_gear(request.front_teeth, request.rear_teeth, request.gradient_percent, self.thresholds)

        logger.info(f"Requesting advice #{token} for {request.front_teeth}x{request.rear_teeth}")
        result = await self.advice_adapter.request_advice(
            request,
            drivetrain=self.drivetrain.describe(),
            gear_label=label,
            gear_warning=is_warning(label),
        )

        if token != self._request_token:
            logger.info(f"Discarding advice #{token}, superseded by #{self._request_token}")
        elif request.key() != self.advice_request().key():
            logger.info(f"Discarding advice #{token}, inputs changed while waiting")
        else:
            self.advice_cache.set(request.key(), result, token)

        return result
