#!/usr/bin/env python3
"""
Advice Adapter - Turns drivetrain state into a coaching request and never fails
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from ..data.models import ADVICE_CATEGORIES, AdviceRequest, AdviceResult, fallback_advice
from .template_engine import ADVICE_TEMPLATE, TemplateEngine

logger = logging.getLogger(__name__)


def describe_wind(wind_kmh: float) -> str:
    if wind_kmh > 0:
        return f"{wind_kmh:g} km/h Headwind"
    if wind_kmh < 0:
        return f"{abs(wind_kmh):g} km/h Tailwind"
    return "Calm"


def parse_advice(reply: Any) -> AdviceResult:
    """Validate whatever the collaborator returned into an AdviceResult"""
    if isinstance(reply, AdviceResult):
        return AdviceResult.model_validate(reply.model_dump())
    if isinstance(reply, (str, bytes)):
        return AdviceResult.model_validate_json(reply)
    if isinstance(reply, dict):
        return AdviceResult.model_validate(reply)
    raise TypeError(f"Unexpected advice payload type: {type(reply).__name__}")


class AdviceAdapter:
    """Single-shot advice request against a collaborator with generate_advice(prompt)"""

    def __init__(self, collaborator, template_engine: Optional[TemplateEngine] = None,
                 timeout_seconds: Optional[float] = None):
        self.collaborator = collaborator
        self.template_engine = template_engine or TemplateEngine()
        self.timeout_seconds = timeout_seconds

    def build_context(self, request: AdviceRequest, drivetrain: str = "2x11",
                      gear_label: Optional[str] = None, gear_warning: bool = False) -> Dict[str, Any]:
        return {
            "drivetrain": drivetrain,
            "front_teeth": request.front_teeth,
            "rear_teeth": request.rear_teeth,
            "cadence_rpm": request.cadence_rpm,
            "speed_kmh": f"{request.speed_kmh:.1f}",
            "gradient_percent": f"{request.gradient_percent:g}",
            "wind_description": describe_wind(request.wind_kmh),
            "power_watts": round(request.power_watts),
            "total_mass_kg": f"{request.total_mass_kg:g}",
            "gear_label": gear_label,
            "gear_warning": gear_warning,
            "categories": ", ".join(ADVICE_CATEGORIES),
        }

    def build_prompt(self, request: AdviceRequest, **kwargs) -> str:
        return self.template_engine.render(ADVICE_TEMPLATE, **self.build_context(request, **kwargs))

    async def request_advice(self, request: AdviceRequest, **kwargs) -> AdviceResult:
        """Ask for advice once; any failure resolves to the neutral fallback"""
        try:
            prompt = self.build_prompt(request, **kwargs)
            call = self.collaborator.generate_advice(prompt)
            if self.timeout_seconds:
                reply = await asyncio.wait_for(call, timeout=self.timeout_seconds)
            else:
                reply = await call
            result = parse_advice(reply)

        except asyncio.TimeoutError:
            logger.error("Advice request timed out")
            return fallback_advice()
        except (ValueError, TypeError) as e:
            logger.error(f"Malformed advice payload: {e}")
            return fallback_advice()
        except Exception as e:
            logger.error(f"Error fetching advice: {e}")
            return fallback_advice()

        logger.info(f"Advice received ({result.category})")
        return result
