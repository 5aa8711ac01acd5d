#!/usr/bin/env python3
"""
LLM Client - Handles all LLM interactions
"""

import os
import logging
from typing import Any, Optional

from pydantic_ai import Agent

from ..config import Config
from ..core.template_engine import DEFAULT_TEMPLATES
from ..data.models import AdviceResult

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = DEFAULT_TEMPLATES["base/system_prompts/coach.txt"]

class LLMClient:
    """Structured coaching advice from an OpenRouter model through Pydantic AI"""

    def __init__(self, config: Config, model: Optional[Any] = None, system_prompt: str = SYSTEM_PROMPT):
        self.config = config
        self.system_prompt = system_prompt
        self.agent: Optional[Agent] = None
        # Tests pass a pydantic-ai test model instead of a model name
        self._model = model

        self._setup_openrouter_env()

    def _setup_openrouter_env(self):
        """Expose the configured OpenRouter key to the provider"""
        if self.config.openrouter_api_key:
            os.environ['OPENROUTER_API_KEY'] = self.config.openrouter_api_key

    @property
    def model_name(self) -> str:
        return f"openrouter:{self.config.openrouter_model}"

    async def initialize(self):
        """Initialize the advice agent"""
        logger.info("Initializing LLM client...")

        self.agent = Agent(
            model=self._model or self.model_name,
            output_type=AdviceResult,
            system_prompt=self.system_prompt,
            defer_model_check=True,
        )

        logger.info(f"LLM client initialized ({self._model or self.model_name})")

    async def cleanup(self):
        """Release the agent"""
        self.agent = None

    async def generate_advice(self, prompt: str) -> AdviceResult:
        """Ask the model for advice; errors propagate to the caller"""
        if not self.agent:
            raise RuntimeError("LLM client not initialized")

        result = await self.agent.run(prompt)

        logger.debug(f"LLM advice received: {result.output!r}")
        return result.output
