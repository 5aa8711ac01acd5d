#!/usr/bin/env python3
"""
Configuration management
"""

import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field, fields
from typing import List

from .analysis.power import PhysicsConstants
from .data.models import DrivetrainConfig, InputRanges, ValueRange

@dataclass
class Config:
    """Application configuration"""
    # LLM settings
    openrouter_api_key: str = ""
    openrouter_model: str = "deepseek/deepseek-chat-v3.1"
    advice_timeout: float = 30.0  # seconds, 0 disables

    # Drivetrain
    chainrings: List[int] = field(default_factory=lambda: [32, 48])
    cassette: List[int] = field(default_factory=lambda: [32, 28, 25, 23, 21, 19, 17, 15, 13, 12, 11])
    wheel_circumference_mm: float = 2105
    bike_mass_kg: float = 7.0

    # Physics
    gravity: float = 9.81
    air_density: float = 1.225
    crr: float = 0.004
    cda: float = 0.32
    drivetrain_efficiency: float = 0.96

    # Input ranges
    min_cadence: int = 40
    max_cadence: int = 130
    min_rider_mass_kg: float = 40
    max_rider_mass_kg: float = 120
    min_gradient_percent: float = -5
    max_gradient_percent: float = 20
    min_wind_kmh: float = -30
    max_wind_kmh: float = 30
    steep_gradient_percent: float = 5.0

    # Application settings
    templates_dir: str = "templates"

    # Logging
    log_level: str = "INFO"

    def drivetrain(self) -> DrivetrainConfig:
        return DrivetrainConfig(
            chainrings=tuple(self.chainrings),
            cassette=tuple(self.cassette),
            wheel_circumference_mm=self.wheel_circumference_mm,
        )

    def physics(self) -> PhysicsConstants:
        return PhysicsConstants(
            gravity=self.gravity,
            air_density=self.air_density,
            crr=self.crr,
            cda=self.cda,
            drivetrain_efficiency=self.drivetrain_efficiency,
        )

    def input_ranges(self) -> InputRanges:
        return InputRanges(
            cadence_rpm=ValueRange(self.min_cadence, self.max_cadence),
            rider_mass_kg=ValueRange(self.min_rider_mass_kg, self.max_rider_mass_kg),
            gradient_percent=ValueRange(self.min_gradient_percent, self.max_gradient_percent),
            wind_kmh=ValueRange(self.min_wind_kmh, self.max_wind_kmh),
        )

def load_config(config_file: str = "config.yaml") -> Config:
    """Load configuration from file or environment variables"""
    config_path = Path(config_file)

    # Load from file if exists
    if config_path.exists():
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f) or {}

        if not isinstance(config_data, dict):
            raise ValueError(f"{config_file} must contain a mapping of settings")

        known = {f.name for f in fields(Config)}
        unknown = sorted(set(config_data) - known)
        if unknown:
            raise ValueError(f"Unknown settings in {config_file}: {', '.join(unknown)}")
        return Config(**config_data)

    # Load from environment variables
    return Config(
        openrouter_api_key=os.getenv("OPENROUTER_API_KEY", ""),
        openrouter_model=os.getenv("OPENROUTER_MODEL", "deepseek/deepseek-chat-v3.1"),
        advice_timeout=float(os.getenv("ADVICE_TIMEOUT", "30")),
        templates_dir=os.getenv("TEMPLATES_DIR", "templates"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )

def create_sample_config(config_file: str = "config.yaml") -> None:
    """Create a sample configuration file"""
    config_path = Path(config_file)
    if config_path.exists():
        return

    sample_config = {
        "openrouter_api_key": "your_openrouter_api_key_here",
        "openrouter_model": "deepseek/deepseek-chat-v3.1",
        "advice_timeout": 30,
        "chainrings": [32, 48],
        "cassette": [32, 28, 25, 23, 21, 19, 17, 15, 13, 12, 11],
        "wheel_circumference_mm": 2105,
        "bike_mass_kg": 7.0,
        "templates_dir": "templates",
        "log_level": "INFO"
    }

    with open(config_path, 'w') as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    print(f"Created sample config file: {config_file}")
    print("Please edit with your OpenRouter API key to enable coaching advice.")
