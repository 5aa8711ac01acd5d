#!/usr/bin/env python3
"""
CLI Interface - Simple command line interface for the gear calculator
"""

import logging
from typing import Callable, Optional

from .config import Config, load_config, create_sample_config
from .core.template_engine import create_default_templates
from .core.core_app import VeloRatioApp
from .analysis.drivetrain import SHIFT_DOWN, SHIFT_UP
from .analysis.gear_classifier import is_warning

logger = logging.getLogger(__name__)

class CLI:
    """Command line interface"""

    def __init__(self, config_file: str = "config.yaml", log_level: Optional[str] = None,
                 input_func: Callable[[str], str] = input):
        self.config_file = config_file
        self.log_level = log_level
        self.input = input_func
        self.app: Optional[VeloRatioApp] = None

    async def run(self):
        """Main CLI loop"""
        print("VeloRatio - Power & Gear Calculator")
        print("=" * 40)

        try:
            config = self._setup_config()

            # Setup logging
            logging.basicConfig(
                level=getattr(logging, (self.log_level or config.log_level).upper(), logging.INFO),
                format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )

            self.app = VeloRatioApp(config)

            await self.app.initialize()
            await self._main_loop()

        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
        except Exception as e:
            print(f"Error: {e}")
            logger.error(f"CLI error: {e}", exc_info=True)
        finally:
            if self.app:
                await self.app.cleanup()

    def _setup_config(self) -> Config:
        """Setup configuration and default files"""
        create_sample_config(self.config_file)
        config = load_config(self.config_file)

        if config.templates_dir:
            create_default_templates(config.templates_dir)

        if not config.openrouter_api_key or config.openrouter_api_key == "your_openrouter_api_key_here":
            print(f"No OpenRouter API key in {self.config_file}: coaching advice will fall back to a generic tip")
            print("Get your key from: https://openrouter.ai")

        return config

    async def _main_loop(self):
        """Main interaction loop"""
        while True:
            self.show_status()
            print("-" * 60)
            print("1. Shift up (harder)      2. Shift down (easier)")
            print("3. Toggle chainring       4. Set cadence")
            print("5. Set gradient           6. Set rider weight")
            print("7. Set wind               8. Gear chart")
            print("9. Get coaching advice    0. Exit")
            print("-" * 60)

            choice = self.input("Enter your choice (0-9): ").strip()

            try:
                if choice == "1":
                    self.app.shift_rear(SHIFT_UP)
                elif choice == "2":
                    self.app.shift_rear(SHIFT_DOWN)
                elif choice == "3":
                    self.app.toggle_chainring()
                elif choice == "4":
                    self.app.set_cadence(int(self.input("Cadence (rpm): ")))
                elif choice == "5":
                    self.app.set_gradient(float(self.input("Gradient (%): ")))
                elif choice == "6":
                    self.app.set_rider_mass(float(self.input("Rider weight (kg): ")))
                elif choice == "7":
                    self.app.set_wind(float(self.input("Wind (km/h, +head / -tail): ")))
                elif choice == "8":
                    self.show_gear_chart()
                elif choice == "9":
                    await self._get_advice()
                elif choice == "0":
                    break
                else:
                    print("Invalid choice. Please try again.")

            except ValueError as e:
                print(f"Invalid value: {e}")

    def show_status(self):
        """Print the current gear and telemetry"""
        t = self.app.telemetry()
        rider = self.app.rider
        label = f"!! {t.gear_label} !!" if is_warning(t.gear_label) else t.gear_label

        print(f"\n{'='*60}")
        print(f"GEAR {t.front_teeth}x{t.rear_teeth}  ({self.app.drivetrain.describe()})  {label}")
        print(f"{'='*60}")
        print(f"Speed:  {t.speed_kmh:.1f} km/h ({t.speed_mph:.1f} mph)   Cadence: {rider.cadence_rpm} rpm")
        print(f"Ratio:  {t.gear_ratio:.2f} ({t.gear_inches:.1f} gear inches)")
        print(f"Power:  {round(t.power_watts)} W   System weight: {t.total_mass_kg:g} kg")
        print(f"Slope:  {rider.gradient_percent:g}%   Wind: {rider.wind_kmh:+g} km/h")

        advice = self.app.current_advice
        if advice:
            print(f"Coach [{advice.category}]: {advice.advice}")

    def show_gear_chart(self):
        """Print speed for each cog on the current chainring"""
        print(f"\nSpeed at {self.app.rider.cadence_rpm} rpm on the {self.app.front_teeth}T ring:")
        for row in self.app.gear_chart():
            marker = "<" if row["teeth"] == self.app.rear_teeth else " "
            bar = "#" * int(row["speed_kmh"])
            print(f"  {row['name']:>4} {row['speed_kmh']:5.1f} km/h {bar} {marker}")

    async def _get_advice(self):
        print("\nAsking the coach...")
        result = await self.app.request_advice()
        print(f"\n[{result.category}] {result.advice}")
