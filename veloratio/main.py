#!/usr/bin/env python3
"""
VeloRatio - Bicycle drivetrain speed, power and coaching advice calculator
"""

import asyncio
import argparse

from .cli_interface import CLI

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bicycle gear, speed and power calculator")
    parser.add_argument("--config", default="config.yaml", help="Path to the YAML config file")
    parser.add_argument("--log-level", default=None, help="Override the configured log level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)

def main(argv=None):
    """Console script entry point"""
    args = parse_args(argv)
    cli = CLI(config_file=args.config, log_level=args.log_level)
    try:
        asyncio.run(cli.run())
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")

if __name__ == "__main__":
    main()
