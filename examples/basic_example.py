#!/usr/bin/env python3
"""
Example script demonstrating the usage of micro_args.

This script declares a small configuration object on top of an ArgsParser
and prints the resolved values. Try:

    python basic_example.py --name demo -t 30.5 --fast
    DEPLOY_KEY=abc python basic_example.py --name demo --verbose
    python basic_example.py --help
"""

import enum
import sys

from micro_args import ArgsConfig, ArgsParser, ArgsParserError


class Speed(enum.Enum):
    FAST = "fast"
    SLOW = "slow"


class SimulationConfig(ArgsConfig):
    """Configuration for simulation parameters."""

    def __init__(self, parser: ArgsParser) -> None:
        self.parser = parser
        self.help = parser.flag("-h", "--help", hidden=True)
        self.name = parser.option("-n", "--name", help="Name of the simulation")
        self.temperature = parser.option(
            "-t", "--temperature", help="Temperature in Celsius", convert=float
        ).default(lambda: 27.0)
        self.key = parser.option("--key", env="DEPLOY_KEY", help="Key to sign with").optional()
        self.speed = parser.enumerated_option(
            {"--fast": Speed.FAST, "--slow": Speed.SLOW}, help="Simulation speed"
        ).default(lambda: Speed.SLOW)
        self.verbose = parser.flag("-v", "--verbose", help="Enable verbose output")


def main() -> None:
    """Main function demonstrating the parser."""
    config = SimulationConfig(ArgsParser(sys.argv[1:], name="basic_example.py"))

    if config.help:
        print(config.parser.help())
        sys.exit(0)

    try:
        config.parser.validate()
        print("Parsed Configuration:")
        print("-" * 30)
        print(f"Simulation Name: {config.name}")
        print(f"Temperature: {config.temperature}°C")
        print(f"Key: {config.key}")
        print(f"Speed: {config.speed.value}")
        print(f"Verbose: {config.verbose}")
    except ArgsParserError as e:
        print(e)
        print(config.parser.help())
        sys.exit(1)


if __name__ == "__main__":
    main()
