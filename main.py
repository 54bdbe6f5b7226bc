"""
Command-line entry point for the WSF client.

Sets up logging, loads the configuration, fetches the current vessel
locations once and prints them.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from version import __app_display_name__, get_version_string
from wsf.api.vessels_api_manager import VesselAPIException, WSFClientFactory
from wsf.managers.config_manager import ConfigData, ConfigManager, ConfigurationError
from wsf.models.legacy_date import MalformedTimestamp
from wsf.models.vessel_data import VesselLocation

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_API_ERROR = 2


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    # aiohttp is noisy at debug level
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wsf-vessels",
        description=f"{__app_display_name__}: print current vessel locations",
    )
    parser.add_argument("--config", "-C", metavar="PATH", help="Path to config.json")
    parser.add_argument(
        "--access-code", "-a", metavar="CODE", help="WSF API access code"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the records as a JSON array"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=get_version_string())
    return parser


def load_configuration(config_path: Optional[str], access_code: Optional[str]) -> ConfigData:
    """Load config from file/environment; a command-line access code wins."""
    return ConfigManager(config_path).load_config(access_code=access_code)


async def fetch_locations(config: ConfigData) -> List[VesselLocation]:
    async with WSFClientFactory.create_client(config) as client:
        return await client.fetch_vessel_locations()


def format_locations(locations: List[VesselLocation], as_json: bool) -> str:
    if as_json:
        return json.dumps([location.to_dict() for location in locations], indent=2)
    ordered = sorted(locations, key=lambda location: location.sort_seq)
    return "\n".join(location.summary() for location in ordered)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line; returns the process exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_configuration(args.config, args.access_code)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        locations = asyncio.run(fetch_locations(config))
    except (VesselAPIException, MalformedTimestamp) as e:
        logger.error(f"Failed to fetch vessel locations: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_API_ERROR

    print(format_locations(locations, args.json))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
