"""
Command-line entry point: print the current tide status for a shell prompt.
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import Settings
from .exceptions import ConfigError
from .pipeline import current_status


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsu",
        description="Print the current tide height and trend for a NOAA station.",
    )
    parser.add_argument(
        "--station",
        help="NOAA station id (overrides NOAA_GOV_STATION_ID)",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="ignore cached predictions for this run",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log pipeline activity to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(level: Optional[str]) -> None:
    """Send tsu logs to stderr. Without a level, logging stays silent."""
    if not level:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    package_logger = logging.getLogger("tsu")
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env(station_id=args.station)
    except ConfigError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1

    configure_logging("DEBUG" if args.verbose else settings.log_level)

    sys.stdout.write(current_status(settings, refresh=args.refresh))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
