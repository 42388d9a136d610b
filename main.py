#!/usr/bin/env python3
"""
Mini METARs - Main Entry Point
Compact live METAR and VATSIM ATIS display for a handful of airports
"""

import argparse
import sys

from backend import AppState
from backend.config.constants import APP_VERSION, UNITS_HPA, UNITS_IN_HG
from common import logger as debug_logger
from ui import MiniMetarsApp


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Live METAR wind/altimeter and VATSIM ATIS letters")
    parser.add_argument("--profile",
                        help="Profile JSON to load on startup (default: most recent profile, if enabled)")
    parser.add_argument("--stations", nargs="+",
                        help="Station identifiers to add on startup (e.g. KSFO OAK)")
    parser.add_argument("--units", choices=[UNITS_IN_HG, UNITS_HPA], default=None,
                        help="Altimeter units (default: inHg, or the profile's setting)")
    parser.add_argument("--no-update-check", action="store_true",
                        help="Don't check GitHub for a newer release on startup")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    debug_logger.info(f"Application starting (version {APP_VERSION})")

    # Try to set terminal title before Textual takes over
    try:
        sys.stderr.write("\033]0;Mini METARs\007")
        sys.stderr.flush()
    except (OSError, AttributeError):
        pass  # Terminal may not support escape sequences

    state = AppState()
    app = MiniMetarsApp(state, args)
    app.run()
    debug_logger.info("Application exiting")


if __name__ == "__main__":
    main()
