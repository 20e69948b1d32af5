#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Command-line entry point for WorkWatch.

Usage:
    workwatch                      # Launch the TUI
    workwatch --env-file work.env  # Load settings from a specific .env
    workwatch --no-webhook         # Run without webhook notifications
"""

import argparse
import sys
from pathlib import Path

from workwatch._version import __version__
from workwatch.config import load_config
from workwatch.errors import ConfigError

# Seconds to wait on exit for a pending clock-out notification
SHUTDOWN_FLUSH_TIMEOUT = 3.0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workwatch",
        description="WorkWatch - clock in, keep activity logs, clock out",
    )
    parser.add_argument(
        "--version", action="version", version=f"workwatch {__version__}"
    )
    parser.add_argument(
        "--env-file", type=Path, default=None, help="Path to a .env file with settings"
    )
    parser.add_argument(
        "--no-webhook", action="store_true", help="Disable webhook notifications"
    )
    return parser


def main(argv=None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(env_file=args.env_file, disable_webhook=args.no_webhook)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    from workwatch.tui.app import WorkWatchApp

    app = WorkWatchApp(config)
    try:
        app.run()
    finally:
        app.session.notifier.close(timeout=SHUTDOWN_FLUSH_TIMEOUT)


if __name__ == "__main__":
    main()
