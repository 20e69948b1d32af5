# SPDX-License-Identifier: MIT
"""Centralized path resolution for WorkWatch.

All path resolution should go through this module to ensure consistency.
"""
import os
from pathlib import Path
from typing import Optional


class PathResolver:
    """Resolves paths for WorkWatch components."""

    @staticmethod
    def state_dir() -> Path:
        """Get the state directory for the debug log.

        Resolution order:
        1. WORKWATCH_STATE env var
        2. XDG_STATE_HOME/workwatch
        3. ~/.local/state/workwatch
        """
        state = os.environ.get("WORKWATCH_STATE")
        if state:
            return Path(state)
        xdg_state = os.environ.get("XDG_STATE_HOME")
        if xdg_state:
            return Path(xdg_state) / "workwatch"
        return Path.home() / ".local" / "state" / "workwatch"

    @staticmethod
    def debug_log() -> Path:
        return PathResolver.state_dir() / "debug.log"

    @staticmethod
    def env_file(explicit: Optional[Path] = None) -> Path:
        """Get the .env file to load configuration from.

        Resolution order:
        1. explicit argument (e.g. --env-file)
        2. WORKWATCH_ENV_FILE env var
        3. ./.env in the current working directory
        """
        if explicit:
            return Path(explicit)
        custom = os.environ.get("WORKWATCH_ENV_FILE")
        if custom:
            return Path(custom)
        return Path.cwd() / ".env"
