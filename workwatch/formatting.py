#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Shared formatting utilities.

Consolidates duration and timestamp formatting used by both the webhook
notifier (embed text) and the TUI (live timer, log list).
"""

from datetime import datetime, timedelta
from typing import Tuple

# Log timestamps read the same in the TUI list and in the webhook embed
LOG_TIME_FORMAT = "%H:%M:%S"


def _split(td: timedelta) -> Tuple[int, int, int, int]:
    """Split a duration into (days, hours, minutes, seconds), whole seconds only."""
    total = max(0, int(td.total_seconds()))
    return total // 86_400, (total // 3_600) % 24, (total // 60) % 60, total % 60


def format_hms(td: timedelta) -> str:
    """Format a duration as HH:MM:SS. Hours keep counting past 24."""
    total = max(0, int(td.total_seconds()))
    return f"{total // 3_600:02d}:{(total // 60) % 60:02d}:{total % 60:02d}"


def format_compact(td: timedelta) -> str:
    """Format a duration for the live timer, showing only the units in use.

    Examples: "07", "03:07", "01:03:07", "2:01:03:07"
    """
    days, hours, minutes, seconds = _split(td)
    if days > 0:
        return f"{days}:{hours:02d}:{minutes:02d}:{seconds:02d}"
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if minutes > 0:
        return f"{minutes:02d}:{seconds:02d}"
    return f"{seconds:02d}"


def format_verbose(td: timedelta) -> str:
    """Format a duration in words, e.g. "1 Hours, 3 Minutes, 7 Seconds"."""
    days, hours, minutes, seconds = _split(td)
    if days > 0:
        return f"{days} Days, {hours} Hours, {minutes} Minutes, {seconds} Seconds"
    if hours > 0:
        return f"{hours} Hours, {minutes} Minutes, {seconds} Seconds"
    if minutes > 0:
        return f"{minutes} Minutes, {seconds} Seconds"
    return f"{seconds} Seconds"


def format_date(dt: datetime) -> str:
    return dt.strftime("%m/%d/%Y")


def format_time_with_offset(dt: datetime) -> str:
    """Format as "14:03:22 (UTC+0200)"."""
    return dt.strftime("%H:%M:%S (UTC%z)")


def format_log_time(dt: datetime) -> str:
    """Format a log entry's timestamp as HH:MM:SS in the entry's own offset."""
    return dt.strftime(LOG_TIME_FORMAT)
