#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Data models for WorkWatch.

Contains the enums, dataclasses and constants shared by the session state
machine, the log store, the webhook notifier and the TUI.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Tuple


# =============================================================================
# Constants
# =============================================================================

DEFAULT_BOT_NAME = "WorkWatch"
DEFAULT_WEBHOOK_TIMEOUT = 10.0
EMBED_COLOR = 0x00FF88
EMBED_DESCRIPTION_LIMIT = 4096  # Discord embed description limit


# =============================================================================
# Enums
# =============================================================================


class AppMode(Enum):
    """Top-level UI mode. Exactly one is active at a time."""

    MENU = "menu"
    WORKING = "working"
    LOGS = "logs"

    @property
    def label(self) -> str:
        return self.value.title()


class NotifyEvent(Enum):
    """Kinds of webhook notifications."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"


class Operation(Enum):
    """Mode-transition operations exposed by the session state machine."""

    CLOCK_IN = "clock_in"
    OPEN_LOGS = "open_logs"
    CLOSE_LOGS = "close_logs"
    CLOCK_OUT = "clock_out"
    ADD_LOG = "add_log"
    EDIT_LOG = "edit_log"
    DELETE_LOG = "delete_log"
    SELECT_NEXT = "select_next"
    SELECT_PREV = "select_prev"


# =============================================================================
# Dataclasses
# =============================================================================


def new_log_id() -> str:
    """Generate a unique log entry identifier: "log-" plus a uuid4 in hex."""
    return f"log-{uuid.uuid4().hex}"


@dataclass(frozen=True)
class LogEntry:
    """A timestamped free-text note recorded during a work session.

    Attributes:
        id: Stable identifier, unchanged by edits
        timestamp: Local wall-clock time the entry was created
        text: Note text, stripped and non-empty
    """

    id: str
    timestamp: datetime
    text: str


@dataclass(frozen=True)
class NotificationPayload:
    """Point-in-time snapshot handed to the webhook notifier.

    ``elapsed`` and ``logs`` are only set for clock-out notifications.
    """

    username: str
    event: NotifyEvent
    timestamp: datetime
    elapsed: Optional[timedelta] = None
    logs: Optional[Tuple[LogEntry, ...]] = None


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the session used by the renderer."""

    username: str
    mode: AppMode
    elapsed: Optional[timedelta]
    started_wall: Optional[datetime]
    logs: Tuple[LogEntry, ...]
    selected_index: Optional[int]
    webhook_enabled: bool

    @property
    def is_clocked_in(self) -> bool:
        return self.mode != AppMode.MENU
