#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Session state machine for WorkWatch.

SessionState is the single entry point for every mutation of the work
session. Each operation is checked against ALLOWED_MODES before it touches
any state, so a rejected operation raises and leaves the session exactly
as it was:

    MENU --clock_in--> WORKING --open_logs--> LOGS
    WORKING/LOGS --clock_out--> MENU
    LOGS --close_logs--> WORKING

Invariant: ``clock is None`` if and only if ``mode == AppMode.MENU``.

Logs are cleared on clock-out, so every clock-in starts an empty session.
"""

import time
from datetime import datetime
from typing import Callable, Dict, FrozenSet, Optional

from workwatch.clock import Clock, local_now
from workwatch.config import AppConfig
from workwatch.debug_logger import get_logger
from workwatch.errors import InvalidTransition, NoSelection, WorkWatchError
from workwatch.log_store import LogStore
from workwatch.models import (
    AppMode,
    LogEntry,
    NotificationPayload,
    NotifyEvent,
    Operation,
    SessionSnapshot,
)
from workwatch.notifier import UrllibTransport, WebhookNotifier

_CLOCKED_IN = frozenset({AppMode.WORKING, AppMode.LOGS})

ALLOWED_MODES: Dict[Operation, FrozenSet[AppMode]] = {
    Operation.CLOCK_IN: frozenset({AppMode.MENU}),
    Operation.OPEN_LOGS: frozenset({AppMode.WORKING}),
    Operation.CLOSE_LOGS: frozenset({AppMode.LOGS}),
    Operation.CLOCK_OUT: _CLOCKED_IN,
    Operation.ADD_LOG: _CLOCKED_IN,
    Operation.EDIT_LOG: frozenset({AppMode.LOGS}),
    Operation.DELETE_LOG: frozenset({AppMode.LOGS}),
    Operation.SELECT_NEXT: frozenset({AppMode.LOGS}),
    Operation.SELECT_PREV: frozenset({AppMode.LOGS}),
}


def is_allowed(operation: Operation, mode: AppMode) -> bool:
    """Whether an operation's mode precondition holds in the given mode."""
    return mode in ALLOWED_MODES[operation]


class SessionState:
    """
    Holds the current mode, the active clock and the session's logs.

    Args:
        config: Immutable app configuration
        notifier: Webhook notifier; defaults to one built from config
        timer: Monotonic time source for the clock
        wall_clock: Aware local time source for timestamps
    """

    def __init__(
        self,
        config: AppConfig,
        notifier: Optional[WebhookNotifier] = None,
        timer: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.config = config
        if notifier is None:
            notifier = WebhookNotifier(
                config.webhook_url,
                transport=UrllibTransport(timeout=config.webhook_timeout),
                bot_name=config.bot_name,
            )
        self.notifier = notifier
        self._timer = timer
        self._wall_clock = wall_clock
        self._mode = AppMode.MENU
        self._clock: Optional[Clock] = None
        self.logs = LogStore(wall_clock=wall_clock)

    @property
    def mode(self) -> AppMode:
        return self._mode

    @property
    def clock(self) -> Optional[Clock]:
        return self._clock

    def is_allowed(self, operation: Operation) -> bool:
        return is_allowed(operation, self._mode)

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _require(self, operation: Operation) -> None:
        if not self.is_allowed(operation):
            self._reject(InvalidTransition(operation.value, self._mode), operation)

    def _reject(self, error: WorkWatchError, operation: Operation) -> None:
        get_logger().operation_rejected(
            operation=operation.value,
            mode=self._mode.value,
            reason=type(error).__name__,
        )
        raise error

    def _set_mode(self, mode: AppMode) -> None:
        get_logger().mode_change(self._mode.value, mode.value)
        self._mode = mode

    # -------------------------------------------------------------------------
    # Mode transitions
    # -------------------------------------------------------------------------

    def clock_in(self) -> NotificationPayload:
        """Start a work session and send the clock-in notification.

        Raises:
            InvalidTransition: If not in MENU
        """
        self._require(Operation.CLOCK_IN)
        self._clock = Clock.start(timer=self._timer, wall_clock=self._wall_clock)
        self._set_mode(AppMode.WORKING)
        get_logger().clock_in(self.config.username)

        payload = NotificationPayload(
            username=self.config.username,
            event=NotifyEvent.CLOCK_IN,
            timestamp=self._clock.started_wall,
        )
        self.notifier.notify(payload)
        return payload

    def open_logs(self) -> None:
        self._require(Operation.OPEN_LOGS)
        self._set_mode(AppMode.LOGS)

    def close_logs(self) -> None:
        self._require(Operation.CLOSE_LOGS)
        self._set_mode(AppMode.WORKING)

    def clock_out(self) -> NotificationPayload:
        """End the work session and send the clock-out notification.

        The notification carries the elapsed time and every log written
        during the session. The clock is discarded and the logs cleared
        before the notifier sees the payload.

        Raises:
            InvalidTransition: If not clocked in
        """
        self._require(Operation.CLOCK_OUT)
        elapsed = self._clock.elapsed()
        payload = NotificationPayload(
            username=self.config.username,
            event=NotifyEvent.CLOCK_OUT,
            timestamp=self._wall_clock(),
            elapsed=elapsed,
            logs=self.logs.entries(),
        )
        self._clock = None
        self.logs.clear()
        self._set_mode(AppMode.MENU)
        get_logger().clock_out(
            self.config.username, elapsed.total_seconds(), len(payload.logs)
        )

        self.notifier.notify(payload)
        return payload

    # -------------------------------------------------------------------------
    # Log operations
    # -------------------------------------------------------------------------

    def add_log(self, text: str) -> LogEntry:
        """Append a log entry and select it.

        Raises:
            InvalidTransition: If not clocked in
            EmptyInput: If text is blank
        """
        self._require(Operation.ADD_LOG)
        try:
            entry = self.logs.add(text)
        except WorkWatchError as e:
            self._reject(e, Operation.ADD_LOG)
        get_logger().log_added(entry.id, len(entry.text))
        return entry

    def edit_log(self, text: str) -> LogEntry:
        """Replace the text of the selected entry.

        Raises:
            InvalidTransition: If not in LOGS
            NoSelection: If no entry is selected
            EmptyInput: If text is blank
        """
        self._require(Operation.EDIT_LOG)
        try:
            entry = self.logs.edit_selected(text)
        except WorkWatchError as e:
            self._reject(e, Operation.EDIT_LOG)
        get_logger().log_edited(entry.id, len(entry.text))
        return entry

    def delete_log(self) -> LogEntry:
        """Delete the selected entry.

        Raises:
            InvalidTransition: If not in LOGS
            NoSelection: If no entry is selected
        """
        self._require(Operation.DELETE_LOG)
        try:
            entry = self.logs.delete_selected()
        except WorkWatchError as e:
            self._reject(e, Operation.DELETE_LOG)
        get_logger().log_deleted(entry.id, len(self.logs))
        return entry

    def select_next(self) -> int:
        self._require(Operation.SELECT_NEXT)
        if not len(self.logs):
            self._reject(NoSelection(Operation.SELECT_NEXT.value), Operation.SELECT_NEXT)
        return self.logs.select_next()

    def select_prev(self) -> int:
        self._require(Operation.SELECT_PREV)
        if not len(self.logs):
            self._reject(NoSelection(Operation.SELECT_PREV.value), Operation.SELECT_PREV)
        return self.logs.select_prev()

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    def snapshot(self) -> SessionSnapshot:
        """Immutable view of the session for rendering."""
        clock = self._clock
        return SessionSnapshot(
            username=self.config.username,
            mode=self._mode,
            elapsed=clock.elapsed() if clock else None,
            started_wall=clock.started_wall if clock else None,
            logs=self.logs.entries(),
            selected_index=self.logs.selected_index,
            webhook_enabled=self.notifier.enabled,
        )
