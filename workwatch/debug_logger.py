#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Structured debug logger for WorkWatch.

Writes one JSON object per line to ``<state_dir>/debug.log``. Every line
carries ``event``, ``level``, ``timestamp`` (UTC ISO-8601), ``pid`` and
``session_id`` plus event-specific fields, e.g.:

    {"event": "clock_out", "level": "info", "timestamp": "...",
     "pid": 4242, "session_id": "ww-1a2b3c4d", "elapsed_s": 3600.0,
     "log_count": 3}

Verbosity is controlled by WORKWATCH_DEBUG:
    0 = off, 1 = info (default), 2 = debug

Writing to the log must never break the app, so I/O errors are dropped.
"""

import json
import os
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from workwatch.paths import PathResolver

LEVEL_OFF = 0
LEVEL_INFO = 1
LEVEL_DEBUG = 2

_LEVEL_NAMES = {"info": LEVEL_INFO, "warning": LEVEL_INFO, "error": LEVEL_INFO, "debug": LEVEL_DEBUG}


def _debug_level() -> int:
    raw = os.environ.get("WORKWATCH_DEBUG", "1")
    try:
        return int(raw)
    except ValueError:
        return LEVEL_INFO


class DebugLogger:
    """Appends structured events to the debug log."""

    def __init__(self, log_path: Optional[Path] = None, level: Optional[int] = None) -> None:
        self.log_path = log_path or PathResolver.debug_log()
        self.level = _debug_level() if level is None else level
        self.session_id = f"ww-{uuid.uuid4().hex[:8]}"
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.level > LEVEL_OFF

    def log(self, event: str, level: str = "info", **fields: Any) -> None:
        """Write a single event line if the level is enabled."""
        if _LEVEL_NAMES.get(level, LEVEL_INFO) > self.level:
            return
        record = {
            "event": event,
            "level": level,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "pid": os.getpid(),
            "session_id": self.session_id,
            **fields,
        }
        line = json.dumps(record, default=str)
        with self._lock:
            try:
                self.log_path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.log_path, "a") as f:
                    f.write(line + "\n")
            except OSError:
                pass

    # -------------------------------------------------------------------------
    # Domain events
    # -------------------------------------------------------------------------

    def app_start(self, username: str, webhook_enabled: bool) -> None:
        self.log("app_start", username=username, webhook_enabled=webhook_enabled)

    def clock_in(self, username: str) -> None:
        self.log("clock_in", username=username)

    def clock_out(self, username: str, elapsed_s: float, log_count: int) -> None:
        self.log(
            "clock_out",
            username=username,
            elapsed_s=round(elapsed_s, 3),
            log_count=log_count,
        )

    def mode_change(self, from_mode: str, to_mode: str) -> None:
        self.log("mode_change", level="debug", from_mode=from_mode, to_mode=to_mode)

    def log_added(self, log_id: str, text_length: int) -> None:
        self.log("log_added", log_id=log_id, text_length=text_length)

    def log_edited(self, log_id: str, text_length: int) -> None:
        self.log("log_edited", log_id=log_id, text_length=text_length)

    def log_deleted(self, log_id: str, remaining: int) -> None:
        self.log("log_deleted", log_id=log_id, remaining=remaining)

    def operation_rejected(self, operation: str, mode: str, reason: str) -> None:
        self.log(
            "operation_rejected",
            level="warning",
            operation=operation,
            mode=mode,
            reason=reason,
        )

    def webhook_sent(self, notify_event: str, total_ms: float) -> None:
        self.log("webhook_sent", notify_event=notify_event, total_ms=round(total_ms, 2))

    def webhook_failed(self, notify_event: str, err: str) -> None:
        self.log("webhook_failed", level="warning", notify_event=notify_event, err=err)

    def config_warning(self, key: str, message: str) -> None:
        self.log("config_warning", level="warning", key=key, message=message)

    def error(self, op: str, err: str) -> None:
        self.log("error", level="error", op=op, err=err)


_logger: Optional[DebugLogger] = None
_logger_lock = threading.Lock()


def get_logger() -> DebugLogger:
    """Return the process-wide debug logger, creating it on first use."""
    global _logger
    with _logger_lock:
        if _logger is None:
            _logger = DebugLogger()
        return _logger


def reset_logger() -> None:
    """Drop the cached logger so the next get_logger() re-reads the environment."""
    global _logger
    with _logger_lock:
        _logger = None
