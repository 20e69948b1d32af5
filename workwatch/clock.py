# SPDX-License-Identifier: MIT
"""Elapsed-time clock for an active work session."""

import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional


def local_now() -> datetime:
    """Current local time as a timezone-aware datetime."""
    return datetime.now().astimezone()


@dataclass(frozen=True)
class Clock:
    """Start instant of a work session.

    Elapsed time is recomputed from the monotonic start on every read, so
    the displayed timer never drifts the way a tick counter would.
    """

    started_at: float
    started_wall: datetime
    timer: Callable[[], float] = time.monotonic

    @classmethod
    def start(
        cls,
        timer: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], datetime] = local_now,
    ) -> "Clock":
        return cls(started_at=timer(), started_wall=wall_clock(), timer=timer)

    def elapsed(self, now: Optional[float] = None) -> timedelta:
        if now is None:
            now = self.timer()
        return timedelta(seconds=max(0.0, now - self.started_at))
