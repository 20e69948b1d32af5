# SPDX-License-Identifier: MIT
"""
Error types for WorkWatch.

Every error raised by a session operation is recoverable: the operation is
rejected before any state changes, and the UI shows the message as a
transient warning. Only ConfigError is fatal, and only at startup.
"""

from typing import Any


class WorkWatchError(Exception):
    """Base class for all WorkWatch errors."""


class InvalidTransition(WorkWatchError):
    """Operation attempted in a mode that does not allow it."""

    def __init__(self, operation: str, mode: Any) -> None:
        self.operation = operation
        self.mode = mode
        mode_name = getattr(mode, "label", str(mode))
        super().__init__(f"Cannot {operation.replace('_', ' ')} while in {mode_name}")


class EmptyInput(WorkWatchError):
    """Log text was blank after stripping whitespace."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__("Log text cannot be empty")


class NoSelection(WorkWatchError):
    """Operation needs a selected log entry but none is selected."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__("No log selected")


class NotifyFailure(WorkWatchError):
    """Webhook transport failed to deliver a notification."""


class ConfigError(WorkWatchError):
    """Required configuration is missing or invalid."""
