"""
Pytest configuration and fixtures for WorkWatch tests.
"""

import sys
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Ensure project root is in sys.path for 'workwatch' imports
# This must happen before any imports from workwatch
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import pytest

from workwatch.config import AppConfig
from workwatch.errors import NotifyFailure
from workwatch.notifier import WebhookNotifier


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "tui: marks TUI tests")


@pytest.fixture
def temp_state_dir(tmp_path: Path, monkeypatch) -> Path:
    """Create and return a temporary state directory.

    Sets WORKWATCH_STATE env var and resets the debug logger.
    """
    state_dir = tmp_path / ".local" / "state" / "workwatch"
    state_dir.mkdir(parents=True)
    monkeypatch.setenv("WORKWATCH_STATE", str(state_dir))

    # Reset the debug logger so it picks up the new path
    from workwatch.debug_logger import reset_logger
    reset_logger()

    return state_dir


@pytest.fixture(autouse=True)
def isolate_state_dir(temp_state_dir: Path):
    """Autouse fixture that keeps every test's debug.log out of ~/.local/state."""
    yield temp_state_dir

    from workwatch.debug_logger import reset_logger
    reset_logger()


class RecordingTransport:
    """Transport double that records bodies instead of sending them."""

    def __init__(self, fail_with: Exception = None) -> None:
        self.calls = []
        self.fail_with = fail_with
        self.sent = threading.Event()

    def send(self, url, body):
        self.calls.append((url, body))
        self.sent.set()
        if self.fail_with is not None:
            raise self.fail_with


class FakeTimer:
    """Monotonic time source that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeWallClock:
    """Wall clock pinned to a fixed aware datetime; advances with a FakeTimer."""

    def __init__(self, timer: FakeTimer) -> None:
        self.timer = timer
        self.base = datetime(2026, 10, 16, 9, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        self.origin = timer.now

    def __call__(self) -> datetime:
        return self.base + timedelta(seconds=self.timer.now - self.origin)


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(username="alice", webhook_url="https://example.com/hook")


@pytest.fixture
def offline_config() -> AppConfig:
    return AppConfig(username="alice")


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def failing_transport() -> RecordingTransport:
    return RecordingTransport(fail_with=NotifyFailure("Webhook returned HTTP 500"))


@pytest.fixture
def fake_timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture
def notifier(config, transport):
    n = WebhookNotifier(config.webhook_url, transport=transport, bot_name=config.bot_name)
    yield n
    n.close(timeout=1.0)


@pytest.fixture
def session(config, notifier, fake_timer):
    """A SessionState wired to a recording transport and a fake clock."""
    from workwatch.session import SessionState

    return SessionState(
        config,
        notifier=notifier,
        timer=fake_timer,
        wall_clock=FakeWallClock(fake_timer),
    )
