"""Tests for the structured debug logger."""
import json

import pytest

from workwatch.debug_logger import DebugLogger, get_logger, reset_logger


def _read_events(path):
    return [json.loads(line) for line in path.read_text().splitlines() if line.strip()]


class TestDebugLogger:
    """Tests for DebugLogger output."""

    def test_writes_json_lines_with_common_fields(self, tmp_path):
        log_path = tmp_path / "debug.log"
        logger = DebugLogger(log_path=log_path, level=1)

        logger.clock_out("alice", elapsed_s=12.34567, log_count=2)

        (event,) = _read_events(log_path)
        assert event["event"] == "clock_out"
        assert event["level"] == "info"
        assert event["elapsed_s"] == 12.346
        assert event["log_count"] == 2
        assert event["session_id"].startswith("ww-")
        assert isinstance(event["pid"], int)
        assert "T" in event["timestamp"]

    def test_level_zero_disables_logging(self, tmp_path):
        log_path = tmp_path / "debug.log"
        logger = DebugLogger(log_path=log_path, level=0)

        logger.clock_in("alice")

        assert not logger.enabled
        assert not log_path.exists()

    def test_debug_events_need_level_two(self, tmp_path):
        log_path = tmp_path / "debug.log"
        DebugLogger(log_path=log_path, level=1).mode_change("menu", "working")
        assert not log_path.exists()

        DebugLogger(log_path=log_path, level=2).mode_change("menu", "working")
        (event,) = _read_events(log_path)
        assert event["event"] == "mode_change"
        assert event["to_mode"] == "working"

    def test_creates_missing_parent_directory(self, tmp_path):
        log_path = tmp_path / "nested" / "state" / "debug.log"
        DebugLogger(log_path=log_path, level=1).log_added("log-abc1234", 10)
        assert log_path.exists()

    def test_unwritable_path_is_ignored(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        # Parent "directory" is a regular file, so mkdir fails
        logger = DebugLogger(log_path=blocker / "debug.log", level=1)
        logger.error("op", "err")  # must not raise


class TestGetLogger:
    """Tests for the process-wide logger accessor."""

    def test_get_logger_uses_state_dir(self, temp_state_dir):
        logger = get_logger()
        assert logger.log_path == temp_state_dir / "debug.log"

    def test_get_logger_is_cached(self):
        assert get_logger() is get_logger()

    def test_reset_logger_rereads_environment(self, monkeypatch, tmp_path):
        first = get_logger()
        monkeypatch.setenv("WORKWATCH_STATE", str(tmp_path / "elsewhere"))
        reset_logger()
        second = get_logger()

        assert second is not first
        assert second.log_path == tmp_path / "elsewhere" / "debug.log"

    @pytest.mark.parametrize("raw,expected", [("0", 0), ("2", 2), ("bogus", 1)])
    def test_level_from_environment(self, monkeypatch, raw, expected):
        monkeypatch.setenv("WORKWATCH_DEBUG", raw)
        reset_logger()
        assert get_logger().level == expected
