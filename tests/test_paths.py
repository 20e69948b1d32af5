"""Tests for centralized path resolution."""
from pathlib import Path

from workwatch.paths import PathResolver


class TestPathResolver:
    """Tests for PathResolver centralized path resolution."""

    def test_state_dir_respects_env_var(self, monkeypatch, tmp_path):
        """WORKWATCH_STATE env var overrides everything."""
        custom = tmp_path / "custom-state"
        monkeypatch.setenv("WORKWATCH_STATE", str(custom))

        assert PathResolver.state_dir() == custom

    def test_state_dir_uses_xdg_state_home(self, monkeypatch, tmp_path):
        monkeypatch.delenv("WORKWATCH_STATE", raising=False)
        monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "xdg"))

        assert PathResolver.state_dir() == tmp_path / "xdg" / "workwatch"

    def test_state_dir_default(self, monkeypatch):
        monkeypatch.delenv("WORKWATCH_STATE", raising=False)
        monkeypatch.delenv("XDG_STATE_HOME", raising=False)

        result = PathResolver.state_dir()
        assert isinstance(result, Path)
        assert result == Path.home() / ".local" / "state" / "workwatch"

    def test_debug_log_inside_state_dir(self, temp_state_dir):
        assert PathResolver.debug_log() == temp_state_dir / "debug.log"

    def test_env_file_explicit_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("WORKWATCH_ENV_FILE", str(tmp_path / "from-env.env"))
        explicit = tmp_path / "explicit.env"

        assert PathResolver.env_file(explicit) == explicit

    def test_env_file_from_env_var(self, monkeypatch, tmp_path):
        monkeypatch.setenv("WORKWATCH_ENV_FILE", str(tmp_path / "from-env.env"))
        assert PathResolver.env_file() == tmp_path / "from-env.env"

    def test_env_file_defaults_to_cwd(self, monkeypatch, tmp_path):
        monkeypatch.delenv("WORKWATCH_ENV_FILE", raising=False)
        monkeypatch.chdir(tmp_path)
        assert PathResolver.env_file() == tmp_path / ".env"
