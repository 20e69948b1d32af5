# SPDX-License-Identifier: MIT
"""Configuration loading for WorkWatch.

Settings come from the process environment, optionally seeded from a
``.env`` file. Values already present in the environment take precedence
over the file. The result is an immutable AppConfig built once at startup
and passed into the session.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from workwatch.debug_logger import get_logger
from workwatch.errors import ConfigError
from workwatch.models import DEFAULT_BOT_NAME, DEFAULT_WEBHOOK_TIMEOUT
from workwatch.paths import PathResolver


@dataclass(frozen=True)
class AppConfig:
    """Configuration values for the app.

    Attributes:
        username: Name shown in the menu and in webhook titles
        webhook_url: Chat webhook endpoint, or None to disable notifications
        bot_name: Display name the webhook posts under
        webhook_timeout: Seconds before a webhook request is abandoned
    """

    username: str
    webhook_url: Optional[str] = None
    bot_name: str = DEFAULT_BOT_NAME
    webhook_timeout: float = DEFAULT_WEBHOOK_TIMEOUT

    @property
    def webhook_enabled(self) -> bool:
        return bool(self.webhook_url)


def _first_env(*names: str) -> Optional[str]:
    """Return the first non-blank value among the given env vars."""
    for name in names:
        value = os.environ.get(name)
        if value and value.strip():
            return value.strip()
    return None


def _get_float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        get_logger().config_warning(name, f"not a number: {raw!r}")
        return default
    if value <= 0:
        get_logger().config_warning(name, f"must be positive: {raw!r}")
        return default
    return value


def load_config(env_file: Optional[Path] = None, disable_webhook: bool = False) -> AppConfig:
    """Load configuration from the environment and an optional .env file.

    Args:
        env_file: Explicit .env path (overrides WORKWATCH_ENV_FILE)
        disable_webhook: Ignore any configured webhook URL

    Returns:
        AppConfig with validated values

    Raises:
        ConfigError: If no username is configured
    """
    env_path = PathResolver.env_file(env_file)
    if env_path.exists():
        load_dotenv(env_path, override=False)

    username = _first_env("WORKWATCH_USERNAME", "USERNAME")
    if not username:
        raise ConfigError(
            "WORKWATCH_USERNAME is not set. Add it to your environment or .env file."
        )

    webhook_url = None if disable_webhook else _first_env("WORKWATCH_WEBHOOK", "WEBHOOK_URL")
    if webhook_url and not webhook_url.startswith(("https://", "http://")):
        get_logger().config_warning("WORKWATCH_WEBHOOK", "webhook URL must use http(s); notifications disabled")
        webhook_url = None

    return AppConfig(
        username=username,
        webhook_url=webhook_url,
        bot_name=_first_env("WORKWATCH_BOT_NAME") or DEFAULT_BOT_NAME,
        webhook_timeout=_get_float_env("WORKWATCH_WEBHOOK_TIMEOUT", DEFAULT_WEBHOOK_TIMEOUT),
    )


__all__ = ["AppConfig", "load_config"]
