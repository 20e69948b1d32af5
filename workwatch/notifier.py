#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Webhook notifications for clock-in and clock-out.

The notifier is fire-and-forget: ``notify()`` queues an immutable payload
and returns at once, and a background worker thread renders it into a
Discord-style embed and hands it to the transport. A slow or failing send
never blocks or undoes the transition that triggered it, and a failed
send is never retried.

Webhook body:

    {
      "username": "<bot name>",
      "embeds": [{
        "title": "<user> has clocked in!",
        "description": "\\nDate: 10/16/2026\\nTime: 09:00:00 (UTC+0200)",
        "color": 65416,
        "timestamp": "2026-10-16T09:00:00+02:00",
        "fields": [
          {"name": "User", "value": "<user>", "inline": true},
          {"name": "Event", "value": "clock_in", "inline": true}
        ]
      }]
    }

Clock-out embeds add an "Elapsed" field (HH:MM:SS) and extend the
description with the total time and the session's logs.
"""

import json
import queue
import threading
import time
import urllib.error
import urllib.request
from typing import Any, Callable, Dict, List, Optional, Protocol

from workwatch._version import __version__
from workwatch.debug_logger import get_logger
from workwatch.errors import NotifyFailure
from workwatch.formatting import (
    format_date,
    format_hms,
    format_log_time,
    format_time_with_offset,
    format_verbose,
)
from workwatch.models import (
    DEFAULT_BOT_NAME,
    DEFAULT_WEBHOOK_TIMEOUT,
    EMBED_COLOR,
    EMBED_DESCRIPTION_LIMIT,
    NotificationPayload,
    NotifyEvent,
)


class Transport(Protocol):
    """Delivers a rendered webhook body. Raises NotifyFailure on error."""

    def send(self, url: str, body: Dict[str, Any]) -> None:
        ...


# -----------------------------------------------------------------------------
# Rendering
# -----------------------------------------------------------------------------


def _truncate(text: str, limit: int = EMBED_DESCRIPTION_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def build_description(payload: NotificationPayload) -> str:
    """Build the embed description text for a payload."""
    ts = payload.timestamp
    description = f"\nDate: {format_date(ts)}\nTime: {format_time_with_offset(ts)}"

    if payload.event != NotifyEvent.CLOCK_OUT:
        return description

    if payload.elapsed is not None:
        description += f"\n\nTotal Logged Time: {format_verbose(payload.elapsed)}\n\n"
    else:
        description += "\n\n"

    logs = payload.logs or ()
    if not logs:
        description += "No logs to display."
    else:
        lines = [f"[{format_log_time(entry.timestamp)}] {entry.text}" for entry in logs]
        description += "Logs:\n" + "\n".join(lines)

    return _truncate(description)


def build_webhook_body(payload: NotificationPayload, bot_name: str = DEFAULT_BOT_NAME) -> Dict[str, Any]:
    """Render a payload into the JSON body posted to the webhook."""
    if payload.event == NotifyEvent.CLOCK_IN:
        title = f"{payload.username} has clocked in!"
    else:
        title = f"{payload.username} has clocked out!"

    fields: List[Dict[str, Any]] = [
        {"name": "User", "value": payload.username, "inline": True},
        {"name": "Event", "value": payload.event.value, "inline": True},
    ]
    if payload.event == NotifyEvent.CLOCK_OUT and payload.elapsed is not None:
        fields.append({"name": "Elapsed", "value": format_hms(payload.elapsed), "inline": True})

    embed = {
        "title": title,
        "description": build_description(payload),
        "color": EMBED_COLOR,
        "timestamp": payload.timestamp.isoformat(),
        "fields": fields,
    }
    return {"username": bot_name, "embeds": [embed]}


# -----------------------------------------------------------------------------
# Transport
# -----------------------------------------------------------------------------


class UrllibTransport:
    """POSTs webhook bodies as JSON using urllib."""

    def __init__(self, timeout: float = DEFAULT_WEBHOOK_TIMEOUT) -> None:
        self.timeout = timeout

    def send(self, url: str, body: Dict[str, Any]) -> None:
        # Validate URL scheme to prevent file:// and friends
        if not url.startswith(("https://", "http://")):
            raise NotifyFailure(f"Unsupported webhook URL scheme: {url.split(':', 1)[0]}")

        data = json.dumps(body).encode("utf-8")
        request = urllib.request.Request(
            url,
            data=data,
            headers={
                "Content-Type": "application/json",
                "User-Agent": f"workwatch/{__version__}",
            },
            method="POST",
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                response.read()
        except urllib.error.HTTPError as e:
            raise NotifyFailure(f"Webhook returned HTTP {e.code}") from e
        except (urllib.error.URLError, OSError, ValueError) as e:
            raise NotifyFailure(f"Webhook request failed: {e}") from e


# -----------------------------------------------------------------------------
# Notifier
# -----------------------------------------------------------------------------

_STOP = object()

FailureCallback = Callable[[NotificationPayload, NotifyFailure], None]


class WebhookNotifier:
    """
    Dispatches notification payloads on a background worker thread.

    Attributes:
        webhook_url: Target URL, or None to make the notifier inert
        transport: Object with ``send(url, body)``
        bot_name: Display name for the webhook message
        on_failure: Optional callback run on the worker thread after a failed send
    """

    def __init__(
        self,
        webhook_url: Optional[str],
        transport: Optional[Transport] = None,
        bot_name: str = DEFAULT_BOT_NAME,
        on_failure: Optional[FailureCallback] = None,
    ) -> None:
        self.webhook_url = webhook_url or None
        self.transport = transport if transport is not None else UrllibTransport()
        self.bot_name = bot_name
        self.on_failure = on_failure
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._thread_lock = threading.Lock()
        self._closed = False

    @property
    def enabled(self) -> bool:
        return self.webhook_url is not None

    def notify(self, payload: NotificationPayload) -> None:
        """Queue a payload for delivery and return immediately.

        No-op when no webhook URL is configured or after close().
        """
        if not self.enabled or self._closed:
            return
        self._ensure_worker()
        self._queue.put(payload)

    def wait_idle(self) -> None:
        """Block until every queued payload has been processed."""
        if self._thread is None:
            return
        self._queue.join()

    def close(self, timeout: Optional[float] = None) -> None:
        """Stop the worker after it drains the queue, waiting up to timeout."""
        with self._thread_lock:
            self._closed = True
            thread = self._thread
        if thread is None:
            return
        self._queue.put(_STOP)
        thread.join(timeout)

    def _ensure_worker(self) -> None:
        with self._thread_lock:
            if self._thread is None:
                self._thread = threading.Thread(
                    target=self._worker, name="workwatch-webhook", daemon=True
                )
                self._thread.start()

    def _worker(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self._deliver(item)
            finally:
                self._queue.task_done()

    def _deliver(self, payload: NotificationPayload) -> None:
        logger = get_logger()
        body = build_webhook_body(payload, bot_name=self.bot_name)
        start = time.perf_counter()
        try:
            self.transport.send(self.webhook_url, body)
        except Exception as e:
            failure = e if isinstance(e, NotifyFailure) else NotifyFailure(str(e))
            logger.webhook_failed(payload.event.value, str(failure))
            if self.on_failure is not None:
                try:
                    self.on_failure(payload, failure)
                except Exception as cb_error:  # Callback errors must not kill the worker
                    logger.error("webhook_failure_callback", str(cb_error))
            return
        logger.webhook_sent(payload.event.value, (time.perf_counter() - start) * 1000)
