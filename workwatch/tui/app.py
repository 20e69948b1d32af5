#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Main TUI application for WorkWatch.

Maps key bindings onto SessionState operations and redraws from a session
snapshot once per second and after every operation:
- Menu: welcome screen, clock in or quit
- Working: live elapsed-time display
- Logs: the session's activity logs with a movable selection
"""

from typing import Optional

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Input, Static

from workwatch.config import AppConfig
from workwatch.debug_logger import get_logger
from workwatch.errors import NotifyFailure, WorkWatchError
from workwatch.formatting import format_compact, format_hms, format_log_time
from workwatch.models import AppMode, NotificationPayload, Operation, SessionSnapshot
from workwatch.session import SessionState

# Binding action -> session operation it drives (used to gate bindings by mode)
ACTION_OPERATIONS = {
    "open_logs": Operation.OPEN_LOGS,
    "close_logs": Operation.CLOSE_LOGS,
    "add_log": Operation.ADD_LOG,
    "edit_log": Operation.EDIT_LOG,
    "delete_log": Operation.DELETE_LOG,
    "select_prev": Operation.SELECT_PREV,
    "select_next": Operation.SELECT_NEXT,
}

def render_body(snapshot: SessionSnapshot) -> str:
    """Render the main panel content for a snapshot as Rich markup."""
    if snapshot.mode == AppMode.MENU:
        return f"Welcome To WorkWatch, [bold]{escape(snapshot.username)}[/bold]"

    if snapshot.mode == AppMode.WORKING:
        elapsed = format_compact(snapshot.elapsed) if snapshot.elapsed is not None else "00"
        lines = [f"Elapsed Time: [bold]{elapsed}[/bold]"]
        if snapshot.logs:
            lines.append(f"[dim]{len(snapshot.logs)} log(s) this session[/dim]")
        return "\n".join(lines)

    if not snapshot.logs:
        return "No Logs Yet"

    lines = []
    for index, entry in enumerate(snapshot.logs):
        line = f"{format_log_time(entry.timestamp)}  {escape(entry.text)}"
        if index == snapshot.selected_index:
            line = f"[bold bright_green]{line}[/bold bright_green]"
        lines.append(line)
    return "\n".join(lines)


class LogPromptScreen(ModalScreen[Optional[str]]):
    """Modal text prompt for adding or editing a log.

    Dismisses with the entered text on Enter, or None on Escape.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, title: str, initial: str = "") -> None:
        """Initialize the prompt.

        Args:
            title: Prompt title ("Input" or "Edit")
            initial: Prefilled text (the selected log when editing)
        """
        super().__init__()
        self.prompt_title = title
        self.initial = initial

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt-modal"):
            yield Static(f"[bold]{self.prompt_title}[/bold]", classes="modal-title")
            yield Input(value=self.initial, placeholder="What are you working on?", id="prompt-input")
            yield Static("[dim][Enter] Save  [Esc] Cancel[/dim]")

    def on_mount(self) -> None:
        self.query_one("#prompt-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)


class WorkWatchApp(App):
    """
    Main Textual application for WorkWatch.

    Owns the single SessionState and is its only mutator.
    """

    TITLE = "WorkWatch"
    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        Binding("c", "toggle_clock", "Clock In/Out"),
        Binding("l", "open_logs", "View Logs"),
        Binding("t", "close_logs", "View Time"),
        Binding("a", "add_log", "Add Log"),
        Binding("e", "edit_log", "Edit Log"),
        Binding("d", "delete_log", "Delete Log"),
        Binding("up,k", "select_prev", "Up", show=False),
        Binding("down,j", "select_next", "Down", show=False),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        config: AppConfig,
        session: Optional[SessionState] = None,
    ) -> None:
        """
        Initialize the app.

        Args:
            config: App configuration
            session: Pre-built session (tests inject one with a fake transport)
        """
        super().__init__()
        self.config = config
        self.session = session if session is not None else SessionState(config)
        self.session.notifier.on_failure = self._on_webhook_failure
        self._refresh_timer = None
        self.rendered_body = ""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(Static("", id="body"), id="main-panel")
        yield Footer()

    def on_mount(self) -> None:
        get_logger().app_start(self.config.username, self.session.notifier.enabled)
        self._refresh_display()
        self._refresh_timer = self.set_interval(1.0, self._refresh_display)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _refresh_display(self) -> None:
        snapshot = self.session.snapshot()
        panel = self.query_one("#main-panel", Vertical)
        panel.border_title = snapshot.mode.label
        self.rendered_body = render_body(snapshot)
        self.query_one("#body", Static).update(self.rendered_body)
        if snapshot.is_clocked_in:
            self.sub_title = f"{snapshot.username} - {format_hms(snapshot.elapsed)}"
        else:
            self.sub_title = snapshot.username

    def _after_operation(self) -> None:
        self.refresh_bindings()
        self._refresh_display()

    def check_action(self, action: str, parameters: tuple) -> Optional[bool]:
        """Hide bindings that do nothing in the current mode."""
        operation = ACTION_OPERATIONS.get(action)
        if operation is None:
            return True
        return self.session.is_allowed(operation)

    def _apply(self, operation, *args):
        """Run a session operation, showing any rejection as a toast.

        Returns the operation's result, or None if it was rejected.
        """
        try:
            return operation(*args)
        except WorkWatchError as e:
            self.notify(str(e), severity="warning")
            return None
        finally:
            self._after_operation()

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def action_toggle_clock(self) -> None:
        """Clock in from the menu, clock out otherwise."""
        if self.session.mode == AppMode.MENU:
            if self._apply(self.session.clock_in) is not None:
                self.notify("Clocked in")
        else:
            payload = self._apply(self.session.clock_out)
            if payload is not None:
                self.notify(f"Clocked out after {format_hms(payload.elapsed)}")

    def action_open_logs(self) -> None:
        self._apply(self.session.open_logs)

    def action_close_logs(self) -> None:
        self._apply(self.session.close_logs)

    def action_select_prev(self) -> None:
        self._apply(self.session.select_prev)

    def action_select_next(self) -> None:
        self._apply(self.session.select_next)

    def action_delete_log(self) -> None:
        self._apply(self.session.delete_log)

    def action_add_log(self) -> None:
        if not self.session.is_allowed(Operation.ADD_LOG):
            return
        self.push_screen(LogPromptScreen("Input"), callback=self._on_add_submitted)

    def action_edit_log(self) -> None:
        if not self.session.is_allowed(Operation.EDIT_LOG):
            return
        selected = self.session.logs.selected()
        if selected is None:
            self.notify("No log selected", severity="warning")
            return
        self.push_screen(LogPromptScreen("Edit", selected.text), callback=self._on_edit_submitted)

    async def action_quit(self) -> None:
        if self.session.mode != AppMode.MENU:
            self.notify("Clock out before quitting", severity="warning")
            return
        self.exit()

    def _on_add_submitted(self, text: Optional[str]) -> None:
        if text is None:
            return
        self._apply(self.session.add_log, text)

    def _on_edit_submitted(self, text: Optional[str]) -> None:
        if text is None:
            return
        self._apply(self.session.edit_log, text)

    # -------------------------------------------------------------------------
    # Webhook feedback
    # -------------------------------------------------------------------------

    def _on_webhook_failure(self, payload: NotificationPayload, error: NotifyFailure) -> None:
        """Runs on the notifier thread; hops to the UI thread to show a toast."""
        if not self.is_running:
            return
        self.call_from_thread(
            self.notify,
            f"Webhook ({payload.event.value}) failed: {error}",
            severity="warning",
        )
