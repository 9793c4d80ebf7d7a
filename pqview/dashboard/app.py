"""Textual app that draws the queue dashboard and runs queue commands off-thread."""

from __future__ import annotations

import argparse
import sys

from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.css.query import NoMatches
from textual.message import Message
from textual.widgets import Static

from ..debuglog import log
from ..identity import needs_privilege_warning, warning_text
from ..mailqueue import QueueError, delete_entry, fetch_detail, list_queue
from ..models import (
    DeleteEntry,
    DetailLoaded,
    EntryDeleted,
    Event,
    FetchDetail,
    GatewayFailed,
    KeyPressed,
    ListQueue,
    QueueListed,
    Quit,
    Request,
    Resized,
)
from ..settings import SETTINGS
from .css import APP_CSS
from .layout import render_frame
from .machine import AppState, initial_state, startup_request, update


def perform(request: Request) -> Event:
    """Run one gateway request to completion and describe the outcome.

    Called from worker threads; must not touch UI state.
    """
    try:
        if isinstance(request, ListQueue):
            return QueueListed(tuple(list_queue()))
        if isinstance(request, FetchDetail):
            text = fetch_detail(request.queue_id)
            return DetailLoaded(request.queue_id, text, request.seq)
        if isinstance(request, DeleteEntry):
            delete_entry(request.queue_id)
            return EntryDeleted(request.queue_id)
    except QueueError as e:
        log(f"gateway failure: {e}")
        return GatewayFailed(str(e))
    raise TypeError(f"not a gateway request: {request!r}")


class PqviewApp(App):
    CSS = APP_CSS
    ENABLE_COMMAND_PALETTE = False
    # Tab and ctrl+c would otherwise be consumed by Textual's own bindings.
    BINDINGS = [
        Binding("tab", "feed_key('tab')", show=False, priority=True),
        Binding("ctrl+c", "feed_key('ctrl+c')", show=False, priority=True),
    ]

    class GatewayResult(Message):
        """Result of a gateway worker, delivered on the app's message queue."""

        def __init__(self, event: Event) -> None:
            super().__init__()
            self.event = event

    def __init__(self, state: AppState | None = None) -> None:
        super().__init__()
        self.ui_state: AppState = state or initial_state(show_warning=False)

    def compose(self) -> ComposeResult:
        yield Static("", id="frame")

    def on_mount(self) -> None:
        self._repaint_frame()
        request = startup_request(self.ui_state)
        if request is not None:
            self._submit_request(request)

    def on_resize(self, event: events.Resize) -> None:
        self._step_machine(Resized(event.size.width, event.size.height))

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()
        self._step_machine(KeyPressed(event.key))

    def action_feed_key(self, key: str) -> None:
        self._step_machine(KeyPressed(key))

    def on_pqview_app_gateway_result(self, message: GatewayResult) -> None:
        self._step_machine(message.event)

    # ── Event loop glue ──────────────────────────────────────────────

    def _step_machine(self, event: Event) -> None:
        """Run one transition, repaint, then hand off the follow-up request."""
        self.ui_state, request = update(self.ui_state, event)
        self._repaint_frame()
        if request is not None:
            self._submit_request(request)

    def _repaint_frame(self) -> None:
        try:
            frame = self.query_one("#frame", Static)
        except NoMatches:
            return
        frame.update(render_frame(self.ui_state).to_text())

    def _submit_request(self, request: Request) -> None:
        if isinstance(request, Quit):
            self.exit()
            return
        self._gateway_worker(request)

    @work(thread=True, group="gateway")
    def _gateway_worker(self, request: Request) -> None:
        """Run a queue command off the event loop and post its result back."""
        self.post_message(self.GatewayResult(perform(request)))


def cmd_dashboard(args: argparse.Namespace | None = None) -> int:
    """Run the dashboard; returns the process exit code."""
    privileged = SETTINGS.access.privileged_users
    state = initial_state(
        show_warning=needs_privilege_warning(privileged),
        warning_text=warning_text(privileged),
        list_width=SETTINGS.layout.list_width,
    )
    app = PqviewApp(state)
    try:
        app.run()
    except Exception as e:
        print(f"Error launching program: {e}", file=sys.stderr)
        log(f"launch failed: {type(e).__name__}: {e}")
        return 1
    # Textual reports errors raised inside the running app itself and only
    # records them in return_code.
    if app.return_code:
        log(f"dashboard exited with status {app.return_code}")
        return 1
    return 0
