"""Dashboard state machine: ``update(state, event) -> (state, request)``.

All UI state lives in one frozen ``AppState``. Each transition returns a new
state plus at most one gateway request; the runtime performs the request and
feeds its result back in as another event. Nothing here blocks or touches the
terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from ..models import (
    DeleteEntry,
    DetailLoaded,
    Dialog,
    EntryDeleted,
    Event,
    FetchDetail,
    Focus,
    GatewayFailed,
    KeyPressed,
    ListQueue,
    QueueListed,
    Quit,
    Request,
    Resized,
)
from .pane import ScrollPane

QUIT_KEYS = frozenset({"q", "escape", "ctrl+c"})
CONFIRM_KEYS = frozenset({"y", "shift+y"})
CANCEL_KEYS = frozenset({"n", "enter", "escape", "ctrl+c"})

LOADING_TEXT = "Loading details…"

LIST_WIDTH = 14
# Rows taken by pane borders plus the help line; columns by borders and padding.
PANE_ROW_MARGIN = 5
PANE_COL_MARGIN = 8
WARNING_COL_MARGIN = 6
WARNING_ROW_MARGIN = 11

Transition = tuple["AppState", Request | None]


@dataclass(frozen=True)
class AppState:
    """Everything the dashboard shows.

    ``warning`` is True while the first-run privilege warning is waiting to be
    acknowledged. ``error`` is terminal: once set it stays until exit.
    ``just_deleted`` suppresses the automatic detail fetch after the re-listing
    that follows a delete. ``fetch_seq`` tags the newest detail fetch so older
    results can be dropped.
    """

    entries: tuple[str, ...] = ()
    selected: int = 0
    focus: Focus = Focus.LIST
    dialog: Dialog = Dialog.HIDDEN
    warning: bool = False
    error: str | None = None
    just_deleted: bool = False
    fetch_seq: int = 0
    width: int = 0
    height: int = 0
    ready: bool = False
    list_width: int = LIST_WIDTH
    list_pane: ScrollPane = field(default_factory=ScrollPane)
    detail_pane: ScrollPane = field(default_factory=lambda: ScrollPane(wrap=True))
    warning_pane: ScrollPane = field(default_factory=lambda: ScrollPane(wrap=True))

    @property
    def selected_id(self) -> str | None:
        if 0 <= self.selected < len(self.entries):
            return self.entries[self.selected]
        return None


def initial_state(
    *,
    show_warning: bool,
    warning_text: str = "",
    list_width: int = LIST_WIDTH,
) -> AppState:
    return AppState(
        warning=show_warning,
        list_width=list_width,
        warning_pane=ScrollPane(wrap=True).set_content(warning_text),
    )


def startup_request(state: AppState) -> Request | None:
    """First request on launch: list right away unless the warning is pending."""
    if state.warning:
        return None
    return ListQueue()


def list_content(entries: tuple[str, ...], selected: int) -> str:
    return "\n".join(
        f"> {qid}" if i == selected else f"  {qid}"
        for i, qid in enumerate(entries)
    )


def _sync_list(state: AppState) -> AppState:
    pane = state.list_pane.set_content(list_content(state.entries, state.selected))
    return replace(state, list_pane=pane.clamp().ensure_visible(state.selected))


def _set_detail(state: AppState, text: str) -> AppState:
    return replace(state, detail_pane=state.detail_pane.set_content(text).goto_top())


def _request_detail(state: AppState) -> Transition:
    """Show the loading placeholder and fetch the selected entry."""
    qid = state.selected_id
    if qid is None:
        return state, None
    seq = state.fetch_seq + 1
    state = replace(_set_detail(state, LOADING_TEXT), fetch_seq=seq)
    return state, FetchDetail(qid, seq)


# ── Transitions ──────────────────────────────────────────────────────


def on_resize(state: AppState, event: Resized) -> Transition:
    w, h = event.width, event.height
    pane_h = h - PANE_ROW_MARGIN
    detail_w = w - state.list_width - PANE_COL_MARGIN
    state = replace(
        state,
        width=w,
        height=h,
        ready=True,
        list_pane=state.list_pane.set_size(state.list_width, pane_h).clamp(),
        detail_pane=state.detail_pane.set_size(detail_w, pane_h).clamp(),
        warning_pane=state.warning_pane.set_size(
            w - WARNING_COL_MARGIN, h - WARNING_ROW_MARGIN,
        ).clamp(),
    )
    return _sync_list(state), None


def on_queue_listed(state: AppState, event: QueueListed) -> Transition:
    state = replace(state, entries=tuple(event.queue_ids), selected=0)
    state = _sync_list(replace(state, list_pane=state.list_pane.goto_top()))
    if state.just_deleted:
        return replace(state, just_deleted=False), None
    if not state.entries:
        state = replace(state, fetch_seq=state.fetch_seq + 1)
        return _set_detail(state, ""), None
    return _request_detail(state)


def on_detail_loaded(state: AppState, event: DetailLoaded) -> Transition:
    if event.seq != state.fetch_seq or event.queue_id != state.selected_id:
        return state, None
    pane = state.detail_pane.set_content(event.text).goto_bottom()
    return replace(state, detail_pane=pane), None


def on_entry_deleted(state: AppState, event: EntryDeleted) -> Transition:
    state = _set_detail(state, f"{event.queue_id} deleted.")
    # Invalidate any fetch still in flight for the removed entry.
    state = replace(state, just_deleted=True, fetch_seq=state.fetch_seq + 1)
    return state, ListQueue()


def on_gateway_failed(state: AppState, event: GatewayFailed) -> Transition:
    return replace(state, error=event.message, dialog=Dialog.HIDDEN), None


def _on_dialog_key(state: AppState, key: str) -> Transition:
    key = key.lower()
    if key in CONFIRM_KEYS:
        state = replace(state, dialog=Dialog.HIDDEN)
        qid = state.selected_id
        return state, DeleteEntry(qid) if qid is not None else None
    if key in CANCEL_KEYS:
        return replace(state, dialog=Dialog.HIDDEN), None
    return state, None


def _move_selection(state: AppState, delta: int) -> Transition:
    target = state.selected + delta
    if not 0 <= target < len(state.entries):
        return state, None
    return _request_detail(_sync_list(replace(state, selected=target)))


def _on_list_key(state: AppState, key: str) -> Transition:
    if key == "up":
        return _move_selection(state, -1)
    if key == "down":
        return _move_selection(state, 1)
    pane = state.list_pane
    if key == "pageup":
        pane = pane.half_page_up()
    elif key == "pagedown":
        pane = pane.half_page_down()
    elif key == "home":
        pane = pane.goto_top()
    elif key == "end":
        pane = pane.goto_bottom()
    return replace(state, list_pane=pane), None


def _on_detail_key(state: AppState, key: str) -> Transition:
    pane = state.detail_pane
    if key == "up":
        pane = pane.line_up(1)
    elif key == "down":
        pane = pane.line_down(1)
    elif key == "pageup":
        pane = pane.half_page_up()
    elif key == "pagedown":
        pane = pane.half_page_down()
    elif key == "home":
        pane = pane.goto_top()
    elif key == "end":
        pane = pane.goto_bottom()
    return replace(state, detail_pane=pane), None


def on_key(state: AppState, event: KeyPressed) -> Transition:
    key = event.key
    if state.error is not None:
        return state, Quit() if key in QUIT_KEYS else None

    if state.dialog is Dialog.CONFIRM_DELETE:
        return _on_dialog_key(state, key)

    if state.warning:
        if key in QUIT_KEYS:
            return state, Quit()
        return replace(state, warning=False), ListQueue()

    if key in QUIT_KEYS:
        return state, Quit()
    if key == "tab":
        focus = Focus.DETAIL if state.focus is Focus.LIST else Focus.LIST
        return replace(state, focus=focus), None
    if key == "d":
        return replace(state, dialog=Dialog.CONFIRM_DELETE), None
    if key == "r":
        return state, ListQueue()

    if state.focus is Focus.LIST:
        return _on_list_key(state, key)
    return _on_detail_key(state, key)


def update(state: AppState, event: Event) -> Transition:
    """Apply one event. Gateway results after a fatal error are ignored."""
    if isinstance(event, Resized):
        return on_resize(state, event)
    if isinstance(event, KeyPressed):
        return on_key(state, event)
    if state.error is not None:
        return state, None
    if isinstance(event, QueueListed):
        return on_queue_listed(state, event)
    if isinstance(event, DetailLoaded):
        return on_detail_loaded(state, event)
    if isinstance(event, EntryDeleted):
        return on_entry_deleted(state, event)
    if isinstance(event, GatewayFailed):
        return on_gateway_failed(state, event)
    return state, None
