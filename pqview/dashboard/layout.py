"""Frame rendering: panes, borders, dialog overlay, warning and error screens.

The layout works on plain glyph grids so the overlay compositor never sees
styling. Colors are recorded separately as spans ``(row, start, end, style)``
and only turned into a Rich ``Text`` at the very end.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.text import Text

from ..models import Dialog, Focus
from .machine import AppState
from .overlay import overlay
from .pane import ScrollPane

HELP_LINE = "[TAB] to switch focus, 'd' to delete, 'r' to refresh, 'q' to quit."
WARNING_HINT = "(q to quit, any other key to continue)"
DIALOG_PROMPT = "really delete [y/N]?"
DIALOG_WIDTH = 30  # content plus horizontal padding, border excluded

ACCENT_STYLE = "#ffffaf"
NEUTRAL_STYLE = "#585858"
SELECTED_STYLE = "bold #ffffaf"
WARNING_STYLE = "#ff0000"
DIALOG_STYLE = "#ffffff"
ERROR_STYLE = "bold #ff5f5f"

NORMAL_BORDER = "┌┐└┘─│"
ROUNDED_BORDER = "╭╮╰╯─│"
DOUBLE_BORDER = "╔╗╚╝═║"

Span = tuple[int, int, int, str]


@dataclass
class Frame:
    """A rectangular grid of plain text plus style spans over it."""

    lines: list[str]
    spans: list[Span] = field(default_factory=list)

    @property
    def width(self) -> int:
        return max((len(line) for line in self.lines), default=0)

    def shifted(self, rows: int = 0, cols: int = 0) -> list[Span]:
        return [(r + rows, s + cols, e + cols, st) for r, s, e, st in self.spans]

    def to_text(self) -> Text:
        text = Text("\n".join(self.lines), no_wrap=True, overflow="crop")
        starts: list[int] = []
        pos = 0
        for line in self.lines:
            starts.append(pos)
            pos += len(line) + 1
        for row, start, end, style in self.spans:
            if not 0 <= row < len(self.lines):
                continue
            limit = len(self.lines[row])
            start, end = max(0, start), min(end, limit)
            if start < end:
                text.stylize(style, starts[row] + start, starts[row] + end)
        return text


def box(
    rows: list[str],
    border: str,
    *,
    inner_width: int | None = None,
    pad_v: int = 0,
    pad_h: int = 0,
    style: str = "",
) -> Frame:
    """Draw ``rows`` inside a border with padding.

    ``inner_width`` is the content width; rows are clipped or padded to it.
    The border style, when given, covers the border cells only.
    """
    tl, tr, bl, br, hz, vt = border
    width = inner_width if inner_width is not None else max((len(r) for r in rows), default=0)
    span_w = width + 2 * pad_h
    blank = " " * span_w
    body = [blank] * pad_v
    body += [" " * pad_h + r[:width].ljust(width) + " " * pad_h for r in rows]
    body += [blank] * pad_v

    lines = [tl + hz * span_w + tr]
    lines += [vt + row + vt for row in body]
    lines.append(bl + hz * span_w + br)

    spans: list[Span] = []
    if style:
        last = len(lines) - 1
        outer = span_w + 2
        spans.append((0, 0, outer, style))
        spans.append((last, 0, outer, style))
        for r in range(1, last):
            spans.append((r, 0, 1, style))
            spans.append((r, outer - 1, outer, style))
    return Frame(lines, spans)


def join_horizontal(*frames: Frame) -> Frame:
    """Place frames side by side, top aligned."""
    height = max((len(f.lines) for f in frames), default=0)
    lines = [""] * height
    spans: list[Span] = []
    for f in frames:
        col = len(lines[0]) if lines else 0
        w = f.width
        for r in range(height):
            cell = f.lines[r] if r < len(f.lines) else ""
            lines[r] += cell.ljust(w)
        spans.extend(f.shifted(cols=col))
    return Frame(lines, spans)


def place(frame: Frame, width: int, height: int, *, center: bool = False) -> Frame:
    """Position ``frame`` in a ``width`` x ``height`` grid, clipping overflow."""
    top = max(0, (height - len(frame.lines)) // 2) if center else 0
    left = max(0, (width - frame.width) // 2) if center else 0
    lines = [" " * width for _ in range(max(0, height))]
    for r, line in enumerate(frame.lines):
        row = top + r
        if row >= height:
            break
        lines[row] = (" " * left + line)[:width].ljust(width)
    return Frame(lines, frame.shifted(rows=top, cols=left))


# ── Screens ──────────────────────────────────────────────────────────


def _pane_box(pane: ScrollPane, focused: bool) -> Frame:
    return box(
        pane.render(),
        NORMAL_BORDER,
        inner_width=pane.width,
        pad_h=1,
        style=ACCENT_STYLE if focused else NEUTRAL_STYLE,
    )


def render_main(state: AppState) -> Frame:
    """Both panes side by side with the help line underneath."""
    left = _pane_box(state.list_pane, state.focus is Focus.LIST)
    sel_row = state.selected - state.list_pane.offset
    if state.entries and 0 <= sel_row < state.list_pane.height:
        # border column plus one column of padding
        left.spans.append((sel_row + 1, 2, 2 + state.list_pane.width, SELECTED_STYLE))
    right = _pane_box(state.detail_pane, state.focus is Focus.DETAIL)
    joined = join_horizontal(left, right)
    joined.lines.append(HELP_LINE)
    return place(joined, state.width, state.height)


def render_dialog(state: AppState) -> Frame:
    """The centered delete confirmation, full terminal size."""
    rows = [DIALOG_PROMPT]
    if state.selected_id is not None:
        rows = [state.selected_id, DIALOG_PROMPT]
    dialog = box(
        rows,
        ROUNDED_BORDER,
        inner_width=DIALOG_WIDTH - 4,
        pad_v=1,
        pad_h=2,
        style=DIALOG_STYLE,
    )
    return place(dialog, state.width, state.height, center=True)


def render_warning(state: AppState) -> Frame:
    pane = state.warning_pane
    warning = box(
        pane.render(),
        DOUBLE_BORDER,
        inner_width=pane.width,
        pad_v=1,
        pad_h=2,
    )
    warning.spans = [
        (r, 0, len(line), WARNING_STYLE) for r, line in enumerate(warning.lines)
    ]
    warning.lines.append(WARNING_HINT)
    return place(warning, state.width, state.height)


def render_error(state: AppState) -> Frame:
    lines = ["Error:", *str(state.error).splitlines(), "(q to quit)"]
    frame = Frame(lines, [(0, 0, len(lines[0]), ERROR_STYLE)])
    if not state.ready:
        return frame
    return place(frame, state.width, state.height)


def render_frame(state: AppState) -> Frame:
    """Render whatever the current state shows."""
    if state.error is not None:
        return render_error(state)
    if state.warning:
        if not state.ready:
            return Frame(["Initializing terminal..."])
        return render_warning(state)
    if not state.ready:
        return Frame(["Please wait…"])

    background = render_main(state)
    if state.dialog is not Dialog.CONFIRM_DELETE:
        return background
    foreground = render_dialog(state)
    return Frame(
        overlay(background.lines, foreground.lines),
        background.spans + foreground.spans,
    )
