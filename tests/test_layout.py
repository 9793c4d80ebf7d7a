"""Tests for frame layout: pane geometry, dialog overlay, warning and error screens."""

from __future__ import annotations

from dataclasses import replace

from pqview.dashboard.layout import (
    ACCENT_STYLE,
    DIALOG_PROMPT,
    HELP_LINE,
    NEUTRAL_STYLE,
    WARNING_HINT,
    Frame,
    box,
    join_horizontal,
    place,
    render_frame,
)
from pqview.dashboard.machine import AppState, initial_state, update
from pqview.identity import warning_text
from pqview.models import Dialog, Focus, KeyPressed, QueueListed, Resized


def _state(width: int = 80, height: int = 24, *ids: str) -> AppState:
    state, _ = update(initial_state(show_warning=False), Resized(width, height))
    if ids:
        state, _ = update(state, QueueListed(ids))
    return state


def test_box_draws_border_and_padding() -> None:
    frame = box(["hi"], "┌┐└┘─│", inner_width=4, pad_h=1)
    assert frame.lines == [
        "┌──────┐",
        "│ hi   │",
        "└──────┘",
    ]


def test_join_horizontal_offsets_spans() -> None:
    left = Frame(["ab", "cd"], [(0, 0, 1, "red")])
    right = Frame(["xyz"], [(0, 1, 2, "blue")])
    joined = join_horizontal(left, right)
    assert joined.lines == ["abxyz", "cd   "]
    assert joined.spans == [(0, 0, 1, "red"), (0, 3, 4, "blue")]


def test_place_centers_and_clips() -> None:
    frame = place(Frame(["##"]), 6, 3, center=True)
    assert frame.lines == ["      ", "  ##  ", "      "]
    clipped = place(Frame(["abcdef", "g", "h"]), 3, 2)
    assert clipped.lines == ["abc", "g  "]


def test_main_layout_fills_terminal() -> None:
    frame = render_frame(_state(80, 24, "AB12CD", "ZZ99ZZ"))
    assert len(frame.lines) == 24
    assert all(len(line) == 80 for line in frame.lines)
    assert frame.lines[0].startswith("┌" + "─" * 16 + "┐┌")
    assert frame.lines[0].rstrip().endswith("┐")
    assert frame.lines[1].startswith("│ > AB12CD")
    assert frame.lines[2].startswith("│   ZZ99ZZ")
    assert frame.lines[21].startswith(HELP_LINE)


def test_focused_pane_gets_accent_border() -> None:
    state = _state(80, 24, "AB12CD")
    frame = render_frame(state)
    assert (0, 0, 18, ACCENT_STYLE) in frame.spans
    assert (0, 18, 80, NEUTRAL_STYLE) in frame.spans

    state, _ = update(state, KeyPressed("tab"))
    assert state.focus is Focus.DETAIL
    frame = render_frame(state)
    assert (0, 0, 18, NEUTRAL_STYLE) in frame.spans
    assert (0, 18, 80, ACCENT_STYLE) in frame.spans


def test_dialog_is_centered_over_layout() -> None:
    state = replace(_state(80, 24, "AB12CD"), dialog=Dialog.CONFIRM_DELETE)
    frame = render_frame(state)
    assert len(frame.lines) == 24
    prompt_rows = [i for i, line in enumerate(frame.lines) if DIALOG_PROMPT in line]
    assert len(prompt_rows) == 1
    row = prompt_rows[0]
    assert frame.lines[row - 1][24:56].startswith("│  AB12CD")
    assert frame.lines[row - 3][24:56] == "╭" + "─" * 30 + "╮"
    # Background still shows around the dialog.
    assert frame.lines[0].startswith("┌")
    assert frame.lines[21].startswith(HELP_LINE)


def test_dialog_leaves_background_lines_outside_its_box() -> None:
    state = _state(80, 24, "AB12CD")
    background = render_frame(state)
    frame = render_frame(replace(state, dialog=Dialog.CONFIRM_DELETE))
    changed = [i for i, (a, b) in enumerate(zip(background.lines, frame.lines)) if a != b]
    assert changed == list(range(9, 15))


def test_warning_screen_replaces_layout() -> None:
    state = initial_state(show_warning=True, warning_text="WARNING!\n\nbe careful")
    state, _ = update(state, Resized(80, 24))
    frame = render_frame(state)
    assert frame.lines[0] == "╔" + "═" * 78 + "╗"
    assert frame.lines[2].startswith("║  WARNING!")
    assert frame.lines[17].startswith(WARNING_HINT)
    assert HELP_LINE not in "\n".join(frame.lines)


def test_warning_text_wraps_inside_standard_terminal() -> None:
    state = initial_state(show_warning=True, warning_text=warning_text(("root", "postfix")))
    state, _ = update(state, Resized(80, 24))
    frame = render_frame(state)
    assert all(len(line) == 80 for line in frame.lines)
    body = " ".join(line.strip("║ ") for line in frame.lines)
    body = " ".join(body.split())
    assert 'should be run as "root" or "postfix" so that "mailq" and "postcat" work properly.' in body
    assert "You are NOT root/postfix. Some functions may fail." in body
    assert "Press any key (except q/esc) to continue, or 'q'/'esc' to cancel." in body


def test_placeholders_before_first_resize() -> None:
    assert render_frame(initial_state(show_warning=False)).lines == ["Please wait…"]
    assert render_frame(initial_state(show_warning=True)).lines == ["Initializing terminal..."]


def test_error_screen_replaces_everything() -> None:
    state = replace(_state(80, 24, "AB12CD"), error="boom\ndetails", dialog=Dialog.CONFIRM_DELETE)
    frame = render_frame(state)
    assert frame.lines[:4] == [
        "Error:".ljust(80),
        "boom".ljust(80),
        "details".ljust(80),
        "(q to quit)".ljust(80),
    ]


def test_to_text_applies_spans_to_plain_grid() -> None:
    frame = Frame(["abc", "def"], [(1, 1, 3, "bold"), (5, 0, 1, "red")])
    text = frame.to_text()
    assert text.plain == "abc\ndef"
    assert [(s.start, s.end, str(s.style)) for s in text.spans] == [(5, 7, "bold")]
