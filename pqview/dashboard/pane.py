"""Scrollable text viewport used for the queue list, detail, and warning panes."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import textwrap


def wrap_lines(text: str, width: int) -> tuple[str, ...]:
    """Split ``text`` into rows no wider than ``width``.

    Long lines break at whitespace where possible; a single word longer than
    ``width`` is split. A non-positive width leaves the lines as they are.
    """
    rows: list[str] = []
    for line in text.splitlines():
        if width <= 0 or len(line) <= width:
            rows.append(line)
            continue
        rows.extend(
            textwrap.wrap(line, width, break_on_hyphens=False, tabsize=8) or [""]
        )
    return tuple(rows)


@dataclass(frozen=True)
class ScrollPane:
    """Immutable viewport over a block of text.

    Every operation returns a new pane; ``offset`` is the index of the first
    visible row. Line moves and jumps keep ``0 <= offset <= max_offset``;
    ``set_content`` and ``set_size`` leave the offset alone and the caller
    decides whether to ``clamp``. With ``wrap`` set, lines longer than
    ``width`` are broken into several rows and every scroll operation counts
    rows; otherwise they are clipped.
    """

    content: str = ""
    offset: int = 0
    width: int = 0
    height: int = 0
    wrap: bool = False
    _lines: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.wrap:
            lines = wrap_lines(self.content, self.width)
        else:
            lines = tuple(self.content.splitlines())
        object.__setattr__(self, "_lines", lines)

    @property
    def lines(self) -> tuple[str, ...]:
        return self._lines

    @property
    def total_lines(self) -> int:
        return len(self._lines)

    @property
    def max_offset(self) -> int:
        return max(0, self.total_lines - self.height)

    def _with_offset(self, offset: int) -> ScrollPane:
        offset = max(0, min(offset, self.max_offset))
        if offset == self.offset:
            return self
        return replace(self, offset=offset)

    def set_content(self, text: str) -> ScrollPane:
        return replace(self, content=text)

    def set_size(self, width: int, height: int) -> ScrollPane:
        return replace(self, width=max(0, width), height=max(0, height))

    def clamp(self) -> ScrollPane:
        return self._with_offset(self.offset)

    def line_up(self, n: int = 1) -> ScrollPane:
        return self._with_offset(self.offset - n)

    def line_down(self, n: int = 1) -> ScrollPane:
        return self._with_offset(self.offset + n)

    def half_page_up(self) -> ScrollPane:
        """Scroll up half a page, or jump to the top when closer than that."""
        half = self.height // 2
        if self.offset < half:
            return self.goto_top()
        return self.line_up(half)

    def half_page_down(self) -> ScrollPane:
        """Scroll down half a page, or jump to the bottom when closer than that."""
        half = self.height // 2
        rest = self.max_offset - self.offset
        if rest < half:
            return self.goto_bottom()
        return self.line_down(half)

    def goto_top(self) -> ScrollPane:
        return self._with_offset(0)

    def goto_bottom(self) -> ScrollPane:
        return self._with_offset(self.max_offset)

    def ensure_visible(self, line: int) -> ScrollPane:
        """Scroll the minimum needed for ``line`` to sit inside the viewport."""
        if self.height <= 0:
            return self
        if line < self.offset:
            return self._with_offset(line)
        if line >= self.offset + self.height:
            return self._with_offset(line - self.height + 1)
        return self

    def render(self) -> list[str]:
        """Return exactly ``height`` rows, each clipped and padded to ``width``."""
        if self.height <= 0:
            return []
        visible = self._lines[self.offset:self.offset + self.height]
        rows = [line[:self.width].ljust(self.width) for line in visible]
        rows.extend(" " * self.width for _ in range(self.height - len(rows)))
        return rows
