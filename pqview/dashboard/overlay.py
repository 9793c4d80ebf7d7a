"""Text-grid compositing: draw one grid over another with spaces as transparency."""

from __future__ import annotations


def _pad_grid(grid: list[str], rows: int, cols: int) -> list[str]:
    padded = [line.ljust(cols) for line in grid]
    padded.extend(" " * cols for _ in range(rows - len(padded)))
    return padded


def overlay_line(background: str, foreground: str) -> str:
    """Merge two rows cell by cell; a space in the foreground shows the background."""
    width = max(len(background), len(foreground))
    background = background.ljust(width)
    foreground = foreground.ljust(width)
    return "".join(
        bg if fg == " " else fg
        for bg, fg in zip(background, foreground)
    )


def overlay(background: list[str], foreground: list[str]) -> list[str]:
    """Composite ``foreground`` over ``background``.

    Both grids are padded to the larger line count and line width first, so
    the result is rectangular. Cells are compared as plain characters, so
    neither grid may carry terminal styling sequences.
    """
    rows = max(len(background), len(foreground))
    cols = max((len(line) for line in [*background, *foreground]), default=0)
    bg = _pad_grid(background, rows, cols)
    fg = _pad_grid(foreground, rows, cols)
    return [overlay_line(b, f) for b, f in zip(bg, fg)]
