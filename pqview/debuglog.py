"""Append-only debug log; the TUI owns the terminal so nothing goes to stdout."""

from __future__ import annotations

import time
from pathlib import Path

from .config import LOG_FILE


def log(msg: str, path: Path | None = None) -> None:
    target = path or LOG_FILE
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        ts: str = time.strftime("%Y-%m-%d %H:%M:%S")
        with open(target, "a", encoding="utf-8") as f:
            f.write(f"[{ts}] {msg}\n")
    except OSError:
        pass
