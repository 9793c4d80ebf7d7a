"""Global configuration, constants, and compiled regexes."""

from __future__ import annotations

import os
import re
from pathlib import Path


PQVIEW_HOME = Path(os.environ.get("PQVIEW_HOME") or "~/.pqview").expanduser()

USER_CONFIG_PATH = PQVIEW_HOME / "config.toml"

LOG_FILE = Path(
    os.environ.get("PQVIEW_LOG") or str(PQVIEW_HOME / "pqview.log")
).expanduser()

# Postfix short/long queue IDs, plus whatever else a permissive check allows.
QUEUE_ID_RE = re.compile(r"^[A-Za-z0-9]{3,20}$")

# Terminal control sequences and stray control characters in message bodies.
ANSI_RE = re.compile(r"\x1b\[[0-9;:?]*[A-Za-z]|\x1b\][^\x07]*\x07")
CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")

WARNING_TEMPLATE = """\
WARNING!

Usually this program should be run as {quoted} so that "mailq" and "postcat" work properly.

You are NOT {slashed}. Some functions may fail.

Press any key (except q/esc) to continue, or 'q'/'esc' to cancel."""
