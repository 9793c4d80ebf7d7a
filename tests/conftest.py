"""Pytest global setup for isolated pqview test state.

Keeps tests away from the real ~/.pqview config and log file.
"""

from __future__ import annotations

import atexit
import os
from pathlib import Path
import shutil
import tempfile


_TEST_ROOT = Path(tempfile.mkdtemp(prefix="pqview-pytest-"))

# Must be set before any pqview module is imported.
os.environ["PQVIEW_HOME"] = str(_TEST_ROOT / "home")
os.environ["PQVIEW_LOG"] = str(_TEST_ROOT / "pqview.log")
for _var in (
    "PQVIEW_MAILQ",
    "PQVIEW_POSTCAT",
    "PQVIEW_POSTSUPER",
    "PQVIEW_TIMEOUT",
    "PQVIEW_PRIVILEGED_USERS",
):
    os.environ.pop(_var, None)


@atexit.register
def _cleanup_test_state() -> None:
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)
