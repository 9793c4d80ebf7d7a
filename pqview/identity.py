"""Invoking-user lookup and the privileged-user check done at startup."""

from __future__ import annotations

import os
import pwd
import sys
from collections.abc import Sequence

from .config import WARNING_TEMPLATE
from .debuglog import log


def current_username() -> str | None:
    """Return the effective user's login name, or None if it cannot be resolved."""
    try:
        return pwd.getpwuid(os.geteuid()).pw_name
    except (KeyError, OSError) as e:
        print(f"Warning: cannot retrieve current user: {e}", file=sys.stderr)
        log(f"user lookup failed: {e}")
        return None


def needs_privilege_warning(privileged: Sequence[str], username: str | None = None) -> bool:
    """True when the first-run warning should be shown.

    An unresolvable user counts as unprivileged.
    """
    if username is None:
        username = current_username()
    show = username is None or username not in privileged
    log(f"user={username!r} privileged={not show}")
    return show


def warning_text(privileged: Sequence[str]) -> str:
    """Render the warning screen text for the configured privileged users."""
    names = list(privileged) or ["root"]
    if len(names) == 1:
        quoted = f'"{names[0]}"'
    else:
        quoted = ", ".join(f'"{n}"' for n in names[:-1]) + f' or "{names[-1]}"'
    return WARNING_TEMPLATE.format(quoted=quoted, slashed="/".join(names))
