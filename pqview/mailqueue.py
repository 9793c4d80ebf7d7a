"""Postfix queue access: mailq listing, postcat content, postsuper deletion."""

from __future__ import annotations

import subprocess

from .config import ANSI_RE, CONTROL_RE, QUEUE_ID_RE
from .debuglog import log
from .settings import SETTINGS


class QueueError(Exception):
    """A queue command could not be run or exited non-zero."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


def looks_like_queue_id(token: str) -> bool:
    """Simplistic check for a Postfix-like queue ID (3-20 alphanumerics)."""
    return QUEUE_ID_RE.fullmatch(token) is not None


def parse_queue_ids(output: str) -> list[str]:
    """Scan mailq output for first fields that look like queue IDs."""
    ids: list[str] = []
    for line in output.splitlines():
        fields = line.split()
        if fields and looks_like_queue_id(fields[0]):
            ids.append(fields[0])
    return ids


def clean_text(text: str) -> str:
    """Make message text safe for a plain glyph grid."""
    text = ANSI_RE.sub("", text.replace("\r\n", "\n"))
    text = text.expandtabs(8)
    return CONTROL_RE.sub("", text)


def _run_queue_cmd(
    command: list[str],
    *,
    merge_stderr: bool = False,
    timeout: float | None = None,
) -> str:
    """Run a queue command and return its decoded output.

    Raises QueueError on spawn failure, timeout, or non-zero exit.
    """
    if timeout is None:
        timeout = SETTINGS.commands.timeout
    log(f"run: {' '.join(command)}")
    try:
        proc = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
            timeout=timeout if timeout > 0 else None,
        )
    except subprocess.TimeoutExpired as e:
        log(f"timeout after {e.timeout}s: {command[0]}")
        raise QueueError(f"{command[0]}: timed out after {e.timeout:g}s") from e
    except OSError as e:
        log(f"spawn failed: {command[0]}: {e}")
        raise QueueError(f"{command[0]}: {e}") from e

    out = proc.stdout.decode("utf-8", errors="replace")
    if proc.returncode != 0:
        log(f"{command[0]} exited with status {proc.returncode}")
        raise QueueError(f"{command[0]}: exit status {proc.returncode}", out)
    return out


def list_queue() -> list[str]:
    """Return every queue ID in mailq's natural order."""
    out = _run_queue_cmd(list(SETTINGS.commands.list_cmd))
    ids = parse_queue_ids(out)
    log(f"listed {len(ids)} queue entries")
    return ids


def fetch_detail(queue_id: str) -> str:
    """Return the full postcat output for one queue entry."""
    return clean_text(_run_queue_cmd([*SETTINGS.commands.show_cmd, queue_id]))


def delete_entry(queue_id: str) -> None:
    """Delete one queue entry; the caller re-lists to observe the result."""
    command = [*SETTINGS.commands.delete_cmd, queue_id]
    try:
        _run_queue_cmd(command, merge_stderr=True)
    except QueueError as e:
        raise QueueError(
            f"error running {' '.join(command)}: {e}\nOutput:\n{e.output}"
        ) from e
    log(f"deleted {queue_id}")
