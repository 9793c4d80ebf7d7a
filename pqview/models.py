"""Core data types: UI enums, machine events and gateway requests."""

from dataclasses import dataclass
from enum import Enum


class Focus(str, Enum):
    LIST = "LIST"
    DETAIL = "DETAIL"


class Dialog(str, Enum):
    HIDDEN = "HIDDEN"
    CONFIRM_DELETE = "CONFIRM_DELETE"


# ── Events delivered to the state machine ────────────────────────────


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class QueueListed:
    queue_ids: tuple[str, ...]


@dataclass(frozen=True)
class DetailLoaded:
    queue_id: str
    text: str
    seq: int = 0


@dataclass(frozen=True)
class EntryDeleted:
    queue_id: str


@dataclass(frozen=True)
class GatewayFailed:
    message: str


Event = Resized | KeyPressed | QueueListed | DetailLoaded | EntryDeleted | GatewayFailed


# ── Requests emitted by the state machine ────────────────────────────


@dataclass(frozen=True)
class ListQueue:
    pass


@dataclass(frozen=True)
class FetchDetail:
    queue_id: str
    seq: int = 0


@dataclass(frozen=True)
class DeleteEntry:
    queue_id: str


@dataclass(frozen=True)
class Quit:
    pass


Request = ListQueue | FetchDetail | DeleteEntry | Quit
