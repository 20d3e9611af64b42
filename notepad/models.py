from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Union


DEFAULT_TITLE = "Untitled Note"
STORAGE_KEY = "notepad-notes"
NOTE_ID_PREFIX = "note_"


@dataclass
class Note:
    id: str
    title: str
    content: str
    date_created: datetime
    date_modified: datetime


@dataclass
class Envelope:
    notes: Dict[str, Note] = field(default_factory=dict)
    next_id: int = 1


@dataclass(frozen=True)
class CreateNote:
    pass


@dataclass(frozen=True)
class SelectNote:
    note_id: str


DeferredAction = Union[CreateNote, SelectNote]


@dataclass
class NoteState:
    current: Optional[Note]
    dirty: bool
    notes: List[Note]
    query: str = ""
    pending: Optional[DeferredAction] = None
    confirmation_required: bool = False
    view: str = "welcome"  # editor | welcome
    status: str = ""


def format_note_id(number: int) -> str:
    return f"{NOTE_ID_PREFIX}{number}"


def parse_note_number(note_id: str) -> int | None:
    if not note_id.startswith(NOTE_ID_PREFIX):
        return None
    suffix = note_id[len(NOTE_ID_PREFIX):]
    if not suffix.isdigit():
        return None
    return int(suffix)
