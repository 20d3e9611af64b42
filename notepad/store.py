from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from notepad.codec import decode_envelope, encode_envelope
from notepad.demo import build_demo_envelope
from notepad.errors import MalformedStoredData
from notepad.formatting import EXIT_WARNING, UNSAVED_STATUS, format_relative, save_status
from notepad.models import (
    DEFAULT_TITLE,
    STORAGE_KEY,
    CreateNote,
    DeferredAction,
    Envelope,
    Note,
    NoteState,
    SelectNote,
    format_note_id,
)
from notepad.search import filter_notes


RESOLUTIONS = ("save", "discard", "cancel")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NoteStore:
    """Owns the notes, the open note and its unsaved draft.

    Every committed change writes the whole envelope to the blob store before
    memory is touched, so a failed write leaves the session (and the dirty
    flag) exactly as it was. Creating or switching notes while the draft is
    dirty is deferred until the caller resolves the confirmation with
    ``resolve_pending``.
    """

    def __init__(self, blob_store, clock: Callable[[], datetime] | None = None, key: str = STORAGE_KEY) -> None:
        self._blobs = blob_store
        self._clock = clock or _utcnow
        self._key = key
        self._notes: Dict[str, Note] = {}
        self._next_id = 1
        self._current_id: Optional[str] = None
        self._draft_title = ""
        self._draft_content = ""
        self._dirty = False
        self._pending: Optional[DeferredAction] = None
        self._query = ""
        self._status = ""
        self._load()

    def _load(self) -> None:
        blob = self._blobs.read(self._key)
        if blob is None:
            logging.info("no stored notes, seeding demo notes")
            self._seed()
            return
        try:
            envelope = decode_envelope(blob)
        except MalformedStoredData as exc:
            logging.exception("stored notes unreadable: %s", exc)
            self._blobs.write(f"{self._key}.corrupt", blob)
            logging.warning("corrupt notes kept as %s.corrupt", self._key)
            self._seed()
            return
        self._notes = envelope.notes
        self._next_id = envelope.next_id
        logging.info("notes loaded: count=%s next_id=%s", len(self._notes), self._next_id)

    def _seed(self) -> None:
        envelope = build_demo_envelope(self._clock(), self._next_id)
        self._persist(envelope.notes, envelope.next_id)
        self._notes = envelope.notes
        self._next_id = envelope.next_id

    def _persist(self, notes: Dict[str, Note], next_id: int) -> None:
        self._blobs.write(self._key, encode_envelope(Envelope(notes=notes, next_id=next_id)))

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def current_note_id(self) -> Optional[str]:
        return self._current_id

    @property
    def pending(self) -> Optional[DeferredAction]:
        return self._pending

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def phase(self) -> str:
        if self._pending is not None:
            return "pending"
        return "dirty" if self._dirty else "clean"

    def get_note(self, note_id: str) -> Optional[Note]:
        note = self._notes.get(note_id)
        return replace(note) if note else None

    def list_notes(self) -> List[Note]:
        return [replace(note) for note in filter_notes(self._notes.values())]

    def _open_note(self) -> Optional[Note]:
        if self._current_id is None:
            return None
        return self._notes.get(self._current_id)

    def state(self) -> NoteState:
        note = self._open_note()
        current = None
        if note is not None:
            current = replace(note, title=self._draft_title, content=self._draft_content)
        return NoteState(
            current=current,
            dirty=self._dirty,
            notes=[replace(n) for n in filter_notes(self._notes.values(), self._query)],
            query=self._query,
            pending=self._pending,
            confirmation_required=self._pending is not None,
            view="editor" if current is not None else "welcome",
            status=self._status,
        )

    def update_draft(self, title: str | None = None, content: str | None = None) -> NoteState:
        if self._open_note() is None or (title is None and content is None):
            return self.state()
        if title is not None:
            self._draft_title = title
        if content is not None:
            self._draft_content = content
        self._dirty = True
        self._status = UNSAVED_STATUS
        return self.state()

    def set_search_query(self, text: str) -> NoteState:
        self._query = text or ""
        return self.state()

    def _gate(self, action: DeferredAction) -> bool:
        if self._pending is not None:
            logging.warning("ignored %s while waiting on %s", action, self._pending)
            return True
        if self._dirty:
            self._pending = action
            logging.info("unsaved changes, confirmation requested for %s", action)
            return True
        return False

    def create_note(self) -> NoteState:
        if self._gate(CreateNote()):
            return self.state()
        self._create()
        return self.state()

    def select_note(self, note_id: str) -> NoteState:
        if note_id not in self._notes:
            logging.info("select ignored, unknown note: %s", note_id)
            return self.state()
        if note_id == self._current_id:
            return self.state()
        if self._gate(SelectNote(note_id)):
            return self.state()
        self._open(note_id)
        return self.state()

    def _create(self) -> None:
        now = self._clock()
        note_id = format_note_id(self._next_id)
        note = Note(id=note_id, title=DEFAULT_TITLE, content="", date_created=now, date_modified=now)
        notes = dict(self._notes)
        notes[note_id] = note
        self._persist(notes, self._next_id + 1)
        self._notes = notes
        self._next_id += 1
        logging.info("note created: %s", note_id)
        self._open(note_id)

    def _open(self, note_id: str) -> None:
        note = self._notes[note_id]
        self._current_id = note_id
        self._draft_title = note.title
        self._draft_content = note.content
        self._dirty = False
        self._status = format_relative(note.date_modified, self._clock())

    def save(self, autosave: bool = False) -> NoteState:
        note = self._open_note()
        if note is None:
            return self.state()
        now = max(self._clock(), note.date_created)
        updated = replace(
            note,
            title=self._draft_title.strip() or DEFAULT_TITLE,
            content=self._draft_content,
            date_modified=now,
        )
        notes = dict(self._notes)
        notes[note.id] = updated
        self._persist(notes, self._next_id)
        self._notes = notes
        self._draft_title = updated.title
        self._draft_content = updated.content
        self._dirty = False
        self._status = save_status(now, autosave)
        logging.info("note saved: %s autosave=%s", note.id, autosave)
        return self.state()

    def autosave_tick(self) -> bool:
        if not self._dirty or self._pending is not None or self._open_note() is None:
            return False
        self.save(autosave=True)
        return True

    def delete_note(self, note_id: str) -> NoteState:
        if note_id not in self._notes:
            logging.info("delete ignored, unknown note: %s", note_id)
            return self.state()
        notes = dict(self._notes)
        del notes[note_id]
        self._persist(notes, self._next_id)
        self._notes = notes
        if note_id == self._current_id:
            self._current_id = None
            self._draft_title = ""
            self._draft_content = ""
            self._dirty = False
            self._pending = None
            self._status = ""
        logging.info("note deleted: %s remaining=%s", note_id, len(notes))
        return self.state()

    def resolve_pending(self, resolution: str) -> NoteState:
        if resolution not in RESOLUTIONS:
            raise ValueError(f"unknown resolution: {resolution!r}")
        action = self._pending
        if action is None:
            return self.state()
        if resolution == "cancel":
            self._pending = None
            logging.info("pending %s cancelled", action)
            return self.state()
        if resolution == "save":
            self.save()
        else:
            self._discard()
        self._pending = None
        self._run(action)
        return self.state()

    def _discard(self) -> None:
        note = self._open_note()
        if note is not None:
            self._draft_title = note.title
            self._draft_content = note.content
            self._status = format_relative(note.date_modified, self._clock())
        self._dirty = False
        logging.info("draft discarded: %s", self._current_id)

    def _run(self, action: DeferredAction) -> None:
        if isinstance(action, CreateNote):
            self._create()
        elif isinstance(action, SelectNote):
            if action.note_id in self._notes and action.note_id != self._current_id:
                self._open(action.note_id)

    def has_unsaved_changes(self) -> bool:
        return self._dirty

    def exit_warning(self) -> str | None:
        return EXIT_WARNING if self._dirty else None
