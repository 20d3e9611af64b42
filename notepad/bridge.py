from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from PySide6.QtCore import QObject, Signal, Slot

from notepad.errors import StorageUnavailable
from notepad.formatting import count_chars, count_words, empty_list_message, format_relative, plural, preview
from notepad.models import CreateNote, DeferredAction, Note, NoteState, SelectNote
from notepad.store import NoteStore


def describe_action(action: Optional[DeferredAction]) -> Dict[str, Any] | None:
    if isinstance(action, CreateNote):
        return {"action": "create"}
    if isinstance(action, SelectNote):
        return {"action": "select", "noteId": action.note_id}
    return None


def note_item(note: Note, current_id: str | None, now: datetime) -> Dict[str, Any]:
    return {
        "id": note.id,
        "title": note.title,
        "preview": preview(note.content),
        "date": format_relative(note.date_modified, now),
        "active": note.id == current_id,
    }


def state_to_dict(state: NoteState, now: datetime) -> Dict[str, Any]:
    current = state.current
    current_id = current.id if current else None
    payload: Dict[str, Any] = {
        "current": None,
        "dirty": state.dirty,
        "notes": [note_item(note, current_id, now) for note in state.notes],
        "query": state.query,
        "pending": describe_action(state.pending),
        "confirmationRequired": state.confirmation_required,
        "view": state.view,
        "status": state.status,
        "emptyMessage": "" if state.notes else empty_list_message(state.query),
    }
    if current is not None:
        payload["current"] = {
            "id": current.id,
            "title": current.title,
            "content": current.content,
            "dateCreated": current.date_created.isoformat(),
            "dateModified": current.date_modified.isoformat(),
            "words": plural(count_words(current.content), "word"),
            "chars": plural(count_chars(current.content), "character"),
        }
    return payload


class NoteBridge(QObject):
    listUpdated = Signal(list)
    editorUpdated = Signal(dict)
    welcomeRequested = Signal()
    confirmationRequested = Signal(dict)
    statusUpdated = Signal(str)
    storageError = Signal(str)
    noteSaved = Signal(str)

    def __init__(self, store: NoteStore, clock: Callable[[], datetime] | None = None) -> None:
        super().__init__()
        self._store = store
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _apply(self, op: Callable[[], NoteState], editor: bool = True) -> dict:
        pending_before = self._store.pending
        try:
            state = op()
        except StorageUnavailable as exc:
            logging.exception("note storage failed: %s", exc)
            self.storageError.emit(str(exc))
            state = self._store.state()
            payload = state_to_dict(state, self._clock())
            self.statusUpdated.emit(payload["status"])
            if state.pending is not None:
                self.confirmationRequested.emit(payload["pending"])
            return payload
        payload = state_to_dict(state, self._clock())
        self.listUpdated.emit(payload["notes"])
        if state.pending is not None and pending_before is None:
            self.confirmationRequested.emit(payload["pending"])
        elif payload["current"] is None:
            self.welcomeRequested.emit()
        elif editor:
            self.editorUpdated.emit(payload["current"])
        self.statusUpdated.emit(payload["status"])
        return payload

    @Slot(result=dict)
    def getState(self) -> dict:
        return state_to_dict(self._store.state(), self._clock())

    @Slot(result=dict)
    def createNote(self) -> dict:
        return self._apply(self._store.create_note)

    @Slot(str, result=dict)
    def selectNote(self, note_id: str) -> dict:
        return self._apply(lambda: self._store.select_note(note_id))

    @Slot(bool, result=dict)
    def saveNote(self, autosave: bool = False) -> dict:
        payload = self._apply(lambda: self._store.save(autosave=autosave), editor=False)
        if not autosave and not payload["dirty"] and payload["current"] is not None:
            self.noteSaved.emit(payload["current"]["id"])
        return payload

    @Slot(result=bool)
    def autosaveTick(self) -> bool:
        if not self._store.dirty:
            return False
        result = {"saved": False}

        def _tick() -> NoteState:
            result["saved"] = self._store.autosave_tick()
            return self._store.state()

        self._apply(_tick, editor=False)
        return result["saved"]

    @Slot(str, result=dict)
    def deleteNote(self, note_id: str) -> dict:
        return self._apply(lambda: self._store.delete_note(note_id))

    @Slot(str, result=dict)
    def setSearchQuery(self, text: str) -> dict:
        return self._apply(lambda: self._store.set_search_query(text), editor=False)

    @Slot(str, str, result=dict)
    def updateDraft(self, title: str, content: str) -> dict:
        return self._apply(lambda: self._store.update_draft(title=title, content=content), editor=False)

    @Slot(str, result=dict)
    def updateTitle(self, title: str) -> dict:
        return self._apply(lambda: self._store.update_draft(title=title), editor=False)

    @Slot(str, result=dict)
    def updateContent(self, content: str) -> dict:
        return self._apply(lambda: self._store.update_draft(content=content), editor=False)

    @Slot(str, result=dict)
    def resolveConfirmation(self, choice: str) -> dict:
        return self._apply(lambda: self._store.resolve_pending(choice))

    @Slot(result=str)
    def exitWarning(self) -> str:
        return self._store.exit_warning() or ""
