from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict

from notepad.errors import MalformedStoredData
from notepad.models import Envelope, Note, parse_note_number


NOTE_FIELDS = ("id", "title", "content", "dateCreated", "dateModified")


def _format_ts(value: datetime) -> str:
    return value.isoformat()


def _parse_ts(value: Any, field_name: str, note_id: str) -> datetime:
    if not isinstance(value, str):
        raise MalformedStoredData(f"{note_id}: {field_name} is not a string")
    # older blobs carry a trailing Z
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise MalformedStoredData(f"{note_id}: bad {field_name} {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def note_to_dict(note: Note) -> Dict[str, Any]:
    return {
        "id": note.id,
        "title": note.title,
        "content": note.content,
        "dateCreated": _format_ts(note.date_created),
        "dateModified": _format_ts(note.date_modified),
    }


def note_from_dict(key: str, raw: Any) -> Note:
    if not isinstance(raw, dict):
        raise MalformedStoredData(f"{key}: note entry is not an object")
    for name in NOTE_FIELDS:
        if name not in raw:
            raise MalformedStoredData(f"{key}: missing field {name}")
    for name in ("id", "title", "content"):
        if not isinstance(raw[name], str):
            raise MalformedStoredData(f"{key}: {name} is not a string")
    if raw["id"] != key:
        raise MalformedStoredData(f"{key}: id mismatch {raw['id']!r}")
    created = _parse_ts(raw["dateCreated"], "dateCreated", key)
    modified = _parse_ts(raw["dateModified"], "dateModified", key)
    if modified < created:
        raise MalformedStoredData(f"{key}: dateModified before dateCreated")
    return Note(
        id=raw["id"],
        title=raw["title"],
        content=raw["content"],
        date_created=created,
        date_modified=modified,
    )


def encode_envelope(envelope: Envelope) -> str:
    payload = {
        "notes": {note_id: note_to_dict(note) for note_id, note in envelope.notes.items()},
        "nextId": int(envelope.next_id),
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def decode_envelope(blob: str) -> Envelope:
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as exc:
        raise MalformedStoredData(f"envelope is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedStoredData("envelope is not an object")

    raw_notes = data.get("notes", {})
    if not isinstance(raw_notes, dict):
        raise MalformedStoredData("notes is not an object")
    notes = {key: note_from_dict(key, raw) for key, raw in raw_notes.items()}

    next_id = data.get("nextId", data.get("nextNoteId", 1))
    if isinstance(next_id, bool) or not isinstance(next_id, int) or next_id < 1:
        raise MalformedStoredData(f"bad id counter {next_id!r}")
    highest = max((parse_note_number(key) or 0 for key in notes), default=0)
    return Envelope(notes=notes, next_id=max(next_id, highest + 1))
