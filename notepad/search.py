from __future__ import annotations

from typing import Iterable, List

from notepad.models import Note


def matches(note: Note, query: str) -> bool:
    needle = query.casefold()
    if not needle:
        return True
    return needle in note.title.casefold() or needle in note.content.casefold()


def filter_notes(notes: Iterable[Note], query: str = "") -> List[Note]:
    results = [note for note in notes if matches(note, query)]
    # newest first; id keeps equal timestamps in a stable order
    results.sort(key=lambda note: note.id)
    results.sort(key=lambda note: note.date_modified, reverse=True)
    return results
