from __future__ import annotations


class NotepadError(Exception):
    pass


class StorageUnavailable(NotepadError):
    """The blob store could not be read or written."""


class MalformedStoredData(NotepadError):
    """A stored envelope exists but cannot be decoded."""
