from __future__ import annotations

from datetime import datetime, timedelta, timezone

from notepad.errors import StorageUnavailable
from notepad.models import Note
from notepad.storage import FileBlobStore


START = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, start: datetime = START) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingBlobStore(FileBlobStore):
    def __init__(self, data_dir: str) -> None:
        super().__init__(data_dir)
        self.writes: list[str] = []
        self.fail_writes = False

    def write(self, key: str, blob: str) -> None:
        if self.fail_writes:
            raise StorageUnavailable("disk full")
        super().write(key, blob)
        self.writes.append(key)


def make_note(note_id: str, title: str, content: str, minutes_ago: int = 0) -> Note:
    stamp = START - timedelta(minutes=minutes_ago)
    return Note(id=note_id, title=title, content=content, date_created=stamp, date_modified=stamp)
