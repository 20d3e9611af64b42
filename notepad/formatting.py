from __future__ import annotations

from datetime import datetime


PREVIEW_LENGTH = 100
UNSAVED_STATUS = "Unsaved changes"
EXIT_WARNING = "You have unsaved changes. Are you sure you want to leave?"


def count_words(text: str) -> int:
    return len(text.split())


def count_chars(text: str) -> int:
    return len(text)


def plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_time(value: datetime) -> str:
    return value.astimezone().strftime("%H:%M")


def format_relative(value: datetime, now: datetime) -> str:
    seconds = abs((now - value).total_seconds())
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{plural(minutes, 'minute')} ago"
    if hours < 24:
        return f"{plural(hours, 'hour')} ago"
    if days < 7:
        return f"{plural(days, 'day')} ago"
    return value.astimezone().date().isoformat()


def save_status(saved_at: datetime, autosave: bool = False) -> str:
    prefix = "Auto-saved" if autosave else "Saved"
    return f"{prefix} at {format_time(saved_at)}"


def preview(content: str, limit: int = PREVIEW_LENGTH) -> str:
    if len(content) < limit:
        return content
    return content[:limit] + "..."


def empty_list_message(query: str) -> str:
    if query:
        return f'No notes found matching "{query}"'
    return "No notes yet. Create your first note!"
