from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Tuple

from notepad.models import Envelope, Note, format_note_id


DEMO_NOTES: List[Tuple[str, str]] = [
    (
        "Welcome to Notepad!",
        """Welcome to your personal notepad application!

Here are some features you can explore:

- Create and edit notes
- Search through all your notes instantly
- Auto-save keeps your work safe
- Customize font size and family
- Live word and character count

Keyboard Shortcuts:
- Ctrl + S: Save current note
- Ctrl + N: Create new note
- Ctrl + F: Focus search

Notes are saved automatically every 30 seconds while you type, and you will be
asked before any unsaved change is thrown away.

Start creating your own notes with the "New Note" button.""",
    ),
    (
        "Shopping List",
        """Shopping List

Groceries:
- Milk
- Bread
- Eggs
- Cheese
- Apples
- Bananas

Household:
- Laundry detergent
- Paper towels
- Light bulbs

Remember to check the pantry before leaving!""",
    ),
    (
        "Meeting Notes - Project Alpha",
        """Meeting Notes - Project Alpha
Date: Today

Attendees:
- John Smith (Project Manager)
- Sarah Johnson (Developer)
- Mike Chen (Designer)

Key Points Discussed:
1. Timeline review - on track for Q3 delivery
2. Budget allocation approved
3. New feature requests from client
4. Testing phase scheduled for next month

Action Items:
- Update project timeline (John)
- Prepare design mockups (Mike)
- Set up testing environment (Sarah)

Next meeting: Next Friday at 2 PM""",
    ),
]


def build_demo_envelope(now: datetime, start_id: int = 1) -> Envelope:
    envelope = Envelope(next_id=start_id)
    for index, (title, content) in enumerate(DEMO_NOTES):
        note_id = format_note_id(envelope.next_id)
        envelope.next_id += 1
        stamp = now - timedelta(hours=index * 2)
        envelope.notes[note_id] = Note(
            id=note_id,
            title=title,
            content=content,
            date_created=stamp,
            date_modified=stamp,
        )
    return envelope
