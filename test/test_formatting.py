import unittest
from datetime import timedelta

from notepad.formatting import (
    count_chars,
    count_words,
    empty_list_message,
    format_relative,
    format_time,
    plural,
    preview,
    save_status,
)

from .helpers import START


class CountTests(unittest.TestCase):
    def test_words(self):
        self.assertEqual(count_words(""), 0)
        self.assertEqual(count_words("   \n "), 0)
        self.assertEqual(count_words("  hello   world \n again"), 3)

    def test_chars(self):
        self.assertEqual(count_chars("ab c\n"), 5)

    def test_plural(self):
        self.assertEqual(plural(1, "word"), "1 word")
        self.assertEqual(plural(0, "word"), "0 words")
        self.assertEqual(plural(2, "character"), "2 characters")


class RelativeDateTests(unittest.TestCase):
    def test_ranges(self):
        cases = [
            (timedelta(seconds=30), "Just now"),
            (timedelta(minutes=1), "1 minute ago"),
            (timedelta(minutes=45), "45 minutes ago"),
            (timedelta(hours=1), "1 hour ago"),
            (timedelta(hours=5), "5 hours ago"),
            (timedelta(days=1), "1 day ago"),
            (timedelta(days=6), "6 days ago"),
        ]
        for delta, expected in cases:
            with self.subTest(expected):
                self.assertEqual(format_relative(START - delta, START), expected)

    def test_old_dates_show_calendar_date(self):
        value = START - timedelta(days=30)
        self.assertEqual(format_relative(value, START), value.astimezone().date().isoformat())


class TextTests(unittest.TestCase):
    def test_preview_truncates_at_limit(self):
        self.assertEqual(preview("short"), "short")
        self.assertEqual(preview("x" * 99), "x" * 99)
        self.assertEqual(preview("x" * 100), "x" * 100 + "...")
        self.assertEqual(preview("y" * 150), "y" * 100 + "...")

    def test_save_status(self):
        self.assertEqual(save_status(START), f"Saved at {format_time(START)}")
        self.assertEqual(save_status(START, autosave=True), f"Auto-saved at {format_time(START)}")

    def test_empty_list_message(self):
        self.assertEqual(empty_list_message("zebra"), 'No notes found matching "zebra"')
        self.assertEqual(empty_list_message(""), "No notes yet. Create your first note!")


if __name__ == "__main__":
    unittest.main()
