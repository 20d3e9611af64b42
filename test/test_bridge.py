import tempfile
import unittest

from notepad.bridge import NoteBridge, describe_action, state_to_dict
from notepad.codec import encode_envelope
from notepad.models import STORAGE_KEY, CreateNote, Envelope, NoteState, SelectNote
from notepad.store import NoteStore

from .helpers import START, FakeClock, RecordingBlobStore, make_note


class NoteBridgeTests(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.blobs = RecordingBlobStore(tmp.name)
        notes = [
            make_note("note_1", "Alpha", "first body", minutes_ago=10),
            make_note("note_2", "Beta", "second body", minutes_ago=20),
        ]
        self.blobs.write(STORAGE_KEY, encode_envelope(Envelope(notes={n.id: n for n in notes}, next_id=3)))
        self.clock = FakeClock()
        self.store = NoteStore(self.blobs, clock=self.clock)
        self.blobs.writes.clear()
        self.bridge = NoteBridge(self.store, clock=self.clock)
        self.events = []
        self.bridge.editorUpdated.connect(lambda note: self.events.append(("editor", note["id"])))
        self.bridge.welcomeRequested.connect(lambda: self.events.append(("welcome", None)))
        self.bridge.confirmationRequested.connect(lambda pending: self.events.append(("confirm", pending["action"])))
        self.bridge.storageError.connect(lambda message: self.events.append(("error", message)))
        self.bridge.noteSaved.connect(lambda note_id: self.events.append(("saved", note_id)))

    def test_select_renders_editor(self):
        payload = self.bridge.selectNote("note_1")
        self.assertEqual(payload["view"], "editor")
        self.assertEqual(payload["current"]["words"], "2 words")
        self.assertIn(("editor", "note_1"), self.events)

    def test_dirty_navigation_asks_for_confirmation(self):
        self.bridge.selectNote("note_1")
        self.bridge.updateContent("changed")
        self.events.clear()
        payload = self.bridge.selectNote("note_2")
        self.assertTrue(payload["confirmationRequired"])
        self.assertEqual(payload["pending"], {"action": "select", "noteId": "note_2"})
        self.assertEqual(self.events, [("confirm", "select")])
        self.events.clear()
        payload = self.bridge.resolveConfirmation("discard")
        self.assertEqual(payload["current"]["id"], "note_2")
        self.assertFalse(payload["dirty"])
        self.assertIn(("editor", "note_2"), self.events)

    def test_storage_error_is_signalled_and_dirty_kept(self):
        self.bridge.selectNote("note_1")
        self.bridge.updateTitle("Alpha 2")
        self.blobs.fail_writes = True
        self.events.clear()
        payload = self.bridge.saveNote(False)
        self.assertTrue(payload["dirty"])
        self.assertEqual(self.events, [("error", "disk full")])

    def test_failed_save_and_continue_asks_again(self):
        self.bridge.selectNote("note_1")
        self.bridge.updateContent("changed")
        self.bridge.selectNote("note_2")
        self.blobs.fail_writes = True
        self.events.clear()
        payload = self.bridge.resolveConfirmation("save")
        self.assertTrue(payload["confirmationRequired"])
        self.assertEqual(self.events, [("error", "disk full"), ("confirm", "select")])
        self.blobs.fail_writes = False
        payload = self.bridge.resolveConfirmation("save")
        self.assertEqual(payload["current"]["id"], "note_2")
        self.assertFalse(payload["dirty"])

    def test_manual_save_signals_success(self):
        self.bridge.selectNote("note_1")
        self.bridge.updateDraft("Alpha", "new body")
        self.bridge.saveNote(False)
        self.assertIn(("saved", "note_1"), self.events)

    def test_autosave_tick_skips_clean_store(self):
        self.bridge.selectNote("note_1")
        self.assertFalse(self.bridge.autosaveTick())
        self.assertEqual(self.blobs.writes, [])

    def test_autosave_tick_saves_dirty_store(self):
        self.bridge.selectNote("note_1")
        self.bridge.updateContent("typing")
        self.assertTrue(self.bridge.autosaveTick())
        self.assertEqual(self.blobs.writes, [STORAGE_KEY])
        self.assertNotIn(("saved", "note_1"), self.events)

    def test_deleting_last_note_requests_welcome(self):
        self.bridge.deleteNote("note_2")
        self.bridge.selectNote("note_1")
        self.events.clear()
        payload = self.bridge.deleteNote("note_1")
        self.assertEqual(payload["notes"], [])
        self.assertEqual(payload["emptyMessage"], "No notes yet. Create your first note!")
        self.assertEqual(self.events, [("welcome", None)])

    def test_exit_warning(self):
        self.bridge.selectNote("note_1")
        self.assertEqual(self.bridge.exitWarning(), "")
        self.bridge.updateContent("x")
        self.assertTrue(self.bridge.exitWarning())


class StatePayloadTests(unittest.TestCase):
    def test_describe_action(self):
        self.assertEqual(describe_action(CreateNote()), {"action": "create"})
        self.assertEqual(describe_action(SelectNote("note_4")), {"action": "select", "noteId": "note_4"})
        self.assertIsNone(describe_action(None))

    def test_search_miss_message(self):
        state = NoteState(current=None, dirty=False, notes=[], query="zebra")
        payload = state_to_dict(state, START)
        self.assertEqual(payload["emptyMessage"], 'No notes found matching "zebra"')
        self.assertIsNone(payload["current"])

    def test_list_items_mark_active_note(self):
        note = make_note("note_1", "Alpha", "body", minutes_ago=5)
        state = NoteState(current=note, dirty=False, notes=[note], view="editor")
        item = state_to_dict(state, START)["notes"][0]
        self.assertTrue(item["active"])
        self.assertEqual(item["date"], "5 minutes ago")
        self.assertEqual(item["preview"], "body")


if __name__ == "__main__":
    unittest.main()
