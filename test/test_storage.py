import os
import tempfile
import unittest

from notepad.errors import StorageUnavailable
from notepad.storage import FileBlobStore


class FileBlobStoreTests(unittest.TestCase):
    def test_missing_key_reads_none(self):
        with tempfile.TemporaryDirectory() as tmp:
            store = FileBlobStore(os.path.join(tmp, "data"))
            self.assertIsNone(store.read("notepad-notes"))

    def test_write_then_read(self):
        with tempfile.TemporaryDirectory() as tmp:
            data_dir = os.path.join(tmp, "data")
            store = FileBlobStore(data_dir)
            store.write("notepad-notes", '{"notes": {}}')
            self.assertEqual(store.read("notepad-notes"), '{"notes": {}}')
            self.assertEqual(os.listdir(data_dir), ["notepad-notes.json"])

    def test_write_failure_raises_storage_unavailable(self):
        with tempfile.TemporaryDirectory() as tmp:
            blocker = os.path.join(tmp, "blocker")
            with open(blocker, "w", encoding="utf-8") as f:
                f.write("x")
            store = FileBlobStore(blocker)
            with self.assertRaises(StorageUnavailable):
                store.write("notepad-notes", "{}")


if __name__ == "__main__":
    unittest.main()
