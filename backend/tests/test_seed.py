"""Sample data shipped with the seed script stays valid."""

from __future__ import annotations

import sys
import unittest
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
SCRIPTS_DIR = BACKEND_DIR.parent / "scripts"
for path in (BACKEND_DIR, SCRIPTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import seed


class SeedDataTestCase(unittest.TestCase):
    def test_bundled_seed_file_is_valid(self) -> None:
        documents = seed.build_documents(seed.read_seed_file())

        self.assertTrue(documents)
        for document in documents:
            self.assertTrue(document["name"])
            self.assertIn("academics", document)
            self.assertEqual(document["createdAt"], document["updatedAt"])

    def test_invalid_entry_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            seed.build_documents(
                [{"name": "Ada", "huid": "1", "email": "a@b.com",
                  "academics": [{"level": "Bootcamp", "program": "X", "status": "Applied"}]}]
            )


if __name__ == "__main__":
    unittest.main()
