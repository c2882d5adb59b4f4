import json
import tempfile
import unittest
from pathlib import Path

from wordcross.core.exceptions import StoreError
from wordcross.engine.generator import CrosswordGenerator, GeneratorConfig
from wordcross.engine.puzzle_store import PuzzleStore


WORDS = [
    ("primer", "Introductory text"),
    ("template", "Reusable skeleton"),
    ("retriever", "Fetches documents"),
    ("chunking", "Splitting into pieces"),
    ("guardrails", "Safety constraints"),
]


class PuzzleStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.store = PuzzleStore(Path(self._tmp.name) / "puzzles")

    def test_success_round_trip(self) -> None:
        config = GeneratorConfig(seed="store")
        result = CrosswordGenerator(config).generate(WORDS)
        self.assertTrue(result.success)

        doc_id = self.store.save(result, config, list_name="prompts")
        self.assertIn(doc_id, self.store.list_ids())

        doc = self.store.load(doc_id)
        self.assertEqual(doc["status"], "success")
        self.assertEqual(doc["list_name"], "prompts")
        self.assertEqual(doc["seed"], "store")
        self.assertEqual(doc["config"]["rows"], 15)
        self.assertEqual(doc["grid"], result.grid)
        self.assertEqual(doc["numbering"], result.numbering)
        self.assertEqual(doc["stats"]["grid"]["total_cells"], 225)
        self.assertEqual(
            doc["stats"]["words"]["across"] + doc["stats"]["words"]["down"],
            result.placed_words,
        )
        self.assertNotIn("conflicting_words", doc)

    def test_failure_keeps_conflicting_words(self) -> None:
        config = GeneratorConfig(seed="fail", max_attempts=2)
        result = CrosswordGenerator(config).generate([("abc", "First"), ("xyz", "Second")])
        self.assertFalse(result.success)

        doc_id = self.store.save(result, config)
        raw = json.loads((self.store.store_dir / f"{doc_id}.json").read_text(encoding="utf-8"))
        self.assertEqual(raw["status"], "failed")
        self.assertEqual(raw["placed_words"], 1)
        self.assertEqual(len(raw["conflicting_words"]), 1)
        self.assertIn(raw["conflicting_words"][0], {"ABC", "XYZ"})
        self.assertNotIn("grid", raw)

    def test_unknown_id(self) -> None:
        with self.assertRaises(StoreError):
            self.store.load("missing")

    def test_unreadable_document(self) -> None:
        (self.store.store_dir / "broken.json").write_text("{", encoding="utf-8")
        with self.assertRaises(StoreError):
            self.store.load("broken")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
