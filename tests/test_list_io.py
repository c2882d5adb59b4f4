import json
import unittest
from datetime import datetime

from wordcross.core.exceptions import ImportFormatError
from wordcross.data.validation import parse_list
from wordcross.engine.generator import CrosswordGenerator, GenerationResult, GeneratorConfig
from wordcross.io.list_io import (
    export_list_as_csv,
    export_list_as_json,
    export_puzzle,
    generate_filename,
    parse_import_file,
)


SAMPLE_LIST = {
    "topic": "Prompting",
    "name": "Prompt basics",
    "version": 2,
    "items": [
        {"answer": "primer", "clue": "Introductory text", "difficulty": 1},
        {"answer": "fewshot", "clue": "A handful of examples"},
        {"answer": "template", "clue": "Reusable skeleton", "difficulty": 4},
        {"answer": "retriever", "clue": "Fetches documents", "note": "RAG"},
        {"answer": "chunking", "clue": "Splitting into pieces", "difficulty": 2},
    ],
}


class ImportTests(unittest.TestCase):
    def test_json_import_normalizes_answers(self) -> None:
        parsed = parse_import_file(json.dumps(SAMPLE_LIST), "prompts.JSON")
        self.assertEqual(parsed.format, "json")
        self.assertEqual(parsed.data["version"], 2)
        self.assertEqual(parsed.items[0], {"answer": "PRIMER", "clue": "Introductory text", "difficulty": 1})
        self.assertEqual(parsed.items[3]["note"], "RAG")

    def test_json_import_errors(self) -> None:
        with self.assertRaisesRegex(ImportFormatError, "Invalid JSON"):
            parse_import_file("{not json", "list.json")
        with self.assertRaisesRegex(ImportFormatError, "missing required fields"):
            parse_import_file(json.dumps({"topic": "x", "items": []}), "list.json")
        with self.assertRaisesRegex(ImportFormatError, "item 1"):
            parse_import_file(json.dumps({"topic": "x", "name": "y", "items": [{"answer": "A"}]}), "list.json")

    def test_json_import_difficulty_labels(self) -> None:
        data = {
            "topic": "t",
            "name": "n",
            "items": [
                {"answer": "cat", "clue": "pet", "difficulty": "HARD"},
                {"answer": "dog", "clue": "pet", "difficulty": "easy"},
                {"answer": "cow", "clue": "farm", "difficulty": "2"},
            ],
        }
        parsed = parse_import_file(json.dumps(data), "x.json")
        self.assertEqual([item["difficulty"] for item in parsed.items], [3, 1, 2])

    def test_json_import_rejects_unknown_difficulty(self) -> None:
        data = {"topic": "t", "name": "n", "items": [{"answer": "cat", "clue": "pet", "difficulty": "brutal"}]}
        with self.assertRaisesRegex(ImportFormatError, "item 1: difficulty"):
            parse_import_file(json.dumps(data), "x.json")

    def test_csv_import_finds_columns(self) -> None:
        content = 'Clue,Answer Text\n"Star, nearest",sun\nNight light,moon\n,empty\n'
        parsed = parse_import_file(content, "list.csv")
        self.assertEqual(parsed.format, "csv")
        self.assertEqual(parsed.data["topic"], "Imported from CSV")
        self.assertEqual(parsed.data["name"], "CSV Import")
        self.assertEqual(
            parsed.items,
            [
                {"answer": "SUN", "clue": "Star, nearest"},
                {"answer": "MOON", "clue": "Night light"},
            ],
        )

    def test_csv_import_errors(self) -> None:
        with self.assertRaises(ImportFormatError):
            parse_import_file("answer,clue\n", "list.csv")
        with self.assertRaises(ImportFormatError):
            parse_import_file("word,hint\nsun,star\n", "list.csv")

    def test_unsupported_extension(self) -> None:
        with self.assertRaisesRegex(ImportFormatError, "Unsupported file format: txt"):
            parse_import_file("", "list.txt")


class ExportTests(unittest.TestCase):
    def setUp(self) -> None:
        self.word_list = parse_list(SAMPLE_LIST)

    def test_csv_export_uses_difficulty_labels(self) -> None:
        lines = export_list_as_csv(self.word_list).split("\n")
        self.assertEqual(lines[0], "answer,clue,difficulty,note")
        self.assertEqual(lines[1], "PRIMER,Introductory text,EASY,")
        self.assertEqual(lines[2], "FEWSHOT,A handful of examples,MEDIUM,")
        self.assertEqual(lines[3], "TEMPLATE,Reusable skeleton,HARD,")
        self.assertEqual(lines[4], "RETRIEVER,Fetches documents,MEDIUM,RAG")
        self.assertEqual(len(lines), 6)

    def test_json_export_can_be_imported(self) -> None:
        exported = export_list_as_json(self.word_list)
        parsed = parse_import_file(exported, "export.json")
        self.assertEqual(parsed.data["name"], "Prompt basics")
        self.assertEqual([item["answer"] for item in parsed.items][:2], ["PRIMER", "FEWSHOT"])
        self.assertNotIn("difficulty", parsed.items[1])

    def test_puzzle_export_hides_answers(self) -> None:
        config = GeneratorConfig(seed="export")
        result = CrosswordGenerator(config).generate(self.word_list.items)
        self.assertTrue(result.success)

        exported = json.loads(
            export_puzzle("puzzle-1", result, exported_at=datetime(2024, 5, 1, 12, 0))
        )
        self.assertEqual(exported["puzzleId"], "puzzle-1")
        self.assertEqual(exported["exportedAt"], "2024-05-01T12:00:00")
        self.assertEqual(exported["grid"]["size"], {"rows": 15, "cols": 15})
        cells = [cell for row in exported["grid"]["cells"] for cell in row]
        self.assertTrue(all("letter" not in cell for cell in cells))
        clues = exported["clues"]["across"] + exported["clues"]["down"]
        self.assertEqual(len(clues), result.placed_words)
        self.assertTrue(all("answer" not in clue for clue in clues))

    def test_failed_puzzle_cannot_be_exported(self) -> None:
        failed = GenerationResult(success=False, placed_words=0, total_words=0, seed="s")
        with self.assertRaises(ValueError):
            export_puzzle("p", failed)

    def test_generate_filename(self) -> None:
        today = datetime(2024, 1, 2)
        self.assertEqual(generate_filename("My List!", "json", today=today), "My_List__2024-01-02.json")
        self.assertEqual(generate_filename("notes", "csv", include_timestamp=False), "notes.csv")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
