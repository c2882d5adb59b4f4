import unittest

from wordcross.core.constants import Bounds, Direction
from wordcross.core.models import WordPlacement
from wordcross.data.preprocess import preprocess_words
from wordcross.engine.grid import GridBuffer
from wordcross.engine.random_source import SeededRandom
from wordcross.engine.scoring import IntersectionScorer
from wordcross.engine.search import PlacementSearch


NATO_WORDS = [
    "ALPHA", "BRAVO", "CHARLIE", "DELTA", "ECHO", "FOXTROT", "GOLF", "HOTEL",
    "INDIA", "JULIET", "KILO", "LIMA", "MIKE", "NOVEMBER", "OSCAR", "PAPA",
    "QUEBEC", "ROMEO", "SIERRA", "TANGO", "UNIFORM", "VICTOR", "WHISKEY",
    "XRAY", "YANKEE", "ZULU",
]


def entry(answer: str, clue: str = "clue"):
    return preprocess_words([(answer, clue)])[0]


class GridBufferTests(unittest.TestCase):
    def test_undo_restores_shared_cells(self) -> None:
        buffer = GridBuffer(9, 9)
        buffer.write(WordPlacement("CAT", "", 4, 3, Direction.ACROSS))
        mark = buffer.mark()
        buffer.write(WordPlacement("TOE", "", 4, 5, Direction.DOWN))

        self.assertTrue(buffer.is_intersection(4, 5))
        self.assertEqual(buffer.letter(6, 5), "E")

        buffer.undo_to(mark)
        self.assertEqual(buffer.letter(4, 5), "T")
        self.assertTrue(buffer.owned_by(4, 5, Direction.ACROSS))
        self.assertFalse(buffer.owned_by(4, 5, Direction.DOWN))
        self.assertIsNone(buffer.letter(5, 5))
        self.assertIsNone(buffer.letter(6, 5))

    def test_occupied_is_false_outside_grid(self) -> None:
        buffer = GridBuffer(3, 3)
        self.assertFalse(buffer.occupied(-1, 0))
        self.assertFalse(buffer.occupied(0, 3))


class PlacementRuleTests(unittest.TestCase):
    def setUp(self) -> None:
        self.search = PlacementSearch(Bounds(9, 9))
        self.search.run([entry("CAT")])

    def test_seed_is_centered_across(self) -> None:
        (seed,) = self.search.placements
        self.assertEqual((seed.row, seed.col, seed.direction), (4, 3, Direction.ACROSS))

    def test_crossing_placement_reports_shared_cell(self) -> None:
        shared = self.search.check_placement(entry("TOE"), 4, 5, Direction.DOWN)
        self.assertEqual(shared, [(4, 5)])

    def test_rejects_letter_mismatch(self) -> None:
        self.assertIsNone(self.search.check_placement(entry("DOG"), 4, 5, Direction.DOWN))

    def test_rejects_out_of_bounds(self) -> None:
        self.assertIsNone(self.search.check_placement(entry("TOE"), 7, 5, Direction.DOWN))
        self.assertIsNone(self.search.check_placement(entry("DOG"), 0, 7, Direction.ACROSS))

    def test_rejects_parallel_neighbour(self) -> None:
        self.assertIsNone(self.search.check_placement(entry("DOG"), 5, 3, Direction.ACROSS))

    def test_rejects_touching_word_end(self) -> None:
        self.assertIsNone(self.search.check_placement(entry("DOG"), 4, 6, Direction.ACROSS))

    def test_rejects_overlap_in_same_direction(self) -> None:
        self.assertIsNone(self.search.check_placement(entry("CAT"), 4, 3, Direction.ACROSS))

    def test_candidates_come_from_intersections(self) -> None:
        candidates = self.search.candidates_for(entry("TOE"))
        self.assertEqual(len(candidates), 1)
        candidate = candidates[0]
        self.assertEqual((candidate.row, candidate.col), (4, 5))
        self.assertIs(candidate.direction, Direction.DOWN)
        self.assertEqual(candidate.intersections, [(4, 5)])

    def test_candidates_sorted_by_score(self) -> None:
        candidates = self.search.candidates_for(entry("TACT"))
        self.assertGreater(len(candidates), 1)
        scores = [candidate.score for candidate in candidates]
        self.assertEqual(scores, sorted(scores, reverse=True))


class PlacementSearchTests(unittest.TestCase):
    def test_words_without_candidates_are_skipped(self) -> None:
        search = PlacementSearch(Bounds(9, 9))
        placements = search.run([entry("CAT"), entry("XYZ"), entry("TOE")])
        self.assertEqual([p.answer for p in placements], ["CAT", "TOE"])

    def test_oversized_first_word_passes_seed_to_next(self) -> None:
        search = PlacementSearch(Bounds(9, 9))
        placements = search.run([entry("ABCDEFGHIJ"), entry("CAT")])
        self.assertEqual([p.answer for p in placements], ["CAT"])
        self.assertEqual((placements[0].row, placements[0].col), (4, 3))

    def test_disjoint_words_keep_only_seed(self) -> None:
        search = PlacementSearch(Bounds(15, 15))
        placements = search.run([entry("ABC"), entry("DEF"), entry("GHI")])
        self.assertEqual([p.answer for p in placements], ["ABC"])

    def test_grid_matches_placements_after_run(self) -> None:
        words = [
            entry(word)
            for word in ("TEMPLATE", "PRIMER", "RETRIEVER", "CHUNKING", "GUARDRAILS")
        ]
        search = PlacementSearch(Bounds(15, 15))
        placements = search.run(words)
        rebuilt = GridBuffer.from_placements(15, 15, placements)
        self.assertEqual(search.grid.letters, rebuilt.letters)

    def test_word_entries_and_evaluations_are_charged(self) -> None:
        search = PlacementSearch(Bounds(9, 9))
        search.run([entry("CAT"), entry("XYZ"), entry("TOE")])
        # Three word entries, the seed evaluation and one crossing for TOE.
        self.assertEqual(search.steps, 5)

    def test_budget_bounds_work_per_attempt(self) -> None:
        words = [entry(word) for word in NATO_WORDS + ["QQQ", "XYZZY", "JJJ"]]
        search = PlacementSearch(Bounds(15, 15), max_steps=200)
        search.run(words)
        self.assertTrue(search.budget_exhausted)
        # After the budget runs out each word is entered once and evaluated
        # at most once per (placed letter, position) pair.
        letters = sum(word.length for word in words)
        greedy_tail = sum(1 + letters * word.length for word in words)
        self.assertLessEqual(search.steps, 200 + greedy_tail)

    def test_exhausted_budget_still_places_greedily(self) -> None:
        search = PlacementSearch(Bounds(9, 9), max_steps=1)
        placements = search.run([entry("CAT"), entry("TOE")])
        self.assertTrue(search.budget_exhausted)
        self.assertEqual(len(placements), 2)


class ScoringTests(unittest.TestCase):
    def test_intersections_outweigh_center_distance(self) -> None:
        scorer = IntersectionScorer()
        word = entry("TEMPLATE")
        bounds = Bounds(15, 15)
        self.assertAlmostEqual(scorer.score(word, 7, 7, Direction.ACROSS, 2, bounds), 39.5)
        self.assertGreater(
            scorer.score(word, 0, 0, Direction.DOWN, 1, bounds),
            scorer.score(word, 7, 7, Direction.DOWN, 0, bounds),
        )


class SeededRandomTests(unittest.TestCase):
    def test_same_seed_same_order(self) -> None:
        items = list(range(20))
        first = SeededRandom("abc").shuffle(items)
        second = SeededRandom("abc").shuffle(items)
        self.assertEqual(first, second)
        self.assertEqual(sorted(first), items)
        self.assertEqual(items, list(range(20)))

    def test_floats_in_unit_interval(self) -> None:
        rng = SeededRandom("seed")
        values = [rng.next_float() for _ in range(100)]
        self.assertTrue(all(0.0 <= value < 1.0 for value in values))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
