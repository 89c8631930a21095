import tempfile
import unittest
from pathlib import Path

from crossfill.core.constants import Orientation, SolveState
from crossfill.core.exceptions import ConstructionError
from crossfill.io.board_file import (
    format_board_text,
    load_board,
    parse_board_text,
    parse_slot,
    write_board,
)


SAMPLE = """# animals and a phrase
R,0,0,3,animal
D,1,0,3,vessel=ARK

S,D,4,0,1,
  R,3,2,2
"""


class StaticDictionary:
    def __init__(self, words):
        self.words = words

    def lookup(self, key, length, hint=None):
        return [
            word
            for word in self.words.get(key, [])
            if len(word) == length
            and (hint is None or all(h in (".", c) for c, h in zip(word, hint)))
        ]


class ParseSlotTests(unittest.TestCase):
    def test_keyed_slot(self) -> None:
        slot = parse_slot(["R", "2", "3", "4", "river"])
        self.assertEqual(slot.orientation, Orientation.RIGHT)
        self.assertEqual((slot.x, slot.y, slot.length), (2, 3, 4))
        self.assertEqual(slot.key, "river")
        self.assertFalse(slot.committed)

    def test_keyed_slot_with_fixed_value(self) -> None:
        slot = parse_slot(["U", "2", "5", "4", "river=nile"])
        self.assertEqual(slot.key, "river")
        self.assertTrue(slot.committed)
        self.assertEqual(slot.value, "NILE")

    def test_solution_slot_with_value_on_length(self) -> None:
        slot = parse_slot(["L", "5", "0", "3=sun"])
        self.assertIsNone(slot.key)
        self.assertEqual(slot.length, 3)
        self.assertEqual(slot.value, "SUN")

    def test_malformed_fields(self) -> None:
        with self.assertRaises(ConstructionError):
            parse_slot(["R", "0", "0"])
        with self.assertRaises(ConstructionError):
            parse_slot(["X", "0", "0", "3", "key"])
        with self.assertRaises(ConstructionError):
            parse_slot(["R", "a", "0", "3", "key"])
        with self.assertRaises(ConstructionError):
            parse_slot(["R", "0", "0", "0", "key"])
        with self.assertRaises(ConstructionError) as ctx:
            parse_slot(["R", "0", "0", "3", "key=LONGER"], line_no=7)
        self.assertIn("Line 7", str(ctx.exception))


class BoardTextTests(unittest.TestCase):
    def test_parse_comments_blanks_and_continuations(self) -> None:
        slots = parse_board_text(SAMPLE)
        self.assertEqual(len(slots), 4)
        self.assertEqual([slot.key for slot in slots], ["animal", "vessel", None, None])
        self.assertEqual(slots[1].value, "ARK")
        self.assertEqual(slots[2].geometry.describe(), "D,4,0,1")
        self.assertEqual(slots[3].geometry.describe(), "R,3,2,2")

    def test_solution_line_needs_groups_of_four(self) -> None:
        with self.assertRaises(ConstructionError):
            parse_board_text("S,R,0,0,3,D,4\n")

    def test_unterminated_continuation(self) -> None:
        with self.assertRaises(ConstructionError):
            parse_board_text("R,0,0,\n")

    def test_format_round_trip(self) -> None:
        slots = parse_board_text(SAMPLE)
        text = format_board_text(slots)
        self.assertEqual(
            text,
            "R,0,0,3,animal\nD,1,0,3,vessel=ARK\nS,D,4,0,1,R,3,2,2\n",
        )
        again = parse_board_text(text)
        self.assertEqual(
            [(s.geometry, s.key, s.value) for s in again],
            [(s.geometry, s.key, s.value) for s in slots],
        )


class BoardFileTests(unittest.TestCase):
    def test_load_solve_and_write(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            source = Path(tmpdir) / "board.txt"
            source.write_text("R,0,0,3,animal\nD,1,0,3,vessel=ARK\n", encoding="utf-8")
            board = load_board(source, StaticDictionary({"animal": ["CAT", "DOG"]}))
            self.assertEqual(board.solve_repeated(), SolveState.SOLVED)
            self.assertTrue(board.changed)

            target = Path(tmpdir) / "solved.txt"
            write_board(board, target)
            self.assertFalse(board.changed)
            self.assertEqual(
                target.read_text(encoding="utf-8"),
                "R,0,0,3,animal=CAT\nD,1,0,3,vessel=ARK\n",
            )

    def test_missing_file(self) -> None:
        with self.assertRaises(ConstructionError):
            load_board(Path("/nonexistent/board.txt"), StaticDictionary({}))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
