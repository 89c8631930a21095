import io
import unittest

from crossfill.core.constants import Orientation
from crossfill.core.models import WordSlot
from crossfill.engine.board import Board
from crossfill.utils.pretty import (
    format_board,
    format_columns,
    format_slot,
    format_slot_info,
    format_solution,
    pretty_print_board,
)


class NoWords:
    def lookup(self, key, length, hint=None):
        return []


def make_board(a_value=None, b_value=None) -> Board:
    slots = [
        WordSlot.create(Orientation.RIGHT, 0, 0, 3, key="animal", value=a_value),
        WordSlot.create(Orientation.DOWN, 1, 0, 3, value=b_value),
    ]
    return Board(slots, NoWords())


class PrettyTests(unittest.TestCase):
    def test_board_draws_committed_letters_over_open_cells(self) -> None:
        self.assertEqual(format_board(make_board("CAT")), "CAT\n .\n .")
        self.assertEqual(format_board(make_board("CAT", "ARK")), "CAT\n R\n K")

    def test_slot_lines(self) -> None:
        board = make_board("CAT")
        self.assertEqual(format_slot(board, 0), "[0] animal = CAT")
        self.assertEqual(format_slot(board, 1), "[1] A.. ? !")
        self.assertEqual(format_solution(board), "A..")

    def test_slot_info_without_candidates(self) -> None:
        info = format_slot_info(make_board(), 0)
        self.assertEqual(info.splitlines(), [
            "Orientation: R, X: 0, Y: 0, Length: 3",
            "Key: animal",
            "No candidates",
        ])

    def test_columns(self) -> None:
        self.assertEqual(format_columns(["a", "bb", "c"], total_width=8), "a   c\nbb")
        self.assertEqual(format_columns([]), "")

    def test_pretty_print_with_label(self) -> None:
        stream = io.StringIO()
        pretty_print_board(make_board("CAT", "ARK"), label="State: solved", stream=stream)
        self.assertEqual(stream.getvalue(), "State: solved\nCAT\n R\n K\n")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
