"""Pretty-print helpers for boards and slots."""

from __future__ import annotations

import shutil
import sys
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..core.constants import WILDCARD

if TYPE_CHECKING:
    from ..engine.board import Board


MISSING_MARK = "!"
AMBIGUOUS_MARK = "*"


def _render_canvas(canvas: List[List[str]]) -> str:
    return "\n".join("".join(row).rstrip() for row in canvas)


def format_board(board: Board) -> str:
    """Draw every slot; committed letters are drawn over open cells."""

    canvas = [[" "] * board.width for _ in range(board.height)]
    # Open slots first so committed letters win on shared cells.
    ordered = sorted(board.slots, key=lambda slot: slot.committed)
    for slot in ordered:
        for x, y, letter in slot.letters():
            canvas[y][x] = letter
    return _render_canvas(canvas)


def format_slot(board: Board, index: int) -> str:
    slot = board.slots[index]
    body = slot.value if slot.committed else f"{board.hint(index)} ?"
    if slot.key is not None:
        text = f"[{index}] {slot.key} = {body}"
    else:
        text = f"[{index}] {body}"
    if slot.is_missing():
        return f"{text} {MISSING_MARK}"
    if slot.is_ambiguous():
        return f"{text} {AMBIGUOUS_MARK}"
    return text


def format_crossing(board: Board, index: int) -> str:
    """Draw a slot together with the slots crossing it, then list them."""

    slot = board.slots[index]
    neighbors = sorted(board.neighbors(index), key=lambda crossing: crossing.offset)
    geometries = [slot.geometry] + [board.slots[c.other].geometry for c in neighbors]
    xmin = min(g.xmin for g in geometries)
    xmax = max(g.xmax for g in geometries)
    ymin = min(g.ymin for g in geometries)
    ymax = max(g.ymax for g in geometries)
    canvas = [[" "] * (xmax - xmin + 1) for _ in range(ymax - ymin + 1)]

    for offset, letter in enumerate(board.hint(index)):
        x, y = slot.geometry.position_at_index(offset)
        canvas[y - ymin][x - xmin] = letter

    for crossing in neighbors:
        other = board.slots[crossing.other]
        for offset, letter in enumerate(board.hint(crossing.other)):
            x, y = other.geometry.position_at_index(offset)
            if not slot.geometry.position_in_word(x, y) or letter != WILDCARD:
                canvas[y - ymin][x - xmin] = letter

    lines = [_render_canvas(canvas), ""]
    lines.extend(format_slot(board, crossing.other) for crossing in neighbors)
    return "\n".join(lines)


def format_slot_info(board: Board, index: int) -> str:
    slot = board.slots[index]
    lines = [
        f"Orientation: {slot.orientation.value}, X: {slot.x}, Y: {slot.y}, "
        f"Length: {slot.length}"
    ]
    if slot.key is not None:
        lines.append(f"Key: {slot.key}")
    if slot.committed:
        lines.append(f"Placed: {slot.value}")
    elif slot.is_missing():
        lines.append("No candidates")
    else:
        lines.append("Candidates:")
        lines.extend(f"  {word}" for word in slot.candidates)
    return "\n".join(lines)


def format_solution(board: Board) -> str:
    return " ".join(
        board.hint(index) for index, slot in enumerate(board.slots) if slot.is_solution()
    )


def format_columns(entries: Sequence[str], total_width: Optional[int] = None) -> str:
    """Lay entries out column-wise to fit the terminal width."""

    if not entries:
        return ""
    total_width = total_width or shutil.get_terminal_size().columns
    cell_width = max(len(entry) for entry in entries) + 2
    columns = max(1, total_width // cell_width)
    rows = -(-len(entries) // columns)
    lines = []
    for row in range(rows):
        cells = [entries[i] for i in range(row, len(entries), rows)]
        lines.append("".join(cell.ljust(cell_width) for cell in cells).rstrip())
    return "\n".join(lines)


def pretty_print_board(board: Board, *, label: str | None = None, stream=None) -> None:
    """Print the board in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_board(board), file=stream)
