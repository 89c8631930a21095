"""Reading and writing the plain-text board format.

One slot per line: ``O,x,y,length[,key[=VALUE]]`` for keyed slots and
``O,x,y,length[=VALUE]`` for slots of the solution phrase. A line starting
with ``S,`` lists several solution slots in groups of four fields. ``#``
starts a comment, and a line ending with ``,`` continues on the next one.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..core.constants import Orientation
from ..core.exceptions import ConstructionError
from ..core.models import WordSlot
from ..data.normalization import clean_word
from ..engine.board import Board, WordLookup
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

SOLUTION_PREFIX = "S"


def _parse_int(value: str, what: str, line_no: int) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ConstructionError(f"Line {line_no}: invalid {what} '{value}'") from exc


def _split_value(field_text: str) -> Tuple[str, Optional[str]]:
    if "=" in field_text:
        head, value = field_text.split("=", 1)
        return head, value
    return field_text, None


def parse_slot(parts: Sequence[str], line_no: int = 0) -> WordSlot:
    """Build a slot from its comma separated fields."""

    if len(parts) < 4:
        raise ConstructionError(f"Line {line_no}: expected at least 4 fields, got {len(parts)}")
    try:
        orientation = Orientation(parts[0].strip())
    except ValueError as exc:
        raise ConstructionError(f"Line {line_no}: invalid orientation '{parts[0]}'") from exc
    x = _parse_int(parts[1], "x coordinate", line_no)
    y = _parse_int(parts[2], "y coordinate", line_no)

    key: Optional[str] = None
    if len(parts) > 4:
        length = _parse_int(parts[3], "length", line_no)
        key, value = _split_value(parts[4].strip())
    else:
        length_text, value = _split_value(parts[3])
        length = _parse_int(length_text, "length", line_no)

    if length < 1:
        raise ConstructionError(f"Line {line_no}: length must be positive, got {length}")
    if value is not None:
        value = clean_word(value)
        if len(value) != length:
            raise ConstructionError(
                f"Line {line_no}: value '{value}' does not have length {length}"
            )
    return WordSlot.create(orientation, x, y, length, key=key, value=value)


def parse_board_text(text: str) -> List[WordSlot]:
    slots: List[WordSlot] = []
    pending = ""
    for line_no, line in enumerate(text.splitlines(), start=1):
        if line.startswith("#"):
            continue
        trimmed = line.strip()
        if not trimmed:
            continue
        if trimmed.endswith(","):
            pending += trimmed
            continue

        parts = (pending + trimmed).split(",")
        pending = ""

        if parts[0] == SOLUTION_PREFIX:
            fields = parts[1:]
            if len(fields) % 4:
                raise ConstructionError(
                    f"Line {line_no}: solution entries need 4 fields each, got {len(fields)}"
                )
            for start in range(0, len(fields), 4):
                slots.append(parse_slot(fields[start:start + 4], line_no))
            continue

        slots.append(parse_slot(parts, line_no))

    if pending:
        raise ConstructionError("Board file ends inside a continued line")
    return slots


def format_slot(slot: WordSlot) -> str:
    head = slot.geometry.describe()
    if slot.key is not None:
        head = f"{head},{slot.key}"
    if slot.committed:
        head = f"{head}={slot.candidates[0]}"
    return head


def format_board_text(slots: Sequence[WordSlot]) -> str:
    lines = [format_slot(slot) for slot in slots if slot.key is not None]
    solution = [format_slot(slot) for slot in slots if slot.key is None]
    if solution:
        lines.append(",".join([SOLUTION_PREFIX] + solution))
    return "\n".join(lines) + "\n"


def load_board(path: Path | str, dictionary: WordLookup) -> Board:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConstructionError(f"Cannot read board file {source}: {exc}") from exc
    slots = parse_board_text(text)
    LOGGER.info("Loaded %d slots from %s", len(slots), source)
    return Board(slots, dictionary)


def write_board(board: Board, path: Path | str) -> Path:
    destination = Path(path)
    destination.write_text(format_board_text(board.slots), encoding="utf-8")
    board.mark_saved()
    LOGGER.info("Board saved to %s", destination)
    return destination
