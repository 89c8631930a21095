"""Slot geometry and the crossing/conflict relations between slots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import Orientation


@dataclass(frozen=True)
class SlotGeometry:
    """Position, orientation and length of a word slot.

    ``(x, y)`` is the anchor cell holding the first letter. Reversed
    orientations (``L`` and ``U``) extend from the anchor towards smaller
    coordinates, so their bounding box starts before the anchor.
    """

    orientation: Orientation
    x: int
    y: int
    length: int

    @property
    def xmin(self) -> int:
        if self.orientation == Orientation.LEFT:
            return self.x - self.length + 1
        return self.x

    @property
    def xmax(self) -> int:
        if self.orientation == Orientation.RIGHT:
            return self.x + self.length - 1
        return self.x

    @property
    def ymin(self) -> int:
        if self.orientation == Orientation.UP:
            return self.y - self.length + 1
        return self.y

    @property
    def ymax(self) -> int:
        if self.orientation == Orientation.DOWN:
            return self.y + self.length - 1
        return self.y

    def position_at_index(self, index: int) -> Tuple[int, int]:
        if self.orientation == Orientation.RIGHT:
            return self.x + index, self.y
        if self.orientation == Orientation.LEFT:
            return self.x - index, self.y
        if self.orientation == Orientation.DOWN:
            return self.x, self.y + index
        return self.x, self.y - index

    def position_in_word(self, x: int, y: int) -> bool:
        return self.xmin <= x <= self.xmax and self.ymin <= y <= self.ymax

    def cells(self) -> List[Tuple[int, int]]:
        return [self.position_at_index(i) for i in range(self.length)]

    def describe(self) -> str:
        return f"{self.orientation.value},{self.x},{self.y},{self.length}"


def is_crossing(a: SlotGeometry, b: SlotGeometry) -> bool:
    """Return True when the two slots share exactly one cell at right angles."""

    if a.orientation.is_parallel(b.orientation):
        return False

    if a.orientation.is_horizontal:
        return (
            a.xmin <= b.xmin
            and a.xmax >= b.xmax
            and a.ymin >= b.ymin
            and a.ymax <= b.ymax
        )
    return (
        a.xmin >= b.xmin
        and a.xmax <= b.xmax
        and a.ymin <= b.ymin
        and a.ymax >= b.ymax
    )


def crossing_offsets(a: SlotGeometry, b: SlotGeometry) -> Optional[Tuple[int, int]]:
    """Return ``(offset_in_a, offset_in_b)`` of the shared cell, if any."""

    if not is_crossing(a, b):
        return None
    dx = abs(a.x - b.x)
    dy = abs(a.y - b.y)
    if a.orientation.is_horizontal:
        return dx, dy
    return dy, dx


def is_conflicting(a: SlotGeometry, b: SlotGeometry) -> bool:
    """Return True when two non-crossing slots sit too close to each other.

    Slots need at least one empty cell between them. Corner touches are
    allowed, and so are parallel slots placed end to end on the same line.
    """

    if is_crossing(a, b):
        return False

    b_above = b.ymax < a.ymin
    b_below = b.ymin > a.ymax
    b_left = b.xmax < a.xmin
    b_right = b.xmin > a.xmax

    # Corners
    if (b_above or b_below) and (b_left or b_right):
        return False

    # At least one free cell on some side
    if (
        b.xmax + 1 < a.xmin
        or b.xmin - 1 > a.xmax
        or b.ymax + 1 < a.ymin
        or b.ymin - 1 > a.ymax
    ):
        return False

    if a.orientation.is_horizontal and b.orientation.is_horizontal and a.y == b.y:
        return not (b_left or b_right)
    if a.orientation.is_vertical and b.orientation.is_vertical and a.x == b.x:
        return not (b_above or b_below)
    return True


__all__ = ["SlotGeometry", "crossing_offsets", "is_conflicting", "is_crossing"]
