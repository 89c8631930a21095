"""Data models supporting the crossword assistant."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .constants import Orientation, WILDCARD
from .geometry import SlotGeometry


@dataclass
class WordSlot:
    """A word slot in the grid together with its solving state."""

    geometry: SlotGeometry
    key: Optional[str] = None
    candidates: List[str] = field(default_factory=list)
    committed: bool = False

    @classmethod
    def create(
        cls,
        orientation: Orientation,
        x: int,
        y: int,
        length: int,
        key: Optional[str] = None,
        value: Optional[str] = None,
    ) -> "WordSlot":
        """Build a slot; a given ``value`` makes it committed from the start."""
        slot = cls(geometry=SlotGeometry(orientation, x, y, length), key=key)
        if value is not None:
            slot.commit(value)
        return slot

    @property
    def orientation(self) -> Orientation:
        return self.geometry.orientation

    @property
    def x(self) -> int:
        return self.geometry.x

    @property
    def y(self) -> int:
        return self.geometry.y

    @property
    def length(self) -> int:
        return self.geometry.length

    @property
    def value(self) -> Optional[str]:
        return self.candidates[0] if self.committed else None

    def char_at(self, index: int) -> str:
        if len(self.candidates) != 1:
            raise RuntimeError(
                f"Slot {self.geometry.describe()} has {len(self.candidates)} candidates, "
                "its letters are not fixed"
            )
        return self.candidates[0][index]

    def commit(self, value: Optional[str] = None) -> None:
        self.committed = True
        if value is not None:
            self.candidates = [value]

    def reset(self) -> None:
        self.committed = False
        self.candidates = []

    def set_candidates(self, words: Iterable[str]) -> None:
        """Replace the candidates, dropping duplicates but keeping order."""
        self.candidates = list(dict.fromkeys(words))

    def has_one_candidate(self) -> bool:
        return len(self.candidates) == 1

    def is_missing(self) -> bool:
        return not self.candidates

    def is_ambiguous(self) -> bool:
        return len(self.candidates) > 1

    def is_solution(self) -> bool:
        return self.key is None

    def letters(self) -> Iterable[Tuple[int, int, str]]:
        """Yield ``(x, y, letter)`` per cell, using the wildcard until committed."""
        for index in range(self.length):
            x, y = self.geometry.position_at_index(index)
            yield x, y, self.char_at(index) if self.committed else WILDCARD
