"""Constraint engine: candidate refresh, commit, rollback and the solve loop.

The board owns every slot (addressed by index) and the crossing index built
from their geometry. Candidates only come from the dictionary during a
refresh; committing a slot afterwards narrows its crossing neighbours from the
letters already known, and rolling a slot back is the only operation that
lets candidate lists grow again.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

from ..core.constants import SolveState, WILDCARD
from ..core.exceptions import InvalidCommitError
from ..core.models import WordSlot
from ..utils.logger import get_logger
from .crossings import Crossing, CrossingIndex
from .validator import LayoutValidator


LOGGER = get_logger(__name__)


class WordLookup(Protocol):
    """Dictionary capability required by the board."""

    def lookup(self, key: str, length: int, hint: Optional[str] = None) -> Iterable[str]:
        ...


class Board:
    """Owns the slots of one puzzle and propagates letters between them."""

    def __init__(
        self,
        slots: Sequence[WordSlot],
        dictionary: WordLookup,
        validator: Optional[LayoutValidator] = None,
        refresh: bool = True,
    ) -> None:
        (validator or LayoutValidator()).ensure_valid(slots)
        self.slots: List[WordSlot] = list(slots)
        self.dictionary = dictionary
        self.crossings = CrossingIndex.build([slot.geometry for slot in self.slots])
        self.state = SolveState.UNSOLVED
        self._changed = False
        LOGGER.debug(
            "Board with %d slots and %d crossings",
            len(self.slots),
            self.crossings.pair_count(),
        )
        if refresh:
            self.refresh_candidates()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def changed(self) -> bool:
        return self._changed

    def mark_saved(self) -> None:
        self._changed = False

    @property
    def width(self) -> int:
        return max((slot.geometry.xmax for slot in self.slots), default=-1) + 1

    @property
    def height(self) -> int:
        return max((slot.geometry.ymax for slot in self.slots), default=-1) + 1

    def __len__(self) -> int:
        return len(self.slots)

    def neighbors(self, index: int) -> Tuple[Crossing, ...]:
        return self.crossings[index]

    def hint(self, index: int) -> str:
        """Known letters of a slot with wildcards for unknown cells."""
        slot = self.slots[index]
        if slot.committed:
            return slot.candidates[0]
        letters = [WILDCARD] * slot.length
        for crossing in self.crossings[index]:
            other = self.slots[crossing.other]
            if other.committed:
                letters[crossing.offset] = other.char_at(crossing.other_offset)
        return "".join(letters)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def refresh_candidates(self) -> None:
        """Recompute candidates of every uncommitted slot from its hint."""
        for index, slot in enumerate(self.slots):
            if slot.committed:
                continue
            hint = self.hint(index)
            if slot.key is None:
                slot.set_candidates(self._derived_candidates(hint))
            else:
                slot.set_candidates(self.dictionary.lookup(slot.key, slot.length, hint))
            LOGGER.debug("Slot [%d] %s: %d candidates", index, hint, len(slot.candidates))

    def commit(self, index: int, value: Optional[str] = None) -> None:
        """Fix a slot and narrow (or roll back) every slot crossing it."""
        slot = self.slots[index]
        if value is None and not slot.has_one_candidate():
            raise InvalidCommitError(
                f"Slot [{index}] has {len(slot.candidates)} candidates; a value is required"
            )
        slot.commit(value)

        rollbacks: List[int] = []
        for crossing in self.crossings[index]:
            other = self.slots[crossing.other]
            letter = slot.char_at(crossing.offset)
            if other.committed:
                if other.char_at(crossing.other_offset) != letter:
                    LOGGER.warning(
                        "Slot [%d] %s disagrees with [%d] %s, rolling it back",
                        crossing.other,
                        other.value,
                        index,
                        slot.value,
                    )
                    rollbacks.append(crossing.other)
            else:
                other.candidates = [
                    word for word in other.candidates if word[crossing.other_offset] == letter
                ]

        for other_index in rollbacks:
            self.rollback(other_index)

        self.state = SolveState.UNSOLVED
        self._changed = True

    def rollback(self, index: int) -> None:
        """Undo a commitment and rebuild all open candidate lists."""
        self.slots[index].reset()
        self.refresh_candidates()
        self.state = SolveState.UNSOLVED
        self._changed = True

    def solve_repeated(self) -> SolveState:
        """Commit single-candidate slots until a pass commits nothing."""
        done = False
        while not done:
            done = True
            for index, slot in enumerate(self.slots):
                if slot.committed or not slot.has_one_candidate():
                    continue
                self.commit(index)
                done = False
                LOGGER.info("Placed word [%d] %s", index, slot.value)

        self.state = self.classify()
        LOGGER.info("Board state: %s", self.state.value)
        return self.state

    def classify(self) -> SolveState:
        counts = [len(slot.candidates) for slot in self.slots if not slot.committed]
        if not counts:
            return SolveState.SOLVED
        most = max(counts)
        if most == 0:
            return SolveState.UNSOLVABLE
        if most == 1:
            return SolveState.UNSOLVED
        return SolveState.AMBIGUOUS

    @staticmethod
    def _derived_candidates(hint: str) -> List[str]:
        return [] if WILDCARD in hint else [hint]
