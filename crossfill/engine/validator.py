"""Deterministic layout validation run before a board is built."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import List, Sequence

from ..core.exceptions import ConstructionError
from ..core.geometry import crossing_offsets, is_conflicting
from ..core.models import WordSlot
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]
    warnings: List[str] = field(default_factory=list)


class LayoutValidator:
    """Checks slot definitions against the layout rules."""

    def validate(self, slots: Sequence[WordSlot]) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_dimensions(slots)
            self._check_inside_grid(slots)
            self._check_fixed_values(slots)
            self._check_conflicts(slots)
        except ConstructionError as exc:
            messages.append(str(exc))
            LOGGER.error("Layout validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        warnings = self._fixed_letter_clashes(slots)
        for warning in warnings:
            LOGGER.warning(warning)
        return ValidationResult(ok=True, messages=[], warnings=warnings)

    def ensure_valid(self, slots: Sequence[WordSlot]) -> None:
        result = self.validate(slots)
        if not result.ok:
            raise ConstructionError("; ".join(result.messages))

    def _check_dimensions(self, slots: Sequence[WordSlot]) -> None:
        for index, slot in enumerate(slots):
            if slot.length < 1:
                raise ConstructionError(
                    f"Slot [{index}] {slot.geometry.describe()} has non-positive length"
                )

    def _check_inside_grid(self, slots: Sequence[WordSlot]) -> None:
        for index, slot in enumerate(slots):
            geometry = slot.geometry
            if geometry.xmin < 0 or geometry.ymin < 0:
                raise ConstructionError(
                    f"Slot [{index}] {geometry.describe()} extends outside the grid"
                )

    def _check_fixed_values(self, slots: Sequence[WordSlot]) -> None:
        for index, slot in enumerate(slots):
            if slot.committed and len(slot.candidates[0]) != slot.length:
                raise ConstructionError(
                    f"Slot [{index}] {slot.geometry.describe()} fixed to "
                    f"'{slot.candidates[0]}' of wrong length"
                )

    def _check_conflicts(self, slots: Sequence[WordSlot]) -> None:
        for (a, slot_a), (b, slot_b) in combinations(enumerate(slots), 2):
            if is_conflicting(slot_a.geometry, slot_b.geometry):
                raise ConstructionError(
                    f"Slots [{a}] {slot_a.geometry.describe()} and "
                    f"[{b}] {slot_b.geometry.describe()} are conflicting"
                )

    @staticmethod
    def _fixed_letter_clashes(slots: Sequence[WordSlot]) -> List[str]:
        clashes: List[str] = []
        for (a, slot_a), (b, slot_b) in combinations(enumerate(slots), 2):
            if not (slot_a.committed and slot_b.committed):
                continue
            offsets = crossing_offsets(slot_a.geometry, slot_b.geometry)
            if offsets is None:
                continue
            if slot_a.char_at(offsets[0]) != slot_b.char_at(offsets[1]):
                clashes.append(
                    f"Fixed slots [{a}] {slot_a.value} and [{b}] {slot_b.value} "
                    "disagree on their shared cell"
                )
        return clashes
