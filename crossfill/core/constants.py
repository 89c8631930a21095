"""Shared constants and enumerations for the crossword assistant."""

from __future__ import annotations

from enum import Enum


WILDCARD = "."
PLACEHOLDER_KEY_MARKER = "xxxx"


class Orientation(str, Enum):
    """Reading direction of a word slot, anchored at its first letter."""

    RIGHT = "R"
    LEFT = "L"
    DOWN = "D"
    UP = "U"

    @property
    def is_horizontal(self) -> bool:
        return self in (Orientation.RIGHT, Orientation.LEFT)

    @property
    def is_vertical(self) -> bool:
        return self in (Orientation.DOWN, Orientation.UP)

    @property
    def is_reversed(self) -> bool:
        """Letters run towards decreasing coordinates."""
        return self in (Orientation.LEFT, Orientation.UP)

    def is_parallel(self, other: "Orientation") -> bool:
        return self.is_horizontal == other.is_horizontal


class SolveState(str, Enum):
    """Overall board status after a propagation pass."""

    UNSOLVED = "UNSOLVED"
    UNSOLVABLE = "UNSOLVABLE"
    AMBIGUOUS = "AMBIGUOUS"
    SOLVED = "SOLVED"
