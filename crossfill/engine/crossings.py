"""Crossing index: which slots share a cell, and at which offsets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Sequence, Tuple

from ..core.geometry import SlotGeometry, crossing_offsets


@dataclass(frozen=True)
class Crossing:
    """One crossing seen from a slot: ``other`` shares the cell at ``offset``."""

    other: int
    offset: int
    other_offset: int


class CrossingIndex(Mapping[int, Tuple[Crossing, ...]]):
    """Immutable adjacency table keyed by slot index."""

    def __init__(self, table: Mapping[int, Tuple[Crossing, ...]]) -> None:
        self._table: Dict[int, Tuple[Crossing, ...]] = dict(table)

    @classmethod
    def build(cls, geometries: Sequence[SlotGeometry]) -> "CrossingIndex":
        table: Dict[int, Tuple[Crossing, ...]] = {}
        for a, geom_a in enumerate(geometries):
            entries = []
            for b, geom_b in enumerate(geometries):
                if a == b:
                    continue
                offsets = crossing_offsets(geom_a, geom_b)
                if offsets is not None:
                    entries.append(Crossing(b, offsets[0], offsets[1]))
            table[a] = tuple(entries)
        return cls(table)

    def __getitem__(self, index: int) -> Tuple[Crossing, ...]:
        return self._table.get(index, ())

    def __iter__(self) -> Iterator[int]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, index: object) -> bool:
        return index in self._table

    def pair_count(self) -> int:
        return sum(len(entries) for entries in self._table.values()) // 2
