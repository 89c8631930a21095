"""Interactive editing session over one board and its dictionary."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Set

from ..core.constants import SolveState
from ..core.exceptions import AmbiguousSlotError, InvalidCommitError, SlotNotFoundError
from ..data.dictionary import DictionaryConfig, WordDictionary
from ..data.normalization import clean_word
from ..io.board_file import load_board, write_board
from ..io.wordbook_client import WordbookClient
from ..utils.logger import get_logger
from .board import Board


LOGGER = get_logger(__name__)


@dataclass
class SessionConfig:
    board_path: Path | str
    dictionary_path: Path | str = "dict.json"
    fetch_missing: bool = True

    def to_dictionary_config(self) -> DictionaryConfig:
        return DictionaryConfig(
            path=self.dictionary_path,
            fetch_missing=self.fetch_missing,
            source=WordbookClient() if self.fetch_missing else None,
        )


class SlotFilter(str, Enum):
    ALL = "all"
    PLACED = "placed"
    UNPLACED = "unplaced"
    MISSING = "missing"
    AMBIGUOUS = "ambiguous"


class CrosswordSession:
    """Command layer between the shell and the board."""

    def __init__(self, board: Board, dictionary: WordDictionary, board_path: Path | str) -> None:
        self.board = board
        self.dictionary = dictionary
        self.board_path = Path(board_path)

    @classmethod
    def open(cls, config: SessionConfig) -> "CrosswordSession":
        dictionary = WordDictionary(config.to_dictionary_config())
        board = load_board(config.board_path, dictionary)
        return cls(board, dictionary, config.board_path)

    # ------------------------------------------------------------------
    # Solving
    # ------------------------------------------------------------------
    def solve(self) -> SolveState:
        return self.board.solve_repeated()

    def place(self, index: int, word: str) -> None:
        slot = self.board.slots[index]
        value = clean_word(word)
        if len(value) != slot.length:
            raise InvalidCommitError(
                f"'{word}' has {len(value)} letters, slot [{index}] needs {slot.length}"
            )
        self.board.commit(index, value)
        if slot.key is not None:
            self.dictionary.add_word(slot.key, value)

    def unplace(self, index: int) -> None:
        self.board.rollback(index)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def find_slot(self, token: str) -> int:
        """Resolve a slot index, clue key or placed word to a slot index."""
        if token.isdecimal():
            index = int(token)
            if index >= len(self.board.slots):
                raise SlotNotFoundError(f"No slot with index {index}")
            return index

        word = clean_word(token)
        hits = [
            index
            for index, slot in enumerate(self.board.slots)
            if slot.key == token or (slot.committed and slot.value == word)
        ]
        if not hits:
            raise SlotNotFoundError(f"Word '{token}' not found")
        if len(hits) > 1:
            raise AmbiguousSlotError(token, hits)
        return hits[0]

    def slot_indices(self, which: SlotFilter = SlotFilter.ALL) -> List[int]:
        selected = []
        for index, slot in enumerate(self.board.slots):
            if which == SlotFilter.PLACED and not slot.committed:
                continue
            if which not in (SlotFilter.ALL, SlotFilter.PLACED) and slot.committed:
                continue
            if which == SlotFilter.MISSING and not slot.is_missing():
                continue
            if which == SlotFilter.AMBIGUOUS and not slot.is_ambiguous():
                continue
            selected.append(index)
        return selected

    def lookup(self, key: str, length_or_hint: str) -> List[str]:
        if length_or_hint.isdecimal():
            return self.dictionary.lookup(key, int(length_or_hint))
        return self.dictionary.lookup(key, len(length_or_hint), length_or_hint)

    def add_word(self, key: str, word: str) -> bool:
        return self.dictionary.add_word(key, word)

    def add_words(self, key: str, words: List[str]) -> int:
        return self.dictionary.add_words(key, words)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def store_board(self, path: Path | str | None = None) -> Path:
        self.board_path = write_board(self.board, path or self.board_path)
        return self.board_path

    def store_dictionary(self, path: Path | str | None = None) -> Path:
        return self.dictionary.save(path)

    # ------------------------------------------------------------------
    # Completion support
    # ------------------------------------------------------------------
    def completion_keys(self, include_dictionary: bool = False) -> List[str]:
        keys = {slot.key for slot in self.board.slots if slot.key is not None}
        if include_dictionary:
            keys.update(self.dictionary.keys())
        return sorted(keys)

    def completion_candidates(self, token: str) -> List[str]:
        """Candidates of every slot referenced by a key or an index."""
        pools: Dict[str, Set[str]] = {}
        for index, slot in enumerate(self.board.slots):
            pools.setdefault(str(index), set()).update(slot.candidates)
            if slot.key is not None:
                pools.setdefault(slot.key, set()).update(slot.candidates)
        return sorted(pools.get(token, set()))
