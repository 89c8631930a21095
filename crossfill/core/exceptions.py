"""Custom exception hierarchy for the crossword assistant."""

from typing import Sequence


class CrosswordError(Exception):
    """Base exception for assistant failures."""


class ConstructionError(CrosswordError):
    """Raised when a board definition is malformed or its slots conflict."""


class InvalidCommitError(CrosswordError):
    """Raised when a value cannot be committed to a slot."""


class SlotNotFoundError(CrosswordError):
    """Raised when no slot matches a user supplied reference."""


class AmbiguousSlotError(CrosswordError):
    """Raised when a slot reference matches several slots."""

    def __init__(self, token: str, matches: Sequence[int]) -> None:
        super().__init__(f"'{token}' matches {len(matches)} slots")
        self.token = token
        self.matches = list(matches)


class DictionaryLoadError(CrosswordError):
    """Raised when the dictionary JSON cannot be read."""


class WordSourceError(CrosswordError):
    """Raised when the remote word source fails to deliver a word list."""
