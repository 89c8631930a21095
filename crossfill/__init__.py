"""Crossword construction assistant.

This package exposes the public API surface via:

- ``crossfill.engine.board.Board``: crossing-constraint model and propagation solver.
- ``crossfill.data.dictionary.WordDictionary``: keyed word lists and hint lookups.
- ``crossfill.engine.session.CrosswordSession``: command layer used by the shell.
"""

from .core.constants import Orientation, SolveState
from .core.models import WordSlot
from .data.dictionary import DictionaryConfig, WordDictionary
from .engine.board import Board
from .engine.session import CrosswordSession, SessionConfig

__all__ = [
    "Board",
    "CrosswordSession",
    "DictionaryConfig",
    "Orientation",
    "SessionConfig",
    "SolveState",
    "WordDictionary",
    "WordSlot",
]

__version__ = "0.1.0"
