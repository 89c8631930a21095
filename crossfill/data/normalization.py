"""Shared helpers for word and hint normalization."""

from __future__ import annotations

from typing import Optional

from ..core.constants import PLACEHOLDER_KEY_MARKER, WILDCARD


def clean_word(text: str) -> str:
    """Return the trimmed uppercase form of ``text``, or "" for multi-word entries."""

    if not text:
        return ""
    stripped = text.strip()
    if not stripped or any(char.isspace() for char in stripped):
        return ""
    return stripped.upper()


def clean_hint(hint: Optional[str], length: int) -> str:
    """Uppercase a hint, or build an all-wildcard hint when none is given."""

    if hint is None:
        return WILDCARD * length
    if len(hint) != length:
        raise ValueError(f"Hint '{hint}' does not have length {length}")
    return "".join(char if char == WILDCARD else char.upper() for char in hint)


def matches_hint(word: str, hint: str) -> bool:
    return len(word) == len(hint) and all(
        expected == WILDCARD or expected == actual for actual, expected in zip(word, hint)
    )


def is_placeholder_key(key: str) -> bool:
    """Keys containing the placeholder marker stand for clues not yet known."""

    return PLACEHOLDER_KEY_MARKER in key


__all__ = ["clean_hint", "clean_word", "is_placeholder_key", "matches_hint"]
