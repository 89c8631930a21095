"""Keyed word dictionary and candidate retrieval."""

from __future__ import annotations

import json
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Set

from ..core.exceptions import DictionaryLoadError, WordSourceError
from ..utils.logger import get_logger
from .normalization import clean_hint, clean_word, is_placeholder_key, matches_hint


LOGGER = get_logger(__name__)


class WordSource(Protocol):
    """Protocol implemented by remote word list providers."""

    def fetch(self, key: str) -> Dict[int, List[str]]:
        ...


@dataclass
class DictionaryConfig:
    """Configuration for dictionary loading and lookups."""

    path: Path | str
    fetch_missing: bool = True
    source: Optional[WordSource] = None


class WordDictionary:
    """Maps clue keys to answer words, grouped by word length.

    The on-disk form is ``{"words": {key: {length: [word, ...]}}}``. Unknown
    keys are fetched from the configured word source on first lookup.
    """

    def __init__(self, config: DictionaryConfig) -> None:
        self.config = config
        self.path = Path(config.path)
        self._words: Dict[str, Dict[int, List[str]]] = {}
        self._failed_keys: Set[str] = set()
        self._changed = False
        self._load()

    # ------------------------------------------------------------------
    # Loading & persistence
    # ------------------------------------------------------------------
    def _load(self) -> None:
        if not self.path.exists():
            LOGGER.info("Dictionary %s not found, starting empty", self.path)
            return
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            raw_words = payload.get("words", {})
            for key, by_length in raw_words.items():
                for length, words in by_length.items():
                    bucket = self._words.setdefault(key, {}).setdefault(int(length), [])
                    for word in words:
                        cleaned = clean_word(word)
                        if cleaned and cleaned not in bucket:
                            bucket.append(cleaned)
        except (OSError, ValueError, AttributeError) as exc:
            raise DictionaryLoadError(f"Cannot read dictionary {self.path}: {exc}") from exc
        LOGGER.info("Loaded %d keys from %s", len(self._words), self.path)

    def save(self, path: Path | str | None = None) -> Path:
        destination = Path(path) if path is not None else self.path
        payload = {
            "words": {
                key: {str(length): words for length, words in sorted(by_length.items())}
                for key, by_length in sorted(self._words.items())
            }
        }
        destination.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        self.path = destination
        self._changed = False
        LOGGER.info("Dictionary saved to %s", destination)
        return destination

    @property
    def changed(self) -> bool:
        return self._changed

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def keys(self) -> List[str]:
        return sorted(self._words)

    def contains(self, key: str, word: str) -> bool:
        cleaned = clean_word(word)
        return cleaned in self._words.get(key, {}).get(len(cleaned), [])

    def lookup(self, key: str, length: int, hint: Optional[str] = None) -> List[str]:
        """Return the words of ``key`` with ``length`` letters matching ``hint``."""
        pattern = clean_hint(hint, length)
        if key not in self._words:
            self._fetch(key)
        words = self._words.get(key, {}).get(length, [])
        return [word for word in words if matches_hint(word, pattern)]

    def add_word(self, key: str, word: str) -> bool:
        if is_placeholder_key(key):
            LOGGER.warning("Not adding word for unknown key '%s'", key)
            return False
        cleaned = clean_word(word)
        if not cleaned:
            LOGGER.warning("Not adding invalid word '%s'", word)
            return False
        bucket = self._words.setdefault(key, {}).setdefault(len(cleaned), [])
        if cleaned in bucket:
            return False
        bucket.append(cleaned)
        self._changed = True
        LOGGER.info("Added '%s' under '%s'", cleaned, key)
        return True

    def add_words(self, key: str, words: Iterable[str]) -> int:
        return sum(1 for word in words if self.add_word(key, word))

    # ------------------------------------------------------------------
    # Remote acquisition
    # ------------------------------------------------------------------
    def _fetch(self, key: str) -> None:
        source = self.config.source
        if not self.config.fetch_missing or source is None:
            return
        if is_placeholder_key(key):
            LOGGER.debug("Skip looking up unknown key '%s'", key)
            return
        if key in self._failed_keys:
            return
        try:
            fetched = source.fetch(key)
        except WordSourceError as exc:
            LOGGER.warning("Lookup of '%s' failed: %s", key, exc)
            self._failed_keys.add(key)
            return

        by_length: Dict[int, List[str]] = defaultdict(list)
        for words in fetched.values():
            for word in words:
                cleaned = clean_word(word)
                if cleaned and cleaned not in by_length[len(cleaned)]:
                    by_length[len(cleaned)].append(cleaned)
        self._words[key] = dict(by_length)
        self._changed = True
        LOGGER.info(
            "Fetched %d words for '%s'",
            sum(len(words) for words in by_length.values()),
            key,
        )
