"""Lightweight HTTP client for the online crossword dictionary."""

from __future__ import annotations

import os
from collections import defaultdict
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote, urljoin

import requests

from ..core.exceptions import WordSourceError
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

DEFAULT_BASE_URL = "https://www.gratiskryssord.no/kryssordbok/"
NEXT_LINK_PREFIX = "shFunc.setNextLink('"


@dataclass
class WordbookConfig:
    """Configuration for the remote word source."""

    base_url: str = field(
        default_factory=lambda: os.environ.get("CROSSFILL_WORDBOOK_URL", DEFAULT_BASE_URL)
    )
    timeout_seconds: float = 30.0
    max_pages: int = 50


VOID_TAGS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "wbr"}
)


class _AnswerPageParser(HTMLParser):
    """Collects answer links and the pagination target of one result page.

    Answers are ``section > ul > li > a`` links inside the page's
    ``article``, which itself sits in the outer page section. Navigation,
    sidebars and footers outside the article are ignored. The next page is
    announced through an ``ng-init`` attribute of the pagination list.
    """

    def __init__(self) -> None:
        super().__init__()
        self.words: List[str] = []
        self.next_links: List[str] = []
        self._stack: List[str] = []
        self._in_link = False
        self._link_text: List[str] = []

    def _at_answer_link(self) -> bool:
        if self._stack[-3:] != ["section", "ul", "li"] or "article" not in self._stack:
            return False
        return "section" in self._stack[: self._stack.index("article")]

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        for name, value in attrs:
            if name == "ng-init" and value and value.startswith(NEXT_LINK_PREFIX):
                self.next_links.append(value[len(NEXT_LINK_PREFIX):].replace("');", ""))
        if tag == "a" and self._at_answer_link():
            self._in_link = True
            self._link_text = []
        if tag not in VOID_TAGS:
            self._stack.append(tag)

    def handle_endtag(self, tag: str) -> None:
        if tag == "a" and self._in_link:
            self._in_link = False
            text = "".join(self._link_text).strip()
            if text:
                self.words.append(text)
        if tag in self._stack:
            # Close everything opened after the matching tag as well.
            del self._stack[len(self._stack) - 1 - self._stack[::-1].index(tag):]

    def handle_data(self, data: str) -> None:
        if self._in_link:
            self._link_text.append(data)


class WordbookClient:
    """Fetches the candidate answers listed for a clue key."""

    def __init__(
        self,
        config: Optional[WordbookConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or WordbookConfig()
        self._session = session or requests.Session()

    def fetch(self, key: str) -> Dict[int, List[str]]:
        """Return every single-word answer for ``key`` grouped by length."""
        url = urljoin(self.config.base_url, quote(key))
        words: Dict[int, List[str]] = defaultdict(list)
        LOGGER.info("Looking up '%s' from %s", key, self.config.base_url)

        for _ in range(self.config.max_pages):
            parser = _AnswerPageParser()
            parser.feed(self._get(url))
            for word in parser.words:
                if " " in word:
                    continue
                words[len(word)].append(word)

            next_link = parser.next_links[-1] if parser.next_links else ""
            if not next_link:
                break
            url = urljoin(url, next_link)
        else:
            LOGGER.warning("Stopped after %d pages for '%s'", self.config.max_pages, key)

        return dict(words)

    def _get(self, url: str) -> str:
        try:
            response = self._session.get(url, timeout=self.config.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise WordSourceError(f"Word lookup request failed: {exc}") from exc
        return response.text
