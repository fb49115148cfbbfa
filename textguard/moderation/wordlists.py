"""Deny-list matching with allow-list carve-outs.

Two deny-list backends are supported:

- ``broad``: the general-purpose word list bundled with ``better_profanity``
- ``curated``: a narrow list of slurs, hate speech and severe profanity

Both are extended with the preset's extra lists and reduced by its
allow-list. Compiled word lists are built once per configuration by a
:class:`WordListFactory` and are read-only afterwards, so a single handle can
be shared by every thread.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field
from typing import Iterable, Optional

from better_profanity.utils import get_complete_path_of_file, read_wordlist

from textguard.moderation.config import ModerationConfigError, WordListData, load_word_lists
from textguard.moderation.models import BlockListEntry, Category, PolicyConfig

logger = logging.getLogger(__name__)

BROAD_WORDLIST_FILE = "profanity_wordlist.txt"


def compile_term(term: str) -> re.Pattern[str]:
    """Compile a boundary-anchored, case-insensitive pattern for *term*.

    Lookarounds are used instead of ``\\b`` so terms that start or end with a
    non-word character (``a$$``) still respect word boundaries.
    """
    return re.compile(rf"(?<!\w){re.escape(term)}(?!\w)", re.IGNORECASE)


class WordListMatcher:
    """Boundary-safe matcher for a deny-list minus an allow-list."""

    def __init__(self, deny_terms: Iterable[str], allow_terms: Iterable[str] = ()) -> None:
        allowed = {t.strip().lower() for t in allow_terms if t and t.strip()}
        terms: list[str] = []
        seen: set[str] = set()
        for raw in deny_terms:
            term = raw.strip().lower() if raw else ""
            if not term or term in allowed or term in seen:
                continue
            seen.add(term)
            terms.append(term)

        self.terms: tuple[str, ...] = tuple(terms)
        self.allowed: frozenset[str] = frozenset(allowed)
        self._patterns: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
            (t, compile_term(t)) for t in terms
        )

    def __len__(self) -> int:
        return len(self.terms)

    def match(self, text: str) -> frozenset[str]:
        """Return the distinct deny terms found in *text*."""
        if not text:
            return frozenset()
        return frozenset(term for term, pattern in self._patterns if pattern.search(text))

    def spans(self, text: str, terms: Optional[Iterable[str]] = None) -> list[tuple[int, int]]:
        """Return ``(start, end)`` for every occurrence of every matched term."""
        if not text:
            return []
        wanted = set(terms) if terms is not None else None
        spans = []
        for term, pattern in self._patterns:
            if wanted is not None and term not in wanted:
                continue
            spans.extend(m.span() for m in pattern.finditer(text))
        return spans


@dataclass(frozen=True)
class CompiledWordList:
    """Immutable handle over a compiled deny-list."""

    matcher: WordListMatcher
    backend: str
    fell_back: bool = False
    categories: dict[str, Category] = field(default_factory=dict, hash=False, compare=False)

    def category_of(self, term: str) -> Category:
        return self.categories.get(term.lower(), Category.PROFANITY)


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------


def read_broad_wordlist() -> list[str]:
    """Read the general-purpose word list shipped with ``better_profanity``."""
    return list(read_wordlist(get_complete_path_of_file(BROAD_WORDLIST_FILE)))


def _named_deny_list(data: WordListData, name: str) -> tuple[BlockListEntry, ...]:
    try:
        return data.deny_lists[name]
    except KeyError:
        raise ModerationConfigError(f"Unknown deny list {name!r}") from None


def _broad_entries() -> list[BlockListEntry] | None:
    try:
        words = read_broad_wordlist()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Broad word list unavailable (%s); falling back to curated list", e)
        return None
    if not words:
        logger.warning("Broad word list is empty; falling back to curated list")
        return None
    return [BlockListEntry(term=w.lower()) for w in words]


def build_word_list(config: PolicyConfig, data: WordListData | None = None) -> CompiledWordList:
    """Compile the deny-list described by *config*.

    If the broad backend cannot be constructed, the curated list is used
    instead and the handle reports ``fell_back=True``.
    """
    data = data if data is not None else load_word_lists()

    backend = config.deny_list
    fell_back = False
    entries: list[BlockListEntry] | None = None
    if backend == "broad":
        entries = _broad_entries()
        if entries is None:
            backend, fell_back = "curated", True
    if entries is None:
        entries = list(_named_deny_list(data, "curated"))

    for name in config.extra_deny_lists:
        entries.extend(_named_deny_list(data, name))

    allow_terms: list[str] = []
    if config.allow_list:
        try:
            allow_terms = [e.term for e in data.allow_lists[config.allow_list]]
        except KeyError:
            raise ModerationConfigError(f"Unknown allow list {config.allow_list!r}") from None

    try:
        matcher = WordListMatcher((e.term for e in entries), allow_terms)
    except re.error as e:
        raise ModerationConfigError(f"Cannot compile deny list for preset {config.name!r}: {e}") from e

    # Categorised entries win over the uncategorised broad list.
    categories: dict[str, Category] = {}
    for entry in entries:
        if entry.term not in categories or entry.category is not Category.PROFANITY:
            categories[entry.term] = entry.category

    logger.debug(
        "Compiled %d deny terms for preset %r (backend=%s, fell_back=%s)",
        len(matcher), config.name, backend, fell_back,
    )
    return CompiledWordList(matcher=matcher, backend=backend, fell_back=fell_back, categories=categories)


class WordListFactory:
    """Builds each distinct compiled word list exactly once.

    Concurrent first calls for the same configuration block on a lock, so
    the (comparatively expensive) compilation never runs twice.
    """

    def __init__(self, data: WordListData | None = None) -> None:
        self._data = data
        self._lock = threading.Lock()
        self._cache: dict[tuple, CompiledWordList] = {}

    @staticmethod
    def key(config: PolicyConfig) -> tuple:
        return (config.deny_list, config.extra_deny_lists, config.allow_list)

    def get(self, config: PolicyConfig) -> CompiledWordList:
        key = self.key(config)
        handle = self._cache.get(key)
        if handle is not None:
            return handle
        with self._lock:
            handle = self._cache.get(key)
            if handle is None:
                if self._data is None:
                    self._data = load_word_lists()
                handle = build_word_list(config, self._data)
                self._cache[key] = handle
        return handle

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


default_factory = WordListFactory()
