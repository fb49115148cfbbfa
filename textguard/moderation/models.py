"""Data models for the content moderation system."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Category(Enum):
    """Why a deny-list term is blocked."""

    SLUR = "slur"
    PROFANITY = "profanity"
    SCAM = "scam"
    HATE_SPEECH = "hate-speech"


@dataclass(frozen=True)
class BlockListEntry:
    """A single deny-list term."""

    term: str
    category: Category = Category.PROFANITY


@dataclass(frozen=True)
class AllowListEntry:
    """A term that must never be flagged, even if a deny-list contains it."""

    term: str


@dataclass(frozen=True)
class PlatformPattern:
    """Detection rules for one social platform or contact channel family."""

    platform: str
    raw_patterns: tuple[re.Pattern[str], ...] = ()
    normalized_substrings: tuple[str, ...] = ()


@dataclass(frozen=True)
class NormalizedText:
    """Alternate canonical views of one input string."""

    digit_expanded: str
    separator_stripped: str
    homoglyph_folded: str
    mixed_digits: str


@dataclass(frozen=True)
class DetectionContext:
    """Raw text plus its normalized views, built once per call."""

    raw: str
    normalized: NormalizedText


@dataclass(frozen=True)
class ModerationResult:
    """Result of a content moderation check."""

    is_clean: bool
    profane_words: Optional[frozenset[str]] = None
    cleaned_text: Optional[str] = None
    is_gibberish: Optional[bool] = None


@dataclass(frozen=True)
class ValidationOptions:
    """Which checks ``validate_content`` runs and how errors name the field."""

    check_profanity: bool = True
    check_contact_info: bool = False
    check_gibberish: bool = False
    field_name: str = "text"


@dataclass(frozen=True)
class ValidationOutcome:
    """Verdict returned to the hosting application before it persists text."""

    is_valid: bool
    error: Optional[str] = None
    moderation_result: Optional[ModerationResult] = None


@dataclass(frozen=True)
class GibberishThresholds:
    """Tunable limits for the gibberish heuristics."""

    min_text_length: int = 10
    min_letters: int = 5
    min_vowel_ratio: float = 0.15
    max_consonant_run: int = 7  # a run longer than this is gibberish
    max_char_repeat: int = 4  # a character repeated more than this is gibberish
    min_pattern_repeats: int = 4
    dictionary_min_letters: int = 31
    dictionary_max_vowel_ratio: float = 0.25


@dataclass(frozen=True)
class PolicyConfig:
    """The parsed form of one moderation preset."""

    name: str
    description: str = ""
    deny_list: str = "curated"  # "broad" | "curated"
    extra_deny_lists: tuple[str, ...] = ()
    allow_list: str = ""
    contact_info_enabled: bool = True
    gibberish_enabled: bool = True
    gibberish_thresholds: GibberishThresholds = field(default_factory=GibberishThresholds)
    fields: dict[str, ValidationOptions] = field(default_factory=dict, hash=False, compare=False)
