"""Text normalization passes used to defeat obfuscated contact details.

Each pass targets one evasion technique and produces its own view of the
input; detectors pick the view that fits the pattern they look for:

- digit expansion: spelled-out numbers ("five five five") become digits
- separator stripping: spaced-out sequences ("5 5 5-1 2 3") collapse
- homoglyph folding: leetspeak substitutions ("1nst@gram") become letters
- mixed-digit extraction: alternating digits and words ("1, eight, 4")

Digit expansion and homoglyph folding deliberately stay separate: folding
turns ``0`` into ``o`` while expansion turns ``oh`` into ``0``.
"""

from __future__ import annotations

import re

from textguard.moderation.models import NormalizedText

# Spelled-out numbers, homophones and common misspellings.
NUMBER_WORDS: dict[str, str] = {
    "zero": "0", "one": "1", "two": "2", "three": "3", "four": "4",
    "five": "5", "six": "6", "seven": "7", "eight": "8", "nine": "9",
    "ten": "10",
    "oh": "0", "nil": "0", "nada": "0",
    "won": "1", "wan": "1",
    "too": "2", "tu": "2",
    "tree": "3", "free": "3", "tre": "3",
    "fo": "4", "fore": "4", "fourr": "4",
    "fiv": "5", "fife": "5",
    "siks": "6", "sic": "6", "sixx": "6",
    "sevn": "7", "sven": "7",
    "ate": "8", "eit": "8", "eigt": "8",
    "nein": "9", "nyne": "9", "nin": "9",
}

HOMOGLYPHS: dict[str, str] = {
    "@": "a", "4": "a", "3": "e", "1": "i", "!": "i", "0": "o",
    "$": "s", "5": "s", "7": "t", "+": "t", "8": "b",
}

_NUMBER_WORD_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(rf"\b{re.escape(word)}\b"), digit)
    for word, digit in NUMBER_WORDS.items()
]

_SEPARATORS_RE = re.compile(r"[\s\-_.()/\\,]+")
_PLATFORM_SEPARATORS_RE = re.compile(r"[\s\-_.]+")
_HOMOGLYPH_TABLE = str.maketrans(HOMOGLYPHS)
_DIGITS_RE = re.compile(r"^\d+$")


def expand_digits(text: str) -> str:
    """Lower-case *text* and replace whole-word number words with digits."""
    expanded = text.lower()
    for pattern, digit in _NUMBER_WORD_PATTERNS:
        expanded = pattern.sub(digit, expanded)
    return expanded


def strip_separators(text: str) -> str:
    return _SEPARATORS_RE.sub("", text)


def fold_homoglyphs(text: str) -> str:
    """Map leetspeak characters to letters and drop spacing separators."""
    folded = text.lower().translate(_HOMOGLYPH_TABLE)
    return _PLATFORM_SEPARATORS_RE.sub("", folded)


def extract_mixed_digits(text: str) -> str:
    """Concatenate every digit token and number-word token, in order.

    ``"1, eight, 4, seven"`` becomes ``"1847"``; tokens that are neither are
    skipped.
    """
    result = []
    for token in _SEPARATORS_RE.split(text.lower()):
        if not token:
            continue
        if _DIGITS_RE.match(token):
            result.append(token)
        elif token in NUMBER_WORDS:
            result.append(NUMBER_WORDS[token])
    return "".join(result)


def normalize(text: str) -> NormalizedText:
    """Compute every normalized view of *text*."""
    digit_expanded = expand_digits(text)
    return NormalizedText(
        digit_expanded=digit_expanded,
        separator_stripped=strip_separators(digit_expanded),
        homoglyph_folded=fold_homoglyphs(text),
        mixed_digits=extract_mixed_digits(text),
    )
