"""Heuristic detection of keyboard-mash and other non-meaningful text.

Natural language, English or not, reliably has a vowel ratio above roughly
25-40% and rarely more than six or seven consonants in a row. The limits in
:class:`GibberishThresholds` are empirical and meant to be tuned per preset.

Only Latin-script letters are scored; text in other scripts is treated as
indeterminate rather than as gibberish.
"""

from __future__ import annotations

import re
from typing import Optional

from textguard.moderation.models import GibberishThresholds

VOWELS = frozenset("aeiouáéíóúàèìòùâêîôûäëïöüœæ")

_LATIN_LETTER = "a-zà-öø-ÿœæ"
_NON_LETTER_RE = re.compile(rf"[^{_LATIN_LETTER}\s]+")
_WORD_RE = re.compile(rf"[{_LATIN_LETTER}]+")

# English plus a small Spanish / French subset.
COMMON_WORDS: frozenset[str] = frozenset(
    """
    a about after again all also am an and any are as at be because been before
    being but by can could day did do does doing done down each even every for
    from get go going good got great had has have he her here him his how i if
    in into is it its just know like little long look love made make many me
    more most much my need never new no not now of off old on one only or other
    our out over people really right said same see she should so some still
    such take than that the their them then there these they thing think this
    those time to too two up us very want was way we well went were what when
    where which while who why will with work would year yes you your
    enjoy fun family friend friends life live food music travel read book books
    movie movies dog dogs cat cats home city walk walks hiking cooking coffee
    weekend weekends looking partner someone together kind honest happy
    el la los las un una y o de del en con por para que es no si mi tu su pero
    muy como mas amor vida familia amigos me gusta soy tengo
    le les une et ou des du au aux avec pour pas est je tu il elle nous vous
    mon ma mes ton ta très bien aime suis ai oui non vie amour famille amis
    """.split()
)


class GibberishClassifier:
    """Scores text against the gibberish heuristics, in a fixed order."""

    def __init__(self, thresholds: Optional[GibberishThresholds] = None) -> None:
        self.thresholds = thresholds or GibberishThresholds()
        t = self.thresholds
        self._char_repeat_re = re.compile(rf"(.)\1{{{t.max_char_repeat},}}")
        self._pattern_repeat_re = re.compile(rf"(.{{2,3}})\1{{{t.min_pattern_repeats - 1},}}")

    def is_gibberish(self, text: Optional[str]) -> bool:
        if not text:
            return False
        t = self.thresholds

        stripped = _NON_LETTER_RE.sub("", text.lower())
        letters = "".join(_WORD_RE.findall(stripped))
        if len(stripped.strip()) < t.min_text_length or len(letters) < t.min_letters:
            return False

        ratio = vowel_ratio(letters)
        if ratio < t.min_vowel_ratio:
            return True
        if self._has_consonant_run(stripped):
            return True
        if self._char_repeat_re.search(letters):
            return True
        if self._pattern_repeat_re.search(letters):
            return True
        if len(letters) >= t.dictionary_min_letters and ratio < t.dictionary_max_vowel_ratio:
            words = _WORD_RE.findall(stripped)
            if not any(w in COMMON_WORDS for w in words):
                return True
        return False

    def _has_consonant_run(self, stripped: str) -> bool:
        for word in _WORD_RE.findall(stripped):
            consonants_only = "".join(" " if c in VOWELS else c for c in word)
            if any(len(run) > self.thresholds.max_consonant_run for run in consonants_only.split()):
                return True
        return False


def vowel_ratio(letters: str) -> float:
    if not letters:
        return 0.0
    return sum(1 for c in letters if c in VOWELS) / len(letters)


_default_classifier = GibberishClassifier()


def detect_gibberish(text: Optional[str]) -> bool:
    """Classify *text* with the default thresholds."""
    return _default_classifier.is_gibberish(text)
