"""Detection of off-platform contact information.

Sub-detectors run in a fixed order (phone, email, social, URL,
off-platform phrasing) and the first positive one decides. Each is public so
callers and tests can run one in isolation.
"""

from __future__ import annotations

import re
from typing import Optional

from textguard.moderation.models import NormalizedText
from textguard.moderation.normalizer import normalize
from textguard.moderation.rules import ContactRules, default_contact_rules

_DIGIT_RUN_RE = re.compile(r"\d+")
_WHITESPACE_RE = re.compile(r"\s+")


class ContactInfoDetector:
    """OR-aggregation of the contact-info sub-detectors."""

    def __init__(self, rules: Optional[ContactRules] = None) -> None:
        self.rules = rules or default_contact_rules()

    def detect(self, text: str, normalized: Optional[NormalizedText] = None) -> bool:
        if not text or not text.strip():
            return False
        normalized = normalized or normalize(text)
        return (
            self.detect_phone(text, normalized)
            or self.detect_email(text)
            or self.detect_social(text, normalized)
            or self.detect_url(text)
            or self.detect_off_platform(text)
        )

    # -- sub-detectors -------------------------------------------------------

    def detect_phone(self, text: str, normalized: Optional[NormalizedText] = None) -> bool:
        """Spaced, spelled-out or mixed digit/word phone numbers."""
        rules = self.rules.phone
        normalized = normalized or normalize(text)

        if rules.min_digits <= len(normalized.mixed_digits) <= rules.max_digits:
            return True

        runs = _DIGIT_RUN_RE.findall(normalized.separator_stripped)
        if not any(len(run) >= rules.min_digits for run in runs):
            return False

        # A long number alone is not enough (order ids, years, prices).
        digits = "".join(runs)
        if not rules.min_digits <= len(digits) <= rules.max_digits:
            return False
        if len(digits) >= rules.uncorroborated_digits:
            return True
        return any(p.search(text) for p in rules.context)

    def detect_email(self, text: str) -> bool:
        """Plain, obfuscated and misspelled email addresses or providers."""
        rules = self.rules.email
        if any(p.search(text) for p in rules.patterns):
            return True

        lowered = text.lower()
        if any(p.search(lowered) for p in rules.provider_variants):
            return True

        # "g mail", "gmale", "gm@il" all end up as "gmail" here.
        squashed = _WHITESPACE_RE.sub("", lowered)
        for pattern, replacement in rules.misspellings:
            squashed = pattern.sub(replacement, squashed)
        return any(provider in squashed for provider in rules.providers)

    def detect_social(self, text: str, normalized: Optional[NormalizedText] = None) -> bool:
        """Platform names (raw or leetspeak), handles and short-link domains."""
        rules = self.rules.social
        folded = (normalized or normalize(text)).homoglyph_folded
        for platform in rules.platforms:
            if any(p.search(text) for p in platform.raw_patterns):
                return True
            if any(s in folded for s in platform.normalized_substrings):
                return True
        if any(p.search(text) for p in rules.handles):
            return True
        return any(p.search(text) for p in rules.short_links)

    def detect_url(self, text: str) -> bool:
        return any(p.search(text) for p in self.rules.url)

    def detect_off_platform(self, text: str) -> bool:
        """Phrasing that asks to continue the conversation elsewhere."""
        lowered = text.lower()
        return any(p.search(lowered) for p in self.rules.off_platform)

    def matched_platforms(self, text: str, normalized: Optional[NormalizedText] = None) -> list[str]:
        """Names of every platform whose rules fire on *text*."""
        folded = (normalized or normalize(text)).homoglyph_folded
        return [
            platform.platform
            for platform in self.rules.social.platforms
            if any(p.search(text) for p in platform.raw_patterns)
            or any(s in folded for s in platform.normalized_substrings)
        ]
