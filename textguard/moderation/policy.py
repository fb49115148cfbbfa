"""Moderation policy: runs the enabled checks for one preset.

A :class:`ModerationPolicy` is a pure function of its input text and its
static configuration. The compiled deny-list is either injected or fetched
from the shared :class:`~textguard.moderation.wordlists.WordListFactory` on
first use; nothing else is shared between calls.

Check order in :meth:`ModerationPolicy.validate_content` is fixed:
gibberish, then profanity, then contact information. The first failing
check decides the error message.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional

from textguard.moderation.config import PresetCatalog, load_presets
from textguard.moderation.contact import ContactInfoDetector
from textguard.moderation.gibberish import GibberishClassifier
from textguard.moderation.models import (
    Category,
    DetectionContext,
    ModerationResult,
    PolicyConfig,
    ValidationOptions,
    ValidationOutcome,
)
from textguard.moderation.normalizer import normalize
from textguard.moderation.redaction import mask_spans
from textguard.moderation.wordlists import CompiledWordList, WordListFactory, default_factory

logger = logging.getLogger(__name__)


def get_moderation_error_message(field_name: str = "text") -> str:
    return (
        f"Your {field_name} contains inappropriate language. "
        "Please remove any offensive words and try again."
    )


def get_gibberish_error_message(field_name: str = "text") -> str:
    return (
        f"Your {field_name} doesn't appear to contain meaningful text. "
        "Please write a genuine response."
    )


def get_contact_info_error_message(field_name: str = "text") -> str:
    return (
        f"Please don't share contact information in your {field_name}. "
        "Use in-app messaging to get to know matches first."
    )


def _is_blank(text: Optional[str]) -> bool:
    return not text or not text.strip()


class ModerationPolicy:
    """One moderation stance: active word lists plus enabled checks."""

    def __init__(
        self,
        config: PolicyConfig,
        word_list: Optional[CompiledWordList] = None,
        contact_detector: Optional[ContactInfoDetector] = None,
        factory: Optional[WordListFactory] = None,
    ) -> None:
        self.config = config
        self._word_list = word_list
        self._factory = factory or default_factory
        self._contact_detector = contact_detector
        self.gibberish = GibberishClassifier(config.gibberish_thresholds)

    @classmethod
    def from_preset(cls, name: str | None = None, catalog: PresetCatalog | None = None, **kwargs) -> ModerationPolicy:
        catalog = catalog or load_presets()
        return cls(catalog.get(name), **kwargs)

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def word_list(self) -> CompiledWordList:
        if self._word_list is None:
            self._word_list = self._factory.get(self.config)
        return self._word_list

    @property
    def contact_detector(self) -> ContactInfoDetector:
        if self._contact_detector is None:
            self._contact_detector = ContactInfoDetector()
        return self._contact_detector

    # -- profanity -----------------------------------------------------------

    def moderate_text(self, text: Optional[str]) -> ModerationResult:
        """Check *text* against the active deny-list."""
        if _is_blank(text):
            return ModerationResult(is_clean=True)
        matches = self.word_list.matcher.match(text)
        if not matches:
            return ModerationResult(is_clean=True)
        return ModerationResult(is_clean=False, profane_words=matches)

    def clean_text(self, text: Optional[str]) -> Optional[str]:
        """Mask every matched deny-list term with asterisks of equal length."""
        if _is_blank(text):
            return text
        matcher = self.word_list.matcher
        matches = matcher.match(text)
        if not matches:
            return text
        return mask_spans(text, matcher.spans(text, matches))

    def categorize(self, terms: Iterable[str]) -> dict[str, Category]:
        """Map each matched deny term to the reason it is blocked."""
        return {term: self.word_list.category_of(term) for term in sorted(terms)}

    def _validate_field_text(self, text: Optional[str]) -> ModerationResult:
        result = self.moderate_text(text)
        if not result.is_clean:
            return replace(result, cleaned_text=self.clean_text(text))
        return result

    def validate_display_name(self, display_name: Optional[str]) -> ModerationResult:
        return self._validate_field_text(display_name)

    def validate_bio(self, bio: Optional[str]) -> ModerationResult:
        return self._validate_field_text(bio)

    def validate_prompt_answer(self, answer: Optional[str]) -> ModerationResult:
        return self._validate_field_text(answer)

    def validate_message(self, message: Optional[str]) -> ModerationResult:
        return self._validate_field_text(message)

    # -- contact info / gibberish --------------------------------------------

    def build_context(self, text: str) -> DetectionContext:
        return DetectionContext(raw=text, normalized=normalize(text))

    def contains_contact_info(self, text: Optional[str]) -> bool:
        """Always ``False`` when the preset lets users share contact details."""
        if not self.config.contact_info_enabled or _is_blank(text):
            return False
        ctx = self.build_context(text)
        return self.contact_detector.detect(ctx.raw, ctx.normalized)

    def matched_platforms(self, text: Optional[str]) -> list[str]:
        """Platforms named in *text*; empty when contact checking is off."""
        if not self.config.contact_info_enabled or _is_blank(text):
            return []
        ctx = self.build_context(text)
        return self.contact_detector.matched_platforms(ctx.raw, ctx.normalized)


    def detect_gibberish(self, text: Optional[str]) -> bool:
        return self.gibberish.is_gibberish(text)

    # -- combined validation -------------------------------------------------

    def validate_content(
        self,
        text: Optional[str],
        options: Optional[ValidationOptions] = None,
        **overrides,
    ) -> ValidationOutcome:
        """Run the requested checks and return the first failure, if any.

        Keyword overrides (``check_gibberish=True``, ``field_name="bio"`` …)
        are applied on top of *options*.
        """
        options = options or ValidationOptions()
        if overrides:
            options = replace(options, **overrides)

        if _is_blank(text):
            return ValidationOutcome(is_valid=True)

        field_name = options.field_name

        if options.check_gibberish and self.detect_gibberish(text):
            logger.debug("Rejected %s under preset %r: gibberish", field_name, self.name)
            return ValidationOutcome(
                is_valid=False,
                error=get_gibberish_error_message(field_name),
                moderation_result=ModerationResult(is_clean=False, is_gibberish=True),
            )

        if options.check_profanity:
            result = self.moderate_text(text)
            if not result.is_clean:
                logger.debug("Rejected %s under preset %r: inappropriate language", field_name, self.name)
                return ValidationOutcome(
                    is_valid=False,
                    error=get_moderation_error_message(field_name),
                    moderation_result=result,
                )

        if options.check_contact_info and self.contains_contact_info(text):
            logger.debug("Rejected %s under preset %r: contact information", field_name, self.name)
            return ValidationOutcome(
                is_valid=False,
                error=get_contact_info_error_message(field_name),
            )

        return ValidationOutcome(is_valid=True)

    def field_options(self, field: str) -> ValidationOptions:
        """Default checks for a named profile field.

        Unknown fields get a profanity-only check labelled with the field name.
        """
        return self.config.fields.get(field, ValidationOptions(field_name=field))

    def validate_field(self, field: str, text: Optional[str]) -> ValidationOutcome:
        return self.validate_content(text, self.field_options(field))
