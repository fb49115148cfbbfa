"""Module-level moderation API bound to the default preset.

The hosting application calls these synchronously before it persists text.
The default preset comes from ``presets.yaml`` (or ``$TEXTGUARD_PRESET``);
:func:`get_policy` returns a shared policy for any other preset.
"""

from __future__ import annotations

import threading
from typing import Optional

from textguard.moderation.config import PresetCatalog, load_presets
from textguard.moderation.models import ModerationResult, ValidationOptions, ValidationOutcome
from textguard.moderation.policy import ModerationPolicy, get_moderation_error_message

__all__ = [
    "get_catalog",
    "get_policy",
    "reset",
    "moderate_text",
    "clean_text",
    "validate_display_name",
    "validate_bio",
    "validate_prompt_answer",
    "validate_message",
    "contains_contact_info",
    "detect_gibberish",
    "validate_content",
    "validate_field",
    "get_moderation_error_message",
]

_lock = threading.Lock()
_catalog: Optional[PresetCatalog] = None
_policies: dict[str, ModerationPolicy] = {}


def get_catalog() -> PresetCatalog:
    global _catalog
    if _catalog is None:
        with _lock:
            if _catalog is None:
                _catalog = load_presets()
    return _catalog


def get_policy(preset: str | None = None) -> ModerationPolicy:
    """Return the shared policy for *preset* (the default preset if omitted)."""
    catalog = get_catalog()
    name = preset or catalog.default
    policy = _policies.get(name)
    if policy is None:
        with _lock:
            policy = _policies.get(name)
            if policy is None:
                policy = ModerationPolicy(catalog.get(name))
                _policies[name] = policy
    return policy


def reset() -> None:
    """Forget the loaded catalog and policies (re-reads configuration)."""
    global _catalog
    with _lock:
        _catalog = None
        _policies.clear()


def moderate_text(text: Optional[str]) -> ModerationResult:
    return get_policy().moderate_text(text)


def clean_text(text: Optional[str]) -> Optional[str]:
    return get_policy().clean_text(text)


def validate_display_name(display_name: Optional[str]) -> ModerationResult:
    return get_policy().validate_display_name(display_name)


def validate_bio(bio: Optional[str]) -> ModerationResult:
    return get_policy().validate_bio(bio)


def validate_prompt_answer(answer: Optional[str]) -> ModerationResult:
    return get_policy().validate_prompt_answer(answer)


def validate_message(message: Optional[str]) -> ModerationResult:
    return get_policy().validate_message(message)


def contains_contact_info(text: Optional[str]) -> bool:
    return get_policy().contains_contact_info(text)


def detect_gibberish(text: Optional[str]) -> bool:
    return get_policy().detect_gibberish(text)


def validate_content(
    text: Optional[str], options: Optional[ValidationOptions] = None, **overrides
) -> ValidationOutcome:
    return get_policy().validate_content(text, options, **overrides)


def validate_field(field: str, text: Optional[str]) -> ValidationOutcome:
    return get_policy().validate_field(field, text)
