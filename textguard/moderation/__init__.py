"""Moderation engine for user-generated text.

Provides:
- Deny-list matching with allow-list carve-outs (profanity, slurs, scams)
- Contact-information detection resistant to common obfuscation
- Heuristic gibberish detection
- Length-preserving redaction
- Named presets that bundle the above into one moderation stance
"""

from textguard.moderation.config import ModerationConfigError
from textguard.moderation.models import ModerationResult, ValidationOptions, ValidationOutcome
from textguard.moderation.moderator import (
    clean_text,
    contains_contact_info,
    detect_gibberish,
    get_moderation_error_message,
    get_policy,
    moderate_text,
    validate_bio,
    validate_content,
    validate_display_name,
    validate_field,
    validate_message,
    validate_prompt_answer,
)
from textguard.moderation.policy import ModerationPolicy

__all__ = [
    "ModerationConfigError",
    "ModerationPolicy",
    "ModerationResult",
    "ValidationOptions",
    "ValidationOutcome",
    "clean_text",
    "contains_contact_info",
    "detect_gibberish",
    "get_moderation_error_message",
    "get_policy",
    "moderate_text",
    "validate_bio",
    "validate_content",
    "validate_display_name",
    "validate_field",
    "validate_message",
    "validate_prompt_answer",
]
