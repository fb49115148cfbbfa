"""Pydantic models for API request/response serialization.

These models mirror the textguard dataclasses and provide proper JSON
serialization for the FastAPI endpoints.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class TextRequest(BaseModel):
    """A piece of user-generated text, optionally checked under a named preset."""

    text: Optional[str] = None
    preset: Optional[str] = None


class ValidateRequest(TextRequest):
    """Mirrors textguard.moderation.models.ValidationOptions plus the text."""

    check_profanity: bool = True
    check_contact_info: bool = False
    check_gibberish: bool = False
    field_name: str = "text"


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class ModerationResultResponse(BaseModel):
    """Mirrors textguard.moderation.models.ModerationResult."""

    is_clean: bool
    profane_words: Optional[list[str]] = None
    categories: Optional[dict[str, str]] = None
    cleaned_text: Optional[str] = None
    is_gibberish: Optional[bool] = None


class ValidationResponse(BaseModel):
    """Mirrors textguard.moderation.models.ValidationOutcome."""

    is_valid: bool
    error: Optional[str] = None
    moderation_result: Optional[ModerationResultResponse] = None
    preset: str = ""


class CleanResponse(BaseModel):
    cleaned_text: Optional[str] = None
    preset: str = ""


class ContactInfoResponse(BaseModel):
    contains_contact_info: bool
    platforms: list[str] = Field(default_factory=list)
    checking_enabled: bool = True
    preset: str = ""


class PresetResponse(BaseModel):
    """Mirrors textguard.moderation.models.PolicyConfig."""

    name: str
    description: str = ""
    deny_list: str = ""
    extra_deny_lists: list[str] = Field(default_factory=list)
    allow_list: str = ""
    contact_info_enabled: bool = True
    gibberish_enabled: bool = True
    fields: list[str] = Field(default_factory=list)
    is_default: bool = False
