"""Moderation router -- validate and clean user-generated text.

Prefix: ``/api/moderation``
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from textguard.moderation.config import ModerationConfigError, PresetCatalog
from textguard.moderation.models import ModerationResult, ValidationOptions, ValidationOutcome
from textguard.moderation.moderator import get_catalog, get_policy
from textguard.moderation.policy import ModerationPolicy

from web.backend.app.models.api import (
    CleanResponse,
    ContactInfoResponse,
    ModerationResultResponse,
    PresetResponse,
    TextRequest,
    ValidateRequest,
    ValidationResponse,
)

router = APIRouter(prefix="/api/moderation", tags=["moderation"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _catalog() -> PresetCatalog:
    try:
        return get_catalog()
    except ModerationConfigError as e:
        raise HTTPException(status_code=500, detail=f"Moderation configuration is invalid: {e}")


def _policy(preset: str | None) -> ModerationPolicy:
    catalog = _catalog()
    name = preset or catalog.default
    if name not in catalog.presets:
        raise HTTPException(status_code=404, detail=f"Unknown preset {name!r}")
    return get_policy(name)


def _result_to_response(
    result: ModerationResult | None, policy: ModerationPolicy
) -> ModerationResultResponse | None:
    if result is None:
        return None
    categories = None
    if result.profane_words is not None:
        categories = {term: c.value for term, c in policy.categorize(result.profane_words).items()}
    return ModerationResultResponse(
        is_clean=result.is_clean,
        profane_words=sorted(result.profane_words) if result.profane_words is not None else None,
        categories=categories,
        cleaned_text=result.cleaned_text,
        is_gibberish=result.is_gibberish,
    )


def _outcome_to_response(outcome: ValidationOutcome, policy: ModerationPolicy) -> ValidationResponse:
    return ValidationResponse(
        is_valid=outcome.is_valid,
        error=outcome.error,
        moderation_result=_result_to_response(outcome.moderation_result, policy),
        preset=policy.name,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/moderate", response_model=ModerationResultResponse)
async def moderate(req: TextRequest):
    """Check text against the preset's deny-list."""
    policy = _policy(req.preset)
    return _result_to_response(policy.moderate_text(req.text), policy)


@router.post("/clean", response_model=CleanResponse)
async def clean(req: TextRequest):
    """Return the text with deny-listed terms masked."""
    policy = _policy(req.preset)
    return CleanResponse(cleaned_text=policy.clean_text(req.text), preset=policy.name)


@router.post("/validate", response_model=ValidationResponse)
async def validate(req: ValidateRequest):
    """Run the requested checks (gibberish, profanity, contact info) in order."""
    policy = _policy(req.preset)
    options = ValidationOptions(
        check_profanity=req.check_profanity,
        check_contact_info=req.check_contact_info,
        check_gibberish=req.check_gibberish,
        field_name=req.field_name,
    )
    return _outcome_to_response(policy.validate_content(req.text, options), policy)


@router.post("/fields/{field}", response_model=ValidationResponse)
async def validate_field(field: str, req: TextRequest):
    """Validate text with a profile field's configured checks."""
    policy = _policy(req.preset)
    return _outcome_to_response(policy.validate_field(field, req.text), policy)


@router.post("/contact-info", response_model=ContactInfoResponse)
async def contact_info(req: TextRequest):
    """Report whether the text shares contact information."""
    policy = _policy(req.preset)
    return ContactInfoResponse(
        contains_contact_info=policy.contains_contact_info(req.text),
        platforms=policy.matched_platforms(req.text),
        checking_enabled=policy.config.contact_info_enabled,
        preset=policy.name,
    )


@router.get("/presets", response_model=list[PresetResponse])
async def list_presets():
    """List the configured moderation presets."""
    catalog = _catalog()
    return [
        PresetResponse(
            name=name,
            description=config.description,
            deny_list=config.deny_list,
            extra_deny_lists=list(config.extra_deny_lists),
            allow_list=config.allow_list,
            contact_info_enabled=config.contact_info_enabled,
            gibberish_enabled=config.gibberish_enabled,
            fields=sorted(config.fields),
            is_default=name == catalog.default,
        )
        for name, config in sorted(catalog.presets.items())
    ]
