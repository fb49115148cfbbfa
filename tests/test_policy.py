"""Tests for ModerationPolicy and the bundled presets."""

import pytest

from textguard.moderation.models import Category, PolicyConfig, ValidationOptions
from textguard.moderation.policy import (
    ModerationPolicy,
    get_contact_info_error_message,
    get_gibberish_error_message,
    get_moderation_error_message,
)
from textguard.moderation.wordlists import CompiledWordList, WordListMatcher


def _policy(
    deny=("fuck", "sugar daddy", "queer", "daddy"),
    allow=("queer", "trans", "nonbinary"),
    **config,
) -> ModerationPolicy:
    """Build a policy over an injected word list, independent of bundled data."""
    handle = CompiledWordList(matcher=WordListMatcher(deny, allow), backend="curated")
    return ModerationPolicy(PolicyConfig(name="test", **config), word_list=handle)


# --- moderate_text ---


@pytest.mark.parametrize("text", [None, "", "   ", "\n\t"])
def test_blank_text_is_clean(text):
    assert _policy().moderate_text(text).is_clean


def test_profane_text_reports_matched_terms():
    result = _policy().moderate_text("What the FUCK, fuck")
    assert not result.is_clean
    assert result.profane_words == {"fuck"}


def test_clean_text_has_no_profane_words():
    result = _policy().moderate_text("Hello there")
    assert result.is_clean
    assert result.profane_words is None


def test_allow_listed_terms_are_never_reported():
    result = _policy().moderate_text("proud queer trans nonbinary person, fuck yes")
    assert result.profane_words == {"fuck"}
    assert _policy().moderate_text("queer").is_clean


def test_embedded_terms_do_not_match():
    assert _policy(deny=("ass",), allow=()).moderate_text("first class passenger").is_clean


# --- clean_text ---


def test_clean_text_masks_with_equal_length():
    text = "Fuck this, fuck that"
    cleaned = _policy().clean_text(text)
    assert cleaned == "**** this, **** that"
    assert len(cleaned) == len(text)


def test_clean_text_handles_overlapping_terms():
    assert _policy().clean_text("sugar daddy wanted") == "*********** wanted"


def test_clean_text_is_idempotent():
    policy = _policy()
    once = policy.clean_text("fuck off, sugar daddy")
    assert policy.clean_text(once) == once


def test_clean_text_leaves_clean_and_blank_text_alone():
    policy = _policy()
    assert policy.clean_text("hello") == "hello"
    assert policy.clean_text("") == ""
    assert policy.clean_text(None) is None


# --- field validators ---


@pytest.mark.parametrize(
    "validator", ["validate_display_name", "validate_bio", "validate_prompt_answer", "validate_message"]
)
def test_field_validators_attach_cleaned_text(validator):
    result = getattr(_policy(), validator)("oh fuck")
    assert not result.is_clean
    assert result.cleaned_text == "oh ****"


def test_field_validators_pass_clean_text_through():
    result = _policy().validate_bio("I like long walks")
    assert result.is_clean
    assert result.cleaned_text is None


# --- contact info / gibberish ---


def test_contact_info_opt_out():
    assert not _policy(contact_info_enabled=False).contains_contact_info("call me at 555-123-4567")
    assert _policy(contact_info_enabled=True).contains_contact_info("call me at 555-123-4567")


def test_contact_info_blank_text():
    assert not _policy().contains_contact_info(None)


def test_matched_platforms_respect_contact_opt_out():
    assert _policy().matched_platforms("add me on snapchat") == ["snapchat"]
    assert _policy(contact_info_enabled=False).matched_platforms("add me on snapchat") == []
    assert _policy().matched_platforms("") == []


def test_categorize_matched_terms():
    handle = CompiledWordList(
        matcher=WordListMatcher(["sugar daddy", "fuck"]),
        backend="curated",
        categories={"sugar daddy": Category.SCAM},
    )
    policy = ModerationPolicy(PolicyConfig(name="test"), word_list=handle)
    result = policy.moderate_text("fuck, a sugar daddy")
    assert policy.categorize(result.profane_words) == {
        "fuck": Category.PROFANITY,
        "sugar daddy": Category.SCAM,
    }


def test_detect_gibberish_uses_preset_thresholds():
    assert _policy().detect_gibberish("asdjklqwzxm")


# --- validate_content ---


@pytest.mark.parametrize("text", [None, "", "    "])
def test_blank_text_is_always_valid(text):
    options = ValidationOptions(check_profanity=True, check_contact_info=True, check_gibberish=True)
    assert _policy().validate_content(text, options).is_valid


def test_profanity_failure_message():
    outcome = _policy().validate_content("fuck off", field_name="bio")
    assert not outcome.is_valid
    assert outcome.error == get_moderation_error_message("bio")
    assert outcome.moderation_result.profane_words == {"fuck"}


def test_gibberish_is_checked_first():
    outcome = _policy().validate_content(
        "asdasdasdasd fuck", check_gibberish=True, field_name="prompt answer"
    )
    assert not outcome.is_valid
    assert outcome.error == get_gibberish_error_message("prompt answer")
    assert outcome.moderation_result.is_gibberish


def test_profanity_is_checked_before_contact_info():
    outcome = _policy().validate_content("fuck, call me at 555-123-4567", check_contact_info=True)
    assert outcome.error == get_moderation_error_message("text")


def test_contact_info_failure_message():
    outcome = _policy().validate_content(
        "call me at 555-123-4567", check_contact_info=True, field_name="message"
    )
    assert not outcome.is_valid
    assert outcome.error == get_contact_info_error_message("message")
    assert outcome.moderation_result is None


def test_disabled_checks_are_skipped():
    options = ValidationOptions(check_profanity=False)
    assert _policy().validate_content("fuck off", options).is_valid
    assert _policy().validate_content("asdasdasdasd").is_valid


def test_explicit_gibberish_check_runs_when_preset_disables_it():
    policy = _policy(gibberish_enabled=False)
    outcome = policy.validate_content("asdasdasdasd", check_gibberish=True)
    assert not outcome.is_valid
    assert outcome.moderation_result.is_gibberish


def test_error_messages_name_the_field():
    assert get_moderation_error_message("bio").startswith("Your bio contains inappropriate language")
    assert get_moderation_error_message() == (
        "Your text contains inappropriate language. Please remove any offensive words and try again."
    )
    assert "doesn't appear to contain meaningful text" in get_gibberish_error_message("bio")
    assert get_contact_info_error_message("bio").startswith("Please don't share contact information in your bio")


# --- validate_field ---


def test_validate_field_uses_field_options():
    policy = _policy(
        fields={
            "bio": ValidationOptions(check_contact_info=True, field_name="bio"),
            "occupation": ValidationOptions(field_name="occupation"),
        }
    )
    assert not policy.validate_field("bio", "my insta is sunny").is_valid
    assert policy.validate_field("occupation", "my insta is sunny").is_valid


def test_validate_field_unknown_field_checks_profanity_only():
    outcome = _policy().validate_field("pet name", "fuck")
    assert outcome.error == get_moderation_error_message("pet name")
    assert _policy().validate_field("pet name", "call me at 555-123-4567").is_valid


# --- bundled presets ---


def test_permissive_preset_rejects_severe_profanity():
    outcome = ModerationPolicy.from_preset("permissive").validate_content("fuck off", field_name="bio")
    assert not outcome.is_valid
    assert outcome.error.startswith("Your bio contains inappropriate language")


def test_permissive_preset_rejects_gibberish():
    outcome = ModerationPolicy.from_preset("permissive").validate_content(
        "asdasdasdasd", check_gibberish=True, field_name="prompt answer"
    )
    assert not outcome.is_valid
    assert "doesn't appear to contain meaningful text" in outcome.error


def test_permissive_preset_allows_contact_info():
    assert not ModerationPolicy.from_preset("permissive").contains_contact_info("call me at 555-123-4567")


def test_permissive_preset_ignores_mild_and_dating_vocabulary():
    assert ModerationPolicy.from_preset("permissive").moderate_text("damn, no hookup please").is_clean


def test_strict_preset_blocks_contact_info():
    policy = ModerationPolicy.from_preset("strict")
    assert policy.contains_contact_info("call me at 555-123-4567")
    assert policy.contains_contact_info("1, eight, 4, seven, seven, 5, six, 6, 8")
    assert policy.contains_contact_info("g mail dot com")
    assert policy.contains_contact_info("gmale")


def test_strict_preset_blocks_dating_scams():
    result = ModerationPolicy.from_preset("strict").moderate_text("looking for a sugar daddy")
    assert not result.is_clean
    assert "sugar daddy" in result.profane_words


def test_strict_preset_never_flags_identity_terms():
    policy = ModerationPolicy.from_preset("strict")
    for term in ("queer", "gay", "lesbian", "trans", "nonbinary", "bisexual"):
        result = policy.moderate_text(f"I am {term}")
        assert term not in (result.profane_words or ())


def test_presets_configure_fields():
    policy = ModerationPolicy.from_preset("strict")
    assert not policy.validate_field("bio", "follow my 1nst@gram").is_valid
    assert policy.validate_field("occupation", "follow my 1nst@gram").is_valid


def test_strict_preset_runs_requested_gibberish_check():
    policy = ModerationPolicy.from_preset("strict")
    outcome = policy.validate_content("asdasdasdasd", check_gibberish=True, field_name="prompt answer")
    assert not outcome.is_valid
    assert outcome.error == get_gibberish_error_message("prompt answer")

    # gibberish is off in strict's field defaults
    assert policy.validate_field("prompt answer", "asdasdasdasd").is_valid
