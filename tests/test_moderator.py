"""Tests for the module-level moderation API."""

import textguard.moderation as moderation
from textguard.moderation import moderator


def test_default_policy_is_shared():
    policy = moderator.get_policy()
    assert policy.name == "permissive"
    assert moderator.get_policy("permissive") is policy
    assert moderator.get_policy("strict") is not policy


def test_reset_rereads_environment(monkeypatch):
    assert moderator.get_policy().name == "permissive"
    monkeypatch.setenv("TEXTGUARD_PRESET", "strict")
    assert moderator.get_policy().name == "permissive"
    moderator.reset()
    assert moderator.get_policy().name == "strict"


def test_moderate_and_clean():
    result = moderation.moderate_text("well fuck")
    assert not result.is_clean
    assert result.profane_words == {"fuck"}
    assert moderation.clean_text("well fuck") == "well ****"


def test_empty_input_is_clean_and_valid():
    assert moderation.moderate_text(None).is_clean
    assert moderation.moderate_text("").is_clean
    assert moderation.clean_text("") == ""
    assert moderation.validate_content(None).is_valid
    assert moderation.validate_field("bio", "   ").is_valid
    assert not moderation.contains_contact_info("")
    assert not moderation.detect_gibberish("")


def test_field_validators():
    for validate in (
        moderation.validate_display_name,
        moderation.validate_bio,
        moderation.validate_prompt_answer,
        moderation.validate_message,
    ):
        result = validate("you fucker")
        assert not result.is_clean
        assert result.cleaned_text == "you ******"


def test_contact_info_follows_default_preset(monkeypatch):
    assert not moderation.contains_contact_info("text me at 555 123 4567")
    monkeypatch.setenv("TEXTGUARD_PRESET", "strict")
    moderator.reset()
    assert moderation.contains_contact_info("text me at 555 123 4567")


def test_validate_content_with_overrides():
    outcome = moderation.validate_content("qwrtpsdfgh zxcvbnm", check_gibberish=True, field_name="bio")
    assert not outcome.is_valid
    assert outcome.error == "Your bio doesn't appear to contain meaningful text. Please write a genuine response."


def test_validate_field_uses_preset_fields():
    outcome = moderation.validate_field("prompt answer", "asdasdasdasd")
    assert not outcome.is_valid
    assert outcome.moderation_result.is_gibberish
    assert moderation.validate_field("occupation", "asdasdasdasd").is_valid


def test_error_message_reexport():
    assert moderation.get_moderation_error_message("message") == (
        "Your message contains inappropriate language. Please remove any offensive words and try again."
    )
