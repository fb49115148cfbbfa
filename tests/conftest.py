import pytest

from textguard.moderation import moderator


@pytest.fixture(autouse=True)
def _fresh_configuration(monkeypatch):
    """Every test starts from the bundled presets with no cached policies."""
    monkeypatch.delenv("TEXTGUARD_PRESET", raising=False)
    monkeypatch.delenv("TEXTGUARD_PRESETS_FILE", raising=False)
    moderator.reset()
    yield
    moderator.reset()
