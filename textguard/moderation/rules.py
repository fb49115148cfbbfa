"""Compiled rule table for contact-information detection.

The patterns themselves live in ``textguard/data/contact_rules.yaml`` so new
platforms, slang or phrasing can be added without touching detector code.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from textguard.moderation.config import DATA_DIR, ModerationConfigError, load_yaml
from textguard.moderation.models import PlatformPattern

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhoneRules:
    context: tuple[re.Pattern[str], ...] = ()
    min_digits: int = 7
    max_digits: int = 15
    uncorroborated_digits: int = 10


@dataclass(frozen=True)
class EmailRules:
    patterns: tuple[re.Pattern[str], ...] = ()
    provider_variants: tuple[re.Pattern[str], ...] = ()
    misspellings: tuple[tuple[re.Pattern[str], str], ...] = ()
    providers: tuple[str, ...] = ()


@dataclass(frozen=True)
class SocialRules:
    platforms: tuple[PlatformPattern, ...] = ()
    handles: tuple[re.Pattern[str], ...] = ()
    short_links: tuple[re.Pattern[str], ...] = ()


@dataclass(frozen=True)
class ContactRules:
    """Every compiled pattern the contact-info detector uses."""

    phone: PhoneRules = field(default_factory=PhoneRules)
    email: EmailRules = field(default_factory=EmailRules)
    social: SocialRules = field(default_factory=SocialRules)
    url: tuple[re.Pattern[str], ...] = ()
    off_platform: tuple[re.Pattern[str], ...] = ()


def _compile(pattern: Any, section: str) -> re.Pattern[str]:
    if not isinstance(pattern, str) or not pattern:
        raise ModerationConfigError(f"{section}: expected a regex string, got {pattern!r}")
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise ModerationConfigError(f"{section}: invalid regex {pattern!r}: {e}") from e


def _compile_all(patterns: Any, section: str) -> tuple[re.Pattern[str], ...]:
    if patterns is None:
        return ()
    if not isinstance(patterns, list):
        raise ModerationConfigError(f"{section} must be a list of regexes")
    return tuple(_compile(p, section) for p in patterns)


def _parse_platform(raw: Any) -> PlatformPattern:
    if not isinstance(raw, dict) or not raw.get("platform"):
        raise ModerationConfigError(f"social.platforms entry needs a platform name: {raw!r}")
    name = raw["platform"]
    return PlatformPattern(
        platform=name,
        raw_patterns=_compile_all(raw.get("patterns"), f"social.platforms[{name}]"),
        normalized_substrings=tuple(str(s).lower() for s in raw.get("normalized") or ()),
    )


def parse_contact_rules(data: dict) -> ContactRules:
    """Compile a parsed ``contact_rules.yaml`` mapping."""
    phone = data.get("phone") or {}
    email = data.get("email") or {}
    social = data.get("social") or {}

    misspellings = []
    for item in email.get("misspellings") or ():
        if not isinstance(item, dict) or "pattern" not in item:
            raise ModerationConfigError(f"email.misspellings entry needs a pattern: {item!r}")
        misspellings.append(
            (_compile(item["pattern"], "email.misspellings"), str(item.get("replacement", "")))
        )

    return ContactRules(
        phone=PhoneRules(
            context=_compile_all(phone.get("context"), "phone.context"),
            min_digits=int(phone.get("min_digits", 7)),
            max_digits=int(phone.get("max_digits", 15)),
            uncorroborated_digits=int(phone.get("uncorroborated_digits", 10)),
        ),
        email=EmailRules(
            patterns=_compile_all(email.get("patterns"), "email.patterns"),
            provider_variants=_compile_all(email.get("provider_variants"), "email.provider_variants"),
            misspellings=tuple(misspellings),
            providers=tuple(str(p).lower() for p in email.get("providers") or ()),
        ),
        social=SocialRules(
            platforms=tuple(_parse_platform(p) for p in social.get("platforms") or ()),
            handles=_compile_all(social.get("handles"), "social.handles"),
            short_links=_compile_all(social.get("short_links"), "social.short_links"),
        ),
        url=_compile_all(data.get("url"), "url"),
        off_platform=_compile_all(data.get("off_platform"), "off_platform"),
    )


def load_contact_rules(path: str | Path | None = None) -> ContactRules:
    path = Path(path) if path else DATA_DIR / "contact_rules.yaml"
    rules = parse_contact_rules(load_yaml(path))
    logger.debug("Compiled contact rules for %d platform(s) from %s", len(rules.social.platforms), path)
    return rules


_default_rules: Optional[ContactRules] = None
_default_rules_lock = threading.Lock()


def default_contact_rules() -> ContactRules:
    """Return the bundled rule table, compiling it on first use only."""
    global _default_rules
    if _default_rules is None:
        with _default_rules_lock:
            if _default_rules is None:
                _default_rules = load_contact_rules()
    return _default_rules
