"""Loading of moderation presets and word-list data from YAML.

All static configuration ships inside the package under ``textguard/data``.
Malformed data raises :class:`ModerationConfigError`; callers are expected to
load configuration once at start-up and let that error be fatal.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from textguard.moderation.models import (
    AllowListEntry,
    BlockListEntry,
    Category,
    GibberishThresholds,
    PolicyConfig,
    ValidationOptions,
)

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

PRESETS_FILE_ENV = "TEXTGUARD_PRESETS_FILE"
PRESET_ENV = "TEXTGUARD_PRESET"

DENY_LIST_SOURCES = ("broad", "curated")


class ModerationConfigError(ValueError):
    """Raised when preset, word-list or rule data cannot be used."""


@dataclass(frozen=True)
class WordListData:
    """Every named deny-list and allow-list from ``wordlists.yaml``."""

    deny_lists: dict[str, tuple[BlockListEntry, ...]] = field(default_factory=dict)
    allow_lists: dict[str, tuple[AllowListEntry, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class PresetCatalog:
    """All presets from one presets file plus the name of the default one."""

    default: str
    presets: dict[str, PolicyConfig]

    def get(self, name: str | None = None) -> PolicyConfig:
        key = name or self.default
        try:
            return self.presets[key]
        except KeyError:
            known = ", ".join(sorted(self.presets))
            raise ModerationConfigError(f"Unknown preset {key!r} (known: {known})") from None


def load_yaml(path: str | Path) -> dict:
    """Read a YAML mapping, converting I/O and parse failures to config errors."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ModerationConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ModerationConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ModerationConfigError(f"{path} must contain a mapping at the top level")
    return data


# ---------------------------------------------------------------------------
# Word lists
# ---------------------------------------------------------------------------


def _parse_block_entry(item: Any, list_name: str) -> BlockListEntry:
    if isinstance(item, str):
        return BlockListEntry(term=item.strip().lower())
    if not isinstance(item, dict) or not item.get("term"):
        raise ModerationConfigError(f"Deny list {list_name!r} has an entry without a term: {item!r}")
    try:
        category = Category(item.get("category", Category.PROFANITY.value))
    except ValueError:
        raise ModerationConfigError(
            f"Deny list {list_name!r}: unknown category {item.get('category')!r}"
        ) from None
    return BlockListEntry(term=str(item["term"]).strip().lower(), category=category)


def parse_word_lists(data: dict) -> WordListData:
    deny_lists = {}
    for name, items in (data.get("deny_lists") or {}).items():
        if not isinstance(items, list):
            raise ModerationConfigError(f"Deny list {name!r} must be a list")
        deny_lists[name] = tuple(_parse_block_entry(item, name) for item in items)

    allow_lists = {}
    for name, items in (data.get("allow_lists") or {}).items():
        if not isinstance(items, list):
            raise ModerationConfigError(f"Allow list {name!r} must be a list")
        allow_lists[name] = tuple(AllowListEntry(term=str(t).strip().lower()) for t in items)

    return WordListData(deny_lists=deny_lists, allow_lists=allow_lists)


def load_word_lists(path: str | Path | None = None) -> WordListData:
    """Load named deny/allow lists from a YAML file."""
    path = Path(path) if path else DATA_DIR / "wordlists.yaml"
    data = parse_word_lists(load_yaml(path))
    logger.debug(
        "Loaded %d deny list(s) and %d allow list(s) from %s",
        len(data.deny_lists), len(data.allow_lists), path,
    )
    return data


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


def _parse_options(field_name: str, raw: Any) -> ValidationOptions:
    if not isinstance(raw, dict):
        raise ModerationConfigError(f"Field {field_name!r} options must be a mapping")
    return ValidationOptions(
        check_profanity=bool(raw.get("profanity", True)),
        check_contact_info=bool(raw.get("contact_info", False)),
        check_gibberish=bool(raw.get("gibberish", False)),
        field_name=raw.get("label", field_name),
    )


def _parse_thresholds(raw: Any) -> GibberishThresholds:
    if not raw:
        return GibberishThresholds()
    if not isinstance(raw, dict):
        raise ModerationConfigError("gibberish_thresholds must be a mapping")
    try:
        return GibberishThresholds(**raw)
    except TypeError as e:
        raise ModerationConfigError(f"Invalid gibberish_thresholds: {e}") from e


def parse_preset(name: str, raw: dict, shared_fields: dict | None = None) -> PolicyConfig:
    """Build a :class:`PolicyConfig` from one ``presets`` entry."""
    if not isinstance(raw, dict):
        raise ModerationConfigError(f"Preset {name!r} must be a mapping")

    deny_list = raw.get("deny_list", "curated")
    if deny_list not in DENY_LIST_SOURCES:
        raise ModerationConfigError(
            f"Preset {name!r}: deny_list must be one of {DENY_LIST_SOURCES}, got {deny_list!r}"
        )

    field_data = dict(shared_fields or {})
    field_data.update(raw.get("fields") or {})

    contact_info_enabled = bool(raw.get("contact_info", True))
    gibberish_enabled = bool(raw.get("gibberish", True))

    # The preset-level flags cap every field default.
    fields = {}
    for key, value in field_data.items():
        options = _parse_options(key, value)
        fields[key] = replace(
            options,
            check_contact_info=options.check_contact_info and contact_info_enabled,
            check_gibberish=options.check_gibberish and gibberish_enabled,
        )

    return PolicyConfig(
        name=name,
        description=raw.get("description", ""),
        deny_list=deny_list,
        extra_deny_lists=tuple(raw.get("extra_deny_lists") or ()),
        allow_list=raw.get("allow_list", "") or "",
        contact_info_enabled=contact_info_enabled,
        gibberish_enabled=gibberish_enabled,
        gibberish_thresholds=_parse_thresholds(raw.get("gibberish_thresholds")),
        fields=fields,
    )


def load_presets(path: str | Path | None = None) -> PresetCatalog:
    """Load the preset catalog.

    The file is taken from *path*, else ``$TEXTGUARD_PRESETS_FILE``, else the
    bundled ``presets.yaml``. ``$TEXTGUARD_PRESET`` overrides the file's
    ``default`` entry.
    """
    path = Path(path or os.environ.get(PRESETS_FILE_ENV) or DATA_DIR / "presets.yaml")
    data = load_yaml(path)

    raw_presets = data.get("presets")
    if not isinstance(raw_presets, dict) or not raw_presets:
        raise ModerationConfigError(f"{path} defines no presets")

    shared_fields = data.get("fields") or {}
    presets = {
        name: parse_preset(name, raw, shared_fields) for name, raw in raw_presets.items()
    }

    default = os.environ.get(PRESET_ENV) or data.get("default") or next(iter(presets))
    if default not in presets:
        raise ModerationConfigError(f"Default preset {default!r} is not defined in {path}")

    logger.debug("Loaded presets %s from %s (default: %s)", sorted(presets), path, default)
    return PresetCatalog(default=default, presets=presets)
