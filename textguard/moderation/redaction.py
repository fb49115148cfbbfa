"""Length-preserving masking of matched spans."""

from __future__ import annotations

from typing import Iterable

MASK_CHAR = "*"


def merge_spans(spans: Iterable[tuple[int, int]]) -> list[tuple[int, int]]:
    """Sort spans and merge the ones that overlap or touch."""
    merged: list[list[int]] = []
    for start, end in sorted(spans):
        if start >= end:
            continue
        if merged and start <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])
    return [(s, e) for s, e in merged]


def mask_spans(text: str, spans: Iterable[tuple[int, int]], mask_char: str = MASK_CHAR) -> str:
    """Replace every span of *text* with *mask_char*, one per character.

    The result always has the same length as *text*.
    """
    if len(mask_char) != 1:
        raise ValueError("mask_char must be a single character")
    if not text:
        return text
    parts = []
    cursor = 0
    for start, end in merge_spans(spans):
        start, end = max(start, cursor), min(end, len(text))
        if start >= end:
            continue
        parts.append(text[cursor:start])
        parts.append(mask_char * (end - start))
        cursor = end
    parts.append(text[cursor:])
    return "".join(parts)
