"""Utility helpers for the show browser."""

from __future__ import annotations

import re


MARKUP_RE = re.compile(r"<[^>]*>")


def strip_markup(text: str | None) -> str:
    """Remove tag-like substrings from ``text``."""

    if not text:
        return ""
    return MARKUP_RE.sub("", text)


def episode_code(season: int | None, number: int | None) -> str:
    """Format an ``SxxEyy`` episode code."""

    return f"S{season or 0:02d}E{number or 0:02d}"


def count_label(shown: int, total: int, noun: str) -> str:
    return f"Displaying {shown} / {total} {noun}"
