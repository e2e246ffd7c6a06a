"""Free-text filtering over cached shows and episodes.

Every function here is pure: results are subsequences of the input in the
original order. Summaries are matched with markup stripped but are never
altered for display.
"""

from __future__ import annotations

from typing import Iterable

from .models import Episode, Show
from .utils import strip_markup


def normalize_query(query: str | None) -> str:
    return (query or "").strip().casefold()


def _contains(haystack: str | None, needle: str) -> bool:
    return needle in (haystack or "").casefold()


def show_matches(show: Show, needle: str) -> bool:
    """Return whether a normalised query hits a show's name, genres or summary."""

    return (
        _contains(show.name, needle)
        or _contains(" ".join(show.genres), needle)
        or _contains(strip_markup(show.summary), needle)
    )


def episode_matches(episode: Episode, needle: str) -> bool:
    return _contains(episode.name, needle) or _contains(
        strip_markup(episode.summary), needle
    )


def filter_shows(shows: Iterable[Show], query: str | None) -> list[Show]:
    """Return the shows matching ``query``; an empty query keeps them all."""

    needle = normalize_query(query)
    if not needle:
        return list(shows)
    return [show for show in shows if show_matches(show, needle)]


def filter_episodes(episodes: Iterable[Episode], query: str | None) -> list[Episode]:
    """Return the episodes matching ``query``; an empty query keeps them all."""

    needle = normalize_query(query)
    if not needle:
        return list(episodes)
    return [episode for episode in episodes if episode_matches(episode, needle)]
