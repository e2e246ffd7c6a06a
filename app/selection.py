"""Current show and episode selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .models import ALL_EPISODES, Episode, ShowId


@dataclass(slots=True)
class SelectionState:
    """Tracks the show being browsed and the episode picker value."""

    current_show_id: ShowId | None = None
    episode_filter: str = ALL_EPISODES

    def select_show(self, show_id: ShowId) -> None:
        self.current_show_id = show_id
        self.episode_filter = ALL_EPISODES

    def select_episode(self, value: int | str) -> None:
        """Select a single episode by id, or every episode via ``"all"``.

        Ids are not validated; one that matches no cached episode simply
        selects nothing.
        """

        self.episode_filter = str(value).strip() or ALL_EPISODES

    def clear(self) -> None:
        self.current_show_id = None
        self.episode_filter = ALL_EPISODES

    @property
    def shows_all_episodes(self) -> bool:
        return self.episode_filter == ALL_EPISODES

    def visible_episodes(self, episodes: Iterable[Episode]) -> list[Episode]:
        if self.shows_all_episodes:
            return list(episodes)
        return [
            episode for episode in episodes if str(episode.id) == self.episode_filter
        ]
