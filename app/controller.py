"""Listing/drill-down view controller driving the cache and the renderer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal, Protocol

from .models import (
    ALL_EPISODES,
    Episode,
    SelectOption,
    Show,
    ShowId,
    episode_options,
    show_options,
)
from .search import filter_episodes, filter_shows
from .selection import SelectionState
from .services.catalog_api import FetchError
from .services.catalog_cache import CatalogCache
from .utils import count_label

logger = logging.getLogger(__name__)

ViewName = Literal["shows", "episodes"]

SHOWS_LOADING_MESSAGE = "Loading shows..."
EPISODES_LOADING_MESSAGE = "Loading episodes..."
SHOWS_ERROR_MESSAGE = "Error loading shows."
EPISODES_ERROR_MESSAGE = "Error loading episodes."


@dataclass(frozen=True, slots=True)
class ListingView:
    """The shows listing; the initial state."""

    name: ViewName = "shows"


@dataclass(frozen=True, slots=True)
class DrilldownView:
    """The episodes view of a single show."""

    show_id: ShowId
    name: ViewName = "episodes"


View = ListingView | DrilldownView


@dataclass(frozen=True, slots=True)
class ShowsPage:
    shows: list[Show]
    total: int
    query: str = ""

    @property
    def count_label(self) -> str:
        return count_label(len(self.shows), self.total, "shows")


@dataclass(frozen=True, slots=True)
class EpisodesPage:
    show: Show
    episodes: list[Episode]
    total: int
    selected: str = ALL_EPISODES
    query: str = ""

    @property
    def count_label(self) -> str:
        return count_label(len(self.episodes), self.total, "episodes")

    @property
    def heading(self) -> str:
        return f"Viewing: {self.show.name}"


class Renderer(Protocol):
    """Sink for everything the controller wants displayed."""

    def render_loading(
        self, view: ViewName, message: str, *, heading: str | None = None
    ) -> None: ...

    def render_shows(self, page: ShowsPage) -> None: ...

    def render_episodes(self, page: EpisodesPage) -> None: ...

    def render_error(
        self, view: ViewName, message: str, *, heading: str | None = None
    ) -> None: ...

    def fill_show_select(self, options: list[SelectOption]) -> None: ...

    def fill_episode_select(self, options: list[SelectOption]) -> None: ...


@dataclass(slots=True)
class SessionState:
    """All mutable state of one browsing session."""

    cache: CatalogCache
    selection: SelectionState = field(default_factory=SelectionState)
    show_query: str = ""
    episode_query: str = ""


class ViewController:
    """Dispatches user commands and keeps view, cache and selection in step."""

    def __init__(self, session: SessionState, renderer: Renderer):
        self._session = session
        self._renderer = renderer
        self._view: View = ListingView()
        self._show_select_filled = False

    @property
    def view(self) -> View:
        return self._view

    @property
    def session(self) -> SessionState:
        return self._session

    async def start(self) -> None:
        """Enter the listing view, loading the catalog if needed."""

        self._view = ListingView()
        await self._render_listing()

    async def back(self) -> None:
        """Return to the listing, dropping the per-show selection and search."""

        self._view = ListingView()
        self._session.selection.clear()
        self._session.episode_query = ""
        await self._render_listing()

    async def select_show(self, show_id: ShowId | str | None) -> bool:
        """Drill into ``show_id``.

        Returns ``False`` when the value is blank or does not name a loaded
        show, in which case nothing changes.
        """

        resolved = self._resolve_show(show_id)
        if resolved is None:
            return False

        session = self._session
        session.selection.select_show(resolved.id)
        session.episode_query = ""
        self._view = DrilldownView(resolved.id)
        self._fill_show_select()

        cache = session.cache
        heading = f"Viewing: {resolved.name}"
        if not cache.has_episodes(resolved.id):
            self._renderer.render_loading(
                "episodes", EPISODES_LOADING_MESSAGE, heading=heading
            )
        try:
            episodes = await cache.ensure_episodes_loaded(resolved.id)
        except FetchError as exc:
            if self._is_current(resolved.id):
                logger.warning(
                    "Could not load episodes for show %s: %s", resolved.id, exc
                )
                self._renderer.render_error(
                    "episodes", EPISODES_ERROR_MESSAGE, heading=heading
                )
            return True

        if not self._is_current(resolved.id):
            logger.debug("Discarding stale episodes for show %s", resolved.id)
            return True

        # Picker changes made while the fetch was pending do not survive it.
        session.selection.select_show(resolved.id)
        self._renderer.fill_episode_select(episode_options(episodes))
        self._render_episodes(resolved, episodes)
        return True

    async def switch_show(self, value: ShowId | str | None) -> bool:
        """Handle a change of the show picker; the placeholder is ignored."""

        return await self.select_show(value)

    async def search(self, query: str | None) -> None:
        """Apply ``query`` to whichever list is on screen."""

        text = query or ""
        session = self._session
        if isinstance(self._view, DrilldownView):
            session.episode_query = text
            self._rerender_episodes()
            return

        session.show_query = text
        if not session.cache.loaded:
            # Nothing to filter until the catalog has loaded.
            await self._render_listing()
            return
        self._render_shows()

    def select_episode(self, value: int | str) -> None:
        """Narrow the episodes view to one episode, or back to all of them."""

        if not isinstance(self._view, DrilldownView):
            logger.debug("Ignoring episode selection outside the episodes view")
            return
        self._session.selection.select_episode(value)
        self._rerender_episodes()

    def current_episodes(self) -> tuple[Episode, ...]:
        """Return the full cached episode list of the current show."""

        show_id = self._session.selection.current_show_id
        if show_id is None:
            return ()
        return self._session.cache.cached_episodes(show_id) or ()

    def _resolve_show(self, show_id: ShowId | str | None) -> Show | None:
        if show_id is None or (isinstance(show_id, str) and not show_id.strip()):
            logger.debug("Ignoring empty show selection")
            return None
        try:
            key = int(show_id)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed show id %r", show_id)
            return None
        show = self._session.cache.find_show(key)
        if show is None:
            logger.warning("Ignoring selection of unknown show %s", key)
        return show

    def _is_current(self, show_id: ShowId) -> bool:
        return (
            isinstance(self._view, DrilldownView)
            and self._view.show_id == show_id
            and self._session.selection.current_show_id == show_id
        )

    def _fill_show_select(self) -> None:
        if self._show_select_filled:
            return
        self._renderer.fill_show_select(show_options(self._session.cache.shows))
        self._show_select_filled = True

    async def _render_listing(self) -> None:
        cache = self._session.cache
        if not cache.loaded:
            self._renderer.render_loading("shows", SHOWS_LOADING_MESSAGE)
        try:
            await cache.ensure_shows_loaded()
        except FetchError as exc:
            logger.warning("Could not load the show catalog: %s", exc)
            if isinstance(self._view, ListingView):
                self._renderer.render_error("shows", SHOWS_ERROR_MESSAGE)
            return
        if isinstance(self._view, ListingView):
            self._render_shows()

    def _render_shows(self) -> None:
        session = self._session
        shows = session.cache.shows
        self._renderer.render_shows(
            ShowsPage(
                shows=filter_shows(shows, session.show_query),
                total=len(shows),
                query=session.show_query,
            )
        )

    def _rerender_episodes(self) -> None:
        show_id = self._session.selection.current_show_id
        show = self._session.cache.find_show(show_id) if show_id is not None else None
        episodes = self._session.cache.cached_episodes(show_id) if show else None
        if show is None or episodes is None:
            # The drill-down is showing an error; there is nothing to filter.
            return
        self._render_episodes(show, episodes)

    def _render_episodes(self, show: Show, episodes: tuple[Episode, ...]) -> None:
        selection = self._session.selection
        query = self._session.episode_query
        visible = filter_episodes(selection.visible_episodes(episodes), query)
        self._renderer.render_episodes(
            EpisodesPage(
                show=show,
                episodes=visible,
                total=len(episodes),
                selected=selection.episode_filter,
                query=query,
            )
        )
