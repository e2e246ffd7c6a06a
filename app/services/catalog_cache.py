"""Session-scoped, fetch-once cache over the catalog client."""

from __future__ import annotations

import asyncio
import logging
import unicodedata
from typing import Awaitable, Callable, Hashable, TypeVar

from ..models import Episode, Show, ShowId
from .catalog_api import CatalogClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SHOWS_KEY = ("shows",)


def show_sort_key(show: Show) -> str:
    """Case- and accent-insensitive sort key for show names."""

    decomposed = unicodedata.normalize("NFKD", show.name)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold()


class CatalogCache:
    """Holds every collection fetched during the session.

    ``shows`` is filled at most once, guarded by ``loaded``. Episode lists are
    memoised per show id: presence of a key means the fetch already succeeded,
    even if it returned no episodes. Failures never write state, so the next
    request for the same key fetches again. Concurrent requests for a key that
    is still being fetched await the same task instead of issuing another
    request.
    """

    def __init__(self, client: CatalogClient):
        self._client = client
        self._shows: tuple[Show, ...] = ()
        self._loaded = False
        self._episodes: dict[ShowId, tuple[Episode, ...]] = {}
        self._inflight: dict[Hashable, asyncio.Task] = {}

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def shows(self) -> tuple[Show, ...]:
        return self._shows

    def has_episodes(self, show_id: ShowId) -> bool:
        return show_id in self._episodes

    def cached_episodes(self, show_id: ShowId) -> tuple[Episode, ...] | None:
        return self._episodes.get(show_id)

    def find_show(self, show_id: ShowId) -> Show | None:
        for show in self._shows:
            if show.id == show_id:
                return show
        return None

    async def ensure_shows_loaded(self) -> tuple[Show, ...]:
        """Return all shows sorted by name, fetching them on first use."""

        if self._loaded:
            return self._shows
        return await self._coalesce(_SHOWS_KEY, self._load_shows)

    async def ensure_episodes_loaded(self, show_id: ShowId) -> tuple[Episode, ...]:
        """Return the episodes of ``show_id``, fetching them on first use."""

        cached = self._episodes.get(show_id)
        if cached is not None:
            return cached
        return await self._coalesce(
            ("episodes", show_id), lambda: self._load_episodes(show_id)
        )

    async def _load_shows(self) -> tuple[Show, ...]:
        logger.info("Fetching show catalog")
        shows = await self._client.fetch_shows()
        self._shows = tuple(sorted(shows, key=show_sort_key))
        self._loaded = True
        logger.info("Cached %d shows", len(self._shows))
        return self._shows

    async def _load_episodes(self, show_id: ShowId) -> tuple[Episode, ...]:
        logger.info("Fetching episodes for show %s", show_id)
        episodes = tuple(await self._client.fetch_episodes(show_id))
        self._episodes[show_id] = episodes
        logger.info("Cached %d episodes for show %s", len(episodes), show_id)
        return episodes

    async def _coalesce(
        self, key: Hashable, loader: Callable[[], Awaitable[T]]
    ) -> T:
        task = self._inflight.get(key)
        if task is None:

            async def _runner() -> T:
                try:
                    return await loader()
                finally:
                    self._inflight.pop(key, None)

            task = asyncio.create_task(_runner())
            self._inflight[key] = task
        else:
            logger.debug("Joining in-flight fetch for %s", key)
        return await asyncio.shield(task)
