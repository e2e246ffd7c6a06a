"""Client for the remote TV catalog (TVMaze-compatible) HTTP API."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..models import Episode, Show, ShowId

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Raised when a catalog collection cannot be fetched or decoded."""


class CatalogClient:
    """Thin wrapper around the catalog's show and episode endpoints."""

    _SHOWS_PATH = "/shows"
    _EPISODES_PATH = "/shows/{show_id}/episodes"

    def __init__(self, http_client: httpx.AsyncClient):
        self._client = http_client

    async def fetch_shows(self) -> list[Show]:
        """Fetch the full show collection in server order."""

        payload = await self._get_collection(self._SHOWS_PATH)
        try:
            return [Show.model_validate(entry) for entry in payload]
        except ValidationError as exc:
            raise FetchError(f"Malformed show in {self._SHOWS_PATH}") from exc

    async def fetch_episodes(self, show_id: ShowId) -> list[Episode]:
        """Fetch every episode of ``show_id`` in server order."""

        path = self._EPISODES_PATH.format(show_id=show_id)
        payload = await self._get_collection(path)
        try:
            return [
                Episode.model_validate({**entry, "show_id": show_id})
                for entry in payload
            ]
        except (TypeError, ValidationError) as exc:
            raise FetchError(f"Malformed episode in {path}") from exc

    async def _get_collection(self, path: str) -> list[Any]:
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as exc:
            logger.warning("Catalog request to %s failed: %s", path, exc)
            raise FetchError(f"Request to {path} failed") from exc

        if not response.is_success:
            logger.warning(
                "Catalog request to %s returned HTTP %s", path, response.status_code
            )
            raise FetchError(f"{path} returned HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise FetchError(f"Non-JSON response from {path}") from exc
        if not isinstance(data, list):
            raise FetchError(f"Unexpected response structure from {path}")
        return data
