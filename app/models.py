"""Pydantic models describing catalog payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import episode_code

ShowId = int
SelectOption = tuple[str, str]

ALL_EPISODES = "all"


def _medium_image(value: object) -> object:
    """Collapse the ``{"medium": ..., "original": ...}`` image object."""

    if isinstance(value, dict):
        return value.get("medium") or None
    return value


class Show(BaseModel):
    """A single show from the remote catalog."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: ShowId
    name: str
    image: str | None = None
    summary: str | None = None
    genres: tuple[str, ...] = ()
    status: str = ""
    rating: float | None = None
    runtime: int | None = None

    @field_validator("image", mode="before")
    @classmethod
    def _parse_image(cls, value: object) -> object:
        return _medium_image(value)

    @field_validator("rating", mode="before")
    @classmethod
    def _parse_rating(cls, value: object) -> object:
        """Accept the catalog's ``{"average": 8.1}`` rating object."""

        if isinstance(value, dict):
            return value.get("average")
        return value

    @field_validator("genres", mode="before")
    @classmethod
    def _parse_genres(cls, value: object) -> object:
        if value is None:
            return ()
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: object) -> object:
        return value or ""


class Episode(BaseModel):
    """A single episode belonging to a show."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    show_id: ShowId
    season: int = Field(default=0, ge=0)
    number: int = Field(default=0, ge=0)
    name: str = ""
    image: str | None = None
    summary: str | None = None
    url: str = ""

    @field_validator("season", "number", mode="before")
    @classmethod
    def _default_missing_numbers(cls, value: object) -> object:
        # Specials are published without an episode number.
        return 0 if value is None else value

    @field_validator("name", "url", mode="before")
    @classmethod
    def _default_missing_text(cls, value: object) -> object:
        return value or ""

    @field_validator("image", mode="before")
    @classmethod
    def _parse_image(cls, value: object) -> object:
        return _medium_image(value)

    @property
    def code(self) -> str:
        return episode_code(self.season, self.number)

    @property
    def label(self) -> str:
        """Return the ``S01E03 - Pilot`` style label used by the picker."""

        return f"{self.code} - {self.name}"


def show_options(shows: tuple[Show, ...] | list[Show]) -> list[SelectOption]:
    """Return show picker entries, led by an empty placeholder."""

    options: list[SelectOption] = [("", "Select a show")]
    options.extend((str(show.id), show.name) for show in shows)
    return options


def episode_options(episodes: tuple[Episode, ...] | list[Episode]) -> list[SelectOption]:
    """Return episode picker entries, led by the ``all`` sentinel."""

    options: list[SelectOption] = [(ALL_EPISODES, "Show All Episodes")]
    options.extend((str(episode.id), episode.label) for episode in episodes)
    return options
