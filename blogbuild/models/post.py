"""Post and catalog data models."""

import datetime
import re
from collections.abc import Iterator
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

LISTING_ROUTE = "/"

# One route segment: starts with a letter, digit or underscore (any script)
ROUTE_SEGMENT_RE = re.compile(r"^\w[\w.-]*$")


def normalize_route(route: str) -> str:
    """Drop trailing slashes so ``/a`` and ``/a/`` name the same page."""
    return route.rstrip("/") or LISTING_ROUTE


def invalid_route_segments(route: str) -> list[str]:
    """Segments of *route* that cannot be used as directory names."""
    trimmed = normalize_route(route)[1:]
    if not trimmed:
        return []
    return [s for s in trimmed.split("/") if not ROUTE_SEGMENT_RE.match(s)]


class RawPost(BaseModel):
    """A post as read from disk, before any derived fields are computed."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    author: str | None = None
    date: datetime.date
    path: str = Field(..., pattern=r"^/")
    tags: frozenset[str] = frozenset()
    resources: tuple[str, ...] = ()
    body: str = ""
    source_path: Path

    @field_validator("title", "author", mode="before")
    @classmethod
    def _number_to_str(cls, value: object) -> object:
        # Unquoted ``title: 2020`` arrives as an int
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("path")
    @classmethod
    def _check_route(cls, value: str) -> str:
        route = normalize_route(value)
        if route == LISTING_ROUTE:
            raise ValueError("'/' is reserved for the listing page")
        bad = invalid_route_segments(route)
        if bad:
            raise ValueError(f"invalid route segment(s): {', '.join(repr(s) for s in bad)}")
        return route

    @field_validator("date", mode="before")
    @classmethod
    def _drop_time(cls, value: object) -> object:
        """YAML turns ``2021-01-01 10:00`` into a datetime; keep the day only."""
        if isinstance(value, datetime.datetime):
            return value.date()
        return value

    @field_validator("tags", "resources", mode="before")
    @classmethod
    def _none_is_empty(cls, value: object) -> object:
        # A bare ``tags:`` key parses to None
        if value is None:
            return ()
        if isinstance(value, (str, int, float)):
            value = (value,)
        if not isinstance(value, (list, tuple, set, frozenset)):
            return value
        return tuple(
            str(v) if isinstance(v, (int, float)) and not isinstance(v, bool) else v
            for v in value
        )


class ReadingTime(BaseModel):
    """Estimated time needed to read a post body."""

    model_config = ConfigDict(frozen=True)

    words: int
    minutes: int
    text: str


class Post(RawPost):
    """A catalogued post with derived metadata."""

    reading_time: ReadingTime


class Catalog(BaseModel):
    """All posts of one build, newest first. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    posts: tuple[Post, ...] = ()

    def all(self) -> tuple[Post, ...]:
        return self.posts

    def find_by_path(self, path: str) -> Post | None:
        """Return the post published at *path*, or None."""
        for post in self.posts:
            if post.path == path:
                return post
        return None

    def __len__(self) -> int:
        return len(self.posts)

    def __iter__(self) -> Iterator[Post]:  # type: ignore[override]
        return iter(self.posts)
