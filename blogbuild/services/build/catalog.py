"""Post index builder: turns loaded posts into an ordered, validated catalog."""

import logging
from collections.abc import Iterable
from pathlib import Path

from blogbuild.exceptions import DuplicatePathError
from blogbuild.models.post import Catalog, Post, RawPost
from blogbuild.services.reading_time import DEFAULT_WORDS_PER_MINUTE, reading_time

logger = logging.getLogger(__name__)


def _check_unique_paths(raw_posts: list[RawPost]) -> None:
    seen: dict[str, Path] = {}
    for raw in raw_posts:
        if raw.path in seen:
            raise DuplicatePathError(raw.path, seen[raw.path], raw.source_path)
        seen[raw.path] = raw.source_path


def build_catalog(
    raw_posts: Iterable[RawPost],
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
) -> Catalog:
    """Build the catalog for one build.

    Posts are sorted newest first; posts sharing a date keep their input
    order.

    Raises:
        DuplicatePathError: If two posts share a path.
    """
    raw_posts = list(raw_posts)
    _check_unique_paths(raw_posts)

    posts = [
        Post(
            **raw.model_dump(),
            reading_time=reading_time(raw.body, words_per_minute),
        )
        for raw in raw_posts
    ]
    # sorted() is stable, so reverse=True keeps input order among equal dates
    posts = sorted(posts, key=lambda p: p.date, reverse=True)

    logger.info("Catalog built with %d posts", len(posts))
    return Catalog(posts=tuple(posts))
