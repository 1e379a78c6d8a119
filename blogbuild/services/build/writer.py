"""Writes rendered pages to the output directory."""

import logging
from collections.abc import Iterable
from pathlib import Path

from blogbuild.exceptions import InvalidRouteError
from blogbuild.models.page import Page
from blogbuild.models.post import invalid_route_segments, normalize_route

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"


def route_to_file(route: str, output_dir: Path) -> Path:
    """Map a route onto its file, e.g. ``/a/b`` -> ``<out>/a/b/index.html``.

    Raises:
        InvalidRouteError: If the route is relative or has a segment that
            is empty, starts with ``.``, or holds unsafe characters.
    """
    if not route.startswith("/"):
        raise InvalidRouteError(f"Route must start with '/': {route!r}")
    bad = invalid_route_segments(route)
    if bad:
        raise InvalidRouteError(f"Invalid route segment in {route!r}: {bad[0]!r}")
    trimmed = normalize_route(route)[1:]
    segments = trimmed.split("/") if trimmed else []
    return output_dir.joinpath(*segments, INDEX_FILE)


def write_pages(pages: Iterable[Page], output_dir: str | Path) -> list[Path]:
    """Write each page to ``<output_dir>/<route>/index.html``.

    Returns the written file paths in page order.
    """
    output_dir = Path(output_dir)
    pages = list(pages)
    # Resolve every target first so a bad route writes nothing
    targets = [(page, route_to_file(page.route, output_dir)) for page in pages]
    claimed: dict[Path, str] = {}
    for page, target in targets:
        if target in claimed:
            raise InvalidRouteError(
                f"Routes {claimed[target]!r} and {page.route!r} both map to {target}"
            )
        claimed[target] = page.route

    written = []
    for page, target in targets:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(page.content, encoding="utf-8")
        written.append(target)
        logger.debug("Wrote %s -> %s", page.route, target)

    logger.info("Wrote %d pages to %s", len(written), output_dir)
    return written
