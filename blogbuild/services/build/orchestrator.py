"""Site build orchestrator — ties load, index, render, and write together."""

import logging
from dataclasses import dataclass
from pathlib import Path

from blogbuild.config import Settings, get_settings
from blogbuild.services.build.catalog import build_catalog
from blogbuild.services.build.loader import load_posts
from blogbuild.services.build.renderer import render
from blogbuild.services.build.writer import write_pages
from blogbuild.services.templates import load_templates

logger = logging.getLogger(__name__)


@dataclass
class BuildStats:
    """Stats from a build run."""

    posts: int
    rendered: int
    failed: int
    written: int

    def to_dict(self) -> dict:
        return {
            "posts": self.posts,
            "rendered": self.rendered,
            "failed": self.failed,
            "written": self.written,
        }


def build_site(
    source_dir: str | Path | None = None,
    output_dir: str | Path | None = None,
    templates_dir: str | Path | None = None,
    settings: Settings | None = None,
) -> BuildStats:
    """Run a full build: load -> catalog -> render -> write.

    Loading and indexing errors propagate and abort the build. Pages that
    fail to render are logged, counted, and not written.

    Args:
        source_dir: Directory with Markdown posts. Defaults to settings.
        output_dir: Destination for rendered pages. Defaults to settings.
        templates_dir: Template folder. Defaults to settings, then bundled.
        settings: Overrides the environment settings.
    """
    settings = settings or get_settings()
    source_dir = Path(source_dir or settings.source_dir)
    output_dir = Path(output_dir or settings.output_dir)
    templates = load_templates(templates_dir or settings.templates_dir or None)

    # 1. Load every post; any bad file aborts here
    logger.info("Starting build from %s", source_dir)
    raw_posts = load_posts(source_dir)

    # 2. Index fully before anything renders
    catalog = build_catalog(raw_posts, words_per_minute=settings.words_per_minute)

    # 3. Render, isolating failures per page
    result = render(catalog, templates, settings)

    # 4. Persist successful pages
    written = write_pages(result.pages, output_dir)

    for error in result.failures:
        logger.warning("Page not produced: %s", error)

    stats = BuildStats(
        posts=len(catalog),
        rendered=len(result.pages),
        failed=len(result.failures),
        written=len(written),
    )
    logger.info(
        "Build complete: %d posts, %d pages rendered, %d failed, %d written",
        stats.posts,
        stats.rendered,
        stats.failed,
        stats.written,
    )
    return stats
