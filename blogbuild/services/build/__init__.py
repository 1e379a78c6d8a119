"""Build services for loading, indexing, rendering, and writing the blog."""

from blogbuild.services.build.catalog import build_catalog
from blogbuild.services.build.loader import (
    discover_posts,
    load_post,
    load_posts,
    parse_post,
)
from blogbuild.services.build.orchestrator import BuildStats, build_site
from blogbuild.services.build.renderer import (
    PageTask,
    render,
    render_listing_page,
    render_post_page,
)
from blogbuild.services.build.writer import route_to_file, write_pages

__all__ = [
    "BuildStats",
    "PageTask",
    "build_catalog",
    "build_site",
    "discover_posts",
    "load_post",
    "load_posts",
    "parse_post",
    "render",
    "render_listing_page",
    "render_post_page",
    "route_to_file",
    "write_pages",
]
