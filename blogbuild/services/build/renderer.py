"""Page renderer: produces the listing page and one page per post."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

import jinja2
from markupsafe import Markup

from blogbuild.config import Settings, get_settings
from blogbuild.exceptions import RenderError
from blogbuild.models.page import Page, PageState, RenderResult
from blogbuild.models.post import LISTING_ROUTE, Catalog, Post
from blogbuild.services.markdown_renderer import (
    MarkdownError,
    MarkdownOptions,
    render_markdown,
)
from blogbuild.services.templates import Templates

logger = logging.getLogger(__name__)

POST_DATE_FORMAT = "%B %d, %Y"
LISTING_DATE_FORMAT = "%Y-%m-%d"


@dataclass
class PageTask:
    """Tracks one page from PENDING to a terminal state."""

    route: str
    source_path: Path | None = None
    state: PageState = PageState.PENDING
    page: Page | None = None
    error: RenderError | None = None

    def _leave_pending(self, new_state: PageState) -> None:
        if self.state is not PageState.PENDING:
            raise RuntimeError(
                f"Page {self.route} is already {self.state.value}, "
                f"cannot move to {new_state.value}"
            )
        self.state = new_state

    def succeed(self, page: Page) -> None:
        self._leave_pending(PageState.RENDERED)
        self.page = page

    def fail(self, error: RenderError) -> None:
        self._leave_pending(PageState.FAILED)
        self.error = error


def markdown_options(settings: Settings) -> MarkdownOptions:
    return MarkdownOptions(
        external_link_target=settings.external_link_target,
        external_link_rel=settings.external_link_rel,
        syntax_highlighting=settings.syntax_highlighting,
        site_url=settings.site_url,
    )


def page_title(title: str, site_title: str) -> str:
    """Title shown in the browser tab, e.g. ``Post | Site``."""
    if not site_title or title == site_title:
        return title
    return f"{title} | {site_title}"


def render_post_page(
    post: Post,
    templates: Templates,
    settings: Settings,
    options: MarkdownOptions,
) -> Page:
    """Render a single post page.

    Raises:
        RenderError: If the body or the template cannot be rendered.
    """
    try:
        html_body = render_markdown(post.body, options)
        content = templates.post.render(
            title=post.title,
            date=post.date.strftime(POST_DATE_FORMAT),
            reading_time=post.reading_time.text if settings.show_reading_time else None,
            html_body=Markup(html_body),
            author=post.author,
            tags=sorted(post.tags),
            resources=list(post.resources),
            site_title=settings.site_title,
            page_title=page_title(post.title, settings.site_title),
        )
    except MarkdownError as e:
        raise RenderError(f"cannot render Markdown: {e}", post.path, post.source_path) from e
    except jinja2.TemplateError as e:
        raise RenderError(f"cannot render template: {e}", post.path, post.source_path) from e
    return Page(route=post.path, title=post.title, content=content)


def render_listing_page(catalog: Catalog, templates: Templates, settings: Settings) -> Page:
    """Render the index page listing every post in catalog order.

    Raises:
        RenderError: If the listing template cannot be rendered.
    """
    entries = [
        {
            "title": post.title,
            "date": post.date.strftime(LISTING_DATE_FORMAT),
            "author": post.author,
            "route": post.path,
        }
        for post in catalog
    ]
    try:
        content = templates.listing.render(
            posts=entries,
            site_title=settings.site_title,
            site_description=settings.site_description,
            page_title=settings.site_title,
        )
    except jinja2.TemplateError as e:
        raise RenderError(f"cannot render template: {e}", LISTING_ROUTE) from e
    return Page(route=LISTING_ROUTE, title=settings.site_title, content=content)


def _run_post_task(
    post: Post, templates: Templates, settings: Settings, options: MarkdownOptions
) -> PageTask:
    task = PageTask(route=post.path, source_path=post.source_path)
    try:
        task.succeed(render_post_page(post, templates, settings, options))
    except RenderError as e:
        logger.error("Render failed for %s: %s", post.path, e)
        task.fail(e)
    except Exception as e:
        logger.error("Unexpected render failure for %s: %s", post.path, e)
        error = RenderError(str(e), post.path, post.source_path)
        error.__cause__ = e
        task.fail(error)
    return task


def render(
    catalog: Catalog, templates: Templates, settings: Settings | None = None
) -> RenderResult:
    """Render the listing page and every post page.

    A post that fails to render is reported in ``failures`` and left out of
    ``pages``; the rest of the site still renders. The listing page always
    links every catalogued post, including failed ones.
    """
    settings = settings or get_settings()
    options = markdown_options(settings)

    listing_task = PageTask(route=LISTING_ROUTE)
    try:
        listing_task.succeed(render_listing_page(catalog, templates, settings))
    except RenderError as e:
        logger.error("Render failed for listing page: %s", e)
        listing_task.fail(e)

    workers = max(1, settings.render_workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        # map() yields in submission order, so pages follow catalog order
        post_tasks = list(
            pool.map(
                lambda post: _run_post_task(post, templates, settings, options),
                catalog,
            )
        )

    result = RenderResult()
    for task in [listing_task, *post_tasks]:
        if task.state is PageState.RENDERED:
            result.pages.append(task.page)
        else:
            result.failures.append(task.error)

    logger.info(
        "Rendered %d pages, %d failed", len(result.pages), len(result.failures)
    )
    return result
