"""Markdown to HTML transformation.

Wraps Python-Markdown with a fixed extension set and an explicit options
object instead of globally registered plugins.
"""

import html
import re
from dataclasses import dataclass
from urllib.parse import urlparse
from xml.etree.ElementTree import Element

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

BASE_EXTENSIONS = ["fenced_code", "tables", "toc"]

# Code fence as fenced_code sees it: at column 0, ``` or ~~~ (3+)
_FENCE_RE = re.compile(r"^(`{3,}|~{3,})(.*)$")
# What may follow an opening fence: {attrs} or an optional .lang and hl_lines
_FENCE_INFO_RE = re.compile(
    r"""^[ ]*(\{[^\n]*\}|\.?[\w#.+-]*[ ]*(hl_lines=("|').*?\3[ ]*)?)$"""
)
_TAG_RE = re.compile(r"<[^>]+>")


class MarkdownError(ValueError):
    """The Markdown source contains a construct that cannot be rendered."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


@dataclass(frozen=True)
class MarkdownOptions:
    """Rendering switches for :func:`render_markdown`."""

    external_link_target: str | None = "_blank"
    external_link_rel: str | None = "nofollow"
    syntax_highlighting: bool = True
    site_url: str | None = None


class _ExternalLinkProcessor(Treeprocessor):
    def __init__(self, md: markdown.Markdown, options: MarkdownOptions) -> None:
        super().__init__(md)
        self.options = options
        self.site_host = (
            urlparse(options.site_url).netloc.lower() if options.site_url else ""
        )

    def _is_external(self, href: str) -> bool:
        parsed = urlparse(href)
        if parsed.scheme not in ("http", "https"):
            return False
        return parsed.netloc.lower() != self.site_host

    def run(self, root: Element) -> None:
        for link in root.iter("a"):
            href = link.get("href", "")
            if not self._is_external(href):
                continue
            if self.options.external_link_target:
                link.set("target", self.options.external_link_target)
            if self.options.external_link_rel:
                link.set("rel", self.options.external_link_rel)


class ExternalLinkExtension(Extension):
    """Mark links that leave the site with ``target``/``rel`` attributes."""

    def __init__(self, options: MarkdownOptions) -> None:
        super().__init__()
        self.options = options

    def extendMarkdown(self, md: markdown.Markdown) -> None:
        md.treeprocessors.register(
            _ExternalLinkProcessor(md, self.options), "external_links", 5
        )


def check_fences(text: str) -> None:
    """Raise MarkdownError if a fenced code block is never closed.

    Follows the ``fenced_code`` rules: fences start at column 0, and a block
    is closed only by the exact opening fence string plus trailing spaces.
    """
    open_fence: str | None = None
    open_line = 0
    for lineno, line in enumerate(text.splitlines(), start=1):
        match = _FENCE_RE.match(line)
        if not match:
            continue
        fence, rest = match.group(1), match.group(2)
        if open_fence is None:
            if _FENCE_INFO_RE.match(rest):
                open_fence, open_line = fence, lineno
        elif fence == open_fence and not rest.strip(" "):
            open_fence = None
    if open_fence is not None:
        raise MarkdownError(f"unterminated code fence {open_fence!r}", line=open_line)


def _build_extensions(options: MarkdownOptions) -> list:
    extensions: list = list(BASE_EXTENSIONS)
    if options.syntax_highlighting:
        extensions.append("codehilite")
    if options.external_link_target or options.external_link_rel:
        extensions.append(ExternalLinkExtension(options))
    return extensions


def render_markdown(text: str, options: MarkdownOptions | None = None) -> str:
    """Convert Markdown *text* to an HTML fragment.

    A fresh ``Markdown`` instance is used per call, so this is safe to call
    from several threads at once.

    Raises:
        MarkdownError: If the source has an unterminated code fence.
    """
    options = options or MarkdownOptions()
    check_fences(text)
    md = markdown.Markdown(
        extensions=_build_extensions(options),
        extension_configs={
            "codehilite": {"guess_lang": False, "css_class": "highlight"},
        },
    )
    return md.convert(text)


def markdown_to_text(text: str) -> str:
    """Render *text* and strip all markup, leaving the readable words."""
    rendered = markdown.markdown(text, extensions=["fenced_code", "tables"])
    return html.unescape(_TAG_RE.sub("", rendered))
