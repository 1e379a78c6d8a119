"""Build error taxonomy.

Indexing errors (``LoadError``, ``MalformedFrontMatterError``,
``DuplicatePathError``) abort the build. ``RenderError`` is recovered per
page by the renderer.
"""

from pathlib import Path


class BuildError(Exception):
    """Base class for all build failures."""


class LoadError(BuildError):
    """A source directory or file could not be read."""

    def __init__(self, message: str, source_path: Path | str | None = None) -> None:
        self.source_path = Path(source_path) if source_path is not None else None
        if self.source_path is not None:
            message = f"{self.source_path}: {message}"
        super().__init__(message)


class MalformedFrontMatterError(LoadError):
    """Front matter is missing a required field or cannot be parsed."""


class DuplicatePathError(BuildError):
    """Two posts claim the same route."""

    def __init__(self, path: str, first: Path, second: Path) -> None:
        self.path = path
        self.first = first
        self.second = second
        super().__init__(f"Duplicate path {path!r} in {first} and {second}")


class RenderError(BuildError):
    """A single page could not be rendered."""

    def __init__(
        self, message: str, route: str, source_path: Path | None = None
    ) -> None:
        self.route = route
        self.source_path = source_path
        where = f"{route} ({source_path})" if source_path else route
        super().__init__(f"{where}: {message}")


class TemplateError(BuildError):
    """A page template is missing or references an unknown slot."""


class InvalidRouteError(BuildError, ValueError):
    """A page route cannot be mapped onto a file in the output directory."""
