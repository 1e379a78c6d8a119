"""Content loader: discovers Markdown posts and parses their front matter."""

import logging
from pathlib import Path
from typing import Any

import frontmatter
import yaml
from pydantic import ValidationError

from blogbuild.exceptions import LoadError, MalformedFrontMatterError
from blogbuild.models.post import RawPost

logger = logging.getLogger(__name__)

POST_GLOB = "*.md"

# Front matter keys that map onto RawPost fields; anything else is ignored
FRONT_MATTER_KEYS = ("title", "author", "date", "path", "tags", "resources")


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err["loc"]) or "front matter"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


def parse_post(text: str, source_path: Path) -> RawPost:
    """Split *text* into front matter and body and validate the metadata.

    Raises:
        MalformedFrontMatterError: If the front matter is not valid YAML,
            is not a mapping, or lacks a required field.
    """
    try:
        parsed = frontmatter.loads(text)
    except (yaml.YAMLError, ValueError, TypeError) as e:
        raise MalformedFrontMatterError(
            f"invalid front matter: {e}", source_path
        ) from e

    metadata: dict[str, Any] = {
        key: parsed.metadata[key] for key in FRONT_MATTER_KEYS if key in parsed.metadata
    }
    try:
        return RawPost(**metadata, body=parsed.content, source_path=source_path)
    except ValidationError as e:
        raise MalformedFrontMatterError(_format_validation_error(e), source_path) from e


def load_post(file_path: Path) -> RawPost:
    """Read and parse a single Markdown post."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"cannot read file: {e}", file_path) from e
    return parse_post(text, file_path)


def discover_posts(source_dir: Path) -> list[Path]:
    """List Markdown files under *source_dir*, recursively, in path order."""
    if not source_dir.is_dir():
        raise LoadError("source directory does not exist or is not a directory", source_dir)
    try:
        return sorted(p for p in source_dir.rglob(POST_GLOB) if p.is_file())
    except OSError as e:
        raise LoadError(f"cannot list directory: {e}", source_dir) from e


def load_posts(source_dir: str | Path) -> list[RawPost]:
    """Load every post under *source_dir*.

    A single malformed file fails the whole load; posts never silently
    disappear from a build.

    Raises:
        LoadError: If the directory or a file cannot be read.
        MalformedFrontMatterError: If a file's front matter is invalid.
    """
    source_dir = Path(source_dir)
    files = discover_posts(source_dir)
    logger.info("Found %d Markdown files in %s", len(files), source_dir)

    posts = [load_post(file_path) for file_path in files]
    for post in posts:
        logger.debug("Loaded %s -> %s", post.source_path, post.path)
    return posts
