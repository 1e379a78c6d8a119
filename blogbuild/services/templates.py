"""Page templates with a fixed set of named slots.

Templates are Jinja2 files rendered in a sandboxed environment. Every
variable a template reads must be one of the slots declared here; anything
else is rejected when the template is loaded.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import jinja2
from jinja2 import meta
from jinja2.sandbox import SandboxedEnvironment

from blogbuild.exceptions import TemplateError

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

POST_TEMPLATE = "post.html"
LISTING_TEMPLATE = "index.html"

POST_SLOTS = frozenset(
    {
        "title",
        "date",
        "reading_time",
        "html_body",
        "author",
        "tags",
        "resources",
        "site_title",
        "page_title",
    }
)
LISTING_SLOTS = frozenset({"posts", "site_title", "site_description", "page_title"})


@dataclass(frozen=True)
class Templates:
    """The pair of templates a build renders with."""

    post: jinja2.Template
    listing: jinja2.Template


def create_environment(directory: Path) -> SandboxedEnvironment:
    return SandboxedEnvironment(
        loader=jinja2.FileSystemLoader(str(directory)),
        autoescape=True,
        undefined=jinja2.StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def _load(
    env: SandboxedEnvironment, name: str, allowed: frozenset[str]
) -> jinja2.Template:
    try:
        source, _filename, _uptodate = env.loader.get_source(env, name)
        used = meta.find_undeclared_variables(env.parse(source))
    except jinja2.TemplateNotFound as e:
        raise TemplateError(f"Template not found: {name}") from e
    except jinja2.TemplateSyntaxError as e:
        raise TemplateError(f"{name}:{e.lineno}: {e.message}") from e

    unknown = sorted(used - allowed)
    if unknown:
        raise TemplateError(
            f"{name} uses unknown slot(s): {', '.join(unknown)}; "
            f"allowed: {', '.join(sorted(allowed))}"
        )
    return env.get_template(name)


def load_templates(directory: str | Path | None = None) -> Templates:
    """Load and validate the post and listing templates.

    Args:
        directory: Folder holding ``post.html`` and ``index.html``.
            Defaults to the templates bundled with the package.

    Raises:
        TemplateError: If a template is missing, malformed, or reads a
            variable outside its slot set.
    """
    template_dir = Path(directory) if directory else DEFAULT_TEMPLATES_DIR
    logger.debug("Loading templates from %s", template_dir)
    env = create_environment(template_dir)
    return Templates(
        post=_load(env, POST_TEMPLATE, POST_SLOTS),
        listing=_load(env, LISTING_TEMPLATE, LISTING_SLOTS),
    )
