"""Rendered page data models."""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict

from blogbuild.exceptions import RenderError


class PageState(str, Enum):
    """Lifecycle of a page during rendering.

    PENDING moves to exactly one of RENDERED or FAILED; both are terminal.
    """

    PENDING = "pending"
    RENDERED = "rendered"
    FAILED = "failed"


class Page(BaseModel):
    """One output artifact: a route plus its HTML."""

    model_config = ConfigDict(frozen=True)

    route: str
    title: str
    content: str


@dataclass
class RenderResult:
    """Outcome of rendering a catalog."""

    pages: list[Page] = field(default_factory=list)
    failures: list[RenderError] = field(default_factory=list)

    @property
    def routes(self) -> list[str]:
        return [p.route for p in self.pages]
