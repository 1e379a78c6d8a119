"""Build configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Build settings loaded from environment (``BLOG_*``) or ``.env``."""

    # Site metadata
    site_title: str = "The Act of Coding"
    site_description: str = ""
    site_author: str = "@rootart"
    site_url: str = "https://dizhak.com"

    # Paths
    source_dir: str = "content/posts"
    output_dir: str = "public"
    templates_dir: str = ""  # empty -> bundled templates

    # Reading time
    words_per_minute: int = 200
    show_reading_time: bool = True

    # Markdown
    external_link_target: str | None = "_blank"
    external_link_rel: str | None = "nofollow"
    syntax_highlighting: bool = True

    # Rendering
    render_workers: int = 4

    model_config = {"env_file": ".env", "env_prefix": "BLOG_", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
