"""Shared fixtures for blogbuild tests."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset module-level caches between tests."""
    yield

    from blogbuild.config import get_settings

    get_settings.cache_clear()


@pytest.fixture
def mock_settings(monkeypatch):
    """Provide a Settings object with safe test defaults."""
    from blogbuild.config import Settings, get_settings

    test_settings = Settings(
        site_title="Test Blog",
        site_description="A blog used in tests",
        site_author="@tester",
        site_url="https://blog.test",
        source_dir="unused-posts",
        output_dir="unused-public",
        templates_dir="",
        words_per_minute=200,
        show_reading_time=True,
        render_workers=2,
    )

    get_settings.cache_clear()
    monkeypatch.setattr("blogbuild.config.get_settings", lambda: test_settings)

    # Modules that did `from blogbuild.config import get_settings` hold their
    # own binding, which the patch above does not reach
    for mod_path in [
        "blogbuild.services.build.renderer",
        "blogbuild.services.build.orchestrator",
        "scripts.build",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings


def make_post_text(
    *,
    title: str = "A Post",
    date: str = "2021-01-01",
    path: str = "/a-post",
    body: str = "Some body text.",
    extra: str = "",
) -> str:
    lines = ["---", f"title: {title}", f"date: {date}", f"path: {path}"]
    if extra:
        lines.append(extra.rstrip("\n"))
    lines += ["---", "", body, ""]
    return "\n".join(lines)


@pytest.fixture
def write_post(tmp_path):
    """Factory writing a Markdown post into ``tmp_path / 'posts'``."""
    posts_dir = tmp_path / "posts"
    posts_dir.mkdir()

    def _write(name: str, **kwargs) -> Path:
        file_path = posts_dir / name
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(make_post_text(**kwargs), encoding="utf-8")
        return file_path

    _write.dir = posts_dir
    return _write
