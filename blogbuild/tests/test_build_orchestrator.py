"""End-to-end tests for the site build orchestrator and CLI."""

import pytest

from blogbuild.exceptions import DuplicatePathError, MalformedFrontMatterError
from blogbuild.services.build import build_site

BROKEN_BODY = "```python\nprint('never closed')\n"


def _two_post_site(write_post):
    write_post(
        "a.md", title="Post A", date="2021-01-01", path="/a", body=" ".join(["alpha"] * 100)
    )
    write_post(
        "b.md", title="Post B", date="2021-06-01", path="/b", body=" ".join(["beta"] * 10)
    )


def test_two_post_site(write_post, tmp_path, mock_settings):
    _two_post_site(write_post)
    out = tmp_path / "public"

    stats = build_site(write_post.dir, out, settings=mock_settings)

    assert stats.to_dict() == {"posts": 2, "rendered": 3, "failed": 0, "written": 3}
    index = (out / "index.html").read_text()
    assert index.index("Post B") < index.index("Post A")
    assert "Post A" in (out / "a" / "index.html").read_text()
    assert "Post B" in (out / "b" / "index.html").read_text()


def test_failed_page_is_not_written(write_post, tmp_path, mock_settings):
    _two_post_site(write_post)
    write_post("c.md", title="Post C", date="2021-03-01", path="/c", body=BROKEN_BODY)
    out = tmp_path / "public"

    stats = build_site(write_post.dir, out, settings=mock_settings)

    assert stats.posts == 3
    assert stats.failed == 1
    assert stats.written == 3
    assert not (out / "c").exists()
    assert 'href="/c"' in (out / "index.html").read_text()


def test_malformed_post_aborts_before_writing(write_post, tmp_path, mock_settings):
    _two_post_site(write_post)
    (write_post.dir / "bad.md").write_text("---\ntitle: No path\ndate: 2021-01-01\n---\nx\n")
    out = tmp_path / "public"

    with pytest.raises(MalformedFrontMatterError):
        build_site(write_post.dir, out, settings=mock_settings)

    assert not out.exists()


def test_duplicate_path_aborts(write_post, tmp_path, mock_settings):
    write_post("one.md", path="/same")
    write_post("two.md", path="/same")

    with pytest.raises(DuplicatePathError):
        build_site(write_post.dir, tmp_path / "public", settings=mock_settings)


def test_paths_default_to_settings(write_post, tmp_path, mock_settings):
    _two_post_site(write_post)
    mock_settings.source_dir = str(write_post.dir)
    mock_settings.output_dir = str(tmp_path / "site")

    stats = build_site()

    assert stats.written == 3
    assert (tmp_path / "site" / "index.html").exists()


def test_custom_templates_dir(write_post, tmp_path, mock_settings):
    _two_post_site(write_post)
    tpl = tmp_path / "tpl"
    tpl.mkdir()
    (tpl / "post.html").write_text("POST {{ title }}")
    (tpl / "index.html").write_text("{% for post in posts %}{{ post.route }};{% endfor %}")
    out = tmp_path / "public"

    build_site(write_post.dir, out, templates_dir=tpl, settings=mock_settings)

    assert (out / "index.html").read_text() == "/b;/a;"
    assert (out / "a" / "index.html").read_text() == "POST Post A"


def test_unicode_route_is_built(write_post, tmp_path, mock_settings):
    write_post("good.md", title="Good", path="/good")
    write_post("cafe.md", title="Café notes", path="/café")
    out = tmp_path / "public"

    stats = build_site(write_post.dir, out, settings=mock_settings)

    assert stats.written == 3
    assert "Café notes" in (out / "café" / "index.html").read_text()


def test_trailing_slash_duplicate_aborts(write_post, tmp_path, mock_settings):
    write_post("one.md", path="/a")
    write_post("two.md", path="/a/")

    with pytest.raises(DuplicatePathError):
        build_site(write_post.dir, tmp_path / "public", settings=mock_settings)

    assert not (tmp_path / "public").exists()


class TestCli:
    def test_clean_build_exits_zero(self, write_post, tmp_path, mock_settings, capsys):
        from scripts.build import main

        _two_post_site(write_post)
        code = main(["--source", str(write_post.dir), "--output", str(tmp_path / "out")])

        assert code == 0
        assert "Rendered: 3" in capsys.readouterr().out

    def test_page_failure_exits_one(self, write_post, tmp_path, mock_settings):
        from scripts.build import main

        write_post("c.md", path="/c", body=BROKEN_BODY)
        code = main(["--source", str(write_post.dir), "--output", str(tmp_path / "out")])

        assert code == 1

    def test_fatal_error_exits_two(self, tmp_path, mock_settings):
        from scripts.build import main

        code = main(["--source", str(tmp_path / "missing"), "--output", str(tmp_path / "out")])

        assert code == 2

    def test_workers_flag_overrides_settings(self, write_post, tmp_path, mock_settings, mocker):
        import scripts.build as cli

        _two_post_site(write_post)
        spy = mocker.spy(cli, "build_site")

        cli.main(["--source", str(write_post.dir), "--output", str(tmp_path / "o"), "--workers", "1"])

        assert spy.call_args.kwargs["settings"].render_workers == 1

    def test_unusable_route_exits_two(self, write_post, tmp_path, mock_settings, caplog):
        from scripts.build import main

        write_post("spaced.md", path="/my post")
        code = main(["--source", str(write_post.dir), "--output", str(tmp_path / "out")])

        assert code == 2
        assert "spaced.md" in caplog.text
        assert not (tmp_path / "out").exists()
