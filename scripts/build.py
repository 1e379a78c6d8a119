"""Build the blog from the command line.

Usage:
    python -m scripts.build                       # Paths from BLOG_* settings
    python -m scripts.build --source posts --output public
"""

import argparse
import logging
import sys

from blogbuild.config import get_settings
from blogbuild.exceptions import BuildError
from blogbuild.services.build import build_site

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the static blog")
    parser.add_argument("--source", type=str, help="Directory with Markdown posts")
    parser.add_argument("--output", type=str, help="Directory for rendered pages")
    parser.add_argument("--templates", type=str, help="Directory with post.html and index.html")
    parser.add_argument("--workers", type=int, help="Threads used to render post pages")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    settings = get_settings()
    if args.workers is not None:
        settings = settings.model_copy(update={"render_workers": args.workers})

    try:
        stats = build_site(
            source_dir=args.source,
            output_dir=args.output,
            templates_dir=args.templates,
            settings=settings,
        )
    except BuildError as e:
        logger.error("Build aborted: %s", e)
        return 2

    print("\nBuild complete:")
    print(f"  Posts:    {stats.posts}")
    print(f"  Rendered: {stats.rendered}")
    print(f"  Failed:   {stats.failed}")
    print(f"  Written:  {stats.written}")

    if stats.failed > 0:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
