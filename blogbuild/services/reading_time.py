"""Reading-time estimate for post bodies."""

import math

from blogbuild.models.post import ReadingTime
from blogbuild.services.markdown_renderer import markdown_to_text

DEFAULT_WORDS_PER_MINUTE = 200


def count_words(text: str) -> int:
    """Number of whitespace-delimited tokens in *text*."""
    return len(text.split())


def reading_time(
    body: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE
) -> ReadingTime:
    """Estimate how long the rendered *body* takes to read.

    Words are counted on the plain text of the rendered Markdown, so markup
    such as link targets or emphasis markers is not counted.
    """
    if words_per_minute <= 0:
        raise ValueError(f"words_per_minute must be positive, got {words_per_minute}")

    words = count_words(markdown_to_text(body))
    minutes = math.ceil(words / words_per_minute)
    return ReadingTime(words=words, minutes=minutes, text=f"{minutes} min read")
