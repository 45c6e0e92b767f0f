"""AI response parsing for Reddit Psychiatrist.

This module turns raw chat completions into domain values:
1. parse_interests(): comma-separated interest list -> list of tokens
2. parse_summary(): personality summary -> trimmed text

Both parsers read only the first candidate completion and raise
EmptyResponseError when the service returned none.

Interest parsing rules:
    - Outer whitespace trimmed, then every remaining whitespace character removed
    - Split on "," with order preserved
    - Empty tokens are kept: "a,b," -> ["a", "b", ""]
"""

import re
from typing import List

from reddit_psychiatrist.models.analysis_models import ChatResponse
from reddit_psychiatrist.utils.errors import EmptyResponseError


_WHITESPACE = re.compile(r"\s+")


def _first_choice(response: ChatResponse) -> str:
    """Return the first candidate's content, or raise if there is none."""
    if not response.choices:
        raise EmptyResponseError()
    # The SDK reports content=None for refusals and tool calls; treat that as empty text
    return response.choices[0] or ""


def parse_interests(response: ChatResponse) -> List[str]:
    """Parse a comma-separated interest list.

    Args:
        response: Chat completion for the interests prompt

    Returns:
        Interest tokens in the order returned. A trailing comma yields a
        trailing empty string; empties are not filtered.

    Raises:
        EmptyResponseError: If the response has zero choices

    Examples:
        >>> parse_interests(ChatResponse(choices=("philosophy, webdev, anarchism",)))
        ['philosophy', 'webdev', 'anarchism']
        >>> parse_interests(ChatResponse(choices=("a,b,",)))
        ['a', 'b', '']
    """
    raw = _first_choice(response).strip()
    raw = _WHITESPACE.sub("", raw)
    return raw.split(",")


def parse_summary(response: ChatResponse) -> str:
    """Return the summary text with only leading/trailing whitespace removed.

    Raises:
        EmptyResponseError: If the response has zero choices
    """
    return _first_choice(response).strip()
