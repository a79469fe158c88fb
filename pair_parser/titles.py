"""
Title Formatter
===============
Cosmetic cleanup of pair titles for button labels.
"""

from __future__ import annotations

import re

from .models import ExpressionPair

SINGLE_PAIR_LABEL = "Try This"
MAX_TITLE_LENGTH = 40

# "Example 1: ", "example 12:", "Example: "
EXAMPLE_PREFIX_PATTERN = re.compile(r"^Example\s*\d*:\s*", re.IGNORECASE)

# "Try ", "TRY "
TRY_PREFIX_PATTERN = re.compile(r"^Try\s+", re.IGNORECASE)


def clean_title(title: str) -> str:
    """Strip the numbering and "Try" prefixes from a title."""
    cleaned = EXAMPLE_PREFIX_PATTERN.sub("", title)
    cleaned = TRY_PREFIX_PATTERN.sub("", cleaned)
    return cleaned.strip()


def generate_pair_title(
    pair: ExpressionPair,
    all_pairs: list[ExpressionPair],
    max_length: int = MAX_TITLE_LENGTH,
) -> str:
    """
    Display label for a pair.

    A response with a single example always gets the terse "Try This".
    Otherwise the stored title is cleaned, truncated to ``max_length``
    with an ellipsis, and replaced by "Example N" when nothing is left.
    """
    if len(all_pairs) == 1:
        return SINGLE_PAIR_LABEL

    title = clean_title(pair.title)

    if len(title) > max_length:
        title = title[:max_length - 3] + "..."

    return title or f"Example {pair.index + 1}"
