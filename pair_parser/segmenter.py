"""
Content Segmenter
=================
Splits a response into ordered display segments: prose, fenced code and
marker blocks. No markdown is rendered; prose is passed through trimmed.

Marker blocks take precedence over code fences: fences are only searched
in the text between markers.
"""

from __future__ import annotations

import logging
import re

from .block_scanner import scan_blocks
from .models import BlockKind, ContentSegment, SegmentType

logger = logging.getLogger(__name__)

# ```lang\n ... \n```
CODE_FENCE_PATTERN = re.compile(r"```(\w+)?\n([\s\S]*?)\n```")

_KIND_TO_SEGMENT = {
    BlockKind.TITLE: SegmentType.TITLE,
    BlockKind.INPUT: SegmentType.INPUT,
    BlockKind.EXPRESSION: SegmentType.EXPRESSION,
    BlockKind.RESULT: SegmentType.RESULT,
}


def _text_segment(content: str, start: int, end: int) -> list[ContentSegment]:
    """Trimmed prose segment, or nothing for whitespace-only text."""
    text = content[start:end]
    stripped = text.strip()
    if not stripped:
        return []
    offset = start + text.index(stripped)
    return [ContentSegment(
        type=SegmentType.TEXT,
        content=stripped,
        start=offset,
        end=offset + len(stripped),
    )]


def _segment_prose(content: str, start: int, end: int) -> list[ContentSegment]:
    """Split a marker-free slice into text and code segments."""
    segments: list[ContentSegment] = []
    cursor = start

    for match in CODE_FENCE_PATTERN.finditer(content, start, end):
        segments.extend(_text_segment(content, cursor, match.start()))
        segments.append(ContentSegment(
            type=SegmentType.CODE,
            content=match.group(2),
            start=match.start(),
            end=match.end(),
            language=match.group(1) or "text",
        ))
        cursor = match.end()

    segments.extend(_text_segment(content, cursor, end))
    return segments


def segment_content(content: str) -> list[ContentSegment]:
    """
    Segment a response for display.

    Args:
        content: Raw response text.

    Returns:
        Segments ordered by start offset.
    """
    segments: list[ContentSegment] = []
    cursor = 0

    for block in scan_blocks(content):
        # Nested blocks start behind the cursor; never re-emit their prose
        if block.start > cursor:
            segments.extend(_segment_prose(content, cursor, block.start))
        segments.append(ContentSegment(
            type=_KIND_TO_SEGMENT[block.kind],
            content=block.content,
            start=block.start,
            end=block.end,
        ))
        cursor = max(cursor, block.end)

    segments.extend(_segment_prose(content, cursor, len(content)))

    logger.debug(f"Segmented response into {len(segments)} segments")
    return segments
