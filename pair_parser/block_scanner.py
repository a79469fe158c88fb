"""
Block Scanner
=============
Scans raw chat text for sentinel-delimited regions
(``${title}``, ``${inputBlock}``, ``${expressionBlock}``, ``${resultBlock}``)
and returns them as position-tagged blocks in document order.
"""

from __future__ import annotations

import logging
import re

from .models import BlockKind, MarkerBlock

logger = logging.getLogger(__name__)

# ─── Marker Patterns ──────────────────────────────────────────────────────────


def _marker_pattern(kind: BlockKind) -> re.Pattern:
    token = re.escape(kind.marker)
    # Non-greedy so adjacent pairs of the same kind stay separate
    return re.compile(token + r"([\s\S]*?)" + token)


MARKER_PATTERNS: dict[BlockKind, re.Pattern] = {
    kind: _marker_pattern(kind) for kind in BlockKind
}


def scan_blocks(content: str) -> list[MarkerBlock]:
    """
    Find every balanced marker pair of every kind.

    Args:
        content: Raw response text.

    Returns:
        All blocks sorted ascending by start offset. An unterminated
        sentinel produces no block.
    """
    blocks: list[MarkerBlock] = []

    for kind, pattern in MARKER_PATTERNS.items():
        for match in pattern.finditer(content):
            blocks.append(MarkerBlock(
                kind=kind,
                content=match.group(1).strip(),
                start=match.start(),
                end=match.end(),
            ))

    blocks.sort(key=lambda b: b.start)

    logger.debug(f"Scanned {len(blocks)} marker blocks")
    return blocks


def count_blocks(content: str) -> dict[BlockKind, int]:
    """Count balanced marker pairs per kind."""
    return {
        kind: sum(1 for _ in pattern.finditer(content))
        for kind, pattern in MARKER_PATTERNS.items()
    }


def has_balanced_pair(content: str, kind: BlockKind) -> bool:
    return MARKER_PATTERNS[kind].search(content) is not None
