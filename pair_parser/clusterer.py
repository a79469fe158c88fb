"""
Block Clusterer
===============
Partitions the ordered block list into clusters of blocks that sit close
together in the surrounding prose.

A short transition ("And another:") between two examples keeps them in one
cluster; a substantial paragraph of unrelated exposition starts a new one,
so blocks on either side of it are never paired with each other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .models import BlockCluster, MarkerBlock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GapThresholds:
    """Limits above which the prose between two blocks splits a cluster."""

    # More than this many non-empty lines is always significant
    max_lines: int = 5

    # A single line longer than this is significant
    single_line_max_chars: int = 200

    # More than this many lines whose combined length exceeds
    # multi_line_max_chars is significant
    multi_line_min_lines: int = 2
    multi_line_max_chars: int = 150


DEFAULT_THRESHOLDS = GapThresholds()


def gap_lines(gap_text: str) -> list[str]:
    """Non-empty lines of the trimmed gap text."""
    trimmed = gap_text.strip()
    if not trimmed:
        return []
    return [line for line in trimmed.split("\n") if line.strip()]


def is_significant_gap(
    gap_text: str,
    thresholds: GapThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Whether the text between two blocks is large enough to split them."""
    lines = gap_lines(gap_text)
    if not lines:
        return False

    if len(lines) > thresholds.max_lines:
        return True

    if len(lines) == 1 and len(lines[0]) > thresholds.single_line_max_chars:
        return True

    total_chars = sum(len(line) for line in lines)
    if (
        len(lines) > thresholds.multi_line_min_lines
        and total_chars > thresholds.multi_line_max_chars
    ):
        return True

    return False


class BlockClusterer:
    """
    Walks start-ordered blocks and closes the current cluster whenever
    the gap to the next block is significant.
    """

    def __init__(self, thresholds: Optional[GapThresholds] = None):
        self.thresholds = thresholds or DEFAULT_THRESHOLDS

    def cluster(
        self,
        content: str,
        blocks: list[MarkerBlock],
    ) -> list[BlockCluster]:
        """
        Group blocks into clusters.

        Args:
            content: The text the blocks were scanned from.
            blocks: Blocks sorted ascending by start.

        Returns:
            Clusters in document order.
        """
        clusters: list[BlockCluster] = []
        current: list[MarkerBlock] = []

        for block in blocks:
            if not current:
                current.append(block)
                continue

            gap = content[current[-1].end:block.start]
            if is_significant_gap(gap, self.thresholds):
                logger.debug(
                    f"Significant gap at offset {current[-1].end}, "
                    f"closing cluster of {len(current)} blocks"
                )
                clusters.append(BlockCluster(blocks=current))
                current = [block]
            else:
                current.append(block)

        if current:
            clusters.append(BlockCluster(blocks=current))

        return clusters
