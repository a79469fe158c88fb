"""
Marker Statistics
=================
Diagnostic counts of balanced marker pairs in a response.

Independent of pairing: ``is_balanced`` compares global input and
expression counts and says nothing about per-cluster matches.
"""

from __future__ import annotations

import logging

from .block_scanner import count_blocks, has_balanced_pair
from .models import BlockKind, PairStatistics

logger = logging.getLogger(__name__)


def get_pair_statistics(content: str) -> PairStatistics:
    """Count balanced title, input, expression and result pairs."""
    counts = count_blocks(content)
    return PairStatistics(
        title_blocks=counts[BlockKind.TITLE],
        input_blocks=counts[BlockKind.INPUT],
        expression_blocks=counts[BlockKind.EXPRESSION],
        result_blocks=counts[BlockKind.RESULT],
    )


def has_valid_marker_format(content: str) -> bool:
    """True when at least one input pair and one expression pair exist."""
    return (
        has_balanced_pair(content, BlockKind.INPUT)
        and has_balanced_pair(content, BlockKind.EXPRESSION)
    )


class StatisticsReporter:
    """Logs marker statistics next to the extracted pair count."""

    def log_summary(self, stats: PairStatistics, pair_count: int) -> None:
        if not stats.has_markers:
            logger.info("No DSL markers found in response")
            return

        logger.info("=" * 60)
        logger.info("PAIR DETECTION REPORT")
        logger.info("=" * 60)
        logger.info(f"Title Blocks: {stats.title_blocks}")
        logger.info(f"Input Blocks: {stats.input_blocks}")
        logger.info(f"Expression Blocks: {stats.expression_blocks}")
        logger.info(f"Result Blocks: {stats.result_blocks}")
        logger.info(f"Pairs Extracted: {pair_count}")
        if not stats.is_balanced:
            logger.warning(
                f"Unbalanced markers: {stats.input_blocks} inputs vs "
                f"{stats.expression_blocks} expressions"
            )
        logger.info("=" * 60)
