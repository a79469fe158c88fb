"""
Pair Extractor
==============
Turns clusters of marker blocks into ExpressionPair entities.

Per cluster:
    - inputs and expressions are matched positionally
    - each match takes the nearest unused preceding title
    - each match takes the nearest following result (results may be shared)
    - matches without a title get a generated fallback title

Pairs from all clusters are concatenated and renumbered 0..N-1.
"""

from __future__ import annotations

import logging
from typing import Optional

from .block_scanner import scan_blocks
from .clusterer import BlockClusterer, GapThresholds
from .models import BlockCluster, BlockKind, ExpressionPair, MarkerBlock

logger = logging.getLogger(__name__)

SINGLE_FALLBACK_TITLE = "Try This Example"


def fallback_title(number: int, total: int) -> str:
    """Placeholder title for the 1-based match ``number`` of ``total``."""
    if total == 1:
        return SINGLE_FALLBACK_TITLE
    return f"Try Example {number}"


class PairExtractor:
    """Greedy input/expression/title/result matcher."""

    def extract(self, clusters: list[BlockCluster]) -> list[ExpressionPair]:
        """Extract pairs from every cluster and assign global indices."""
        pairs: list[ExpressionPair] = []
        for cluster in clusters:
            pairs.extend(self.extract_from_cluster(cluster))

        for idx, pair in enumerate(pairs):
            pair.index = idx

        return pairs

    def extract_from_cluster(self, cluster: BlockCluster) -> list[ExpressionPair]:
        titles = cluster.of_kind(BlockKind.TITLE)
        inputs = cluster.of_kind(BlockKind.INPUT)
        expressions = cluster.of_kind(BlockKind.EXPRESSION)
        results = cluster.of_kind(BlockKind.RESULT)

        match_count = min(len(inputs), len(expressions))
        if len(inputs) != len(expressions):
            logger.debug(
                f"Unbalanced cluster: {len(inputs)} inputs, "
                f"{len(expressions)} expressions; keeping {match_count}"
            )

        used_titles: set[int] = set()
        pairs: list[ExpressionPair] = []

        for i in range(match_count):
            input_block = inputs[i]
            expression_block = expressions[i]

            if not input_block.content or not expression_block.content:
                logger.debug(f"Skipping match {i + 1}: empty input or expression")
                continue

            example_start = min(input_block.start, expression_block.start)

            title_idx = self._nearest_title(titles, example_start, used_titles)
            title = None
            if title_idx is not None:
                used_titles.add(title_idx)
                title = titles[title_idx].content

            result = self._nearest_result(results, expression_block.end)

            pairs.append(ExpressionPair(
                input=input_block.content,
                expression=expression_block.content,
                result=result.content if result else None,
                title=title or fallback_title(i + 1, match_count),
                index=i,
            ))

        return pairs

    def _nearest_title(
        self,
        titles: list[MarkerBlock],
        example_start: int,
        used: set[int],
    ) -> Optional[int]:
        """Index of the closest unused title starting before the example."""
        best_idx = None
        best_distance = None

        for idx, title in enumerate(titles):
            if idx in used or title.start >= example_start:
                continue
            distance = example_start - title.end
            if best_distance is None or distance < best_distance:
                best_idx = idx
                best_distance = distance

        return best_idx

    def _nearest_result(
        self,
        results: list[MarkerBlock],
        expression_end: int,
    ) -> Optional[MarkerBlock]:
        """Closest result starting after the expression. Not consumed."""
        best = None
        best_distance = None

        for result in results:
            if result.start <= expression_end:
                continue
            distance = result.start - expression_end
            if best_distance is None or distance < best_distance:
                best = result
                best_distance = distance

        return best


def detect_pairs(
    content: str,
    thresholds: Optional[GapThresholds] = None,
) -> tuple[list[MarkerBlock], list[BlockCluster], list[ExpressionPair]]:
    """
    Scan, cluster and pair one response in a single pass.

    Never raises: any failure is logged and three empty lists are returned.

    Returns:
        (blocks, clusters, pairs)
    """
    try:
        blocks = scan_blocks(content)
        clusters = BlockClusterer(thresholds).cluster(content, blocks)
        pairs = PairExtractor().extract(clusters)
    except Exception:
        logger.exception("Error extracting expression pairs")
        return [], [], []

    logger.debug(
        f"Detected {len(pairs)} expression pairs from "
        f"{len(blocks)} blocks in {len(clusters)} clusters"
    )
    return blocks, clusters, pairs


def extract_expression_pairs(
    content: str,
    thresholds: Optional[GapThresholds] = None,
) -> list[ExpressionPair]:
    """
    Extract "try this" examples from an AI chat response.

    Never raises: any failure while scanning, clustering or pairing is
    logged and an empty list is returned.

    Args:
        content: Raw response text containing sentinel markers.
        thresholds: Optional gap thresholds for clustering.

    Returns:
        Pairs in document order with indices 0..N-1.
    """
    _, _, pairs = detect_pairs(content, thresholds)
    return pairs
