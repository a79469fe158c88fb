"""
DSL Tutor Pair Parser
=====================
Turns AI tutor chat responses into actionable "try this" examples.

Architecture:
    - Block Scanner: Finds sentinel-delimited title/input/expression/result blocks
    - Block Clusterer: Groups blocks that sit close together in the prose
    - Pair Extractor: Matches inputs to expressions, then titles and results
    - Title Formatter: Cleans titles for button labels
    - Statistics: Counts balanced markers for debug panels

Version: 1.0.0
"""

__version__ = "1.0.0"

from .marker_stats import get_pair_statistics, has_valid_marker_format
from .models import ExpressionPair, PairStatistics
from .pair_extractor import extract_expression_pairs
from .titles import generate_pair_title

__all__ = [
    "ExpressionPair",
    "PairStatistics",
    "extract_expression_pairs",
    "generate_pair_title",
    "get_pair_statistics",
    "has_valid_marker_format",
]
