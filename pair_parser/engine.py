"""
Pair Parser Engine
==================
Main orchestrator that combines block scanning, clustering, pair extraction,
title formatting and statistics into a complete analysis pipeline.

Usage:
    engine = PairEngine(config)
    report = engine.analyze(response_text)
    # report is an ExtractionReport with structured JSON output

Architecture:
    text → scan_blocks → MarkerBlocks → BlockClusterer → BlockClusters →
    PairExtractor → ExpressionPairs → generate_pair_title → ExtractionReport
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import __version__
from .clusterer import GapThresholds
from .marker_stats import StatisticsReporter, get_pair_statistics
from .models import (
    ContentSegment,
    ExpressionPair,
    ExtractionReport,
    PairStatistics,
)
from .pair_extractor import detect_pairs, extract_expression_pairs
from .segmenter import segment_content
from .titles import MAX_TITLE_LENGTH, generate_pair_title

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExtractorConfig:
    """Configuration for the pair engine."""

    # Clustering thresholds
    max_gap_lines: int = 5
    single_line_max_chars: int = 200
    multi_line_min_lines: int = 2
    multi_line_max_chars: int = 150

    # Display
    title_max_length: int = MAX_TITLE_LENGTH

    # Output settings
    output_dir: str = "output"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def thresholds(self) -> GapThresholds:
        return GapThresholds(
            max_lines=self.max_gap_lines,
            single_line_max_chars=self.single_line_max_chars,
            multi_line_min_lines=self.multi_line_min_lines,
            multi_line_max_chars=self.multi_line_max_chars,
        )


class PairEngine:
    """
    Main pair extraction engine.

    Orchestrates the full pipeline:
        1. Block scanning
        2. Clustering
        3. Pair extraction
        4. Title formatting
        5. Statistics

    Holds no per-call state; safe to share between threads.
    """

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self.config = config or ExtractorConfig()
        self._setup_logging()

    def _setup_logging(self):
        """Configure logging based on config."""
        log_level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        package_logger = logging.getLogger("pair_parser")
        package_logger.setLevel(log_level)

        # Console handler
        if not package_logger.handlers:
            console = logging.StreamHandler()
            console.setLevel(log_level)
            console.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            package_logger.addHandler(console)

        # File handler
        if self.config.log_file:
            log_path = Path(self.config.log_file)
            already_attached = any(
                isinstance(h, logging.FileHandler)
                and Path(h.baseFilename) == log_path.absolute()
                for h in package_logger.handlers
            )
            if not already_attached:
                log_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_path, encoding="utf-8")
                file_handler.setLevel(log_level)
                file_handler.setFormatter(
                    logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
                )
                package_logger.addHandler(file_handler)

    def extract(self, content: str) -> list[ExpressionPair]:
        """Extract pairs; never raises."""
        return extract_expression_pairs(content, self.config.thresholds)

    def statistics(self, content: str) -> PairStatistics:
        return get_pair_statistics(content)

    def segments(self, content: str) -> list[ContentSegment]:
        return segment_content(content)

    def display_titles(self, pairs: list[ExpressionPair]) -> list[str]:
        return [
            generate_pair_title(pair, pairs, self.config.title_max_length)
            for pair in pairs
        ]

    def analyze(self, content: str, source: str = "") -> ExtractionReport:
        """
        Run the full pipeline over one response.

        Args:
            content: Raw response text.
            source: Optional label (file name, session id) for the report.

        Returns:
            ExtractionReport with pairs, display titles and statistics.
        """
        start_time = time.time()

        blocks, clusters, pairs = detect_pairs(content, self.config.thresholds)
        stats = self.statistics(content)

        report = ExtractionReport(
            source=source,
            parser_version=__version__,
            content_length=len(content),
            block_count=len(blocks),
            cluster_count=len(clusters),
            pairs=pairs,
            display_titles=self.display_titles(pairs),
            statistics=stats,
        )

        StatisticsReporter().log_summary(stats, len(pairs))

        elapsed = time.time() - start_time
        logger.info(
            f"Analysis complete in {elapsed:.3f}s: "
            f"{len(pairs)} pairs from {len(clusters)} clusters"
        )
        return report

    def save_report(self, report: ExtractionReport, name: str) -> Path:
        """Save a report as JSON in the output directory."""
        output_dir = Path(self.config.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        filepath = output_dir / f"{_safe_name(name)}_pairs.json"
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(
                report.model_dump(mode="json"), f,
                indent=2, ensure_ascii=False, default=str,
            )
        logger.info(f"Saved JSON output: {filepath}")
        return filepath


def _safe_name(name: str) -> str:
    """Clean a name for filesystem use."""
    clean = "".join(c if c.isalnum() or c in "-_" else "_" for c in name)
    return clean[:50] or "response"


def load_chat_text(path: str) -> str:
    """
    Read a response from disk.

    ``.json`` files are treated as a chat payload ``{"text": ..., "sessionId": ...}``
    and the ``text`` field is returned; anything else is read as UTF-8 text.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If a JSON payload has no string ``text`` field.
    """
    filepath = Path(path)
    if not filepath.exists():
        raise FileNotFoundError(f"Response file not found: {path}")

    raw = filepath.read_text(encoding="utf-8")
    if filepath.suffix.lower() != ".json":
        return raw

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    text = payload.get("text") if isinstance(payload, dict) else None
    if not isinstance(text, str):
        raise ValueError(f"No 'text' field in chat payload: {path}")
    return text
