"""
Data Models
===========
Pydantic models for structured pair extraction output.
All models are serializable to JSON for the chat UI.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


# ─── Enums ────────────────────────────────────────────────────────────────────


class BlockKind(str, Enum):
    """Kind of sentinel-delimited region. The value is the sentinel name."""
    TITLE = "title"
    INPUT = "inputBlock"
    EXPRESSION = "expressionBlock"
    RESULT = "resultBlock"

    @property
    def marker(self) -> str:
        """The literal sentinel token, e.g. ``${inputBlock}``."""
        return "${" + self.value + "}"


class SegmentType(str, Enum):
    """Type of display segment produced by the content segmenter."""
    TEXT = "text"
    CODE = "code"
    TITLE = "title"
    INPUT = "input"
    EXPRESSION = "expression"
    RESULT = "result"


# ─── Block Models ─────────────────────────────────────────────────────────────


class MarkerBlock(BaseModel):
    """
    A single scanned region of one marker kind.
    Offsets index into the original response text.
    """
    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    content: str = Field(
        description="Trimmed text between the two sentinels"
    )
    start: int = Field(ge=0, description="Offset of the opening sentinel")
    end: int = Field(ge=0, description="Offset just past the closing sentinel")


class BlockCluster(BaseModel):
    """
    A contiguous run of blocks with no significant gap between
    consecutive members.
    """
    blocks: list[MarkerBlock] = Field(default_factory=list)

    def of_kind(self, kind: BlockKind) -> list[MarkerBlock]:
        """Members of one kind, in document order."""
        return [b for b in self.blocks if b.kind == kind]

    def latest(self, kind: BlockKind) -> Optional[str]:
        """Content of the last member of a kind (display summary only)."""
        members = self.of_kind(kind)
        return members[-1].content if members else None

    @computed_field
    @property
    def start(self) -> int:
        return self.blocks[0].start if self.blocks else 0

    @computed_field
    @property
    def end(self) -> int:
        return self.blocks[-1].end if self.blocks else 0


# ─── Pair Model ───────────────────────────────────────────────────────────────


class ExpressionPair(BaseModel):
    """
    One matched input + expression, with optional result and a title.
    The unit rendered as a "Try This" action.
    """
    input: str
    expression: str
    result: Optional[str] = None
    title: str
    index: int = Field(ge=0)


# ─── Statistics ───────────────────────────────────────────────────────────────


class PairStatistics(BaseModel):
    """Balanced marker counts for debug panels."""
    title_blocks: int = 0
    input_blocks: int = 0
    expression_blocks: int = 0
    result_blocks: int = 0

    @computed_field
    @property
    def has_markers(self) -> bool:
        return (
            self.title_blocks
            + self.input_blocks
            + self.expression_blocks
            + self.result_blocks
        ) > 0

    @computed_field
    @property
    def is_balanced(self) -> bool:
        return (
            self.input_blocks == self.expression_blocks
            and self.input_blocks > 0
        )


# ─── Segments ─────────────────────────────────────────────────────────────────


class ContentSegment(BaseModel):
    """An ordered slice of a response: prose, code fence or marker block."""
    type: SegmentType
    content: str
    start: int = Field(ge=0)
    end: int = Field(ge=0)
    language: Optional[str] = None


# ─── Report ───────────────────────────────────────────────────────────────────


class ExtractionReport(BaseModel):
    """
    Complete output of an analysis run.
    This is the top-level JSON structure returned by the CLI and service.
    """
    source: str = ""
    parser_version: str = "1.0.0"
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    content_length: int = 0
    block_count: int = 0
    cluster_count: int = 0
    pairs: list[ExpressionPair] = Field(default_factory=list)
    display_titles: list[str] = Field(default_factory=list)
    statistics: PairStatistics = Field(default_factory=PairStatistics)

    @computed_field
    @property
    def pair_count(self) -> int:
        return len(self.pairs)
