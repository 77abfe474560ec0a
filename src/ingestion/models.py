"""Data models for transcript chunking."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.errors import InvalidInputError
from src.pipeline_config import ProcessingStage


@dataclass(frozen=True)
class TranscriptChunk:
    """A contiguous slice ``[start_index, end_index)`` of a transcript."""

    id: str
    content: str
    start_index: int
    end_index: int

    @property
    def word_count(self) -> int:
        """Whitespace-delimited token count of ``content``."""
        return len(self.content.split())


@dataclass(frozen=True)
class ChunkingOptions:
    """Immutable configuration for :func:`src.ingestion.chunking.chunk_transcript`.

    All sizes are in characters.  ``min_chunk_size`` is the floor used when
    searching backwards for a sentence boundary, not a hard minimum.
    """

    max_chunk_size: int = 8000
    overlap_size: int = 500
    preserve_sentences: bool = True
    min_chunk_size: int = 1000

    def __post_init__(self) -> None:
        if self.max_chunk_size <= 0:
            raise InvalidInputError("max_chunk_size must be positive")
        if not 0 <= self.overlap_size < self.max_chunk_size:
            raise InvalidInputError(
                f"overlap_size must be in [0, {self.max_chunk_size}), got {self.overlap_size}"
            )
        if self.min_chunk_size > self.max_chunk_size:
            raise InvalidInputError(
                f"min_chunk_size ({self.min_chunk_size}) exceeds "
                f"max_chunk_size ({self.max_chunk_size})"
            )


DEFAULT_CHUNKING_OPTIONS = ChunkingOptions()


@dataclass(frozen=True)
class ProcessingEstimate:
    """Rough wall-clock estimate for generating notes over a chunk list."""

    estimated_minutes: int
    estimated_seconds: int
    total_chunks: int

    @property
    def total_seconds(self) -> int:
        return self.estimated_minutes * 60 + self.estimated_seconds


@dataclass(frozen=True)
class ProcessingProgress:
    """Snapshot of pipeline progress for display."""

    current_chunk: int
    total_chunks: int
    stage: ProcessingStage
    message: str
    percentage: int


@dataclass(frozen=True)
class ChunkValidation:
    """Advisory quality check result for a single chunk."""

    is_valid: bool
    issues: list[str] = field(default_factory=list)
