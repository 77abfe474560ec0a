"""Sentence-aware transcript chunking for size-limited LLM calls."""

from __future__ import annotations

import math
import re
from dataclasses import replace

from src.ingestion.models import (
    DEFAULT_CHUNKING_OPTIONS,
    ChunkingOptions,
    ChunkValidation,
    ProcessingEstimate,
    ProcessingProgress,
    TranscriptChunk,
)
from src.pipeline_config import ProcessingStage

_SENTENCE_END = re.compile(r"[.!?]\s+")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_TERMINAL_PUNCTUATION = re.compile(r"[.!?]$")

CONTINUATION_MARKER = "[Continued from previous section] "

# Progress ranges (base, width) per stage, in percent
_STAGE_RANGES: dict[ProcessingStage, tuple[int, int]] = {
    ProcessingStage.CHUNKING: (0, 10),
    ProcessingStage.PROCESSING: (10, 80),
    ProcessingStage.COMBINING: (90, 10),
}

# Validation thresholds
MIN_CHUNK_CHARS = 50
MAX_CHUNK_CHARS = 15000
MIN_CHUNK_WORDS = 10


def _snap_to_sentence_end(
    transcript: str,
    cursor: int,
    chunk_end: int,
    floor: int,
    options: ChunkingOptions,
) -> int:
    """Pull *chunk_end* back to the last sentence ending in the search window.

    The window starts at the later of 80% of ``max_chunk_size`` and
    ``min_chunk_size`` past the cursor (and never before *floor*).  Returns
    *chunk_end* unchanged when the window holds no ``[.!?]`` followed by
    whitespace.
    """
    search_start = max(
        math.floor(cursor + options.max_chunk_size * 0.8),
        cursor + options.min_chunk_size,
        floor,
    )
    if search_start >= chunk_end:
        return chunk_end

    last_end = -1
    for match in _SENTENCE_END.finditer(transcript, search_start, chunk_end):
        last_end = match.end()

    if last_end > search_start:
        return last_end
    return chunk_end


def chunk_transcript(
    transcript: str,
    options: ChunkingOptions = DEFAULT_CHUNKING_OPTIONS,
) -> list[TranscriptChunk]:
    """Split a transcript into ordered, overlapping chunks.

    Short transcripts (``len <= max_chunk_size``) come back as a single
    chunk, including the empty string.  Longer ones are cut every
    ``max_chunk_size`` characters, snapped back to a sentence ending when
    ``preserve_sentences`` is set, and each following chunk starts
    ``overlap_size`` characters before the previous one ended.

    Args:
        transcript: Raw transcript text.
        options: Chunk sizing configuration.

    Returns:
        Chunks whose ranges cover ``[0, len(transcript))`` without gaps and
        whose ``end_index`` strictly increases.
    """
    length = len(transcript)
    if length <= options.max_chunk_size:
        return [TranscriptChunk(id="chunk-0", content=transcript, start_index=0, end_index=length)]

    chunks: list[TranscriptChunk] = []
    cursor = 0
    previous_end = 0

    while cursor < length:
        chunk_end = min(cursor + options.max_chunk_size, length)

        if options.preserve_sentences and chunk_end < length:
            chunk_end = _snap_to_sentence_end(transcript, cursor, chunk_end, previous_end, options)

        chunks.append(
            TranscriptChunk(
                id=f"chunk-{len(chunks)}",
                content=transcript[cursor:chunk_end],
                start_index=cursor,
                end_index=chunk_end,
            )
        )

        if chunk_end >= length:
            break

        previous_end = chunk_end
        # Carry the tail of this chunk into the next one, always moving forward
        cursor = max(chunk_end - options.overlap_size, cursor + 1)

    return chunks


def optimize_chunking_options(
    transcript: str,
    base: ChunkingOptions = DEFAULT_CHUNKING_OPTIONS,
) -> ChunkingOptions:
    """Derive chunking options from transcript length and sentence length.

    Very long transcripts get smaller chunks; long average sentences
    (more than 20 words) get 1.5x the overlap, capped at 800 characters and
    kept below ``max_chunk_size``.
    """
    length = len(transcript)
    word_count = len(transcript.split())
    sentence_count = len(_SENTENCE_SPLIT.split(transcript)) or 1
    avg_words_per_sentence = word_count / sentence_count

    max_chunk_size = base.max_chunk_size
    overlap_size = base.overlap_size

    if length > 100_000:
        max_chunk_size, overlap_size = 6000, 400
    elif length > 50_000:
        max_chunk_size, overlap_size = 7000, 450

    if avg_words_per_sentence > 20:
        overlap_size = min(int(overlap_size * 1.5), 800, max_chunk_size - 1)

    return replace(
        base,
        max_chunk_size=max_chunk_size,
        overlap_size=overlap_size,
        min_chunk_size=min(base.min_chunk_size, max_chunk_size),
    )


def estimate_processing_time(
    chunks: list[TranscriptChunk],
    seconds_per_chunk: int = 15,
) -> ProcessingEstimate:
    """Estimate generation time as a flat cost per chunk."""
    total_seconds = len(chunks) * seconds_per_chunk
    return ProcessingEstimate(
        estimated_minutes=total_seconds // 60,
        estimated_seconds=total_seconds % 60,
        total_chunks=len(chunks),
    )


def calculate_progress(
    current_chunk: int,
    total_chunks: int,
    stage: ProcessingStage | str,
) -> ProcessingProgress:
    """Map a position within a stage onto an overall 0-100 percentage.

    Chunking covers 0-10%, processing 10-90% and combining 90-100%; within
    a stage progress is linear in ``current_chunk / total_chunks``.
    """
    stage = ProcessingStage(stage)
    base, width = _STAGE_RANGES[stage]

    chunk_progress = (current_chunk / total_chunks) * width if total_chunks > 0 else 0
    total = min(base + chunk_progress, 100)

    if stage is ProcessingStage.CHUNKING:
        message = "Preparing transcript chunks..."
    elif stage is ProcessingStage.PROCESSING:
        message = f"Processing chunk {current_chunk + 1} of {total_chunks}..."
    else:
        message = "Combining results into final notes..."

    return ProcessingProgress(
        current_chunk=current_chunk,
        total_chunks=total_chunks,
        stage=stage,
        message=message,
        percentage=math.floor(total + 0.5),
    )


def validate_chunk(chunk: TranscriptChunk) -> ChunkValidation:
    """Flag chunks that are unlikely to produce useful notes.

    The check is advisory: callers decide whether to skip, re-chunk or
    process the chunk anyway.
    """
    issues: list[str] = []
    content_length = len(chunk.content)

    if content_length < MIN_CHUNK_CHARS:
        issues.append("Chunk too short for meaningful processing")

    if content_length > MAX_CHUNK_CHARS:
        issues.append("Chunk too long for API processing")

    if chunk.word_count < MIN_CHUNK_WORDS:
        issues.append("Insufficient word count")

    non_whitespace = len("".join(chunk.content.split()))
    if non_whitespace < content_length * 0.5:
        issues.append("Chunk contains too much whitespace")

    return ChunkValidation(is_valid=not issues, issues=issues)


def prepare_chunk_for_processing(chunk: TranscriptChunk) -> str:
    """Clean chunk text before it is embedded in a prompt.

    Collapses whitespace, closes a dangling sentence with a period and marks
    chunks that continue an earlier one.
    """
    content = " ".join(chunk.content.split())

    if not _TERMINAL_PUNCTUATION.search(content):
        content += "."

    if chunk.start_index > 0:
        content = CONTINUATION_MARKER + content

    return content
