"""End-to-end notes pipeline: chunk -> generate per chunk -> combine."""

from __future__ import annotations

import logging
from collections.abc import Callable

from src.config import settings
from src.generation.client import TextGenerator
from src.generation.notes import generate_chunk_notes
from src.ingestion.chunking import (
    calculate_progress,
    chunk_transcript,
    optimize_chunking_options,
    validate_chunk,
)
from src.ingestion.models import ChunkingOptions, ProcessingProgress
from src.notes.combiner import combine_chunked_notes
from src.notes.models import ChunkedNoteResult, CombinedNotes
from src.pipeline_config import ProcessingStage

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProcessingProgress], None]


def resolve_chunking_options(
    transcript: str,
    options: ChunkingOptions | None = None,
    adaptive: bool | None = None,
) -> ChunkingOptions:
    """Return the chunking options to use for *transcript*.

    Explicit *options* win.  Otherwise options are built from settings and,
    when adaptive chunking is enabled, tuned to the transcript.
    """
    if options is not None:
        return options

    base = ChunkingOptions(
        max_chunk_size=settings.chunk_max_size,
        overlap_size=settings.chunk_overlap,
        preserve_sentences=settings.preserve_sentences,
        min_chunk_size=settings.chunk_min_size,
    )
    if adaptive is None:
        adaptive = settings.adaptive_chunking
    if adaptive:
        return optimize_chunking_options(transcript, base)
    return base


def generate_notes(
    transcript: str,
    generator: TextGenerator,
    title: str = "",
    duration: str = "",
    options: ChunkingOptions | None = None,
    on_progress: ProgressCallback | None = None,
) -> CombinedNotes:
    """Full pipeline: chunk -> generate notes per chunk -> combine.

    Chunks are processed sequentially so results stay in chunk order, which
    the combiner relies on when merging sections and concepts.

    Args:
        transcript: Raw transcript text.
        generator: Text generation capability (e.g. ``AnthropicTextGenerator``).
        title: Video title; preferred over model-generated titles.
        duration: Human-readable duration, passed through to the notes.
        options: Chunking options; resolved from settings when omitted.
        on_progress: Called with a :class:`ProcessingProgress` at each step.

    Returns:
        The combined note document.
    """

    def report(current: int, total: int, stage: ProcessingStage) -> None:
        if on_progress is not None:
            on_progress(calculate_progress(current, total, stage))

    report(0, 1, ProcessingStage.CHUNKING)

    # 1. Chunk
    chunk_options = resolve_chunking_options(transcript, options)
    chunks = chunk_transcript(transcript, chunk_options)
    logger.info(
        "Split transcript of %d chars into %d chunk(s) (max=%d, overlap=%d)",
        len(transcript),
        len(chunks),
        chunk_options.max_chunk_size,
        chunk_options.overlap_size,
    )

    for chunk in chunks:
        validation = validate_chunk(chunk)
        if not validation.is_valid:
            logger.warning("Chunk %s: %s", chunk.id, "; ".join(validation.issues))

    report(1, 1, ProcessingStage.CHUNKING)

    # 2. Generate, one call per chunk in order
    results: list[ChunkedNoteResult] = []
    for index, chunk in enumerate(chunks):
        report(index, len(chunks), ProcessingStage.PROCESSING)
        try:
            result = generate_chunk_notes(
                generator,
                chunk,
                title=title,
                chunk_number=index + 1,
                total_chunks=len(chunks),
            )
        except Exception:
            logger.exception("Note generation failed for %s", chunk.id)
            raise
        results.append(result)

    # 3. Combine
    report(0, 1, ProcessingStage.COMBINING)
    notes = combine_chunked_notes(results, transcript, title, duration)
    report(1, 1, ProcessingStage.COMBINING)

    logger.info(
        "Combined %d chunk result(s) into %d section(s), %d concept(s), %d quiz question(s)",
        len(results),
        len(notes.sections),
        len(notes.concepts),
        len(notes.quiz.questions),
    )
    return notes
