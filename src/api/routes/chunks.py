"""Chunk preview endpoint: show how a transcript will be split before generation."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from src.api.models import ChunkingOptionsModel, ChunkOut, ChunkPreviewResponse, ChunkRequest
from src.config import settings
from src.errors import InvalidInputError
from src.ingestion.chunking import (
    chunk_transcript,
    estimate_processing_time,
    optimize_chunking_options,
    validate_chunk,
)
from src.ingestion.models import DEFAULT_CHUNKING_OPTIONS, ChunkingOptions

router = APIRouter()


def to_chunking_options(model: ChunkingOptionsModel) -> ChunkingOptions:
    """Convert wire options, raising 400 when they violate the size invariants."""
    try:
        return ChunkingOptions(
            max_chunk_size=model.max_chunk_size,
            overlap_size=model.overlap_size,
            preserve_sentences=model.preserve_sentences,
            min_chunk_size=model.min_chunk_size,
        )
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/api/chunks", response_model=ChunkPreviewResponse)
async def preview_chunks(request: ChunkRequest) -> ChunkPreviewResponse:
    """Split a transcript and report per-chunk validation and a time estimate.

    ``adaptive`` tunes the options to the transcript; explicit ``options``
    are used as the starting point either way.
    """
    options = to_chunking_options(request.options) if request.options else DEFAULT_CHUNKING_OPTIONS
    if request.adaptive:
        options = optimize_chunking_options(request.transcript, options)

    chunks = chunk_transcript(request.transcript, options)
    estimate = estimate_processing_time(chunks, settings.seconds_per_chunk)

    out: list[ChunkOut] = []
    for chunk in chunks:
        validation = validate_chunk(chunk)
        out.append(
            ChunkOut(
                id=chunk.id,
                content=chunk.content,
                start_index=chunk.start_index,
                end_index=chunk.end_index,
                word_count=chunk.word_count,
                is_valid=validation.is_valid,
                issues=validation.issues,
            )
        )

    return ChunkPreviewResponse(
        chunks=out,
        options=ChunkingOptionsModel(
            max_chunk_size=options.max_chunk_size,
            overlap_size=options.overlap_size,
            preserve_sentences=options.preserve_sentences,
            min_chunk_size=options.min_chunk_size,
        ),
        total_chunks=estimate.total_chunks,
        estimated_minutes=estimate.estimated_minutes,
        estimated_seconds=estimate.estimated_seconds,
    )
