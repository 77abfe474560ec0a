"""Notes endpoints: generate, combine, list, fetch, update and delete study notes."""

from __future__ import annotations

import asyncio
from typing import Any

from anthropic import APIStatusError
from fastapi import APIRouter, HTTPException, Response

from src.api.models import (
    CombineRequest,
    GenerateNotesRequest,
    NoteDetail,
    NotesResponse,
    NoteSummary,
    NoteUpdate,
)
from src.api.routes.chunks import to_chunking_options
from src.config import settings
from src.errors import InvalidInputError, NoteGenerationError
from src.generation.client import AnthropicTextGenerator, TextGenerator
from src.generation.notes import parse_note_result
from src.notes.combiner import combine_chunked_notes
from src.notes.pipeline import generate_notes
from src.notes.storage import (
    delete_notes,
    get_notes,
    get_supabase_client,
    list_notes,
    store_notes,
    update_notes,
)

router = APIRouter()


def get_text_generator() -> TextGenerator:
    """Build the Claude-backed generator, or 501 if no API key is configured."""
    if not settings.anthropic_api_key:
        raise HTTPException(
            status_code=501,
            detail="Note generation is not configured. Set ANTHROPIC_API_KEY.",
        )
    return AnthropicTextGenerator()


@router.post("/api/notes/generate", response_model=NotesResponse)
async def generate(request: GenerateNotesRequest) -> NotesResponse:
    """Generate study notes for a transcript, optionally saving them.

    Long transcripts are chunked and each chunk is sent to Claude in order;
    the partial results are merged into a single note document.
    """
    options = to_chunking_options(request.options) if request.options else None
    generator = get_text_generator()

    try:
        # Sequential LLM calls block; keep them off the event loop.
        notes = await asyncio.to_thread(
            generate_notes,
            request.transcript,
            generator,
            request.title,
            request.duration,
            options,
        )
    except APIStatusError as exc:
        # Claude API overloaded (529) or other upstream error
        raise HTTPException(status_code=503, detail=f"LLM unavailable: {exc.message}") from exc
    except NoteGenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    note_id = None
    if request.save:
        client = get_supabase_client()
        note_id = store_notes(
            client,
            notes,
            user_id=request.user_id,
            folder_id=request.folder_id,
            tag_ids=request.tag_ids,
        )

    return NotesResponse(note_id=note_id, notes=notes.to_dict())


@router.post("/api/notes/combine", response_model=NotesResponse)
async def combine(request: CombineRequest) -> NotesResponse:
    """Combine caller-supplied per-chunk results without calling the LLM."""
    try:
        results = [
            parse_note_result(data, chunk_id=f"chunk-{i}") for i, data in enumerate(request.results)
        ]
        notes = combine_chunked_notes(results, request.transcript, request.title, request.duration)
    except (InvalidInputError, NoteGenerationError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return NotesResponse(notes=notes.to_dict())


@router.get("/api/notes", response_model=list[NoteSummary])
async def list_all(user_id: str | None = None, folder_id: str | None = None) -> list[NoteSummary]:
    """List stored notes ordered by creation date (newest first)."""
    client = get_supabase_client()
    return [
        NoteSummary(
            id=str(row["id"]),
            title=row.get("title") or "",
            difficulty=row.get("difficulty"),
            duration=row.get("duration"),
            folder_id=row.get("folder_id"),
            is_favorite=bool(row.get("is_favorite")),
            created_at=row.get("created_at"),
        )
        for row in list_notes(client, user_id=user_id, folder_id=folder_id)
    ]


def _to_detail(row: dict[str, Any]) -> NoteDetail:
    content: dict[str, Any] = row.get("content") or {}
    return NoteDetail(
        id=str(row["id"]),
        title=row.get("title") or content.get("title", ""),
        folder_id=row.get("folder_id"),
        is_favorite=bool(row.get("is_favorite")),
        created_at=row.get("created_at"),
        notes=content,
    )


@router.get("/api/notes/{note_id}", response_model=NoteDetail)
async def get_one(note_id: str) -> NoteDetail:
    """Get a stored note with its full combined document."""
    client = get_supabase_client()
    row = get_notes(client, note_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return _to_detail(row)


@router.patch("/api/notes/{note_id}", response_model=NoteDetail)
async def update_one(note_id: str, request: NoteUpdate, user_id: str | None = None) -> NoteDetail:
    """Rename, move, favourite or replace the content of a stored note."""
    client = get_supabase_client()
    try:
        row = update_notes(client, note_id, request.model_dump(exclude_unset=True), user_id=user_id)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if row is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return _to_detail(row)


@router.delete("/api/notes/{note_id}", status_code=204)
async def delete_one(note_id: str, user_id: str | None = None) -> Response:
    """Delete a stored note."""
    client = get_supabase_client()
    if not delete_notes(client, note_id, user_id=user_id):
        raise HTTPException(status_code=404, detail="Note not found")
    return Response(status_code=204)
