"""Pydantic request/response schemas for the Study Notes API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ChunkingOptionsModel(BaseModel):
    """Chunk sizing options as accepted over the wire (characters)."""

    max_chunk_size: int = Field(default=8000, gt=0)
    overlap_size: int = Field(default=500, ge=0)
    preserve_sentences: bool = True
    min_chunk_size: int = Field(default=1000, ge=0)


class ChunkRequest(BaseModel):
    """Request body for the /api/chunks endpoint."""

    transcript: str
    adaptive: bool = False
    options: ChunkingOptionsModel | None = None


class ChunkOut(BaseModel):
    """A single transcript chunk with its advisory validation result."""

    id: str
    content: str
    start_index: int
    end_index: int
    word_count: int
    is_valid: bool
    issues: list[str] = []


class ChunkPreviewResponse(BaseModel):
    """Response body for the /api/chunks endpoint."""

    chunks: list[ChunkOut]
    options: ChunkingOptionsModel
    total_chunks: int
    estimated_minutes: int
    estimated_seconds: int


class GenerateNotesRequest(BaseModel):
    """Request body for the /api/notes/generate endpoint."""

    transcript: str = Field(min_length=1)
    title: str = ""
    duration: str = ""
    options: ChunkingOptionsModel | None = None
    save: bool = False
    user_id: str | None = None
    folder_id: str | None = None
    tag_ids: list[str] = []


class CombineRequest(BaseModel):
    """Request body for the /api/notes/combine endpoint.

    ``results`` holds one model-generated note object per chunk, in chunk
    order, using the camelCase keys the model is prompted to produce.
    """

    results: list[dict[str, Any]]
    transcript: str = ""
    title: str = ""
    duration: str = ""


class NotesResponse(BaseModel):
    """Combined notes, plus the stored note ID when they were saved."""

    note_id: str | None = None
    notes: dict[str, Any]


class NoteSummary(BaseModel):
    """Summary representation of a stored note for list views."""

    id: str
    title: str
    difficulty: str | None = None
    duration: str | None = None
    folder_id: str | None = None
    is_favorite: bool = False
    created_at: str | None = None


class NoteDetail(BaseModel):
    """A stored note including its full combined document."""

    id: str
    title: str
    folder_id: str | None = None
    is_favorite: bool = False
    created_at: str | None = None
    notes: dict[str, Any]


class NoteUpdate(BaseModel):
    """Request body for PATCH /api/notes/{note_id}; only fields sent are changed."""

    title: str | None = None
    content: dict[str, Any] | None = None
    folder_id: str | None = None
    is_favorite: bool | None = None


class FolderCreate(BaseModel):
    name: str = Field(min_length=1)
    color: str | None = None
    user_id: str | None = None


class TagCreate(BaseModel):
    name: str = Field(min_length=1)
    color: str | None = None
    user_id: str | None = None


class Folder(BaseModel):
    """A folder that groups notes."""

    id: str
    name: str
    color: str
    user_id: str | None = None
    created_at: str | None = None


class Tag(BaseModel):
    """A label attached to notes through ``note_tags``."""

    id: str
    name: str
    color: str
    user_id: str | None = None
    created_at: str | None = None


class HighlightActionInfo(BaseModel):
    type: str
    label: str
    description: str


class HighlightActionsResponse(BaseModel):
    actions: list[HighlightActionInfo]


class HighlightRequest(BaseModel):
    """Request body for POST /api/ai/highlight-explain."""

    text: str
    action: str
    context: str = ""


class HighlightResponse(BaseModel):
    action: str
    content: str
    timestamp: str


class SummarizeRequest(BaseModel):
    content: str = Field(min_length=1)
    max_length: int = Field(default=300, gt=0)


class SummarizeResponse(BaseModel):
    summary: str


class ConceptsRequest(BaseModel):
    content: str = Field(min_length=1)


class ConceptOut(BaseModel):
    term: str
    definition: str


class ConceptsResponse(BaseModel):
    concepts: list[ConceptOut]
