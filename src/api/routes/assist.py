"""Study helper endpoints: highlight explanations, summaries and concept extraction."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

from anthropic import APIStatusError
from fastapi import APIRouter, HTTPException

from src.api.models import (
    ConceptOut,
    ConceptsRequest,
    ConceptsResponse,
    HighlightActionInfo,
    HighlightActionsResponse,
    HighlightRequest,
    HighlightResponse,
    SummarizeRequest,
    SummarizeResponse,
)
from src.api.routes.notes import get_text_generator
from src.errors import InvalidInputError, NoteGenerationError
from src.generation.assist import HIGHLIGHT_ACTIONS, explain_highlight, extract_concepts, summarize

router = APIRouter()


@router.get("/api/ai/highlight-explain", response_model=HighlightActionsResponse)
async def highlight_actions() -> HighlightActionsResponse:
    """List the available highlight actions."""
    return HighlightActionsResponse(actions=[HighlightActionInfo(**a) for a in HIGHLIGHT_ACTIONS])


@router.post("/api/ai/highlight-explain", response_model=HighlightResponse)
async def highlight_explain(request: HighlightRequest) -> HighlightResponse:
    """Explain a highlighted passage with the requested action."""
    generator = get_text_generator()
    try:
        content = await asyncio.to_thread(
            explain_highlight, generator, request.text, request.action, request.context
        )
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except APIStatusError as exc:
        raise HTTPException(status_code=503, detail=f"LLM unavailable: {exc.message}") from exc
    except NoteGenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return HighlightResponse(
        action=request.action,
        content=content,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.post("/api/ai/summarize", response_model=SummarizeResponse)
async def summarize_content(request: SummarizeRequest) -> SummarizeResponse:
    generator = get_text_generator()
    try:
        summary = await asyncio.to_thread(summarize, generator, request.content, request.max_length)
    except APIStatusError as exc:
        raise HTTPException(status_code=503, detail=f"LLM unavailable: {exc.message}") from exc
    except NoteGenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return SummarizeResponse(summary=summary)


@router.post("/api/ai/concepts", response_model=ConceptsResponse)
async def concepts(request: ConceptsRequest) -> ConceptsResponse:
    """Extract key terms with definitions from note content."""
    generator = get_text_generator()
    try:
        found = await asyncio.to_thread(extract_concepts, generator, request.content)
    except APIStatusError as exc:
        raise HTTPException(status_code=503, detail=f"LLM unavailable: {exc.message}") from exc
    except NoteGenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return ConceptsResponse(concepts=[ConceptOut(term=c.term, definition=c.definition) for c in found])
