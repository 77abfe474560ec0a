"""Generate and parse structured notes for a single transcript chunk."""

from __future__ import annotations

import json
from typing import Any

from src.errors import NoteGenerationError
from src.generation.client import TextGenerator
from src.generation.prompts import NOTE_SCHEMA, build_chunk_prompt
from src.ingestion.chunking import prepare_chunk_for_processing
from src.ingestion.models import TranscriptChunk
from src.notes.models import (
    ChunkedNoteResult,
    Concept,
    Quiz,
    QuizQuestion,
    Section,
    StudyGuide,
)


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _dicts(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _parse_correct_answer(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def parse_note_result(data: Any, chunk_id: str = "") -> ChunkedNoteResult:
    """Parse model JSON (camelCase keys) into a :class:`ChunkedNoteResult`.

    Missing or malformed fields become empty values instead of errors, so a
    partial answer still contributes what it has.  A JSON string is decoded
    first.
    """
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise NoteGenerationError(f"Invalid note JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise NoteGenerationError(f"Expected a JSON object, got {type(data).__name__}")

    guide = data.get("studyGuide")
    if not isinstance(guide, dict):
        guide = {}
    quiz = data.get("quiz")
    if not isinstance(quiz, dict):
        quiz = {}

    return ChunkedNoteResult(
        chunk_id=chunk_id or _str(data.get("chunkId")),
        title=_str(data.get("title")),
        summary=_str(data.get("summary")),
        key_points=_str_list(data.get("keyPoints")),
        sections=[
            Section(
                title=_str(s.get("title")),
                content=_str_list(s.get("content")),
                learning_objectives=_str_list(s.get("learningObjectives")),
                key_insights=_str_list(s.get("keyInsights")),
            )
            for s in _dicts(data.get("sections"))
        ],
        concepts=[
            Concept(
                term=_str(c.get("term")),
                definition=_str(c.get("definition")),
                context=_str(c.get("context")),
                importance=_str(c.get("importance")),
                examples=_str_list(c.get("examples")),
                related_terms=_str_list(c.get("relatedTerms")),
            )
            for c in _dicts(data.get("concepts"))
        ],
        study_guide=StudyGuide(
            review_questions=_str_list(guide.get("reviewQuestions")),
            practice_exercises=_str_list(guide.get("practiceExercises")),
            memory_aids=_str_list(guide.get("memoryAids")),
            connections=_str_list(guide.get("connections")),
            advanced_topics=_str_list(guide.get("advancedTopics")),
        ),
        quiz=Quiz(
            questions=[
                QuizQuestion(
                    question=_str(q.get("question")),
                    options=_str_list(q.get("options")),
                    correct_answer=_parse_correct_answer(q.get("correctAnswer")),
                    explanation=_str(q.get("explanation")),
                    difficulty=_str(q.get("difficulty")).lower().strip() or "medium",
                )
                for q in _dicts(quiz.get("questions"))
            ]
        ),
    )


def generate_chunk_notes(
    generator: TextGenerator,
    chunk: TranscriptChunk,
    title: str = "",
    chunk_number: int = 1,
    total_chunks: int = 1,
) -> ChunkedNoteResult:
    """Generate structured notes for one chunk using *generator*.

    Raises:
        NoteGenerationError: If the model output is not a JSON object.
    """
    prompt = build_chunk_prompt(
        prepare_chunk_for_processing(chunk),
        title=title,
        chunk_number=chunk_number,
        total_chunks=total_chunks,
    )
    data = generator.generate_json(prompt, NOTE_SCHEMA)
    return parse_note_result(data, chunk_id=chunk.id)
