"""Merge per-chunk note results into a single note document."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from src.errors import InvalidInputError
from src.notes.models import (
    ChunkedNoteResult,
    CombinedNotes,
    Concept,
    Quiz,
    QuizQuestion,
    Section,
    StudyGuide,
)
from src.notes.similarity import deduplicate
from src.pipeline_config import Difficulty, QuizDifficulty

CONTENT_TYPE = "educational"
FALLBACK_TITLE = "Comprehensive Video Notes"
FALLBACK_SUMMARY = (
    "This video covers important topics that provide valuable insights and practical knowledge."
)
GENERIC_TITLE_MARKERS = ("Video Notes", "Section")

DEFAULT_NEXT_STEPS = (
    "Review and summarize key concepts",
    "Practice applying the knowledge",
    "Explore related topics for deeper understanding",
    "Discuss the concepts with peers or mentors",
)

# Output caps
MAX_SECTIONS = 12
MAX_SECTION_CONTENT = 8
MAX_LEARNING_OBJECTIVES = 4
MAX_KEY_INSIGHTS = 3
MAX_KEY_POINTS = 15
MAX_CONCEPTS = 25
MAX_SUMMARY_CHARS = 450
MIN_SUMMARY_CHARS = 20
MAX_REVIEW_QUESTIONS = 20
MAX_PRACTICE_EXERCISES = 15
MAX_MEMORY_AIDS = 12
MAX_CONNECTIONS = 12
MAX_ADVANCED_TOPICS = 8
MAX_QUIZ_QUESTIONS = 10

# Per-difficulty quota, in selection order
QUIZ_QUOTAS: tuple[tuple[QuizDifficulty, int], ...] = (
    (QuizDifficulty.EASY, 4),
    (QuizDifficulty.MEDIUM, 4),
    (QuizDifficulty.HARD, 2),
)

_GENERIC_SUMMARY_OPENING = re.compile(r"^This (video|section|part)")
_WHITESPACE = re.compile(r"\s+")


def combine_chunked_notes(
    results: list[ChunkedNoteResult],
    transcript: str,
    title: str = "",
    duration: str = "",
) -> CombinedNotes:
    """Combine per-chunk note results into one :class:`CombinedNotes`.

    *results* must be in chunk order: same-titled sections and same-termed
    concepts are merged into the first occurrence.

    Args:
        results: One result per transcript chunk, in chunk order.
        transcript: The full original transcript.
        title: Caller-supplied title; preferred over generated titles.
        duration: Human-readable video duration, passed through.

    Raises:
        InvalidInputError: If *results* is empty.
    """
    if not results:
        raise InvalidInputError("No chunked results to combine")

    if len(results) == 1:
        result = results[0]
        return CombinedNotes(
            title=title or result.title,
            transcript=transcript,
            sections=list(result.sections),
            summary=result.summary,
            key_points=list(result.key_points),
            duration=duration,
            content_type=CONTENT_TYPE,
            difficulty=Difficulty.INTERMEDIATE.value,
            estimated_study_time=estimate_study_time(len(transcript)),
            prerequisites=[],
            next_steps=list(DEFAULT_NEXT_STEPS),
            study_guide=result.study_guide,
            concepts=list(result.concepts),
            quiz=result.quiz,
        )

    return CombinedNotes(
        title=title or combine_titles(results),
        transcript=transcript,
        sections=combine_sections(results),
        summary=combine_summaries(results),
        key_points=combine_key_points(results),
        duration=duration,
        content_type=CONTENT_TYPE,
        difficulty=determine_difficulty(results).value,
        estimated_study_time=estimate_study_time(len(transcript)),
        prerequisites=combine_prerequisites(results),
        next_steps=combine_next_steps(results),
        study_guide=combine_study_guides(results),
        concepts=combine_concepts(results),
        quiz=combine_quizzes(results),
    )


def combine_titles(results: list[ChunkedNoteResult]) -> str:
    """Return the first title that is not a generic placeholder."""
    for result in results:
        if result.title and not any(marker in result.title for marker in GENERIC_TITLE_MARKERS):
            return result.title
    return FALLBACK_TITLE


@dataclass
class _SectionDraft:
    title: str
    content: list[str] = field(default_factory=list)
    learning_objectives: list[str] = field(default_factory=list)
    key_insights: list[str] = field(default_factory=list)


def combine_sections(results: list[ChunkedNoteResult]) -> list[Section]:
    """Merge sections whose titles match after lowercasing and trimming."""
    drafts: dict[str, _SectionDraft] = {}

    for result in results:
        for section in result.sections:
            key = section.title.lower().strip()
            draft = drafts.get(key)
            if draft is None:
                drafts[key] = _SectionDraft(
                    title=section.title,
                    content=list(section.content),
                    learning_objectives=list(section.learning_objectives),
                    key_insights=list(section.key_insights),
                )
                continue

            draft.content.extend(section.content)
            draft.learning_objectives = deduplicate(
                draft.learning_objectives + list(section.learning_objectives)
            )
            draft.key_insights = deduplicate(draft.key_insights + list(section.key_insights))

    return [
        Section(
            title=draft.title,
            content=deduplicate(draft.content)[:MAX_SECTION_CONTENT],
            learning_objectives=deduplicate(draft.learning_objectives)[:MAX_LEARNING_OBJECTIVES],
            key_insights=deduplicate(draft.key_insights)[:MAX_KEY_INSIGHTS],
        )
        for draft in list(drafts.values())[:MAX_SECTIONS]
    ]


def combine_summaries(results: list[ChunkedNoteResult]) -> str:
    """Join the usable chunk summaries into one overview paragraph."""
    summaries = [r.summary for r in results if r.summary and len(r.summary) > MIN_SUMMARY_CHARS]

    if not summaries:
        return FALLBACK_SUMMARY

    if len(summaries) == 1:
        return summaries[0]

    combined = " ".join(_GENERIC_SUMMARY_OPENING.sub("The content", s) for s in summaries)
    combined = _WHITESPACE.sub(" ", combined).strip()

    if len(combined) > MAX_SUMMARY_CHARS:
        return combined[: MAX_SUMMARY_CHARS - 3] + "..."
    return combined


def combine_key_points(results: list[ChunkedNoteResult]) -> list[str]:
    points = [point for r in results for point in r.key_points]
    return deduplicate(points)[:MAX_KEY_POINTS]


def combine_concepts(results: list[ChunkedNoteResult]) -> list[Concept]:
    """Merge concepts by term; the longer definition or importance wins."""
    merged: dict[str, Concept] = {}

    for result in results:
        for concept in result.concepts:
            key = concept.term.lower().strip()
            existing = merged.get(key)
            if existing is None:
                merged[key] = Concept(
                    term=concept.term,
                    definition=concept.definition,
                    context=concept.context,
                    importance=concept.importance,
                    examples=list(concept.examples),
                    related_terms=list(concept.related_terms),
                )
                continue

            definition = existing.definition
            if concept.definition and len(concept.definition) > len(definition):
                definition = concept.definition
            importance = existing.importance
            if concept.importance and len(concept.importance) > len(importance):
                importance = concept.importance

            merged[key] = Concept(
                term=existing.term,
                definition=definition,
                context=existing.context,
                importance=importance,
                examples=deduplicate(existing.examples + list(concept.examples)),
                related_terms=deduplicate(existing.related_terms + list(concept.related_terms)),
            )

    return list(merged.values())[:MAX_CONCEPTS]


def combine_study_guides(results: list[ChunkedNoteResult]) -> StudyGuide:
    """Flatten each study-guide list across chunks and deduplicate it."""
    guides = [r.study_guide for r in results]

    def _merge(attr: str, limit: int) -> list[str]:
        return deduplicate(item for guide in guides for item in getattr(guide, attr))[:limit]

    return StudyGuide(
        review_questions=_merge("review_questions", MAX_REVIEW_QUESTIONS),
        practice_exercises=_merge("practice_exercises", MAX_PRACTICE_EXERCISES),
        memory_aids=_merge("memory_aids", MAX_MEMORY_AIDS),
        connections=_merge("connections", MAX_CONNECTIONS),
        advanced_topics=_merge("advanced_topics", MAX_ADVANCED_TOPICS),
    )


def combine_quizzes(results: list[ChunkedNoteResult]) -> Quiz:
    """Deduplicate questions by text, then balance easy/medium/hard."""
    unique: dict[str, QuizQuestion] = {}
    for result in results:
        for question in result.quiz.questions:
            unique.setdefault(question.question.lower().strip(), question)

    pool = list(unique.values())
    selected: list[QuizQuestion] = []
    for difficulty, quota in QUIZ_QUOTAS:
        selected.extend([q for q in pool if q.difficulty == difficulty][:quota])

    return Quiz(questions=selected[:MAX_QUIZ_QUESTIONS])


def determine_difficulty(results: list[ChunkedNoteResult]) -> Difficulty:
    """Classify content density from average concepts and sections per chunk."""
    avg_concepts = sum(len(r.concepts) for r in results) / len(results)
    avg_sections = sum(len(r.sections) for r in results) / len(results)

    if avg_concepts > 8 or avg_sections > 6:
        return Difficulty.ADVANCED
    if avg_concepts > 5 or avg_sections > 4:
        return Difficulty.INTERMEDIATE
    return Difficulty.BEGINNER


def estimate_study_time(transcript_length: int) -> str:
    """Render a study-time range: two minutes per 1000 characters, at least 15."""
    minutes = max(15, (transcript_length // 1000) * 2)

    if minutes < 60:
        return f"{minutes}-{minutes + 15} minutes"

    hours = minutes // 60
    # TODO: render the remaining minutes (minutes % 60) once clients accept "1h 30m" ranges
    return f"{hours}-{hours + 1} hours"


def combine_prerequisites(results: list[ChunkedNoteResult]) -> list[str]:
    # Chunk results carry no prerequisite data
    return []


def combine_next_steps(results: list[ChunkedNoteResult]) -> list[str]:
    return list(DEFAULT_NEXT_STEPS)
