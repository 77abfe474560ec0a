"""Pipeline enums: processing stages, difficulty tiers and highlight actions."""

from __future__ import annotations

from enum import StrEnum


class ProcessingStage(StrEnum):
    """Stages of the chunked note-generation pipeline, in execution order."""

    CHUNKING = "chunking"
    PROCESSING = "processing"
    COMBINING = "combining"


class Difficulty(StrEnum):
    """Overall difficulty tier of a combined note document."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class QuizDifficulty(StrEnum):
    """Difficulty tier of a single quiz question."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class HighlightAction(StrEnum):
    """Ways to explain a highlighted passage of a note."""

    SIMPLIFY = "simplify"
    EXAMPLE = "example"
    ANALOGY = "analogy"
    PRACTICE_QUESTION = "practice-question"
