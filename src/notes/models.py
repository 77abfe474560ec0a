"""Data models for per-chunk note results and the combined note document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Section:
    """A titled section of study notes."""

    title: str
    content: list[str] = field(default_factory=list)
    learning_objectives: list[str] = field(default_factory=list)
    key_insights: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "content": list(self.content),
            "learningObjectives": list(self.learning_objectives),
            "keyInsights": list(self.key_insights),
        }


@dataclass(frozen=True)
class Concept:
    """A key term with its definition and supporting material."""

    term: str
    definition: str = ""
    context: str = ""
    importance: str = ""
    examples: list[str] = field(default_factory=list)
    related_terms: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "term": self.term,
            "definition": self.definition,
            "context": self.context,
            "importance": self.importance,
            "examples": list(self.examples),
            "relatedTerms": list(self.related_terms),
        }


@dataclass(frozen=True)
class StudyGuide:
    review_questions: list[str] = field(default_factory=list)
    practice_exercises: list[str] = field(default_factory=list)
    memory_aids: list[str] = field(default_factory=list)
    connections: list[str] = field(default_factory=list)
    advanced_topics: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "reviewQuestions": list(self.review_questions),
            "practiceExercises": list(self.practice_exercises),
            "memoryAids": list(self.memory_aids),
            "connections": list(self.connections),
            "advancedTopics": list(self.advanced_topics),
        }


@dataclass(frozen=True)
class QuizQuestion:
    """A multiple-choice question; ``correct_answer`` indexes ``options``."""

    question: str
    options: list[str] = field(default_factory=list)
    correct_answer: int = 0
    explanation: str = ""
    difficulty: str = "medium"  # "easy", "medium", "hard"

    def to_dict(self) -> dict[str, Any]:
        return {
            "question": self.question,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
            "explanation": self.explanation,
            "difficulty": self.difficulty,
        }


@dataclass(frozen=True)
class Quiz:
    questions: list[QuizQuestion] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"questions": [q.to_dict() for q in self.questions]}


@dataclass(frozen=True)
class ChunkedNoteResult:
    """Structured notes generated from exactly one transcript chunk."""

    chunk_id: str = ""
    title: str = ""
    summary: str = ""
    key_points: list[str] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)
    concepts: list[Concept] = field(default_factory=list)
    study_guide: StudyGuide = field(default_factory=StudyGuide)
    quiz: Quiz = field(default_factory=Quiz)


@dataclass(frozen=True)
class CombinedNotes:
    """The final note document assembled from one or more chunk results."""

    title: str
    transcript: str
    sections: list[Section]
    summary: str
    key_points: list[str]
    duration: str
    content_type: str
    difficulty: str
    estimated_study_time: str
    prerequisites: list[str]
    next_steps: list[str]
    study_guide: StudyGuide
    concepts: list[Concept]
    quiz: Quiz

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the camelCase JSON shape stored and served to clients."""
        return {
            "title": self.title,
            "transcript": self.transcript,
            "sections": [s.to_dict() for s in self.sections],
            "summary": self.summary,
            "keyPoints": list(self.key_points),
            "duration": self.duration,
            "contentType": self.content_type,
            "difficulty": self.difficulty,
            "estimatedStudyTime": self.estimated_study_time,
            "prerequisites": list(self.prerequisites),
            "nextSteps": list(self.next_steps),
            "studyGuide": self.study_guide.to_dict(),
            "concepts": [c.to_dict() for c in self.concepts],
            "quiz": self.quiz.to_dict(),
        }
