"""Test helpers: a scripted text generator and chunk-result builders."""

from __future__ import annotations

from typing import Any

from src.notes.models import ChunkedNoteResult, Concept, Quiz, QuizQuestion, Section, StudyGuide


class FakeGenerator:
    """In-memory ``TextGenerator`` that returns canned JSON payloads in order.

    ``error`` is raised by ``generate_json``; ``text_error`` by ``generate_text``.
    """

    def __init__(
        self,
        payloads: list[Any] | None = None,
        error: Exception | None = None,
        text: str = "ok",
        text_error: Exception | None = None,
    ) -> None:
        self.payloads = list(payloads or [])
        self.error = error
        self.text = text
        self.text_error = text_error
        self.prompts: list[str] = []
        self.max_tokens: list[int | None] = []

    def generate_text(
        self,
        prompt: str,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        self.prompts.append(prompt)
        self.max_tokens.append(max_tokens)
        if self.text_error is not None:
            raise self.text_error
        return self.text

    def generate_json(
        self,
        prompt: str,
        schema: str,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> Any:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        index = len(self.prompts) - 1
        if index < len(self.payloads):
            return self.payloads[index]
        return self.payloads[-1] if self.payloads else {}


def make_result(
    title: str = "Neural Networks",
    summary: str = "",
    key_points: list[str] | None = None,
    sections: list[Section] | None = None,
    concepts: list[Concept] | None = None,
    study_guide: StudyGuide | None = None,
    questions: list[QuizQuestion] | None = None,
    chunk_id: str = "chunk-0",
) -> ChunkedNoteResult:
    return ChunkedNoteResult(
        chunk_id=chunk_id,
        title=title,
        summary=summary,
        key_points=key_points or [],
        sections=sections or [],
        concepts=concepts or [],
        study_guide=study_guide or StudyGuide(),
        quiz=Quiz(questions=questions or []),
    )


def make_questions(difficulty: str, count: int, prefix: str = "") -> list[QuizQuestion]:
    return [
        QuizQuestion(
            question=f"{prefix}{difficulty} question number {i}?",
            options=["A", "B", "C", "D"],
            correct_answer=i % 4,
            explanation=f"Because {i}.",
            difficulty=difficulty,
        )
        for i in range(count)
    ]


def sentence_transcript(count: int) -> str:
    """A transcript of *count* short, distinct sentences."""
    return "".join(f"Sentence number {i} explains one idea. " for i in range(count))


GRADIENT_PAYLOADS: list[dict[str, Any]] = [
    {
        "title": "Intro to Gradient Descent",
        "summary": "This video introduces gradient descent and why it converges.",
        "keyPoints": ["Gradient descent minimises a loss function."],
        "sections": [
            {"title": "Intro", "content": ["Loss functions measure error."]},
        ],
        "concepts": [{"term": "Learning rate", "definition": "Step size."}],
        "quiz": {
            "questions": [
                {
                    "question": "What does the learning rate control?",
                    "options": ["Step size", "Batch size"],
                    "correctAnswer": 0,
                    "explanation": "It scales each update.",
                    "difficulty": "easy",
                }
            ]
        },
    },
    {
        "title": "Section 2",
        "summary": "This section covers momentum and adaptive optimisers in practice.",
        "keyPoints": ["Momentum smooths noisy gradients."],
        "sections": [
            {"title": " intro ", "content": ["Gradients point uphill."]},
            {"title": "Momentum", "content": ["Velocity accumulates."]},
        ],
        "concepts": [{"term": "learning rate", "definition": "The step size of each update."}],
    },
]
