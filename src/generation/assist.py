"""Short study helpers on top of a TextGenerator: summaries, concepts, explanations."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from src.errors import InvalidInputError, NoteGenerationError
from src.generation.client import TextGenerator
from src.generation.prompts import (
    ANALOGY_PROMPT,
    CONCEPTS_PROMPT,
    CONCEPTS_SCHEMA,
    EXAMPLE_PROMPT,
    PRACTICE_QUESTION_PROMPT,
    SIMPLIFY_PROMPT,
    SUMMARY_PROMPT,
)
from src.notes.models import Concept
from src.pipeline_config import HighlightAction

logger = logging.getLogger(__name__)

ASSIST_TEMPERATURE = 0.7
DEFAULT_SUMMARY_LENGTH = 300
DEFAULT_EXAMPLE_CONTEXT = "general knowledge"

_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")

# (prompt template, max_tokens) per highlight action
_HIGHLIGHT_PROMPTS: dict[HighlightAction, tuple[str, int]] = {
    HighlightAction.SIMPLIFY: (SIMPLIFY_PROMPT, 150),
    HighlightAction.EXAMPLE: (EXAMPLE_PROMPT, 200),
    HighlightAction.ANALOGY: (ANALOGY_PROMPT, 150),
    HighlightAction.PRACTICE_QUESTION: (PRACTICE_QUESTION_PROMPT, 150),
}

HIGHLIGHT_ACTIONS: list[dict[str, str]] = [
    {
        "type": HighlightAction.SIMPLIFY.value,
        "label": "Simplify",
        "description": "Explain in simple, easy-to-understand terms",
    },
    {
        "type": HighlightAction.EXAMPLE.value,
        "label": "Example",
        "description": "Provide a real-world example",
    },
    {
        "type": HighlightAction.ANALOGY.value,
        "label": "Analogy",
        "description": "Explain using a comparison to something familiar",
    },
    {
        "type": HighlightAction.PRACTICE_QUESTION.value,
        "label": "Practice Question",
        "description": "Generate a question to test understanding",
    },
]


def summarize(generator: TextGenerator, content: str, max_length: int = DEFAULT_SUMMARY_LENGTH) -> str:
    """Summarise *content* in roughly *max_length* characters."""
    prompt = SUMMARY_PROMPT.format(max_length=max_length, content=content)
    return generator.generate_text(prompt, max_tokens=256, temperature=ASSIST_TEMPERATURE).strip()


def _parse_concepts(data: Any) -> list[Concept]:
    if not isinstance(data, list):
        return []
    return [
        Concept(term=str(item.get("term", "")), definition=str(item.get("definition", "")))
        for item in data
        if isinstance(item, dict) and item.get("term")
    ]


def extract_concepts(generator: TextGenerator, content: str) -> list[Concept]:
    """Extract key terms with definitions from *content*.

    Falls back to a plain-text request and pulls the first JSON array out of
    the reply when the model does not return clean JSON.

    Raises:
        NoteGenerationError: If neither reply contains a parseable array.
    """
    prompt = CONCEPTS_PROMPT.format(content=content)
    try:
        data = generator.generate_json(
            prompt, CONCEPTS_SCHEMA, max_tokens=512, temperature=ASSIST_TEMPERATURE
        )
        return _parse_concepts(data)
    except NoteGenerationError:
        logger.warning("Concept extraction returned invalid JSON, retrying as text")

    text = generator.generate_text(
        f"{prompt}\n\nReturn as JSON array with structure: {CONCEPTS_SCHEMA}",
        max_tokens=512,
        temperature=ASSIST_TEMPERATURE,
    )
    match = _JSON_ARRAY.search(text)
    if match is None:
        return []
    try:
        return _parse_concepts(json.loads(match.group(0)))
    except json.JSONDecodeError as exc:
        raise NoteGenerationError(f"Failed to parse concepts: {exc}") from exc


def explain_highlight(
    generator: TextGenerator,
    text: str,
    action: HighlightAction | str,
    context: str = "",
) -> str:
    """Explain a highlighted passage: simplify it, give an example or analogy,
    or write a practice question about it.

    Raises:
        InvalidInputError: If *text* is empty or *action* is unknown.
    """
    if not text.strip():
        raise InvalidInputError("Missing text to explain")
    try:
        action = HighlightAction(action)
    except ValueError as exc:
        raise InvalidInputError(f"Invalid action: {action}") from exc

    template, max_tokens = _HIGHLIGHT_PROMPTS[action]
    prompt = template.format(text=text, context=context or DEFAULT_EXAMPLE_CONTEXT)
    return generator.generate_text(prompt, max_tokens=max_tokens, temperature=ASSIST_TEMPERATURE).strip()
