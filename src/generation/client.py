"""Claude-backed text generation capability injected into the notes pipeline."""

from __future__ import annotations

import json
import math
import re
from typing import Any, Protocol

from anthropic import Anthropic
from anthropic.types import TextBlock

from src.config import settings
from src.errors import NoteGenerationError

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")

JSON_INSTRUCTIONS = (
    "\n\nReturn ONLY valid JSON matching this schema:\n{schema}\n\n"
    "IMPORTANT: Return ONLY the JSON object, no markdown, no extra text."
)


class TextGenerator(Protocol):
    """Anything that can turn a prompt into text or parsed JSON."""

    def generate_text(
        self,
        prompt: str,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str: ...

    def generate_json(
        self,
        prompt: str,
        schema: str,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> Any: ...


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences the model sometimes wraps JSON in."""
    return _CODE_FENCE.sub("", text.strip()).strip()


def estimate_tokens(text: str) -> int:
    """Rough token estimate: one token per four characters of English text."""
    return math.ceil(len(text) / 4)


class AnthropicTextGenerator:
    """:class:`TextGenerator` backed by the Anthropic Messages API.

    The client is constructor-injected so tests can pass a mock; by default
    one is built from ``settings.anthropic_api_key``.
    """

    def __init__(
        self,
        client: Anthropic | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> None:
        self.client = client or Anthropic(api_key=settings.anthropic_api_key)
        self.model = model or settings.llm_model
        self.max_tokens = max_tokens or settings.llm_max_tokens
        self.temperature = settings.llm_temperature if temperature is None else temperature

    def generate_text(
        self,
        prompt: str,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens or self.max_tokens,
            temperature=self.temperature if temperature is None else temperature,
            messages=[{"role": "user", "content": prompt}],
        )

        for block in response.content:
            if isinstance(block, TextBlock):
                return block.text
        raise NoteGenerationError("No text content in model response")

    def generate_json(
        self,
        prompt: str,
        schema: str,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> Any:
        """Ask for JSON matching *schema* and parse the reply.

        Raises:
            NoteGenerationError: If the reply is not valid JSON.
        """
        text = self.generate_text(
            prompt + JSON_INSTRUCTIONS.format(schema=schema),
            max_tokens=max_tokens,
            temperature=temperature,
        )
        try:
            return json.loads(strip_code_fences(text))
        except json.JSONDecodeError as exc:
            raise NoteGenerationError(f"Failed to generate valid JSON: {exc}") from exc
