"""Prompt text for study-note generation and highlight explanations."""

from __future__ import annotations

NOTE_SCHEMA = """{
  "title": "string",
  "summary": "string (2-4 sentences)",
  "keyPoints": ["string"],
  "sections": [
    {
      "title": "string",
      "content": ["string"],
      "learningObjectives": ["string"],
      "keyInsights": ["string"]
    }
  ],
  "concepts": [
    {
      "term": "string",
      "definition": "string",
      "context": "string",
      "importance": "string",
      "examples": ["string"],
      "relatedTerms": ["string"]
    }
  ],
  "studyGuide": {
    "reviewQuestions": ["string"],
    "practiceExercises": ["string"],
    "memoryAids": ["string"],
    "connections": ["string"],
    "advancedTopics": ["string"]
  },
  "quiz": {
    "questions": [
      {
        "question": "string",
        "options": ["string", "string", "string", "string"],
        "correctAnswer": 0,
        "explanation": "string",
        "difficulty": "easy | medium | hard"
      }
    ]
  }
}"""

SYSTEM_GUIDELINES = (
    "You are an expert educational content analyst. Turn the transcript "
    "excerpt below into well-structured study notes.\n\n"
    "Guidelines:\n"
    "1. Organise the material into clearly titled sections.\n"
    "2. Highlight key concepts with precise definitions and examples.\n"
    "3. Write review questions and practice exercises that test understanding.\n"
    "4. Write quiz questions with four options and mix easy, medium and hard.\n"
    "5. Only use information supported by the excerpt."
)


def build_chunk_prompt(
    chunk_text: str,
    title: str = "",
    chunk_number: int = 1,
    total_chunks: int = 1,
) -> str:
    """Build the note-generation prompt for one prepared chunk.

    Multi-chunk runs tell the model which part it is looking at so it does
    not write an introduction or conclusion for a fragment.
    """
    parts = [SYSTEM_GUIDELINES, ""]
    if title:
        parts.append(f"Video title: {title}")
    if total_chunks > 1:
        parts.append(
            f"This is part {chunk_number} of {total_chunks} of a longer transcript. "
            "Focus on the material in this part only."
        )
    parts.append(f"\nTRANSCRIPT:\n{chunk_text}")
    return "\n".join(parts)


# Study helpers on top of generated notes
SUMMARY_PROMPT = (
    "Summarize the following content in {max_length} characters or less. "
    "Be concise and capture key points only.\n\nContent:\n{content}\n\nSummary:"
)

CONCEPTS_SCHEMA = '[{"term": "string", "definition": "string"}]'

CONCEPTS_PROMPT = (
    "Extract 5-10 key concepts from this content. For each concept, provide "
    "a clear definition.\n\nContent:\n{content}"
)

SIMPLIFY_PROMPT = (
    "Simplify this concept into a very short, easy-to-understand explanation "
    "for beginners:\n\nText: {text}\n\nSimplified explanation:"
)

EXAMPLE_PROMPT = 'Provide a simple, relevant example of "{text}" in the context of: {context}\n\nExample:'

ANALOGY_PROMPT = (
    'Create a simple analogy to explain "{text}" using everyday objects or '
    "situations.\n\nAnalogy:"
)

PRACTICE_QUESTION_PROMPT = "Create a practice question to test understanding of: {text}\n\nQuestion:"
