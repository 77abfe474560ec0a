"""Exceptions raised by the note-generation pipeline."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when a caller passes input the pipeline cannot work with.

    Examples: an empty list of chunk results to combine, or chunking
    options that violate ``0 <= overlap_size < max_chunk_size``.
    """


class NoteGenerationError(RuntimeError):
    """Raised when the language model returns output that cannot be parsed."""
