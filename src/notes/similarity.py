"""Near-duplicate detection for note text lists."""

from __future__ import annotations

from collections.abc import Iterable

SIMILARITY_THRESHOLD = 0.8

# Sentence punctuation only; symbols such as "+" and "#" carry meaning ("C++", "C#")
_EDGE_PUNCTUATION = ".,;:!?\"'()[]"


def normalize_text(text: str) -> str:
    """Lowercase, collapse whitespace and drop sentence punctuation at word edges."""
    words = (word.strip(_EDGE_PUNCTUATION) for word in text.lower().split())
    return " ".join(word for word in words if word)


def jaccard_similarity(a: str, b: str) -> float:
    """Word-set Jaccard similarity of two whitespace-tokenised strings."""
    words_a = set(a.split())
    words_b = set(b.split())
    union = words_a | words_b
    if not union:
        return 1.0
    return len(words_a & words_b) / len(union)


def deduplicate(items: Iterable[str], threshold: float = SIMILARITY_THRESHOLD) -> list[str]:
    """Drop exact and near-duplicate strings, keeping the first occurrence.

    Two items are duplicates when their normalised forms are equal or their
    word-set Jaccard similarity exceeds *threshold*.  The original (not
    normalised) text of kept items is returned in input order.
    """
    kept: list[str] = []
    seen: list[str] = []
    seen_exact: set[str] = set()

    for item in items:
        normalized = normalize_text(item)
        if normalized in seen_exact:
            continue
        if any(jaccard_similarity(normalized, prior) > threshold for prior in seen):
            continue
        seen_exact.add(normalized)
        seen.append(normalized)
        kept.append(item)

    return kept
