"""Word-level statistics over the content buffer."""

from __future__ import annotations


def count_words(text: str) -> int:
    """Number of non-empty whitespace-delimited tokens in *text*."""
    return len(text.split())


def average_word_length(text: str) -> float:
    """Mean token length in characters, rounded to 2 decimals (0.0 for empty text)."""
    words = text.split()
    if not words:
        return 0.0
    return round(sum(len(w) for w in words) / len(words), 2)
