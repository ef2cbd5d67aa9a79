"""Sentence segmentation.

A punctuation heuristic, not a linguistic sentence boundary detector:
abbreviations and decimals ("Dr.", "3.5") split where a reader would not.
"""

import re
from typing import Optional

# A run of non-terminators closed by one or more of . ! ?, or trailing text
# with no terminator at all.
_SENTENCE_RE = re.compile(r"[^.!?]*[.!?]+|[^.!?]+$")
_TERMINATOR_RE = re.compile(r"[.!?]+")


def split_sentences(text: Optional[str]) -> list[str]:
    """Split text into trimmed, non-empty sentences.

    The terminating punctuation stays with its sentence. Text without any
    terminator comes back as a single segment.
    """
    if not text:
        return []

    segments = _SENTENCE_RE.findall(text) or [text]
    return [s.strip() for s in segments if s.strip()]


def count_sentences(text: str) -> int:
    """Count the non-blank segments between runs of terminators."""
    return sum(1 for part in _TERMINATOR_RE.split(text) if part.strip())
