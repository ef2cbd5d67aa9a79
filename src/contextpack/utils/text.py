"""Whitespace cleanup for extracted text."""

import re

_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_HORIZONTAL_SPACE_RE = re.compile(r"[ \t]+")


def normalize_whitespace(text: str) -> str:
    """Normalize line endings and collapse runs of blank space.

    CRLF becomes LF, three or more newlines become a paragraph break, and
    runs of spaces and tabs become one space. The result is trimmed.
    """
    text = text.replace("\r\n", "\n")
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    text = _HORIZONTAL_SPACE_RE.sub(" ", text)
    return text.strip()
