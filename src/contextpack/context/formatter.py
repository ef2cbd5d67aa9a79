"""Render a single document as a delimited context block."""

from collections.abc import Mapping
from html import escape
from typing import Any, Optional, Union

from contextpack.errors import FormattingError
from contextpack.models import Document
from contextpack.utils.tokens import chars_for_tokens, estimate_tokens

TRUNCATION_MARKER = "\n\n... [truncated]"
MISSING = "N/A"


def _as_document(record: Union[Document, Mapping[str, Any]]) -> Document:
    if isinstance(record, Document):
        return record
    if isinstance(record, Mapping):
        try:
            return Document.from_dict(dict(record))
        except (KeyError, TypeError, ValueError) as err:
            raise FormattingError(f"Malformed document record: {err!r}") from err
    raise FormattingError(f"Cannot format object of type {type(record).__name__}")


def _attr(value: Any) -> str:
    return escape(str(value), quote=True)


def format_document(
    doc: Union[Document, Mapping[str, Any], None],
    max_tokens: Optional[int] = None,
) -> str:
    """Format one document for AI context.

    Args:
        doc: A Document, or a mapping shaped like ``Document.to_dict()``
        max_tokens: Truncate the body when its estimate exceeds this

    Returns:
        ``<document ...>`` block, or "" for None

    Raises:
        FormattingError: if the record cannot be read as a Document
    """
    if doc is None:
        return ""

    document = _as_document(doc)
    text = document.content.as_text()

    if max_tokens and text and estimate_tokens(text) > max_tokens:
        text = text[: chars_for_tokens(max_tokens)] + TRUNCATION_MARKER

    name = _attr(document.file_name or "Unknown")
    doc_type = _attr(document.type or "document")
    pages = _attr(document.num_pages or MISSING)
    tokens = _attr(document.total_tokens or MISSING)

    return (
        f'<document name="{name}" type="{doc_type}" pages="{pages}" tokens="{tokens}">\n'
        f"{text}\n"
        f"</document>"
    )
