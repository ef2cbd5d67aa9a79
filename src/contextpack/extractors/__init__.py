"""Text extractors for uploaded files."""

from typing import Optional

from contextpack.extractors.pdf_extractor import PdfExtractor
from contextpack.extractors.text_extractor import PlainTextExtractor
from contextpack.protocols import TextExtractor

# Registry of available extractors, checked in order
_EXTRACTORS: list[TextExtractor] = [
    PdfExtractor(),
    PlainTextExtractor(),
]


def get_extractor(file_name: str, file_type: str = "") -> Optional[TextExtractor]:
    """Find an extractor that can handle the given file.

    Args:
        file_name: Name of the uploaded file (used for its extension)
        file_type: MIME type reported by the uploader, if any

    Returns:
        A TextExtractor instance that can handle the file, or None
    """
    for extractor in _EXTRACTORS:
        if extractor.can_handle(file_name, file_type):
            return extractor
    return None


def register_extractor(extractor: TextExtractor) -> None:
    """Register a custom extractor; it is consulted before the built-ins.

    Args:
        extractor: An object implementing the TextExtractor protocol
    """
    _EXTRACTORS.insert(0, extractor)


def unregister_extractor(extractor: TextExtractor) -> None:
    """Remove a previously registered extractor."""
    _EXTRACTORS.remove(extractor)


__all__ = [
    "PdfExtractor",
    "PlainTextExtractor",
    "get_extractor",
    "register_extractor",
    "unregister_extractor",
]
