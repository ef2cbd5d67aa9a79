"""Protocol for source file text extractors."""

from typing import Protocol, runtime_checkable

from contextpack.models import ExtractedText


@runtime_checkable
class TextExtractor(Protocol):
    """Protocol for turning uploaded bytes into text.

    Implementations handle different formats (PDF, plain text).
    Uses structural subtyping - no inheritance required.
    """

    @property
    def document_type(self) -> str:
        """Return the document type recorded on ingested documents (e.g. 'pdf')."""
        ...

    def can_handle(self, file_name: str, file_type: str = "") -> bool:
        """Check if this extractor understands the given file."""
        ...

    async def extract(self, data: bytes) -> ExtractedText:
        """Extract text, page count and metadata from raw bytes.

        Raises:
            ExtractionError: if the bytes are malformed or unsupported
        """
        ...
