"""Extractor for plain text files."""

from pathlib import Path

from contextpack.errors import ExtractionError
from contextpack.models import ExtractedText
from contextpack.utils.binary import is_binary_content, is_binary_extension


class PlainTextExtractor:
    """Extractor for UTF-8 text and markdown files."""

    document_type = "text"
    TEXT_EXTENSIONS = {".txt", ".text", ".md", ".markdown", ".rst"}

    def can_handle(self, file_name: str, file_type: str = "") -> bool:
        """Check for a text/* MIME type or a known text extension."""
        if is_binary_extension(file_name):
            return False
        if file_type:
            return file_type.startswith("text/")
        return Path(file_name).suffix.lower() in self.TEXT_EXTENSIONS

    async def extract(self, data: bytes) -> ExtractedText:
        if is_binary_content(data):
            raise ExtractionError("File does not contain readable text")

        text = data.decode("utf-8-sig", errors="replace")
        return ExtractedText(text=text)
