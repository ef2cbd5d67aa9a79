"""Extractor for PDF files, backed by pypdf."""

import asyncio
import io
import logging
from pathlib import Path
from typing import Any, Optional

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from contextpack.errors import ExtractionError
from contextpack.models import ExtractedText

logger = logging.getLogger(__name__)


class PdfExtractor:
    """Extractor for PDF documents.

    Parsing is CPU-bound and runs in a worker thread so the event loop
    stays responsive during large uploads.
    """

    document_type = "pdf"
    MIME_TYPE = "application/pdf"

    def can_handle(self, file_name: str, file_type: str = "") -> bool:
        """Check the MIME type, falling back to the extension."""
        if file_type:
            return file_type == self.MIME_TYPE
        return Path(file_name).suffix.lower() == ".pdf"

    async def extract(self, data: bytes) -> ExtractedText:
        return await asyncio.to_thread(self._extract, data)

    def _extract(self, data: bytes) -> ExtractedText:
        if not data:
            raise ExtractionError("Failed to parse PDF: file is empty")

        try:
            reader = PdfReader(io.BytesIO(data))
            pages = [page.extract_text() or "" for page in reader.pages]
            info = self._info_dict(reader.metadata)
            xmp = self._xmp_dict(reader)
        except (PyPdfError, ValueError, KeyError, TypeError, OSError) as err:
            logger.error(f"Error parsing PDF: {err}")
            raise ExtractionError(f"Failed to parse PDF: {err}") from err

        return ExtractedText(
            text="\n\n".join(pages),
            num_pages=len(pages),
            info=info,
            metadata=xmp,
        )

    @staticmethod
    def _info_dict(info: Optional[Any]) -> dict[str, str]:
        """Flatten the document information dictionary to plain strings."""
        if not info:
            return {}
        return {str(key).lstrip("/"): str(value) for key, value in info.items()}

    @staticmethod
    def _xmp_dict(reader: PdfReader) -> Optional[dict[str, str]]:
        xmp = reader.xmp_metadata
        if xmp is None:
            return None

        fields = {
            "producer": xmp.pdf_producer,
            "creator_tool": xmp.xmp_creator_tool,
        }
        return {key: str(value) for key, value in fields.items() if value}
