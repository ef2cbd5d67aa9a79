"""Data models for ContextPack."""

from contextpack.models.cache import CacheEntry
from contextpack.models.document import (
    Chunk,
    ChunkedText,
    Document,
    DocumentContent,
    DocumentSummary,
    ExtractedText,
    FileMetadata,
    FullText,
    UploadedFile,
)
from contextpack.models.report import BatchReport, FileOutcome

__all__ = [
    "BatchReport",
    "CacheEntry",
    "Chunk",
    "ChunkedText",
    "Document",
    "DocumentContent",
    "DocumentSummary",
    "ExtractedText",
    "FileMetadata",
    "FileOutcome",
    "FullText",
    "UploadedFile",
]
