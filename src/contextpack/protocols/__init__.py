"""Protocol definitions for pluggable collaborators."""

from contextpack.protocols.chunker import ChunkingStrategy
from contextpack.protocols.extractor import TextExtractor
from contextpack.protocols.repository import DocumentRepository

__all__ = ["ChunkingStrategy", "DocumentRepository", "TextExtractor"]
