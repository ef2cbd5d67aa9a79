"""Document ingestion: extraction, cleanup and chunking."""

from contextpack.ingestion.ingestor import DocumentIngestor

__all__ = ["DocumentIngestor"]
