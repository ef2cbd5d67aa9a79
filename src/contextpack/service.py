"""Entry point tying ingestion, storage, caching and context assembly together."""

import logging
from typing import Any, Iterable, Optional, Sequence

from contextpack.cache import DocumentCache
from contextpack.chunkers import SentenceChunker
from contextpack.config import Config
from contextpack.context import (
    DEFAULT_MAX_TOKENS_PER_DOC,
    DEFAULT_MAX_TOTAL_TOKENS,
    assemble_all,
)
from contextpack.ingestion import DocumentIngestor
from contextpack.models import BatchReport, Document, DocumentSummary, FileMetadata, UploadedFile
from contextpack.protocols import DocumentRepository
from contextpack.storage import DocumentStore

logger = logging.getLogger(__name__)


class ContextService:
    """Document context for AI requests.

    Design: 1 process = 1 service. Every caller shares the same cache, so
    there is a single writer for the cached snapshot.
    """

    def __init__(
        self,
        repository: DocumentRepository,
        cache: Optional[DocumentCache] = None,
        ingestor: Optional[DocumentIngestor] = None,
        max_total_tokens: int = DEFAULT_MAX_TOTAL_TOKENS,
        max_tokens_per_doc: int = DEFAULT_MAX_TOKENS_PER_DOC,
    ):
        self.repository = repository
        self.cache = cache or DocumentCache(repository)
        self.ingestor = ingestor or DocumentIngestor()
        self.max_total_tokens = max_total_tokens
        self.max_tokens_per_doc = max_tokens_per_doc

    @classmethod
    def from_config(cls, config: Config) -> "ContextService":
        """Build a service backed by the SQLite store named in ``config``."""
        store = DocumentStore(config.db_path)
        store.initialize()
        return cls(
            repository=store,
            cache=DocumentCache(
                store, ttl=config.cache_ttl, fetch_timeout=config.fetch_timeout
            ),
            ingestor=DocumentIngestor(
                chunker=SentenceChunker(config.min_chunk_tokens, config.max_chunk_tokens)
            ),
            max_total_tokens=config.max_total_tokens,
            max_tokens_per_doc=config.max_tokens_per_doc,
        )

    async def ingest_document(self, data: bytes, meta: FileMetadata) -> Document:
        """Process one file without persisting it.

        Raises:
            ExtractionError: if the file yields no text
        """
        return await self.ingestor.ingest(data, meta)

    async def ingest_batch(self, files: Iterable[UploadedFile], on_progress=None) -> BatchReport:
        """Process and persist files, continuing past individual failures."""
        report = await self.ingestor.ingest_batch(
            files, on_document=self.repository.add, on_progress=on_progress
        )
        if report.success_count:
            self.cache.invalidate()
        return report

    async def delete_document(self, doc_id: int) -> None:
        await self.repository.delete(doc_id)
        self.cache.invalidate()

    async def get_documents(self, force_refresh: bool = False) -> Sequence[Document]:
        return await self.cache.get_all(force_refresh=force_refresh)

    def invalidate_cache(self) -> None:
        self.cache.invalidate()

    async def build_context(
        self,
        documents: Optional[Iterable[Any]] = None,
        max_total_tokens: Optional[int] = None,
        max_tokens_per_doc: Optional[int] = None,
        force_refresh: bool = False,
    ) -> str:
        """Build the context string for an AI request.

        Args:
            documents: Documents to include. Defaults to every stored one.
            max_total_tokens: Overall ceiling (service default if None)
            max_tokens_per_doc: Per-document ceiling (service default if None)
            force_refresh: Bypass the cache when loading stored documents

        Returns:
            ``<documents>`` block, or "" when there is nothing to include
        """
        if documents is None:
            documents = await self.get_documents(force_refresh=force_refresh)

        return assemble_all(
            documents,
            max_total_tokens=self.max_total_tokens if max_total_tokens is None else max_total_tokens,
            max_tokens_per_doc=(
                self.max_tokens_per_doc if max_tokens_per_doc is None else max_tokens_per_doc
            ),
        )

    async def get_summary(self) -> DocumentSummary:
        """Metadata-only overview of the stored documents."""
        return DocumentSummary.from_documents(await self.get_documents())

    async def has_documents(self) -> bool:
        return len(await self.get_documents()) > 0
