"""Turns uploaded files into chunked Document records."""

import logging
from typing import Awaitable, Callable, Iterable, Optional

from contextpack.chunkers import SentenceChunker
from contextpack.errors import ContextPackError, ExtractionError
from contextpack.extractors import get_extractor
from contextpack.models import BatchReport, Document, FileMetadata, FileOutcome, UploadedFile
from contextpack.protocols import ChunkingStrategy, TextExtractor
from contextpack.utils.text import normalize_whitespace

logger = logging.getLogger(__name__)

DocumentCallback = Callable[[Document], Awaitable[Optional[Document]]]
ProgressCallback = Callable[[int, int], None]


class DocumentIngestor:
    """Extract, clean and chunk uploaded files.

    The returned documents are not persisted; pass ``on_document`` to
    ``ingest_batch`` (usually ``repository.add``) to store them as they
    are produced.
    """

    def __init__(
        self,
        chunker: Optional[ChunkingStrategy] = None,
        extractor: Optional[TextExtractor] = None,
    ):
        """Initialize the ingestor.

        Args:
            chunker: Chunking strategy. Defaults to SentenceChunker().
            extractor: Force one extractor for every file. By default the
                extractor is looked up per file from its name and type.
        """
        self.chunker = chunker or SentenceChunker()
        self.extractor = extractor

    def _extractor_for(self, meta: FileMetadata) -> TextExtractor:
        if self.extractor is not None:
            return self.extractor
        extractor = get_extractor(meta.file_name, meta.file_type)
        if extractor is None:
            raise ExtractionError(
                f"Unsupported file type for {meta.file_name!r}: {meta.file_type or 'unknown'}"
            )
        return extractor

    async def ingest(self, data: bytes, meta: FileMetadata) -> Document:
        """Process one uploaded file into a Document.

        Args:
            data: Raw file bytes
            meta: Name, size and MIME type of the upload

        Returns:
            The unpersisted Document

        Raises:
            ExtractionError: if no text could be extracted
        """
        extractor = self._extractor_for(meta)
        extracted = await extractor.extract(data)

        text = normalize_whitespace(extracted.text)
        chunks = self.chunker.chunk(text)
        if not text or not chunks:
            raise ExtractionError(f"No extractable text in {meta.file_name!r}")

        total_tokens = sum(chunk.tokens for chunk in chunks)
        logger.debug(f"{meta.file_name}: {len(chunks)} chunks, {total_tokens} tokens")

        return Document(
            file_name=meta.file_name,
            file_size=meta.file_size,
            file_type=meta.file_type,
            num_pages=extracted.num_pages,
            text=text,
            chunks=tuple(chunks),
            total_tokens=total_tokens,
            metadata=dict(extracted.info),
            type=extractor.document_type,
        )

    async def ingest_batch(
        self,
        files: Iterable[UploadedFile],
        on_document: Optional[DocumentCallback] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> BatchReport:
        """Ingest files one after another, recording each outcome.

        A failing file is reported and skipped; it never stops the batch.

        Args:
            files: Uploaded files, processed in the given order
            on_document: Awaited with every successful document, e.g. to
                persist it. If it returns a Document, that one is reported.
            on_progress: Called with (done, total) after every file

        Returns:
            BatchReport with one outcome per file, in input order
        """
        files = list(files)
        report = BatchReport()

        for position, upload in enumerate(files, 1):
            logger.info(f"Processing {position}/{len(files)}: {upload.file_name}")
            try:
                document = await self.ingest(upload.data, upload.meta)
                if on_document is not None:
                    document = await on_document(document) or document
            except ContextPackError as err:
                logger.warning(f"Failed to process {upload.file_name}: {err}")
                report.add(FileOutcome(file_name=upload.file_name, error=str(err)))
            else:
                report.add(FileOutcome(file_name=upload.file_name, document=document))

            if on_progress is not None:
                on_progress(position, len(files))

        logger.info(
            f"Processed {report.success_count} of {len(files)} files"
            f" ({len(report.failed_files)} failed)"
        )
        return report
