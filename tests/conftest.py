import asyncio

import pytest

from contextpack.errors import ExtractionError, RepositoryError
from contextpack.models import Chunk, Document, ExtractedText


class FakeClock:
    """Manually advanced time source for cache tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRepository:
    """In-memory DocumentRepository that counts reads."""

    def __init__(self, documents=(), delay: float = 0.0, error: Exception | None = None):
        self.documents = list(documents)
        self.delay = delay
        self.error = error
        self.add_error: Exception | None = None
        self.calls = 0
        self._next_id = 1

    async def get_all(self):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.documents)

    async def add(self, doc):
        if self.add_error is not None:
            raise self.add_error
        stored = doc.with_id(self._next_id, "2026-01-01T00:00:00+00:00")
        self._next_id += 1
        self.documents.append(stored)
        return stored

    async def delete(self, doc_id):
        self.documents = [d for d in self.documents if d.id != doc_id]


class FakeExtractor:
    """Treats the bytes as UTF-8 text; bytes starting with b"corrupt" fail."""

    document_type = "pdf"

    def __init__(self, num_pages: int = 3):
        self.num_pages = num_pages
        self.seen: list[bytes] = []

    def can_handle(self, file_name, file_type=""):
        return True

    async def extract(self, data):
        self.seen.append(data)
        if data.startswith(b"corrupt"):
            raise ExtractionError("Failed to parse PDF: bad xref table")
        return ExtractedText(text=data.decode("utf-8"), num_pages=self.num_pages, info={"Title": "T"})


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repository():
    return FakeRepository()


@pytest.fixture
def extractor():
    return FakeExtractor()


@pytest.fixture
def make_document():
    """Factory for Document records."""

    def _make(file_name="doc.pdf", text="Some text.", **kwargs):
        kwargs.setdefault("file_size", len(text))
        kwargs.setdefault("file_type", "application/pdf")
        kwargs.setdefault("type", "pdf")
        return Document(file_name=file_name, text=text, **kwargs)

    return _make


@pytest.fixture
def make_chunked_document():
    """Factory for Documents that carry only chunks."""

    def _make(file_name="chunked.pdf", texts=("First part.", "Second part."), **kwargs):
        chunks = tuple(
            Chunk(index=i, text=t, tokens=len(t) // 4 + 1, sentences=1)
            for i, t in enumerate(texts)
        )
        kwargs.setdefault("file_size", sum(len(t) for t in texts))
        kwargs.setdefault("file_type", "application/pdf")
        return Document(file_name=file_name, text="", chunks=chunks, **kwargs)

    return _make


@pytest.fixture
def repository_error():
    return RepositoryError("database is locked")
