import pytest

from contextpack.cache import DocumentCache
from contextpack.config import Config
from contextpack.ingestion import DocumentIngestor
from contextpack.models import FileMetadata, UploadedFile
from contextpack.service import ContextService


@pytest.fixture
def service(repository, extractor, clock):
    return ContextService(
        repository,
        cache=DocumentCache(repository, clock=clock),
        ingestor=DocumentIngestor(extractor=extractor),
    )


@pytest.mark.asyncio
async def test_ingest_document_does_not_persist(service, repository):
    doc = await service.ingest_document(b"Standalone text.", FileMetadata("one.pdf", 16))

    assert doc.text == "Standalone text."
    assert repository.documents == []


@pytest.mark.asyncio
async def test_batch_upload_persists_and_refreshes_cache(service, repository):
    assert await service.get_documents() == ()
    assert not await service.has_documents()

    report = await service.ingest_batch(
        [
            UploadedFile("good.pdf", b"Good content."),
            UploadedFile("corrupt.pdf", b"corrupt"),
            UploadedFile("good2.pdf", b"More content."),
        ]
    )

    assert report.success_count == 2
    assert [f["name"] for f in report.failed_files] == ["corrupt.pdf"]
    assert [d.file_name for d in await service.get_documents()] == ["good.pdf", "good2.pdf"]
    assert await service.has_documents()
    assert repository.calls == 2


@pytest.mark.asyncio
async def test_failed_batch_keeps_cache(service, repository):
    await service.get_documents()
    await service.ingest_batch([UploadedFile("corrupt.pdf", b"corrupt")])
    await service.get_documents()

    assert repository.calls == 1


@pytest.mark.asyncio
async def test_build_context_from_store(service):
    await service.ingest_batch([UploadedFile("notes.pdf", b"Remember the milk.")])

    context = await service.build_context()

    assert context.startswith("<documents>\n")
    assert 'name="notes.pdf" type="pdf" pages="3"' in context
    assert "Remember the milk." in context


@pytest.mark.asyncio
async def test_build_context_with_explicit_documents(service, repository, make_document):
    context = await service.build_context(
        [make_document("given.pdf", text="w" * 4000)],
        max_total_tokens=100,
        max_tokens_per_doc=50,
    )

    assert 'name="given.pdf"' in context
    assert "w" * 200 + "\n\n... [truncated]" in context
    assert repository.calls == 0


@pytest.mark.asyncio
async def test_build_context_without_documents(service):
    assert await service.build_context() == ""


@pytest.mark.asyncio
async def test_summary(service):
    await service.ingest_batch(
        [UploadedFile("a.pdf", b"Alpha text."), UploadedFile("b.pdf", b"Beta text.")]
    )

    summary = await service.get_summary()

    assert summary.count == 2
    assert summary.total_pages == 6
    assert summary.types == ["pdf"]
    assert summary.file_names == ["a.pdf", "b.pdf"]
    assert summary.total_tokens == 3 + 3


@pytest.mark.asyncio
async def test_delete_invalidates_cache(service):
    report = await service.ingest_batch([UploadedFile("a.pdf", b"Alpha text.")])
    assert len(await service.get_documents()) == 1

    await service.delete_document(report.documents[0].id)

    assert await service.get_documents() == ()


@pytest.mark.asyncio
async def test_invalidate_cache(service, repository):
    await service.get_documents()
    service.invalidate_cache()
    await service.get_documents()

    assert repository.calls == 2


@pytest.mark.asyncio
async def test_end_to_end_with_sqlite(tmp_path):
    config = Config(db_path=str(tmp_path / "docs.db"), min_chunk_tokens=5, max_chunk_tokens=10)
    service = ContextService.from_config(config)

    report = await service.ingest_batch(
        [
            UploadedFile("notes.txt", b"First note here.  Second note here.", "text/plain"),
            UploadedFile("photo.png", b"\x89PNG\r\n", "image/png"),
        ]
    )

    assert report.success_count == 1
    assert report.failed_files[0]["name"] == "photo.png"

    docs = await service.get_documents()
    assert docs[0].id == 1
    assert docs[0].type == "text"
    assert [c.text for c in docs[0].chunks] == ["First note here. Second note here."]

    context = await service.build_context()
    assert "First note here. Second note here." in context
    assert 'type="text" pages="N/A"' in context


@pytest.mark.asyncio
async def test_corrupt_store_degrades_to_no_context(tmp_path):
    service = ContextService.from_config(Config(db_path=str(tmp_path / "docs.db")))
    await service.ingest_batch([UploadedFile("notes.txt", b"Some notes.", "text/plain")])
    with service.repository.connection() as conn:
        conn.execute("UPDATE documents SET metadata = '{not json'")
    service.invalidate_cache()

    assert await service.build_context() == ""
    assert await service.has_documents() is False
    assert (await service.get_summary()).count == 0


@pytest.mark.asyncio
async def test_configured_budgets_apply_by_default(repository, make_document, clock):
    repository.documents = [make_document("long.pdf", text="word " * 400)]
    service = ContextService(
        repository,
        cache=DocumentCache(repository, clock=clock),
        max_total_tokens=50,
        max_tokens_per_doc=20,
    )

    context = await service.build_context()

    assert "... [truncated]" in context
    assert len(context) < 400
