import io

import pytest
from pypdf import PdfWriter

from contextpack.errors import ExtractionError
from contextpack.extractors import (
    PdfExtractor,
    PlainTextExtractor,
    get_extractor,
    register_extractor,
    unregister_extractor,
)
from contextpack.protocols import TextExtractor


def blank_pdf(pages: int = 2, title: str = "Quarterly Report") -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    writer.add_metadata({"/Title": title})
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def test_extractors_satisfy_protocol():
    assert isinstance(PdfExtractor(), TextExtractor)
    assert isinstance(PlainTextExtractor(), TextExtractor)


@pytest.mark.asyncio
async def test_pdf_extractor_reads_pages_and_info():
    extracted = await PdfExtractor().extract(blank_pdf(pages=3))

    assert extracted.num_pages == 3
    assert extracted.text.strip() == ""
    assert extracted.info["Title"] == "Quarterly Report"


@pytest.mark.asyncio
async def test_pdf_extractor_wraps_parse_errors():
    with pytest.raises(ExtractionError, match="Failed to parse PDF"):
        await PdfExtractor().extract(b"this is definitely not a pdf")


@pytest.mark.asyncio
async def test_pdf_extractor_rejects_empty_file():
    with pytest.raises(ExtractionError, match="empty"):
        await PdfExtractor().extract(b"")


@pytest.mark.asyncio
async def test_plain_text_extractor_decodes_utf8():
    extracted = await PlainTextExtractor().extract("Ünïcode notes.\n".encode("utf-8"))

    assert extracted.text == "Ünïcode notes.\n"
    assert extracted.num_pages is None


@pytest.mark.asyncio
async def test_plain_text_extractor_rejects_binary():
    with pytest.raises(ExtractionError):
        await PlainTextExtractor().extract(b"\x00\x01\x02binary")


def test_pdf_can_handle():
    pdf = PdfExtractor()
    assert pdf.can_handle("report.PDF")
    assert pdf.can_handle("upload", "application/pdf")
    assert not pdf.can_handle("report.pdf", "text/plain")
    assert not pdf.can_handle("notes.txt")


def test_registry_lookup():
    assert isinstance(get_extractor("report.pdf"), PdfExtractor)
    assert isinstance(get_extractor("blob", "application/pdf"), PdfExtractor)
    assert isinstance(get_extractor("notes.md"), PlainTextExtractor)
    assert isinstance(get_extractor("data", "text/csv"), PlainTextExtractor)
    assert get_extractor("photo.png", "image/png") is None
    assert get_extractor("archive.zip") is None


def test_registered_extractor_takes_precedence(extractor):
    register_extractor(extractor)
    try:
        assert get_extractor("report.pdf") is extractor
    finally:
        unregister_extractor(extractor)
    assert isinstance(get_extractor("report.pdf"), PdfExtractor)
