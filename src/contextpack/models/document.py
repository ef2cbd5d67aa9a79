"""Core data models for documents and chunks."""

from dataclasses import dataclass, field, replace
from typing import Any, Optional, Union


@dataclass(frozen=True)
class FileMetadata:
    """Metadata describing one uploaded file."""

    file_name: str
    file_size: int
    file_type: str = ""


@dataclass(frozen=True)
class UploadedFile:
    """Raw bytes of one file in a batch upload."""

    file_name: str
    data: bytes
    file_type: str = ""

    @property
    def meta(self) -> FileMetadata:
        return FileMetadata(
            file_name=self.file_name,
            file_size=len(self.data),
            file_type=self.file_type,
        )


@dataclass(frozen=True)
class ExtractedText:
    """Text pulled out of a source file by an extractor."""

    text: str
    num_pages: Optional[int] = None
    info: dict[str, Any] = field(default_factory=dict)
    metadata: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class Chunk:
    """A token-bounded run of whole sentences."""

    index: int
    text: str
    tokens: int
    sentences: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "text": self.text,
            "tokens": self.tokens,
            "sentences": self.sentences,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Chunk":
        text = data["text"]
        if not isinstance(text, str):
            raise TypeError(f"chunk text must be str, not {type(text).__name__}")
        return cls(
            index=int(data["index"]),
            text=text,
            tokens=int(data["tokens"]),
            sentences=int(data.get("sentences", 0)),
        )


@dataclass(frozen=True)
class FullText:
    """Document content held as one string."""

    text: str

    def as_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class ChunkedText:
    """Document content held only as chunks."""

    chunks: tuple[Chunk, ...]

    def as_text(self) -> str:
        return "\n\n".join(chunk.text for chunk in self.chunks)


DocumentContent = Union[FullText, ChunkedText]


@dataclass(frozen=True)
class Document:
    """A processed document, ready to be persisted and formatted.

    ``text`` and ``chunks`` are two views of the same content. Either may be
    empty, but not both.
    """

    file_name: str
    file_size: int
    file_type: str
    text: str = ""
    chunks: tuple[Chunk, ...] = ()
    num_pages: Optional[int] = None
    total_tokens: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)
    type: str = "document"
    id: Optional[int] = None
    upload_date: Optional[str] = None

    def __post_init__(self) -> None:
        # Accept any sequence of chunks but store an immutable tuple
        if not isinstance(self.chunks, tuple):
            object.__setattr__(self, "chunks", tuple(self.chunks))
        if not self.text and not self.chunks:
            raise ValueError(f"Document {self.file_name!r} has neither text nor chunks")

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)

    @property
    def content(self) -> DocumentContent:
        """Return the preferred representation of the content.

        Full text wins when present; otherwise the chunks stand in for it.
        """
        if self.text:
            return FullText(self.text)
        return ChunkedText(self.chunks)

    def with_id(self, doc_id: int, upload_date: Optional[str] = None) -> "Document":
        """Return a copy carrying the identity assigned by a repository."""
        return replace(self, id=doc_id, upload_date=upload_date or self.upload_date)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "file_name": self.file_name,
            "file_size": self.file_size,
            "file_type": self.file_type,
            "num_pages": self.num_pages,
            "text": self.text,
            "chunks": [chunk.to_dict() for chunk in self.chunks],
            "chunk_count": self.chunk_count,
            "total_tokens": self.total_tokens,
            "metadata": dict(self.metadata),
            "type": self.type,
            "upload_date": self.upload_date,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Document":
        """Build a Document from a serialized record.

        Raises:
            KeyError, TypeError, ValueError: if the record is malformed
        """
        text = data.get("text") or ""
        if not isinstance(text, str):
            raise TypeError(f"text must be str, not {type(text).__name__}")
        num_pages = data.get("num_pages")
        if num_pages is not None and (isinstance(num_pages, bool) or not isinstance(num_pages, int)):
            raise TypeError(f"num_pages must be int, not {type(num_pages).__name__}")

        return cls(
            id=data.get("id"),
            file_name=str(data["file_name"]),
            file_size=int(data.get("file_size") or 0),
            file_type=str(data.get("file_type") or ""),
            num_pages=num_pages,
            text=text,
            chunks=tuple(Chunk.from_dict(c) for c in data.get("chunks") or ()),
            total_tokens=int(data.get("total_tokens") or 0),
            metadata=dict(data.get("metadata") or {}),
            type=data.get("type") or "document",
            upload_date=data.get("upload_date"),
        )


@dataclass(frozen=True)
class DocumentSummary:
    """Metadata-only overview of the stored documents."""

    count: int = 0
    total_pages: int = 0
    total_tokens: int = 0
    types: list[str] = field(default_factory=list)
    file_names: list[str] = field(default_factory=list)

    @classmethod
    def from_documents(cls, documents) -> "DocumentSummary":
        types: list[str] = []
        for doc in documents:
            if doc.type not in types:
                types.append(doc.type)
        return cls(
            count=len(documents),
            total_pages=sum(doc.num_pages or 0 for doc in documents),
            total_tokens=sum(doc.total_tokens or 0 for doc in documents),
            types=types,
            file_names=[doc.file_name for doc in documents],
        )
