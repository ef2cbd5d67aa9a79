"""Protocol for the persistent document store."""

from typing import Protocol, Sequence, runtime_checkable

from contextpack.models import Document


@runtime_checkable
class DocumentRepository(Protocol):
    """Protocol for the backing store of processed documents.

    Reads go through DocumentCache; writes should be followed by a cache
    invalidation. Failures are reported as RepositoryError.
    """

    async def get_all(self) -> Sequence[Document]:
        """Return every stored document."""
        ...

    async def add(self, doc: Document) -> Document:
        """Persist a document and return it with its assigned id."""
        ...

    async def delete(self, doc_id: int) -> None:
        """Remove a document and its chunks."""
        ...
