"""Snapshot of the repository held by the document cache."""

from dataclasses import dataclass

from contextpack.models.document import Document


@dataclass(frozen=True)
class CacheEntry:
    """Documents fetched from the repository and when they were fetched.

    ``fetched_at`` is in seconds of the cache's clock.
    """

    documents: tuple[Document, ...]
    fetched_at: float

    def age(self, now: float) -> float:
        return now - self.fetched_at
