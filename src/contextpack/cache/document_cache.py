"""TTL cache in front of the document repository."""

import asyncio
import logging
import time
from typing import Callable, Optional, Sequence

from contextpack.errors import FetchTimeoutError, RepositoryError
from contextpack.models import CacheEntry, Document
from contextpack.protocols import DocumentRepository

logger = logging.getLogger(__name__)


class DocumentCache:
    """Process-wide snapshot of the repository with a time-to-live.

    Construct one per process and share it. The only writer is the
    fetch-and-replace step in ``get_all``: a new CacheEntry is built in full
    and then assigned in one statement, so readers see either the old
    snapshot or the new one.
    """

    DEFAULT_TTL = 5 * 60.0
    DEFAULT_FETCH_TIMEOUT = 10.0

    def __init__(
        self,
        repository: DocumentRepository,
        ttl: float = DEFAULT_TTL,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the cache.

        Args:
            repository: Backing document store
            ttl: Seconds a snapshot stays fresh
            fetch_timeout: Seconds to wait for the repository before giving up
            clock: Monotonic time source in seconds
        """
        self.repository = repository
        self.ttl = ttl
        self.fetch_timeout = fetch_timeout
        self.clock = clock
        self._entry: Optional[CacheEntry] = None

    @property
    def entry(self) -> Optional[CacheEntry]:
        """The current snapshot, or None before the first successful fetch."""
        return self._entry

    def is_fresh(self) -> bool:
        entry = self._entry
        return entry is not None and entry.age(self.clock()) < self.ttl

    async def get_all(self, force_refresh: bool = False) -> Sequence[Document]:
        """Return all documents, from the snapshot while it is fresh.

        On a timeout or any repository failure an empty sequence is returned
        and the existing snapshot is left untouched.

        Args:
            force_refresh: Skip the snapshot and go to the repository
        """
        if not force_refresh and self._entry is not None and self.is_fresh():
            logger.debug("Using cached documents")
            return self._entry.documents

        logger.info("Fetching documents from repository...")
        try:
            documents = await self._fetch()
        except FetchTimeoutError as err:
            logger.warning(f"{err}; continuing without documents")
            return ()
        except RepositoryError as err:
            logger.error(f"Error retrieving documents: {err}")
            return ()
        except Exception as err:
            # Repositories outside this package may raise anything
            logger.exception(f"Unexpected error retrieving documents: {err}")
            return ()

        self._entry = CacheEntry(documents=documents, fetched_at=self.clock())
        return documents

    async def _fetch(self) -> tuple[Document, ...]:
        """Fetch from the repository, abandoning the call after the deadline."""
        try:
            documents = await asyncio.wait_for(
                self.repository.get_all(), timeout=self.fetch_timeout
            )
        except asyncio.TimeoutError as err:
            raise FetchTimeoutError(
                f"Document retrieval timed out after {self.fetch_timeout:g}s"
            ) from err
        return tuple(documents)

    def invalidate(self) -> None:
        """Drop the snapshot so the next read goes to the repository."""
        self._entry = None
        logger.info("Document cache cleared")
