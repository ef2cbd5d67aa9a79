"""Protocol for text chunking strategies."""

from typing import Protocol, runtime_checkable

from contextpack.models import Chunk


@runtime_checkable
class ChunkingStrategy(Protocol):
    """Protocol for text chunking strategies.

    Chunks are returned in order with indexes counting up from 0.
    """

    def chunk(self, text: str) -> list[Chunk]:
        """Split text into token-bounded chunks."""
        ...
