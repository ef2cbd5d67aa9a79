"""Text chunking strategies."""

from contextpack.chunkers.sentence_chunker import SentenceChunker, chunk_text

__all__ = ["SentenceChunker", "chunk_text"]
