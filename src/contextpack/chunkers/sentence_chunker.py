"""Sentence-packing chunking strategy."""

from contextpack.models import Chunk
from contextpack.utils.sentences import count_sentences, split_sentences
from contextpack.utils.tokens import estimate_tokens


class SentenceChunker:
    """Default chunking: pack whole sentences into 200-400 token chunks.

    Greedy bin-packing with one sentence of lookahead:
    - Never splits inside a sentence
    - Closes a chunk early once it is in range and the next sentence
      would push it past the maximum
    - Lets a chunk run over the maximum rather than close it below the
      minimum, except when the incoming sentence is oversized on its own
    - Emits the tail as-is, even when it is under the minimum
    """

    MIN_TOKENS = 200
    MAX_TOKENS = 400

    def __init__(self, min_tokens: int = MIN_TOKENS, max_tokens: int = MAX_TOKENS):
        if min_tokens < 1:
            raise ValueError(f"min_tokens must be at least 1, got {min_tokens}")
        if max_tokens < min_tokens:
            raise ValueError(
                f"max_tokens ({max_tokens}) must not be below min_tokens ({min_tokens})"
            )
        self.min_tokens = min_tokens
        self.max_tokens = max_tokens

    def chunk(self, text: str) -> list[Chunk]:
        """Split text into token-bounded chunks of whole sentences.

        Args:
            text: Whitespace-normalized document text

        Returns:
            Chunks in source order, indexed from 0
        """
        sentences = split_sentences(text)
        tokens_per_sentence = [estimate_tokens(s) for s in sentences]

        chunks: list[Chunk] = []
        buffer: list[str] = []
        buffer_tokens = 0

        for i, sentence in enumerate(sentences):
            tokens = tokens_per_sentence[i]

            # Adding this sentence would overflow the current chunk
            if buffer and buffer_tokens + tokens > self.max_tokens:
                # Below the minimum we keep merging, unless the sentence is
                # oversized by itself: it always gets a chunk of its own.
                if buffer_tokens >= self.min_tokens or tokens > self.max_tokens:
                    chunks.append(self._make_chunk(len(chunks), buffer, buffer_tokens))
                    buffer, buffer_tokens = [], 0

            buffer.append(sentence)
            buffer_tokens += tokens

            # In range: close now if the next sentence would not fit
            if self.min_tokens <= buffer_tokens <= self.max_tokens and i + 1 < len(sentences):
                if buffer_tokens + tokens_per_sentence[i + 1] > self.max_tokens:
                    chunks.append(self._make_chunk(len(chunks), buffer, buffer_tokens))
                    buffer, buffer_tokens = [], 0

        # Trailing remainder, whatever its size
        if buffer:
            chunks.append(self._make_chunk(len(chunks), buffer, buffer_tokens))

        return chunks

    @staticmethod
    def _make_chunk(index: int, sentences: list[str], tokens: int) -> Chunk:
        text = " ".join(sentences).strip()
        return Chunk(
            index=index,
            text=text,
            tokens=tokens,
            sentences=count_sentences(text),
        )


def chunk_text(
    text: str,
    min_tokens: int = SentenceChunker.MIN_TOKENS,
    max_tokens: int = SentenceChunker.MAX_TOKENS,
) -> list[Chunk]:
    """Chunk text with a one-off SentenceChunker."""
    return SentenceChunker(min_tokens, max_tokens).chunk(text)
