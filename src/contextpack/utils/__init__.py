"""Utility functions for ContextPack."""

from contextpack.utils.sentences import count_sentences, split_sentences
from contextpack.utils.text import normalize_whitespace
from contextpack.utils.tokens import estimate_tokens

__all__ = [
    "count_sentences",
    "estimate_tokens",
    "normalize_whitespace",
    "split_sentences",
]
