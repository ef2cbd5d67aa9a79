"""Runtime configuration read from the environment (and a .env file)."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from contextpack.cache import DocumentCache
from contextpack.chunkers import SentenceChunker
from contextpack.context import DEFAULT_MAX_TOKENS_PER_DOC, DEFAULT_MAX_TOTAL_TOKENS


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


@dataclass(frozen=True)
class Config:
    """Settings for one ContextPack process."""

    db_path: str = "documents.db"
    cache_ttl: float = DocumentCache.DEFAULT_TTL
    fetch_timeout: float = DocumentCache.DEFAULT_FETCH_TIMEOUT
    min_chunk_tokens: int = SentenceChunker.MIN_TOKENS
    max_chunk_tokens: int = SentenceChunker.MAX_TOKENS
    max_total_tokens: int = DEFAULT_MAX_TOTAL_TOKENS
    max_tokens_per_doc: int = DEFAULT_MAX_TOKENS_PER_DOC

    @classmethod
    def from_env(cls) -> "Config":
        """Build a Config from CONTEXTPACK_* variables.

        Values in a .env file in the working directory are loaded first;
        variables already set in the environment take precedence.
        """
        load_dotenv()
        return cls(
            db_path=os.getenv("CONTEXTPACK_DB_PATH") or cls.db_path,
            cache_ttl=_env_float("CONTEXTPACK_CACHE_TTL", cls.cache_ttl),
            fetch_timeout=_env_float("CONTEXTPACK_FETCH_TIMEOUT", cls.fetch_timeout),
            min_chunk_tokens=_env_int("CONTEXTPACK_MIN_CHUNK_TOKENS", cls.min_chunk_tokens),
            max_chunk_tokens=_env_int("CONTEXTPACK_MAX_CHUNK_TOKENS", cls.max_chunk_tokens),
            max_total_tokens=_env_int("CONTEXTPACK_MAX_TOTAL_TOKENS", cls.max_total_tokens),
            max_tokens_per_doc=_env_int(
                "CONTEXTPACK_MAX_TOKENS_PER_DOC", cls.max_tokens_per_doc
            ),
        )
