"""Caching of repository reads."""

from contextpack.cache.document_cache import DocumentCache

__all__ = ["DocumentCache"]
