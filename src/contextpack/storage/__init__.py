"""Persistent storage for processed documents."""

from contextpack.storage.store import DocumentStore

__all__ = ["DocumentStore"]
