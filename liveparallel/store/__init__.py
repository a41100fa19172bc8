"""Document store backends."""

from .base import Document, DocumentData, DocumentStore, StoreError
from .memory import InMemoryDocumentStore
from .duckdb_store import DuckdbDocumentStore

__all__ = [
    "Document",
    "DocumentData",
    "DocumentStore",
    "StoreError",
    "InMemoryDocumentStore",
    "DuckdbDocumentStore",
]
