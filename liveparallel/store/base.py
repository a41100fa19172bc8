"""Abstract document store: the boundary to the remote backend."""

from __future__ import annotations

import abc
from collections.abc import Mapping
from typing import Any

import attrs

type DocumentData = Mapping[str, Any]


class StoreError(Exception):
    """Raised by a document store when a read or write cannot be completed."""


@attrs.frozen
class Document:
    """A stored document and the id the store assigned to it."""

    id: str
    data: DocumentData


class DocumentStore(abc.ABC):
    """A document database holding JSON-like records in named collections.

    Implementations assign ids on creation and raise StoreError on backend failures.
    Missing documents are reported by returning None (get) or False (update, delete),
    not by raising.
    """

    @abc.abstractmethod
    async def create(self, collection: str, data: DocumentData) -> str:
        """Store a new document and return its id."""
        ...

    @abc.abstractmethod
    async def get(self, collection: str, document_id: str) -> Document | None:
        """Return the document, or None if it does not exist."""
        ...

    @abc.abstractmethod
    async def update(self, collection: str, document_id: str, data: DocumentData) -> bool:
        """Merge the given top-level fields into the document.

        Returns:
            False if the document does not exist (nothing is written)
        """
        ...

    @abc.abstractmethod
    async def delete(self, collection: str, document_id: str) -> bool:
        """Delete the document. Returns False if it did not exist."""
        ...

    @abc.abstractmethod
    async def query(self, collection: str, field: str, equals: str,
                    order_by: str, descending: bool = True) -> tuple[Document, ...]:
        """Return the documents whose `field` equals `equals`, ordered by `order_by`.

        The order field holds ISO-8601 timestamps, which sort correctly as strings.
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the store."""
        pass
