"""Dict-backed document store for development and tests."""

from __future__ import annotations

import copy
import logging
import uuid
from collections import defaultdict
from typing import Any, override

from .base import Document, DocumentData, DocumentStore

logger = logging.getLogger(__name__)


class InMemoryDocumentStore(DocumentStore):
    """Keeps documents in process memory.

    Stored data is deep-copied on the way in and out, so callers cannot mutate
    what the store holds.
    """

    def __init__(self) -> None:
        self._collections: defaultdict[str, dict[str, dict[str, Any]]] = defaultdict(dict)

    @override
    async def create(self, collection: str, data: DocumentData) -> str:
        document_id = uuid.uuid4().hex
        self._collections[collection][document_id] = copy.deepcopy(dict(data))
        logger.debug(f"Created document {collection}/{document_id}")
        return document_id

    @override
    async def get(self, collection: str, document_id: str) -> Document | None:
        data = self._collections[collection].get(document_id)
        if data is None:
            return None
        return Document(id=document_id, data=copy.deepcopy(data))

    @override
    async def update(self, collection: str, document_id: str, data: DocumentData) -> bool:
        stored = self._collections[collection].get(document_id)
        if stored is None:
            return False
        stored.update(copy.deepcopy(dict(data)))
        return True

    @override
    async def delete(self, collection: str, document_id: str) -> bool:
        return self._collections[collection].pop(document_id, None) is not None

    @override
    async def query(self, collection: str, field: str, equals: str,
                    order_by: str, descending: bool = True) -> tuple[Document, ...]:
        matches = [
            Document(id=document_id, data=copy.deepcopy(data))
            for document_id, data in self._collections[collection].items()
            if data.get(field) == equals
        ]
        matches.sort(key=lambda document: document.data.get(order_by) or "", reverse=descending)
        return tuple(matches)

    def __len__(self) -> int:
        return sum(len(documents) for documents in self._collections.values())
