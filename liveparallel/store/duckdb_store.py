"""Document store persisted in a DuckDB database."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import re
import uuid
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, override

import duckdb
from duckdb import DuckDBPyConnection

from .base import Document, DocumentData, DocumentStore, StoreError

logger = logging.getLogger(__name__)

_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@contextlib.contextmanager
def transaction_scope(cursor: DuckDBPyConnection) -> Iterator[DuckDBPyConnection]:
    """Run the enclosed statements in one transaction, rolling back on error."""
    cursor.begin()
    try:
        yield cursor
    except BaseException:
        cursor.rollback()
        raise
    else:
        cursor.commit()


def _json_path(field: str) -> str:
    if not _FIELD_NAME.match(field):
        raise ValueError(f"Invalid document field name: {field!r}")
    return f"'$.{field}'"


class DuckdbDocumentStore(DocumentStore):
    """Stores each document as a JSON text column in a single DuckDB table.

    DuckDB calls block, so each one runs in a worker thread via asyncio.to_thread,
    on its own cursor of the shared connection. A cancelled call returns only after
    its statement has finished, so a write is never still landing once the caller
    has moved on.
    """

    TABLE = "documents"

    def __init__(self, database: str | Path = ":memory:") -> None:
        self.database = str(database)
        self._conn = duckdb.connect(self.database)
        self._conn.execute(
            f"CREATE TABLE IF NOT EXISTS {self.TABLE} ("
            "collection VARCHAR NOT NULL, "
            "id VARCHAR NOT NULL, "
            "data VARCHAR NOT NULL, "
            "PRIMARY KEY (collection, id))"
        )
        logger.info(f"Opened DuckDB document store at {self.database}")

    async def _run[T](self, func: Callable[[DuckDBPyConnection], T]) -> T:
        def in_thread() -> T:
            with self._conn.cursor() as cursor:
                return func(cursor)
        task = asyncio.ensure_future(asyncio.to_thread(in_thread))
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            # The statement keeps running in its thread; the caller must see its outcome in the store
            await asyncio.wait([task])
            if not task.cancelled() and task.exception() is not None:
                logger.warning(f"DuckDB statement failed after cancellation: {task.exception()}")
            raise
        except duckdb.Error as e:
            raise StoreError(f"DuckDB document store failure: {e}") from e

    @override
    async def create(self, collection: str, data: DocumentData) -> str:
        document_id = uuid.uuid4().hex
        encoded = json.dumps(dict(data))

        def insert(cursor: DuckDBPyConnection) -> None:
            cursor.execute(f"INSERT INTO {self.TABLE} VALUES (?, ?, ?)", [collection, document_id, encoded])

        await self._run(insert)
        return document_id

    @override
    async def get(self, collection: str, document_id: str) -> Document | None:
        def select(cursor: DuckDBPyConnection) -> Any:
            return cursor.execute(
                f"SELECT data FROM {self.TABLE} WHERE collection = ? AND id = ?", [collection, document_id]
            ).fetchone()

        row = await self._run(select)
        if row is None:
            return None
        return Document(id=document_id, data=json.loads(row[0]))

    @override
    async def update(self, collection: str, document_id: str, data: DocumentData) -> bool:
        changes = dict(data)

        def merge(cursor: DuckDBPyConnection) -> bool:
            with transaction_scope(cursor):
                row = cursor.execute(
                    f"SELECT data FROM {self.TABLE} WHERE collection = ? AND id = ?", [collection, document_id]
                ).fetchone()
                if row is None:
                    return False
                merged = json.loads(row[0]) | changes
                cursor.execute(
                    f"UPDATE {self.TABLE} SET data = ? WHERE collection = ? AND id = ?",
                    [json.dumps(merged), collection, document_id],
                )
                return True

        return await self._run(merge)

    @override
    async def delete(self, collection: str, document_id: str) -> bool:
        def remove(cursor: DuckDBPyConnection) -> bool:
            deleted = cursor.execute(
                f"DELETE FROM {self.TABLE} WHERE collection = ? AND id = ? RETURNING id", [collection, document_id]
            ).fetchall()
            return len(deleted) > 0

        return await self._run(remove)

    @override
    async def query(self, collection: str, field: str, equals: str,
                    order_by: str, descending: bool = True) -> tuple[Document, ...]:
        direction = "DESC" if descending else "ASC"
        sql = (
            f"SELECT id, data FROM {self.TABLE} "
            f"WHERE collection = ? AND json_extract_string(data, {_json_path(field)}) = ? "
            f"ORDER BY json_extract_string(data, {_json_path(order_by)}) {direction}"
        )

        def select(cursor: DuckDBPyConnection) -> list[Any]:
            return cursor.execute(sql, [collection, equals]).fetchall()

        rows = await self._run(select)
        return tuple(Document(id=row[0], data=json.loads(row[1])) for row in rows)

    @override
    async def close(self) -> None:
        self._conn.close()
