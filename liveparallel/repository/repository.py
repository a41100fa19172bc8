"""Scenario repository: the core's only route to the document store."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterator
from datetime import datetime, timedelta, timezone
from typing import Any

import attrs
from cattrs.errors import BaseValidationError

from ..errors import Forbidden, NotFound, PersistenceFailed, Unauthenticated
from ..models.patch import ScenarioPatch
from ..models.scenario import Scenario, ScenarioFields
from ..models.status import ScenarioStatus
from ..store.base import Document, DocumentStore, StoreError
from .codec import decode_scenario, encode_scenario, to_utc

logger = logging.getLogger(__name__)

# Fields that never change after creation, so updates do not rewrite them.
_IMMUTABLE_FIELDS = frozenset({"ownerId", "createdAt"})


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@contextlib.contextmanager
def _store_errors(action: str, scenario_id: str | None = None) -> Iterator[None]:
    try:
        yield
    except StoreError as e:
        logger.error(f"Error {action}: {e}")
        raise PersistenceFailed(f"Error {action}: {e}", scenario_id) from e


class ScenarioRepository:
    """Reads and writes scenarios in a document store.

    Enforces ownership before every mutation and normalizes timestamps. It does not
    enforce the status state machine; that is the lifecycle controller's job.
    Store failures are raised as PersistenceFailed.
    """

    def __init__(
        self,
        store: DocumentStore,
        collection: str = "scenarios",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the repository.

        Args:
            store: Document store holding the scenarios
            collection: Name of the collection scenarios are kept in
            clock: Source of the current time for created_at / updated_at
        """
        self.store = store
        self.collection = collection
        self._clock = clock

    def _now(self) -> datetime:
        return to_utc(self._clock())

    def _decode(self, document: Document) -> Scenario:
        data: dict[str, Any] = dict(document.data)
        for key in ("createdAt", "updatedAt"):
            if not data.get(key):
                logger.warning(f"Scenario {document.id} has no {key}; using the current time")
                data[key] = self._now().isoformat()
        try:
            return decode_scenario(document.id, data)
        except (BaseValidationError, ValueError, KeyError, TypeError) as e:
            raise PersistenceFailed(f"Stored scenario {document.id} is malformed: {e}", document.id) from e

    async def create(self, owner_id: str | None, fields: ScenarioFields) -> Scenario:
        """Create a pending scenario owned by owner_id."""
        if not owner_id:
            raise Unauthenticated()
        now = self._now()
        draft = Scenario(
            id="",
            owner_id=owner_id,
            title=fields.title,
            description=fields.description,
            choice=fields.choice,
            context=fields.context,
            status=ScenarioStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        with _store_errors("creating scenario"):
            scenario_id = await self.store.create(self.collection, encode_scenario(draft))
        logger.info(f"Created scenario {scenario_id} for user {owner_id}")
        return attrs.evolve(draft, id=scenario_id)

    async def get(self, scenario_id: str) -> Scenario:
        with _store_errors("getting scenario", scenario_id):
            document = await self.store.get(self.collection, scenario_id)
        if document is None:
            raise NotFound(scenario_id)
        return self._decode(document)

    async def list_by_owner(self, owner_id: str) -> tuple[Scenario, ...]:
        """All scenarios owned by owner_id, newest first."""
        with _store_errors("listing scenarios"):
            documents = await self.store.query(self.collection, "ownerId", owner_id, order_by="createdAt")
        scenarios = [self._decode(document) for document in documents]
        scenarios.sort(key=lambda scenario: scenario.created_at, reverse=True)
        return tuple(scenarios)

    async def _get_owned(self, scenario_id: str, acting_owner_id: str) -> Scenario:
        scenario = await self.get(scenario_id)
        if scenario.owner_id != acting_owner_id:
            raise Forbidden(scenario_id, acting_owner_id)
        return scenario

    async def update(self, scenario_id: str, acting_owner_id: str, patch: ScenarioPatch) -> Scenario:
        """Apply a patch and return the updated scenario.

        updated_at always moves forward, even if the clock has not advanced since the
        previous write.
        """
        current = await self._get_owned(scenario_id, acting_owner_id)
        updated_at = self._now()
        if updated_at <= current.updated_at:
            updated_at = current.updated_at + timedelta(microseconds=1)
        updated = patch.apply(current, updated_at)

        # Write only the fields the patch changed
        before = encode_scenario(current)
        changes = {
            key: value
            for key, value in encode_scenario(updated).items()
            if key not in _IMMUTABLE_FIELDS and (key == "updatedAt" or before.get(key) != value)
        }
        with _store_errors("updating scenario", scenario_id):
            found = await self.store.update(self.collection, scenario_id, changes)
        if not found:
            # Deleted between the read and the write
            raise NotFound(scenario_id)
        logger.debug(f"Updated scenario {scenario_id}")
        return updated

    async def delete(self, scenario_id: str, acting_owner_id: str) -> None:
        await self._get_owned(scenario_id, acting_owner_id)
        with _store_errors("deleting scenario", scenario_id):
            found = await self.store.delete(self.collection, scenario_id)
        if not found:
            raise NotFound(scenario_id)
        logger.info(f"Deleted scenario {scenario_id}")
