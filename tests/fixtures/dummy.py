"""Test doubles for the scenario core.

Controllable clocks, generation engines and stores used across the test suite.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import override

from attrs import define, field

from liveparallel.generation.base import GenerationEngine
from liveparallel.generation.dummy import DummyGenerationEngine
from liveparallel.lifecycle.callbacks import LifecycleCallback
from liveparallel.models.scenario import AlternativePath, PathEvent, Scenario
from liveparallel.store.base import Document, DocumentData, StoreError
from liveparallel.store.memory import InMemoryDocumentStore

BASE_TIME = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


@define
class StepClock:
    """A clock that moves forward by `step` every time it is read."""

    start: datetime = BASE_TIME
    step: timedelta = timedelta(seconds=1)
    reads: int = field(init=False, default=0)

    def __call__(self) -> datetime:
        now = self.start + self.step * self.reads
        self.reads += 1
        return now


def instant_engine() -> DummyGenerationEngine:
    """The dummy engine without its simulated latency."""
    return DummyGenerationEngine(delay=timedelta(0))


@define
class GatedGenerationEngine(GenerationEngine):
    """Blocks every generation until `release()` is called.

    `started` is set once a generation is waiting at the gate.
    """

    inner: GenerationEngine = field(factory=instant_engine)
    started: asyncio.Event = field(init=False, factory=asyncio.Event)
    gate: asyncio.Event = field(init=False, factory=asyncio.Event)
    calls: int = field(init=False, default=0)

    def release(self) -> None:
        self.gate.set()

    @override
    async def generate(self, scenario: Scenario) -> AlternativePath:
        self.calls += 1
        self.started.set()
        await self.gate.wait()
        return await self.inner.generate(scenario)


@define
class FailingGenerationEngine(GenerationEngine):
    """Raises on the first `failures` calls, then delegates to `inner`."""

    failures: int = 1
    inner: GenerationEngine = field(factory=instant_engine)
    calls: int = field(init=False, default=0)

    @override
    async def generate(self, scenario: Scenario) -> AlternativePath:
        self.calls += 1
        if self.calls <= self.failures:
            raise RuntimeError("model backend unavailable")
        return await self.inner.generate(scenario)


@define
class StaticGenerationEngine(GenerationEngine):
    """Returns a fixed path, well formed or not."""

    path: AlternativePath

    @override
    async def generate(self, scenario: Scenario) -> AlternativePath:
        return self.path


def make_path(event_count: int = 3, timestamp: datetime = BASE_TIME) -> AlternativePath:
    return AlternativePath(
        summary="A different life.",
        events=tuple(
            PathEvent(
                title=f"Event {i}",
                description=f"Something happened, number {i}.",
                outcome=f"It turned out fine {i}.",
                timestamp=timestamp,
            )
            for i in range(event_count)
        ),
    )


class FlakyDocumentStore(InMemoryDocumentStore):
    """An in-memory store whose updates fail when `fail_update` says so.

    Every update attempt is recorded in `update_attempts`, failed or not.
    """

    def __init__(self, fail_update: Callable[[DocumentData], bool] = lambda data: False) -> None:
        super().__init__()
        self.fail_update = fail_update
        self.update_attempts: list[dict] = []

    @override
    async def update(self, collection: str, document_id: str, data: DocumentData) -> bool:
        self.update_attempts.append(dict(data))
        if self.fail_update(data):
            raise StoreError(f"write rejected for {document_id}")
        return await super().update(collection, document_id, data)


def sets_status(*statuses: str) -> Callable[[DocumentData], bool]:
    """Predicate matching updates that set the status to one of `statuses`."""
    return lambda data: data.get("status") in statuses


class PausingDocumentStore(InMemoryDocumentStore):
    """An in-memory store that holds selected calls open until `resume()` is called.

    `paused` is set once a call is being held. A held update is applied before the
    hold when `commit_first` is set, otherwise after it, so cancelling the awaiting
    task during the hold models a write that did or did not reach the backend.
    """

    def __init__(
        self,
        pause_update: Callable[[DocumentData], bool] = lambda data: False,
        commit_first: bool = False,
        pause_create: bool = False,
        pause_get: bool = False,
        pause_query: bool = False,
    ) -> None:
        super().__init__()
        self.pause_update = pause_update
        self.commit_first = commit_first
        self.pause_create = pause_create
        self.pause_get = pause_get
        self.pause_query = pause_query
        self.paused = asyncio.Event()
        self._resumed = asyncio.Event()

    def resume(self) -> None:
        self._resumed.set()

    async def _hold(self) -> None:
        self.paused.set()
        await self._resumed.wait()

    @override
    async def create(self, collection: str, data: DocumentData) -> str:
        if self.pause_create:
            await self._hold()
        return await super().create(collection, data)

    @override
    async def get(self, collection: str, document_id: str) -> Document | None:
        if self.pause_get:
            await self._hold()
        return await super().get(collection, document_id)

    @override
    async def update(self, collection: str, document_id: str, data: DocumentData) -> bool:
        if not self.pause_update(data):
            return await super().update(collection, document_id, data)
        if self.commit_first:
            found = await super().update(collection, document_id, data)
            await self._hold()
            return found
        await self._hold()
        return await super().update(collection, document_id, data)

    @override
    async def query(self, collection: str, field: str, equals: str,
                    order_by: str, descending: bool = True) -> tuple[Document, ...]:
        if self.pause_query:
            await self._hold()
        return await super().query(collection, field, equals, order_by, descending)


@define
class RecordingLifecycleCallback(LifecycleCallback):
    """Records every lifecycle callback as (event, scenario id)."""

    events: list[tuple[str, str]] = field(factory=list)

    @override
    def on_generation_started(self, scenario: Scenario) -> None:
        self.events.append(("started", scenario.id))

    @override
    def on_generation_completed(self, scenario: Scenario) -> None:
        self.events.append(("completed", scenario.id))

    @override
    def on_generation_failed(self, scenario_id: str, exception: Exception) -> None:
        self.events.append(("failed", scenario_id))


class ExplodingLifecycleCallback(LifecycleCallback):
    """Raises from every callback."""

    @override
    def on_generation_started(self, scenario: Scenario) -> None:
        raise RuntimeError("callback bug")

    @override
    def on_generation_completed(self, scenario: Scenario) -> None:
        raise RuntimeError("callback bug")
