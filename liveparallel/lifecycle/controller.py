"""Scenario lifecycle controller: the state machine in motion."""

from __future__ import annotations

import asyncio
import logging

from ..errors import (
    Forbidden,
    GenerationFailed,
    InvalidState,
    LiveParallelError,
    PersistenceFailed,
    RecoveryFailed,
    Unauthenticated,
)
from ..generation.base import GenerationEngine
from ..models.patch import FieldsPatch, StatusPatch
from ..models.scenario import Scenario, ScenarioFields, ScenarioSummary
from ..models.status import ScenarioStatus
from ..repository.repository import ScenarioRepository
from ..state.app_state import AppState
from ..state.cache import ScenarioCollectionCache
from .callbacks import LifecycleCallback
from .transitions import can_generate, ensure_transition, is_editable

logger = logging.getLogger(__name__)


class ScenarioLifecycleController:
    """Orchestrates every scenario operation the UI can request.

    The controller is the only component that changes a scenario's status. It runs
    generation through the status table in `transitions`, keeps the collection cache
    in step with each successful write, and classifies failures:

    - generation errors move the scenario to `error` and raise GenerationFailed
    - a failed write of a generated path moves it to `error` and raises PersistenceFailed
    - if the scenario cannot even be moved to `error`, RecoveryFailed is raised
    - a cancelled generation is moved to `error` unless its result was already stored

    Lifecycle operations on one scenario are serialized: a second generate request
    for a scenario that is already generating here is rejected with InvalidState.
    """

    def __init__(
        self,
        repository: ScenarioRepository,
        engine: GenerationEngine,
        state: AppState,
        callback: LifecycleCallback | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            repository: Repository holding the scenarios
            engine: Strategy producing alternative paths
            state: Application state supplying the signed-in user and the collection cache
            callback: Observer notified as generation starts, completes, or fails
        """
        self.repository = repository
        self.engine = engine
        self.state = state
        self.callback = callback or LifecycleCallback()
        self._in_flight: set[str] = set()

    @property
    def cache(self) -> ScenarioCollectionCache:
        return self.state.scenarios

    @property
    def in_flight(self) -> frozenset[str]:
        """Ids of scenarios with a generation running in this controller."""
        return frozenset(self._in_flight)

    def _require_user(self) -> str:
        user_id = self.state.user_id
        if not user_id:
            raise Unauthenticated()
        return user_id

    def _still_signed_in(self, user_id: str | None) -> bool:
        """Whether the user an operation started for is still the signed-in user."""
        if self.state.user_id == user_id:
            return True
        logger.info(f"Signed-in user changed from {user_id}; not updating the scenario collection")
        return False

    async def create_scenario(self, fields: ScenarioFields) -> Scenario:
        """Create a pending scenario for the signed-in user and put it at the top of the collection."""
        with self.cache.tracking():
            owner_id = self._require_user()
            scenario = await self.repository.create(owner_id, fields)
            if self._still_signed_in(owner_id):
                self.cache.insert(scenario)
            return scenario

    async def fetch_user_scenarios(self) -> tuple[ScenarioSummary, ...]:
        """Reload the collection from the store."""
        with self.cache.tracking():
            owner_id = self._require_user()
            scenarios = await self.repository.list_by_owner(owner_id)
            if not self._still_signed_in(owner_id):
                return tuple(scenario.summary for scenario in scenarios)
            self.cache.reset(scenarios)
            return self.cache.summaries

    async def fetch_scenario(self, scenario_id: str) -> Scenario:
        """Read one scenario and make it the current one."""
        with self.cache.tracking():
            user_id = self.state.user_id
            scenario = await self.repository.get(scenario_id)
            if self._still_signed_in(user_id):
                self.cache.set_current(scenario)
                self.cache.replace(scenario)
            return scenario

    async def update_scenario(self, scenario_id: str, patch: FieldsPatch) -> Scenario:
        """Apply user edits. Not allowed while the scenario is generating."""
        with self.cache.tracking():
            owner_id = self._require_user()
            if scenario_id in self._in_flight:
                raise InvalidState(f"Scenario {scenario_id} cannot be edited while it is generating", scenario_id)
            current = await self.repository.get(scenario_id)
            if current.owner_id != owner_id:
                raise Forbidden(scenario_id, owner_id)
            if not is_editable(current.status):
                raise InvalidState(f"Scenario {scenario_id} cannot be edited while it is generating", scenario_id)
            updated = await self.repository.update(scenario_id, owner_id, patch)
            self._update_cache(owner_id, updated)
            return updated

    async def delete_scenario(self, scenario_id: str) -> None:
        """Delete a scenario and evict it from the collection."""
        with self.cache.tracking():
            owner_id = self._require_user()
            if scenario_id in self._in_flight:
                raise InvalidState(f"Scenario {scenario_id} cannot be deleted while it is generating", scenario_id)
            await self.repository.delete(scenario_id, owner_id)
            if self._still_signed_in(owner_id):
                self.cache.remove(scenario_id)

    async def generate_alternative_path(self, scenario_id: str) -> Scenario:
        """Generate the alternative path for a pending or failed scenario.

        Returns:
            The completed scenario

        Raises:
            InvalidState: the scenario is completed, or already generating
            GenerationFailed: the engine failed; the scenario is now in `error`
            PersistenceFailed: a status write failed
            RecoveryFailed: the scenario could not be moved to `error` after a failure
        """
        with self.cache.tracking():
            owner_id = self._require_user()
            # Checked and marked before the first await, so concurrent requests cannot both pass
            if scenario_id in self._in_flight:
                raise InvalidState(f"Scenario {scenario_id} is already generating", scenario_id)
            self._in_flight.add(scenario_id)
            try:
                return await self._generate(scenario_id, owner_id)
            finally:
                self._in_flight.discard(scenario_id)

    async def _generate(self, scenario_id: str, owner_id: str) -> Scenario:
        scenario = await self.repository.get(scenario_id)
        if scenario.owner_id != owner_id:
            raise Forbidden(scenario_id, owner_id)
        if not can_generate(scenario.status):
            raise InvalidState(
                f"Cannot generate an alternative path for scenario {scenario_id} in status {scenario.status.value}",
                scenario_id,
            )

        try:
            generating = await self._transition(scenario, StatusPatch(ScenarioStatus.GENERATING), owner_id)
        except asyncio.CancelledError:
            # The write may have reached the store before the cancellation did
            await self._settle_cancelled(scenario_id, owner_id)
            raise
        self._update_cache(owner_id, generating)
        self._notify_started(generating)

        try:
            path = await self.engine.generate(generating)
            if not path.is_well_formed:
                raise GenerationFailed(
                    f"Generation engine returned a malformed alternative path for scenario {scenario_id}",
                    scenario_id,
                )
        except asyncio.CancelledError:
            logger.warning(f"Generation for scenario {scenario_id} was cancelled")
            await self._fail(generating, owner_id, self._cancelled(scenario_id))
            raise
        except GenerationFailed as e:
            await self._fail(generating, owner_id, e)
            raise
        except Exception as e:
            failure = GenerationFailed(f"Error generating alternative path for scenario {scenario_id}: {e}", scenario_id)
            await self._fail(generating, owner_id, failure)
            raise failure from e

        try:
            completed = await self._transition(
                generating, StatusPatch(ScenarioStatus.COMPLETED, alternative_path=path), owner_id
            )
        except asyncio.CancelledError:
            await self._settle_cancelled(scenario_id, owner_id)
            raise
        except Exception as e:
            failure = PersistenceFailed(
                f"Error saving alternative path for scenario {scenario_id}: {e}", scenario_id
            )
            await self._fail(generating, owner_id, failure)
            raise failure from e

        self._update_cache(owner_id, completed)
        if self._still_signed_in(owner_id):
            self.cache.set_current(completed)
        self._notify_completed(completed)
        return completed

    @staticmethod
    def _cancelled(scenario_id: str) -> GenerationFailed:
        return GenerationFailed(f"Generation for scenario {scenario_id} was cancelled", scenario_id)

    def _update_cache(self, owner_id: str, scenario: Scenario) -> None:
        if self._still_signed_in(owner_id):
            self.cache.replace(scenario)

    async def _settle_cancelled(self, scenario_id: str, owner_id: str) -> None:
        """After a cancelled status write, move a scenario left at `generating` to `error`.

        The stored record is read back because the write may or may not have landed.
        """
        logger.warning(f"Generation for scenario {scenario_id} was cancelled during a status write")
        try:
            stored = await self.repository.get(scenario_id)
        except LiveParallelError as e:
            raise RecoveryFailed(
                f"Scenario {scenario_id} could not be read back after a cancelled generation. "
                "Refresh it to see its current state.",
                scenario_id,
                failure=self._cancelled(scenario_id),
            ) from e
        if stored.status == ScenarioStatus.GENERATING:
            await self._fail(stored, owner_id, self._cancelled(scenario_id))
        else:
            self._update_cache(owner_id, stored)

    async def _transition(self, scenario: Scenario, patch: StatusPatch, owner_id: str) -> Scenario:
        ensure_transition(scenario.status, patch.status, scenario.id)
        try:
            updated = await self.repository.update(scenario.id, owner_id, patch)
        except PersistenceFailed:
            raise
        except LiveParallelError as e:
            raise PersistenceFailed(
                f"Error moving scenario {scenario.id} to {patch.status.value}: {e}", scenario.id
            ) from e
        logger.info(f"Scenario {scenario.id}: {scenario.status.value} -> {patch.status.value}")
        return updated

    async def _fail(self, generating: Scenario, owner_id: str, failure: Exception) -> None:
        """Best-effort move to `error` after a failed generation."""
        logger.error(f"Generation failed for scenario {generating.id}: {failure}")
        self._notify_failed(generating.id, failure)
        try:
            errored = await self._transition(generating, StatusPatch(ScenarioStatus.ERROR), owner_id)
        except Exception as e:
            logger.error(f"Error updating scenario {generating.id} status after generation failure: {e}")
            raise RecoveryFailed(
                f"Scenario {generating.id} could not be marked as failed after: {failure}. "
                "Refresh it to see its current state.",
                generating.id,
                failure=failure,
            ) from e
        self._update_cache(owner_id, errored)

    async def close(self) -> None:
        """Stop following identity changes and release the document store."""
        self.state.close()
        await self.repository.store.close()

    def _notify_started(self, scenario: Scenario) -> None:
        try:
            self.callback.on_generation_started(scenario)
        except Exception:
            logger.exception("Error in lifecycle callback")

    def _notify_completed(self, scenario: Scenario) -> None:
        try:
            self.callback.on_generation_completed(scenario)
        except Exception:
            logger.exception("Error in lifecycle callback")

    def _notify_failed(self, scenario_id: str, exception: Exception) -> None:
        try:
            self.callback.on_generation_failed(scenario_id, exception)
        except Exception:
            logger.exception("Error in lifecycle callback")
