"""Tests for AppState."""

import asyncio

import pytest

from liveparallel.identity.local import LocalIdentityProvider
from liveparallel.lifecycle.controller import ScenarioLifecycleController
from liveparallel.models.scenario import ScenarioFields
from liveparallel.repository.repository import ScenarioRepository
from liveparallel.state.app_state import AppState
from liveparallel.state.cache import ScenarioCollectionCache
from tests.fixtures.dummy import PausingDocumentStore, StepClock, instant_engine


@pytest.mark.asyncio
async def test_sign_out_clears_collection(
    controller: ScenarioLifecycleController, identity: LocalIdentityProvider, seattle_fields: ScenarioFields
) -> None:
    await controller.create_scenario(seattle_fields)
    assert len(controller.cache) == 1

    identity.sign_out()

    assert len(controller.cache) == 0
    assert controller.cache.current is None
    assert not controller.state.is_authenticated


@pytest.mark.asyncio
async def test_switching_users_hides_previous_users_scenarios(
    controller: ScenarioLifecycleController, identity: LocalIdentityProvider, seattle_fields: ScenarioFields
) -> None:
    await controller.create_scenario(seattle_fields)

    identity.sign_in("user-2")
    summaries = await controller.fetch_user_scenarios()

    assert summaries == ()
    assert controller.state.user_id == "user-2"


@pytest.mark.asyncio
async def test_same_user_signing_in_again_keeps_collection(
    controller: ScenarioLifecycleController, identity: LocalIdentityProvider, seattle_fields: ScenarioFields
) -> None:
    await controller.create_scenario(seattle_fields)

    identity.sign_in("user-1")

    assert len(controller.cache) == 1


@pytest.mark.asyncio
async def test_closed_state_stops_following_identity(
    state: AppState, controller: ScenarioLifecycleController, identity: LocalIdentityProvider,
    seattle_fields: ScenarioFields
) -> None:
    await controller.create_scenario(seattle_fields)

    state.close()
    identity.sign_out()

    assert len(state.scenarios) == 1
    assert state.user_id is None


def pausing_controller(store: PausingDocumentStore, identity: LocalIdentityProvider,
                       clock: StepClock) -> ScenarioLifecycleController:
    repository = ScenarioRepository(store, clock=clock)
    state = AppState(identity=identity, scenarios=ScenarioCollectionCache(repository))
    return ScenarioLifecycleController(repository=repository, engine=instant_engine(), state=state)


@pytest.mark.asyncio
async def test_create_finishing_after_user_switch_stays_out_of_collection(
    identity: LocalIdentityProvider, clock: StepClock, seattle_fields: ScenarioFields
) -> None:
    store = PausingDocumentStore(pause_create=True)
    controller = pausing_controller(store, identity, clock)

    task = asyncio.create_task(controller.create_scenario(seattle_fields))
    await store.paused.wait()
    identity.sign_in("user-2")
    store.resume()
    created = await task

    assert created.owner_id == "user-1"
    assert created.id not in controller.cache
    assert controller.cache.current is None
    assert await controller.fetch_user_scenarios() == ()


@pytest.mark.asyncio
async def test_fetch_finishing_after_user_switch_does_not_replace_collection(
    identity: LocalIdentityProvider, clock: StepClock, seattle_fields: ScenarioFields
) -> None:
    store = PausingDocumentStore()
    controller = pausing_controller(store, identity, clock)
    created = await controller.create_scenario(seattle_fields)
    store.pause_query = True

    task = asyncio.create_task(controller.fetch_user_scenarios())
    await store.paused.wait()
    identity.sign_in("user-2")
    store.resume()
    summaries = await task

    assert [summary.id for summary in summaries] == [created.id]
    assert len(controller.cache) == 0
    assert created.id not in controller.cache


@pytest.mark.asyncio
async def test_fetch_scenario_finishing_after_sign_out_leaves_current_empty(
    identity: LocalIdentityProvider, clock: StepClock, seattle_fields: ScenarioFields
) -> None:
    store = PausingDocumentStore()
    controller = pausing_controller(store, identity, clock)
    created = await controller.create_scenario(seattle_fields)
    controller.cache.clear_current()
    store.pause_get = True

    task = asyncio.create_task(controller.fetch_scenario(created.id))
    await store.paused.wait()
    identity.sign_out()
    store.resume()

    assert await task == created
    assert controller.cache.current is None
