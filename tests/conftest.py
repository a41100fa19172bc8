"""Configuration for pytest.

This file contains fixtures and configurations used by pytest.
"""
import logging

import pytest

from liveparallel.identity.local import LocalIdentityProvider
from liveparallel.lifecycle.controller import ScenarioLifecycleController
from liveparallel.models.scenario import ScenarioFields
from liveparallel.repository.repository import ScenarioRepository
from liveparallel.state.app_state import AppState
from liveparallel.state.cache import ScenarioCollectionCache
from liveparallel.store.memory import InMemoryDocumentStore
from tests.fixtures.dummy import StepClock, instant_engine


@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> None:
    """Configure logging for all tests."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True  # Override any existing configuration
    )
    # Reduce noise from third-party libraries during tests
    logging.getLogger("langchain_core").setLevel(logging.WARNING)


@pytest.fixture
def clock() -> StepClock:
    """A clock advancing one second per read, starting 2024-01-01 10:00 UTC."""
    return StepClock()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def repository(store: InMemoryDocumentStore, clock: StepClock) -> ScenarioRepository:
    return ScenarioRepository(store, clock=clock)


@pytest.fixture
def identity() -> LocalIdentityProvider:
    """Identity with user-1 signed in."""
    return LocalIdentityProvider("user-1")


@pytest.fixture
def state(identity: LocalIdentityProvider, repository: ScenarioRepository) -> AppState:
    return AppState(identity=identity, scenarios=ScenarioCollectionCache(repository))


@pytest.fixture
def controller(repository: ScenarioRepository, state: AppState) -> ScenarioLifecycleController:
    """Controller with the dummy engine and no simulated latency."""
    return ScenarioLifecycleController(repository=repository, engine=instant_engine(), state=state)


@pytest.fixture
def seattle_fields() -> ScenarioFields:
    return ScenarioFields(
        title="Job in Seattle",
        description="Considering relocation",
        choice="Take the offer",
    )
