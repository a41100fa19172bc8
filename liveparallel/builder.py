"""Module providing the composition root for the scenario core.

LiveParallelBuilder assembles the store, repository, generation engine, application
state and lifecycle controller from a configuration.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Self

import attrs
from langchain_core.language_models import BaseChatModel

from .config import LiveParallelConfig, StoreBackend
from .generation.base import GenerationEngine
from .generation.dummy import DummyGenerationEngine
from .generation.zeroshot import ZeroshotGenerationEngine
from .identity.base import IdentityProvider
from .identity.local import LocalIdentityProvider
from .lifecycle.callbacks import LifecycleCallback
from .lifecycle.controller import ScenarioLifecycleController
from .repository.repository import ScenarioRepository, utc_now
from .state.app_state import AppState
from .state.cache import ScenarioCollectionCache
from .store.base import DocumentStore
from .store.duckdb_store import DuckdbDocumentStore
from .store.memory import InMemoryDocumentStore


@attrs.define
class LiveParallelBuilder:
    """Builder for configuring and creating a ScenarioLifecycleController.

    **Defaults:**
    - Identity: a LocalIdentityProvider with nobody signed in
    - Store: chosen by config.store_backend
    - Generation: the dummy engine, or the zero-shot engine once a model is set

    Example:
        ```python
        controller = (LiveParallelBuilder(LiveParallelConfig.from_env())
                      .with_identity(identity)
                      .with_generation_model(chat_model)
                      .build())
        ```
    """

    config: LiveParallelConfig = attrs.field(factory=LiveParallelConfig)

    identity: IdentityProvider | None = None
    store: DocumentStore | None = None
    engine: GenerationEngine | None = None
    generation_model: BaseChatModel | None = None
    callback: LifecycleCallback | None = None
    clock: Callable[[], datetime] = utc_now

    def with_identity(self, identity: IdentityProvider) -> Self:
        """Sets the identity provider supplying the signed-in user.

        Returns:
            Self: The builder instance for method chaining
        """
        self.identity = identity
        return self

    def with_store(self, store: DocumentStore) -> Self:
        """Sets the document store, overriding config.store_backend.

        Returns:
            Self: The builder instance for method chaining
        """
        self.store = store
        return self

    def with_engine(self, engine: GenerationEngine) -> Self:
        """Sets a custom generation engine. Takes precedence over with_generation_model.

        Returns:
            Self: The builder instance for method chaining
        """
        self.engine = engine
        return self

    def with_generation_model(self, model: BaseChatModel) -> Self:
        """Generate alternative paths with this language model instead of the dummy engine.

        Returns:
            Self: The builder instance for method chaining
        """
        self.generation_model = model
        return self

    def with_callback(self, callback: LifecycleCallback) -> Self:
        """Sets the observer for generation progress.

        Returns:
            Self: The builder instance for method chaining
        """
        self.callback = callback
        return self

    def with_clock(self, clock: Callable[[], datetime]) -> Self:
        """Sets the time source for scenario timestamps.

        Returns:
            Self: The builder instance for method chaining
        """
        self.clock = clock
        return self

    def _build_store(self) -> DocumentStore:
        if self.store is not None:
            return self.store
        match self.config.store_backend:
            case StoreBackend.MEMORY:
                return InMemoryDocumentStore()
            case StoreBackend.DUCKDB:
                return DuckdbDocumentStore(self.config.duckdb_path)

    def _build_engine(self) -> GenerationEngine:
        if self.engine is not None:
            return self.engine
        if self.generation_model is not None:
            return ZeroshotGenerationEngine(self.generation_model, clock=self.clock)
        return DummyGenerationEngine(delay=self.config.generation_delay, clock=self.clock)

    def build(self) -> ScenarioLifecycleController:
        """Creates the controller and everything it depends on.

        The application state is reachable as `controller.state`. Call `controller.close()`
        when done to release the store and the identity subscription.

        Returns:
            ScenarioLifecycleController: A fully wired controller
        """
        repository = ScenarioRepository(self._build_store(), collection=self.config.collection, clock=self.clock)
        state = AppState(
            identity=self.identity or LocalIdentityProvider(),
            scenarios=ScenarioCollectionCache(repository),
        )
        return ScenarioLifecycleController(
            repository=repository,
            engine=self._build_engine(),
            state=state,
            callback=self.callback,
        )
