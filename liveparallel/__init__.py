"""LiveParallel - scenario lifecycle core for alternative life path generation."""

# Public API exports
from .errors import (
    LiveParallelError,
    Unauthenticated,
    NotFound,
    Forbidden,
    InvalidState,
    GenerationFailed,
    PersistenceFailed,
    RecoveryFailed,
)
from .models import (
    AlternativePath,
    FieldsPatch,
    PathEvent,
    Scenario,
    ScenarioFields,
    ScenarioStatus,
    ScenarioSummary,
)
from .config import LiveParallelConfig, StoreBackend
from .identity import IdentityProvider, LocalIdentityProvider
from .store import DocumentStore, DuckdbDocumentStore, InMemoryDocumentStore, StoreError
from .repository import ScenarioRepository
from .generation import DummyGenerationEngine, GenerationEngine, ZeroshotGenerationEngine
from .state import AppState, ScenarioCollectionCache
from .lifecycle import LifecycleCallback, ScenarioLifecycleController
from .builder import LiveParallelBuilder

__version__ = "0.1.0"

__all__ = [
    # Errors
    "LiveParallelError",
    "Unauthenticated",
    "NotFound",
    "Forbidden",
    "InvalidState",
    "GenerationFailed",
    "PersistenceFailed",
    "RecoveryFailed",
    # Models
    "AlternativePath",
    "FieldsPatch",
    "PathEvent",
    "Scenario",
    "ScenarioFields",
    "ScenarioStatus",
    "ScenarioSummary",
    # Configuration
    "LiveParallelConfig",
    "StoreBackend",
    # Collaborators
    "IdentityProvider",
    "LocalIdentityProvider",
    "DocumentStore",
    "DuckdbDocumentStore",
    "InMemoryDocumentStore",
    "StoreError",
    "GenerationEngine",
    "DummyGenerationEngine",
    "ZeroshotGenerationEngine",
    # Core
    "ScenarioRepository",
    "AppState",
    "ScenarioCollectionCache",
    "LifecycleCallback",
    "ScenarioLifecycleController",
    "LiveParallelBuilder",
]
