"""Error taxonomy surfaced by the scenario core."""


class LiveParallelError(Exception):
    """Base class for all errors raised by the scenario core."""

    def __init__(self, message: str, scenario_id: str | None = None) -> None:
        super().__init__(message)
        self.scenario_id = scenario_id


class Unauthenticated(LiveParallelError):
    """Raised when an operation needs a signed-in user and there is none."""

    def __init__(self, message: str = "No user is signed in") -> None:
        super().__init__(message)


class NotFound(LiveParallelError):
    """Raised when no scenario exists with the requested id."""

    def __init__(self, scenario_id: str) -> None:
        super().__init__(f"Scenario {scenario_id} not found", scenario_id)


class Forbidden(LiveParallelError):
    """Raised when the acting user does not own the scenario."""

    def __init__(self, scenario_id: str, acting_owner_id: str) -> None:
        super().__init__(f"User {acting_owner_id} does not have permission to modify scenario {scenario_id}",
                         scenario_id)
        self.acting_owner_id = acting_owner_id


class InvalidState(LiveParallelError):
    """Raised when an operation is not allowed in the scenario's current status."""


class GenerationFailed(LiveParallelError):
    """Raised when the generation engine fails or returns an unusable payload."""


class PersistenceFailed(LiveParallelError):
    """Raised when a read or write against the document store fails."""


class RecoveryFailed(PersistenceFailed):
    """Raised when a scenario could not be moved to `error` after a failed generation.

    The stored record may still say `generating`; the caller must refresh it manually.
    """

    def __init__(self, message: str, scenario_id: str | None = None, failure: Exception | None = None) -> None:
        super().__init__(message, scenario_id)
        self.failure = failure
