"""In-memory mirror of the signed-in user's scenarios."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterable, Iterator

from ..models.scenario import Scenario, ScenarioSummary
from ..repository.repository import ScenarioRepository

logger = logging.getLogger(__name__)


class ScenarioCollectionCache:
    """Ordered scenario summaries for the current user, plus the scenario open in a detail view.

    The list is kept consistent with mutations as they happen (insert on create,
    replace on update, remove on delete) so the UI does not reload after every action.
    The remote store stays the source of truth: the cache may go stale, so replacing
    or removing an id it does not hold is a no-op, not an error.

    Also carries the view state the UI renders around the list: whether an operation
    is running and the message of the last failure.
    """

    def __init__(self, repository: ScenarioRepository) -> None:
        self._repository = repository
        self._summaries: list[ScenarioSummary] = []
        self._current: Scenario | None = None
        self._running_operations = 0
        self._error: str | None = None

    async def load(self, owner_id: str) -> tuple[ScenarioSummary, ...]:
        """Replace the whole list with the owner's scenarios, newest first."""
        scenarios = await self._repository.list_by_owner(owner_id)
        self.reset(scenarios)
        logger.debug(f"Loaded {len(self._summaries)} scenarios for user {owner_id}")
        return self.summaries

    def reset(self, scenarios: Iterable[Scenario]) -> None:
        summaries = [scenario.summary for scenario in scenarios]
        summaries.sort(key=lambda summary: summary.created_at, reverse=True)
        self._summaries = summaries

    def insert(self, scenario: Scenario) -> None:
        """Put a newly created scenario at the top and make it the current one."""
        self._summaries = [summary for summary in self._summaries if summary.id != scenario.id]
        self._summaries.insert(0, scenario.summary)
        self._current = scenario

    def replace(self, scenario: Scenario) -> bool:
        """Overwrite the entry with the same id in place.

        Returns:
            Whether the list held the id
        """
        if self._current is not None and self._current.id == scenario.id:
            self._current = scenario
        for index, summary in enumerate(self._summaries):
            if summary.id == scenario.id:
                self._summaries[index] = scenario.summary
                return True
        return False

    def remove(self, scenario_id: str) -> bool:
        """Drop the entry with this id; clears the current scenario if it is the one removed.

        Returns:
            Whether the list held the id
        """
        if self._current is not None and self._current.id == scenario_id:
            self._current = None
        before = len(self._summaries)
        self._summaries = [summary for summary in self._summaries if summary.id != scenario_id]
        return len(self._summaries) != before

    @property
    def current(self) -> Scenario | None:
        return self._current

    def set_current(self, scenario: Scenario) -> None:
        self._current = scenario

    def clear_current(self) -> None:
        self._current = None

    @property
    def is_loading(self) -> bool:
        return self._running_operations > 0

    @property
    def error(self) -> str | None:
        return self._error

    def clear_error(self) -> None:
        self._error = None

    def clear(self) -> None:
        """Forget everything; used when the signed-in user changes."""
        self._summaries = []
        self._current = None
        self._error = None

    @contextlib.contextmanager
    def tracking(self) -> Iterator[None]:
        """Mark an operation as running; record its error message if it fails."""
        self._running_operations += 1
        self._error = None
        try:
            yield
        except Exception as e:
            self._error = str(e)
            raise
        finally:
            self._running_operations -= 1

    @property
    def summaries(self) -> tuple[ScenarioSummary, ...]:
        return tuple(self._summaries)

    def get(self, scenario_id: str) -> ScenarioSummary | None:
        return next((summary for summary in self._summaries if summary.id == scenario_id), None)

    def __iter__(self) -> Iterator[ScenarioSummary]:
        return iter(tuple(self._summaries))

    def __len__(self) -> int:
        return len(self._summaries)

    def __contains__(self, scenario_id: object) -> bool:
        return any(summary.id == scenario_id for summary in self._summaries)
