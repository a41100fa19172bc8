"""Base class for alternative path generation."""

import abc

from ..models.scenario import AlternativePath, Scenario


class GenerationEngine(abc.ABC):
    """Produces the alternative life path for a scenario.

    Implementations may take a long time and may raise; the lifecycle controller
    turns any exception into a failed generation.
    """

    @abc.abstractmethod
    async def generate(self, scenario: Scenario) -> AlternativePath:
        """Generate an alternative path for a scenario.

        Args:
            scenario: The scenario to generate a path for

        Returns:
            A summary and exactly three events
        """
        ...
