from collections.abc import Sequence
import logging
from typing import override

from attrs import frozen

from ..models.scenario import Scenario

_logger = logging.getLogger(__name__)


class LifecycleCallback:
    '''Callbacks that let you observe scenario generation.

    This class is not abstract to let you override only some methods, or use an instance
    of the base class to request no callbacks.
    '''

    def on_generation_started(self, scenario: Scenario) -> None: pass

    def on_generation_completed(self, scenario: Scenario) -> None: pass

    def on_generation_failed(self, scenario_id: str, exception: Exception) -> None: pass


@frozen
class LifecycleCallbacks(LifecycleCallback):
    '''Combines several callback instances into one.'''

    callbacks: Sequence[LifecycleCallback]

    @override
    def on_generation_started(self, scenario: Scenario) -> None:
        for callback in self.callbacks:
            callback.on_generation_started(scenario)

    @override
    def on_generation_completed(self, scenario: Scenario) -> None:
        for callback in self.callbacks:
            callback.on_generation_completed(scenario)

    @override
    def on_generation_failed(self, scenario_id: str, exception: Exception) -> None:
        for callback in self.callbacks:
            callback.on_generation_failed(scenario_id, exception)


class LoggingLifecycleCallback(LifecycleCallback):
    '''Logs generation progress to the module _logger.'''

    @override
    def on_generation_started(self, scenario: Scenario) -> None:
        _logger.info(f'Generation started for scenario {scenario.id}')

    @override
    def on_generation_completed(self, scenario: Scenario) -> None:
        _logger.info(f'Generation completed for scenario {scenario.id}')

    @override
    def on_generation_failed(self, scenario_id: str, exception: Exception) -> None:
        _logger.warning(f'Generation failed for scenario {scenario_id}: {exception}')
