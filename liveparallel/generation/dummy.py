"""Dummy generation engine with a fixed payload."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import override

from attrs import field, frozen

from .base import GenerationEngine
from ..models.scenario import AlternativePath, PathEvent, Scenario

logger = logging.getLogger(__name__)

_EVENTS = (
    (
        "New career path",
        "You decided to follow your passion instead of the secure job.",
        "You started your own business and found both purpose and financial success.",
    ),
    (
        "Relationship changes",
        "Your new career introduced you to different social circles.",
        "You met someone who truly appreciates your ambition and creativity.",
    ),
    (
        "Personal growth",
        "The challenges of your new path pushed you to develop new skills.",
        "You discovered hidden talents and strengths you never knew you had.",
    ),
)

_SUMMARY = (
    "Your alternative path led to greater fulfillment and unexpected opportunities. "
    "While it came with challenges, the journey strengthened your character and expanded your horizons."
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@frozen
class DummyGenerationEngine(GenerationEngine):
    """Returns the same three-event path for every scenario after a fixed delay.

    Models the latency of a real generator without calling one. Useful for development
    and as a baseline in tests.
    """

    delay: timedelta = timedelta(seconds=2)
    clock: Callable[[], datetime] = field(default=_utc_now)

    @override
    async def generate(self, scenario: Scenario) -> AlternativePath:
        logger.debug(f"Simulating generation for scenario {scenario.id} ({self.delay.total_seconds()}s)")
        await asyncio.sleep(self.delay.total_seconds())
        timestamp = self.clock()
        return AlternativePath(
            summary=_SUMMARY,
            events=tuple(
                PathEvent(title=title, description=description, outcome=outcome, timestamp=timestamp)
                for title, description, outcome in _EVENTS
            ),
        )
