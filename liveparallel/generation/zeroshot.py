"""Zero-shot alternative path generation using a language model."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import override

from attrs import field, frozen
from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.runnables import Runnable
from pydantic import BaseModel, Field

from ..models.scenario import EXPECTED_EVENT_COUNT, AlternativePath, PathEvent, Scenario
from .base import GenerationEngine
from .prompts import create_generation_prompt, format_scenario

logger = logging.getLogger(__name__)


class PathEventResult(BaseModel):
    """One generated event."""

    title: str = Field(description="Short title of the event, a few words")
    description: str = Field(description="One paragraph describing a consequence of the choice")
    outcome: str = Field(description="One sentence stating where this consequence led")


class AlternativePathResult(BaseModel):
    """Result of alternative path generation."""

    events: list[PathEventResult] = Field(
        description=f"Exactly {EXPECTED_EVENT_COUNT} events in chronological order",
        min_length=EXPECTED_EVENT_COUNT,
        max_length=EXPECTED_EVENT_COUNT,
    )
    summary: str = Field(description="One paragraph summarizing the alternative life as a whole")

    def to_alternative_path(self, timestamp: datetime) -> AlternativePath:
        """Convert the generation result to an AlternativePath stamped with the generation time."""
        return AlternativePath(
            summary=self.summary,
            events=tuple(
                PathEvent(title=event.title, description=event.description, outcome=event.outcome,
                          timestamp=timestamp)
                for event in self.events
            ),
        )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@frozen
class ZeroshotGenerationEngine(GenerationEngine):
    """Generates alternative paths with a language model.

    A drop-in replacement for DummyGenerationEngine: same output shape, and failures
    (model errors, unparseable output) are raised to the lifecycle controller.
    """

    llm: BaseChatModel = field()
    clock: Callable[[], datetime] = field(default=_utc_now)
    parser = field(init=False, default=PydanticOutputParser(pydantic_object=AlternativePathResult))

    _chain: Runnable = field(init=False)
    @_chain.default
    def _chain_default(self) -> Runnable:
        prompt_template = create_generation_prompt(
            format_instructions=self.parser.get_format_instructions()
        )
        return prompt_template | self.llm | self.parser

    def _chain_input(self, scenario: Scenario) -> dict[str, str]:
        return {"scenario": format_scenario(scenario)}

    @override
    async def generate(self, scenario: Scenario) -> AlternativePath:
        logger.debug(f"Generating alternative path for scenario {scenario.id}")
        result: AlternativePathResult = await self._chain.ainvoke(self._chain_input(scenario))
        return result.to_alternative_path(self.clock())
