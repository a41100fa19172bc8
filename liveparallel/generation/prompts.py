"""Prompt templates and utilities for alternative path generation."""

from langchain_core.prompts import (
    ChatPromptTemplate,
    HumanMessagePromptTemplate,
    SystemMessagePromptTemplate,
)

from ..models.scenario import EXPECTED_EVENT_COUNT, Scenario


def format_scenario(scenario: Scenario) -> str:
    """Format the user-authored fields of a scenario for the prompt.

    Args:
        scenario: The scenario to format

    Returns:
        One labelled line per field; context is omitted when absent
    """
    lines = [
        f"TITLE: {scenario.title}",
        f"SITUATION: {scenario.description}",
        f"ALTERNATIVE CHOICE: {scenario.choice}",
    ]
    if scenario.context:
        lines.append(f"ADDITIONAL CONTEXT: {scenario.context}")
    return "\n".join(lines)


# System prompt for alternative path generation
GENERATION_SYSTEM_PROMPT = f"""You are a thoughtful storyteller who imagines how a person's life could unfold
if they had made a different decision.

You will be given a life decision: the situation the person was in and the alternative choice
they want to explore. Imagine the life that follows from taking that alternative choice.

Guidelines:
- Write exactly {EXPECTED_EVENT_COUNT} events, in the order they would happen
- Each event has a short title (a few words), a one-paragraph description of a consequence
  of the choice, and a one-sentence outcome
- Address the person directly as "you"
- Keep the events plausible and grounded in the situation described; avoid fantasy
- Balance the narrative: alternative paths bring both gains and costs
- Finish with a one-paragraph summary of the alternative life as a whole
"""

# Human prompt template for alternative path generation
GENERATION_HUMAN_TEMPLATE = """Imagine the alternative life path for the following decision:

{scenario}

Format your response according to the following guidelines:
{format_instructions}

Your alternative path:"""


def create_generation_prompt(format_instructions: str) -> ChatPromptTemplate:
    """Create a chat prompt template for alternative path generation.

    Args:
        format_instructions: Instructions for formatting the output

    Returns:
        Configured ChatPromptTemplate expecting a `scenario` variable
    """
    return ChatPromptTemplate.from_messages([
        SystemMessagePromptTemplate.from_template(GENERATION_SYSTEM_PROMPT),
        HumanMessagePromptTemplate.from_template(
            GENERATION_HUMAN_TEMPLATE,
            partial_variables={"format_instructions": format_instructions},
        ),
    ])
