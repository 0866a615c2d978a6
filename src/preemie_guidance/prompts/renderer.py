"""Literal ``{{variable}}`` substitution for prompt templates.

Rendering is plain text replacement in a single pass: no control flow, no
expression evaluation, and substituted values are never re-scanned for
placeholders. Identical inputs always produce identical output, which the
response cache relies on for its keys.
"""

import re
from typing import Mapping

from preemie_guidance.entities import PromptTemplate
from preemie_guidance.errors import MissingVariableError

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


def render(template: PromptTemplate, variable_values: Mapping[str, str]) -> str:
    """Substitute every ``{{name}}`` in the template's user text.

    Args:
        template: The prompt template to fill
        variable_values: Value for each declared variable

    Returns:
        The fully substituted user prompt

    Raises:
        MissingVariableError: For the first declared variable without a value,
            or the first placeholder in the text that has none
    """
    for name in template.variables:
        if name not in variable_values:
            raise MissingVariableError(name)

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in variable_values:
            raise MissingVariableError(name)
        return str(variable_values[name])

    return PLACEHOLDER_PATTERN.sub(_substitute, template.user_template)


def system_message(template: PromptTemplate) -> str:
    """System prompt followed by the template's required behaviors, if any."""
    behaviors = template.generation_config.required_behaviors
    if not behaviors:
        return template.system_prompt
    lines = "\n".join(f"- {behavior}" for behavior in behaviors)
    return f"{template.system_prompt.rstrip()}\n\nRequirements:\n{lines}"


def render_messages(
    template: PromptTemplate, variable_values: Mapping[str, str]
) -> list[dict[str, str]]:
    """Build the chat message pair for an upstream call.

    The template's required behaviors are appended to the system message as
    a bulleted list.
    """
    return [
        {"role": "system", "content": system_message(template)},
        {"role": "user", "content": render(template, variable_values)},
    ]
