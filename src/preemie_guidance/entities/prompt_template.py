"""Prompt template domain entity."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GenerationConfig:
    """Per-template generation settings sent with every upstream call."""

    temperature: float
    max_output_tokens: int
    required_behaviors: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PromptTemplate:
    """Immutable prompt definition.

    Attributes:
        name: Identifier used in logs
        system_prompt: Persona and instructions sent as the system message
        user_template: User message text with ``{{variable}}`` placeholders
        variables: Ordered names every render must supply
        generation_config: Temperature, token budget and required behaviors
    """

    name: str
    system_prompt: str
    user_template: str
    variables: tuple[str, ...]
    generation_config: GenerationConfig

    def __post_init__(self) -> None:
        if len(set(self.variables)) != len(self.variables):
            raise ValueError(f"Template '{self.name}' declares duplicate variables")
