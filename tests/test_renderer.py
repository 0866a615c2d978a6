"""
Tests for prompt templates and rendering.
"""

import re

import pytest

from preemie_guidance.entities import (
    ActionKind,
    AgeBucket,
    DataSummary,
    GenerationConfig,
    MilestoneSummary,
    PromptTemplate,
    age_bucket_for,
)
from preemie_guidance.errors import ConfigurationError, MissingVariableError
from preemie_guidance.prompts import (
    DAILY_GUIDANCE,
    TEMPLATES,
    daily_guidance_variables,
    insights_variables,
    knowledge_card_variables,
    milestone_variables,
    prematurity_profile,
    render,
    render_messages,
)

CONFIG = GenerationConfig(temperature=0.5, max_output_tokens=100)


def make_template(text: str, variables: tuple[str, ...]) -> PromptTemplate:
    return PromptTemplate(
        name="test",
        system_prompt="system",
        user_template=text,
        variables=variables,
        generation_config=CONFIG,
    )


def test_render_substitutes_every_occurrence():
    template = make_template("Hello {{name}}, {{name}} is {{age}}.", ("name", "age"))
    assert render(template, {"name": "Mia", "age": "3"}) == "Hello Mia, Mia is 3."


def test_render_is_deterministic():
    template = make_template("{{a}}-{{b}}", ("a", "b"))
    values = {"a": "x", "b": "y"}
    assert render(template, values) == render(template, dict(reversed(values.items())))


def test_render_does_not_rescan_substituted_values():
    template = make_template("Value: {{a}}", ("a",))
    assert render(template, {"a": "{{b}}"}) == "Value: {{b}}"


def test_missing_declared_variable_names_first_in_declaration_order():
    template = make_template("{{b}} {{a}}", ("a", "b"))
    with pytest.raises(MissingVariableError) as exc_info:
        render(template, {})
    assert exc_info.value.variable == "a"


def test_undeclared_placeholder_without_value_is_an_error():
    template = make_template("{{a}} {{extra}}", ("a",))
    with pytest.raises(MissingVariableError) as exc_info:
        render(template, {"a": "1"})
    assert exc_info.value.variable == "extra"


def test_missing_variable_is_a_configuration_error():
    template = make_template("{{a}}", ("a",))
    with pytest.raises(ConfigurationError):
        render(template, {})


def test_duplicate_variables_are_rejected():
    with pytest.raises(ValueError):
        make_template("{{a}}", ("a", "a"))


def test_render_messages_returns_system_and_user():
    template = make_template("Hi {{name}}", ("name",))
    messages = render_messages(template, {"name": "Mia"})
    assert messages == [
        {"role": "system", "content": "system"},
        {"role": "user", "content": "Hi Mia"},
    ]


def test_required_behaviors_are_appended_to_system_message():
    config = GenerationConfig(
        temperature=0.5, max_output_tokens=100, required_behaviors=("Be warm", "Be brief")
    )
    template = PromptTemplate(
        name="test",
        system_prompt="system",
        user_template="Hi",
        variables=(),
        generation_config=config,
    )
    system = render_messages(template, {})[0]["content"]
    assert system == "system\n\nRequirements:\n- Be warm\n- Be brief"


@pytest.mark.parametrize("template", list(TEMPLATES.values()), ids=lambda t: t.name)
def test_every_template_sends_its_behaviors(template):
    system = render_messages(template, dict.fromkeys(template.variables, "x"))[0]["content"]
    assert template.generation_config.required_behaviors
    for behavior in template.generation_config.required_behaviors:
        assert f"- {behavior}" in system


def test_every_template_declares_exactly_its_placeholders():
    for template in TEMPLATES.values():
        placeholders = set(re.findall(r"\{\{(\w+)\}\}", template.user_template))
        assert placeholders == set(template.variables), template.name


@pytest.mark.parametrize(
    "days,bucket",
    [
        (0, AgeBucket.MONTHS_0_2),
        (59, AgeBucket.MONTHS_0_2),
        (60, AgeBucket.MONTHS_2_4),
        (119, AgeBucket.MONTHS_2_4),
        (120, AgeBucket.MONTHS_4_6),
        (180, AgeBucket.MONTHS_6_9),
        (270, AgeBucket.MONTHS_9_12),
        (364, AgeBucket.MONTHS_9_12),
        (365, AgeBucket.MONTHS_12_PLUS),
        (900, AgeBucket.MONTHS_12_PLUS),
    ],
)
def test_age_bucket_thresholds(days, bucket):
    assert age_bucket_for(days) is bucket


@pytest.mark.parametrize(
    "weeks,severity",
    [(2, "mildly premature"), (4, "mildly premature"), (8, "moderately premature"), (12, "extremely premature")],
)
def test_prematurity_profile(weeks, severity):
    assert prematurity_profile(weeks).severity == severity


def test_daily_variables_fill_the_daily_template(age, activity):
    variables = daily_guidance_variables(age, activity)
    prompt = render(DAILY_GUIDANCE, variables)
    assert "Mia" in prompt
    assert "born 8 weeks early (moderately premature)" in prompt
    assert variables["feedingAnalysis"] == "No records"
    assert variables["ageCategory"] == "2-4 months"


def test_builders_cover_their_templates(age, activity):
    milestones = [
        MilestoneSummary(title="Social smile", category="social"),
        MilestoneSummary(title="Head control", category="motor"),
    ]
    summary = DataSummary(age=age, feeding_count=8, sleep_count=5, milestones_count=2)
    builders = {
        ActionKind.DAILY_GUIDANCE: daily_guidance_variables(age, activity),
        ActionKind.MILESTONE: milestone_variables(age, milestones),
        ActionKind.INSIGHTS: insights_variables(summary),
        ActionKind.KNOWLEDGE_CARDS: knowledge_card_variables(age, 5),
    }
    for kind, variables in builders.items():
        render(TEMPLATES[kind], variables)

    milestone_vars = builders[ActionKind.MILESTONE]
    assert milestone_vars["motorCount"] == "1"
    assert milestone_vars["socialCount"] == "1"
    assert milestone_vars["recentMilestones"] == "Social smile, Head control"
