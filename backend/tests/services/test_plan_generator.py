"""Plan Generator: verifies parsing and normalization of generated workout plans.

Invariants:
    - parse_plan_json accepts a bare object or one wrapped in prose/markdown
    - normalize_plan output always satisfies ExerciseCreate
    - unusable plans raise ExternalServiceError, never reach the database
    - AnthropicPlanGenerator sends the profile as the user turn
"""

from dataclasses import dataclass, field

import pytest

from app.core.errors import ExternalServiceError
from app.services.plan_generator import (
    AnthropicPlanGenerator, SYSTEM_PROMPT, build_user_message,
    normalize_plan, parse_plan_json,
)

from tests.services.factories import AI_PROFILE, SAMPLE_PLAN


# -- Helpers -------------------------------------------------------------------

@dataclass
class _Block:
    text: str
    type: str = "text"


@dataclass
class _Usage:
    input_tokens: int = 100
    output_tokens: int = 200


@dataclass
class _Message:
    content: list
    usage: _Usage = field(default_factory=_Usage)


class _FakeClient:
    def __init__(self, text: str):
        self.text = text
        self.calls: list[dict] = []

    async def create_message(self, **kwargs):
        self.calls.append(kwargs)
        return _Message(content=[_Block(self.text)])


# ==============================================================================
# parse_plan_json
# ==============================================================================


def test_parse_bare_json():
    assert parse_plan_json('{"name": "Legs", "exercises": []}') == {
        "name": "Legs", "exercises": [],
    }


def test_parse_json_inside_markdown_fence():
    text = 'Here you go:\n```json\n{"name": "Legs", "exercises": []}\n```'
    assert parse_plan_json(text)["name"] == "Legs"


def test_parse_rejects_prose():
    with pytest.raises(ExternalServiceError):
        parse_plan_json("I cannot help with that.")


def test_parse_rejects_json_array():
    with pytest.raises(ExternalServiceError):
        parse_plan_json("[1, 2, 3]")


# ==============================================================================
# normalize_plan
# ==============================================================================


def test_normalize_accepts_key_aliases():
    name, exercises = normalize_plan(SAMPLE_PLAN, "hypertrophy")
    assert name == "Upper body strength"
    assert len(exercises) == 2
    row = exercises[1]
    assert row.series == "3"
    assert row.repetitions == "10"
    assert row.rest_time == "90s"


def test_normalize_fills_missing_video_url_with_search_link():
    _, exercises = normalize_plan(SAMPLE_PLAN, "hypertrophy")
    assert exercises[0].video_url == "https://videos.example.com/push-up"
    assert exercises[1].video_url == (
        "https://www.youtube.com/results?search_query=Dumbbell+row"
    )


def test_normalize_strips_series_suffix():
    plan = {"name": "Legs", "exercises": [dict(
        SAMPLE_PLAN["exercises"][0], series="4 sets",
    )]}
    _, exercises = normalize_plan(plan, "strength")
    assert exercises[0].series == "4"


def test_normalize_rejects_fractional_series():
    plan = {"name": "Legs", "exercises": [dict(
        SAMPLE_PLAN["exercises"][0], series="2.5",
    )]}
    with pytest.raises(ExternalServiceError) as exc:
        normalize_plan(plan, "strength")
    assert "exercise 0" in exc.value.message


def test_normalize_falls_back_to_objective_name():
    plan = {"exercises": SAMPLE_PLAN["exercises"]}
    name, _ = normalize_plan(plan, "fat loss")
    assert name == "AI workout: fat loss"


def test_normalize_rejects_plan_without_exercises():
    with pytest.raises(ExternalServiceError):
        normalize_plan({"name": "Empty", "exercises": []}, "strength")


def test_normalize_rejects_non_object_exercise():
    with pytest.raises(ExternalServiceError):
        normalize_plan({"name": "Odd", "exercises": ["squat"]}, "strength")


# ==============================================================================
# build_user_message / AnthropicPlanGenerator
# ==============================================================================


def test_user_message_lists_profile():
    message = build_user_message(AI_PROFILE)
    assert "Objective: hypertrophy" in message
    assert "Equipment: dumbbells" in message
    assert "Physical limitations: none" in message


def test_user_message_includes_limitation_description():
    profile = dict(
        AI_PROFILE,
        has_physical_limitations=True,
        limitation_description="bad left knee",
    )
    assert "Physical limitations: bad left knee" in build_user_message(profile)


async def test_generator_sends_prompt_and_parses_reply():
    client = _FakeClient('{"name": "Legs", "exercises": []}')
    generator = AnthropicPlanGenerator(client, "claude-test", max_tokens=512)

    plan = await generator.generate(**AI_PROFILE)

    assert plan == {"name": "Legs", "exercises": []}
    call = client.calls[0]
    assert call["model"] == "claude-test"
    assert call["max_tokens"] == 512
    assert call["system"] == SYSTEM_PROMPT
    assert call["messages"][0]["role"] == "user"
    assert "Objective: hypertrophy" in call["messages"][0]["content"]


async def test_generator_rejects_empty_reply():
    generator = AnthropicPlanGenerator(_FakeClient("   "), "claude-test")
    with pytest.raises(ExternalServiceError):
        await generator.generate(**AI_PROFILE)
