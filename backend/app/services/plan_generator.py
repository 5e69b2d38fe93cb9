"""AI Plan Generator: asks Claude for a workout plan and normalizes the answer.

Invariants:
    - generate() returns the parsed JSON object or raises ExternalServiceError
    - normalize_plan() output always satisfies ExerciseCreate (series digits only,
      videoUrl a URL, name/instructions >= 3 chars) or raises ExternalServiceError
    - Nothing the model returns reaches the database without normalize_plan()

Design Decisions:
    - JSON parsing has 2 levels (direct, first {...} block); no raw-text fallback,
      a plan is useless without structure
    - Missing videoUrl becomes a video search URL for the exercise name
    - Key aliases (sets/reps/rest/...) accepted: the model drifts from the schema
"""

import json
import logging
import re
from urllib.parse import quote_plus

from app.core.errors import ExternalServiceError
from app.core.validation import validate_payload
from app.infrastructure.anthropic_client import (
    ResilientAnthropicClient, SERVICE_NAME,
)
from app.schemas.workout import ExerciseCreate

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255
VIDEO_SEARCH_URL = "https://www.youtube.com/results?search_query={query}"

_KEY_ALIASES = {
    "name": ("name", "exercise", "title"),
    "series": ("series", "sets"),
    "repetitions": ("repetitions", "reps"),
    "weight": ("weight", "load"),
    "restTime": ("restTime", "rest_time", "rest"),
    "videoUrl": ("videoUrl", "video_url", "video"),
    "instructions": ("instructions", "notes", "description"),
}

SYSTEM_PROMPT = """<role>
You are a certified strength and conditioning coach. You design one training
session adapted to the athlete profile you receive.
</role>

<rules>
1. Respect physical limitations. Never prescribe a movement the athlete said
   they cannot perform.
2. Use only the listed equipment. With no equipment, use bodyweight movements.
3. Fit the session into the available training time, including rest.
4. Between 3 and 10 exercises.
5. series is a whole number written as a string ("4"). Other fields are free text
   with units ("8-12", "60kg", "90s").
6. Write names and instructions in the same language as the objective.
</rules>

<output_format>
Return ONLY a JSON object. No markdown, no explanation, no preamble.

{
  "name": "short workout name",
  "exercises": [
    {
      "name": "exercise name",
      "series": "4",
      "repetitions": "10",
      "weight": "bodyweight",
      "restTime": "60s",
      "videoUrl": "https://... (omit if unknown)",
      "instructions": "execution cues in 1-2 sentences"
    }
  ]
}
</output_format>"""


def build_user_message(profile: dict) -> str:
    """Render the training profile as the user turn."""
    equipments = ", ".join(profile.get("equipments") or []) or "none"
    limitations = "none"
    if profile.get("has_physical_limitations"):
        limitations = profile.get("limitation_description") or "unspecified"
    lines = [
        f"Objective: {profile['objective']}",
        f"Available training time: {profile['training_time']}",
        f"Experience level: {profile['experience_level']}",
        f"Weekly frequency: {profile['frequency']}",
        f"Program duration: {profile['duration']}",
        f"Training location: {profile['location']}",
        f"Equipment: {equipments}",
        f"Physical limitations: {limitations}",
        f"Preferred training style: {profile['preferred_training_style']}",
        f"Nutrition: {profile['nutrition']}",
        f"Sleep quality: {profile['sleep_quality']}",
    ]
    return "\n".join(lines)


def parse_plan_json(text: str) -> dict:
    """Extract the plan object from the model's text answer."""
    text = text.strip()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        match = re.search(r"\{[\s\S]*\}", text)
        if not match:
            raise ExternalServiceError(SERVICE_NAME, "response was not JSON")
        try:
            parsed = json.loads(match.group())
        except json.JSONDecodeError:
            raise ExternalServiceError(
                SERVICE_NAME, "response was not JSON",
            ) from None
    if not isinstance(parsed, dict):
        raise ExternalServiceError(SERVICE_NAME, "response was not a JSON object")
    return parsed


def normalize_plan(
    raw: dict, objective: str,
) -> tuple[str, list[ExerciseCreate]]:
    """Map a generated plan onto the Workout/Exercise schema."""
    name = raw.get("name") or raw.get("title")
    if not isinstance(name, str) or len(name.strip()) < 3:
        name = f"AI workout: {objective}"
    name = name.strip()[:MAX_NAME_LENGTH]

    items = raw.get("exercises")
    if not isinstance(items, list) or not items:
        raise ExternalServiceError(SERVICE_NAME, "plan has no exercises")

    exercises = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ExternalServiceError(
                SERVICE_NAME, f"exercise {index} is not an object",
            )
        result = validate_payload(ExerciseCreate, _normalize_exercise(item))
        if isinstance(result, list):
            first = result[0]
            raise ExternalServiceError(
                SERVICE_NAME,
                f"invalid exercise {index} ({first.field}): {first.message}",
            )
        exercises.append(result)
    return name, exercises


def _normalize_exercise(item: dict) -> dict:
    normalized = {}
    for field, aliases in _KEY_ALIASES.items():
        value = next(
            (item[key] for key in aliases if item.get(key) is not None), None,
        )
        if value is not None:
            normalized[field] = _as_text(value)
    if "series" in normalized:
        normalized["series"] = _whole_number(normalized["series"])
    if not normalized.get("videoUrl") and normalized.get("name"):
        normalized["videoUrl"] = VIDEO_SEARCH_URL.format(
            query=quote_plus(normalized["name"]),
        )
    return normalized


def _as_text(value: object) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _whole_number(value: str) -> str:
    # "4 sets" -> "4", "4.0" -> "4"; "12.5" is left as-is and fails validation
    match = re.match(r"^\s*([0-9]+)(?:\.0+)?(?![0-9.])", value)
    return match.group(1) if match else value


class AnthropicPlanGenerator:
    """PlanGenerator backed by the Anthropic Messages API."""

    def __init__(
        self,
        client: ResilientAnthropicClient,
        model: str,
        max_tokens: int = 4096,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    async def generate(self, **profile) -> dict:
        response = await self.client.create_message(
            model=self.model,
            max_tokens=self.max_tokens,
            system=SYSTEM_PROMPT,
            messages=[
                {"role": "user", "content": build_user_message(profile)},
            ],
        )
        text = "".join(
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        )
        if not text.strip():
            raise ExternalServiceError(SERVICE_NAME, "empty response")
        logger.info(
            "Workout plan generated",
            extra={"output_tokens": response.usage.output_tokens},
        )
        return parse_plan_json(text)
