"""Workout Session Schemas: session creation, exercise marking, session responses.

Invariants:
    - SessionCreate.workoutId is a UUID; malformed ids are validation errors
    - SessionExerciseUpdate.completed is required; override values are optional
      and only applied when present
    - series override follows the same digits-only rule as exercise series
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.core.domain_types import SessionStatus
from app.schemas import CamelModel
from app.schemas.workout import SERIES_PATTERN


class SessionCreate(CamelModel):
    """POST /workout/session body."""
    user_id: str = Field(min_length=1)
    workout_id: UUID


class SessionExerciseUpdate(CamelModel):
    """PATCH /workout/session/{id}/exercises/{exerciseId} body."""
    completed: bool
    weight: str | None = None
    repetitions: str | None = None
    series: str | None = Field(None, pattern=SERIES_PATTERN)


class SessionExerciseResponse(CamelModel):
    id: UUID
    exercise_id: UUID
    completed: bool
    weight: str | None = None
    repetitions: str | None = None
    series: str | None = None


class WorkoutSessionResponse(CamelModel):
    id: UUID
    workout_id: UUID
    user_id: str
    status: SessionStatus
    ready_to_complete: bool
    exercises: list[SessionExerciseResponse]
    created_at: datetime
    completed_at: datetime | None = None
