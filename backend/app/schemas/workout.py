"""Workout Schemas: request bodies and responses for workouts, exercises and likes.

Invariants:
    - WorkoutCreate.name: 3-255 chars; exercises: at least one entry
    - ExerciseCreate.series: ASCII digits only (positive integer encoding)
    - ExerciseCreate.videoUrl: parses as a URL, stored exactly as sent
    - visibility defaults to PUBLIC when omitted
    - WorkoutAIRequest requires limitationDescription when hasPhysicalLimitations
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from app.core.domain_types import Visibility, WorkoutOrigin
from app.core.validation import check_url
from app.schemas import CamelModel

SERIES_PATTERN = r"^[0-9]+$"


class ExerciseCreate(CamelModel):
    """One exercise definition inside a workout body."""
    name: str = Field(min_length=3)
    series: str = Field(pattern=SERIES_PATTERN)
    repetitions: str
    weight: str
    rest_time: str
    video_url: str
    instructions: str = Field(min_length=3)

    @field_validator("video_url")
    @classmethod
    def video_url_is_url(cls, v: str) -> str:
        return check_url(v)


class WorkoutCreate(CamelModel):
    """POST /workout body."""
    name: str = Field(min_length=3, max_length=255)
    visibility: Visibility = Visibility.PUBLIC
    user_id: str = Field(min_length=1)
    exercises: list[ExerciseCreate] = Field(min_length=1)


class WorkoutCopyRequest(CamelModel):
    """POST /workout/{id}/copy body: the user who receives the copy."""
    user_id: str = Field(min_length=1)


class WorkoutAIRequest(CamelModel):
    """POST /workout/ai body: the training profile sent to the plan generator."""
    user_id: str = Field(min_length=1)
    objective: str = Field(min_length=1)
    training_time: str
    experience_level: str
    frequency: str
    duration: str
    location: str
    equipments: list[str] = Field(default_factory=list)
    has_physical_limitations: bool = False
    limitation_description: str | None = None
    preferred_training_style: str
    nutrition: str
    sleep_quality: str

    @model_validator(mode="after")
    def limitation_described(self):
        if self.has_physical_limitations and not self.limitation_description:
            raise ValueError(
                "limitationDescription is required when "
                "hasPhysicalLimitations is true",
            )
        return self


class ExerciseResponse(CamelModel):
    id: UUID
    name: str
    series: str
    repetitions: str
    weight: str
    rest_time: str
    video_url: str
    instructions: str


class WorkoutResponse(CamelModel):
    id: UUID
    user_id: str
    name: str
    visibility: Visibility
    origin: WorkoutOrigin
    source_workout_id: UUID | None = None
    like_count: int
    exercises: list[ExerciseResponse]
    created_at: datetime


class LikeResponse(CamelModel):
    id: UUID
    user_id: str
    workout_id: UUID
    created_at: datetime
