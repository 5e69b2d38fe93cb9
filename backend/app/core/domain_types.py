"""Domain Types: enums for every stored state, so no raw string matching in services.

Invariants:
    - Visibility, WorkoutOrigin and SessionStatus values are what the DB stores
      and what the API returns
    - str Enums serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

WorkoutId = NewType("WorkoutId", UUID)
ExerciseId = NewType("ExerciseId", UUID)
SessionId = NewType("SessionId", UUID)
ExternalUserId = NewType("ExternalUserId", str)   # identity-provider id


# ─── Enums ───────────────────────────────────────────────────────

class Visibility(str, Enum):
    """Whether a workout is discoverable by users other than its owner."""
    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


class WorkoutOrigin(str, Enum):
    """How a workout came to exist."""
    MANUAL = "MANUAL"
    AI = "AI"
    COPY = "COPY"


class SessionStatus(str, Enum):
    """Workout session lifecycle: CREATED -> IN_PROGRESS -> COMPLETED (terminal)."""
    CREATED = "CREATED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
