"""ORM Models: SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Workout and WorkoutSession are aggregate roots; Exercise, WorkoutLike and
      SessionExercise never outlive them

Design Decisions:
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.user import User  # noqa: F401
from app.models.workout import Workout, Exercise, WorkoutLike  # noqa: F401
from app.models.workout_session import WorkoutSession, SessionExercise  # noqa: F401
from app.models.muscle_group import MuscleGroup  # noqa: F401
