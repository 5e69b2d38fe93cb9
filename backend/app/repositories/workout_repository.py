"""Workout Repository: persistence for workouts, exercises and likes.

Invariants:
    - get() always returns exercises (ordered) and likes loaded, refreshing
      any instance already in the identity map
    - delete() removes completion records, sessions, likes and exercises before
      the workout itself, and detaches copies that point at it
    - delete_exercise() never touches the parent workout row
"""

import uuid

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import Visibility
from app.models.workout import Exercise, Workout, WorkoutLike
from app.models.workout_session import SessionExercise, WorkoutSession


class WorkoutRepository:
    """Data access for the workout aggregate."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, workout: Workout) -> Workout:
        self.db.add(workout)
        await self.db.flush()
        return workout

    async def get(self, workout_id: uuid.UUID) -> Workout | None:
        result = await self.db.execute(
            select(Workout)
            .where(Workout.id == workout_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def search(
        self,
        user_id: str | None = None,
        visibility: Visibility | None = None,
    ) -> list[Workout]:
        query = select(Workout).order_by(Workout.created_at.desc())
        if user_id is not None:
            query = query.where(Workout.user_id == user_id)
        if visibility is not None:
            query = query.where(Workout.visibility == visibility.value)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def delete(self, workout_id: uuid.UUID) -> None:
        session_ids = select(WorkoutSession.id).where(
            WorkoutSession.workout_id == workout_id,
        )
        await self.db.execute(
            delete(SessionExercise)
            .where(SessionExercise.session_id.in_(session_ids)),
        )
        await self.db.execute(
            delete(WorkoutSession).where(WorkoutSession.workout_id == workout_id),
        )
        await self.db.execute(
            delete(WorkoutLike).where(WorkoutLike.workout_id == workout_id),
        )
        await self.db.execute(
            delete(Exercise).where(Exercise.workout_id == workout_id),
        )
        await self.db.execute(
            update(Workout)
            .where(Workout.source_workout_id == workout_id)
            .values(source_workout_id=None),
        )
        await self.db.execute(delete(Workout).where(Workout.id == workout_id))

    # ─── Exercises ──────────────────────────────────────────────

    async def get_exercise(self, exercise_id: uuid.UUID) -> Exercise | None:
        result = await self.db.execute(
            select(Exercise).where(Exercise.id == exercise_id),
        )
        return result.scalar_one_or_none()

    async def delete_exercise(self, exercise_id: uuid.UUID) -> None:
        await self.db.execute(
            delete(SessionExercise)
            .where(SessionExercise.exercise_id == exercise_id),
        )
        await self.db.execute(delete(Exercise).where(Exercise.id == exercise_id))

    # ─── Likes ──────────────────────────────────────────────────

    async def get_like(
        self, workout_id: uuid.UUID, user_id: str,
    ) -> WorkoutLike | None:
        result = await self.db.execute(
            select(WorkoutLike)
            .where(WorkoutLike.workout_id == workout_id)
            .where(WorkoutLike.user_id == user_id),
        )
        return result.scalar_one_or_none()

    async def add_like(self, like: WorkoutLike) -> WorkoutLike:
        self.db.add(like)
        await self.db.flush()
        return like

    async def delete_like(self, like_id: uuid.UUID) -> None:
        await self.db.execute(delete(WorkoutLike).where(WorkoutLike.id == like_id))
