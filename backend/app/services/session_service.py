"""Workout Session Service: create sessions, mark exercises, complete sessions.

Invariants:
    - create_session makes one record per exercise of the source workout, all
      completed=False, status CREATED
    - mark_exercise only touches records of that session; COMPLETED sessions
      reject it with ConflictError
    - complete_session is idempotent: a completed session is returned unchanged
    - status/readiness rules live in core/session_rules.py (pure)
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import SessionStatus
from app.core.errors import NotFoundError
from app.core.session_rules import check_completion, derive_status, ensure_mutable
from app.models.workout_session import SessionExercise, WorkoutSession
from app.repositories.session_repository import SessionRepository
from app.repositories.workout_repository import WorkoutRepository

logger = logging.getLogger(__name__)


class SessionService:
    """Workout session use cases."""

    def __init__(self, db: AsyncSession, require_all_exercises: bool = False):
        self.db = db
        self.sessions = SessionRepository(db)
        self.workouts = WorkoutRepository(db)
        self.require_all_exercises = require_all_exercises

    async def create_session(
        self, user_id: str, workout_id: uuid.UUID,
    ) -> WorkoutSession:
        workout = await self.workouts.get(workout_id)
        if workout is None:
            raise NotFoundError("Workout", workout_id)

        session = WorkoutSession(
            user_id=user_id,
            workout_id=workout.id,
            status=SessionStatus.CREATED.value,
            exercises=[
                SessionExercise(
                    exercise_id=exercise.id, position=position, completed=False,
                )
                for position, exercise in enumerate(workout.exercises)
            ],
        )
        await self.sessions.add(session)
        await self.db.commit()
        logger.info(
            "Workout session started",
            extra={
                "session_id": session.id,
                "workout_id": workout.id,
                "user_id": user_id,
            },
        )
        return await self.get_session(session.id)

    async def get_session(self, session_id: uuid.UUID) -> WorkoutSession:
        session = await self.sessions.get(session_id)
        if session is None:
            raise NotFoundError("Workout session", session_id)
        return session

    async def get_sessions_by_workout(
        self, workout_id: uuid.UUID,
    ) -> list[WorkoutSession]:
        return await self.sessions.list_by_workout(workout_id)

    async def mark_exercise(
        self,
        session_id: uuid.UUID,
        exercise_id: uuid.UUID,
        completed: bool,
        weight: str | None = None,
        repetitions: str | None = None,
        series: str | None = None,
    ) -> WorkoutSession:
        """Update one completion record and recompute the session status."""
        session = await self.get_session(session_id)
        ensure_mutable(SessionStatus(session.status))

        record = next(
            (r for r in session.exercises if r.exercise_id == exercise_id), None,
        )
        if record is None:
            raise NotFoundError("Exercise", exercise_id)

        record.completed = completed
        if weight is not None:
            record.weight = weight
        if repetitions is not None:
            record.repetitions = repetitions
        if series is not None:
            record.series = series
        record.updated_at = datetime.now(timezone.utc)

        session.status = derive_status(
            SessionStatus(session.status), session.completed_flags,
        ).value
        await self.db.commit()
        return session

    async def complete_session(self, session_id: uuid.UUID) -> WorkoutSession:
        session = await self.get_session(session_id)
        if session.status == SessionStatus.COMPLETED.value:
            return session

        check_completion(session.completed_flags, self.require_all_exercises)
        session.status = SessionStatus.COMPLETED.value
        session.completed_at = datetime.now(timezone.utc)
        await self.db.commit()
        logger.info("Workout session completed", extra={"session_id": session.id})
        return session
