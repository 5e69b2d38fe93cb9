"""Workout Session Repository: persistence for sessions and their completion records."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.workout_session import WorkoutSession


class SessionRepository:
    """Data access for the workout session aggregate."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, session: WorkoutSession) -> WorkoutSession:
        self.db.add(session)
        await self.db.flush()
        return session

    async def get(self, session_id: uuid.UUID) -> WorkoutSession | None:
        result = await self.db.execute(
            select(WorkoutSession)
            .where(WorkoutSession.id == session_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def list_by_workout(
        self, workout_id: uuid.UUID,
    ) -> list[WorkoutSession]:
        result = await self.db.execute(
            select(WorkoutSession)
            .where(WorkoutSession.workout_id == workout_id)
            .order_by(WorkoutSession.created_at.asc()),
        )
        return list(result.scalars().all())
