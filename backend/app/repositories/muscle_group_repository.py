"""Muscle Group Repository: read-only access to the seeded reference list."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.muscle_group import MuscleGroup


class MuscleGroupRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[MuscleGroup]:
        result = await self.db.execute(
            select(MuscleGroup).order_by(MuscleGroup.name.asc()),
        )
        return list(result.scalars().all())
