"""Muscle Group Service: lists the reference muscle groups."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError
from app.models.muscle_group import MuscleGroup
from app.repositories.muscle_group_repository import MuscleGroupRepository


class MuscleGroupService:
    def __init__(self, db: AsyncSession):
        self.muscle_groups = MuscleGroupRepository(db)

    async def list_muscle_groups(self) -> list[MuscleGroup]:
        groups = await self.muscle_groups.list_all()
        if not groups:
            raise NotFoundError("Muscle group")
        return groups
