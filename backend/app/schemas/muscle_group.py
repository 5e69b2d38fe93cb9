"""Muscle Group Schemas."""

from uuid import UUID

from app.schemas import CamelModel


class MuscleGroupResponse(CamelModel):
    id: UUID
    name: str
