"""Muscle Group Routes: read-only reference list."""

from fastapi import APIRouter, Depends

from app.api.deps import get_muscle_group_service
from app.schemas.muscle_group import MuscleGroupResponse
from app.services.muscle_group_service import MuscleGroupService

router = APIRouter(prefix="/muscle-group", tags=["muscle-groups"])


@router.get("", response_model=list[MuscleGroupResponse])
async def list_muscle_groups(
    service: MuscleGroupService = Depends(get_muscle_group_service),
):
    return await service.list_muscle_groups()
