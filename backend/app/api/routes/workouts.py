"""Workout Routes: authoring, AI generation, listing, likes, copies and deletion.

Invariants:
    - /workout/exercise/{id} and /workout/ai declared before /workout/{workout_id}
      routes of the same method so literal segments win
    - Path ids are UUIDs; malformed ids are 400 validation errors
    - Deletes return 204 with an empty body
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.deps import get_ai_workout_service, get_workout_service
from app.core.domain_types import Visibility
from app.schemas.workout import (
    LikeResponse, WorkoutAIRequest, WorkoutCopyRequest, WorkoutCreate,
    WorkoutResponse,
)
from app.services.workout_service import WorkoutService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/workout", tags=["workouts"])


@router.post(
    "", response_model=WorkoutResponse, status_code=status.HTTP_201_CREATED,
)
async def create_workout(
    body: WorkoutCreate,
    service: WorkoutService = Depends(get_workout_service),
):
    """Create a workout with its exercises."""
    return await service.create_workout(
        body.user_id, body.name, body.visibility, body.exercises,
    )


@router.post(
    "/ai", response_model=WorkoutResponse, status_code=status.HTTP_201_CREATED,
)
async def create_workout_ai(
    body: WorkoutAIRequest,
    service: WorkoutService = Depends(get_ai_workout_service),
):
    """Generate a workout from a training profile and store it."""
    return await service.generate_workout_ai(
        body.user_id,
        objective=body.objective,
        training_time=body.training_time,
        experience_level=body.experience_level,
        frequency=body.frequency,
        duration=body.duration,
        location=body.location,
        equipments=body.equipments,
        has_physical_limitations=body.has_physical_limitations,
        limitation_description=body.limitation_description,
        preferred_training_style=body.preferred_training_style,
        nutrition=body.nutrition,
        sleep_quality=body.sleep_quality,
    )


@router.get("", response_model=list[WorkoutResponse])
async def list_workouts(
    user_id: str | None = Query(None, alias="userId"),
    visibility: Visibility | None = Query(None),
    service: WorkoutService = Depends(get_workout_service),
):
    """List a user's workouts, or the public catalogue without userId."""
    return await service.list_workouts(user_id=user_id, visibility=visibility)


@router.delete(
    "/exercise/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_exercise(
    exercise_id: UUID,
    service: WorkoutService = Depends(get_workout_service),
):
    await service.delete_exercise(exercise_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{workout_id}", response_model=WorkoutResponse)
async def get_workout(
    workout_id: UUID,
    service: WorkoutService = Depends(get_workout_service),
):
    return await service.get_workout(workout_id)


@router.post("/{workout_id}/user/{user_id}/like", response_model=LikeResponse)
async def like_workout(
    workout_id: UUID,
    user_id: str,
    service: WorkoutService = Depends(get_workout_service),
):
    """Like a workout. Liking twice returns the existing like."""
    return await service.like_workout(workout_id, user_id)


@router.delete(
    "/{workout_id}/user/{user_id}/like",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def unlike_workout(
    workout_id: UUID,
    user_id: str,
    service: WorkoutService = Depends(get_workout_service),
):
    await service.unlike_workout(workout_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{workout_id}/copy",
    response_model=WorkoutResponse,
    status_code=status.HTTP_201_CREATED,
)
async def copy_workout(
    workout_id: UUID,
    body: WorkoutCopyRequest,
    service: WorkoutService = Depends(get_workout_service),
):
    """Copy a workout, with its exercises, into another user's library."""
    return await service.copy_workout(workout_id, body.user_id)


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout(
    workout_id: UUID,
    service: WorkoutService = Depends(get_workout_service),
):
    await service.delete_workout(workout_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
