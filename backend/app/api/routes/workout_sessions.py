"""Workout Session Routes: start, read, mark exercises, complete.

Invariants:
    - Router is included before the workouts router: "/workout/session" must not
      be parsed as "/workout/{workout_id}"
    - A COMPLETED session rejects exercise updates with 409
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_session_service
from app.schemas.session import (
    SessionCreate, SessionExerciseUpdate, WorkoutSessionResponse,
)
from app.services.session_service import SessionService

router = APIRouter(prefix="/workout/session", tags=["workout-sessions"])


@router.post(
    "",
    response_model=WorkoutSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(
    body: SessionCreate,
    service: SessionService = Depends(get_session_service),
):
    """Start a session of a workout; every exercise starts not completed."""
    return await service.create_session(body.user_id, body.workout_id)


@router.get("", response_model=list[WorkoutSessionResponse])
async def list_sessions(
    workout_id: UUID = Query(alias="workoutId"),
    service: SessionService = Depends(get_session_service),
):
    return await service.get_sessions_by_workout(workout_id)


@router.get("/{session_id}", response_model=WorkoutSessionResponse)
async def get_session(
    session_id: UUID,
    service: SessionService = Depends(get_session_service),
):
    return await service.get_session(session_id)


@router.patch(
    "/{session_id}/exercises/{exercise_id}",
    response_model=WorkoutSessionResponse,
)
async def mark_exercise(
    session_id: UUID,
    exercise_id: UUID,
    body: SessionExerciseUpdate,
    service: SessionService = Depends(get_session_service),
):
    """Mark one exercise (with optional actual weight/reps/series)."""
    return await service.mark_exercise(
        session_id,
        exercise_id,
        completed=body.completed,
        weight=body.weight,
        repetitions=body.repetitions,
        series=body.series,
    )


@router.post("/{session_id}/complete", response_model=WorkoutSessionResponse)
async def complete_session(
    session_id: UUID,
    service: SessionService = Depends(get_session_service),
):
    """Close the session. Completing twice returns the same record."""
    return await service.complete_session(session_id)
