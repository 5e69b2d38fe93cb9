"""Workout Service: authoring, listing, liking, copying, deleting and AI generation.

Invariants:
    - A workout is never persisted without exercises, even when called directly
    - Create, copy, delete and AI generation each commit exactly once
      (a half-copied workout is never visible)
    - Duplicate like returns the stored like; a lost insert race re-reads it
    - Without user_id, listing only returns PUBLIC workouts
    - Generator failures of any kind surface as ExternalServiceError

Design Decisions:
    - Copy visibility comes from settings (copy_visibility), not from the source
    - Workouts are re-read after commit so responses carry loaded likes/exercises
"""

import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import Visibility, WorkoutOrigin
from app.core.errors import ExternalServiceError, NotFoundError, ValidationError
from app.core.protocols import PlanGenerator
from app.core.validation_messages import FIELD_MESSAGES
from app.infrastructure.anthropic_client import SERVICE_NAME
from app.models.workout import Exercise, Workout, WorkoutLike
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.workout import ExerciseCreate
from app.services.plan_generator import normalize_plan

logger = logging.getLogger(__name__)


class WorkoutService:
    """Workout use cases. One instance per request (wraps the request's DB session)."""

    def __init__(
        self,
        db: AsyncSession,
        generator: PlanGenerator | None = None,
        copy_visibility: Visibility = Visibility.PRIVATE,
    ):
        self.db = db
        self.workouts = WorkoutRepository(db)
        self.generator = generator
        self.copy_visibility = copy_visibility

    async def create_workout(
        self,
        user_id: str,
        name: str,
        visibility: Visibility | None,
        exercises: list[ExerciseCreate],
        origin: WorkoutOrigin = WorkoutOrigin.MANUAL,
    ) -> Workout:
        """Persist a workout with its exercises in one commit."""
        if not exercises:
            raise ValidationError.for_field(
                "exercises", FIELD_MESSAGES["exercises"]["too_short"],
            )
        workout = Workout(
            user_id=user_id,
            name=name,
            visibility=Visibility(visibility or Visibility.PUBLIC).value,
            origin=origin.value,
            exercises=[
                _exercise_from_schema(e, position)
                for position, e in enumerate(exercises)
            ],
            likes=[],
        )
        await self.workouts.add(workout)
        await self.db.commit()
        logger.info(
            "Workout created",
            extra={"workout_id": workout.id, "user_id": user_id},
        )
        return await self.get_workout(workout.id)

    async def get_workout(self, workout_id: uuid.UUID) -> Workout:
        workout = await self.workouts.get(workout_id)
        if workout is None:
            raise NotFoundError("Workout", workout_id)
        return workout

    async def list_workouts(
        self,
        user_id: str | None = None,
        visibility: Visibility | None = None,
    ) -> list[Workout]:
        """User's own workouts when user_id is given, public catalogue otherwise."""
        if user_id is None:
            if visibility == Visibility.PRIVATE:
                return []
            visibility = Visibility.PUBLIC
        return await self.workouts.search(user_id=user_id, visibility=visibility)

    async def like_workout(
        self, workout_id: uuid.UUID, user_id: str,
    ) -> WorkoutLike:
        await self.get_workout(workout_id)
        existing = await self.workouts.get_like(workout_id, user_id)
        if existing is not None:
            return existing

        like = WorkoutLike(workout_id=workout_id, user_id=user_id)
        try:
            await self.workouts.add_like(like)
            await self.db.commit()
        except IntegrityError:
            # concurrent like for the same (user, workout) won the insert
            await self.db.rollback()
            existing = await self.workouts.get_like(workout_id, user_id)
            if existing is None:
                raise
            return existing
        logger.info(
            "Workout liked", extra={"workout_id": workout_id, "user_id": user_id},
        )
        return like

    async def unlike_workout(self, workout_id: uuid.UUID, user_id: str) -> None:
        like = await self.workouts.get_like(workout_id, user_id)
        if like is None:
            raise NotFoundError("Like", f"{workout_id}/{user_id}")
        await self.workouts.delete_like(like.id)
        await self.db.commit()

    async def copy_workout(
        self, workout_id: uuid.UUID, new_owner_user_id: str,
    ) -> Workout:
        """Deep-clone a workout and its exercises for another user."""
        source = await self.get_workout(workout_id)
        copy = Workout(
            user_id=new_owner_user_id,
            name=source.name,
            visibility=self.copy_visibility.value,
            origin=WorkoutOrigin.COPY.value,
            source_workout_id=source.id,
            exercises=[
                Exercise(
                    position=position,
                    name=e.name,
                    series=e.series,
                    repetitions=e.repetitions,
                    weight=e.weight,
                    rest_time=e.rest_time,
                    video_url=e.video_url,
                    instructions=e.instructions,
                )
                for position, e in enumerate(source.exercises)
            ],
            likes=[],
        )
        await self.workouts.add(copy)
        await self.db.commit()
        logger.info(
            f"Workout copied from {source.id}",
            extra={"workout_id": copy.id, "user_id": new_owner_user_id},
        )
        return await self.get_workout(copy.id)

    async def delete_workout(self, workout_id: uuid.UUID) -> None:
        await self.get_workout(workout_id)
        await self.workouts.delete(workout_id)
        await self.db.commit()
        logger.info("Workout deleted", extra={"workout_id": workout_id})

    async def delete_exercise(self, exercise_id: uuid.UUID) -> None:
        exercise = await self.workouts.get_exercise(exercise_id)
        if exercise is None:
            raise NotFoundError("Exercise", exercise_id)
        await self.workouts.delete_exercise(exercise_id)
        await self.db.commit()
        logger.info(
            "Exercise deleted",
            extra={"exercise_id": exercise_id, "workout_id": exercise.workout_id},
        )

    async def generate_workout_ai(
        self,
        user_id: str,
        objective: str,
        training_time: str,
        experience_level: str,
        frequency: str,
        duration: str,
        location: str,
        equipments: list[str],
        has_physical_limitations: bool,
        limitation_description: str | None,
        preferred_training_style: str,
        nutrition: str,
        sleep_quality: str,
    ) -> Workout:
        """Ask the plan generator for a workout and store it like any other."""
        if self.generator is None:
            raise ExternalServiceError(SERVICE_NAME, "generator not configured")
        try:
            raw = await self.generator.generate(
                objective=objective,
                training_time=training_time,
                experience_level=experience_level,
                frequency=frequency,
                duration=duration,
                location=location,
                equipments=equipments,
                has_physical_limitations=has_physical_limitations,
                limitation_description=limitation_description,
                preferred_training_style=preferred_training_style,
                nutrition=nutrition,
                sleep_quality=sleep_quality,
            )
        except ExternalServiceError:
            raise
        except Exception as e:
            logger.error(f"Plan generator crashed: {e}", exc_info=True)
            raise ExternalServiceError(
                SERVICE_NAME, "unexpected generator failure",
            ) from e

        name, exercises = normalize_plan(raw, objective)
        return await self.create_workout(
            user_id, name, Visibility.PUBLIC, exercises,
            origin=WorkoutOrigin.AI,
        )


def _exercise_from_schema(e: ExerciseCreate, position: int) -> Exercise:
    return Exercise(
        position=position,
        name=e.name,
        series=e.series,
        repetitions=e.repetitions,
        weight=e.weight,
        rest_time=e.rest_time,
        video_url=e.video_url,
        instructions=e.instructions,
    )
