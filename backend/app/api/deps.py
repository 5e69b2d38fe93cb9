"""API Dependencies: per-request services and the shared plan generator.

Invariants:
    - Every service is built on the request's AsyncSession from get_db
    - One ResilientAnthropicClient per process, created on first AI request
    - Tests replace get_db / get_plan_generator through app.dependency_overrides
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.protocols import PlanGenerator
from app.infrastructure.anthropic_client import ResilientAnthropicClient
from app.infrastructure.database import get_db
from app.services.auth_service import AuthService
from app.services.muscle_group_service import MuscleGroupService
from app.services.plan_generator import AnthropicPlanGenerator
from app.services.session_service import SessionService
from app.services.workout_service import WorkoutService

_plan_generator: AnthropicPlanGenerator | None = None


def get_plan_generator() -> PlanGenerator:
    """Singleton generator: AsyncAnthropic keeps its connection pool across requests."""
    global _plan_generator
    if _plan_generator is None:
        settings = get_settings()
        client = ResilientAnthropicClient(
            api_key=settings.anthropic_api_key,
            max_retries=settings.anthropic_max_retries,
            base_delay_ms=settings.anthropic_base_delay_ms,
            max_delay_ms=settings.anthropic_max_delay_ms,
            timeout_seconds=settings.anthropic_timeout_seconds,
        )
        _plan_generator = AnthropicPlanGenerator(
            client, settings.plan_model, settings.plan_max_tokens,
        )
    return _plan_generator


def get_workout_service(db: AsyncSession = Depends(get_db)) -> WorkoutService:
    return WorkoutService(db, copy_visibility=get_settings().copy_visibility)


def get_ai_workout_service(
    db: AsyncSession = Depends(get_db),
    generator: PlanGenerator = Depends(get_plan_generator),
) -> WorkoutService:
    return WorkoutService(
        db, generator=generator,
        copy_visibility=get_settings().copy_visibility,
    )


def get_session_service(db: AsyncSession = Depends(get_db)) -> SessionService:
    return SessionService(
        db, require_all_exercises=get_settings().session_require_all_exercises,
    )


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_muscle_group_service(
    db: AsyncSession = Depends(get_db),
) -> MuscleGroupService:
    return MuscleGroupService(db)
