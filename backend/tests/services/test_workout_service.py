"""Workout Service: verifies workout use cases against an in-memory database.

Invariants:
    - create/get round-trip keeps every field and the exercise order
    - listing without a user only shows PUBLIC workouts
    - liking twice keeps a single like; unliking a missing like is NotFound
    - copies are independent deep clones owned by the new user
    - deleting a workout removes exercises, likes and sessions; copies survive
    - AI generation stores an AI-origin workout; generator failures are 502s
"""

from uuid import uuid4

import pytest

from app.core.domain_types import SessionStatus, Visibility, WorkoutOrigin
from app.core.errors import ErrorKind, ExternalServiceError, NotFoundError, ValidationError
from app.schemas.workout import ExerciseCreate, ExerciseResponse
from app.services.session_service import SessionService
from app.services.workout_service import WorkoutService

from tests.services.factories import AI_PROFILE, FakePlanGenerator


def _exercise(name: str, series: str = "4") -> ExerciseCreate:
    return ExerciseCreate(
        name=name,
        series=series,
        repetitions="10",
        weight="80kg",
        rest_time="90s",
        video_url=f"https://videos.example.com/{name.lower()}",
        instructions="Controlled tempo",
    )


async def _create(
    service: WorkoutService,
    user_id: str = "user-1",
    name: str = "Leg Day",
    visibility: Visibility = Visibility.PUBLIC,
    exercises: list[ExerciseCreate] | None = None,
):
    return await service.create_workout(
        user_id, name, visibility,
        exercises or [_exercise("Squat"), _exercise("Lunge", "3")],
    )


def _exercise_fields(exercises) -> list[dict]:
    return [
        ExerciseResponse.model_validate(e).model_dump(exclude={"id"})
        for e in exercises
    ]


# ==============================================================================
# Create / get / list
# ==============================================================================


async def test_create_round_trip(test_db):
    service = WorkoutService(test_db)
    created = await _create(service)

    fetched = await service.get_workout(created.id)

    assert fetched.name == "Leg Day"
    assert fetched.user_id == "user-1"
    assert fetched.visibility == "PUBLIC"
    assert fetched.origin == WorkoutOrigin.MANUAL.value
    assert fetched.source_workout_id is None
    assert fetched.like_count == 0
    assert _exercise_fields(fetched.exercises) == [
        _exercise("Squat").model_dump(), _exercise("Lunge", "3").model_dump(),
    ]


async def test_create_without_exercises_rejected(test_db):
    service = WorkoutService(test_db)
    with pytest.raises(ValidationError) as exc:
        await service.create_workout("user-1", "Leg Day", None, [])
    assert exc.value.errors[0].field == "exercises"


async def test_missing_visibility_defaults_to_public(test_db):
    service = WorkoutService(test_db)
    workout = await service.create_workout(
        "user-1", "Leg Day", None, [_exercise("Squat")],
    )
    assert workout.visibility == "PUBLIC"


async def test_get_unknown_workout(test_db):
    with pytest.raises(NotFoundError) as exc:
        await WorkoutService(test_db).get_workout(uuid4())
    assert exc.value.message == "Workout not found"


async def test_list_by_owner_includes_private(test_db):
    service = WorkoutService(test_db)
    public = await _create(service, name="Public day")
    private = await _create(service, name="Private day", visibility=Visibility.PRIVATE)
    await _create(service, user_id="user-2", name="Someone else")

    ids = {w.id for w in await service.list_workouts(user_id="user-1")}

    assert ids == {public.id, private.id}


async def test_list_by_owner_and_visibility(test_db):
    service = WorkoutService(test_db)
    await _create(service, name="Public day")
    private = await _create(service, name="Private day", visibility=Visibility.PRIVATE)

    result = await service.list_workouts(
        user_id="user-1", visibility=Visibility.PRIVATE,
    )

    assert [w.id for w in result] == [private.id]


async def test_list_without_user_only_public(test_db):
    service = WorkoutService(test_db)
    public = await _create(service, name="Public day")
    await _create(service, name="Private day", visibility=Visibility.PRIVATE)

    assert [w.id for w in await service.list_workouts()] == [public.id]
    assert await service.list_workouts(visibility=Visibility.PRIVATE) == []


# ==============================================================================
# Likes
# ==============================================================================


async def test_like_twice_keeps_one_like(test_db):
    service = WorkoutService(test_db)
    workout = await _create(service)

    first = await service.like_workout(workout.id, "user-2")
    second = await service.like_workout(workout.id, "user-2")

    assert first.id == second.id
    assert (await service.get_workout(workout.id)).like_count == 1


async def test_like_count_counts_distinct_users(test_db):
    service = WorkoutService(test_db)
    workout = await _create(service)

    await service.like_workout(workout.id, "user-2")
    await service.like_workout(workout.id, "user-3")

    assert (await service.get_workout(workout.id)).like_count == 2


async def test_like_unknown_workout(test_db):
    with pytest.raises(NotFoundError):
        await WorkoutService(test_db).like_workout(uuid4(), "user-2")


async def test_unlike(test_db):
    service = WorkoutService(test_db)
    workout = await _create(service)
    await service.like_workout(workout.id, "user-2")

    await service.unlike_workout(workout.id, "user-2")

    assert (await service.get_workout(workout.id)).like_count == 0
    with pytest.raises(NotFoundError):
        await service.unlike_workout(workout.id, "user-2")


# ==============================================================================
# Copy
# ==============================================================================


async def test_copy_is_owned_by_new_user(test_db):
    service = WorkoutService(test_db)
    source = await _create(service)
    await service.like_workout(source.id, "user-3")

    copy = await service.copy_workout(source.id, "user-2")

    assert copy.id != source.id
    assert copy.user_id == "user-2"
    assert copy.name == source.name
    assert copy.origin == WorkoutOrigin.COPY.value
    assert copy.source_workout_id == source.id
    assert copy.visibility == "PRIVATE"
    assert copy.like_count == 0
    assert _exercise_fields(copy.exercises) == _exercise_fields(source.exercises)
    assert {e.id for e in copy.exercises}.isdisjoint(
        {e.id for e in source.exercises},
    )


async def test_copy_visibility_is_configurable(test_db):
    service = WorkoutService(test_db, copy_visibility=Visibility.PUBLIC)
    source = await _create(service, visibility=Visibility.PRIVATE)

    copy = await service.copy_workout(source.id, "user-2")

    assert copy.visibility == "PUBLIC"


async def test_copy_unknown_workout(test_db):
    with pytest.raises(NotFoundError):
        await WorkoutService(test_db).copy_workout(uuid4(), "user-2")


# ==============================================================================
# Delete
# ==============================================================================


async def test_delete_workout_cascades(test_db):
    service = WorkoutService(test_db)
    sessions = SessionService(test_db)
    workout = await _create(service)
    await service.like_workout(workout.id, "user-2")
    session = await sessions.create_session("user-1", workout.id)

    await service.delete_workout(workout.id)

    with pytest.raises(NotFoundError):
        await service.get_workout(workout.id)
    with pytest.raises(NotFoundError):
        await sessions.get_session(session.id)
    assert await sessions.get_sessions_by_workout(workout.id) == []


async def test_delete_source_keeps_copy(test_db):
    service = WorkoutService(test_db)
    source = await _create(service)
    copy = await service.copy_workout(source.id, "user-2")

    await service.delete_workout(source.id)

    survivor = await service.get_workout(copy.id)
    assert survivor.source_workout_id is None
    assert len(survivor.exercises) == 2


async def test_delete_unknown_workout(test_db):
    with pytest.raises(NotFoundError):
        await WorkoutService(test_db).delete_workout(uuid4())


async def test_delete_exercise_keeps_workout(test_db):
    service = WorkoutService(test_db)
    workout = await _create(service)
    squat_id = workout.exercises[0].id

    await service.delete_exercise(squat_id)

    remaining = await service.get_workout(workout.id)
    assert [e.name for e in remaining.exercises] == ["Lunge"]


async def test_delete_exercise_removes_session_records(test_db):
    service = WorkoutService(test_db)
    sessions = SessionService(test_db)
    workout = await _create(service)
    squat_id, lunge_id = (e.id for e in workout.exercises)
    session = await sessions.create_session("user-1", workout.id)

    await service.delete_exercise(squat_id)

    reloaded = await sessions.get_session(session.id)
    assert [r.exercise_id for r in reloaded.exercises] == [lunge_id]


async def test_delete_exercise_rewrites_completed_session(test_db):
    service = WorkoutService(test_db)
    sessions = SessionService(test_db)
    workout = await _create(service)
    squat_id, lunge_id = (e.id for e in workout.exercises)
    session = await sessions.create_session("user-1", workout.id)
    await sessions.mark_exercise(session.id, squat_id, completed=True)
    await sessions.complete_session(session.id)

    await service.delete_exercise(squat_id)

    reloaded = await sessions.get_session(session.id)
    assert reloaded.status == SessionStatus.COMPLETED.value
    assert [(r.exercise_id, r.completed) for r in reloaded.exercises] == [
        (lunge_id, False),
    ]


async def test_delete_unknown_exercise(test_db):
    with pytest.raises(NotFoundError) as exc:
        await WorkoutService(test_db).delete_exercise(uuid4())
    assert exc.value.message == "Exercise not found"


# ==============================================================================
# AI generation
# ==============================================================================


async def test_generate_workout_ai_stores_plan(test_db):
    generator = FakePlanGenerator()
    service = WorkoutService(test_db, generator=generator)

    workout = await service.generate_workout_ai("user-1", **AI_PROFILE)

    assert workout.origin == WorkoutOrigin.AI.value
    assert workout.user_id == "user-1"
    assert workout.name == "Upper body strength"
    assert [e.series for e in workout.exercises] == ["4", "3"]
    assert generator.calls[0]["objective"] == "hypertrophy"
    assert generator.calls[0]["equipments"] == ["dumbbells"]


async def test_generator_crash_becomes_external_service_error(test_db):
    generator = FakePlanGenerator()
    generator.error = RuntimeError("socket closed")
    service = WorkoutService(test_db, generator=generator)

    with pytest.raises(ExternalServiceError) as exc:
        await service.generate_workout_ai("user-1", **AI_PROFILE)
    assert exc.value.kind == ErrorKind.EXTERNAL_SERVICE
    assert "socket closed" not in exc.value.message
    assert await service.list_workouts(user_id="user-1") == []


async def test_unusable_plan_stores_nothing(test_db):
    service = WorkoutService(
        test_db, generator=FakePlanGenerator({"name": "x", "exercises": []}),
    )
    with pytest.raises(ExternalServiceError):
        await service.generate_workout_ai("user-1", **AI_PROFILE)
    assert await service.list_workouts(user_id="user-1") == []


async def test_generation_without_generator(test_db):
    with pytest.raises(ExternalServiceError):
        await WorkoutService(test_db).generate_workout_ai("user-1", **AI_PROFILE)
