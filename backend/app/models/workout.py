"""Workout ORM: the workout aggregate with its ordered exercises and likes.

Invariants:
    - A workout belongs to exactly one owner (external user id, no FK to users)
    - exercises ordered by position; created with at least one (enforced by service)
    - visibility and origin hold Visibility / WorkoutOrigin values
    - at most one WorkoutLike per (user_id, workout_id): uq_workout_likes_user_workout
    - source_workout_id set only on copies; cleared when the source is deleted

Design Decisions:
    - ondelete=CASCADE on child FKs for PostgreSQL; the repository also deletes
      children explicitly so SQLite (tests) behaves the same
    - exercises/likes loaded with selectin: responses always need both
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Integer, DateTime, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.core.domain_types import Visibility, WorkoutOrigin
from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Workout(Base):
    """Workout aggregate root: a training plan owned by one user."""
    __tablename__ = "workouts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    visibility: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Visibility.PUBLIC.value,
    )
    origin: Mapped[str] = mapped_column(
        String(20), nullable=False, default=WorkoutOrigin.MANUAL.value,
    )
    source_workout_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("workouts.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    exercises: Mapped[list["Exercise"]] = relationship(
        "Exercise", back_populates="workout",
        order_by="Exercise.position",
        cascade="all, delete-orphan", passive_deletes=True,
        lazy="selectin",
    )
    likes: Mapped[list["WorkoutLike"]] = relationship(
        "WorkoutLike", back_populates="workout",
        cascade="all, delete-orphan", passive_deletes=True,
        lazy="selectin",
    )

    @property
    def like_count(self) -> int:
        return len(self.likes)


class Exercise(Base):
    """One prescribed movement inside a workout."""
    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    workout_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("workouts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Free-form strings: units vary ("60kg", "90s", "8-12")
    series: Mapped[str] = mapped_column(String(20), nullable=False)
    repetitions: Mapped[str] = mapped_column(String(50), nullable=False)
    weight: Mapped[str] = mapped_column(String(50), nullable=False)
    rest_time: Mapped[str] = mapped_column(String(50), nullable=False)
    video_url: Mapped[str] = mapped_column(Text, nullable=False)
    instructions: Mapped[str] = mapped_column(Text, nullable=False)

    workout: Mapped["Workout"] = relationship(
        "Workout", back_populates="exercises",
    )


class WorkoutLike(Base):
    """A user's like of a workout."""
    __tablename__ = "workout_likes"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "workout_id", name="uq_workout_likes_user_workout",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    workout_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("workouts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    workout: Mapped["Workout"] = relationship(
        "Workout", back_populates="likes",
    )
