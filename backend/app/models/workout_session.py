"""WorkoutSession ORM: one performed instance of a workout and its completion records.

Invariants:
    - status transitions: CREATED -> IN_PROGRESS -> COMPLETED (rules in core/session_rules.py)
    - one SessionExercise per exercise of the source workout, created with the session
    - completed_at set once, when the session first reaches COMPLETED
    - weight/repetitions/series on SessionExercise are actual-performance overrides,
      NULL until the user supplies them
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.core.domain_types import SessionStatus
from app.core.session_rules import is_ready_to_complete
from app.db.base import Base


class WorkoutSession(Base):
    """Workout session aggregate: owns its completion records."""
    __tablename__ = "workout_sessions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    workout_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("workouts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=SessionStatus.CREATED.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    exercises: Mapped[list["SessionExercise"]] = relationship(
        "SessionExercise", back_populates="session",
        order_by="SessionExercise.position",
        cascade="all, delete-orphan", passive_deletes=True,
        lazy="selectin",
    )

    @property
    def completed_flags(self) -> list[bool]:
        return [record.completed for record in self.exercises]

    @property
    def ready_to_complete(self) -> bool:
        return is_ready_to_complete(self.completed_flags)


class SessionExercise(Base):
    """Per-exercise completion record inside a session."""
    __tablename__ = "session_exercises"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    session_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("workout_sessions.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("exercises.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    weight: Mapped[str | None] = mapped_column(String(50), nullable=True)
    repetitions: Mapped[str | None] = mapped_column(String(50), nullable=True)
    series: Mapped[str | None] = mapped_column(String(20), nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    session: Mapped["WorkoutSession"] = relationship(
        "WorkoutSession", back_populates="exercises",
    )
