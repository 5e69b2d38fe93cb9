"""Initial schema: users, workouts, exercises, likes, sessions, muscle groups.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
import uuid
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MUSCLE_GROUPS = [
    "Abdominals", "Back", "Biceps", "Calves", "Chest", "Forearms",
    "Glutes", "Hamstrings", "Quadriceps", "Shoulders", "Trapezius", "Triceps",
]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("avatar", sa.Text, nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("experience", sa.String(50), nullable=True),
        sa.Column("goal", sa.String(255), nullable=True),
        sa.Column("height", sa.Float, nullable=True),
        sa.Column("weight", sa.Float, nullable=True),
        sa.Column("public_profile", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "workouts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False, index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("visibility", sa.String(20), nullable=False, server_default="PUBLIC"),
        sa.Column("origin", sa.String(20), nullable=False, server_default="MANUAL"),
        sa.Column(
            "source_workout_id", UUID(as_uuid=True),
            sa.ForeignKey("workouts.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "exercises",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "workout_id", UUID(as_uuid=True),
            sa.ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("series", sa.String(20), nullable=False),
        sa.Column("repetitions", sa.String(50), nullable=False),
        sa.Column("weight", sa.String(50), nullable=False),
        sa.Column("rest_time", sa.String(50), nullable=False),
        sa.Column("video_url", sa.Text, nullable=False),
        sa.Column("instructions", sa.Text, nullable=False),
    )

    op.create_table(
        "workout_likes",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column(
            "workout_id", UUID(as_uuid=True),
            sa.ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "workout_id", name="uq_workout_likes_user_workout"),
    )

    op.create_table(
        "workout_sessions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "workout_id", UUID(as_uuid=True),
            sa.ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="CREATED"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "session_exercises",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "session_id", UUID(as_uuid=True),
            sa.ForeignKey("workout_sessions.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column(
            "exercise_id", UUID(as_uuid=True),
            sa.ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        sa.Column("completed", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("weight", sa.String(50), nullable=True),
        sa.Column("repetitions", sa.String(50), nullable=True),
        sa.Column("series", sa.String(20), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    muscle_groups = op.create_table(
        "muscle_groups",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
    )
    op.bulk_insert(
        muscle_groups,
        [{"id": uuid.uuid4(), "name": name} for name in MUSCLE_GROUPS],
    )


def downgrade() -> None:
    op.drop_table("muscle_groups")
    op.drop_table("session_exercises")
    op.drop_table("workout_sessions")
    op.drop_table("workout_likes")
    op.drop_table("exercises")
    op.drop_table("workouts")
    op.drop_table("users")
