"""User Schemas: auth get-or-create body, partial profile update, user response."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.schemas import CamelModel


class AuthRequest(CamelModel):
    """POST /auth body: identity-provider id plus initial profile."""
    user_id: str = Field(min_length=1)
    name: str
    avatar: str | None = None
    email: str | None = None


class ProfileUpdate(CamelModel):
    """PATCH /auth/{id} body. Only the keys present in the request are applied."""
    avatar: str | None = None
    email: str | None = None
    name: str | None = None
    user_id: str | None = Field(None, min_length=1)
    experience: str | None = None
    goal: str | None = None
    height: float | None = Field(None, gt=0)
    public_profile: bool | None = None
    weight: float | None = Field(None, gt=0)


class UserResponse(CamelModel):
    id: UUID
    user_id: str
    name: str
    avatar: str | None = None
    email: str | None = None
    experience: str | None = None
    goal: str | None = None
    height: float | None = None
    weight: float | None = None
    public_profile: bool
    created_at: datetime
    updated_at: datetime
