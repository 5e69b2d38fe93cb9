"""Auth Routes: get-or-create by identity-provider id, profile read and update."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_auth_service
from app.schemas.user import AuthRequest, ProfileUpdate, UserResponse
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("", response_model=UserResponse)
async def authenticate(
    body: AuthRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
):
    """201 when the user is new, 200 with the stored profile otherwise."""
    user, created = await service.get_or_create(
        body.user_id, body.name, body.avatar, body.email,
    )
    if created:
        response.status_code = status.HTTP_201_CREATED
    return user


@router.get("/{id}", response_model=UserResponse)
async def get_user(
    id: UUID, service: AuthService = Depends(get_auth_service),
):
    return await service.get_user(id)


@router.patch("/{id}", response_model=UserResponse)
async def update_profile(
    id: UUID,
    body: ProfileUpdate,
    service: AuthService = Depends(get_auth_service),
):
    return await service.update_profile(id, body.model_dump(exclude_unset=True))
