"""Auth Service: get-or-create users by external id and update profiles.

Invariants:
    - get_or_create never overwrites an existing user's profile
    - at most one user per external id (unique constraint; a lost race re-reads)
    - update_profile applies only the supplied fields
"""

import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, NotFoundError
from app.models.user import User
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

# Columns that cannot be cleared with an explicit null
_NON_NULLABLE = frozenset({"user_id", "name", "public_profile"})


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)

    async def get_or_create(
        self,
        external_user_id: str,
        name: str,
        avatar: str | None = None,
        email: str | None = None,
    ) -> tuple[User, bool]:
        """Return (user, created)."""
        existing = await self.users.get_by_external_id(external_user_id)
        if existing is not None:
            return existing, False

        user = User(
            user_id=external_user_id, name=name, avatar=avatar, email=email,
        )
        try:
            await self.users.add(user)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            existing = await self.users.get_by_external_id(external_user_id)
            if existing is None:
                raise
            return existing, False
        logger.info("User created", extra={"user_id": external_user_id})
        return user, True

    async def get_user(self, id: uuid.UUID) -> User:
        user = await self.users.get(id)
        if user is None:
            raise NotFoundError("User", id)
        return user

    async def update_profile(self, id: uuid.UUID, fields: dict) -> User:
        user = await self.get_user(id)
        changes = {
            key: value for key, value in fields.items()
            if value is not None or key not in _NON_NULLABLE
        }
        try:
            await self.users.update(user, changes)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("User ID is already in use") from None
        return user
