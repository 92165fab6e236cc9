"""Repositories for auth users and profiles."""

from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.atelier.models import AuthUser, Profile, UserRole
from src.atelier.models.base import utc_now
from src.atelier.repositories.base import BaseRepository


class AuthUserRepository(BaseRepository[AuthUser]):
    """Repository for sign-in credentials."""

    model = AuthUser

    async def get_by_email(self, email: str) -> AuthUser | None:
        result = await self.session.execute(select(AuthUser).where(AuthUser.email == email))
        return result.scalar_one_or_none()


class ProfileRepository(BaseRepository[Profile]):
    """Repository for role/credit profiles."""

    model = Profile

    async def list_by_role(self, role: UserRole) -> list[Profile]:
        return await self.list_where(Profile.role == role.value, order_by=Profile.created_at)

    async def debit_points(self, profile_id: UUID, amount: int) -> bool:
        """Subtract ``amount`` only if the balance covers it.

        A single conditional UPDATE, so two concurrent debits cannot both
        pass a stale balance check. Returns False when no row was updated.
        """
        result = await self.session.execute(
            update(Profile)
            .where(Profile.id == profile_id, Profile.points_balance >= amount)
            .values(
                points_balance=Profile.points_balance - amount,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
