"""Account models - credentials and the role/credit profile."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from src.atelier.models.base import utc_now
from src.atelier.models.enums import UserRole


class AuthUser(SQLModel, table=True):
    """Sign-in credentials. One per profile, sharing its id."""

    __tablename__ = "auth_users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    hashed_password: str = Field(max_length=255)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)


class Profile(SQLModel, table=True):
    """Role and credit balance of a user."""

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("points_balance >= 0", name="ck_profiles_points_balance_non_negative"),
    )

    id: UUID = Field(foreign_key="auth_users.id", primary_key=True, ondelete="CASCADE")
    email: str = Field(max_length=255)
    role: str = Field(default=UserRole.CLIENT.value, max_length=50, index=True)
    points_balance: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
