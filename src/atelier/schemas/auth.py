"""Authentication schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from src.atelier.models.enums import UserRole


class RegisterRequest(BaseModel):
    """Sign-up payload. The role is chosen by the registering user."""

    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    role: UserRole = UserRole.CLIENT


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class SessionResponse(BaseModel):
    """A freshly issued session."""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user_id: UUID
    role: UserRole
    dashboard_path: str


class SessionInfo(BaseModel):
    """The caller's current session."""

    user_id: UUID
    email: str
    role: UserRole
    dashboard_path: str
