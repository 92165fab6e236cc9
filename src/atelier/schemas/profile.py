"""Profile schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from src.atelier.models.enums import UserRole
from src.atelier.schemas.project import ProjectRead


class ProfileRead(BaseModel):
    """Schema for reading a profile."""

    id: UUID
    email: str
    role: UserRole
    points_balance: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RoleUpdate(BaseModel):
    role: UserRole


class DesignerWithProjects(ProfileRead):
    """A designer and the projects currently assigned to them."""

    assigned_projects: list[ProjectRead] = []
