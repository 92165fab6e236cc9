"""Project schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.atelier.models.enums import ProjectStatus


def _required_text(v: str, field: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"Project {field} cannot be empty or whitespace only")
    return v


class ProjectCreate(BaseModel):
    """Schema for creating a project from a catalog offering."""

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=5000)
    offering: str = Field(min_length=1, description="Offering type name from the catalog")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _required_text(v, "title")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return _required_text(v, "description")


class ProjectUpdate(BaseModel):
    """Schema for a project manager's partial update."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1, max_length=5000)
    points_cost: int | None = Field(default=None, gt=0)
    status: ProjectStatus | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return None if v is None else _required_text(v, "title")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return None if v is None else _required_text(v, "description")


class AssignDesigner(BaseModel):
    designer_id: UUID


class StatusUpdate(BaseModel):
    status: ProjectStatus


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: UUID
    client_id: UUID
    designer_id: UUID | None
    status: ProjectStatus
    points_cost: int
    title: str
    description: str
    files: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectCreated(BaseModel):
    """Creation result, with the caller's balance after the debit."""

    project: ProjectRead
    points_balance: int


class SignedUrlResponse(BaseModel):
    path: str
    signed_url: str
    expires_in: int
