"""Project model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, CheckConstraint, Column
from sqlmodel import Field, SQLModel

from src.atelier.models.base import utc_now
from src.atelier.models.enums import ProjectStatus


class Project(SQLModel, table=True):
    """A unit of design work bought by a client.

    ``files`` holds storage paths in upload order. Reassign the list rather
    than mutating it in place, the JSON column does not track mutation.
    """

    __tablename__ = "projects"
    __table_args__ = (CheckConstraint("points_cost > 0", name="ck_projects_points_cost_positive"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    client_id: UUID = Field(foreign_key="profiles.id", index=True)
    designer_id: UUID | None = Field(default=None, foreign_key="profiles.id", index=True)
    status: str = Field(default=ProjectStatus.PENDING.value, max_length=20)
    points_cost: int
    title: str = Field(max_length=200)
    description: str = Field(max_length=5000)
    files: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
