"""Repository for Project entity."""

from collections.abc import Sequence
from uuid import UUID

from src.atelier.models import Project
from src.atelier.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for projects. All listings are newest first."""

    model = Project

    async def list_all(self) -> list[Project]:
        return await self.list_where(order_by=Project.created_at.desc())

    async def list_by_client(self, client_id: UUID) -> list[Project]:
        return await self.list_where(
            Project.client_id == client_id, order_by=Project.created_at.desc()
        )

    async def list_by_designer(self, designer_id: UUID) -> list[Project]:
        return await self.list_where(
            Project.designer_id == designer_id, order_by=Project.created_at.desc()
        )

    async def list_by_designers(self, designer_ids: Sequence[UUID]) -> list[Project]:
        if not designer_ids:
            return []
        return await self.list_where(
            Project.designer_id.in_(designer_ids),  # type: ignore[union-attr]
            order_by=Project.created_at.desc(),
        )
