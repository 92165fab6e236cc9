"""Profile management - role changes and the designer roster."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.atelier.core.exceptions import NotFound, PermissionDenied, StoreError
from src.atelier.core.logging import get_logger
from src.atelier.models import Profile, Project, UserRole
from src.atelier.models.base import utc_now
from src.atelier.repositories import ProfileRepository, ProjectRepository
from src.atelier.services.permissions import require_role

logger = get_logger(__name__)


class ProfileService:
    """Profile operations. Role changes are reserved to project managers."""

    def __init__(
        self,
        profile_repo: ProfileRepository,
        project_repo: ProjectRepository,
        session: AsyncSession,
    ):
        self.profile_repo = profile_repo
        self.project_repo = project_repo
        self.session = session

    async def get(self, profile_id: UUID) -> Profile:
        profile = await self.profile_repo.get_by_id(profile_id)
        if profile is None:
            raise NotFound(f"Profile {profile_id} not found")
        return profile

    async def change_role(self, actor: Profile, target_id: UUID, role: UserRole) -> Profile:
        """Set another user's role.

        Raises:
            PermissionDenied: Actor is not a project manager, or targets themselves.
            NotFound: No profile with ``target_id``.
        """
        require_role(actor, UserRole.PROJECT_MANAGER, action="change roles")
        if target_id == actor.id:
            raise PermissionDenied("Users cannot change their own role")

        target = await self.get(target_id)
        previous = target.role
        target.role = role.value
        target.updated_at = utc_now()
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError(f"Failed to update role: {e}") from e

        logger.info(
            "Role changed",
            target_id=str(target_id),
            previous_role=previous,
            role=role.value,
        )
        return target

    async def list_designers(self, actor: Profile) -> list[tuple[Profile, list[Project]]]:
        """Designers with their assigned projects.

        Two queries (designers, then their projects) composed here; no join.
        """
        require_role(actor, UserRole.PROJECT_MANAGER, action="list designers")
        designers = await self.profile_repo.list_by_role(UserRole.DESIGNER)
        projects = await self.project_repo.list_by_designers([d.id for d in designers])

        assigned: dict[UUID, list[Project]] = {d.id: [] for d in designers}
        for project in projects:
            if project.designer_id in assigned:
                assigned[project.designer_id].append(project)
        return [(designer, assigned[designer.id]) for designer in designers]
