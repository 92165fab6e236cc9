"""Project workflow - who may create, change, assign and delete projects.

Lifecycle: a client creates a project (pending) paying its offering cost in
credits; a project manager assigns a designer (in_progress); the designer or
a project manager marks it completed. Only project managers delete.

Creation writes the project row and the credit debit in one transaction.
File uploads happen after that commit; if storage fails the project stays,
without those files, and UploadError is raised.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.atelier.core.exceptions import (
    DomainValidationError,
    InsufficientCredits,
    InvalidTransition,
    NotFound,
    PermissionDenied,
    StoreError,
)
from src.atelier.core.logging import get_logger
from src.atelier.core.storage import ObjectStorage, build_object_path
from src.atelier.models import Profile, Project, ProjectStatus, UserRole
from src.atelier.models.base import utc_now
from src.atelier.repositories import ProfileRepository, ProjectRepository
from src.atelier.schemas.project import ProjectCreate, ProjectUpdate
from src.atelier.services.catalog import get_offering
from src.atelier.services.permissions import has_role, require_role

logger = get_logger(__name__)

# Status changes a designer may make; project managers may set any status.
DESIGNER_TRANSITIONS: dict[ProjectStatus, frozenset[ProjectStatus]] = {
    ProjectStatus.PENDING: frozenset({ProjectStatus.IN_PROGRESS, ProjectStatus.COMPLETED}),
    ProjectStatus.IN_PROGRESS: frozenset({ProjectStatus.COMPLETED}),
    ProjectStatus.COMPLETED: frozenset(),
}


@dataclass(frozen=True)
class FileUpload:
    """A file received from the caller, not yet stored."""

    filename: str
    content: bytes
    content_type: str | None = None


class ProjectService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        profile_repo: ProfileRepository,
        session: AsyncSession,
        storage: ObjectStorage,
    ):
        self.project_repo = project_repo
        self.profile_repo = profile_repo
        self.session = session
        self.storage = storage

    async def create(
        self,
        caller: Profile,
        data: ProjectCreate,
        uploads: Sequence[FileUpload] = (),
    ) -> Project:
        """Create a pending project and debit its cost from the caller.

        Raises:
            DomainValidationError: Unknown offering.
            InsufficientCredits: Balance below the offering cost; nothing is written.
            StoreError: The database rejected the project or the debit.
            UploadError: The project was created but a file could not be stored.
        """
        offering = get_offering(data.offering)
        # Read before any rollback expires the instance
        caller_id, balance = caller.id, caller.points_balance
        if balance < offering.credits:
            raise InsufficientCredits(balance, offering.credits)

        project = Project(
            client_id=caller_id,
            title=data.title,
            description=data.description,
            status=ProjectStatus.PENDING.value,
            points_cost=offering.credits,
            files=[],
        )
        try:
            self.project_repo.add(project)
            debited = await self.profile_repo.debit_points(caller_id, offering.credits)
            if debited:
                await self.session.commit()
                await self.session.refresh(caller)
            else:
                await self.session.rollback()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError(f"Failed to create project: {e}") from e

        if not debited:
            # Balance dropped since it was read (concurrent creation)
            logger.info(
                "Project creation lost debit race",
                profile_id=str(caller_id),
                points_cost=offering.credits,
            )
            raise InsufficientCredits(balance, offering.credits)

        logger.info(
            "Project created",
            project_id=str(project.id),
            offering=offering.name,
            points_cost=offering.credits,
            points_balance=caller.points_balance,
        )

        if uploads:
            project = await self._attach_files(project, uploads)
        return project

    async def get(self, caller: Profile, project_id: UUID) -> Project:
        """Fetch a project the caller is allowed to see."""
        project = await self.project_repo.get_by_id(project_id)
        if project is None or not self._can_view(caller, project):
            raise NotFound(f"Project {project_id} not found")
        return project

    async def list_for(self, caller: Profile) -> list[Project]:
        """Projects visible to the caller, newest first."""
        if has_role(caller, UserRole.PROJECT_MANAGER):
            return await self.project_repo.list_all()
        if has_role(caller, UserRole.DESIGNER):
            return await self.project_repo.list_by_designer(caller.id)
        return await self.project_repo.list_by_client(caller.id)

    async def assign(self, caller: Profile, project_id: UUID, designer_id: UUID) -> Project:
        """Give the project to a designer; status becomes in_progress."""
        require_role(caller, UserRole.PROJECT_MANAGER, action="assign designers")
        project = await self.get(caller, project_id)

        designer = await self.profile_repo.get_by_id(designer_id)
        if designer is None or not has_role(designer, UserRole.DESIGNER):
            raise DomainValidationError(f"Profile {designer_id} is not a designer")

        project.designer_id = designer_id
        project.status = ProjectStatus.IN_PROGRESS.value
        project.updated_at = utc_now()
        await self._commit(project, "assign designer")

        logger.info("Designer assigned", project_id=str(project_id), designer_id=str(designer_id))
        return project

    async def update_status(
        self, caller: Profile, project_id: UUID, status: ProjectStatus
    ) -> Project:
        """Change status as a project manager (any value) or the assigned designer.

        Raises:
            PermissionDenied: Caller is neither a project manager nor the assigned designer.
            InvalidTransition: Designer attempted a change outside DESIGNER_TRANSITIONS.
        """
        project = await self.get(caller, project_id)
        current = ProjectStatus(project.status)

        if not has_role(caller, UserRole.PROJECT_MANAGER):
            if not (has_role(caller, UserRole.DESIGNER) and project.designer_id == caller.id):
                raise PermissionDenied(
                    "Only a project manager or the assigned designer may change status"
                )
            if status != current and status not in DESIGNER_TRANSITIONS[current]:
                raise InvalidTransition(
                    f"Cannot move project from {current.value} to {status.value}"
                )

        if status == current:
            return project

        project.status = status.value
        project.updated_at = utc_now()
        await self._commit(project, "update project status")

        logger.info(
            "Project status changed",
            project_id=str(project_id),
            previous_status=current.value,
            status=status.value,
        )
        return project

    async def update_fields(
        self, caller: Profile, project_id: UUID, data: ProjectUpdate
    ) -> Project:
        """Partial update of title, description, points_cost or status."""
        require_role(caller, UserRole.PROJECT_MANAGER, action="edit projects")
        project = await self.get(caller, project_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "status" in changes:
            changes["status"] = ProjectStatus(changes["status"]).value
        for field, value in changes.items():
            setattr(project, field, value)

        project.updated_at = utc_now()
        await self._commit(project, "update project")
        return project

    async def delete(self, caller: Profile, project_id: UUID) -> None:
        """Remove the project permanently. Stored files are left in place."""
        require_role(caller, UserRole.PROJECT_MANAGER, action="delete projects")
        project = await self.get(caller, project_id)

        try:
            await self.project_repo.delete(project)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError(f"Failed to delete project: {e}") from e

        logger.info("Project deleted", project_id=str(project_id), files_kept=len(project.files))

    async def upload_files(
        self, caller: Profile, project_id: UUID, uploads: Sequence[FileUpload]
    ) -> Project:
        """Append files to the project, owner client or project manager only."""
        project = await self.get(caller, project_id)
        if not (has_role(caller, UserRole.PROJECT_MANAGER) or project.client_id == caller.id):
            raise PermissionDenied("Only the project owner or a project manager may upload files")
        if not uploads:
            raise DomainValidationError("No files to upload")
        return await self._attach_files(project, uploads)

    async def signed_file_url(
        self,
        caller: Profile,
        project_id: UUID,
        path: str,
        expires_in: int | None = None,
    ) -> str:
        """Time-limited download URL for one of the project's files."""
        project = await self.get(caller, project_id)
        if path not in project.files:
            raise NotFound(f"File {path} is not attached to project {project_id}")
        return self.storage.create_signed_url(path, expires_in)

    def _can_view(self, caller: Profile, project: Project) -> bool:
        if has_role(caller, UserRole.PROJECT_MANAGER):
            return True
        if has_role(caller, UserRole.DESIGNER):
            return project.designer_id == caller.id
        return project.client_id == caller.id

    async def _attach_files(self, project: Project, uploads: Sequence[FileUpload]) -> Project:
        stored: list[str] = []
        for upload in uploads:
            path = build_object_path(project.id, upload.filename)
            stored.append(await self.storage.upload(path, upload.content, upload.content_type))

        # Reassign so the JSON column sees the change
        project.files = [*project.files, *stored]
        project.updated_at = utc_now()
        await self._commit(project, "attach files")

        logger.info("Files attached", project_id=str(project.id), count=len(stored))
        return project

    async def _commit(self, project: Project, action: str) -> None:
        try:
            await self.session.commit()
            await self.session.refresh(project)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError(f"Failed to {action}: {e}") from e
