"""Project workflow endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Form, Query, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from src.atelier.api.dependencies import CurrentProfile, ProjectManager, ProjectServiceDep
from src.atelier.core.config import get_settings
from src.atelier.core.exceptions import DomainValidationError
from src.atelier.schemas.project import (
    AssignDesigner,
    ProjectCreate,
    ProjectCreated,
    ProjectRead,
    ProjectUpdate,
    SignedUrlResponse,
    StatusUpdate,
)
from src.atelier.services import FileUpload

router = APIRouter(prefix="/projects", tags=["projects"])

PROJECT_EXAMPLE = {
    "id": "6fa459ea-ee8a-3ca4-894e-db77e160355e",
    "client_id": "550e8400-e29b-41d4-a716-446655440000",
    "designer_id": None,
    "status": "pending",
    "points_cost": 10,
    "title": "Brand refresh",
    "description": "New logo and color palette",
    "files": ["6fa459ea-ee8a-3ca4-894e-db77e160355e/9f2c1a7b.pdf"],
    "created_at": "2024-01-15T10:30:00Z",
    "updated_at": "2024-01-15T10:30:00Z",
}

UploadedFiles = Annotated[list[UploadFile] | None, File(description="Reference files")]


async def _read_uploads(files: list[UploadFile] | None) -> list[FileUpload]:
    max_bytes = get_settings().storage_max_upload_bytes
    uploads: list[FileUpload] = []
    for file in files or []:
        content = await file.read()
        if len(content) > max_bytes:
            raise DomainValidationError(f"File {file.filename!r} exceeds {max_bytes} bytes")
        uploads.append(
            FileUpload(
                filename=file.filename or "upload",
                content=content,
                content_type=file.content_type,
            )
        )
    return uploads


@router.get(
    "",
    response_model=list[ProjectRead],
    responses={401: {"description": "Not authenticated"}},
)
async def list_projects(profile: CurrentProfile, service: ProjectServiceDep) -> list[ProjectRead]:
    """Projects visible to the caller, newest first.

    Project managers see every project, designers the ones assigned to them,
    clients their own.
    """
    projects = await service.list_for(profile)
    return [ProjectRead.model_validate(p) for p in projects]


@router.post(
    "",
    response_model=ProjectCreated,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Project created and its cost debited",
            "content": {
                "application/json": {
                    "example": {"project": PROJECT_EXAMPLE, "points_balance": 90}
                }
            },
        },
        401: {"description": "Not authenticated"},
        402: {"description": "Insufficient credits"},
        422: {"description": "Validation error or unknown offering"},
        502: {"description": "Project created but a file could not be stored"},
    },
)
async def create_project(
    profile: CurrentProfile,
    service: ProjectServiceDep,
    title: Annotated[str, Form(max_length=200)],
    description: Annotated[str, Form(max_length=5000)],
    offering: Annotated[str, Form(description="Offering type name from the catalog")],
    files: UploadedFiles = None,
) -> ProjectCreated:
    """Create a pending project from a catalog offering, paying its cost in credits.

    Sent as multipart form data so reference files can ride along.
    """
    try:
        data = ProjectCreate(title=title, description=description, offering=offering)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False)) from e

    uploads = await _read_uploads(files)
    project = await service.create(profile, data, uploads)
    return ProjectCreated(
        project=ProjectRead.model_validate(project),
        points_balance=profile.points_balance,
    )


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    responses={
        200: {
            "description": "Project details",
            "content": {"application/json": {"example": PROJECT_EXAMPLE}},
        },
        404: {"description": "Project not found or not visible to the caller"},
    },
)
async def get_project(
    project_id: UUID, profile: CurrentProfile, service: ProjectServiceDep
) -> ProjectRead:
    project = await service.get(profile, project_id)
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    responses={
        403: {"description": "Caller is not a project manager"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    profile: ProjectManager,
    service: ProjectServiceDep,
) -> ProjectRead:
    """Edit title, description, cost or status."""
    project = await service.update_fields(profile, project_id, data)
    return ProjectRead.model_validate(project)


@router.post(
    "/{project_id}/assign",
    response_model=ProjectRead,
    responses={
        200: {
            "description": "Designer assigned, project in progress",
            "content": {
                "application/json": {
                    "example": {
                        **PROJECT_EXAMPLE,
                        "designer_id": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
                        "status": "in_progress",
                    }
                }
            },
        },
        403: {"description": "Caller is not a project manager"},
        404: {"description": "Project not found"},
        422: {"description": "Target profile is not a designer"},
    },
)
async def assign_designer(
    project_id: UUID,
    data: AssignDesigner,
    profile: ProjectManager,
    service: ProjectServiceDep,
) -> ProjectRead:
    project = await service.assign(profile, project_id, data.designer_id)
    return ProjectRead.model_validate(project)


@router.post(
    "/{project_id}/status",
    response_model=ProjectRead,
    responses={
        403: {"description": "Caller is neither a project manager nor the assigned designer"},
        404: {"description": "Project not found"},
        409: {"description": "Status change not allowed"},
    },
)
async def update_status(
    project_id: UUID,
    data: StatusUpdate,
    profile: CurrentProfile,
    service: ProjectServiceDep,
) -> ProjectRead:
    """Move the project through its lifecycle."""
    project = await service.update_status(profile, project_id, data.status)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        403: {"description": "Caller is not a project manager"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: UUID, profile: ProjectManager, service: ProjectServiceDep
) -> None:
    """Delete the project. Its stored files are kept."""
    await service.delete(profile, project_id)


@router.post(
    "/{project_id}/files",
    response_model=ProjectRead,
    responses={
        403: {"description": "Caller is neither the owner nor a project manager"},
        404: {"description": "Project not found"},
        502: {"description": "A file could not be stored"},
    },
)
async def upload_files(
    project_id: UUID,
    profile: CurrentProfile,
    service: ProjectServiceDep,
    files: Annotated[list[UploadFile], File(description="Files to attach")],
) -> ProjectRead:
    uploads = await _read_uploads(files)
    project = await service.upload_files(profile, project_id, uploads)
    return ProjectRead.model_validate(project)


@router.get(
    "/{project_id}/files/signed-url",
    response_model=SignedUrlResponse,
    responses={
        200: {
            "description": "Time-limited download URL",
            "content": {
                "application/json": {
                    "example": {
                        "path": "6fa459ea-ee8a-3ca4-894e-db77e160355e/9f2c1a7b.pdf",
                        "signed_url": "https://projects.s3.amazonaws.com/6fa4.../9f2c1a7b.pdf"
                        "?X-Amz-Algorithm=AWS4-HMAC-SHA256&X-Amz-Expires=3600&...",
                        "expires_in": 3600,
                    }
                }
            },
        },
        404: {"description": "Project or file not found"},
    },
)
async def get_signed_url(
    project_id: UUID,
    profile: CurrentProfile,
    service: ProjectServiceDep,
    path: Annotated[str, Query(description="Object path as listed in the project's files")],
    expires_in: Annotated[int | None, Query(ge=1, le=7 * 24 * 3600)] = None,
) -> SignedUrlResponse:
    lifetime = expires_in or get_settings().signed_url_expire_seconds
    url = await service.signed_file_url(profile, project_id, path, lifetime)
    return SignedUrlResponse(path=path, signed_url=url, expires_in=lifetime)
