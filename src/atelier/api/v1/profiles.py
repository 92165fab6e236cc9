"""Profile endpoints."""

from uuid import UUID

from fastapi import APIRouter

from src.atelier.api.dependencies import CurrentProfile, ProfileServiceDep, ProjectManager
from src.atelier.schemas.profile import DesignerWithProjects, ProfileRead, RoleUpdate
from src.atelier.schemas.project import ProjectRead

router = APIRouter(prefix="/profiles", tags=["profiles"])

PROFILE_EXAMPLE = {
    "id": "550e8400-e29b-41d4-a716-446655440000",
    "email": "client@example.com",
    "role": "client",
    "points_balance": 90,
    "created_at": "2024-01-15T10:30:00Z",
    "updated_at": "2024-01-15T10:45:00Z",
}


@router.get(
    "/me",
    response_model=ProfileRead,
    responses={
        200: {
            "description": "Current user's profile",
            "content": {"application/json": {"example": PROFILE_EXAMPLE}},
        },
        401: {"description": "Not authenticated"},
    },
)
async def get_my_profile(profile: CurrentProfile) -> ProfileRead:
    """Get the caller's profile, including the points balance."""
    return ProfileRead.model_validate(profile)


@router.get(
    "/designers",
    response_model=list[DesignerWithProjects],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Caller is not a project manager"},
    },
)
async def list_designers(
    profile: ProjectManager, service: ProfileServiceDep
) -> list[DesignerWithProjects]:
    """List designers with their currently assigned projects."""
    roster = await service.list_designers(profile)
    return [
        DesignerWithProjects(
            **ProfileRead.model_validate(designer).model_dump(),
            assigned_projects=[ProjectRead.model_validate(p) for p in projects],
        )
        for designer, projects in roster
    ]


@router.patch(
    "/{profile_id}/role",
    response_model=ProfileRead,
    responses={
        200: {
            "description": "Role updated",
            "content": {"application/json": {"example": {**PROFILE_EXAMPLE, "role": "designer"}}},
        },
        403: {"description": "Caller is not a project manager, or targets their own profile"},
        404: {"description": "Profile not found"},
    },
)
async def change_role(
    profile_id: UUID,
    data: RoleUpdate,
    profile: ProjectManager,
    service: ProfileServiceDep,
) -> ProfileRead:
    """Change another user's role."""
    updated = await service.change_role(profile, profile_id, data.role)
    return ProfileRead.model_validate(updated)
