"""Page routes - login, register and one dashboard per role.

The navigation gate middleware has already redirected any caller who does
not belong here, so these handlers only assemble view models. Role
dependencies still apply for callers that bypass the gate.
"""

from fastapi import APIRouter

from src.atelier.api.dependencies import (
    ClientProfile,
    DesignerProfile,
    ProfileServiceDep,
    ProjectManager,
    ProjectServiceDep,
)
from src.atelier.models import UserRole
from src.atelier.schemas.dashboard import (
    ClientDashboard,
    DesignerDashboard,
    LoginPage,
    ProjectManagerDashboard,
    RegisterPage,
)
from src.atelier.schemas.offering import OfferingRead
from src.atelier.schemas.profile import DesignerWithProjects, ProfileRead
from src.atelier.schemas.project import ProjectRead
from src.atelier.services import AccessRouter
from src.atelier.services.catalog import list_offerings


def create_pages_router(access_router: AccessRouter) -> APIRouter:
    """Page routes mounted at the paths the navigation gate protects."""
    router = APIRouter(tags=["pages"])

    @router.get(access_router.login_path, response_model=LoginPage)
    async def login_page() -> LoginPage:
        return LoginPage(register_path=access_router.register_path)

    @router.get(access_router.register_path, response_model=RegisterPage)
    async def register_page() -> RegisterPage:
        return RegisterPage(login_path=access_router.login_path, roles=list(UserRole))

    @router.get(access_router.dashboard_path(UserRole.CLIENT), response_model=ClientDashboard)
    async def client_dashboard(
        profile: ClientProfile, service: ProjectServiceDep
    ) -> ClientDashboard:
        projects = await service.list_for(profile)
        return ClientDashboard(
            profile=ProfileRead.model_validate(profile),
            projects=[ProjectRead.model_validate(p) for p in projects],
            offerings=[OfferingRead.model_validate(o) for o in list_offerings()],
        )

    @router.get(access_router.dashboard_path(UserRole.DESIGNER), response_model=DesignerDashboard)
    async def designer_dashboard(
        profile: DesignerProfile, service: ProjectServiceDep
    ) -> DesignerDashboard:
        projects = await service.list_for(profile)
        return DesignerDashboard(
            profile=ProfileRead.model_validate(profile),
            projects=[ProjectRead.model_validate(p) for p in projects],
        )

    @router.get(
        access_router.dashboard_path(UserRole.PROJECT_MANAGER),
        response_model=ProjectManagerDashboard,
    )
    async def project_manager_dashboard(
        profile: ProjectManager,
        service: ProjectServiceDep,
        profile_service: ProfileServiceDep,
    ) -> ProjectManagerDashboard:
        projects = await service.list_for(profile)
        roster = await profile_service.list_designers(profile)
        return ProjectManagerDashboard(
            profile=ProfileRead.model_validate(profile),
            projects=[ProjectRead.model_validate(p) for p in projects],
            designers=[
                DesignerWithProjects(
                    **ProfileRead.model_validate(designer).model_dump(),
                    assigned_projects=[ProjectRead.model_validate(p) for p in assigned],
                )
                for designer, assigned in roster
            ],
        )

    return router
