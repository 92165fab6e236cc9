"""Authentication and authorization dependencies."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from src.atelier.api.dependencies.services import AuthServiceDep
from src.atelier.core.config import get_settings
from src.atelier.core.logging import bind_user_context
from src.atelier.models import Profile, UserRole
from src.atelier.services import AccessRouter, SessionContext
from src.atelier.services.permissions import require_role


def extract_session_token(request: Request) -> str | None:
    """Session token from ``Authorization: Bearer`` or, failing that, the session cookie."""
    authorization = request.headers.get("Authorization")
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return request.cookies.get(get_settings().session_cookie_name) or None


async def get_session_context(request: Request, service: AuthServiceDep) -> SessionContext:
    """Resolve the caller's session. Raises AuthError when there is none."""
    return await service.get_session(extract_session_token(request))


CurrentSession = Annotated[SessionContext, Depends(get_session_context)]


async def get_current_profile(ctx: CurrentSession, service: AuthServiceDep) -> Profile:
    profile = await service.resolve_profile(ctx)
    bind_user_context(profile.id, role=profile.role, email=ctx.email)
    return profile


CurrentProfile = Annotated[Profile, Depends(get_current_profile)]


async def require_project_manager(profile: CurrentProfile) -> Profile:
    require_role(profile, UserRole.PROJECT_MANAGER, action="access this resource")
    return profile


async def require_client(profile: CurrentProfile) -> Profile:
    require_role(profile, UserRole.CLIENT, action="access this resource")
    return profile


async def require_designer(profile: CurrentProfile) -> Profile:
    require_role(profile, UserRole.DESIGNER, action="access this resource")
    return profile


ProjectManager = Annotated[Profile, Depends(require_project_manager)]
ClientProfile = Annotated[Profile, Depends(require_client)]
DesignerProfile = Annotated[Profile, Depends(require_designer)]


@lru_cache
def get_access_router() -> AccessRouter:
    """Navigation policy built from settings; shared by the gate and the auth routes."""
    settings = get_settings()
    return AccessRouter(
        login_path=settings.login_path,
        register_path=settings.register_path,
        dashboard_prefix=settings.dashboard_prefix,
    )


AccessRouterDep = Annotated[AccessRouter, Depends(get_access_router)]
