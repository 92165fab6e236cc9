"""Authentication endpoints - sign-up, sign-in, sign-out, session."""

from fastapi import APIRouter, Response, status
from starlette.requests import Request

from src.atelier.api.dependencies import (
    AccessRouterDep,
    AuthServiceDep,
    CurrentProfile,
    CurrentSession,
)
from src.atelier.core.config import get_settings
from src.atelier.core.rate_limit import limiter
from src.atelier.models import UserRole
from src.atelier.schemas.auth import LoginRequest, RegisterRequest, SessionInfo, SessionResponse
from src.atelier.services import AccessRouter, IssuedSession

router = APIRouter(prefix="/auth", tags=["auth"])

SESSION_EXAMPLE = {
    "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    "token_type": "bearer",
    "expires_at": "2024-01-16T10:30:00Z",
    "user_id": "550e8400-e29b-41d4-a716-446655440000",
    "role": "client",
    "dashboard_path": "/dashboard/client",
}


def _session_response(
    issued: IssuedSession, response: Response, access_router: AccessRouter
) -> SessionResponse:
    settings = get_settings()
    response.set_cookie(
        settings.session_cookie_name,
        issued.token,
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.app_env == "production",
    )
    role = UserRole(issued.profile.role)
    return SessionResponse(
        access_token=issued.token,
        expires_at=issued.expires_at,
        user_id=issued.profile.id,
        role=role,
        dashboard_path=access_router.dashboard_path(role),
    )


@router.post(
    "/register",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Account and profile created, session opened",
            "content": {"application/json": {"example": SESSION_EXAMPLE}},
        },
        409: {"description": "Email already registered"},
        422: {"description": "Validation error"},
    },
)
@limiter.limit("3/hour")
async def register(
    request: Request,
    response: Response,
    register_data: RegisterRequest,
    service: AuthServiceDep,
    access_router: AccessRouterDep,
) -> SessionResponse:
    """Create an account with the chosen role and a starting points balance."""
    issued = await service.sign_up(
        register_data.email, register_data.password, register_data.role
    )
    return _session_response(issued, response, access_router)


@router.post(
    "/login",
    response_model=SessionResponse,
    responses={
        200: {
            "description": "Successful authentication",
            "content": {"application/json": {"example": SESSION_EXAMPLE}},
        },
        401: {"description": "Invalid credentials"},
    },
)
@limiter.limit("5/minute")
async def login(
    request: Request,
    response: Response,
    login_data: LoginRequest,
    service: AuthServiceDep,
    access_router: AccessRouterDep,
) -> SessionResponse:
    """Authenticate with email and password.

    The token is returned in the body and also set as an HttpOnly cookie,
    which is what the page routes read.
    """
    issued = await service.sign_in(login_data.email, login_data.password)
    return _session_response(issued, response, access_router)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(ctx: CurrentSession, response: Response, service: AuthServiceDep) -> None:
    """End the current session and clear the cookie."""
    await service.sign_out(ctx)
    response.delete_cookie(get_settings().session_cookie_name)


@router.get(
    "/session",
    response_model=SessionInfo,
    responses={401: {"description": "Not authenticated"}},
)
async def get_session(
    ctx: CurrentSession, profile: CurrentProfile, access_router: AccessRouterDep
) -> SessionInfo:
    role = UserRole(profile.role)
    return SessionInfo(
        user_id=ctx.user_id,
        email=ctx.email,
        role=role,
        dashboard_path=access_router.dashboard_path(role),
    )
