"""Page navigation gate.

Runs the AccessRouter for every page path it covers (root, login, register
and the dashboards) and turns its decision into a redirect. API routes are
left alone; they authenticate through dependencies instead.
"""

from uuid import UUID

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from src.atelier.api.dependencies.auth import extract_session_token
from src.atelier.core.db import get_session
from src.atelier.core.exceptions import AuthError
from src.atelier.core.logging import get_logger
from src.atelier.models import UserRole
from src.atelier.repositories import AuthUserRepository, ProfileRepository
from src.atelier.services import AccessRouter, AuthService

logger = get_logger(__name__)


class SessionIdentity:
    """Resolves the navigating user from a session token, on demand."""

    def __init__(self, token: str | None, service: AuthService):
        self.token = token
        self.service = service

    async def user_id(self) -> UUID | None:
        if not self.token:
            return None
        try:
            ctx = await self.service.get_session(self.token)
        except AuthError:
            return None
        return ctx.user_id

    async def role(self, user_id: UUID) -> UserRole:
        profile = await self.service.load_profile(user_id)
        return UserRole(profile.role)


class AccessRouterMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, router: AccessRouter):
        super().__init__(app)
        self.router = router

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if not self.router.matches(path):
            return await call_next(request)

        token = extract_session_token(request)
        async with get_session() as session:
            service = AuthService(AuthUserRepository(session), ProfileRepository(session), session)
            decision = await self.router.decide(path, SessionIdentity(token, service))

        if decision.redirect_to is None:
            return await call_next(request)

        logger.info(
            "Navigation redirected",
            path=path,
            redirect_to=decision.redirect_to,
            reason=decision.reason,
        )
        return RedirectResponse(decision.redirect_to, status_code=307)
