"""Navigation gate - decides where an incoming page request may go.

Rules, first match wins:

1. No valid session and the path is under the dashboard prefix: go to login.
2. Login or register page with a valid session: go to the caller's dashboard.
3. Valid session under the dashboard prefix, but the role segment of the
   path is not the caller's: go to the caller's dashboard.
4. Root path: go to login.
5. Anything else passes through.

Any failure to resolve the session or the role counts as "not signed in".
"""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from src.atelier.core.logging import get_logger
from src.atelier.models.enums import UserRole

logger = get_logger(__name__)

ROOT_PATH = "/"

ROLE_DASHBOARD_SEGMENTS: dict[UserRole, str] = {
    UserRole.CLIENT: "client",
    UserRole.PROJECT_MANAGER: "projectManager",
    UserRole.DESIGNER: "designer",
}


class NavigationIdentity(Protocol):
    """Lazily resolves who is navigating. Either method may raise."""

    async def user_id(self) -> UUID | None: ...

    async def role(self, user_id: UUID) -> UserRole: ...


@dataclass(frozen=True)
class RouteDecision:
    """Outcome of one navigation. ``redirect_to`` is None when the request may proceed."""

    redirect_to: str | None = None
    reason: str = "allowed"

    @property
    def allowed(self) -> bool:
        return self.redirect_to is None


class AccessRouter:
    """Pure routing policy; knows nothing about HTTP or storage."""

    def __init__(
        self,
        login_path: str = "/login",
        register_path: str = "/register",
        dashboard_prefix: str = "/dashboard",
    ):
        self.login_path = login_path
        self.register_path = register_path
        self.dashboard_prefix = dashboard_prefix.rstrip("/")

    def dashboard_path(self, role: UserRole) -> str:
        return f"{self.dashboard_prefix}/{ROLE_DASHBOARD_SEGMENTS[role]}"

    def is_protected(self, path: str) -> bool:
        return path == self.dashboard_prefix or path.startswith(self.dashboard_prefix + "/")

    def matches(self, path: str) -> bool:
        """Whether the gate applies to this path at all."""
        return path in (ROOT_PATH, self.login_path, self.register_path) or self.is_protected(path)

    def role_segment(self, path: str) -> str:
        """The path segment right after the dashboard prefix, or ''."""
        rest = path[len(self.dashboard_prefix) :].strip("/")
        return rest.split("/", 1)[0]

    async def decide(self, path: str, identity: NavigationIdentity) -> RouteDecision:
        user_id = await self._resolve_user(identity)
        protected = self.is_protected(path)

        if user_id is None and protected:
            return self._redirect(path, self.login_path, "unauthenticated")

        if user_id is not None and path in (self.login_path, self.register_path):
            role = await self._resolve_role(identity, user_id)
            if role is None:
                return self._redirect(path, self.login_path, "role_unresolved")
            return self._redirect(path, self.dashboard_path(role), "already_signed_in")

        if user_id is not None and protected:
            role = await self._resolve_role(identity, user_id)
            if role is None:
                return self._redirect(path, self.login_path, "role_unresolved")
            if self.role_segment(path) != ROLE_DASHBOARD_SEGMENTS[role]:
                return self._redirect(path, self.dashboard_path(role), "wrong_dashboard")

        if path == ROOT_PATH:
            return self._redirect(path, self.login_path, "root")

        return RouteDecision()

    def _redirect(self, path: str, target: str, reason: str) -> RouteDecision:
        # Never bounce a request back onto itself
        if target == path:
            return RouteDecision(reason=reason)
        return RouteDecision(redirect_to=target, reason=reason)

    async def _resolve_user(self, identity: NavigationIdentity) -> UUID | None:
        try:
            return await identity.user_id()
        except Exception as e:
            # Fail closed: an unreadable session is no session
            logger.warning("Session resolution failed", error=str(e))
            return None

    async def _resolve_role(self, identity: NavigationIdentity, user_id: UUID) -> UserRole | None:
        try:
            return UserRole(await identity.role(user_id))
        except Exception as e:
            logger.warning("Role resolution failed", user_id=str(user_id), error=str(e))
            return None
