"""Tests for the navigation gate policy."""

from uuid import UUID, uuid4

import pytest

from src.atelier.models import UserRole
from src.atelier.services.access_router import ROLE_DASHBOARD_SEGMENTS, AccessRouter

pytestmark = pytest.mark.unit


class FakeIdentity:
    """Identity with a fixed user and role; either lookup can be made to fail."""

    def __init__(
        self,
        user_id: UUID | None = None,
        role: str | None = None,
        user_error: Exception | None = None,
        role_error: Exception | None = None,
    ):
        self._user_id = user_id
        self._role = role
        self._user_error = user_error
        self._role_error = role_error
        self.role_calls = 0

    async def user_id(self) -> UUID | None:
        if self._user_error:
            raise self._user_error
        return self._user_id

    async def role(self, user_id: UUID) -> str:
        self.role_calls += 1
        if self._role_error:
            raise self._role_error
        return self._role


def signed_in(role: UserRole) -> FakeIdentity:
    return FakeIdentity(user_id=uuid4(), role=role.value)


@pytest.fixture
def router() -> AccessRouter:
    return AccessRouter()


class TestAnonymous:
    async def test_protected_path_redirects_to_login(self, router: AccessRouter) -> None:
        decision = await router.decide("/dashboard/client", FakeIdentity())
        assert decision.redirect_to == "/login"
        assert decision.reason == "unauthenticated"

    async def test_dashboard_prefix_itself_is_protected(self, router: AccessRouter) -> None:
        decision = await router.decide("/dashboard", FakeIdentity())
        assert decision.redirect_to == "/login"

    async def test_nested_dashboard_path_is_protected(self, router: AccessRouter) -> None:
        decision = await router.decide("/dashboard/designer/projects/1", FakeIdentity())
        assert decision.redirect_to == "/login"

    async def test_prefix_match_is_segment_aware(self, router: AccessRouter) -> None:
        decision = await router.decide("/dashboards", FakeIdentity())
        assert decision.allowed

    async def test_root_redirects_to_login(self, router: AccessRouter) -> None:
        decision = await router.decide("/", FakeIdentity())
        assert decision.redirect_to == "/login"
        assert decision.reason == "root"

    @pytest.mark.parametrize("path", ["/login", "/register", "/about"])
    async def test_public_paths_pass(self, router: AccessRouter, path: str) -> None:
        decision = await router.decide(path, FakeIdentity())
        assert decision.allowed
        assert decision.redirect_to is None


class TestSignedIn:
    @pytest.mark.parametrize("role", list(UserRole))
    @pytest.mark.parametrize("path", ["/login", "/register"])
    async def test_auth_pages_redirect_to_own_dashboard(
        self, router: AccessRouter, role: UserRole, path: str
    ) -> None:
        decision = await router.decide(path, signed_in(role))
        assert decision.redirect_to == router.dashboard_path(role)
        assert decision.reason == "already_signed_in"

    @pytest.mark.parametrize("role", list(UserRole))
    async def test_own_dashboard_passes(self, router: AccessRouter, role: UserRole) -> None:
        decision = await router.decide(router.dashboard_path(role), signed_in(role))
        assert decision.allowed

    @pytest.mark.parametrize("role", list(UserRole))
    async def test_own_dashboard_subpath_passes(self, router: AccessRouter, role: UserRole) -> None:
        path = f"{router.dashboard_path(role)}/settings"
        decision = await router.decide(path, signed_in(role))
        assert decision.allowed

    @pytest.mark.parametrize("role", list(UserRole))
    @pytest.mark.parametrize("segment", [*ROLE_DASHBOARD_SEGMENTS.values(), "", "admin"])
    async def test_foreign_dashboard_redirects_to_own(
        self, router: AccessRouter, role: UserRole, segment: str
    ) -> None:
        if segment == ROLE_DASHBOARD_SEGMENTS[role]:
            pytest.skip("own dashboard")
        path = f"/dashboard/{segment}" if segment else "/dashboard"
        decision = await router.decide(path, signed_in(role))
        assert decision.redirect_to == router.dashboard_path(role)
        assert decision.reason == "wrong_dashboard"

    async def test_root_redirects_to_login_even_when_signed_in(
        self, router: AccessRouter
    ) -> None:
        decision = await router.decide("/", signed_in(UserRole.CLIENT))
        assert decision.redirect_to == "/login"

    async def test_public_path_does_not_resolve_role(self, router: AccessRouter) -> None:
        identity = signed_in(UserRole.DESIGNER)
        decision = await router.decide("/about", identity)
        assert decision.allowed
        assert identity.role_calls == 0


class TestFailClosed:
    async def test_session_error_counts_as_anonymous(self, router: AccessRouter) -> None:
        identity = FakeIdentity(user_error=RuntimeError("store down"))
        decision = await router.decide("/dashboard/client", identity)
        assert decision.redirect_to == "/login"

    async def test_role_error_on_dashboard_redirects_to_login(self, router: AccessRouter) -> None:
        identity = FakeIdentity(user_id=uuid4(), role_error=RuntimeError("no profile"))
        decision = await router.decide("/dashboard/client", identity)
        assert decision.redirect_to == "/login"
        assert decision.reason == "role_unresolved"

    async def test_unknown_role_redirects_to_login(self, router: AccessRouter) -> None:
        identity = FakeIdentity(user_id=uuid4(), role="superadmin")
        decision = await router.decide("/dashboard/client", identity)
        assert decision.redirect_to == "/login"

    async def test_role_error_on_login_page_never_loops(self, router: AccessRouter) -> None:
        identity = FakeIdentity(user_id=uuid4(), role_error=RuntimeError("no profile"))
        decision = await router.decide("/login", identity)
        assert decision.allowed


class TestConfiguration:
    async def test_custom_paths(self) -> None:
        router = AccessRouter(
            login_path="/signin", register_path="/signup", dashboard_prefix="/app/"
        )
        assert router.dashboard_path(UserRole.PROJECT_MANAGER) == "/app/projectManager"

        decision = await router.decide("/app/client", FakeIdentity())
        assert decision.redirect_to == "/signin"

    def test_matches_only_gated_paths(self, router: AccessRouter) -> None:
        assert router.matches("/")
        assert router.matches("/login")
        assert router.matches("/dashboard/client")
        assert not router.matches("/api/v1/projects")
        assert not router.matches("/health")

    def test_role_segment(self, router: AccessRouter) -> None:
        assert router.role_segment("/dashboard/designer/42") == "designer"
        assert router.role_segment("/dashboard") == ""
