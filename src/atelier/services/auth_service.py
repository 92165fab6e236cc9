"""Authentication service - sign-up, sign-in, sign-out, session resolution."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.atelier.core.cache import blacklist_token, is_token_blacklisted
from src.atelier.core.config import get_settings
from src.atelier.core.exceptions import AuthError, Conflict, StoreError
from src.atelier.core.logging import get_logger
from src.atelier.core.security import (
    TokenType,
    create_session_token,
    decode_token,
    dummy_password_hash,
    hash_password,
    hash_token,
    verify_password,
)
from src.atelier.models import AuthUser, Profile, UserRole
from src.atelier.repositories import AuthUserRepository, ProfileRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionContext:
    """Request-scoped view of an authenticated session."""

    user_id: UUID
    email: str
    token: str
    expires_at: datetime


@dataclass(frozen=True)
class IssuedSession:
    token: str
    expires_at: datetime
    profile: Profile


class AuthService:
    """Email/password accounts with JWT sessions.

    Every account has exactly one profile sharing its id. Both rows are
    written in one transaction, so a failed profile insert never leaves
    an orphan credential behind.
    """

    def __init__(
        self,
        auth_user_repo: AuthUserRepository,
        profile_repo: ProfileRepository,
        session: AsyncSession,
    ):
        self.auth_user_repo = auth_user_repo
        self.profile_repo = profile_repo
        self.session = session

    async def sign_up(self, email: str, password: str, role: UserRole) -> IssuedSession:
        """Create an account and its profile, then open a session.

        Raises:
            Conflict: The email is already registered.
            StoreError: The database rejected the write.
        """
        if await self.auth_user_repo.get_by_email(email) is not None:
            raise Conflict("This email is already registered")

        settings = get_settings()
        user_id = uuid4()
        user = AuthUser(id=user_id, email=email, hashed_password=hash_password(password))
        profile = Profile(
            id=user_id,
            email=email,
            role=role.value,
            points_balance=settings.initial_points_balance,
        )
        try:
            self.auth_user_repo.add(user)
            await self.session.flush()
            self.profile_repo.add(profile)
            await self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent sign-up for the same email
            await self.session.rollback()
            raise Conflict("This email is already registered") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError(f"Failed to create account: {e}") from e

        logger.info("Account created", user_id=str(user.id), role=role.value)
        token, expires_at = create_session_token(user.id)
        return IssuedSession(token=token, expires_at=expires_at, profile=profile)

    async def sign_in(self, email: str, password: str) -> IssuedSession:
        """Verify credentials and open a session.

        Raises:
            AuthError: Unknown email, wrong password, inactive account, or no profile.
        """
        try:
            user = await self.auth_user_repo.get_by_email(email)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to load account: {e}") from e

        # Verify even for unknown emails so timing does not reveal which exist
        password_hash = user.hashed_password if user else dummy_password_hash()
        password_valid = verify_password(password, password_hash)

        if user is None or not password_valid or not user.is_active:
            raise AuthError("Invalid login credentials")

        profile = await self.load_profile(user.id)
        token, expires_at = create_session_token(user.id)
        logger.info("Signed in", user_id=str(user.id), role=profile.role)
        return IssuedSession(token=token, expires_at=expires_at, profile=profile)

    async def sign_out(self, ctx: SessionContext) -> bool:
        """Revoke the session token until it would have expired anyway.

        Returns False when revocation could not be recorded (no Redis).
        """
        ttl = int((ctx.expires_at - datetime.now(UTC)).total_seconds())
        revoked = await blacklist_token(hash_token(ctx.token), ttl)
        if not revoked:
            logger.warning("Session not revoked server-side", user_id=str(ctx.user_id))
        return revoked

    async def get_session(self, token: str | None) -> SessionContext:
        """Resolve a session token to its active account.

        Raises:
            AuthError: Token missing, malformed, expired, revoked, or account inactive.
            StoreError: The account lookup failed.
        """
        if not token:
            raise AuthError("Missing session token")

        payload = decode_token(token)
        if payload is None or payload.get("type") != TokenType.SESSION:
            raise AuthError("Invalid or expired session")

        try:
            user_id = UUID(str(payload.get("sub")))
        except ValueError as e:
            raise AuthError("Invalid session subject") from e

        if await is_token_blacklisted(hash_token(token)):
            raise AuthError("Session has been signed out")

        try:
            user = await self.auth_user_repo.get_by_id(user_id)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to load account: {e}") from e

        if user is None or not user.is_active:
            raise AuthError("User not found or inactive")

        return SessionContext(
            user_id=user.id,
            email=user.email,
            token=token,
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )

    async def resolve_profile(self, ctx: SessionContext) -> Profile:
        """Profile of the session's user."""
        return await self.load_profile(ctx.user_id)

    async def load_profile(self, user_id: UUID) -> Profile:
        """Profile for a user id.

        Raises:
            AuthError: The user has no profile.
            StoreError: The lookup failed.
        """
        try:
            profile = await self.profile_repo.get_by_id(user_id)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to load profile: {e}") from e
        if profile is None:
            raise AuthError("No profile found for this user")
        return profile
