"""Account and profile factories for test data generation."""

from polyfactory import Use

from src.atelier.core.security import hash_password
from src.atelier.models import AuthUser, Profile, UserRole
from tests.factories.base import BaseFactory, generate_uuid, utc_now

# Default test password - stored for convenience in tests
DEFAULT_TEST_PASSWORD = "testpassword123"


class AuthUserFactory(BaseFactory):
    __model__ = AuthUser

    id = Use(generate_uuid)
    email = Use(lambda: f"user_{generate_uuid().hex[-8:]}@example.com")
    hashed_password = Use(lambda: hash_password(DEFAULT_TEST_PASSWORD))
    is_active = True
    created_at = Use(utc_now)


class ProfileFactory(BaseFactory):
    """Factory for generating Profile test data. Defaults to a client with 100 credits."""

    __model__ = Profile

    email = Use(lambda: f"user_{generate_uuid().hex[-8:]}@example.com")
    role = UserRole.CLIENT.value
    points_balance = 100
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def build(cls, *args, **kwargs):
        # Profile.id is also a foreign key, and foreign keys are not generated
        kwargs.setdefault("id", generate_uuid())
        return super().build(*args, **kwargs)

    @classmethod
    def client(cls, **kwargs):
        return cls.build(role=UserRole.CLIENT.value, **kwargs)

    @classmethod
    def designer(cls, **kwargs):
        return cls.build(role=UserRole.DESIGNER.value, points_balance=0, **kwargs)

    @classmethod
    def project_manager(cls, **kwargs):
        return cls.build(role=UserRole.PROJECT_MANAGER.value, points_balance=0, **kwargs)
