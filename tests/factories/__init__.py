"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProfileFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.profile import DEFAULT_TEST_PASSWORD, AuthUserFactory, ProfileFactory
from tests.factories.project import ProjectFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # Profile
    "AuthUserFactory",
    "ProfileFactory",
    "DEFAULT_TEST_PASSWORD",
    # Project
    "ProjectFactory",
]
