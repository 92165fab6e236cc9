"""Role checks shared by the services.

Pure Python; no FastAPI or database access.
"""

from src.atelier.core.exceptions import PermissionDenied
from src.atelier.models import Profile, UserRole


def has_role(profile: Profile, *roles: UserRole) -> bool:
    return profile.role in {role.value for role in roles}


def require_role(profile: Profile, *roles: UserRole, action: str) -> None:
    """Raise PermissionDenied unless the profile holds one of ``roles``."""
    if not has_role(profile, *roles):
        allowed = ", ".join(role.value for role in roles)
        raise PermissionDenied(f"Only {allowed} may {action}")
