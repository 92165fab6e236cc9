"""Model exports.

Import from here: `from src.atelier.models import Profile, Project`
"""

from src.atelier.models.enums import ProjectStatus, UserRole
from src.atelier.models.profile import AuthUser, Profile
from src.atelier.models.project import Project

__all__ = [
    # Enums
    "ProjectStatus",
    "UserRole",
    # Models
    "AuthUser",
    "Profile",
    "Project",
]
