"""Repository layer for data access."""

from src.atelier.repositories.base import BaseRepository
from src.atelier.repositories.profile import AuthUserRepository, ProfileRepository
from src.atelier.repositories.project import ProjectRepository

__all__ = [
    "AuthUserRepository",
    "BaseRepository",
    "ProfileRepository",
    "ProjectRepository",
]
