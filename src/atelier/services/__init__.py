"""Service layer - business logic."""

from src.atelier.services.access_router import AccessRouter, RouteDecision
from src.atelier.services.auth_service import AuthService, IssuedSession, SessionContext
from src.atelier.services.profile_service import ProfileService
from src.atelier.services.project_service import FileUpload, ProjectService

__all__ = [
    "AccessRouter",
    "AuthService",
    "FileUpload",
    "IssuedSession",
    "ProfileService",
    "ProjectService",
    "RouteDecision",
    "SessionContext",
]
