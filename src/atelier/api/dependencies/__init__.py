"""FastAPI dependency injection definitions.

Re-exports all dependencies so routers import from one place.
"""

# Auth
from src.atelier.api.dependencies.auth import (
    AccessRouterDep,
    ClientProfile,
    CurrentProfile,
    CurrentSession,
    DesignerProfile,
    ProjectManager,
    extract_session_token,
    get_access_router,
    get_current_profile,
    get_session_context,
)

# Database
from src.atelier.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.atelier.api.dependencies.repositories import (
    AuthUserRepo,
    ProfileRepo,
    ProjectRepo,
    get_auth_user_repository,
    get_profile_repository,
    get_project_repository,
)

# Services
from src.atelier.api.dependencies.services import (
    AuthServiceDep,
    ProfileServiceDep,
    ProjectServiceDep,
    StorageDep,
    get_auth_service,
    get_profile_service,
    get_project_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "AccessRouterDep",
    "ClientProfile",
    "CurrentProfile",
    "CurrentSession",
    "DesignerProfile",
    "ProjectManager",
    "extract_session_token",
    "get_access_router",
    "get_current_profile",
    "get_session_context",
    # Repositories
    "AuthUserRepo",
    "ProfileRepo",
    "ProjectRepo",
    "get_auth_user_repository",
    "get_profile_repository",
    "get_project_repository",
    # Services
    "AuthServiceDep",
    "ProfileServiceDep",
    "ProjectServiceDep",
    "StorageDep",
    "get_auth_service",
    "get_profile_service",
    "get_project_service",
]
