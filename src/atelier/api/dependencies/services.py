"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.atelier.api.dependencies.db import DBSession
from src.atelier.api.dependencies.repositories import AuthUserRepo, ProfileRepo, ProjectRepo
from src.atelier.core.storage import ObjectStorage, get_storage
from src.atelier.services import AuthService, ProfileService, ProjectService

StorageDep = Annotated[ObjectStorage, Depends(get_storage)]


def get_auth_service(
    auth_user_repo: AuthUserRepo,
    profile_repo: ProfileRepo,
    session: DBSession,
) -> AuthService:
    return AuthService(auth_user_repo, profile_repo, session)


def get_profile_service(
    profile_repo: ProfileRepo,
    project_repo: ProjectRepo,
    session: DBSession,
) -> ProfileService:
    return ProfileService(profile_repo, project_repo, session)


def get_project_service(
    project_repo: ProjectRepo,
    profile_repo: ProfileRepo,
    session: DBSession,
    storage: StorageDep,
) -> ProjectService:
    """Project service with the shared storage bucket."""
    return ProjectService(project_repo, profile_repo, session, storage)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
