"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.atelier.api.dependencies.db import DBSession
from src.atelier.repositories import AuthUserRepository, ProfileRepository, ProjectRepository


def get_auth_user_repository(session: DBSession) -> AuthUserRepository:
    return AuthUserRepository(session)


def get_profile_repository(session: DBSession) -> ProfileRepository:
    return ProfileRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


AuthUserRepo = Annotated[AuthUserRepository, Depends(get_auth_user_repository)]
ProfileRepo = Annotated[ProfileRepository, Depends(get_profile_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
