"""View models served by the page routes."""

from pydantic import BaseModel

from src.atelier.models.enums import UserRole
from src.atelier.schemas.offering import OfferingRead
from src.atelier.schemas.profile import DesignerWithProjects, ProfileRead
from src.atelier.schemas.project import ProjectRead


class LoginPage(BaseModel):
    page: str = "login"
    register_path: str


class RegisterPage(BaseModel):
    page: str = "register"
    login_path: str
    roles: list[UserRole]


class ClientDashboard(BaseModel):
    """A client's own projects and what they can order next."""

    page: str = "client"
    profile: ProfileRead
    projects: list[ProjectRead]
    offerings: list[OfferingRead]


class DesignerDashboard(BaseModel):
    page: str = "designer"
    profile: ProfileRead
    projects: list[ProjectRead]


class ProjectManagerDashboard(BaseModel):
    """Every project plus the designer roster used for assignment."""

    page: str = "projectManager"
    profile: ProfileRead
    projects: list[ProjectRead]
    designers: list[DesignerWithProjects]
