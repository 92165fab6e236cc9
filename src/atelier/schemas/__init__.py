"""API request/response schemas."""

from src.atelier.schemas.auth import LoginRequest, RegisterRequest, SessionInfo, SessionResponse
from src.atelier.schemas.dashboard import (
    ClientDashboard,
    DesignerDashboard,
    LoginPage,
    ProjectManagerDashboard,
    RegisterPage,
)
from src.atelier.schemas.offering import OfferingRead
from src.atelier.schemas.profile import DesignerWithProjects, ProfileRead, RoleUpdate
from src.atelier.schemas.project import (
    AssignDesigner,
    ProjectCreate,
    ProjectCreated,
    ProjectRead,
    ProjectUpdate,
    SignedUrlResponse,
    StatusUpdate,
)

__all__ = [
    # Auth
    "LoginRequest",
    "RegisterRequest",
    "SessionInfo",
    "SessionResponse",
    # Pages
    "ClientDashboard",
    "DesignerDashboard",
    "LoginPage",
    "ProjectManagerDashboard",
    "RegisterPage",
    # Offering
    "OfferingRead",
    # Profile
    "DesignerWithProjects",
    "ProfileRead",
    "RoleUpdate",
    # Project
    "AssignDesigner",
    "ProjectCreate",
    "ProjectCreated",
    "ProjectRead",
    "ProjectUpdate",
    "SignedUrlResponse",
    "StatusUpdate",
]
