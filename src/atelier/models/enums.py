"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Profile role. Decides which dashboard a user may reach."""

    CLIENT = "client"
    PROJECT_MANAGER = "project_manager"
    DESIGNER = "designer"


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
