"""Domain layer: entities and services for project tracking."""

from src.domain.models import (
    Credential,
    CredentialType,
    NewProject,
    Note,
    Project,
    ProjectStatus,
    Role,
    User,
)

__all__ = [
    "Credential",
    "CredentialType",
    "NewProject",
    "Note",
    "Project",
    "ProjectStatus",
    "Role",
    "User",
]
