"""Domain services."""

from src.domain.services.identity import (
    DuplicateEmailError,
    IdentityError,
    IdentityService,
    InvalidCredentialsError,
)
from src.domain.services.projects import (
    Notification,
    Notifier,
    ProjectService,
    log_notifier,
)

__all__ = [
    "DuplicateEmailError",
    "IdentityError",
    "IdentityService",
    "InvalidCredentialsError",
    "Notification",
    "Notifier",
    "ProjectService",
    "log_notifier",
]
