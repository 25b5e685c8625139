from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from src.api.deps import get_identity_service, get_project_service, require_roles
from src.api.schemas.developers import (
    DeveloperListResponse,
    DeveloperResponse,
    RegisterDeveloperRequest,
)
from src.domain import Role, User
from src.domain.services import DuplicateEmailError, IdentityService, ProjectService
from src.domain.services.schedule import assigned_project_count

router = APIRouter(prefix="/developers", tags=["Developers"])
logger = structlog.get_logger()


def _to_response(developer: User, projects: ProjectService) -> DeveloperResponse:
    return DeveloperResponse(
        id=developer.id,
        name=developer.name,
        email=developer.email,
        assigned_projects=assigned_project_count(projects.projects, developer.id),
    )


@router.get("", response_model=DeveloperListResponse)
async def list_developers(
    identity: IdentityService = Depends(get_identity_service),
    projects: ProjectService = Depends(get_project_service),
    user: User = Depends(require_roles(Role.REVIEWER)),
) -> DeveloperListResponse:
    """List developer accounts with their assigned project counts (reviewer-only)."""
    return DeveloperListResponse(
        developers=[_to_response(dev, projects) for dev in identity.list_assignees()]
    )


@router.post("", response_model=DeveloperResponse, status_code=status.HTTP_201_CREATED)
async def register_developer(
    payload: RegisterDeveloperRequest,
    identity: IdentityService = Depends(get_identity_service),
    projects: ProjectService = Depends(get_project_service),
    user: User = Depends(require_roles(Role.REVIEWER)),
) -> DeveloperResponse:
    """Create a developer account (reviewer-only)."""
    try:
        developer = await identity.register_assignee(
            payload.name, str(payload.email), payload.password
        )
    except DuplicateEmailError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    return _to_response(developer, projects)
