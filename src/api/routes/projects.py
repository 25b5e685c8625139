from __future__ import annotations

from datetime import date

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from src.api.deps import (
    get_app_settings,
    get_current_user,
    get_identity_service,
    get_project_service,
    require_roles,
)
from src.api.schemas.projects import (
    ApproveProjectRequest,
    CreateProjectRequest,
    CredentialCreateRequest,
    CredentialResponse,
    DateUpdateRequest,
    NoteCreateRequest,
    NoteResponse,
    ProjectListResponse,
    ProjectResponse,
    StatusUpdateRequest,
)
from src.core.config import Settings
from src.domain import NewProject, Project, Role, User
from src.domain.services import IdentityService, ProjectService
from src.domain.services.schedule import attention_level, pending_projects, sort_by_deadline
from src.domain.services.visibility import can_add_note, can_manage_delivery, visible_notes

router = APIRouter(prefix="/projects", tags=["Projects"])
logger = structlog.get_logger()


class ProjectView:
    """Renders projects for one viewer."""

    def __init__(self, viewer: User, identity: IdentityService, settings: Settings) -> None:
        self.viewer = viewer
        self.identity = identity
        self.settings = settings

    def can_manage(self, project: Project) -> bool:
        return can_manage_delivery(
            self.viewer,
            project,
            restrict_to_assigned=self.settings.restrict_delivery_to_assigned_developer,
        )

    def render(self, project: Project, today: date | None = None) -> ProjectResponse:
        today = today or date.today()
        assignee = self.identity.find_assignee(project.assigned_to) if project.assigned_to else None
        originator = self.identity.find_user(project.created_by)

        credentials = None
        if self.can_manage(project):
            credentials = [
                CredentialResponse(
                    id=c.id, type=c.type, name=c.name, value=c.value, date_added=c.date_added
                )
                for c in project.credentials
            ]

        return ProjectResponse(
            id=project.id,
            reference_id=project.reference_id,
            client_name=project.client_name,
            client_email=project.client_email,
            client_phone=project.client_phone,
            description=project.description,
            requirements=project.requirements,
            status=project.status,
            status_label=project.status.label,
            approved=project.approved,
            assigned_to=project.assigned_to,
            assignee_name=assignee.name if assignee else None,
            deadline=project.deadline,
            created_by=project.created_by,
            created_by_name=originator.name if originator else None,
            created_at=project.created_at,
            completion_date=project.completion_date,
            renewal_date=project.renewal_date,
            attention=attention_level(project, today, self.settings.renewal_warning_days),
            notes=[
                NoteResponse(
                    id=n.id,
                    content=n.content,
                    author=n.author,
                    is_public=n.is_public,
                    created_at=n.created_at,
                )
                for n in visible_notes(self.viewer, project)
            ],
            credentials=credentials,
        )


def get_project_view(
    user: User = Depends(get_current_user),
    identity: IdentityService = Depends(get_identity_service),
    settings: Settings = Depends(get_app_settings),
) -> ProjectView:
    return ProjectView(user, identity, settings)


def _require_project(projects: ProjectService, project_id: str) -> Project:
    project = projects.find_by_id(project_id)
    if project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found",
        )
    return project


def _require_delivery_access(view: ProjectView, project: Project) -> None:
    if not view.can_manage(project):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only developers can update project delivery details",
        )


def _rendered(view: ProjectView, projects: ProjectService, project_id: str) -> ProjectResponse:
    return view.render(_require_project(projects, project_id))


# --- Reads ---


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    projects: ProjectService = Depends(get_project_service),
    view: ProjectView = Depends(get_project_view),
) -> ProjectListResponse:
    """All projects, closest deadline first."""
    return ProjectListResponse(
        projects=[view.render(p) for p in sort_by_deadline(projects.projects)]
    )


@router.get("/pending", response_model=ProjectListResponse)
async def list_pending_projects(
    projects: ProjectService = Depends(get_project_service),
    view: ProjectView = Depends(get_project_view),
    reviewer: User = Depends(require_roles(Role.REVIEWER)),
) -> ProjectListResponse:
    """Projects awaiting approval (reviewer-only)."""
    return ProjectListResponse(
        projects=[view.render(p) for p in pending_projects(projects.projects)]
    )


@router.get("/by-reference/{reference_id}", response_model=ProjectResponse)
async def get_project_by_reference(
    reference_id: str,
    projects: ProjectService = Depends(get_project_service),
    view: ProjectView = Depends(get_project_view),
) -> ProjectResponse:
    project = projects.find_by_reference(reference_id)
    if project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {reference_id} not found",
        )
    return view.render(project)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    projects: ProjectService = Depends(get_project_service),
    view: ProjectView = Depends(get_project_view),
) -> ProjectResponse:
    return _rendered(view, projects, project_id)


# --- Origination and review ---


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: CreateProjectRequest,
    projects: ProjectService = Depends(get_project_service),
    view: ProjectView = Depends(get_project_view),
    user: User = Depends(require_roles(Role.ORIGINATOR)),
) -> ProjectResponse:
    """Record a new client project (sales-only)."""
    project = await projects.create(
        NewProject(
            client_name=payload.client_name,
            client_email=str(payload.client_email),
            client_phone=payload.client_phone,
            description=payload.description,
            requirements=payload.requirements,
            status=payload.status,
            created_by=user.id,
        )
    )
    return view.render(project)


@router.post("/{project_id}/approve", response_model=ProjectResponse)
async def approve_project(
    project_id: str,
    payload: ApproveProjectRequest,
    projects: ProjectService = Depends(get_project_service),
    identity: IdentityService = Depends(get_identity_service),
    view: ProjectView = Depends(get_project_view),
    reviewer: User = Depends(require_roles(Role.REVIEWER)),
) -> ProjectResponse:
    """Approve a project and assign it to a developer (reviewer-only)."""
    _require_project(projects, project_id)
    if identity.find_assignee(payload.developer_id) is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Developer {payload.developer_id} not found",
        )

    await projects.approve(project_id, payload.developer_id, payload.deadline)
    return _rendered(view, projects, project_id)


@router.post("/{project_id}/reject", status_code=status.HTTP_204_NO_CONTENT)
async def reject_project(
    project_id: str,
    projects: ProjectService = Depends(get_project_service),
    reviewer: User = Depends(require_roles(Role.REVIEWER)),
) -> None:
    """Reject a project. Rejected projects are deleted."""
    _require_project(projects, project_id)
    await projects.reject(project_id)


# --- Collaboration ---


@router.post("/{project_id}/notes", response_model=ProjectResponse)
async def add_note(
    project_id: str,
    payload: NoteCreateRequest,
    projects: ProjectService = Depends(get_project_service),
    view: ProjectView = Depends(get_project_view),
) -> ProjectResponse:
    project = _require_project(projects, project_id)
    if not can_add_note(view.viewer, project):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only staff or the project's creator can add notes",
        )
    await projects.add_note(project_id, payload.content, view.viewer.name, payload.is_public)
    return _rendered(view, projects, project_id)


# --- Delivery (developers) ---


@router.put("/{project_id}/status", response_model=ProjectResponse)
async def update_status(
    project_id: str,
    payload: StatusUpdateRequest,
    projects: ProjectService = Depends(get_project_service),
    view: ProjectView = Depends(get_project_view),
) -> ProjectResponse:
    _require_delivery_access(view, _require_project(projects, project_id))
    await projects.set_status(project_id, payload.status)
    return _rendered(view, projects, project_id)


@router.post("/{project_id}/credentials", response_model=ProjectResponse)
async def add_credential(
    project_id: str,
    payload: CredentialCreateRequest,
    projects: ProjectService = Depends(get_project_service),
    view: ProjectView = Depends(get_project_view),
) -> ProjectResponse:
    _require_delivery_access(view, _require_project(projects, project_id))
    await projects.add_credential(project_id, payload.type.value, payload.name, payload.value)
    return _rendered(view, projects, project_id)


@router.put("/{project_id}/completion-date", response_model=ProjectResponse)
async def update_completion_date(
    project_id: str,
    payload: DateUpdateRequest,
    projects: ProjectService = Depends(get_project_service),
    view: ProjectView = Depends(get_project_view),
) -> ProjectResponse:
    _require_delivery_access(view, _require_project(projects, project_id))
    await projects.set_completion_date(project_id, payload.value)
    return _rendered(view, projects, project_id)


@router.put("/{project_id}/renewal-date", response_model=ProjectResponse)
async def update_renewal_date(
    project_id: str,
    payload: DateUpdateRequest,
    projects: ProjectService = Depends(get_project_service),
    view: ProjectView = Depends(get_project_view),
) -> ProjectResponse:
    _require_delivery_access(view, _require_project(projects, project_id))
    await projects.set_renewal_date(project_id, payload.value)
    return _rendered(view, projects, project_id)
