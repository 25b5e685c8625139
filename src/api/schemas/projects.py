"""Pydantic schemas for project endpoints."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from src.domain import CredentialType, ProjectStatus
from src.domain.services.schedule import AttentionLevel

# --- Request Schemas ---


class CreateProjectRequest(BaseModel):
    """Fields a salesperson provides for a new client project."""

    model_config = ConfigDict(str_strip_whitespace=True)

    client_name: str = Field(..., min_length=1, max_length=200)
    client_email: EmailStr
    client_phone: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1)
    requirements: str = Field(..., min_length=1)
    status: ProjectStatus = Field(default=ProjectStatus.REQUIREMENTS)


class ApproveProjectRequest(BaseModel):
    developer_id: str = Field(..., min_length=1, description="Assignee user id")
    deadline: date = Field(..., description="Delivery deadline")


class StatusUpdateRequest(BaseModel):
    status: ProjectStatus


class NoteCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(..., min_length=1)
    is_public: bool = Field(default=False, description="Visible to every viewer")


class CredentialCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    type: CredentialType = Field(default=CredentialType.DOMAIN)
    name: str = Field(..., min_length=1, max_length=200)
    value: str = Field(..., min_length=1)


class DateUpdateRequest(BaseModel):
    value: date = Field(..., description="Calendar date (YYYY-MM-DD)")


# --- Response Schemas ---


class NoteResponse(BaseModel):
    id: str
    content: str
    author: str
    is_public: bool
    created_at: datetime


class CredentialResponse(BaseModel):
    id: str
    type: str
    name: str
    value: str
    date_added: datetime


class ProjectResponse(BaseModel):
    """Project as seen by the requesting user."""

    id: str
    reference_id: str
    client_name: str
    client_email: str
    client_phone: str
    description: str
    requirements: str
    status: ProjectStatus
    status_label: str
    approved: bool
    assigned_to: str | None = None
    assignee_name: str | None = None
    deadline: date | None = None
    created_by: str
    created_by_name: str | None = None
    created_at: datetime
    completion_date: date | None = None
    renewal_date: date | None = None
    attention: AttentionLevel = AttentionLevel.NONE
    notes: list[NoteResponse] = Field(default_factory=list)
    credentials: list[CredentialResponse] | None = Field(
        default=None, description="Present only for users allowed to manage delivery"
    )


class ProjectListResponse(BaseModel):
    projects: list[ProjectResponse]
