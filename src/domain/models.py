from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any


class Role(str, enum.Enum):
    """Closed set of roles a user can hold."""

    ORIGINATOR = "originator"  # sales
    REVIEWER = "reviewer"  # CTO
    ASSIGNEE = "assignee"  # developer

    @classmethod
    def contains(cls, value: str) -> bool:
        return value in {role.value for role in cls}


class ProjectStatus(str, enum.Enum):
    """Project workflow status, declared in workflow order."""

    REQUIREMENTS = "requirements"
    DEVELOPMENT = "development"
    PAYMENT = "payment"
    CREDENTIALS = "credentials"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    ProjectStatus.REQUIREMENTS: "Waiting for Requirements",
    ProjectStatus.DEVELOPMENT: "Development In Progress",
    ProjectStatus.PAYMENT: "Waiting for Payment",
    ProjectStatus.CREDENTIALS: "Waiting for Credentials",
    ProjectStatus.COMPLETED: "Completed",
}


class CredentialType(str, enum.Enum):
    DOMAIN = "domain"
    HOSTING = "hosting"
    DATABASE = "database"
    API = "api"
    OTHER = "other"


def utcnow() -> datetime:
    return datetime.now(UTC)


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    # Stored values may be full ISO timestamps; only the calendar day matters.
    return date.fromisoformat(value[:10])


def _format_date(value: date | None) -> str | None:
    return value.isoformat() if value else None


def _parse_datetime(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


@dataclass(frozen=True, slots=True)
class User:
    """A known account. Users are never mutated after creation."""

    id: str
    name: str
    email: str
    role: Role

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email, "role": self.role.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        return cls(
            id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            role=Role(data["role"]),
        )


@dataclass(frozen=True, slots=True)
class Note:
    id: str
    content: str
    author: str
    is_public: bool
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "author": self.author,
            "is_public": self.is_public,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Note:
        return cls(
            id=str(data["id"]),
            content=data["content"],
            author=data["author"],
            is_public=bool(data["is_public"]),
            created_at=_parse_datetime(data["created_at"]),
        )


@dataclass(frozen=True, slots=True)
class Credential:
    """Project secret. The value is stored as given, without encryption."""

    id: str
    type: str
    name: str
    value: str
    date_added: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "value": self.value,
            "date_added": self.date_added.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Credential:
        return cls(
            id=str(data["id"]),
            type=data["type"],
            name=data["name"],
            value=data["value"],
            date_added=_parse_datetime(data["date_added"]),
        )


@dataclass(frozen=True, slots=True)
class NewProject:
    """Caller-supplied fields for project creation."""

    client_name: str
    client_email: str
    client_phone: str
    description: str
    requirements: str
    created_by: str
    status: ProjectStatus = ProjectStatus.REQUIREMENTS


@dataclass(frozen=True, slots=True)
class Project:
    """Client project aggregate. Notes and credentials are append-only."""

    id: str
    reference_id: str
    client_name: str
    client_email: str
    client_phone: str
    description: str
    requirements: str
    status: ProjectStatus
    created_by: str
    created_at: datetime
    approved: bool = False
    assigned_to: str | None = None
    deadline: date | None = None
    completion_date: date | None = None
    renewal_date: date | None = None
    notes: tuple[Note, ...] = ()
    credentials: tuple[Credential, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "reference_id": self.reference_id,
            "client_name": self.client_name,
            "client_email": self.client_email,
            "client_phone": self.client_phone,
            "description": self.description,
            "requirements": self.requirements,
            "status": self.status.value,
            "approved": self.approved,
            "assigned_to": self.assigned_to,
            "deadline": _format_date(self.deadline),
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
            "completion_date": _format_date(self.completion_date),
            "renewal_date": _format_date(self.renewal_date),
            "notes": [note.to_dict() for note in self.notes],
            "credentials": [credential.to_dict() for credential in self.credentials],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Project:
        return cls(
            id=str(data["id"]),
            reference_id=data["reference_id"],
            client_name=data["client_name"],
            client_email=data["client_email"],
            client_phone=data["client_phone"],
            description=data["description"],
            requirements=data["requirements"],
            status=ProjectStatus(data["status"]),
            approved=bool(data["approved"]),
            assigned_to=data.get("assigned_to"),
            deadline=_parse_date(data.get("deadline")),
            created_by=str(data["created_by"]),
            created_at=_parse_datetime(data["created_at"]),
            completion_date=_parse_date(data.get("completion_date")),
            renewal_date=_parse_date(data.get("renewal_date")),
            notes=tuple(Note.from_dict(item) for item in data.get("notes", [])),
            credentials=tuple(Credential.from_dict(item) for item in data.get("credentials", [])),
        )
