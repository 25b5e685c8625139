"""
Project service.

Holds the project list and every project mutation. Each mutation builds a
new list (unaffected projects keep their positions), persists it, swaps it
in once the save succeeds, and publishes a user-facing notification.
Mutations are serialized so snapshots reach the repository in order.
"""

from __future__ import annotations

import asyncio
import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Protocol

import structlog
from src.domain.models import (
    Credential,
    NewProject,
    Note,
    Project,
    ProjectStatus,
    utcnow,
)
from src.domain.reference_data import SEED_PROJECTS
from src.domain.services.identifiers import IdFactory, generate_reference_id, new_id
from src.infrastructure.repositories.state import PROJECTS_KEY, StateRepository

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class Notification:
    """Message for the UI layer (toast)."""

    title: str
    description: str
    variant: str = "default"


class Notifier(Protocol):
    def __call__(self, notification: Notification) -> None: ...


def log_notifier(notification: Notification) -> None:
    logger.info(
        "notification",
        title=notification.title,
        description=notification.description,
        variant=notification.variant,
    )


class ProjectService:
    """In-process project store backed by a state repository."""

    def __init__(
        self,
        repository: StateRepository,
        *,
        notifier: Notifier = log_notifier,
        id_factory: IdFactory = new_id,
        reference_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] = utcnow,
        reference_prefix: str = "CMT",
    ) -> None:
        self.repository = repository
        self.notifier = notifier
        self.id_factory = id_factory
        self.reference_factory = reference_factory or (
            lambda: generate_reference_id(reference_prefix)
        )
        self.clock = clock
        self._projects: tuple[Project, ...] = ()
        # Held from building a new list through its save, so saves land in order.
        self._lock = asyncio.Lock()

    @property
    def projects(self) -> tuple[Project, ...]:
        return self._projects

    async def load(self) -> None:
        """Restore projects, seeding the demo projects on first run."""
        stored = await self.repository.load(PROJECTS_KEY)
        if stored is None:
            await self._commit(
                lambda _: tuple(Project.from_dict(item) for item in SEED_PROJECTS)
            )
            logger.info("projects_seeded", projects=len(self._projects))
        else:
            self._projects = tuple(Project.from_dict(item) for item in stored)
        logger.info("projects_loaded", projects=len(self._projects))

    # --- Mutations ---

    async def create(self, fields: NewProject) -> Project:
        """Append a new unapproved, unassigned project and return it."""
        project = Project(
            id=self.id_factory(),
            reference_id=self.reference_factory(),
            client_name=fields.client_name,
            client_email=fields.client_email,
            client_phone=fields.client_phone,
            description=fields.description,
            requirements=fields.requirements,
            status=fields.status,
            created_by=fields.created_by,
            created_at=self.clock(),
        )
        await self._commit(lambda current: (*current, project))
        await logger.ainfo(
            "project_created",
            project_id=project.id,
            reference_id=project.reference_id,
            created_by=project.created_by,
        )
        self._notify("Project Created", f"Reference ID: {project.reference_id}")
        return project

    async def approve(self, project_id: str, assignee_id: str, deadline: date) -> None:
        """Approve, assign and set the deadline as a single replacement."""
        changed = await self._update(
            project_id,
            lambda p: dataclasses.replace(
                p, approved=True, assigned_to=assignee_id, deadline=deadline
            ),
        )
        await logger.ainfo(
            "project_approved",
            project_id=project_id,
            assignee_id=assignee_id,
            deadline=deadline.isoformat(),
            found=changed,
        )
        self._notify("Project Approved", "Project has been assigned to a developer")

    async def reject(self, project_id: str) -> None:
        """Hard-delete the project."""

        def build(current: tuple[Project, ...]) -> tuple[Project, ...] | None:
            remaining = tuple(p for p in current if p.id != project_id)
            return remaining if len(remaining) != len(current) else None

        removed = await self._commit(build)
        await logger.ainfo("project_rejected", project_id=project_id, found=removed)
        self._notify(
            "Project Rejected",
            "Project has been removed from the system",
            variant="destructive",
        )

    async def set_status(self, project_id: str, status: ProjectStatus) -> None:
        # Any status may follow any other.
        changed = await self._update(project_id, lambda p: dataclasses.replace(p, status=status))
        await logger.ainfo(
            "project_status_updated", project_id=project_id, status=status.value, found=changed
        )
        self._notify("Status Updated", f"Project now marked as: {status.value}")

    async def add_note(self, project_id: str, content: str, author: str, is_public: bool) -> None:
        note = Note(
            id=self.id_factory(),
            content=content,
            author=author,
            is_public=is_public,
            created_at=self.clock(),
        )
        changed = await self._update(
            project_id, lambda p: dataclasses.replace(p, notes=(*p.notes, note))
        )
        await logger.ainfo(
            "project_note_added",
            project_id=project_id,
            note_id=note.id,
            is_public=is_public,
            found=changed,
        )
        self._notify("Note Added", "Your note has been added to the project")

    async def add_credential(
        self, project_id: str, type: str, name: str, value: str
    ) -> None:
        credential = Credential(
            id=self.id_factory(),
            type=type,
            name=name,
            value=value,
            date_added=self.clock(),
        )
        changed = await self._update(
            project_id,
            lambda p: dataclasses.replace(p, credentials=(*p.credentials, credential)),
        )
        await logger.ainfo(
            "project_credential_added",
            project_id=project_id,
            credential_id=credential.id,
            credential_type=type,
            found=changed,
        )
        self._notify("Credential Stored", f"{type} credential has been securely stored")

    async def set_completion_date(self, project_id: str, completion_date: date) -> None:
        changed = await self._update(
            project_id, lambda p: dataclasses.replace(p, completion_date=completion_date)
        )
        await logger.ainfo("project_completion_date_updated", project_id=project_id, found=changed)
        self._notify("Completion Date Updated", "Project completion date has been set")

    async def set_renewal_date(self, project_id: str, renewal_date: date) -> None:
        changed = await self._update(
            project_id, lambda p: dataclasses.replace(p, renewal_date=renewal_date)
        )
        await logger.ainfo("project_renewal_date_updated", project_id=project_id, found=changed)
        self._notify("Renewal Date Updated", "Project renewal date has been set")

    # --- Lookups ---

    def find_by_reference(self, reference_id: str) -> Project | None:
        return next((p for p in self._projects if p.reference_id == reference_id), None)

    def find_by_id(self, project_id: str) -> Project | None:
        return next((p for p in self._projects if p.id == project_id), None)

    # --- Internals ---

    async def _update(self, project_id: str, change: Callable[[Project], Project]) -> bool:
        """Apply ``change`` to the matching project. Unknown ids leave state untouched."""

        def build(current: tuple[Project, ...]) -> tuple[Project, ...] | None:
            if not any(p.id == project_id for p in current):
                return None
            return tuple(change(p) if p.id == project_id else p for p in current)

        return await self._commit(build)

    async def _commit(
        self, build: Callable[[tuple[Project, ...]], tuple[Project, ...] | None]
    ) -> bool:
        """Build the next list from the current one, save it, then publish it.

        ``build`` returning None means nothing changes. A failed save leaves
        the in-memory list as it was.
        """
        async with self._lock:
            projects = build(self._projects)
            if projects is None:
                return False
            snapshot: list[dict[str, Any]] = [p.to_dict() for p in projects]
            await self.repository.save(PROJECTS_KEY, snapshot)
            self._projects = projects
        return True

    def _notify(self, title: str, description: str, *, variant: str = "default") -> None:
        self.notifier(Notification(title=title, description=description, variant=variant))
