"""Unit tests for the project service."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any

import pytest
from src.domain import NewProject, ProjectStatus
from src.domain.services.identifiers import is_reference_id
from src.domain.services.projects import Notification, ProjectService
from src.infrastructure.repositories.state import PROJECTS_KEY, InMemoryStateRepository


def new_project(**overrides) -> NewProject:
    fields = {
        "client_name": "Acme",
        "client_email": "owner@acme.example.com",
        "client_phone": "555-000-1111",
        "description": "Marketing site rebuild",
        "requirements": "CMS, blog, contact form",
        "created_by": "1",
    }
    fields.update(overrides)
    return NewProject(**fields)


@dataclass
class SlowFirstSaveRepository(InMemoryStateRepository):
    """Delays the first projects save after seeding, so a later save can overtake it."""

    delay_seconds: float = 0.05
    armed: bool = False

    async def save(self, key: str, snapshot: Any) -> None:
        if key == PROJECTS_KEY and self.armed:
            self.armed = False
            await asyncio.sleep(self.delay_seconds)
        await super().save(key, snapshot)


@dataclass
class FailingSaveRepository(InMemoryStateRepository):
    """Raises on projects saves once ``failing`` is set."""

    failing: bool = False

    async def save(self, key: str, snapshot: Any) -> None:
        if key == PROJECTS_KEY and self.failing:
            raise ConnectionError("state store unavailable")
        await super().save(key, snapshot)


class TestLoad:
    """Tests for seeding and restoring projects."""

    @pytest.mark.asyncio
    async def test_first_run_seeds_demo_projects(
        self, project_service: ProjectService, repository: InMemoryStateRepository
    ) -> None:
        """An empty store is seeded with the two demo projects."""
        assert [p.client_name for p in project_service.projects] == ["Acme Corp", "TechStart Inc"]
        assert len(await repository.load(PROJECTS_KEY)) == 2

    @pytest.mark.asyncio
    async def test_reload_restores_mutations(
        self, project_service: ProjectService, repository: InMemoryStateRepository
    ) -> None:
        """A fresh service over the same store sees earlier mutations."""
        created = await project_service.create(new_project())
        await project_service.add_note(created.id, "Kickoff booked", "Sales User", True)

        reloaded = ProjectService(repository, notifier=lambda _: None)
        await reloaded.load()

        project = reloaded.find_by_id(created.id)
        assert project is not None
        assert project == project_service.find_by_id(created.id)


class TestPersistenceOrdering:
    """Tests for how overlapping mutations reach the store."""

    @pytest.mark.asyncio
    async def test_overlapping_mutations_persist_latest_state(self) -> None:
        """A slow earlier save must not overwrite a later one."""
        repository = SlowFirstSaveRepository()
        service = ProjectService(repository, notifier=lambda _: None)
        await service.load()
        repository.armed = True

        await asyncio.gather(
            service.set_renewal_date("1", date(2027, 1, 1)),
            service.approve("2", "3", date(2026, 12, 1)),
        )

        reloaded = ProjectService(repository, notifier=lambda _: None)
        await reloaded.load()
        assert reloaded.projects == service.projects
        approved = reloaded.find_by_id("2")
        assert approved is not None
        assert approved.approved is True
        assert approved.assigned_to == "3"
        renewed = reloaded.find_by_id("1")
        assert renewed is not None
        assert renewed.renewal_date == date(2027, 1, 1)

    @pytest.mark.asyncio
    async def test_concurrent_creates_are_all_kept(self) -> None:
        """Every project created in parallel survives a reload."""
        repository = SlowFirstSaveRepository()
        service = ProjectService(repository, notifier=lambda _: None)
        await service.load()
        repository.armed = True

        created = await asyncio.gather(
            *(service.create(new_project(client_name=f"Client {i}")) for i in range(3))
        )

        reloaded = ProjectService(repository, notifier=lambda _: None)
        await reloaded.load()
        assert [p.id for p in reloaded.projects][-3:] == [p.id for p in created]

    @pytest.mark.asyncio
    async def test_failed_save_leaves_projects_unchanged(self) -> None:
        """Memory keeps the previous list when the store rejects a save."""
        repository = FailingSaveRepository()
        service = ProjectService(repository, notifier=lambda _: None)
        await service.load()
        before = service.projects
        repository.failing = True

        with pytest.raises(ConnectionError):
            await service.approve("2", "3", date(2026, 12, 1))

        assert service.projects == before
        assert await repository.load(PROJECTS_KEY) == [p.to_dict() for p in before]


class TestCreate:
    """Tests for project creation."""

    @pytest.mark.asyncio
    async def test_create_applies_defaults(self, project_service: ProjectService) -> None:
        """New projects start unapproved, unassigned and undated."""
        project = await project_service.create(new_project())

        assert project.approved is False
        assert project.assigned_to is None
        assert project.deadline is None
        assert project.completion_date is None
        assert project.renewal_date is None
        assert project.notes == ()
        assert project.credentials == ()
        assert project.status is ProjectStatus.REQUIREMENTS
        assert is_reference_id(project.reference_id)
        assert project.reference_id.startswith("CMT-")

    @pytest.mark.asyncio
    async def test_create_appends_to_end(self, project_service: ProjectService) -> None:
        """Existing projects keep their order ahead of the new one."""
        before = project_service.projects

        project = await project_service.create(new_project(client_name="Globex"))

        assert project_service.projects[:-1] == before
        assert project_service.projects[-1] == project

    @pytest.mark.asyncio
    async def test_create_uses_injected_factories(
        self, repository: InMemoryStateRepository
    ) -> None:
        """Ids, reference codes and timestamps come from the injected factories."""
        fixed = datetime(2025, 6, 1, 9, 30, tzinfo=UTC)
        service = ProjectService(
            repository,
            notifier=lambda _: None,
            id_factory=lambda: "p-1",
            reference_factory=lambda: "CMT-000001-001",
            clock=lambda: fixed,
        )
        await service.load()

        project = await service.create(new_project())

        assert project.id == "p-1"
        assert project.reference_id == "CMT-000001-001"
        assert project.created_at == fixed

    @pytest.mark.asyncio
    async def test_create_notifies_with_reference(
        self, project_service: ProjectService, notifications: list[Notification]
    ) -> None:
        """The creation notice quotes the reference code."""
        project = await project_service.create(new_project())

        assert notifications[-1].title == "Project Created"
        assert project.reference_id in notifications[-1].description


class TestApprove:
    """Tests for approval and assignment."""

    @pytest.mark.asyncio
    async def test_approve_sets_assignment_and_deadline(
        self, project_service: ProjectService
    ) -> None:
        """Approval sets the flag, the developer and the deadline together."""
        project = await project_service.create(new_project())

        await project_service.approve(project.id, "4", date(2025, 9, 30))

        approved = project_service.find_by_id(project.id)
        assert approved is not None
        assert approved.approved is True
        assert approved.assigned_to == "4"
        assert approved.deadline == date(2025, 9, 30)

    @pytest.mark.asyncio
    async def test_approve_unknown_id_is_noop(self, project_service: ProjectService) -> None:
        """Approving a missing project changes nothing."""
        before = project_service.projects

        await project_service.approve("missing", "3", date(2025, 9, 30))

        assert project_service.projects == before

    @pytest.mark.asyncio
    async def test_approve_keeps_positions(self, project_service: ProjectService) -> None:
        """The approved project stays where it was in the list."""
        ids_before = [p.id for p in project_service.projects]

        await project_service.approve("2", "3", date(2025, 7, 1))

        assert [p.id for p in project_service.projects] == ids_before
        assert project_service.projects[0] == project_service.find_by_id("1")


class TestReject:
    """Tests for rejection."""

    @pytest.mark.asyncio
    async def test_reject_removes_exactly_one(self, project_service: ProjectService) -> None:
        """Only the rejected project is deleted."""
        before = len(project_service.projects)

        await project_service.reject("2")

        assert len(project_service.projects) == before - 1
        assert project_service.find_by_id("2") is None
        assert project_service.find_by_id("1") is not None

    @pytest.mark.asyncio
    async def test_reject_unknown_id_is_noop(
        self, project_service: ProjectService, notifications: list[Notification]
    ) -> None:
        """Rejecting a missing project keeps the list but still notifies."""
        before = project_service.projects

        await project_service.reject("missing")

        assert project_service.projects == before
        assert notifications[-1].variant == "destructive"


class TestStatus:
    """Tests for status updates."""

    @pytest.mark.asyncio
    async def test_any_status_may_follow_any_other(self, project_service: ProjectService) -> None:
        """Status changes are not constrained to workflow order."""
        await project_service.set_status("1", ProjectStatus.COMPLETED)
        await project_service.set_status("1", ProjectStatus.REQUIREMENTS)

        project = project_service.find_by_id("1")
        assert project is not None
        assert project.status is ProjectStatus.REQUIREMENTS


class TestAppendOnlyChildren:
    """Tests for notes and credentials."""

    @pytest.mark.asyncio
    async def test_add_note_appends(self, project_service: ProjectService) -> None:
        """A note is added after the existing ones, which stay untouched."""
        original = project_service.find_by_id("1")
        assert original is not None

        await project_service.add_note("1", "Staging is live", "Developer 1", False)

        updated = project_service.find_by_id("1")
        assert updated is not None
        assert len(updated.notes) == len(original.notes) + 1
        assert updated.notes[:-1] == original.notes
        note = updated.notes[-1]
        assert note.content == "Staging is live"
        assert note.author == "Developer 1"
        assert note.is_public is False

    @pytest.mark.asyncio
    async def test_add_credential_appends(self, project_service: ProjectService) -> None:
        """Credentials keep insertion order and their raw values."""
        await project_service.add_credential("1", "hosting", "cPanel", "user:pass")
        await project_service.add_credential("1", "domain", "Registrar", "acme-login")

        project = project_service.find_by_id("1")
        assert project is not None
        assert [c.name for c in project.credentials] == ["cPanel", "Registrar"]
        assert project.credentials[0].value == "user:pass"

    @pytest.mark.asyncio
    async def test_child_mutations_on_unknown_project_are_noops(
        self, project_service: ProjectService
    ) -> None:
        """Notes and credentials for a missing project are dropped."""
        before = project_service.projects

        await project_service.add_note("missing", "x", "y", True)
        await project_service.add_credential("missing", "api", "key", "secret")

        assert project_service.projects == before


class TestDates:
    """Tests for completion and renewal dates."""

    @pytest.mark.asyncio
    async def test_set_completion_and_renewal_dates(self, project_service: ProjectService) -> None:
        """Both dates are stored as given."""
        await project_service.set_completion_date("1", date(2025, 5, 10))
        await project_service.set_renewal_date("1", date(2026, 5, 10))

        project = project_service.find_by_id("1")
        assert project is not None
        assert project.completion_date == date(2025, 5, 10)
        assert project.renewal_date == date(2026, 5, 10)


class TestLookups:
    """Tests for project lookups."""

    @pytest.mark.asyncio
    async def test_find_by_reference(self, project_service: ProjectService) -> None:
        """Reference codes resolve to their project, unknown codes to None."""
        project = project_service.find_by_reference("CMT-789012-002")

        assert project is not None
        assert project.client_name == "TechStart Inc"
        assert project_service.find_by_reference("CMT-000000-000") is None

    @pytest.mark.asyncio
    async def test_find_by_id_missing(self, project_service: ProjectService) -> None:
        """Unknown ids resolve to None."""
        assert project_service.find_by_id("missing") is None
