"""Unit tests for note visibility and role gates."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from src.domain import Note, Project, ProjectStatus, Role, User
from src.domain.services.visibility import (
    can_add_note,
    can_manage_delivery,
    can_originate,
    can_review,
    can_view_note,
    visible_notes,
)

SALES = User(id="1", name="Sales User", email="sales@cmtai.com", role=Role.ORIGINATOR)
OTHER_SALES = User(id="9", name="Other Sales", email="other@cmtai.com", role=Role.ORIGINATOR)
CTO = User(id="2", name="CTO", email="cto@cmtai.com", role=Role.REVIEWER)
DEV1 = User(id="3", name="Developer 1", email="dev1@cmtai.com", role=Role.ASSIGNEE)
DEV2 = User(id="4", name="Developer 2", email="dev2@cmtai.com", role=Role.ASSIGNEE)

CREATED = datetime(2025, 3, 1, tzinfo=UTC)
PUBLIC_NOTE = Note(id="n1", content="public", author="Sales User", is_public=True, created_at=CREATED)
INTERNAL_NOTE = Note(
    id="n2", content="internal", author="Developer 1", is_public=False, created_at=CREATED
)


@pytest.fixture
def project() -> Project:
    """Approved project created by SALES and assigned to DEV1."""
    return Project(
        id="1",
        reference_id="CMT-123456-001",
        client_name="Acme Corp",
        client_email="contact@acme.com",
        client_phone="555-123-4567",
        description="Shop",
        requirements="Payments",
        status=ProjectStatus.DEVELOPMENT,
        created_by="1",
        created_at=CREATED,
        approved=True,
        assigned_to="3",
        notes=(PUBLIC_NOTE, INTERNAL_NOTE),
    )


class TestNoteVisibility:
    """Tests for which notes each viewer sees."""

    @pytest.mark.parametrize("viewer", [CTO, DEV1, DEV2, SALES])
    def test_staff_and_originator_see_internal_notes(self, viewer: User, project: Project) -> None:
        """Reviewers, developers and the creator see internal notes."""
        assert can_view_note(viewer, project, INTERNAL_NOTE)

    def test_other_originator_sees_only_public_notes(self, project: Project) -> None:
        """A salesperson who did not create the project sees public notes only."""
        assert visible_notes(OTHER_SALES, project) == [PUBLIC_NOTE]

    def test_anonymous_sees_only_public_notes(self, project: Project) -> None:
        """Without a viewer only public notes are shown."""
        assert visible_notes(None, project) == [PUBLIC_NOTE]

    def test_visible_notes_keep_append_order(self, project: Project) -> None:
        """Filtering keeps the order notes were added in."""
        assert visible_notes(CTO, project) == [PUBLIC_NOTE, INTERNAL_NOTE]


class TestNoteAuthoring:
    """Tests for who may add notes."""

    @pytest.mark.parametrize("viewer", [CTO, DEV1, DEV2, SALES])
    def test_staff_and_creator_may_add_notes(self, viewer: User, project: Project) -> None:
        """Reviewers, any developer and the creating salesperson may add notes."""
        assert can_add_note(viewer, project)

    @pytest.mark.parametrize("viewer", [OTHER_SALES, None])
    def test_other_originators_and_anonymous_may_not(
        self, viewer: User | None, project: Project
    ) -> None:
        """Other salespeople and anonymous viewers may not add notes."""
        assert not can_add_note(viewer, project)


class TestDeliveryGate:
    """Tests for the delivery (status, credentials, dates) gate."""

    def test_any_developer_may_manage_by_default(self, project: Project) -> None:
        """Every developer passes the gate unless restriction is on."""
        assert can_manage_delivery(DEV1, project)
        assert can_manage_delivery(DEV2, project)

    @pytest.mark.parametrize("viewer", [CTO, SALES, None])
    def test_non_developers_may_not_manage(self, viewer: User | None, project: Project) -> None:
        """Reviewers, salespeople and anonymous viewers never pass."""
        assert not can_manage_delivery(viewer, project)

    def test_restricted_mode_limits_to_assigned_developer(self, project: Project) -> None:
        """With restriction on, only the assigned developer passes."""
        assert can_manage_delivery(DEV1, project, restrict_to_assigned=True)
        assert not can_manage_delivery(DEV2, project, restrict_to_assigned=True)


class TestRoleGates:
    """Tests for review and origination gates."""

    def test_review_is_reviewer_only(self) -> None:
        """Only the reviewer may review."""
        assert can_review(CTO)
        assert not can_review(SALES)
        assert not can_review(DEV1)
        assert not can_review(None)

    def test_origination_is_sales_only(self) -> None:
        """Only salespeople may create projects."""
        assert can_originate(SALES)
        assert not can_originate(CTO)
        assert not can_originate(DEV1)
