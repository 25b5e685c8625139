"""Role-based visibility rules for notes, credentials and delivery actions."""

from __future__ import annotations

from typing import assert_never

from src.domain.models import Note, Project, Role, User


def can_view_note(viewer: User | None, project: Project, note: Note) -> bool:
    """Public notes are visible to everyone; internal ones to staff and the originator."""
    if note.is_public:
        return True
    if viewer is None:
        return False

    role = viewer.role
    if role is Role.REVIEWER or role is Role.ASSIGNEE:
        return True
    if role is Role.ORIGINATOR:
        return viewer.id == project.created_by
    assert_never(role)


def visible_notes(viewer: User | None, project: Project) -> list[Note]:
    return [note for note in project.notes if can_view_note(viewer, project, note)]


def can_add_note(viewer: User | None, project: Project) -> bool:
    """Staff may note any project; salespeople only the projects they created."""
    if viewer is None:
        return False

    role = viewer.role
    if role is Role.REVIEWER or role is Role.ASSIGNEE:
        return True
    if role is Role.ORIGINATOR:
        return viewer.id == project.created_by
    assert_never(role)


def can_manage_delivery(
    viewer: User | None,
    project: Project,
    *,
    restrict_to_assigned: bool = False,
) -> bool:
    """Gate for status, credential and date operations (and reading credentials).

    By default any developer may act on any project; ``restrict_to_assigned``
    narrows this to the project's own assignee.
    """
    if viewer is None:
        return False

    role = viewer.role
    if role is Role.ASSIGNEE:
        return not restrict_to_assigned or project.assigned_to == viewer.id
    if role is Role.REVIEWER or role is Role.ORIGINATOR:
        return False
    assert_never(role)


def can_review(viewer: User | None) -> bool:
    """Approve, reject and register developers."""
    return viewer is not None and viewer.role is Role.REVIEWER


def can_originate(viewer: User | None) -> bool:
    return viewer is not None and viewer.role is Role.ORIGINATOR
