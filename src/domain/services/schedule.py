"""Derived-date helpers for project listings."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from datetime import date

from src.domain.models import Project

DEFAULT_RENEWAL_WINDOW_DAYS = 15


class AttentionLevel(str, enum.Enum):
    """Highlight applied to a project card."""

    NONE = "none"
    OVERDUE = "overdue"
    RENEWAL_DUE = "renewal_due"


def sort_by_deadline(projects: Iterable[Project]) -> list[Project]:
    """Closest deadline first; projects without a deadline go last."""
    return sorted(projects, key=lambda p: (p.deadline is None, p.deadline or date.min))


def is_deadline_passed(project: Project, today: date) -> bool:
    return project.deadline is not None and project.deadline < today


def is_renewal_due(
    project: Project,
    today: date,
    window_days: int = DEFAULT_RENEWAL_WINDOW_DAYS,
) -> bool:
    """Renewal within ``window_days`` days. Past renewal dates count as due."""
    if project.renewal_date is None:
        return False
    return (project.renewal_date - today).days <= window_days


def attention_level(
    project: Project,
    today: date,
    window_days: int = DEFAULT_RENEWAL_WINDOW_DAYS,
) -> AttentionLevel:
    if is_renewal_due(project, today, window_days):
        return AttentionLevel.RENEWAL_DUE
    if is_deadline_passed(project, today):
        return AttentionLevel.OVERDUE
    return AttentionLevel.NONE


def pending_projects(projects: Iterable[Project]) -> list[Project]:
    return [p for p in projects if not p.approved]


def assigned_project_count(projects: Iterable[Project], developer_id: str) -> int:
    return sum(1 for p in projects if p.assigned_to == developer_id)
