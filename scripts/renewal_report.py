"""
Print the projects that need attention: overdue deadlines and upcoming renewals.

Reads the persisted project state from the configured database, so run it
from an environment with the same DATABASE_URL as the API.
"""

from __future__ import annotations

import asyncio
import sys
from datetime import date
from pathlib import Path

# Allow importing the src package when run from any directory
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.config import get_settings
from src.domain.services import ProjectService
from src.domain.services.schedule import AttentionLevel, attention_level, sort_by_deadline
from src.infrastructure.db import create_schema, dispose_engine, get_session_factory
from src.infrastructure.repositories.state import SqlStateRepository


async def collect(today: date) -> list[tuple[AttentionLevel, str]]:
    settings = get_settings()
    await create_schema()
    try:
        service = ProjectService(SqlStateRepository(get_session_factory()))
        await service.load()
    finally:
        await dispose_engine()

    rows: list[tuple[AttentionLevel, str]] = []
    for project in sort_by_deadline(service.projects):
        level = attention_level(project, today, settings.renewal_warning_days)
        if level is AttentionLevel.NONE:
            continue
        rows.append(
            (
                level,
                f"{project.reference_id}  {project.client_name:<24} "
                f"deadline={project.deadline or '-'} renewal={project.renewal_date or '-'}",
            )
        )
    return rows


def main() -> None:
    today = date.fromisoformat(sys.argv[1]) if len(sys.argv) > 1 else date.today()
    rows = asyncio.run(collect(today))
    if not rows:
        print(f"Nothing needs attention as of {today}")
        return
    for level, line in rows:
        print(f"[{level.value}] {line}")


if __name__ == "__main__":
    main()
