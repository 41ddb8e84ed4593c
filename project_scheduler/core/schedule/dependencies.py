from __future__ import annotations

from collections import Counter
from typing import Sequence

from project_scheduler.core.model import ScheduleWarning, TaskSpec


def index_by_title(tasks: Sequence[TaskSpec]) -> dict[str, TaskSpec]:
    """Title -> task lookup. The first task wins when titles repeat."""
    out: dict[str, TaskSpec] = {}
    for t in tasks:
        out.setdefault(t.title, t)
    return out


def find_dangling_dependencies(tasks: Sequence[TaskSpec]) -> list[ScheduleWarning]:
    titles = {t.title for t in tasks}
    warnings: list[ScheduleWarning] = []
    for task in tasks:
        for dep in task.dependencies:
            if dep not in titles:
                warnings.append(
                    ScheduleWarning(
                        task=task.title,
                        message=f"Dependency '{dep}' not found in task list",
                        severity="Error",
                    )
                )
    return warnings


def find_duplicate_titles(tasks: Sequence[TaskSpec]) -> list[ScheduleWarning]:
    counts = Counter(t.title for t in tasks)
    warnings: list[ScheduleWarning] = []
    reported: set[str] = set()
    for task in tasks:
        n = counts[task.title]
        if n < 2 or task.title in reported:
            continue
        reported.add(task.title)
        warnings.append(
            ScheduleWarning(
                task=task.title,
                message=f"Duplicate task title '{task.title}' (appears {n} times)",
                severity="Error",
            )
        )
    return warnings
