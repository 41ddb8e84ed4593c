from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional, cast

from project_scheduler.core.config.settings import SchedulerSettings
from project_scheduler.core.errors import ScheduleValidationError
from project_scheduler.core.model import ScheduleRequest, TaskSpec


def _is_list_of_str(v: Any) -> bool:
    return isinstance(v, list) and all(isinstance(x, str) for x in v)


def validate_request(
    raw: dict[str, Any], settings: SchedulerSettings | None = None
) -> tuple[Optional[ScheduleRequest], list[ScheduleValidationError]]:
    """Structural validation of a loaded schedule request.

    Returns (request, errors). Request is None when errors exist.
    Dangling dependencies and cycles are not checked here; the scheduling
    engine reports those as warnings.
    """

    settings = settings or SchedulerSettings()
    file = cast(Optional[str], raw.get("__file__"))
    errors: list[ScheduleValidationError] = []

    tasks = raw.get("tasks")
    if not isinstance(tasks, list):
        errors.append(
            ScheduleValidationError(
                code="E_REQUIRED_FIELD",
                message="tasks is required and must be an array",
                file=file,
                path="tasks",
            )
        )
        return None, _sorted(errors)

    if not tasks:
        errors.append(
            ScheduleValidationError(
                code="E_NO_TASKS",
                message="at least one task is required",
                file=file,
                path="tasks",
            )
        )
        return None, _sorted(errors)

    specs: list[TaskSpec] = []
    seen_titles: set[str] = set()

    for i, item in enumerate(tasks):
        task_path = f"tasks[{i}]"
        if not isinstance(item, dict):
            errors.append(
                ScheduleValidationError(
                    code="E_INVALID_TYPE",
                    message="task must be an object",
                    file=file,
                    path=task_path,
                )
            )
            continue

        title = item.get("title")
        if not isinstance(title, str) or not title.strip():
            errors.append(
                ScheduleValidationError(
                    code="E_REQUIRED_FIELD",
                    message="title is required and must be a non-empty string",
                    file=file,
                    path=f"{task_path}.title",
                )
            )
            continue

        if title in seen_titles:
            errors.append(
                ScheduleValidationError(
                    code="E_DUPLICATE_TITLE",
                    message=f"duplicate task title: {title}",
                    file=file,
                    path=f"{task_path}.title",
                    task=title,
                )
            )
            continue
        seen_titles.add(title)

        hours = item.get("estimated_hours")
        if hours is None:
            errors.append(
                ScheduleValidationError(
                    code="E_REQUIRED_FIELD",
                    message="estimated_hours is required",
                    file=file,
                    path=f"{task_path}.estimated_hours",
                    task=title,
                )
            )
            continue
        if isinstance(hours, bool) or not isinstance(hours, int):
            errors.append(
                ScheduleValidationError(
                    code="E_INVALID_TYPE",
                    message="estimated_hours must be an integer",
                    file=file,
                    path=f"{task_path}.estimated_hours",
                    task=title,
                )
            )
            continue
        if not settings.min_estimated_hours <= hours <= settings.max_estimated_hours:
            errors.append(
                ScheduleValidationError(
                    code="E_OUT_OF_RANGE",
                    message=(
                        f"estimated_hours must be between {settings.min_estimated_hours} "
                        f"and {settings.max_estimated_hours}"
                    ),
                    file=file,
                    path=f"{task_path}.estimated_hours",
                    task=title,
                )
            )
            continue

        due = item.get("due_date")
        if isinstance(due, date):
            # YAML turns unquoted dates into date/datetime objects.
            due = due.isoformat()
        elif due is not None and not isinstance(due, str):
            errors.append(
                ScheduleValidationError(
                    code="E_INVALID_TYPE",
                    message="due_date must be a string",
                    file=file,
                    path=f"{task_path}.due_date",
                    task=title,
                )
            )
            continue

        deps = item.get("dependencies")
        if deps is None:
            deps = []
        if not _is_list_of_str(deps):
            errors.append(
                ScheduleValidationError(
                    code="E_INVALID_TYPE",
                    message="dependencies must be an array of strings",
                    file=file,
                    path=f"{task_path}.dependencies",
                    task=title,
                )
            )
            continue

        specs.append(
            TaskSpec(
                title=title,
                estimated_hours=hours,
                due_date=due or None,
                dependencies=tuple(cast(list[str], deps)),
            )
        )

    if errors:
        return None, _sorted(errors)

    return ScheduleRequest(tasks=tuple(specs)), []


def summarize_request(request: ScheduleRequest) -> str:
    total_hours = sum(t.estimated_hours for t in request.tasks)
    return f"OK: {len(request.tasks)} tasks, {total_hours} estimated hours"


def _sorted(errors: Iterable[ScheduleValidationError]) -> list[ScheduleValidationError]:
    return sorted(
        list(errors),
        key=lambda e: (
            e.file or "",
            e.path or "",
            e.code,
        ),
    )
