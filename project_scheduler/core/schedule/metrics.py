from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from project_scheduler.core.config.settings import SchedulerSettings
from project_scheduler.core.model import ScheduleMetrics, ScheduleWarning, TaskSpec, TaskTimeline


HOURS_PER_WORKDAY = 8
DATE_FORMAT = "%Y-%m-%d"


def parse_due_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 date or datetime into a naive UTC datetime.

    Date-only values mean midnight. Returns None for empty or unparseable input.
    """
    if not value or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def check_due_dates(
    sorted_tasks: Sequence[TaskSpec],
    *,
    now: datetime,
    settings: SchedulerSettings | None = None,
) -> tuple[list[ScheduleWarning], list[TaskTimeline]]:
    """Earliest-start forward pass over tasks in dependency order.

    A task starts when its last dependency completes (or at `now`) and runs
    for its estimated hours, calendar-naive. Tasks finishing after their due
    date get a Warning.
    """
    settings = settings or SchedulerSettings()
    completions: dict[str, datetime] = {}
    warnings: list[ScheduleWarning] = []
    timeline: list[TaskTimeline] = []

    for task in sorted_tasks:
        start = now
        for dep in task.dependencies:
            done = completions.get(dep)
            if done is not None and done > start:
                start = done

        finish = start + timedelta(hours=task.estimated_hours)
        completions[task.title] = finish

        due = parse_due_date(task.due_date)
        if due is None and task.due_date and settings.unparseable_due_dates == "info":
            warnings.append(
                ScheduleWarning(
                    task=task.title,
                    message=f"Due date '{task.due_date}' could not be parsed and was ignored",
                    severity="Info",
                )
            )

        at_risk = False
        if due is not None and finish > due:
            at_risk = True
            warnings.append(
                ScheduleWarning(
                    task=task.title,
                    message=(
                        "Task may not complete by due date. "
                        f"Estimated: {finish.strftime(DATE_FORMAT)}, Due: {due.strftime(DATE_FORMAT)}"
                    ),
                    severity="Warning",
                )
            )

        timeline.append(
            TaskTimeline(
                title=task.title,
                earliest_start=start,
                estimated_completion=finish,
                due_date=due,
                at_risk=at_risk,
            )
        )

    return warnings, timeline


def critical_path(sorted_tasks: Sequence[TaskSpec]) -> tuple[int, list[str]]:
    """Longest chain of dependency-linked tasks, measured in cumulative hours.

    Expects dependency order, so every dependency's length is memoized before
    its dependents are reached. Returns (hours, titles with dependencies first).
    """
    length: dict[str, int] = {}
    via: dict[str, Optional[str]] = {}

    for task in sorted_tasks:
        best = 0
        best_dep: Optional[str] = None
        for dep in task.dependencies:
            dep_len = length.get(dep, 0)
            if dep_len > best:
                best = dep_len
                best_dep = dep
        length[task.title] = task.estimated_hours + best
        via[task.title] = best_dep

    end: Optional[str] = None
    for task in sorted_tasks:
        if end is None or length[task.title] > length[end]:
            end = task.title

    if end is None:
        return 0, []

    chain: list[str] = []
    cur: Optional[str] = end
    while cur is not None:
        chain.append(cur)
        cur = via[cur]
    chain.reverse()
    return length[end], chain


def compute_metrics(sorted_tasks: Sequence[TaskSpec], *, now: datetime) -> ScheduleMetrics:
    total_hours = sum(t.estimated_hours for t in sorted_tasks)
    cp_hours, cp_titles = critical_path(sorted_tasks)

    # Capacity estimate: total effort over one 8-hour workday per calendar day.
    work_days = math.ceil(total_hours / HOURS_PER_WORKDAY)

    return ScheduleMetrics(
        total_tasks=len(sorted_tasks),
        total_estimated_hours=total_hours,
        critical_path_hours=cp_hours,
        estimated_completion_date=now + timedelta(days=work_days),
        critical_path=tuple(cp_titles),
    )
