from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from project_scheduler.core.config.settings import SchedulerSettings
from project_scheduler.core.model import ScheduleRequest, ScheduleResult, ScheduleWarning
from project_scheduler.core.schedule.cycles import cycle_warning, detect_cycle
from project_scheduler.core.schedule.dependencies import (
    find_dangling_dependencies,
    find_duplicate_titles,
)
from project_scheduler.core.schedule.metrics import check_due_dates, compute_metrics
from project_scheduler.core.schedule.toposort import topological_order


logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_schedule(
    request: ScheduleRequest,
    *,
    now: Optional[datetime] = None,
    settings: SchedulerSettings | None = None,
) -> ScheduleResult:
    """Compute order, warnings and metrics for one request.

    Never raises for structurally valid input. Duplicate titles, dangling
    dependencies and cycles come back as Error warnings, and any Error means
    an empty order with zero metrics. `now` is the reference instant for
    earliest starts and the completion estimate; it is read once when omitted.
    """

    settings = settings or SchedulerSettings()
    if now is None:
        now = utc_now()
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)

    tasks = request.tasks
    logger.debug("scheduling %d tasks from %s", len(tasks), now.isoformat())

    warnings: list[ScheduleWarning] = []

    duplicates = find_duplicate_titles(tasks)
    warnings.extend(duplicates)
    warnings.extend(find_dangling_dependencies(tasks))
    if duplicates:
        logger.info("duplicate task titles, schedule not computable")
        return ScheduleResult(warnings=tuple(warnings))

    cycle = detect_cycle(tasks)
    if cycle:
        logger.info("dependency cycle: %s", " -> ".join(cycle))
        warnings.append(cycle_warning(cycle))
        return ScheduleResult(warnings=tuple(warnings))

    if any(w.severity == "Error" for w in warnings):
        logger.info("%d unknown dependencies, schedule not computable", len(warnings))
        return ScheduleResult(warnings=tuple(warnings))

    ordered = topological_order(tasks)
    risk, timeline = check_due_dates(ordered, now=now, settings=settings)
    warnings.extend(risk)
    metrics = compute_metrics(ordered, now=now)

    logger.debug(
        "schedule ready: %d tasks, critical path %dh, %d warnings",
        metrics.total_tasks,
        metrics.critical_path_hours,
        len(warnings),
    )

    return ScheduleResult(
        recommended_order=tuple(t.title for t in ordered),
        warnings=tuple(warnings),
        metrics=metrics,
        timeline=tuple(timeline),
    )
