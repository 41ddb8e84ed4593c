from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from rich.table import Table

from project_scheduler.core.model import ScheduleResult, ScheduleWarning
from project_scheduler.core.schedule.metrics import DATE_FORMAT


def format_date(value: Optional[datetime]) -> Optional[str]:
    return value.strftime(DATE_FORMAT) if value is not None else None


def warning_to_item(w: ScheduleWarning) -> dict[str, str]:
    return {"task": w.task, "message": w.message, "severity": w.severity}


def result_to_payload(result: ScheduleResult) -> dict[str, Any]:
    """JSON-ready view of a result. Timestamps become YYYY-MM-DD strings."""
    m = result.metrics
    return {
        "tool": "scheduler",
        "command": "schedule",
        "ok": not result.has_errors,
        "recommended_order": list(result.recommended_order),
        "warnings": [warning_to_item(w) for w in result.warnings],
        "metrics": {
            "total_tasks": m.total_tasks,
            "total_estimated_hours": m.total_estimated_hours,
            "critical_path_hours": m.critical_path_hours,
            "estimated_completion_date": format_date(m.estimated_completion_date),
            "critical_path": list(m.critical_path),
        },
        "timeline": [
            {
                "title": t.title,
                "earliest_start": format_date(t.earliest_start),
                "estimated_completion": format_date(t.estimated_completion),
                "due_date": format_date(t.due_date),
                "at_risk": t.at_risk,
            }
            for t in result.timeline
        ],
    }


def summary_lines(result: ScheduleResult) -> list[str]:
    if result.has_errors:
        return [f"FAILED: schedule not computable ({len(result.errors)} errors)"]

    m = result.metrics
    lines = [
        f"OK: {m.total_tasks} tasks, {m.total_estimated_hours} estimated hours",
        "Order: " + " -> ".join(result.recommended_order),
        f"Critical path: {m.critical_path_hours}h (" + " -> ".join(m.critical_path) + ")",
        f"Estimated completion: {format_date(m.estimated_completion_date)}",
    ]
    return lines


def warning_lines(result: ScheduleResult) -> list[str]:
    return [f"{w.severity.upper()}: {w.task}: {w.message}" for w in result.warnings]


def timeline_table(result: ScheduleResult) -> Table:
    table = Table(title="Timeline")
    table.add_column("#", justify="right")
    table.add_column("Task")
    table.add_column("Start")
    table.add_column("Finish")
    table.add_column("Due")
    table.add_column("Risk")
    for i, t in enumerate(result.timeline, start=1):
        table.add_row(
            str(i),
            t.title,
            format_date(t.earliest_start) or "",
            format_date(t.estimated_completion) or "",
            format_date(t.due_date) or "-",
            "at risk" if t.at_risk else "",
        )
    return table
