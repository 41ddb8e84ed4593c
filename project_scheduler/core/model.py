from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Optional


Severity = Literal["Info", "Warning", "Error"]


@dataclass(frozen=True)
class TaskSpec:
    title: str
    estimated_hours: int
    due_date: Optional[str] = None
    dependencies: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScheduleRequest:
    tasks: tuple[TaskSpec, ...]


@dataclass(frozen=True)
class ScheduleWarning:
    task: str
    message: str
    severity: Severity = "Warning"


@dataclass(frozen=True)
class ScheduleMetrics:
    """Aggregate figures for a computable schedule. The default instance is the zero value."""

    total_tasks: int = 0
    total_estimated_hours: int = 0
    critical_path_hours: int = 0
    estimated_completion_date: Optional[datetime] = None
    critical_path: tuple[str, ...] = ()


@dataclass(frozen=True)
class TaskTimeline:
    title: str
    earliest_start: datetime
    estimated_completion: datetime
    due_date: Optional[datetime] = None
    at_risk: bool = False


@dataclass(frozen=True)
class ScheduleResult:
    recommended_order: tuple[str, ...] = ()
    warnings: tuple[ScheduleWarning, ...] = ()
    metrics: ScheduleMetrics = field(default_factory=ScheduleMetrics)
    timeline: tuple[TaskTimeline, ...] = ()

    @property
    def errors(self) -> list[ScheduleWarning]:
        return [w for w in self.warnings if w.severity == "Error"]

    @property
    def has_errors(self) -> bool:
        return any(w.severity == "Error" for w in self.warnings)
