from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ScheduleError(Exception):
    """Error envelope for the calling layer (loading, validation, settings).

    The scheduling engine itself never raises; its anomalies are
    ScheduleWarning data. `task` names the offending task once its title
    is known, so messages point at "Build" rather than only tasks[3].
    """

    code: str
    message: str
    file: Optional[str] = None
    path: Optional[str] = None
    task: Optional[str] = None

    def __str__(self) -> str:
        loc = ":".join(p for p in (self.file, self.path) if p) or "<request>"
        if self.task:
            loc = f"{loc} ({self.task})"
        return f"{loc}: {self.code}: {self.message}"


class ScheduleLoadError(ScheduleError):
    pass


class ScheduleValidationError(ScheduleError):
    pass
