from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from project_scheduler.core.errors import ScheduleLoadError


# Request files written against the HTTP API use camelCase field names.
_KEY_ALIASES: dict[str, str] = {
    "estimatedHours": "estimated_hours",
    "dueDate": "due_date",
}

_TASK_KEYS: tuple[str, ...] = ("title", "estimated_hours", "due_date", "dependencies")


def load_request(path: str) -> dict[str, Any]:
    """Load a YAML/JSON schedule request file.

    Returns a dict with key: tasks (plus __file__).
    Does not coerce types; validator owns shape checking.
    """

    p = Path(path)
    if not p.exists():
        raise ScheduleLoadError(
            code="E_FILE_NOT_FOUND",
            message="file does not exist",
            file=str(p),
        )

    suffix = p.suffix.lower()
    try:
        raw_text = p.read_text(encoding="utf-8")
    except OSError as e:  # pragma: no cover
        raise ScheduleLoadError(code="E_FILE_READ", message=str(e), file=str(p)) from e

    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(raw_text)
        elif suffix == ".json":
            data = json.loads(raw_text)
        else:
            raise ScheduleLoadError(
                code="E_UNSUPPORTED_FORMAT",
                message="supported formats are .yaml/.yml and .json",
                file=str(p),
            )
    except ScheduleLoadError:
        raise
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        code = "E_YAML_PARSE" if suffix in {".yaml", ".yml"} else "E_JSON_PARSE"
        raise ScheduleLoadError(code=code, message=str(e), file=str(p)) from e

    if not isinstance(data, dict):
        raise ScheduleLoadError(
            code="E_INVALID_TOP_LEVEL",
            message="top-level document must be a mapping/object",
            file=str(p),
        )

    tasks = data.get("tasks")
    if isinstance(tasks, list):
        tasks = [_normalize_task(t) for t in tasks]

    normalized: dict[str, Any] = {"tasks": tasks, "__file__": str(p)}
    return normalized


def _normalize_task(raw: Any) -> Any:
    if not isinstance(raw, dict):
        return raw
    out: dict[str, Any] = {}
    for k, v in raw.items():
        key = _KEY_ALIASES.get(k, k)
        if key in _TASK_KEYS:
            out.setdefault(key, v)
    return out
