from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Optional

import typer
from rich.console import Console

from project_scheduler.core.config.settings import (
    SchedulerSettings,
    SettingsConfigError,
    load_and_merge,
)
from project_scheduler.core.errors import (
    ScheduleError,
    ScheduleLoadError,
    ScheduleValidationError,
)
from project_scheduler.core.io.load_request import load_request
from project_scheduler.core.report import (
    result_to_payload,
    summary_lines,
    timeline_table,
    warning_lines,
)
from project_scheduler.core.schedule.generate_schedule import generate_schedule
from project_scheduler.core.validate.validate_request import summarize_request, validate_request

app = typer.Typer(add_completion=False, no_args_is_help=True)

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@app.callback()
def _callback() -> None:
    """Project scheduler CLI."""
    return


def setup_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command("validate")
def validate(
    path: str = typer.Argument(..., help="Path to a request file (.yaml/.yml/.json)"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
    config: Optional[str] = typer.Option(None, "--config", help="Optional YAML settings file"),
) -> None:
    """Check a request file's structure without scheduling it."""
    _check_format(format, "E_VALIDATE_UNKNOWN_FORMAT")
    settings = _load_settings(config)

    def _emit_json(ok: bool, *, exit_code: int, errors: list[ScheduleError], summary: dict | None) -> None:
        payload = {
            "tool": "scheduler",
            "command": "validate",
            "ok": ok,
            "error_count": len(errors),
            "errors": [_to_item(e) for e in errors],
            "summary": summary,
        }
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        raise typer.Exit(code=exit_code)

    try:
        raw = load_request(path)
    except ScheduleLoadError as e:
        if format == "json":
            _emit_json(False, exit_code=1, errors=[e], summary=None)
        _print_errors([e])
        raise typer.Exit(code=1)

    request, errors = validate_request(raw, settings)
    if errors:
        if format == "json":
            _emit_json(False, exit_code=2, errors=list(errors), summary=None)
        _print_errors(list(errors))
        raise typer.Exit(code=2)

    assert request is not None

    if format == "text":
        typer.echo(summarize_request(request))
        return

    summary = {
        "task_count": len(request.tasks),
        "total_estimated_hours": sum(t.estimated_hours for t in request.tasks),
        "titles": [t.title for t in request.tasks],
    }
    _emit_json(True, exit_code=0, errors=[], summary=summary)


@app.command("schedule")
def schedule(
    path: str = typer.Argument(..., help="Path to a request file (.yaml/.yml/.json)"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
    now: Optional[str] = typer.Option(
        None,
        "--now",
        help="Reference instant (ISO date or datetime, UTC). Defaults to the current time.",
    ),
    config: Optional[str] = typer.Option(None, "--config", help="Optional YAML settings file"),
    log_level: str = typer.Option("WARNING", "--log-level", help="DEBUG|INFO|WARNING|ERROR"),
) -> None:
    """Compute a dependency-respecting order, due-date risks and project metrics."""
    _check_format(format, "E_SCHEDULE_UNKNOWN_FORMAT")
    if log_level.upper() not in LOG_LEVELS:
        _print_errors(
            [
                ScheduleValidationError(
                    code="E_SCHEDULE_UNKNOWN_LOG_LEVEL",
                    message=f"unknown log level: {log_level} (choose one of: {', '.join(LOG_LEVELS)})",
                    path="log_level",
                )
            ]
        )
        raise typer.Exit(code=2)
    setup_logging(log_level)

    reference = _parse_now(now)
    settings = _load_settings(config)

    def _emit_json(errors: list[ScheduleError], exit_code: int) -> None:
        payload = {
            "tool": "scheduler",
            "command": "schedule",
            "ok": False,
            "error_count": len(errors),
            "errors": [_to_item(e) for e in errors],
        }
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        raise typer.Exit(code=exit_code)

    try:
        raw = load_request(path)
    except ScheduleLoadError as e:
        if format == "json":
            _emit_json([e], 1)
        _print_errors([e])
        raise typer.Exit(code=1)

    request, errors = validate_request(raw, settings)
    if errors or request is None:
        if format == "json":
            _emit_json(list(errors), 2)
        _print_errors(list(errors))
        raise typer.Exit(code=2)

    result = generate_schedule(request, now=reference, settings=settings)
    logger.debug("schedule for %s: %d warnings", path, len(result.warnings))
    exit_code = 2 if result.has_errors else 0

    if format == "json":
        typer.echo(json.dumps(result_to_payload(result), indent=2, sort_keys=True))
        raise typer.Exit(code=exit_code)

    for line in summary_lines(result):
        typer.echo(line)
    if result.timeline:
        Console().print(timeline_table(result))
    for line in warning_lines(result):
        typer.echo(line, err=result.has_errors)
    raise typer.Exit(code=exit_code)


@app.command("settings")
def settings_cmd(
    config: Optional[str] = typer.Option(None, "--config", help="Optional YAML settings file"),
) -> None:
    """Show the effective scheduler settings."""
    settings = _load_settings(config)
    typer.echo("Settings:")
    for name, value in sorted(settings.as_dict().items()):
        typer.echo(f"- {name}: {value}")


def _check_format(format: str, code: str) -> None:
    if format not in ("text", "json"):
        err = ScheduleValidationError(
            code=code,
            message=f"unknown format: {format} (choose one of: text, json)",
            file=None,
            path="format",
        )
        _print_errors([err])
        raise typer.Exit(code=2)


def _parse_now(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        _print_errors(
            [
                ScheduleValidationError(
                    code="E_SCHEDULE_INVALID_NOW",
                    message=f"--now must be an ISO date or datetime, got: {value}",
                    path="now",
                )
            ]
        )
        raise typer.Exit(code=2)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _load_settings(config: Optional[str]) -> SchedulerSettings:
    try:
        return load_and_merge(config)
    except FileNotFoundError:
        _print_errors(
            [
                ScheduleLoadError(
                    code="E_CONFIG_FILE_NOT_FOUND",
                    message=f"settings file not found: {config}",
                    path="config",
                )
            ]
        )
        raise typer.Exit(code=1)
    except SettingsConfigError as e:
        _print_errors(
            [
                ScheduleValidationError(
                    code="E_CONFIG_FILE_INVALID",
                    message=str(e),
                    file=config,
                    path="config",
                )
            ]
        )
        raise typer.Exit(code=2)


def _to_item(e: ScheduleError) -> dict:
    source = "load" if isinstance(e, ScheduleLoadError) else "validate"
    return {
        "code": e.code,
        "message": e.message,
        "file": e.file,
        "path": e.path,
        "task": e.task,
        "severity": "error",
        "source": source,
    }


def _print_errors(errors: list[ScheduleError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.file or "", e.path or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="scheduler")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
