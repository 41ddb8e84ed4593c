from typer.testing import CliRunner

from project_scheduler.cli import app


runner = CliRunner()


def test_cli_schedule_success():
    r = runner.invoke(app, ["schedule", "examples/basic-schedule.yaml", "--now", "2025-01-01"])
    assert r.exit_code == 0, r.stdout + r.stderr
    assert "OK: 4 tasks, 10 estimated hours" in r.stdout
    assert "Order: A -> B -> C -> D" in r.stdout
    assert "Critical path: 9h (A -> B -> D)" in r.stdout
    assert "Estimated completion: 2025-01-03" in r.stdout


def test_cli_schedule_due_date_warnings_are_not_errors():
    r = runner.invoke(app, ["schedule", "examples/at-risk.yaml", "--now", "2025-01-01"])
    assert r.exit_code == 0, r.stdout + r.stderr
    assert "WARNING: Spec: Task may not complete by due date" in r.stdout
    assert "WARNING: Build: Task may not complete by due date" in r.stdout
    assert "INFO" not in r.stdout


def test_cli_schedule_config_enables_info():
    r = runner.invoke(
        app,
        ["schedule", "examples/at-risk.yaml", "--now", "2025-01-01", "--config", "examples/settings.yaml"],
    )
    assert r.exit_code == 0, r.stdout + r.stderr
    assert "INFO: Ship: Due date 'sometime soon' could not be parsed" in r.stdout


def test_cli_schedule_cycle_fails():
    r = runner.invoke(app, ["schedule", "examples/invalid-cycle.yaml"])
    assert r.exit_code == 2
    out = r.stdout + r.stderr
    assert "FAILED" in out
    assert "ERROR: A, C, B, A: Circular dependency detected" in out


def test_cli_schedule_unknown_dependency_fails():
    r = runner.invoke(app, ["schedule", "examples/invalid-unknown-dep.yaml"])
    assert r.exit_code == 2
    assert "Dependency 'B' not found in task list" in (r.stdout + r.stderr)


def test_cli_schedule_validation_error():
    r = runner.invoke(app, ["schedule", "examples/invalid-missing-field.yaml"])
    assert r.exit_code == 2
    assert "E_REQUIRED_FIELD" in (r.stdout + r.stderr)


def test_cli_schedule_invalid_now():
    r = runner.invoke(app, ["schedule", "examples/basic-schedule.yaml", "--now", "yesterday"])
    assert r.exit_code == 2
    assert "E_SCHEDULE_INVALID_NOW" in (r.stdout + r.stderr)


def test_cli_schedule_missing_config():
    r = runner.invoke(app, ["schedule", "examples/basic-schedule.yaml", "--config", "examples/nope.yaml"])
    assert r.exit_code == 1
    assert "E_CONFIG_FILE_NOT_FOUND" in (r.stdout + r.stderr)


def test_cli_schedule_unknown_log_level():
    r = runner.invoke(app, ["schedule", "examples/basic-schedule.yaml", "--log-level", "LOUD"])
    assert r.exit_code == 2
    assert "E_SCHEDULE_UNKNOWN_LOG_LEVEL" in (r.stdout + r.stderr)


def test_cli_settings_lists_effective_values():
    r = runner.invoke(app, ["settings", "--config", "examples/settings.yaml"])
    assert r.exit_code == 0, r.stdout + r.stderr
    assert "Settings:" in r.stdout
    assert "- unparseable_due_dates: info" in r.stdout
    assert "- max_estimated_hours: 200" in r.stdout


def test_cli_schedule_rejects_oversized_hours_bound(tmp_path):
    config = tmp_path / "settings.yaml"
    config.write_text("max_estimated_hours: 100000000\n", encoding="utf-8")
    request = tmp_path / "request.yaml"
    request.write_text("tasks:\n  - title: Huge\n    estimated_hours: 100000000\n", encoding="utf-8")
    r = runner.invoke(
        app, ["schedule", str(request), "--now", "2025-01-01", "--config", str(config)]
    )
    assert r.exit_code == 2
    assert r.exception is None or isinstance(r.exception, SystemExit)
    assert "E_CONFIG_FILE_INVALID" in (r.stdout + r.stderr)
