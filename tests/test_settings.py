import pytest

from project_scheduler.core.config.settings import (
    DEFAULT_SETTINGS,
    SchedulerSettings,
    SettingsConfigError,
    load_and_merge,
    load_settings_file,
)


def test_defaults_without_file():
    settings = load_and_merge(None)
    assert settings == SchedulerSettings()
    assert settings.as_dict() == DEFAULT_SETTINGS


def test_file_overrides_defaults():
    settings = load_and_merge("examples/settings.yaml")
    assert settings.unparseable_due_dates == "info"
    assert settings.max_estimated_hours == 200
    assert settings.min_estimated_hours == 1


def test_empty_file_is_defaults(tmp_path):
    p = tmp_path / "settings.yaml"
    p.write_text("", encoding="utf-8")
    assert load_settings_file(p) == {}


@pytest.mark.parametrize(
    "text",
    [
        "- a\n- b\n",
        "unparseable_due_dates: warn\n",
        "max_estimated_hours: -3\n",
        "max_hours: 10\n",
        "min_estimated_hours: 20\nmax_estimated_hours: 10\n",
        "key: [unclosed\n",
    ],
)
def test_invalid_files_rejected(tmp_path, text):
    p = tmp_path / "settings.yaml"
    p.write_text(text, encoding="utf-8")
    with pytest.raises(SettingsConfigError):
        load_settings_file(p)


def test_missing_file_raises():
    with pytest.raises(FileNotFoundError):
        load_and_merge("examples/no-such-settings.yaml")


def test_hours_bound_capped(tmp_path):
    p = tmp_path / "settings.yaml"
    p.write_text("max_estimated_hours: 100000000\n", encoding="utf-8")
    with pytest.raises(SettingsConfigError, match="must not exceed 1000"):
        load_settings_file(p)

    p.write_text("max_estimated_hours: 1000\n", encoding="utf-8")
    assert load_settings_file(p) == {"max_estimated_hours": 1000}
