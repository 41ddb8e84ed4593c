from project_scheduler.core.errors import ScheduleLoadError
from project_scheduler.core.io.load_request import load_request


def test_load_yaml_success():
    raw = load_request("examples/basic-schedule.yaml")
    assert isinstance(raw["tasks"], list)
    assert raw["tasks"][0]["title"] == "A"
    assert raw["__file__"].endswith("basic-schedule.yaml")


def test_load_json_normalizes_camel_case():
    raw = load_request("examples/web-project.json")
    first = raw["tasks"][0]
    assert first["estimated_hours"] == 5
    assert first["due_date"] == "2025-10-25"
    assert "estimatedHours" not in first


def test_load_missing_file():
    try:
        load_request("examples/does-not-exist.yaml")
        assert False, "expected ScheduleLoadError"
    except ScheduleLoadError as e:
        assert e.code == "E_FILE_NOT_FOUND"


def test_load_unsupported_format(tmp_path):
    p = tmp_path / "request.txt"
    p.write_text("hello", encoding="utf-8")
    try:
        load_request(str(p))
        assert False, "expected ScheduleLoadError"
    except ScheduleLoadError as e:
        assert e.code == "E_UNSUPPORTED_FORMAT"


def test_load_bad_json(tmp_path):
    p = tmp_path / "request.json"
    p.write_text("{not json", encoding="utf-8")
    try:
        load_request(str(p))
        assert False, "expected ScheduleLoadError"
    except ScheduleLoadError as e:
        assert e.code == "E_JSON_PARSE"
        assert str(p) in str(e)


def test_load_top_level_list_rejected(tmp_path):
    p = tmp_path / "request.yaml"
    p.write_text("- title: A\n", encoding="utf-8")
    try:
        load_request(str(p))
        assert False, "expected ScheduleLoadError"
    except ScheduleLoadError as e:
        assert e.code == "E_INVALID_TOP_LEVEL"
