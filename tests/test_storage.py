import json

from attendance_dashboard.models import AttendanceRecord
from attendance_dashboard.storage import LocalCache, save_data


def test_missing_cache_loads_none(cache):
    assert cache.load() is None


def test_save_and_load(cache):
    records = (
        AttendanceRecord("A1", "Alice", "555-1", "present"),
        AttendanceRecord("A2", "Bob", "555-2", "absent"),
    )

    assert cache.save(records) is True
    assert cache.load() == records


def test_saved_format_is_a_list_of_objects(cache):
    cache.save((AttendanceRecord("A1", "Alice", "555-1", "present"),))

    with open(cache.path, encoding="utf-8") as f:
        data = json.load(f)

    assert data == [{"uid": "A1", "name": "Alice", "contact": "555-1", "attendance": "present"}]


def test_empty_snapshot_is_still_a_cache(cache):
    cache.save(())

    assert cache.load() == ()


def test_corrupt_file_loads_none(tmp_path):
    path = tmp_path / "attendanceData.json"
    path.write_text("{not json", encoding="utf-8")

    assert LocalCache(str(path)).load() is None


def test_old_schema_entries_are_defaulted(tmp_path):
    path = tmp_path / "attendanceData.json"
    save_data(str(path), [{"uid": "A1", "fullName": "Alice", "attendance": "yes"}, "junk"])

    assert LocalCache(str(path)).load() == (AttendanceRecord("A1", "", "", "absent"),)


def test_write_failure_returns_false(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")

    cache = LocalCache(str(blocker / "attendanceData.json"))

    assert cache.save(()) is False


def test_falsy_values_in_cache_are_kept(tmp_path):
    path = tmp_path / "attendanceData.json"
    save_data(str(path), [{"uid": 0, "name": "Zero", "contact": 0, "attendance": None}])

    assert LocalCache(str(path)).load() == (AttendanceRecord("0", "Zero", "0", "absent"),)


def test_non_string_status_in_cache(tmp_path):
    path = tmp_path / "attendanceData.json"
    save_data(str(path), [{"uid": "A1", "attendance": 1}])

    assert LocalCache(str(path)).load()[0].attendance == "absent"
