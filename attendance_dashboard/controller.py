import logging
from datetime import datetime

from attendance_dashboard import export as exporter
from attendance_dashboard.exceptions import EmptySnapshotError
from attendance_dashboard.logic import (
    build_rows,
    count_attendance,
    filter_records,
    find_record,
    remove_record
)
from attendance_dashboard.models import AppState
from attendance_dashboard.notifications import INFO, SUCCESS, WARNING, ERROR
from attendance_dashboard.parser import NaiveCsvParser

logger = logging.getLogger(__name__)


class NullView:
    def render(self, rows, present, absent):
        pass

    def show_status(self, online):
        pass

    def show_last_sync(self, text):
        pass


class DashboardController:
    """Owns the dashboard state; every mutation goes through here.

    Fetches may overlap. Each one gets a sequence number and an outcome is
    only applied when it is newer than the last applied one.
    """

    def __init__(self, runner, cache, notifications, parser=None, view=None, clock=datetime.now):
        self.runner = runner
        self.cache = cache
        self.notifications = notifications
        self.parser = parser or NaiveCsvParser()
        self.view = view or NullView()
        self.clock = clock
        self.state = AppState()

    @property
    def records(self):
        return self.state.records

    # ==================================================
    # Sync
    # ==================================================

    def refresh(self):
        self.notifications.notify("Syncing with Google Sheets...", INFO)
        self._set_last_sync("Last sync: Updating...")
        self.state.issued_seq += 1
        seq = self.state.issued_seq
        self.runner.submit(seq, self.apply_fetch, self.apply_failure)
        return seq

    def _is_stale(self, seq):
        if seq <= self.state.latest_seq:
            logger.debug("Dropping stale fetch #%d (latest applied #%d)", seq, self.state.latest_seq)
            return True
        self.state.latest_seq = seq
        return False

    def apply_fetch(self, seq, text):
        if self._is_stale(seq):
            return False

        records = self.parser.parse(text)
        if not self.cache.save(records):
            self.notifications.notify("Could not save offline data", WARNING)
        self._set_last_sync(f"Last sync: {self.clock().strftime('%I:%M:%S %p')}")

        changed = records != self.state.records
        if changed:
            self.state.records = records
            self.render()
            self.notifications.notify("Attendance data updated!", SUCCESS)

        self._set_online(True)
        return changed

    def apply_failure(self, seq, error):
        if self._is_stale(seq):
            return

        logger.error("Fetch error: %s", error, exc_info=error)
        self._set_online(False)

        cached = self.cache.load()
        if cached is not None:
            self.state.records = cached
            self.render()
            self.notifications.notify("Using offline data", WARNING)
        else:
            self.notifications.notify("Connection failed - no data available", ERROR)

    # ==================================================
    # Table
    # ==================================================

    def render(self):
        present, absent = count_attendance(self.state.records)
        visible = filter_records(self.state.records, self.state.search_term)
        self.view.render(build_rows(visible), present, absent)

    def search(self, term):
        self.state.search_term = term or ""
        self.render()
        return filter_records(self.state.records, self.state.search_term)

    def delete_record(self, uid):
        remaining = remove_record(self.state.records, uid)
        if len(remaining) == len(self.state.records):
            self.notifications.notify("Student not found", WARNING)
            return False

        self.state.records = remaining
        if not self.cache.save(remaining):
            self.notifications.notify("Could not save offline data", WARNING)
        self.render()
        self.notifications.notify("Student deleted", SUCCESS)
        return True

    def edit_record(self, uid):
        record = find_record(self.state.records, uid)
        if record is None:
            return None

        logger.info("Edit requested for %r", record)
        self.notifications.notify(f"Editing {record.name} is not supported yet", WARNING)
        return record

    # ==================================================
    # Export
    # ==================================================

    def export(self, path=None, fmt="csv"):
        path = path or exporter.default_path(fmt, self.clock().date())
        try:
            if fmt == "xlsx":
                exporter.export_excel(self.state.records, path)
            else:
                exporter.export_csv(self.state.records, path, self.parser)
        except EmptySnapshotError:
            self.notifications.notify("No data to export", WARNING)
            return None
        except Exception:
            logger.exception("Export to %s failed", path)
            self.notifications.notify("Export failed", ERROR)
            return None

        self.notifications.notify("Data exported successfully", SUCCESS)
        return path

    def _set_online(self, online):
        self.state.online = online
        self.view.show_status(online)

    def _set_last_sync(self, text):
        self.state.last_sync = text
        self.view.show_last_sync(text)
