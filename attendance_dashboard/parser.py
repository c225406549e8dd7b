from attendance_dashboard.constants import CSV_HEADER
from attendance_dashboard.models import AttendanceRecord


class RecordParser:
    """Turns sheet text into a snapshot and back."""

    def parse(self, text):
        raise NotImplementedError

    def format(self, records):
        raise NotImplementedError


class NaiveCsvParser(RecordParser):
    """Plain comma splitting with no quoting support.

    A value containing a comma shifts the columns after it, on the way in
    and on the way out.
    """

    delimiter = ","

    def parse(self, text):
        rows = [row for row in (text or "").split("\n") if row.strip()]
        if not rows:
            return ()

        # first row is the header, taken as is
        return tuple(
            AttendanceRecord.from_fields(row.split(self.delimiter))
            for row in rows[1:]
        )

    def format(self, records):
        lines = [self.delimiter.join(CSV_HEADER)]
        for record in records:
            lines.append(self.delimiter.join([
                record.uid,
                record.name,
                record.contact,
                record.attendance
            ]))
        return "\n".join(lines) + "\n"
