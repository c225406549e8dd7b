from dataclasses import dataclass, field, asdict
from typing import Optional, Tuple

from attendance_dashboard.constants import PRESENT, ABSENT, ATTENDANCE_STATUSES


def _text(value):
    return "" if value is None else str(value)


def normalize_status(value: Optional[str]) -> str:
    status = _text(value).strip().lower()
    return status if status in ATTENDANCE_STATUSES else ABSENT


@dataclass(frozen=True)
class AttendanceRecord:
    uid: str
    name: str = ""
    contact: str = ""
    attendance: str = ABSENT

    @property
    def is_present(self) -> bool:
        return self.attendance == PRESENT

    @classmethod
    def from_fields(cls, values):
        """Build a record from positional cells, filling gaps with defaults."""
        cells = [v.strip() for v in values]
        cells += [""] * (4 - len(cells))
        return cls(
            uid=cells[0],
            name=cells[1],
            contact=cells[2],
            attendance=normalize_status(cells[3]),
        )

    @classmethod
    def from_dict(cls, data):
        return cls(
            uid=_text(data.get("uid")),
            name=_text(data.get("name")),
            contact=_text(data.get("contact")),
            attendance=normalize_status(data.get("attendance")),
        )

    def to_dict(self):
        return asdict(self)


Snapshot = Tuple[AttendanceRecord, ...]


@dataclass(frozen=True)
class RowView:
    uid: str
    name: str
    contact: str
    attendance: str
    status_label: str
    avatar_key: str


@dataclass
class AppState:
    records: Snapshot = ()
    online: bool = True
    search_term: str = ""
    last_sync: str = "Last sync: never"
    latest_seq: int = 0
    issued_seq: int = 0


@dataclass
class Notification:
    id: int
    message: str
    severity: str
    icon: str
    visible: bool = field(default=True)
