import json
import logging
import os

from attendance_dashboard.constants import CACHE_FILE
from attendance_dashboard.models import AttendanceRecord

logger = logging.getLogger(__name__)


def load_data(filepath, default):
    if not os.path.exists(filepath):
        return default
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError):
        logger.exception("Failed to read %s", filepath)
        return default


def save_data(filepath, data):
    try:
        folder = os.path.dirname(filepath)
        if folder and not os.path.exists(folder):
            os.makedirs(folder)

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=4)
        return True
    except (OSError, TypeError, ValueError):
        logger.exception("Failed to write %s", filepath)
        return False


class LocalCache:
    """Last known snapshot kept on disk as an offline fallback."""

    def __init__(self, path=CACHE_FILE):
        self.path = path

    def save(self, records):
        return save_data(self.path, [r.to_dict() for r in records])

    def load(self):
        data = load_data(self.path, None)
        if data is None:
            return None
        if not isinstance(data, list):
            logger.warning("Ignoring cache %s: expected a list, got %s", self.path, type(data).__name__)
            return None
        return tuple(
            AttendanceRecord.from_dict(item)
            for item in data
            if isinstance(item, dict)
        )
