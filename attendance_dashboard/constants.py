APP_NAME = "Attendance Dashboard"
APP_VERSION = "1.0"
SHEET_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vQ4olJtqgvwwDUrGKVKagYtlnsBjMkFJUJvNpxc4jeKwhPX-k9Wh84S4onRYjJ3mQXoYzur_J6i1qBe"
    "/pub?output=csv"
)
CACHE_BUST_PARAM = "t"
REQUEST_TIMEOUT = 10
POLL_INTERVAL_MS = 3000
REFRESH_INDICATOR_MS = 1000
NOTIFICATION_TIMEOUT_MS = 5000
NOTIFICATION_FADE_MS = 300
PRESENT = "present"
ABSENT = "absent"
ATTENDANCE_STATUSES = (PRESENT, ABSENT)
CSV_HEADER = ("UID", "Name", "Contact", "Attendance")
PROGRAM_STORAGE = "data"
CACHE_KEY = "attendanceData"
CACHE_FILE = f"{PROGRAM_STORAGE}/{CACHE_KEY}.json"
EXPORTS_FOLDER = "exports"
AVATAR_SIZE = 28
WINDOW_WIDTH = 960
WINDOW_HEIGHT = 640
DEFAULT_FONT = ("Arial", 10)
TITLE_FONT = ("Arial", 18, "bold")
COUNT_FONT = ("Arial", 14, "bold")
