import itertools
import logging

from attendance_dashboard.constants import NOTIFICATION_TIMEOUT_MS, NOTIFICATION_FADE_MS
from attendance_dashboard.models import Notification

logger = logging.getLogger(__name__)

INFO = "info"
SUCCESS = "success"
WARNING = "warning"
ERROR = "error"

ICONS = {
    SUCCESS: "✅",
    ERROR: "❌",
    WARNING: "⚠️",
    INFO: "ℹ️",
}


class NotificationCenter:
    """Transient toasts, each timed on its own.

    ``schedule(delay_ms, callback)`` is the timer hook, ``Tk.after`` in the
    application. Listeners receive the list of active notifications after
    every change.
    """

    def __init__(self, schedule, timeout_ms=NOTIFICATION_TIMEOUT_MS, fade_ms=NOTIFICATION_FADE_MS):
        self.schedule = schedule
        self.timeout_ms = timeout_ms
        self.fade_ms = fade_ms
        self.active = []
        self._listeners = []
        self._ids = itertools.count(1)

    def subscribe(self, listener):
        self._listeners.append(listener)

    def notify(self, message, severity=INFO):
        if severity not in ICONS:
            severity = INFO
        notification = Notification(
            id=next(self._ids),
            message=message,
            severity=severity,
            icon=ICONS[severity]
        )
        logger.info("[%s] %s", severity, message)
        self.active.append(notification)
        self.schedule(self.timeout_ms, lambda: self.dismiss(notification.id))
        self._changed()
        return notification

    def dismiss(self, notification_id):
        notification = self._find(notification_id)
        if notification is None or not notification.visible:
            return
        notification.visible = False
        self.schedule(self.fade_ms, lambda: self._remove(notification_id))
        self._changed()

    def _remove(self, notification_id):
        notification = self._find(notification_id)
        if notification is not None:
            self.active.remove(notification)
            self._changed()

    def _find(self, notification_id):
        for n in self.active:
            if n.id == notification_id:
                return n
        return None

    def _changed(self):
        snapshot = list(self.active)
        for listener in self._listeners:
            listener(snapshot)
