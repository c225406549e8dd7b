"""Desktop dashboard for a published attendance sheet."""

from attendance_dashboard.constants import APP_VERSION

__version__ = APP_VERSION
