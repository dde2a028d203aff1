"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_CUTOFF_TIME = "07:00"
DEFAULT_LOCALE = "ar"

# Sunday=0 .. Saturday=6 (Friday and Saturday)
DEFAULT_WEEKEND_DAYS = (5, 6)

NATIONAL_ID_PATTERN = r"[12][0-9]{9}"

DEFAULT_ADMIN_EMAIL = "admin@presence.app"
DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_ADMIN_NAME = "مدير النظام"
DEFAULT_ADMIN_ID = "admin-1"

MIN_PASSWORD_LENGTH = 6
