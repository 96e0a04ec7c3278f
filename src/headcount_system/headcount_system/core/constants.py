"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import timedelta

SESSION_DURATION = timedelta(hours=8)
LOCKOUT_DURATION = timedelta(minutes=5)
MAX_LOGIN_ATTEMPTS = 5

MAX_AUDIT_ENTRIES = 10
MAX_GLOBAL_DESIGNATION_HISTORY = 100
MAX_AREA_DESIGNATION_HISTORY = 50
MAX_SUGGESTIONS = 5

SALT_BYTES = 16
TEMP_PASSWORD_LENGTH = 12
# Visually confusable characters (0/O, 1/l/I) are left out.
TEMP_PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz23456789!@#$%"
MIN_ADMIN_PASSWORD_LENGTH = 6

DEFAULT_RETENTION_DAYS = 180
MIN_RETENTION_DAYS = 1
MAX_RETENTION_DAYS = 730

BACKUP_VERSION = 1

DEFAULT_AREAS = (
    "TCF Facilities",
    "Precast S2A",
    "Painting & Sand Blasting",
    "Precast S4A",
    "Precast S4B",
    "Fabrication Area S2A & S4A",
    "Fabrication Area S4B",
    "Common Welding S4A_S2A_S4B",
    "Spool Yard",
    "Old Spool Yard",
    "Spool Yard T58",
    "Spool Yard T63",
    "PWHT",
)
