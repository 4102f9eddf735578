import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

DEBUG = bool(int(os.getenv("DEBUG", "0")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

# Fallback when an organization has no office_radius_m of its own.
DEFAULT_GEOFENCE_RADIUS_M = float(os.getenv("DEFAULT_GEOFENCE_RADIUS_M", "200"))

# Shift policy (wall-clock times in ATTENDANCE_TIMEZONE)
SHIFT_START = os.getenv("SHIFT_START", "10:00")
SHIFT_END = os.getenv("SHIFT_END", "18:00")
LATE_TOLERANCE_MINUTES = int(os.getenv("LATE_TOLERANCE_MINUTES", "5"))
EARLY_TOLERANCE_MINUTES = int(os.getenv("EARLY_TOLERANCE_MINUTES", "5"))
NORMAL_WORK_HOURS_PER_DAY = float(os.getenv("NORMAL_WORK_HOURS_PER_DAY", "8"))
ATTENDANCE_TIMEZONE = os.getenv("ATTENDANCE_TIMEZONE", "UTC")
