"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_M = 6_371_000
DEFAULT_GEOFENCE_RADIUS_M = 200
DEFAULT_HISTORY_LIMIT = 366
DEFAULT_ADMIN_LIST_LIMIT = 500
LAST_N_DAYS = 30
