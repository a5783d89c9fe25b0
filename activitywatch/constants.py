# =============================================================================
# activitywatch/constants.py  —  Shared limits and defaults
# =============================================================================

# Human-readable tool output is cut at this many characters.
CHARACTER_LIMIT = 25_000

# Used when a get_events caller doesn't pass a limit.
DEFAULT_EVENTS_LIMIT = 100

DEFAULT_BASE_URL = "http://localhost:5600/api/0"

# Seconds; applies to connect, read, write and pool acquisition.
REQUEST_TIMEOUT = 30.0

BASE_URL_ENV_VAR = "ACTIVITYWATCH_URL"
LOG_LEVEL_ENV_VAR = "LOG_LEVEL"
