# =============================================================================
# activitywatch/__init__.py
# =============================================================================
# Everything needed to talk to an aw-server REST API: data models, the
# classified error hierarchy, and the async HTTP client.
#
# Nothing in this package imports FastMCP.  The tools/ layer wraps it as MCP
# tools; this package only knows about HTTP and JSON.
# =============================================================================

from activitywatch.client import ActivityWatchClient
from activitywatch.errors import (
    ActivityWatchError,
    ConnectionFailure,
    DecodeFailure,
    NetworkError,
    RequestTimeout,
    UpstreamStatusError,
)
from activitywatch.models import Bucket, Event, ResponseFormat

__all__ = [
    "ActivityWatchClient",
    "ActivityWatchError",
    "Bucket",
    "ConnectionFailure",
    "DecodeFailure",
    "Event",
    "NetworkError",
    "RequestTimeout",
    "ResponseFormat",
    "UpstreamStatusError",
]
