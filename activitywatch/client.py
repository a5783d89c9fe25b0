# =============================================================================
# activitywatch/client.py  —  Async HTTP client for the aw-server REST API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Issues the four read-only GET requests the tools need and turns every
#   outcome into either a decoded model or one ActivityWatchError subclass.
#
#     GET {base}/buckets/                      → dict[str, Bucket]
#     GET {base}/buckets/{id}                  → Bucket
#     GET {base}/buckets/{id}/events           → list[Event]
#     GET {base}/buckets/{id}/events/count     → int
#
# RESPONSE HANDLING (same for every endpoint):
#   1. Transport failed      → RequestTimeout / ConnectionFailure / NetworkError
#   2. Non-2xx status        → UpstreamStatusError(status, body text)
#   3. 2xx but bad body      → DecodeFailure
#   Nothing is retried here.  The calling agent decides whether to retry.
#
# SHARING:
#   One client is built at startup and shared by every tool call.  Its only
#   state is the base URL and httpx's connection pool, so concurrent tool
#   calls don't interfere with each other.
# =============================================================================

import json
import logging
from typing import Any, Callable, Optional, TypeVar

import httpx

from activitywatch.constants import REQUEST_TIMEOUT
from activitywatch.errors import (
    ConnectionFailure,
    DecodeFailure,
    NetworkError,
    RequestTimeout,
    UpstreamStatusError,
)
from activitywatch.models import Bucket, Event

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ActivityWatchClient:
    """Read-only client for an aw-server instance.

    Args:
        base_url: API root, e.g. ``http://localhost:5600/api/0``.  Trailing
            slashes are stripped.
        timeout: Seconds before a request is abandoned.
        transport: Optional httpx transport, mainly for tests
            (``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self) -> "ActivityWatchClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------
    async def get_buckets(self) -> dict[str, Bucket]:
        """Get all buckets, keyed by bucket ID."""
        payload = await self._get(f"{self.base_url}/buckets/")
        return _decode(payload, _decode_bucket_map)

    async def get_bucket(self, bucket_id: str) -> Bucket:
        """Get a single bucket by ID."""
        payload = await self._get(f"{self.base_url}/buckets/{bucket_id}")
        return _decode(payload, Bucket.from_dict)

    async def get_events(
        self,
        bucket_id: str,
        limit: Optional[int] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> list[Event]:
        """Get events from a bucket in the order aw-server returns them.

        ``start`` and ``end`` are passed through untouched; aw-server is the
        one that rejects malformed timestamps.
        """
        params = _query_params(limit=limit, start=start, end=end)
        payload = await self._get(f"{self.base_url}/buckets/{bucket_id}/events", params)
        return _decode(payload, _decode_event_list)

    async def get_event_count(
        self,
        bucket_id: str,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> int:
        """Get the number of events in a bucket, optionally within a time range."""
        params = _query_params(start=start, end=end)
        payload = await self._get(f"{self.base_url}/buckets/{bucket_id}/events/count", params)
        return _decode(payload, _decode_count)

    # -------------------------------------------------------------------------
    # Request / response plumbing
    # -------------------------------------------------------------------------
    async def _get(self, url: str, params: Optional[list[tuple[str, str]]] = None) -> Any:
        """GET ``url`` and return the parsed JSON body, or raise a classified error."""
        logger.debug("GET %s params=%s", url, params or [])
        try:
            response = await self._http.get(url, params=params)
        except httpx.TimeoutException as e:
            logger.warning("Request to %s timed out: %s", url, e)
            raise RequestTimeout() from e
        except httpx.ConnectError as e:
            logger.warning("Could not connect to %s: %s", url, e)
            raise ConnectionFailure() from e
        except httpx.RequestError as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise NetworkError(str(e)) from e

        if not response.is_success:
            body = _read_body(response)
            logger.warning("GET %s returned %s", url, response.status_code)
            raise UpstreamStatusError(response.status_code, body)

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeFailure(str(e)) from e


# -----------------------------------------------------------------------------
# Module helpers
# -----------------------------------------------------------------------------
def _query_params(**values: Any) -> list[tuple[str, str]]:
    """Keep only the parameters that were given, in keyword order."""
    return [(key, str(value)) for key, value in values.items() if value is not None]


def _read_body(response: httpx.Response) -> str:
    """Best-effort body text for error messages."""
    try:
        return response.text
    except (UnicodeDecodeError, LookupError):
        return ""


def _decode(payload: Any, decoder: Callable[[Any], T]) -> T:
    try:
        return decoder(payload)
    except (ValueError, TypeError) as e:
        logger.warning("Unexpected response shape: %s", e)
        raise DecodeFailure(str(e)) from e


def _decode_bucket_map(payload: Any) -> dict[str, Bucket]:
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object of buckets, got {type(payload).__name__}")
    return {bucket_id: Bucket.from_dict(raw) for bucket_id, raw in payload.items()}


def _decode_event_list(payload: Any) -> list[Event]:
    if not isinstance(payload, list):
        raise ValueError(f"expected a JSON array of events, got {type(payload).__name__}")
    return [Event.from_dict(raw) for raw in payload]


def _decode_count(payload: Any) -> int:
    if isinstance(payload, bool) or not isinstance(payload, int):
        raise ValueError(f"expected an integer event count, got {type(payload).__name__}")
    return payload
