# =============================================================================
# activitywatch/errors.py  —  Classified failures talking to aw-server
# =============================================================================
#
# Every way a request can go wrong maps to exactly one class here:
#
#   RequestTimeout       → the request timed out (caller may retry)
#   ConnectionFailure    → nothing listening at the base URL
#   NetworkError         → any other transport failure
#   UpstreamStatusError  → aw-server answered with a non-2xx status
#   DecodeFailure        → 2xx, but the body isn't the shape we expect
#
# str(error) is always a message fit to show the caller as-is.
# =============================================================================


class ActivityWatchError(Exception):
    """Base class for every classified ActivityWatch client failure."""


class RequestTimeout(ActivityWatchError):
    def __init__(self) -> None:
        super().__init__("Request timed out. Please try again.")


class ConnectionFailure(ActivityWatchError):
    def __init__(self) -> None:
        super().__init__("Failed to connect to ActivityWatch. Is aw-server running?")


class NetworkError(ActivityWatchError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Network error: {detail}")


class UpstreamStatusError(ActivityWatchError):
    """aw-server rejected the request; the response body is kept for diagnosis."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(self._describe(status_code, body))

    @staticmethod
    def _describe(status_code: int, body: str) -> str:
        if status_code == 404:
            return f"Resource not found. Please check the bucket ID. Details: {body}"
        if status_code == 400:
            return f"Bad request. Please check your parameters. Details: {body}"
        if status_code == 500:
            return f"ActivityWatch server error: {body}"
        return f"API request failed with status {status_code}: {body}"


class DecodeFailure(ActivityWatchError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Failed to parse API response: {detail}")
