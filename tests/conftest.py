import httpx
import pytest

from activitywatch.client import ActivityWatchClient
from tools.mcp_server import ActivityWatchTools

BASE_URL = "http://aw.test/api/0"


class FakeAWServer:
    """Stand-in for aw-server: records every request and answers from a route table."""

    def __init__(self):
        self.requests = []
        self.routes = {}
        self.error = None

    def route(self, path, status=200, json=None, text=None):
        self.routes[path] = (status, json, text)

    def fail_with(self, exc_type, message="boom"):
        """Make every request raise ``exc_type`` like a broken transport would."""
        self.error = (exc_type, message)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            exc_type, message = self.error
            raise exc_type(message, request=request)

        path = request.url.path.removeprefix("/api/0")
        if path not in self.routes:
            return httpx.Response(404, text=f"No route for {path}")
        status, json_body, text = self.routes[path]
        if json_body is not None:
            return httpx.Response(status, json=json_body)
        return httpx.Response(status, text=text or "")


@pytest.fixture
def aw_server():
    return FakeAWServer()


@pytest.fixture
def client(aw_server):
    return ActivityWatchClient(BASE_URL, transport=httpx.MockTransport(aw_server.handler))


@pytest.fixture
def tools(client):
    return ActivityWatchTools(client)


@pytest.fixture
def window_bucket():
    """A fully populated window-watcher bucket."""
    return {
        "id": "aw-watcher-window_host1",
        "client": "aw-watcher-window",
        "type": "currentwindow",
        "hostname": "host1",
        "created": "2024-01-01T00:00:00.000000",
        "data": {},
        "last_updated": "2024-01-02T08:30:00.123000+00:00",
    }


@pytest.fixture
def afk_bucket():
    """A bucket with only the required id."""
    return {"id": "aw-watcher-afk_host1"}


@pytest.fixture
def window_events():
    return [
        {
            "id": 2,
            "timestamp": "2024-01-01T12:01:00Z",
            "duration": 30.25,
            "data": {"app": "Firefox", "title": "ActivityWatch - Docs"},
        },
        {
            "id": 1,
            "timestamp": "2024-01-01T12:00:00Z",
            "duration": 60.5,
            "data": {"app": "Code", "title": "main.py", "pinned": False},
        },
    ]
