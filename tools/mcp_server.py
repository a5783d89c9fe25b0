# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the four MCP tools an agent uses to read ActivityWatch data.
#   Each tool is a thin wrapper around one ActivityWatchClient call: it
#   validates input, formats the output, and enforces the character budget.
#
# HOW IT WORKS (the flow):
#   1. The agent calls a tool by name via MCP (e.g., "get_events")
#   2. FastMCP routes the call to the matching ActivityWatchTools method
#   3. The method checks its inputs, makes ONE request through the client,
#      and renders the result as markdown or JSON
#   4. Client failures become ToolError, which FastMCP returns as a tool
#      result with isError=True (the session stays healthy)
#
# TOOLS:
#   - list_buckets     → every bucket on the server
#   - get_bucket       → one bucket's metadata
#   - get_events       → events from a bucket (limit / time range filters)
#   - get_event_count  → how many events a bucket holds
#   All tools are read-only.
#
# CONTEXT BUDGET:
#   Markdown output longer than CHARACTER_LIMIT is cut and a notice is
#   appended.  JSON output is never cut, since a truncated document can't
#   be parsed.
#
# RUNNING THIS SERVER:
#   a) Via the entry point:  python main.py   (or: activitywatch-mcp)
#   b) Standalone:           python -m tools.mcp_server
# =============================================================================

import json
import logging
from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from activitywatch.client import ActivityWatchClient
from activitywatch.constants import CHARACTER_LIMIT, DEFAULT_EVENTS_LIMIT
from activitywatch.errors import ActivityWatchError
from activitywatch.models import ResponseFormat

logger = logging.getLogger(__name__)

SERVER_NAME = "activitywatch"

SERVER_INSTRUCTIONS = (
    "ActivityWatch MCP Server - Query your ActivityWatch time tracking data. "
    "Use list_buckets to see available data sources, then get_events to "
    "retrieve activity logs."
)

EMPTY_BUCKET_ID_MESSAGE = "Bucket ID cannot be empty"

# =============================================================================
# Logging helpers
# =============================================================================
# Log lines go to STDERR (configured in main.py); STDOUT is the MCP stream.
# Colours make tool calls easy to pick out in the terminal:
#   CYAN = incoming call, YELLOW = progress, GREEN = response
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, response: str) -> str:
    """Log the response size in GREEN, then return the response."""
    logger.info(f"{_GREEN}  ← {tool_name} response: {len(response)} chars{_RESET}")
    return response


# =============================================================================
# Formatting helpers
# =============================================================================
def truncate_response(response: str, limit: int = CHARACTER_LIMIT) -> str:
    """Cut ``response`` to ``limit`` characters and append a notice if it's longer.

    Slicing a str counts code points, so a multi-byte character is never
    split.
    """
    if len(response) <= limit:
        return response
    return (
        f"{response[:limit]}\n\n"
        f"_Response truncated at {limit} characters. "
        f"Use more specific filters to reduce results._"
    )


def _to_json(payload) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _require_bucket_id(bucket_id: str) -> None:
    if not bucket_id.strip():
        _log_status("Rejected empty bucket ID")
        raise ToolError(EMPTY_BUCKET_ID_MESSAGE)


# Parameter annotations shared by several tools.  FastMCP builds each tool's
# JSON schema from these.
ResponseFormatParam = Annotated[
    ResponseFormat,
    Field(description='Output format: "markdown" (default) or "json"'),
]
StartParam = Annotated[
    Optional[str],
    Field(description='Start time in ISO 8601 format (e.g., "2024-01-01T00:00:00Z")'),
]
EndParam = Annotated[
    Optional[str],
    Field(description='End time in ISO 8601 format (e.g., "2024-01-01T23:59:59Z")'),
]


# =============================================================================
# The tools
# =============================================================================
class ActivityWatchTools:
    """The MCP tool implementations, bound to one shared client."""

    def __init__(self, client: ActivityWatchClient) -> None:
        self.client = client

    # -------------------------------------------------------------------------
    # TOOL 1: list_buckets
    # -------------------------------------------------------------------------
    async def list_buckets(
        self,
        response_format: ResponseFormatParam = ResponseFormat.MARKDOWN,
    ) -> str:
        """List all ActivityWatch buckets. Buckets are containers that group events by watcher type and hostname (e.g., aw-watcher-window_hostname for window tracking events)."""
        _log_request("list_buckets", response_format=response_format.value)

        try:
            buckets = await self.client.get_buckets()
        except ActivityWatchError as e:
            _log_status(f"Failed: {e}")
            raise ToolError(f"Failed to list buckets: {e}") from e
        _log_status(f"Found {len(buckets)} buckets")

        if response_format == ResponseFormat.JSON:
            response = _to_json({bucket_id: b.to_dict() for bucket_id, b in buckets.items()})
        else:
            lines = [
                "# ActivityWatch Buckets",
                "",
                f"Found {len(buckets)} buckets:",
                "",
            ]
            for bucket in buckets.values():
                lines.append(bucket.to_markdown())
                lines.append("")
            response = truncate_response("\n".join(lines))

        return _log_response("list_buckets", response)

    # -------------------------------------------------------------------------
    # TOOL 2: get_bucket
    # -------------------------------------------------------------------------
    async def get_bucket(
        self,
        bucket_id: Annotated[str, Field(description="The bucket ID to retrieve")],
        response_format: ResponseFormatParam = ResponseFormat.MARKDOWN,
    ) -> str:
        """Get detailed information about a specific ActivityWatch bucket by its ID. Returns bucket metadata including type, hostname, and creation time."""
        _log_request("get_bucket", bucket_id=bucket_id, response_format=response_format.value)
        _require_bucket_id(bucket_id)

        try:
            bucket = await self.client.get_bucket(bucket_id)
        except ActivityWatchError as e:
            _log_status(f"Failed: {e}")
            raise ToolError(f"Failed to get bucket: {e}") from e

        if response_format == ResponseFormat.JSON:
            response = _to_json(bucket.to_dict())
        else:
            response = "\n".join(["# Bucket Details", "", bucket.to_markdown()])

        return _log_response("get_bucket", response)

    # -------------------------------------------------------------------------
    # TOOL 3: get_events
    # -------------------------------------------------------------------------
    async def get_events(
        self,
        bucket_id: Annotated[
            str,
            Field(description='The bucket ID to get events from (e.g., "aw-watcher-window_hostname")'),
        ],
        limit: Annotated[
            Optional[int],
            Field(description=f"Maximum number of events to return (default: {DEFAULT_EVENTS_LIMIT})"),
        ] = None,
        start: StartParam = None,
        end: EndParam = None,
        response_format: ResponseFormatParam = ResponseFormat.MARKDOWN,
    ) -> str:
        """Get events from an ActivityWatch bucket. Events contain timestamped activity data such as window titles, app names, or AFK status.

        Example, the last 10 window events:
            {"bucket_id": "aw-watcher-window_myhostname", "limit": 10}
        """
        _log_request(
            "get_events",
            bucket_id=bucket_id, limit=limit, start=start, end=end,
            response_format=response_format.value,
        )
        _require_bucket_id(bucket_id)

        # The resolved limit drives both the query and the "limit reached" notice.
        limit = DEFAULT_EVENTS_LIMIT if limit is None else limit

        try:
            events = await self.client.get_events(bucket_id, limit=limit, start=start, end=end)
        except ActivityWatchError as e:
            _log_status(f"Failed: {e}")
            raise ToolError(f"Failed to get events: {e}") from e
        _log_status(f"Got {len(events)} events")

        if response_format == ResponseFormat.JSON:
            response = _to_json([event.to_dict() for event in events])
        else:
            lines = [
                f"# Events from {bucket_id}",
                "",
                f"Showing {len(events)} events:",
                "",
            ]
            for event in events:
                lines.append(event.to_markdown())
                lines.append("")
            if len(events) >= limit:
                lines.append(f"_Limit of {limit} reached. Use pagination to see more._")
            response = truncate_response("\n".join(lines))

        return _log_response("get_events", response)

    # -------------------------------------------------------------------------
    # TOOL 4: get_event_count
    # -------------------------------------------------------------------------
    async def get_event_count(
        self,
        bucket_id: Annotated[str, Field(description="The bucket ID to count events from")],
        start: StartParam = None,
        end: EndParam = None,
    ) -> str:
        """Get the total count of events in an ActivityWatch bucket. Useful for understanding data volume before fetching events. Optionally filter by time range."""
        _log_request("get_event_count", bucket_id=bucket_id, start=start, end=end)
        _require_bucket_id(bucket_id)

        try:
            count = await self.client.get_event_count(bucket_id, start=start, end=end)
        except ActivityWatchError as e:
            _log_status(f"Failed: {e}")
            raise ToolError(f"Failed to get event count: {e}") from e

        lines = [
            f"# Event Count for {bucket_id}",
            "",
            f"**Total Events**: {count}",
        ]
        if start is not None:
            lines.append(f"**From**: {start}")
        if end is not None:
            lines.append(f"**To**: {end}")

        return _log_response("get_event_count", "\n".join(lines))


# =============================================================================
# Server factory
# =============================================================================
def create_server(client: ActivityWatchClient) -> FastMCP:
    """Build a FastMCP server whose tools all share ``client``."""
    tools = ActivityWatchTools(client)
    mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)

    mcp.tool(tools.list_buckets)
    mcp.tool(tools.get_bucket)
    mcp.tool(tools.get_events)
    mcp.tool(tools.get_event_count)

    return mcp


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    from main import main

    main()
