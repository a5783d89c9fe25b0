# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP tool wrappers around the activitywatch package.
#
# Each tool:
#   1. Validates its parameters (empty bucket IDs never reach the network)
#   2. Makes one call through the shared ActivityWatchClient
#   3. Renders the result as markdown or JSON, within the character budget
#   4. Turns client failures into ToolError results
#
# The HTTP details and data models live in activitywatch/; nothing here
# talks to httpx directly.
# =============================================================================

from tools.mcp_server import ActivityWatchTools, create_server, truncate_response

__all__ = ["ActivityWatchTools", "create_server", "truncate_response"]
