# =============================================================================
# main.py  —  Entry Point for the ActivityWatch MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py          (or the installed `activitywatch-mcp`)
#
# WHAT HAPPENS:
#   1. Loads .env (if present) into the environment
#   2. Sends logging to STDERR; STDOUT belongs to the MCP stdio transport
#   3. Reads ACTIVITYWATCH_URL (default http://localhost:5600/api/0)
#   4. Builds one ActivityWatchClient, shared by every tool call
#   5. Serves the tools over stdio until the MCP client disconnects
#
# CONFIGURATION (environment or .env):
#   ACTIVITYWATCH_URL   aw-server API root
#   LOG_LEVEL           DEBUG / INFO / WARNING ... (default INFO)
# =============================================================================

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from activitywatch.client import ActivityWatchClient
from activitywatch.constants import BASE_URL_ENV_VAR, DEFAULT_BASE_URL, LOG_LEVEL_ENV_VAR
from tools.mcp_server import create_server

logger = logging.getLogger("activitywatch_mcp")


def configure_logging() -> None:
    level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


async def serve(base_url: str) -> None:
    """Run the MCP server over stdio, closing the HTTP client on the way out."""
    async with ActivityWatchClient(base_url) as client:
        mcp = create_server(client)
        await mcp.run_async(transport="stdio")


def main() -> None:
    load_dotenv()
    configure_logging()

    base_url = os.environ.get(BASE_URL_ENV_VAR, DEFAULT_BASE_URL)

    logger.info("ActivityWatch MCP Server starting...")
    logger.info("Connecting to ActivityWatch at: %s", base_url)

    asyncio.run(serve(base_url))


if __name__ == "__main__":
    main()
