# =============================================================================
# main.py  -  Entry Point for the BrowserStack MCP Tool Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py            (or the installed `browserstack-mcp`)
#
# WHAT HAPPENS:
#   1. Loads .env into the environment (BrowserStack credentials, URLs)
#   2. Configures logging to STDERR at BROWSERSTACK_LOG_LEVEL
#   3. Imports the FastMCP server, which registers every tool
#   4. Serves MCP over stdio until the host disconnects
#
# HOOKING IT UP TO A HOST:
#   Point the host's MCP config at this command, e.g.
#     {"command": "uv", "args": ["run", "python", "/path/to/main.py"]}
#   and put BROWSERSTACK_USERNAME / BROWSERSTACK_ACCESS_KEY in .env or in
#   the host's env block.
# =============================================================================

from dotenv import load_dotenv

# Load environment variables from .env BEFORE importing anything that reads
# settings, so the first tool call already sees the credentials.
load_dotenv()

from core.config import get_settings
from tools.mcp_server import configure_logging, mcp


def main() -> None:
    """Configure logging and serve the tools over stdio."""
    configure_logging(get_settings().log_level)
    mcp.run()


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
