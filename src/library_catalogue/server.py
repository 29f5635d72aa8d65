"""Library Catalogue MCP Server.

Exposes the catalogue operations as MCP tools over the stdio transport:
- Input: JSON-RPC messages via stdin
- Output: JSON-RPC messages via stdout
- Logs: stderr, so stdout stays clean for the protocol

The server keeps one in-memory store for its whole lifetime. Nothing is
persisted; restarting the server starts an empty catalogue.
"""

import logging
import signal
import sys
from typing import Any

from fastmcp import FastMCP

from .config import CatalogueConfig, get_config
from .database import get_store, reset_store
from .tools import all_tools

logger = logging.getLogger(__name__)


def create_server(config: CatalogueConfig) -> FastMCP:
    """Create the FastMCP instance and register every catalogue tool."""
    mcp = FastMCP(
        name=config.server_name,
        version=config.server_version,
        instructions=(
            "Library Catalogue - an in-memory catalogue of books, members and loans. "
            "Add books and members, borrow and return copies, and query loan history."
        ),
    )

    for tool in all_tools:
        logger.debug("Registering tool: %s", tool["name"])
        mcp.tool(
            name=tool["name"],
            description=tool["description"],
        )(tool["handler"])

    logger.info("Registered %d tools", len(all_tools))
    return mcp


def run_stdio_server(config: CatalogueConfig) -> None:
    """Run the MCP server using stdio transport."""
    logger.info("Starting %s v%s on stdio transport", config.server_name, config.server_version)

    if not config.debug:
        logging.getLogger("fastmcp").setLevel(logging.WARNING)

    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, shutting down with %s", signum, get_store().counts())
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    reset_store()
    mcp = create_server(config)

    try:
        logger.info("MCP Server ready and waiting for connections...")
        mcp.run(transport="stdio")
    except Exception:
        logger.exception("Fatal error in MCP server")
        sys.exit(1)


def main() -> None:
    """Main entry point for the MCP server (``library-catalogue-mcp``)."""
    config = get_config()
    logging.basicConfig(
        level=getattr(logging, config.effective_log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    try:
        logger.info("Library Catalogue MCP Server %s", config.server_version)
        logger.info("Loan period: %d days", config.loan_period_days)

        if config.transport == "stdio":
            run_stdio_server(config)
        else:
            logger.error("Unsupported transport: %s", config.transport)
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Server stopped by user")


if __name__ == "__main__":
    main()
