# filemerger_mcp/main.py
import logging
import sys
from typing import Optional, Sequence

from fastmcp import FastMCP

from filemerger.config import Settings
from filemerger.di import build_container
from filemerger.errors import InvalidArguments
from filemerger.logging import configure_logging
from filemerger_mcp.formatting import render_allowed_roots
from filemerger_mcp.tools.files import register_file_tools

logger = logging.getLogger("filemerger_mcp")


def create_app(settings: Optional[Settings] = None, roots: Optional[Sequence[str]] = None) -> FastMCP:
    """
    Build DI container, create FastMCP host, and register tools.
    Raises InvalidArguments when an allowed directory is missing or not a directory.
    """
    container = build_container(settings, roots)

    mcp = FastMCP("file-merger-server", version="1.0.0")
    register_file_tools(mcp, container.gateway)

    logger.info(render_allowed_roots(container.roots.as_strings()).replace("\n", " "))
    return mcp


def main(argv: Optional[Sequence[str]] = None):
    settings = Settings()
    configure_logging(settings.LOG_LEVEL)

    roots = list(sys.argv[1:] if argv is None else argv)
    try:
        app = create_app(settings, roots)
    except InvalidArguments as exc:
        logger.error("%s", exc)
        sys.exit(1)

    logger.info("MCP File Merger Server running on stdio")
    # stdio transport: the client launches this process and speaks JSON-RPC on stdin/stdout
    app.run(transport="stdio")


if __name__ == "__main__":
    main()
