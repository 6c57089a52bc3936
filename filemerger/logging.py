# filemerger/logging.py
import logging
from typing import Any, Dict

MAX_LOGGED_ITEMS = 10


def configure_logging(level: str = "INFO"):
    # stdout carries the MCP stdio stream, so logs go to stderr (basicConfig default)
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def summarize_args(args: Dict[str, Any]) -> Dict[str, Any]:
    """Shorten long path lists so one call stays on one readable log line."""
    safe: Dict[str, Any] = {}
    for k, v in args.items():
        if isinstance(v, list) and len(v) > MAX_LOGGED_ITEMS:
            safe[k] = v[:MAX_LOGGED_ITEMS] + [f"... (+{len(v) - MAX_LOGGED_ITEMS} more)"]
        else:
            safe[k] = v
    return safe


def log_tool_call(logger: logging.Logger, name: str, args: Dict[str, Any]):
    logger.info("tool_call %s %s", name, summarize_args(args))
