"""
Main entry point for the ChatGPT desktop MCP bridge.

Usage:
    chatgpt-desktop-mcp [path/to/settings.json]
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import anyio

from chatgpt_desktop_mcp.context import AutomationContext
from chatgpt_desktop_mcp.errors import FatalTransportError
from chatgpt_desktop_mcp.logger import StatusLogger
from chatgpt_desktop_mcp.server import serve
from chatgpt_desktop_mcp.settings_manager import SettingsManager


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    logger = StatusLogger()

    manager = SettingsManager(Path(args[0]) if args else None)
    try:
        settings = manager.load()
    except ValueError as e:
        logger.log_error(f"Invalid settings in {manager.storage_path}: {e}")
        return 2
    if manager.last_error:
        logger.log_warning(f"Ignoring unreadable settings ({manager.last_error}); using defaults")

    context = AutomationContext.create(settings, logger)

    logger.log_info("ChatGPT MCP Server starting on stdio…")
    try:
        anyio.run(serve, context)
    except FatalTransportError as e:
        logger.log_error(f"Fatal MCP server error: {e}")
        return 1
    logger.log_info("ChatGPT MCP Server stopped (stdin closed)")
    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
