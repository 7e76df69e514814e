#!/usr/bin/env python3
"""
MCP Server Entry Point for Spectra

This is the entry point referenced from an MCP client configuration, e.g.

    {"command": "spectra-mcp", "args": ["start"]}

The server speaks MCP over stdio, so all logging goes to stderr and a log
file; stdout belongs to the protocol.

This module is part of the Integration Layer and connects the MCP functionality
to the application core.
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

import anyio
from loguru import logger

from spectra.core.client import CaptureClient
from spectra.core.config import SpectraConfig, load_config
from spectra.core.errors import CaptureBackendError
from spectra.core.utils import ensure_directory, get_system_info
from spectra.mcp.mcp_tools import create_mcp_server


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """
    Configure logging with proper format and level.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for mcp_server.log; file logging is skipped if None
    """
    logger.remove()

    if log_dir and ensure_directory(log_dir):
        logger.add(
            f"{log_dir}/mcp_server.log",
            rotation="10 MB",
            retention="1 week",
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"
        )

    logger.add(
        sys.stderr,
        format="<level>{level: <8}</level> | {message}",
        level=level,
        colorize=False
    )


def get_server_info(config: SpectraConfig) -> Dict[str, Any]:
    """
    Get server information.

    Returns:
        Dict[str, Any]: Server information
    """
    from spectra import __version__

    return {
        "name": "Spectra MCP Server",
        "version": __version__,
        "description": "Screen, window and region capture tools for AI agents",
        "transport": "stdio",
        "capture_command": list(config.capture_command),
        "settings_path": config.settings_path,
    }


def health_check(config: SpectraConfig) -> Dict[str, Any]:
    """
    Invoke the capture backend once and report whether it works.

    Returns:
        Dict[str, Any]: Health check results
    """
    client = CaptureClient.from_config(config)
    try:
        displays = client.list_displays(include_thumbnails=False)
    except CaptureBackendError as e:
        return {
            "status": "unhealthy",
            "capture_command": list(config.capture_command),
            "error": str(e),
        }

    return {
        "status": "healthy",
        "capture_command": list(config.capture_command),
        "displays": len(displays),
        **get_system_info(),
    }


def list_tool_catalogue(config: SpectraConfig) -> List[Dict[str, Any]]:
    """Tool names, descriptions and input schemas as plain dicts."""
    mcp = create_mcp_server(config=config)
    tools = anyio.run(mcp.list_tools)
    return [
        {"name": tool.name, "description": tool.description, "inputSchema": tool.inputSchema}
        for tool in tools
    ]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="spectra-mcp", description="Spectra MCP Server")
    parser.add_argument(
        "--capture-command",
        help="Capture backend command line (default: $SPECTRA_CAPTURE_COMMAND or the bundled backend)",
    )
    parser.add_argument(
        "--settings-path",
        help="Settings file (default: $SPECTRA_SETTINGS_PATH or the per-user settings file)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to run (default: start)")
    subparsers.add_parser("start", help="Start the MCP server on stdio")
    subparsers.add_parser("health", help="Check that the capture backend works")
    subparsers.add_parser("info", help="Display server information")
    subparsers.add_parser("tools", help="Print the tool catalogue as JSON")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the MCP server.

    Returns:
        int: Exit code
    """
    args = build_parser().parse_args(argv)
    command = args.command or "start"

    try:
        config = load_config(
            capture_command=args.capture_command,
            settings_path=args.settings_path,
            log_level="DEBUG" if args.debug else None,
        )
    except ValueError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        return 1

    if command == "start":
        configure_logging(config.log_level, config.log_dir)
        logger.info("Starting Spectra MCP server on stdio")

        try:
            mcp = create_mcp_server(config=config)
            mcp.run()
        except KeyboardInterrupt:
            logger.info("Server stopped by user")
            return 0
        except Exception as e:
            logger.exception(f"Server failed: {str(e)}")
            return 1

    elif command == "health":
        configure_logging("WARNING")
        result = health_check(config)
        print(json.dumps(result, indent=2))
        return 0 if result["status"] == "healthy" else 1

    elif command == "info":
        print(json.dumps(get_server_info(config), indent=2))

    elif command == "tools":
        configure_logging("WARNING")
        print(json.dumps(list_tool_catalogue(config), indent=2))

    return 0


def main_entry() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    """
    Usage:
      python -m spectra.mcp.mcp_server [--capture-command CMD] [--settings-path PATH] [--debug] start
      python -m spectra.mcp.mcp_server health
      python -m spectra.mcp.mcp_server info
      python -m spectra.mcp.mcp_server tools
    """
    main_entry()
