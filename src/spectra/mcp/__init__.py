"""
MCP Layer for Spectra

This package exposes the capture backend to AI agents as Model Context
Protocol tools over stdio.

The MCP layer is designed to:
1. Expose capture and settings operations as MCP tools
2. Resolve the capture backend command once at startup
3. Turn every failure into a tool-error result

Usage:
    # Start the MCP server
    spectra-mcp start

    # Use the MCP server in Python
    from spectra.mcp import create_mcp_server
    mcp = create_mcp_server()
    mcp.run()
"""

# MCP server creation
from spectra.mcp.mcp_tools import create_mcp_server

# MCP server entry point
from spectra.mcp.mcp_server import (
    main,
    health_check,
    get_server_info,
    configure_logging
)

# MCP wrappers
from spectra.mcp.wrappers import (
    capture_latest_wrapper,
    list_windows_wrapper,
    capture_window_wrapper,
    capture_region_wrapper,
    settings_get_wrapper,
    settings_set_wrapper,
    envelope_to_image
)

__all__ = [
    'create_mcp_server',
    'main',
    'health_check',
    'get_server_info',
    'configure_logging',
    'capture_latest_wrapper',
    'list_windows_wrapper',
    'capture_window_wrapper',
    'capture_region_wrapper',
    'settings_get_wrapper',
    'settings_set_wrapper',
    'envelope_to_image'
]
