#!/usr/bin/env python3
"""
MCP Tools for Spectra

This module defines the tool catalogue exposed to AI agents:

    screen_capture_latest   capture the target configured in settings
    screen_list_windows     list on-screen windows as JSON text
    screen_capture_window   capture one window by id
    screen_capture_region   capture a rectangle of the screen
    settings_get            read the settings document
    settings_set            update the settings document

Parameter schemas are generated from the type hints. Every tool either
returns its result or raises; FastMCP reports a raised exception as a
tool-error result with the exception's message.

This module is part of the Integration Layer and can depend on both
Core Layer and Presentation Layer components.

Sample input:
- SpectraConfig resolved at startup

Expected output:
- Configured MCP server with registered tools
"""

from typing import Annotated, Optional

from loguru import logger
from mcp.server.fastmcp import FastMCP, Image
from pydantic import Field

from spectra.core.client import CaptureClient
from spectra.core.config import SpectraConfig, load_config
from spectra.core.models import Region, SettingsUpdate, TargetUpdate
from spectra.core.settings import SettingsStore
from spectra.mcp.wrappers import (
    capture_latest_wrapper,
    capture_region_wrapper,
    capture_window_wrapper,
    list_windows_wrapper,
    settings_get_wrapper,
    settings_set_wrapper,
)

SERVER_INSTRUCTIONS = (
    "Screen capture tools. Use screen_capture_latest to see what the user has "
    "selected in the Spectra app, or screen_list_windows followed by "
    "screen_capture_window to look at a specific window."
)


def create_mcp_server(
    name: str = "Spectra",
    config: Optional[SpectraConfig] = None,
    client: Optional[CaptureClient] = None,
    store: Optional[SettingsStore] = None,
) -> FastMCP:
    """
    Create and configure MCP server with the Spectra tools

    Args:
        name: Name for the MCP server
        config: Resolved configuration; loaded from the environment if omitted
        client: Capture backend client; built from config if omitted
        store: Settings store; built from config if omitted

    Returns:
        FastMCP: Configured MCP server instance
    """
    if client is None or store is None:
        config = config or load_config()
    client = client or CaptureClient.from_config(config)
    store = store or SettingsStore(config.settings_path)

    mcp = FastMCP(name, instructions=SERVER_INSTRUCTIONS)
    logger.info(f"Initialized FastMCP server: {name} (capture command: {' '.join(client.command)})")

    register_capture_latest_tool(mcp, client, store)
    register_list_windows_tool(mcp, client)
    register_capture_window_tool(mcp, client)
    register_capture_region_tool(mcp, client)
    register_settings_tools(mcp, store)

    return mcp


def register_capture_latest_tool(mcp: FastMCP, client: CaptureClient, store: SettingsStore) -> None:
    """
    Register screen_capture_latest with the MCP server

    Args:
        mcp: MCP server instance
        client: Capture backend client
        store: Settings store holding the capture target
    """
    @mcp.tool()
    def screen_capture_latest() -> Image:
        """
        Capture the screen according to the current settings.

        The target (a window, a display, or a region) is whatever the user
        last selected in the Spectra app or set with settings_set. Falls back
        to the primary display when no complete target is configured.

        Returns:
            A JPEG image of the configured target.
        """
        logger.info("screen_capture_latest requested")
        return capture_latest_wrapper(client, store)


def register_list_windows_tool(mcp: FastMCP, client: CaptureClient) -> None:
    """
    Register screen_list_windows with the MCP server

    Args:
        mcp: MCP server instance
        client: Capture backend client
    """
    @mcp.tool()
    def screen_list_windows() -> str:
        """
        List on-screen windows.

        Returns:
            JSON array of windows, each with id, ownerName (application),
            name (title), layer and bounds. Pass an id to screen_capture_window.
        """
        logger.info("screen_list_windows requested")
        return list_windows_wrapper(client)


def register_capture_window_tool(mcp: FastMCP, client: CaptureClient) -> None:
    """
    Register screen_capture_window with the MCP server

    Args:
        mcp: MCP server instance
        client: Capture backend client
    """
    @mcp.tool()
    def screen_capture_window(
        windowId: Annotated[int, Field(description="Window id from screen_list_windows")],
    ) -> Image:
        """
        Capture a specific window by id, without its frame.

        Window ids are only valid while the window exists; list windows again
        if a capture fails.

        Returns:
            A JPEG image of the window.
        """
        logger.info(f"screen_capture_window requested for window {windowId}")
        return capture_window_wrapper(client, windowId)


def register_capture_region_tool(mcp: FastMCP, client: CaptureClient) -> None:
    """
    Register screen_capture_region with the MCP server

    Args:
        mcp: MCP server instance
        client: Capture backend client
    """
    @mcp.tool()
    def screen_capture_region(
        x: Annotated[float, Field(description="Left edge in global screen coordinates")],
        y: Annotated[float, Field(description="Top edge in global screen coordinates")],
        width: Annotated[float, Field(description="Width of the region, must be positive")],
        height: Annotated[float, Field(description="Height of the region, must be positive")],
    ) -> Image:
        """
        Capture a rectangular region of the screen.

        Returns:
            A JPEG image of everything visible inside the rectangle.
        """
        logger.info(f"screen_capture_region requested for {x:g},{y:g} {width:g}x{height:g}")
        return capture_region_wrapper(client, x, y, width, height)


def register_settings_tools(mcp: FastMCP, store: SettingsStore) -> None:
    """
    Register settings_get and settings_set with the MCP server

    Args:
        mcp: MCP server instance
        store: Settings store
    """
    @mcp.tool()
    def settings_get() -> str:
        """
        Get the current settings.

        Returns:
            Settings JSON: {"target": {"type": "window"|"screen"|"region",
            "windowId"?, "screenId"?, "region"?}}
        """
        logger.info("settings_get requested")
        return settings_get_wrapper(store)

    @mcp.tool()
    def settings_set(
        target: Annotated[
            Optional[TargetUpdate],
            Field(description="Capture target fields to change; a new type starts a fresh target"),
        ] = None,
        region: Annotated[
            Optional[Region],
            Field(description="Legacy top-level region override"),
        ] = None,
        clearRegion: Annotated[
            bool,
            Field(description="Remove the legacy top-level region"),
        ] = False,
    ) -> str:
        """
        Update the settings.

        Only the fields given are changed. Setting target.type to a different
        kind replaces the target; otherwise the given target fields are merged
        into the current one. screenId accepts a display id or "main".

        Returns:
            The updated settings JSON.
        """
        logger.info("settings_set requested")
        changes = {}
        if target is not None:
            changes["target"] = target
        if clearRegion:
            changes["region"] = None
        elif region is not None:
            changes["region"] = region
        return settings_set_wrapper(store, SettingsUpdate(**changes))
