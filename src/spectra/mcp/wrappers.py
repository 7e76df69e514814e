#!/usr/bin/env python3
"""
MCP Wrappers for Spectra

Plain functions behind each tool: they read settings, call the capture
client and shape the result for the tool-call response (an Image content
block or JSON text). Failures are raised, not returned; the server boundary
converts any exception into a tool-error result carrying its message.

This module is part of the Integration Layer and can depend on both
Core Layer and Presentation Layer components.

Sample input:
- capture_latest_wrapper(client, store) with settings {"target": {"type": "screen"}}

Expected output:
- Image(data=b'\\xff\\xd8...', format='jpeg')
"""

import json

from loguru import logger
from mcp.server.fastmcp import Image

from spectra.core.client import CaptureClient
from spectra.core.models import ImageEnvelope, Region, Settings, SettingsUpdate, dump_windows
from spectra.core.settings import SettingsStore
from spectra.core.targets import resolve_capture_command


def envelope_to_image(envelope: ImageEnvelope) -> Image:
    """Convert a capture envelope into an MCP image content block."""
    return Image(data=envelope.image_bytes(), format=envelope.format)


def format_settings(settings: Settings) -> str:
    return json.dumps(settings.to_dict(), indent=2)


def capture_latest_wrapper(client: CaptureClient, store: SettingsStore) -> Image:
    """
    Capture the configured target.

    Args:
        client: Capture backend client
        store: Settings store holding the target

    Returns:
        Image: Captured JPEG
    """
    command = resolve_capture_command(store.load())
    logger.info(f"Capturing configured target with {command.describe()}")
    return envelope_to_image(client.capture(command))


def list_windows_wrapper(client: CaptureClient) -> str:
    """Window list as JSON text, without thumbnails."""
    windows = client.list_windows(include_thumbnails=False)
    logger.info(f"Listed {len(windows)} windows")
    return dump_windows(windows)


def capture_window_wrapper(client: CaptureClient, window_id: int) -> Image:
    return envelope_to_image(client.capture_window(window_id))


def capture_region_wrapper(client: CaptureClient, x: float, y: float, width: float, height: float) -> Image:
    """
    Capture a rectangle of the screen.

    Raises:
        ValueError: Width or height is not positive
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Region width and height must be positive, got {width:g}x{height:g}")
    return envelope_to_image(client.capture_region(Region(x=x, y=y, width=width, height=height)))


def settings_get_wrapper(store: SettingsStore) -> str:
    return format_settings(store.load())


def settings_set_wrapper(store: SettingsStore, update: SettingsUpdate) -> str:
    """
    Merge a partial update into the stored settings and save them.

    Args:
        store: Settings store
        update: Partial settings; only fields that are set are applied

    Returns:
        str: The updated settings as JSON text
    """
    updated = store.update(update)
    logger.info(f"Settings updated: {updated.to_json()}")
    return format_settings(updated)
