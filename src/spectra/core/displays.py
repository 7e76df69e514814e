#!/usr/bin/env python3
"""
Display and Region Capture

Low-level wrappers around the MSS library for display enumeration, full
display capture and rectangular region capture. Display ids are MSS monitor
indices: 1 is the primary display, higher numbers are the other active
displays. Index 0 (the union of all monitors) is never exposed.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- Display id 1, or Region(x=0, y=0, width=800, height=600)

Expected output:
- PIL Image objects and DisplayDescriptor records
"""

from typing import Any, Dict, List, Optional

import mss
from mss.exception import ScreenShotError
from PIL import Image
from loguru import logger

from spectra.core.constants import MAX_DISPLAYS
from spectra.core.errors import CaptureError, DisplayNotFoundError
from spectra.core.image_processing import make_thumbnail
from spectra.core.models import Bounds, DisplayDescriptor, Region

PRIMARY_INDEX = 1


def _to_image(sct_img: Any) -> Image.Image:
    return Image.frombytes("RGB", sct_img.size, sct_img.bgra, "raw", "BGRX")


def _bounds(monitor: Dict[str, int]) -> Bounds:
    return Bounds(x=monitor["left"], y=monitor["top"], width=monitor["width"], height=monitor["height"])


def list_displays(include_thumbnails: bool = True) -> List[DisplayDescriptor]:
    """
    Enumerate active displays.

    Pixel dimensions come from the captured framebuffer when thumbnails are
    requested (so HiDPI displays report device pixels), otherwise from the
    monitor geometry.

    Args:
        include_thumbnails: Capture each display and attach a thumbnail

    Returns:
        List[DisplayDescriptor]: At most MAX_DISPLAYS displays, primary first
    """
    displays = []
    try:
        with mss.mss() as sct:
            for index, monitor in enumerate(sct.monitors[1:MAX_DISPLAYS + 1], start=1):
                width, height = monitor["width"], monitor["height"]
                thumbnail = None
                if include_thumbnails:
                    try:
                        img = _to_image(sct.grab(monitor))
                        width, height = img.size
                        thumbnail = make_thumbnail(img)
                    except ScreenShotError as e:
                        logger.warning(f"Failed to capture thumbnail for display {index}: {str(e)}")

                displays.append(DisplayDescriptor(
                    id=index,
                    name=f"Display {index}",
                    width=width,
                    height=height,
                    bounds=_bounds(monitor),
                    is_main=index == PRIMARY_INDEX,
                    thumbnail=thumbnail,
                ))
    except ScreenShotError as e:
        raise CaptureError(f"Failed to enumerate displays: {str(e)}") from e

    logger.debug(f"Found {len(displays)} displays")
    return displays


def capture_display(display_id: Optional[int] = None) -> Image.Image:
    """
    Capture one display's full framebuffer.

    Args:
        display_id: Display id from list_displays, or None for the primary display

    Returns:
        PIL.Image: The captured display

    Raises:
        DisplayNotFoundError: The id is not an active display
        CaptureError: The grab itself failed
    """
    index = PRIMARY_INDEX if display_id is None else display_id
    try:
        with mss.mss() as sct:
            if index < 1 or index >= len(sct.monitors):
                raise DisplayNotFoundError(index)
            return _to_image(sct.grab(sct.monitors[index]))
    except ScreenShotError as e:
        raise CaptureError(f"Failed to capture display {index}: {str(e)}") from e


def capture_region(region: Region) -> Image.Image:
    """
    Capture whatever is on screen inside a rectangle of global coordinates.

    Args:
        region: Rectangle to capture; width and height must be positive

    Returns:
        PIL.Image: The captured region
    """
    if region.width <= 0 or region.height <= 0:
        raise CaptureError(
            f"Invalid region: width and height must be positive, got {region.width}x{region.height}"
        )

    box = {
        "left": int(round(region.x)),
        "top": int(round(region.y)),
        "width": max(1, int(round(region.width))),
        "height": max(1, int(round(region.height))),
    }
    try:
        with mss.mss() as sct:
            return _to_image(sct.grab(box))
    except ScreenShotError as e:
        raise CaptureError(f"Failed to capture region: {str(e)}") from e


def display_thumbnail(display_id: int) -> Optional[str]:
    """Thumbnail of one display, or None if it cannot be captured."""
    try:
        return make_thumbnail(capture_display(display_id))
    except CaptureError as e:
        logger.warning(str(e))
        return None

