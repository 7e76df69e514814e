#!/usr/bin/env python3
"""
Capture Operations for Spectra

One function per capture-backend subcommand. Every capture funnels through
``encode_capture`` so that all of them produce the same ImageEnvelope.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- capture_display_envelope(None)

Expected output:
- ImageEnvelope(type='image', format='jpeg', data='/9j/4AAQ...')
"""

from typing import List, Optional

from PIL import Image
from loguru import logger

from spectra.core import displays, windows
from spectra.core.constants import IMAGE_SETTINGS
from spectra.core.image_processing import encode_base64_jpeg
from spectra.core.models import (
    DisplayDescriptor,
    ImageEnvelope,
    Region,
    ThumbnailEnvelope,
    WindowDescriptor,
)


def encode_capture(img: Image.Image, quality: int = IMAGE_SETTINGS["CAPTURE_QUALITY"]) -> ImageEnvelope:
    """
    Encode a captured bitmap as the envelope printed by every capture subcommand.

    Args:
        img: Captured PIL Image
        quality: JPEG quality

    Returns:
        ImageEnvelope: base64 JPEG envelope
    """
    data = encode_base64_jpeg(img, quality)
    logger.debug(f"Encoded {img.size[0]}x{img.size[1]} capture ({len(data)} base64 chars)")
    return ImageEnvelope(format=IMAGE_SETTINGS["FORMAT"], data=data)


def list_windows(include_thumbnails: bool = True, include_all: bool = False) -> List[WindowDescriptor]:
    return windows.list_windows(include_thumbnails=include_thumbnails, include_all=include_all)


def list_displays(include_thumbnails: bool = True) -> List[DisplayDescriptor]:
    return displays.list_displays(include_thumbnails=include_thumbnails)


def window_thumbnail(window_id: int) -> ThumbnailEnvelope:
    return ThumbnailEnvelope(id=window_id, thumbnail=windows.window_thumbnail(window_id) or "")


def display_thumbnail(display_id: int) -> ThumbnailEnvelope:
    return ThumbnailEnvelope(id=display_id, thumbnail=displays.display_thumbnail(display_id) or "")


def capture_window(window_id: int) -> ImageEnvelope:
    logger.info(f"Capturing window {window_id}")
    return encode_capture(windows.capture_window(window_id))


def capture_display(display_id: Optional[int] = None) -> ImageEnvelope:
    logger.info(f"Capturing display {display_id if display_id is not None else '(primary)'}")
    return encode_capture(displays.capture_display(display_id))


def capture_region(region: Region) -> ImageEnvelope:
    logger.info(f"Capturing region {region.x},{region.y} {region.width}x{region.height}")
    return encode_capture(displays.capture_region(region))
