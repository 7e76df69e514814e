#!/usr/bin/env python3
"""
Image Processing for Spectra

This module turns captured bitmaps into the encoded forms the capture backend
prints: full-quality JPEG for captures and bounded, lower-quality JPEG
thumbnails for previews.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- PIL Image object (1920x1080)
- Thumbnail parameters: max_dim=400, quality=60

Expected output:
- Thumbnail image (400x225) encoded as base64 JPEG
"""

import base64
import io
from typing import Optional

from PIL import Image
from loguru import logger

from spectra.core.constants import IMAGE_SETTINGS


def ensure_rgb(img: Image.Image) -> Image.Image:
    """
    Converts image to RGB mode if needed for JPEG compatibility.

    Args:
        img: PIL Image object to convert

    Returns:
        PIL.Image: Image in RGB mode
    """
    if img.mode == 'RGBA':
        # Flatten transparency onto white
        background = Image.new('RGB', img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[3])
        return background
    elif img.mode != 'RGB':
        return img.convert('RGB')
    return img


def scale_to_fit(img: Image.Image, max_dim: int = IMAGE_SETTINGS["THUMBNAIL_MAX_DIM"]) -> Image.Image:
    """
    Downscale an image so neither side exceeds ``max_dim``, preserving aspect ratio.

    Images already within bounds are returned unchanged (never upscaled).

    Args:
        img: PIL Image object to scale
        max_dim: Maximum width and height

    Returns:
        PIL.Image: Scaled image or the original
    """
    width, height = img.size
    if width <= max_dim and height <= max_dim:
        return img

    scale_factor = min(max_dim / width, max_dim / height)
    new_width = max(1, min(max_dim, int(width * scale_factor)))
    new_height = max(1, min(max_dim, int(height * scale_factor)))

    logger.debug(f"Scaling image from {width}x{height} to {new_width}x{new_height}")
    return img.resize((new_width, new_height), Image.LANCZOS)


def encode_jpeg(img: Image.Image, quality: int = IMAGE_SETTINGS["CAPTURE_QUALITY"]) -> bytes:
    """
    Encode an image as JPEG bytes.

    Args:
        img: PIL Image object to encode
        quality: JPEG quality (1-95)

    Returns:
        bytes: JPEG data
    """
    img = ensure_rgb(img)
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def encode_base64_jpeg(img: Image.Image, quality: int = IMAGE_SETTINGS["CAPTURE_QUALITY"]) -> str:
    """Encode an image as base64 JPEG text."""
    return base64.b64encode(encode_jpeg(img, quality)).decode("ascii")


def make_thumbnail(
    img: Image.Image,
    max_dim: int = IMAGE_SETTINGS["THUMBNAIL_MAX_DIM"],
    quality: int = IMAGE_SETTINGS["THUMBNAIL_QUALITY"]
) -> Optional[str]:
    """
    Build a base64 JPEG thumbnail no larger than ``max_dim`` on either side.

    Never raises: any failure is logged and reported as ``None`` so callers
    can treat the thumbnail as unavailable.

    Args:
        img: Captured PIL Image
        max_dim: Maximum width and height of the thumbnail
        quality: JPEG quality for the thumbnail

    Returns:
        Optional[str]: Base64 JPEG data, or None on failure
    """
    try:
        return encode_base64_jpeg(scale_to_fit(img, max_dim), quality)
    except Exception as e:
        logger.warning(f"Failed to build thumbnail: {str(e)}")
        return None


if __name__ == "__main__":
    """Validate image processing functions with generated images"""
    import sys

    all_validation_failures = []
    total_tests = 0

    try:
        # Test 1: Landscape image is bounded on its long side
        total_tests += 1
        scaled = scale_to_fit(Image.new('RGB', (1920, 1080), color='red'))
        if scaled.size != (400, 225):
            all_validation_failures.append(f"Scale test: Expected (400, 225), got {scaled.size}")

        # Test 2: Small images are not upscaled
        total_tests += 1
        small = Image.new('RGB', (120, 80))
        if scale_to_fit(small).size != (120, 80):
            all_validation_failures.append("No-upscale test: small image was resized")

        # Test 3: Thumbnail decodes as a JPEG
        total_tests += 1
        thumb = make_thumbnail(Image.new('RGBA', (800, 600), color=(0, 0, 255, 128)))
        decoded = Image.open(io.BytesIO(base64.b64decode(thumb)))
        if decoded.format != "JPEG" or max(decoded.size) > 400:
            all_validation_failures.append(f"Thumbnail test: got {decoded.format} {decoded.size}")

    except Exception as e:
        all_validation_failures.append(f"Unexpected exception: {str(e)}")

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        sys.exit(0)
