"""
Capture target resolution.

Maps the persisted settings to exactly one capture-backend invocation. The
first matching rule wins:

1. window target with a windowId   -> capture_window <windowId>
2. screen target                   -> capture_display [<screenId>]
3. region target with a region     -> capture_region x y w h
4. anything else                   -> capture_display (primary)

For region targets ``target.region`` wins over the legacy top-level
``region``, which is only consulted when the target has none.
"""

from typing import NamedTuple, Optional, Tuple

from loguru import logger

from spectra.core.models import Region, Settings
from spectra.core.utils import format_number


class CaptureCommand(NamedTuple):
    subcommand: str
    args: Tuple[str, ...] = ()

    def describe(self) -> str:
        return " ".join((self.subcommand,) + self.args)


def window_command(window_id: int) -> CaptureCommand:
    return CaptureCommand("capture_window", (str(window_id),))


def display_command(display_id: Optional[int] = None) -> CaptureCommand:
    if display_id is None:
        return CaptureCommand("capture_display")
    return CaptureCommand("capture_display", (str(display_id),))


def region_command(region: Region) -> CaptureCommand:
    return CaptureCommand(
        "capture_region",
        tuple(format_number(value) for value in (region.x, region.y, region.width, region.height)),
    )


def effective_region(settings: Settings) -> Optional[Region]:
    """The region a region target should capture, honoring the legacy field as fallback."""
    target_region = settings.target.region
    if target_region is None:
        return settings.region
    if settings.region is not None and settings.region != target_region:
        logger.warning("Settings carry both target.region and a legacy top-level region; using target.region")
    return target_region


def resolve_capture_command(settings: Settings) -> CaptureCommand:
    """
    Pick the capture subcommand for the configured target.

    Args:
        settings: Current settings

    Returns:
        CaptureCommand: Subcommand and positional arguments
    """
    target = settings.target

    if target.type == "window" and target.window_id is not None:
        return window_command(target.window_id)

    if target.type == "screen":
        # "main" and a missing screenId both mean the primary display
        return display_command(target.screen_id if isinstance(target.screen_id, int) else None)

    if target.type == "region":
        region = effective_region(settings)
        if region is not None:
            return region_command(region)

    logger.warning(f"Incomplete {target.type} target in settings, capturing the primary display")
    return display_command()
