"""
Selection logic for the settings window: which CaptureTarget a click
produces, and how the active target is described in the status line.
"""

from typing import List, Optional

from spectra.core.constants import PRIMARY_DISPLAY
from spectra.core.models import CaptureTarget, DisplayDescriptor, Region, Settings, WindowDescriptor

MAIN_DISPLAY_LABEL = "Main Display"
NOT_CONFIGURED_LABEL = "Not Configured"


def target_for_display(display_id: Optional[int] = None) -> CaptureTarget:
    """Target for a display; None selects whichever display is primary."""
    return CaptureTarget(type="screen", screen_id=PRIMARY_DISPLAY if display_id is None else display_id)


def target_for_window(window_id: int) -> CaptureTarget:
    return CaptureTarget(type="window", window_id=window_id)


def target_for_region(region: Region) -> CaptureTarget:
    return CaptureTarget(type="region", region=region)


def with_target(settings: Settings, target: CaptureTarget) -> Settings:
    """Replace the target, keeping the rest of the settings document."""
    return settings.model_copy(update={"target": target})


def _normalized(target: CaptureTarget) -> CaptureTarget:
    if target.type == "screen" and target.screen_id is None:
        return target.model_copy(update={"screen_id": PRIMARY_DISPLAY})
    return target


def same_target(a: CaptureTarget, b: CaptureTarget) -> bool:
    """Equality that treats a missing screenId and "main" as the same display."""
    return _normalized(a) == _normalized(b)


def settings_for_selection(settings: Settings, target: CaptureTarget) -> Optional[Settings]:
    """
    Settings to save for a list selection, or None when nothing changes.

    Highlighting the active row fires the same selection event as a click,
    so selecting the already-active target must not write the file.
    """
    if same_target(settings.target, target):
        return None
    return with_target(settings, target)


def describe_target(
    settings: Settings,
    windows: List[WindowDescriptor],
    displays: List[DisplayDescriptor],
) -> str:
    """
    Status-line text for the active target.

    Returns:
        str: "Main Display", a display name, "Owner - Title", "Region x,y wxh",
        "Unknown Display", "Unknown Window" or "Not Configured"
    """
    target = settings.target

    if target.type == "screen":
        if target.screen_id is None or target.screen_id == PRIMARY_DISPLAY:
            return MAIN_DISPLAY_LABEL
        display = next((d for d in displays if d.id == target.screen_id), None)
        return display.name if display else "Unknown Display"

    if target.type == "window" and target.window_id is not None:
        window = next((w for w in windows if w.id == target.window_id), None)
        return f"{window.owner_name} - {window.name}" if window else "Unknown Window"

    if target.type == "region":
        region = target.region or settings.region
        if region is not None:
            return f"Region {region.x:g},{region.y:g} {region.width:g}x{region.height:g}"

    return NOT_CONFIGURED_LABEL


def selected_item(settings: Settings) -> Optional[str]:
    """
    Row id of the active target in the window/display lists.

    Returns:
        Optional[str]: "display:main", "display:<id>", "window:<id>", or None
    """
    target = settings.target
    if target.type == "screen":
        if isinstance(target.screen_id, int):
            return f"display:{target.screen_id}"
        return f"display:{PRIMARY_DISPLAY}"
    if target.type == "window" and target.window_id is not None:
        return f"window:{target.window_id}"
    return None


def target_for_item(item_id: str) -> CaptureTarget:
    """Inverse of ``selected_item``."""
    kind, _, value = item_id.partition(":")
    if kind == "window":
        return target_for_window(int(value))
    if kind == "display":
        return target_for_display(None if value == PRIMARY_DISPLAY else int(value))
    raise ValueError(f"Unknown list item: {item_id}")
