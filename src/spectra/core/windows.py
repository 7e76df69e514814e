#!/usr/bin/env python3
"""
Window Enumeration and Capture

Native window backends behind one small interface:

- macOS: Quartz window services through pyobjc (CGWindowListCopyWindowInfo,
  CGWindowListCreateImage). Captures contain only the window's own pixels,
  without frame decoration.
- Linux/X11: python-xlib for the EWMH client list; window pixels are the
  window's on-screen rectangle grabbed through MSS.

Native modules are imported lazily so that the display and region
subcommands keep working (and start fast) without them.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- Window id 4242

Expected output:
- List of WindowDescriptor records, or a PIL Image of one window
"""

import sys
from functools import lru_cache
from typing import Any, List, Optional

from PIL import Image
from loguru import logger

from spectra.core.constants import WINDOW_FILTER
from spectra.core.errors import BackendUnavailableError, CaptureError, WindowNotFoundError
from spectra.core.image_processing import make_thumbnail
from spectra.core.displays import capture_region
from spectra.core.models import Bounds, Region, WindowDescriptor


class WindowBackend:
    """Interface implemented by each platform backend."""

    name = "none"

    def list_windows(self) -> List[WindowDescriptor]:
        """On-screen windows, front to back, excluding desktop-shell elements."""
        raise NotImplementedError

    def capture_window(self, window_id: int, best_resolution: bool = True) -> Image.Image:
        """Capture one window; raise WindowNotFoundError if it is gone."""
        raise NotImplementedError


class QuartzWindowBackend(WindowBackend):
    name = "quartz"

    def __init__(self):
        try:
            import Quartz
        except ImportError as e:
            raise BackendUnavailableError(
                "Window capture on macOS requires pyobjc-framework-Quartz"
            ) from e
        self._quartz = Quartz

    def list_windows(self) -> List[WindowDescriptor]:
        Q = self._quartz
        options = Q.kCGWindowListOptionOnScreenOnly | Q.kCGWindowListExcludeDesktopElements
        info_list = Q.CGWindowListCopyWindowInfo(options, Q.kCGNullWindowID)

        windows = []
        for info in info_list or []:
            bounds = info.get(Q.kCGWindowBounds) or {}
            windows.append(WindowDescriptor(
                id=int(info.get(Q.kCGWindowNumber)),
                owner_name=info.get(Q.kCGWindowOwnerName) or "",
                name=info.get(Q.kCGWindowName) or "",
                layer=int(info.get(Q.kCGWindowLayer, 0)),
                bounds=Bounds(
                    x=float(bounds.get("X", 0)),
                    y=float(bounds.get("Y", 0)),
                    width=float(bounds.get("Width", 0)),
                    height=float(bounds.get("Height", 0)),
                ),
            ))
        return windows

    def capture_window(self, window_id: int, best_resolution: bool = True) -> Image.Image:
        Q = self._quartz
        resolution = Q.kCGWindowImageBestResolution if best_resolution else Q.kCGWindowImageNominalResolution
        image_ref = Q.CGWindowListCreateImage(
            Q.CGRectNull,
            Q.kCGWindowListOptionIncludingWindow,
            window_id,
            Q.kCGWindowImageBoundsIgnoreFraming | resolution,
        )
        if image_ref is None:
            raise WindowNotFoundError(window_id)

        width = Q.CGImageGetWidth(image_ref)
        height = Q.CGImageGetHeight(image_ref)
        if width == 0 or height == 0:
            raise WindowNotFoundError(window_id)

        bytes_per_row = Q.CGImageGetBytesPerRow(image_ref)
        data = Q.CGDataProviderCopyData(Q.CGImageGetDataProvider(image_ref))
        # Quartz hands back premultiplied BGRA rows, possibly padded
        img = Image.frombuffer("RGBA", (width, height), bytes(data), "raw", "BGRA", bytes_per_row, 1)
        return img.convert("RGB")


class XlibWindowBackend(WindowBackend):
    name = "xlib"

    SKIPPED_TYPES = ("_NET_WM_WINDOW_TYPE_DESKTOP", "_NET_WM_WINDOW_TYPE_DOCK")

    def __init__(self):
        try:
            from Xlib import display as xdisplay
            from Xlib.error import DisplayError
        except ImportError as e:
            raise BackendUnavailableError("Window capture on Linux requires python-xlib") from e

        try:
            self._display = xdisplay.Display()
        except DisplayError as e:
            raise BackendUnavailableError(f"Cannot connect to the X server: {str(e)}") from e
        self._root = self._display.screen().root

    def _atom(self, name: str) -> int:
        return self._display.intern_atom(name)

    def _client_ids(self) -> List[int]:
        from Xlib import X

        for list_name in ("_NET_CLIENT_LIST_STACKING", "_NET_CLIENT_LIST"):
            prop = self._root.get_full_property(self._atom(list_name), X.AnyPropertyType)
            if prop is not None:
                # Stacking order is bottom to top; report front to back
                return list(reversed(prop.value))
        return []

    def _title(self, win: Any) -> str:
        prop = win.get_full_property(self._atom("_NET_WM_NAME"), self._atom("UTF8_STRING"))
        if prop is not None and prop.value:
            value = prop.value
            return value.decode("utf-8", "replace") if isinstance(value, bytes) else str(value)
        name = win.get_wm_name() or ""
        return name.decode("latin-1") if isinstance(name, bytes) else name

    def _is_shell_element(self, win: Any) -> bool:
        from Xlib import X

        prop = win.get_full_property(self._atom("_NET_WM_WINDOW_TYPE"), X.AnyPropertyType)
        if prop is None:
            return False
        skipped = {self._atom(name) for name in self.SKIPPED_TYPES}
        return any(atom in skipped for atom in prop.value)

    def _bounds(self, win: Any) -> Bounds:
        geom = win.get_geometry()
        origin = self._root.translate_coords(win, 0, 0)
        return Bounds(x=origin.x, y=origin.y, width=geom.width, height=geom.height)

    def list_windows(self) -> List[WindowDescriptor]:
        from Xlib import X
        from Xlib.error import XError

        windows = []
        for wid in self._client_ids():
            try:
                win = self._display.create_resource_object("window", wid)
                if win.get_attributes().map_state != X.IsViewable or self._is_shell_element(win):
                    continue
                wm_class = win.get_wm_class()
                windows.append(WindowDescriptor(
                    id=int(wid),
                    owner_name=wm_class[1] if wm_class and len(wm_class) > 1 else "",
                    name=self._title(win),
                    layer=WINDOW_FILTER["NORMAL_LAYER"],
                    bounds=self._bounds(win),
                ))
            except XError as e:
                # Window closed while we were enumerating
                logger.debug(f"Skipping X11 window {wid}: {e}")
        return windows

    def capture_window(self, window_id: int, best_resolution: bool = True) -> Image.Image:
        from Xlib import X
        from Xlib.error import XError

        try:
            win = self._display.create_resource_object("window", window_id)
            if win.get_attributes().map_state != X.IsViewable:
                raise WindowNotFoundError(window_id)
            bounds = self._bounds(win)
        except XError as e:
            raise WindowNotFoundError(window_id) from e

        return capture_region(Region(x=bounds.x, y=bounds.y, width=bounds.width, height=bounds.height))


@lru_cache(maxsize=1)
def get_window_backend() -> WindowBackend:
    """
    Resolve the window backend for this platform, once per process.

    Raises:
        BackendUnavailableError: No backend exists or its library is missing
    """
    if sys.platform == "darwin":
        backend = QuartzWindowBackend()
    elif sys.platform.startswith("linux"):
        backend = XlibWindowBackend()
    else:
        raise BackendUnavailableError(f"Window capture is not supported on {sys.platform}")

    logger.debug(f"Using {backend.name} window backend")
    return backend


def is_listable(window: WindowDescriptor) -> bool:
    """
    Window-list filter: large enough, and titled or on the normal layer.
    """
    if window.bounds.width <= WINDOW_FILTER["MIN_WIDTH"]:
        return False
    if window.bounds.height <= WINDOW_FILTER["MIN_HEIGHT"]:
        return False
    return bool(window.name) or window.layer == WINDOW_FILTER["NORMAL_LAYER"]


def filter_windows(windows: List[WindowDescriptor]) -> List[WindowDescriptor]:
    return [window for window in windows if is_listable(window)]


def list_windows(include_thumbnails: bool = True, include_all: bool = False) -> List[WindowDescriptor]:
    """
    Enumerate on-screen windows.

    Args:
        include_thumbnails: Attach a nominal-resolution thumbnail to each window
        include_all: Skip the size/title filter

    Returns:
        List[WindowDescriptor]: Windows front to back
    """
    backend = get_window_backend()
    windows = backend.list_windows()
    if not include_all:
        windows = filter_windows(windows)

    if include_thumbnails:
        for window in windows:
            window.thumbnail = window_thumbnail(window.id)

    logger.debug(f"Listing {len(windows)} windows")
    return windows


def capture_window(window_id: int) -> Image.Image:
    """Capture one window at best available resolution."""
    return get_window_backend().capture_window(window_id, best_resolution=True)


def window_thumbnail(window_id: int) -> Optional[str]:
    """Thumbnail of one window, or None if it cannot be captured."""
    try:
        img = get_window_backend().capture_window(window_id, best_resolution=False)
    except CaptureError as e:
        logger.warning(f"No thumbnail for window {window_id}: {str(e)}")
        return None
    return make_thumbnail(img)
