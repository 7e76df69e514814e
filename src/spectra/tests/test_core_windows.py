#!/usr/bin/env python3
"""
Unit tests for core/windows.py
"""

import os
import sys
import unittest
from unittest.mock import MagicMock, patch

from PIL import Image

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from spectra.core import windows
from spectra.core.errors import BackendUnavailableError, WindowNotFoundError
from spectra.core.models import Bounds, WindowDescriptor


def make_window(window_id, name="Doc", layer=0, width=800, height=600):
    return WindowDescriptor(
        id=window_id,
        owner_name="Editor",
        name=name,
        layer=layer,
        bounds=Bounds(x=0, y=0, width=width, height=height),
    )


class FakeBackend(windows.WindowBackend):
    name = "fake"

    def __init__(self, listed, live=()):
        self.listed = listed
        self.live = set(live)
        self.calls = []

    def list_windows(self):
        return list(self.listed)

    def capture_window(self, window_id, best_resolution=True):
        self.calls.append((window_id, best_resolution))
        if window_id not in self.live:
            raise WindowNotFoundError(window_id)
        return Image.new("RGB", (640, 480), "blue")


class TestWindowFilter(unittest.TestCase):
    """Test cases for the window-list filter"""

    def test_size_threshold(self):
        """Test windows must be strictly larger than 50x50"""
        self.assertFalse(windows.is_listable(make_window(1, width=50)))
        self.assertFalse(windows.is_listable(make_window(1, height=50)))
        self.assertTrue(windows.is_listable(make_window(1, width=51, height=51)))

    def test_title_or_normal_layer(self):
        """Test untitled windows are kept only on the normal layer"""
        self.assertTrue(windows.is_listable(make_window(1, name="", layer=0)))
        self.assertFalse(windows.is_listable(make_window(1, name="", layer=25)))
        self.assertTrue(windows.is_listable(make_window(1, name="Menu", layer=25)))

    def test_filter_keeps_order(self):
        """Test filtering preserves front-to-back order"""
        listed = [make_window(3), make_window(2, width=10), make_window(1)]
        self.assertEqual([w.id for w in windows.filter_windows(listed)], [3, 1])


class TestListAndCapture(unittest.TestCase):
    """Test cases for listing and capturing through a backend"""

    def setUp(self):
        self.backend = FakeBackend(
            [make_window(10), make_window(11, name="", layer=3), make_window(12)],
            live=(10,),
        )
        patcher = patch("spectra.core.windows.get_window_backend", return_value=self.backend)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_list_filtered_without_thumbnails(self):
        """Test the default list applies the filter"""
        result = windows.list_windows(include_thumbnails=False)
        self.assertEqual([w.id for w in result], [10, 12])
        self.assertEqual(self.backend.calls, [])

    def test_list_all(self):
        """Test include_all skips the filter"""
        result = windows.list_windows(include_thumbnails=False, include_all=True)
        self.assertEqual([w.id for w in result], [10, 11, 12])

    def test_list_with_thumbnails(self):
        """Test thumbnails are attached where capture works and omitted otherwise"""
        result = windows.list_windows(include_thumbnails=True)

        self.assertTrue(result[0].thumbnail)
        self.assertIsNone(result[1].thumbnail)
        self.assertNotIn("thumbnail", result[1].to_dict())
        self.assertEqual(self.backend.calls, [(10, False), (12, False)])

    def test_capture_window_best_resolution(self):
        """Test full captures ask for best resolution"""
        img = windows.capture_window(10)
        self.assertEqual(img.size, (640, 480))
        self.assertEqual(self.backend.calls, [(10, True)])

    def test_capture_missing_window(self):
        """Test capturing a closed window raises WindowNotFoundError"""
        with self.assertRaises(WindowNotFoundError) as ctx:
            windows.capture_window(99999)
        self.assertEqual(str(ctx.exception), "Failed to capture window 99999: window not found")

    def test_window_thumbnail_missing_window(self):
        """Test thumbnails of missing windows are None"""
        self.assertIsNone(windows.window_thumbnail(99999))


def fake_quartz():
    Q = MagicMock()
    Q.kCGWindowListOptionOnScreenOnly = 1
    Q.kCGWindowListExcludeDesktopElements = 16
    Q.kCGWindowListOptionIncludingWindow = 8
    Q.kCGNullWindowID = 0
    Q.kCGWindowImageBoundsIgnoreFraming = 1
    Q.kCGWindowImageBestResolution = 8
    Q.kCGWindowImageNominalResolution = 16
    Q.kCGWindowNumber = "kCGWindowNumber"
    Q.kCGWindowOwnerName = "kCGWindowOwnerName"
    Q.kCGWindowName = "kCGWindowName"
    Q.kCGWindowLayer = "kCGWindowLayer"
    Q.kCGWindowBounds = "kCGWindowBounds"
    return Q


class TestQuartzBackend(unittest.TestCase):
    """Test cases for the macOS backend against a stand-in Quartz module"""

    def setUp(self):
        self.Q = fake_quartz()
        patcher = patch.dict(sys.modules, {"Quartz": self.Q})
        patcher.start()
        self.addCleanup(patcher.stop)
        self.backend = windows.QuartzWindowBackend()

    def test_list_windows(self):
        """Test window info dictionaries become descriptors"""
        self.Q.CGWindowListCopyWindowInfo.return_value = [
            {
                "kCGWindowNumber": 4242,
                "kCGWindowOwnerName": "Safari",
                "kCGWindowName": "Apple",
                "kCGWindowLayer": 0,
                "kCGWindowBounds": {"X": -1440, "Y": 25, "Width": 1200, "Height": 800},
            },
            {"kCGWindowNumber": 7, "kCGWindowLayer": 25, "kCGWindowBounds": {}},
        ]

        result = self.backend.list_windows()

        self.Q.CGWindowListCopyWindowInfo.assert_called_once_with(17, 0)
        self.assertEqual(result[0].id, 4242)
        self.assertEqual(result[0].owner_name, "Safari")
        self.assertEqual(result[0].bounds, Bounds(x=-1440, y=25, width=1200, height=800))
        self.assertEqual((result[1].owner_name, result[1].name, result[1].layer), ("", "", 25))

    def test_capture_window(self):
        """Test BGRA rows are converted to an RGB image"""
        self.Q.CGWindowListCreateImage.return_value = object()
        self.Q.CGImageGetWidth.return_value = 2
        self.Q.CGImageGetHeight.return_value = 1
        self.Q.CGImageGetBytesPerRow.return_value = 8
        self.Q.CGDataProviderCopyData.return_value = b"\x00\x00\xff\xff" * 2

        img = self.backend.capture_window(4242, best_resolution=False)

        self.assertEqual(img.mode, "RGB")
        self.assertEqual(img.size, (2, 1))
        self.assertEqual(img.getpixel((1, 0)), (255, 0, 0))
        args = self.Q.CGWindowListCreateImage.call_args[0]
        self.assertEqual(args[1:], (8, 4242, 1 | 16))

    def test_capture_window_gone(self):
        """Test a null image means the window is gone"""
        self.Q.CGWindowListCreateImage.return_value = None
        with self.assertRaises(WindowNotFoundError):
            self.backend.capture_window(4242)

    def test_capture_window_empty(self):
        """Test a zero-size image means the window is gone"""
        self.Q.CGWindowListCreateImage.return_value = object()
        self.Q.CGImageGetWidth.return_value = 0
        self.Q.CGImageGetHeight.return_value = 0
        with self.assertRaises(WindowNotFoundError):
            self.backend.capture_window(4242)


class TestBackendSelection(unittest.TestCase):
    """Test cases for platform backend selection"""

    def setUp(self):
        windows.get_window_backend.cache_clear()
        self.addCleanup(windows.get_window_backend.cache_clear)

    def test_unsupported_platform(self):
        """Test platforms without a backend raise BackendUnavailableError"""
        with patch.object(windows.sys, "platform", "win32"):
            with self.assertRaises(BackendUnavailableError):
                windows.get_window_backend()

    def test_darwin_uses_quartz(self):
        """Test macOS resolves to the Quartz backend"""
        with patch.object(windows.sys, "platform", "darwin"), \
                patch.dict(sys.modules, {"Quartz": fake_quartz()}):
            self.assertIsInstance(windows.get_window_backend(), windows.QuartzWindowBackend)


if __name__ == "__main__":
    unittest.main()
