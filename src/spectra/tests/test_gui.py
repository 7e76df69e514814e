#!/usr/bin/env python3
"""
Unit tests for the GUI bridge, loader and selection logic (no Tk required)
"""

import base64
import io
import os
import sys
import tempfile
import threading
import unittest
from unittest.mock import MagicMock

from PIL import Image

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from spectra.core.client import CaptureClient
from spectra.core.errors import CaptureBackendError
from spectra.core.models import (
    Bounds,
    CaptureTarget,
    DisplayDescriptor,
    Region,
    Settings,
    ThumbnailEnvelope,
    WindowDescriptor,
    default_settings
)
from spectra.core.settings import SettingsStore
from spectra.gui.bridge import GuiBridge
from spectra.gui.loader import InitialState, ThumbnailLoader, decode_thumbnail, load_initial, thumbnail_jobs
from spectra.gui.selection import (
    describe_target,
    same_target,
    selected_item,
    settings_for_selection,
    target_for_display,
    target_for_item,
    target_for_region,
    with_target
)

WINDOWS = [
    WindowDescriptor(id=4242, owner_name="Safari", name="Apple", bounds=Bounds(x=0, y=0, width=800, height=600)),
    WindowDescriptor(id=17, owner_name="Terminal", name="zsh", bounds=Bounds(x=0, y=0, width=640, height=480)),
]

DISPLAYS = [
    DisplayDescriptor(id=1, name="Display 1", width=1440, height=900,
                      bounds=Bounds(x=0, y=0, width=1440, height=900), is_main=True),
    DisplayDescriptor(id=2, name="Display 2", width=1920, height=1080,
                      bounds=Bounds(x=1440, y=0, width=1920, height=1080)),
]


def jpeg_base64(size):
    buffer = io.BytesIO()
    Image.new("RGB", size, "green").save(buffer, format="JPEG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


class TestGuiBridge(unittest.TestCase):
    """Test cases for the bridge's failure substitution"""

    def setUp(self):
        self.client = MagicMock(spec=CaptureClient)
        self.store = MagicMock(spec=SettingsStore)
        self.bridge = GuiBridge(self.client, self.store)

    def test_lists_without_thumbnails(self):
        """Test lists are requested without thumbnails"""
        self.client.list_windows.return_value = WINDOWS
        self.assertEqual(self.bridge.list_windows(), WINDOWS)
        self.client.list_windows.assert_called_once_with(include_thumbnails=False)

    def test_list_failures_are_empty(self):
        """Test backend failures become empty lists"""
        self.client.list_windows.side_effect = CaptureBackendError("timed out")
        self.client.list_displays.side_effect = CaptureBackendError("timed out")

        self.assertEqual(self.bridge.list_windows(), [])
        self.assertEqual(self.bridge.list_displays(), [])

    def test_thumbnails(self):
        """Test thumbnails are returned as strings, empty on failure"""
        self.client.window_thumbnail.return_value = ThumbnailEnvelope(id=17, thumbnail="abc")
        self.client.display_thumbnail.side_effect = CaptureBackendError("get_display_thumbnail timed out after 30s")

        self.assertEqual(self.bridge.fetch_thumbnail("window", 17), "abc")
        self.assertEqual(self.bridge.fetch_thumbnail("display", 2), "")
        self.client.display_thumbnail.assert_called_once_with(2)

    def test_save_settings(self):
        """Test save reports success and failure as a boolean"""
        settings = default_settings()
        self.assertTrue(self.bridge.save_settings(settings))
        self.store.save.assert_called_once_with(settings)

        self.store.save.side_effect = PermissionError("read-only")
        self.assertFalse(self.bridge.save_settings(settings))


class TestSelection(unittest.TestCase):
    """Test cases for target selection and description"""

    def describe(self, target, legacy_region=None):
        return describe_target(Settings(target=target, region=legacy_region), WINDOWS, DISPLAYS)

    def test_describe_screens(self):
        """Test display targets are described by name"""
        self.assertEqual(self.describe(CaptureTarget(type="screen")), "Main Display")
        self.assertEqual(self.describe(CaptureTarget(type="screen", screen_id="main")), "Main Display")
        self.assertEqual(self.describe(CaptureTarget(type="screen", screen_id=2)), "Display 2")
        self.assertEqual(self.describe(CaptureTarget(type="screen", screen_id=9)), "Unknown Display")

    def test_describe_windows(self):
        """Test window targets are described as owner and title"""
        self.assertEqual(self.describe(CaptureTarget(type="window", window_id=17)), "Terminal - zsh")
        self.assertEqual(self.describe(CaptureTarget(type="window", window_id=5)), "Unknown Window")
        self.assertEqual(self.describe(CaptureTarget(type="window")), "Not Configured")

    def test_describe_regions(self):
        """Test region targets show their rectangle"""
        region = Region(x=-10, y=0, width=300.5, height=200)
        self.assertEqual(self.describe(CaptureTarget(type="region", region=region)), "Region -10,0 300.5x200")
        self.assertEqual(self.describe(CaptureTarget(type="region"), legacy_region=region), "Region -10,0 300.5x200")
        self.assertEqual(self.describe(CaptureTarget(type="region")), "Not Configured")

    def test_selected_item_round_trip(self):
        """Test list row ids map back to the same targets"""
        for target in (target_for_display(None), target_for_display(2),
                       CaptureTarget(type="window", window_id=4242)):
            row = selected_item(Settings(target=target))
            self.assertEqual(target_for_item(row), target)

        self.assertEqual(selected_item(Settings(target=CaptureTarget(type="screen"))), "display:main")
        self.assertIsNone(selected_item(Settings(target=target_for_region(Region(x=0, y=0, width=1, height=1)))))

    def test_highlighting_active_target_saves_nothing(self):
        """Test re-selecting the row of the stored target is not a change"""
        for settings in (default_settings(), Settings.model_validate({"target": {"type": "screen"}}),
                         Settings(target=CaptureTarget(type="screen", screen_id=2)),
                         Settings(target=CaptureTarget(type="window", window_id=4242))):
            target = target_for_item(selected_item(settings))
            self.assertTrue(same_target(target, settings.target))
            self.assertIsNone(settings_for_selection(settings, target))

    def test_selecting_new_target_returns_settings(self):
        """Test a different row yields settings to save"""
        legacy = Region(x=1, y=2, width=3, height=4)
        settings = settings_for_selection(Settings(region=legacy), target_for_item("window:17"))

        self.assertEqual(settings.target, CaptureTarget(type="window", window_id=17))
        self.assertEqual(settings.region, legacy)
        self.assertFalse(same_target(target_for_display(None), target_for_display(1)))

    def test_unknown_item(self):
        """Test unknown row kinds are rejected"""
        with self.assertRaises(ValueError):
            target_for_item("tab:3")

    def test_with_target_keeps_legacy_region(self):
        """Test replacing the target leaves the rest of the document alone"""
        legacy = Region(x=1, y=2, width=3, height=4)
        settings = with_target(Settings(region=legacy), target_for_display(2))

        self.assertEqual(settings.target, CaptureTarget(type="screen", screen_id=2))
        self.assertEqual(settings.region, legacy)


class TestLoader(unittest.TestCase):
    """Test cases for initial load and the serial thumbnail loader"""

    def test_load_initial(self):
        """Test the three initial requests are combined"""
        bridge = MagicMock(spec=GuiBridge)
        bridge.list_windows.return_value = WINDOWS
        bridge.list_displays.return_value = DISPLAYS
        bridge.get_settings.return_value = default_settings()

        state = load_initial(bridge)

        self.assertEqual(state, InitialState(WINDOWS, DISPLAYS, default_settings()))

    def test_load_initial_with_non_utf8_settings(self):
        """Test an unreadable settings file still loads the default target"""
        client = MagicMock(spec=CaptureClient)
        client.list_windows.return_value = []
        client.list_displays.return_value = []
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "settings.json")
            with open(path, "wb") as f:
                f.write(b"\xff{}")

            state = load_initial(GuiBridge(client, SettingsStore(path)))

        self.assertEqual(state.settings, default_settings())

    def test_thumbnail_jobs_order(self):
        """Test displays are queued before windows"""
        jobs = thumbnail_jobs(InitialState(WINDOWS, DISPLAYS, default_settings()))
        self.assertEqual(jobs, [("display", 1), ("display", 2), ("window", 4242), ("window", 17)])

    def test_serial_in_order(self):
        """Test jobs run one at a time in order and empty results are skipped"""
        fetched, loaded = [], []
        active = {"now": 0, "max": 0}
        lock = threading.Lock()

        def fetch(kind, item_id):
            with lock:
                active["now"] += 1
                active["max"] = max(active["max"], active["now"])
            fetched.append((kind, item_id))
            with lock:
                active["now"] -= 1
            return "" if item_id == 2 else f"thumb-{item_id}"

        jobs = [("display", 1), ("display", 2), ("window", 3)]
        ThumbnailLoader(delay=0).start(jobs, fetch, lambda *args: loaded.append(args)).join(timeout=5)

        self.assertEqual(fetched, jobs)
        self.assertEqual(loaded, [("display", 1, "thumb-1"), ("window", 3, "thumb-3")])
        self.assertEqual(active["max"], 1)

    def test_cancel_stops_loading(self):
        """Test a cancelled load fetches nothing more and delivers nothing"""
        loader = ThumbnailLoader(delay=0)
        fetched, loaded = [], []

        def fetch(kind, item_id):
            fetched.append(item_id)
            loader.cancel()
            return "thumb"

        loader.start([("window", 1), ("window", 2)], fetch, lambda *args: loaded.append(args)).join(timeout=5)

        self.assertEqual(fetched, [1])
        self.assertEqual(loaded, [])

    def test_restart_supersedes_previous_load(self):
        """Test starting a new load drops the old one's results"""
        loader = ThumbnailLoader(delay=0)
        release = threading.Event()
        entered = threading.Event()
        loaded = []

        def slow_fetch(kind, item_id):
            entered.set()
            release.wait(timeout=5)
            return "old"

        first = loader.start([("window", 1), ("window", 2)], slow_fetch, lambda *args: loaded.append(args))
        self.assertTrue(entered.wait(timeout=5))
        second = loader.start([("window", 3)], lambda kind, item_id: "new", lambda *args: loaded.append(args))
        second.join(timeout=5)
        release.set()
        first.join(timeout=5)

        self.assertEqual(loaded, [("window", 3, "new")])


class TestDecodeThumbnail(unittest.TestCase):
    """Test cases for turning thumbnails into list icons"""

    def test_decode_and_shrink(self):
        """Test thumbnails are shrunk to the icon size"""
        img = decode_thumbnail(jpeg_base64((400, 225)), size=96)
        self.assertEqual(img.size, (96, 54))

    def test_undecodable(self):
        """Test bad data yields None"""
        self.assertIsNone(decode_thumbnail("not-base64!"))
        self.assertIsNone(decode_thumbnail(base64.b64encode(b"hello").decode("ascii")))
        self.assertIsNone(decode_thumbnail(""))


if __name__ == "__main__":
    unittest.main()
