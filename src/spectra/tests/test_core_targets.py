#!/usr/bin/env python3
"""
Unit tests for core/targets.py
"""

import os
import sys
import unittest

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from spectra.core.models import CaptureTarget, Region, Settings
from spectra.core.targets import CaptureCommand, resolve_capture_command


def resolve(target, legacy_region=None):
    return resolve_capture_command(Settings(target=target, region=legacy_region))


class TestResolveCaptureCommand(unittest.TestCase):
    """Test cases for mapping settings to a capture subcommand"""

    def test_window_target(self):
        """Test a window target captures that window"""
        command = resolve(CaptureTarget(type="window", window_id=42))
        self.assertEqual(command, CaptureCommand("capture_window", ("42",)))

    def test_window_id_zero(self):
        """Test window id 0 is still a window id"""
        command = resolve(CaptureTarget(type="window", window_id=0))
        self.assertEqual(command, CaptureCommand("capture_window", ("0",)))

    def test_window_without_id_falls_back(self):
        """Test an incomplete window target captures the primary display"""
        self.assertEqual(resolve(CaptureTarget(type="window")), CaptureCommand("capture_display"))

    def test_screen_without_id_is_primary(self):
        """Test a screen target without screenId captures the primary display"""
        self.assertEqual(resolve(CaptureTarget(type="screen")), CaptureCommand("capture_display", ()))

    def test_screen_main_is_primary(self):
        """Test the 'main' sentinel captures the primary display"""
        command = resolve(CaptureTarget(type="screen", screen_id="main"))
        self.assertEqual(command, CaptureCommand("capture_display"))

    def test_screen_with_id(self):
        """Test a numeric screenId is passed through"""
        command = resolve(CaptureTarget(type="screen", screen_id=2))
        self.assertEqual(command, CaptureCommand("capture_display", ("2",)))

    def test_region_target(self):
        """Test region coordinates are formatted for the command line"""
        region = Region(x=-10, y=20, width=300.5, height=200)
        command = resolve(CaptureTarget(type="region", region=region))
        self.assertEqual(command, CaptureCommand("capture_region", ("-10", "20", "300.5", "200")))

    def test_region_uses_legacy_region_as_fallback(self):
        """Test the legacy top-level region fills in a missing target.region"""
        legacy = Region(x=1, y=2, width=3, height=4)
        command = resolve(CaptureTarget(type="region"), legacy_region=legacy)
        self.assertEqual(command, CaptureCommand("capture_region", ("1", "2", "3", "4")))

    def test_target_region_wins_over_legacy(self):
        """Test target.region takes precedence over the legacy region"""
        own = Region(x=5, y=5, width=50, height=50)
        legacy = Region(x=1, y=2, width=3, height=4)
        command = resolve(CaptureTarget(type="region", region=own), legacy_region=legacy)
        self.assertEqual(command.args, ("5", "5", "50", "50"))

    def test_legacy_region_ignored_for_other_kinds(self):
        """Test the legacy region never overrides a screen target"""
        legacy = Region(x=1, y=2, width=3, height=4)
        command = resolve(CaptureTarget(type="screen"), legacy_region=legacy)
        self.assertEqual(command, CaptureCommand("capture_display"))

    def test_region_without_region_falls_back(self):
        """Test an incomplete region target captures the primary display"""
        self.assertEqual(resolve(CaptureTarget(type="region")), CaptureCommand("capture_display"))


if __name__ == "__main__":
    unittest.main()
