#!/usr/bin/env python3
"""
Unit tests for cli/formatters.py
"""

import os
import sys
import unittest
from io import StringIO

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from spectra.cli.formatters import (
    console,
    err_console,
    print_displays_table,
    print_error,
    print_warning,
    print_windows_table
)
from spectra.core.models import Bounds, DisplayDescriptor, WindowDescriptor


class TestPresentationFormatters(unittest.TestCase):
    """Test cases for presentation formatters"""

    def setUp(self):
        """Set up test environment"""
        # Redirect rich console output to StringIO
        self.console_output = StringIO()
        self.error_output = StringIO()
        console.file = self.console_output
        err_console.file = self.error_output

    def tearDown(self):
        """Tear down test environment"""
        # Fall back to the live sys streams
        console.file = None
        err_console.file = None

    def test_print_error(self):
        """Test error printing"""
        print_error("Test error")
        output = self.error_output.getvalue()

        self.assertIn("Error", output)
        self.assertIn("Test error", output)
        self.assertEqual(self.console_output.getvalue(), "")

    def test_print_error_single_line(self):
        """Test long errors are not wrapped"""
        message = "Failed to capture window 4242: " + "x" * 300
        print_error(message)

        output = self.error_output.getvalue()
        self.assertEqual(output.count("\n"), 1)
        self.assertIn(message, output)

    def test_print_error_escapes_markup(self):
        """Test messages are printed literally"""
        print_error("bad value [bold]")
        self.assertIn("[bold]", self.error_output.getvalue())

    def test_print_warning(self):
        """Test warning printing"""
        print_warning("Test warning")
        output = self.error_output.getvalue()

        self.assertIn("Warning", output)
        self.assertIn("Test warning", output)

    def test_print_windows_table(self):
        """Test window table rendering"""
        windows = [
            WindowDescriptor(id=4242, owner_name="Safari", name="Apple", layer=0,
                             bounds=Bounds(x=0, y=25, width=1200, height=800)),
            WindowDescriptor(id=7, owner_name="Dock", name="", layer=20,
                             bounds=Bounds(x=0, y=0, width=100, height=100), thumbnail=""),
        ]
        print_windows_table(windows)
        output = self.console_output.getvalue()

        self.assertIn("Windows", output)
        self.assertIn("Safari", output)
        self.assertIn("(untitled)", output)

    def test_print_empty_windows_table(self):
        """Test an empty list prints a warning instead of a table"""
        print_windows_table([])

        self.assertEqual(self.console_output.getvalue(), "")
        self.assertIn("No windows found", self.error_output.getvalue())

    def test_print_displays_table(self):
        """Test display table rendering"""
        displays = [
            DisplayDescriptor(id=1, name="Display 1", width=2880, height=1800,
                              bounds=Bounds(x=0, y=0, width=1440, height=900), is_main=True),
        ]
        print_displays_table(displays)
        output = self.console_output.getvalue()

        self.assertIn("Displays", output)
        self.assertIn("2880x1800", output)
        self.assertIn("yes", output)


if __name__ == "__main__":
    unittest.main()
