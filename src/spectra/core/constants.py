#!/usr/bin/env python3
"""
Constants for Spectra

This module defines constants used throughout the capture backend, the
tool-call server and the settings GUI, ensuring consistent configuration
across the three processes.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- None (module contains only constants)

Expected output:
- None (module contains only constants)
"""

from typing import Dict, Any

APP_NAME = "Spectra"

# Image settings for capture output and thumbnails
IMAGE_SETTINGS: Dict[str, Any] = {
    "FORMAT": "jpeg",
    "CAPTURE_QUALITY": 80,  # Full captures
    "THUMBNAIL_QUALITY": 60,  # Preview thumbnails
    "THUMBNAIL_MAX_DIM": 400,  # Longest thumbnail side in pixels
}

# Window-list filter applied by list_windows
WINDOW_FILTER: Dict[str, int] = {
    "MIN_WIDTH": 50,  # Windows must be strictly wider than this
    "MIN_HEIGHT": 50,  # Windows must be strictly taller than this
    "NORMAL_LAYER": 0,  # Untitled windows survive only on this layer
}

# Upper bound on enumerated displays
MAX_DISPLAYS: int = 16

# Sentinel screenId meaning "whichever display is primary"
PRIMARY_DISPLAY = "main"
PRIMARY_DISPLAY_ALIASES = ("main", "primary", "default")

# Subprocess limits for the capture client
SUBPROCESS_SETTINGS: Dict[str, Any] = {
    "CAPTURE_TIMEOUT": 30.0,  # Seconds for lists and full captures
    "THUMBNAIL_TIMEOUT": 0.2,  # Seconds for a single thumbnail
    "LIST_MAX_OUTPUT": 10 * 1024 * 1024,  # Bytes of stdout for lists
    "CAPTURE_MAX_OUTPUT": 50 * 1024 * 1024,  # Bytes of stdout for captures
}

# GUI behaviour
GUI_SETTINGS: Dict[str, Any] = {
    "THUMBNAIL_STEP_DELAY": 0.05,  # Pause between serial thumbnail loads
    "QUEUE_POLL_MS": 50,  # Tk main loop poll interval for worker results
    "ICON_SIZE": 96,  # Thumbnail size shown in the lists
    "INITIAL_LOAD_WORKERS": 3,
}

# Settings file
SETTINGS_FILENAME = "settings.json"

# Environment variables
ENV_CAPTURE_COMMAND = "SPECTRA_CAPTURE_COMMAND"
ENV_SETTINGS_PATH = "SPECTRA_SETTINGS_PATH"
ENV_CAPTURE_TIMEOUT = "SPECTRA_CAPTURE_TIMEOUT"
ENV_THUMBNAIL_TIMEOUT = "SPECTRA_THUMBNAIL_TIMEOUT"
ENV_LOG_LEVEL = "SPECTRA_LOG_LEVEL"

# Logging settings
LOG_MAX_STR_LEN: int = 100  # Maximum string length for truncated logging


if __name__ == "__main__":
    """Validate module constants"""
    import sys

    all_validation_failures = []
    total_tests = 0

    # Test 1: Verify IMAGE_SETTINGS contains all required keys
    total_tests += 1
    required_keys = ["FORMAT", "CAPTURE_QUALITY", "THUMBNAIL_QUALITY", "THUMBNAIL_MAX_DIM"]
    missing_keys = [key for key in required_keys if key not in IMAGE_SETTINGS]
    if missing_keys:
        all_validation_failures.append(f"IMAGE_SETTINGS missing keys: {missing_keys}")

    # Test 2: Thumbnails must be cheaper than full captures
    total_tests += 1
    if IMAGE_SETTINGS["THUMBNAIL_QUALITY"] >= IMAGE_SETTINGS["CAPTURE_QUALITY"]:
        all_validation_failures.append("THUMBNAIL_QUALITY should be below CAPTURE_QUALITY")

    # Test 3: List output cap is below capture output cap
    total_tests += 1
    if SUBPROCESS_SETTINGS["LIST_MAX_OUTPUT"] > SUBPROCESS_SETTINGS["CAPTURE_MAX_OUTPUT"]:
        all_validation_failures.append("LIST_MAX_OUTPUT should not exceed CAPTURE_MAX_OUTPUT")

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        sys.exit(0)
