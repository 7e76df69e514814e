#!/usr/bin/env python3
"""
Utility Functions for Spectra

Small helpers shared by the core modules: per-user directories, argument
formatting for the capture subprocess, log truncation and system info.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- format_number(12.0), truncate_large_value("/9j/4AAQ..." * 100)

Expected output:
- "12", "/9j/4AAQ...... [truncated, 1100 chars total]"
"""

import os
import platform
import sys
from typing import Any, Dict

from loguru import logger

from spectra.core.constants import APP_NAME, LOG_MAX_STR_LEN


def user_config_dir() -> str:
    """
    Per-user application data directory for Spectra.

    Returns:
        str: ~/Library/Application Support/Spectra on macOS, %APPDATA%/Spectra
        on Windows, $XDG_CONFIG_HOME/Spectra (default ~/.config) elsewhere
    """
    home = os.path.expanduser("~")
    if sys.platform == "darwin":
        base = os.path.join(home, "Library", "Application Support")
    elif sys.platform.startswith("win"):
        base = os.environ.get("APPDATA") or os.path.join(home, "AppData", "Roaming")
    else:
        base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(home, ".config")
    return os.path.join(base, APP_NAME)


def ensure_directory(directory: str) -> bool:
    """
    Ensures directory exists, creating it if necessary.

    Args:
        directory: Directory path

    Returns:
        bool: True if successful, False otherwise
    """
    try:
        os.makedirs(directory, exist_ok=True)
        return True
    except OSError as e:
        logger.error(f"Failed to create directory {directory}: {str(e)}")
        return False


def format_number(value: float) -> str:
    """Render a coordinate for the command line: integral values without a decimal point."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def truncate_large_value(value: Any, max_str_len: int = LOG_MAX_STR_LEN) -> Any:
    """
    Truncate large strings (base64 image data) for logging.

    Args:
        value: The value to truncate
        max_str_len: Maximum length of string values

    Returns:
        The original value, or a truncated string
    """
    if isinstance(value, str) and len(value) > max_str_len:
        return f"{value[:max_str_len]}... [truncated, {len(value)} chars total]"
    return value


def get_system_info() -> Dict[str, str]:
    """
    Get system information for health checks and debugging.

    Returns:
        Dict[str, str]: System information
    """
    import mss
    import PIL

    return {
        "platform": platform.system(),
        "platform_release": platform.release(),
        "python_version": platform.python_version(),
        "mss_version": getattr(mss, "__version__", "unknown"),
        "pil_version": getattr(PIL, "__version__", "unknown"),
    }
