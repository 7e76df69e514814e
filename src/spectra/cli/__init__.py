"""
CLI Layer for Spectra

The process interface of the capture backend. Callers (the tool-call server
and the GUI) run these subcommands as subprocesses and read one line of JSON
from stdout; humans can add ``--table`` for readable listings.

Usage:
    spectra-capture list_windows
    spectra-capture capture_display default
    python -m spectra.cli capture_region -- -100 0 640 480
"""

from spectra.cli.cli import app, main

from spectra.cli.formatters import (
    print_json_line,
    print_error,
    print_warning,
    print_windows_table,
    print_displays_table,
    console,
    err_console,
)

from spectra.cli.validators import (
    validate_window_id,
    validate_display_id,
    validate_region_size,
)

__all__ = [
    # CLI application
    'app',
    'main',

    # Formatters
    'print_json_line',
    'print_error',
    'print_warning',
    'print_windows_table',
    'print_displays_table',
    'console',
    'err_console',

    # Validators
    'validate_window_id',
    'validate_display_id',
    'validate_region_size',
]
