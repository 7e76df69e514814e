#!/usr/bin/env python3
"""
Validators for the Spectra CLI

Typer callbacks that turn raw command-line values into validated ones or
exit with status 1 and a one-line error.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer.

Sample input:
- "default", "2", "-5"

Expected output:
- None, 2, or an error and exit status 1
"""

from typing import Optional

import typer
from loguru import logger

from spectra.core.constants import PRIMARY_DISPLAY_ALIASES
from spectra.cli.formatters import print_error


def validate_window_id(ctx: typer.Context, value: int) -> int:
    """
    Typer callback for window ids.

    Args:
        ctx: Typer context
        value: Window id from CLI

    Returns:
        int: The window id
    """
    if value is not None and value < 0:
        print_error(f"Invalid window id: {value}")
        raise typer.Exit(1)
    return value


def validate_display_id(ctx: typer.Context, value: Optional[str]) -> Optional[int]:
    """
    Typer callback for an optional display id.

    No value, or one of the primary-display sentinels, selects the primary
    display (returned as None).

    Args:
        ctx: Typer context
        value: Display id or sentinel from CLI

    Returns:
        Optional[int]: Display id, or None for the primary display
    """
    if value is None or value.strip().lower() in PRIMARY_DISPLAY_ALIASES:
        return None

    try:
        display_id = int(value)
    except ValueError:
        logger.debug(f"Rejected display id {value!r}")
        print_error(f"Invalid display id: {value} (expected a number or 'default')")
        raise typer.Exit(1)

    if display_id < 1:
        print_error(f"Invalid display id: {display_id}")
        raise typer.Exit(1)
    return display_id


def validate_region_size(ctx: typer.Context, value: float) -> float:
    """
    Typer callback for region width and height.

    Args:
        ctx: Typer context
        value: Width or height from CLI

    Returns:
        float: The value, if positive
    """
    if value is not None and value <= 0:
        print_error(f"Invalid region size: {value:g} (width and height must be positive)")
        raise typer.Exit(1)
    return value
