#!/usr/bin/env python3
"""
Capture Backend Command Line Interface

The process interface of the capture backend. Each subcommand is independent
and stateless: it enumerates or captures once, prints a single line of JSON
on stdout and exits 0, or prints a one-line error on stderr and exits 1.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer.

Sample input:
- spectra-capture capture_region -- -100 0 640 480

Expected output:
- {"type": "image", "format": "jpeg", "data": "/9j/4AAQ..."}
"""

import json
import os
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

import typer
from loguru import logger

from spectra.core.capture import (
    capture_display,
    capture_region,
    capture_window,
    display_thumbnail,
    list_displays,
    list_windows,
    window_thumbnail,
)
from spectra.core.constants import ENV_LOG_LEVEL
from spectra.core.errors import CaptureError
from spectra.core.models import Region, dump_displays, dump_windows
from spectra.cli.formatters import (
    print_displays_table,
    print_error,
    print_json_line,
    print_windows_table,
)
from spectra.cli.validators import validate_display_id, validate_region_size, validate_window_id


app = typer.Typer(
    help="Spectra capture backend: enumerate and capture windows, displays and regions",
    rich_markup_mode="rich",
    add_completion=False
)


def configure_logging(level: str) -> None:
    """Log to stderr only; stdout carries the JSON result."""
    logger.remove()
    logger.add(sys.stderr, format="<level>{level: <8}</level> | {message}", level=level.upper())


@contextmanager
def handle_errors(action: str) -> Iterator[None]:
    """Report failures as a one-line error and exit status 1."""
    try:
        yield
    except CaptureError as e:
        logger.debug(f"{action} failed: {str(e)}")
        print_error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        logger.exception(f"Unexpected error while running {action}")
        print_error(f"{action} failed: {str(e)}")
        raise typer.Exit(1)


@app.callback()
def main_callback(
    ctx: typer.Context,
    table: bool = typer.Option(
        False,
        "--table",
        help="Render listings as tables instead of JSON",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level for stderr diagnostics (default: WARNING)",
    ),
):
    """
    Spectra capture backend

    Every command prints a single line of JSON on success. Pass [bold]--[/bold]
    before positional arguments that may be negative.
    """
    configure_logging(log_level or os.environ.get(ENV_LOG_LEVEL) or "WARNING")
    ctx.ensure_object(dict)
    ctx.obj["table"] = table


@app.command("list_windows")
def list_windows_command(
    ctx: typer.Context,
    thumbnails: bool = typer.Option(
        True,
        "--thumbnails/--no-thumbnails",
        help="Attach a reduced-resolution thumbnail to each window",
    ),
    include_all: bool = typer.Option(
        False,
        "--all",
        help="Include tiny and untitled non-normal windows",
    ),
):
    """List on-screen windows as a JSON array."""
    with handle_errors("list_windows"):
        windows = list_windows(include_thumbnails=thumbnails, include_all=include_all)

    if ctx.obj.get("table"):
        print_windows_table(windows)
    else:
        print_json_line(dump_windows(windows))


@app.command("list_displays")
def list_displays_command(
    ctx: typer.Context,
    thumbnails: bool = typer.Option(
        True,
        "--thumbnails/--no-thumbnails",
        help="Attach a thumbnail to each display",
    ),
):
    """List active displays as a JSON array."""
    with handle_errors("list_displays"):
        displays = list_displays(include_thumbnails=thumbnails)

    if ctx.obj.get("table"):
        print_displays_table(displays)
    else:
        print_json_line(dump_displays(displays))


@app.command("get_window_thumbnail")
def get_window_thumbnail_command(
    window_id: int = typer.Argument(..., help="Window id from list_windows", callback=validate_window_id),
):
    """Print {id, thumbnail} for one window; the thumbnail is empty if unavailable."""
    with handle_errors("get_window_thumbnail"):
        result = window_thumbnail(window_id)
    print_json_line(result.to_json())


@app.command("get_display_thumbnail")
def get_display_thumbnail_command(
    display_id: int = typer.Argument(..., help="Display id from list_displays"),
):
    """Print {id, thumbnail} for one display; the thumbnail is empty if unavailable."""
    with handle_errors("get_display_thumbnail"):
        result = display_thumbnail(display_id)
    print_json_line(result.to_json())


@app.command("capture_window")
def capture_window_command(
    window_id: int = typer.Argument(..., help="Window id from list_windows", callback=validate_window_id),
):
    """Capture one window, without its frame, at best available resolution."""
    with handle_errors("capture_window"):
        envelope = capture_window(window_id)
    print_json_line(envelope.to_json())


@app.command("capture_display")
def capture_display_command(
    display_id: Optional[str] = typer.Argument(
        None,
        help="Display id from list_displays, or 'default' for the primary display",
        callback=validate_display_id,
        metavar="[ID|default]",
    ),
):
    """Capture one display's full framebuffer (primary display if no id)."""
    with handle_errors("capture_display"):
        envelope = capture_display(display_id)
    print_json_line(envelope.to_json())


@app.command("capture_region")
def capture_region_command(
    x: float = typer.Argument(..., help="Left edge in global screen coordinates"),
    y: float = typer.Argument(..., help="Top edge in global screen coordinates"),
    width: float = typer.Argument(..., help="Width, must be positive", callback=validate_region_size),
    height: float = typer.Argument(..., help="Height, must be positive", callback=validate_region_size),
):
    """Capture whatever is on screen inside a rectangle."""
    with handle_errors("capture_region"):
        envelope = capture_region(Region(x=x, y=y, width=width, height=height))
    print_json_line(envelope.to_json())


@app.command("version")
def version_command():
    """Show version information."""
    from spectra import __version__

    print_json_line(json.dumps({"name": "spectra-capture", "version": __version__}))


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
