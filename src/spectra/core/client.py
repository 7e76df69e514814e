#!/usr/bin/env python3
"""
Capture Backend Client

The one place that launches the capture backend as a subprocess. Every call
is synchronous and bounded by a timeout and an output cap, and every result
is validated against the shared schema before it is returned. Failures of
any kind (launch, timeout, non-zero exit, oversized or invalid output) raise
CaptureBackendError with a human-readable message.

Used by the tool-call server and the GUI bridge.

Sample input:
- CaptureClient(("spectra-capture",)).capture_window(4242)

Expected output:
- ImageEnvelope(type='image', format='jpeg', data='/9j/4AAQ...')
"""

import subprocess
from typing import Any, List, Optional, Sequence, Tuple

from loguru import logger
from pydantic import BaseModel, TypeAdapter, ValidationError

from spectra.core.config import SpectraConfig
from spectra.core.constants import SUBPROCESS_SETTINGS
from spectra.core.errors import CaptureBackendError
from spectra.core.models import (
    DISPLAY_LIST,
    WINDOW_LIST,
    DisplayDescriptor,
    ImageEnvelope,
    Region,
    ThumbnailEnvelope,
    WindowDescriptor,
)
from spectra.core.targets import CaptureCommand, display_command, region_command, window_command
from spectra.core.utils import truncate_large_value


def _failure_detail(completed: subprocess.CompletedProcess) -> str:
    for stream in (completed.stderr, completed.stdout):
        text = (stream or b"").decode("utf-8", "replace").strip()
        if text:
            line = text.splitlines()[-1].strip()
            return line[len("Error: "):] if line.startswith("Error: ") else line
    return f"exit status {completed.returncode}"


class CaptureClient:
    """Runs capture-backend subcommands and validates their output."""

    def __init__(
        self,
        command: Sequence[str],
        timeout: float = SUBPROCESS_SETTINGS["CAPTURE_TIMEOUT"],
        thumbnail_timeout: float = SUBPROCESS_SETTINGS["THUMBNAIL_TIMEOUT"],
    ):
        if not command:
            raise ValueError("Capture command is empty")
        self.command: Tuple[str, ...] = tuple(command)
        self.timeout = timeout
        self.thumbnail_timeout = thumbnail_timeout

    @classmethod
    def from_config(cls, config: SpectraConfig) -> "CaptureClient":
        return cls(config.capture_command, config.capture_timeout, config.thumbnail_timeout)

    def run(
        self,
        subcommand: str,
        args: Sequence[str] = (),
        flags: Sequence[str] = (),
        timeout: Optional[float] = None,
        max_output: int = SUBPROCESS_SETTINGS["CAPTURE_MAX_OUTPUT"],
    ) -> str:
        """
        Run one subcommand and return its stdout.

        Positional arguments follow ``--`` so negative coordinates are not
        mistaken for options.

        ``max_output`` bounds what is accepted, not what is read: stdout is
        buffered in full by ``subprocess.run`` before its size is checked, so
        memory use is bounded only by the timeout.

        Args:
            subcommand: Capture backend subcommand name
            args: Positional arguments
            flags: Options placed before the positional arguments
            timeout: Seconds to wait; defaults to the client timeout
            max_output: Maximum stdout size in bytes

        Returns:
            str: The subcommand's stdout

        Raises:
            CaptureBackendError: On launch failure, timeout, non-zero exit or oversized output
        """
        timeout = self.timeout if timeout is None else timeout
        argv = list(self.command) + [subcommand] + list(flags)
        if args:
            argv += ["--"] + list(args)

        logger.debug(f"Running capture backend: {' '.join(argv)}")
        try:
            completed = subprocess.run(argv, capture_output=True, timeout=timeout, check=False)
        except subprocess.TimeoutExpired as e:
            raise CaptureBackendError(f"{subcommand} timed out after {timeout:g}s") from e
        except OSError as e:
            raise CaptureBackendError(f"Failed to launch capture backend '{self.command[0]}': {str(e)}") from e

        if completed.returncode != 0:
            detail = _failure_detail(completed)
            logger.warning(f"{subcommand} failed with exit status {completed.returncode}: {detail}")
            raise CaptureBackendError(detail)

        if len(completed.stdout) > max_output:
            raise CaptureBackendError(
                f"{subcommand} output exceeded {max_output // (1024 * 1024)} MB"
            )

        return completed.stdout.decode("utf-8")

    @staticmethod
    def parse(output: str, schema: Any) -> Any:
        """
        Validate capture output against a pydantic model or TypeAdapter.

        Raises:
            CaptureBackendError: The output is not valid JSON for the schema
        """
        try:
            if isinstance(schema, TypeAdapter):
                return schema.validate_json(output)
            if isinstance(schema, type) and issubclass(schema, BaseModel):
                return schema.model_validate_json(output)
            raise TypeError(f"Unsupported schema: {schema!r}")
        except ValidationError as e:
            logger.debug(f"Rejected capture output: {truncate_large_value(output)}")
            first = e.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ())) or "output"
            raise CaptureBackendError(f"Failed to parse capture output: {location}: {first['msg']}") from e

    def list_windows(self, include_thumbnails: bool = True) -> List[WindowDescriptor]:
        flags = () if include_thumbnails else ("--no-thumbnails",)
        output = self.run("list_windows", flags=flags, max_output=SUBPROCESS_SETTINGS["LIST_MAX_OUTPUT"])
        return self.parse(output, WINDOW_LIST)

    def list_displays(self, include_thumbnails: bool = True) -> List[DisplayDescriptor]:
        flags = () if include_thumbnails else ("--no-thumbnails",)
        output = self.run("list_displays", flags=flags, max_output=SUBPROCESS_SETTINGS["LIST_MAX_OUTPUT"])
        return self.parse(output, DISPLAY_LIST)

    def window_thumbnail(self, window_id: int) -> ThumbnailEnvelope:
        output = self.run(
            "get_window_thumbnail",
            (str(window_id),),
            timeout=self.thumbnail_timeout,
            max_output=SUBPROCESS_SETTINGS["LIST_MAX_OUTPUT"],
        )
        return self.parse(output, ThumbnailEnvelope)

    def display_thumbnail(self, display_id: int) -> ThumbnailEnvelope:
        output = self.run(
            "get_display_thumbnail",
            (str(display_id),),
            max_output=SUBPROCESS_SETTINGS["LIST_MAX_OUTPUT"],
        )
        return self.parse(output, ThumbnailEnvelope)

    def capture(self, command: CaptureCommand) -> ImageEnvelope:
        logger.info(f"Capturing: {command.describe()}")
        return self.parse(self.run(command.subcommand, command.args), ImageEnvelope)

    def capture_window(self, window_id: int) -> ImageEnvelope:
        return self.capture(window_command(window_id))

    def capture_display(self, display_id: Optional[int] = None) -> ImageEnvelope:
        return self.capture(display_command(display_id))

    def capture_region(self, region: Region) -> ImageEnvelope:
        return self.capture(region_command(region))
