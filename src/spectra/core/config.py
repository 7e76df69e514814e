"""
Configuration for Spectra.

Settings come from, in order of precedence: explicit command-line flags,
environment variables (a .env file is loaded first), and defaults. The result
is resolved once at process start into an immutable SpectraConfig; nothing
re-probes the environment afterwards.

Environment variables:
    SPECTRA_CAPTURE_COMMAND    Capture backend command line (shell-split)
    SPECTRA_SETTINGS_PATH      Settings file location
    SPECTRA_CAPTURE_TIMEOUT    Seconds allowed for lists and captures
    SPECTRA_THUMBNAIL_TIMEOUT  Seconds allowed for one thumbnail
    SPECTRA_LOG_LEVEL          Log level
"""

import os
import shlex
import sys
from typing import Optional, Tuple

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict

from spectra.core.constants import (
    ENV_CAPTURE_COMMAND,
    ENV_CAPTURE_TIMEOUT,
    ENV_LOG_LEVEL,
    ENV_SETTINGS_PATH,
    ENV_THUMBNAIL_TIMEOUT,
    SETTINGS_FILENAME,
    SUBPROCESS_SETTINGS,
)
from spectra.core.utils import user_config_dir

load_dotenv()


class SpectraConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    capture_command: Tuple[str, ...]
    settings_path: str
    capture_timeout: float = SUBPROCESS_SETTINGS["CAPTURE_TIMEOUT"]
    thumbnail_timeout: float = SUBPROCESS_SETTINGS["THUMBNAIL_TIMEOUT"]
    log_level: str = "INFO"

    @property
    def log_dir(self) -> str:
        return os.path.join(os.path.dirname(os.path.abspath(self.settings_path)), "logs")


def default_capture_command() -> Tuple[str, ...]:
    """Run the capture backend with the current interpreter."""
    return (sys.executable, "-m", "spectra.cli")


def default_settings_path() -> str:
    return os.path.join(user_config_dir(), SETTINGS_FILENAME)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not a number, using {default}")
        return default


def load_config(
    capture_command: Optional[str] = None,
    settings_path: Optional[str] = None,
    log_level: Optional[str] = None,
    default_log_level: str = "INFO",
) -> SpectraConfig:
    """
    Resolve configuration from flags, environment and defaults.

    Args:
        capture_command: Capture backend command line from a CLI flag
        settings_path: Settings file path from a CLI flag
        log_level: Log level from a CLI flag
        default_log_level: Level used when neither flag nor env var is set

    Returns:
        SpectraConfig: Resolved configuration

    Raises:
        ValueError: The capture command resolves to an empty command line
    """
    command_text = capture_command or os.environ.get(ENV_CAPTURE_COMMAND)
    if command_text:
        command = tuple(shlex.split(command_text))
        if not command:
            raise ValueError("Capture command is empty")
    else:
        command = default_capture_command()

    config = SpectraConfig(
        capture_command=command,
        settings_path=os.path.expanduser(
            settings_path or os.environ.get(ENV_SETTINGS_PATH) or default_settings_path()
        ),
        capture_timeout=_env_float(ENV_CAPTURE_TIMEOUT, SUBPROCESS_SETTINGS["CAPTURE_TIMEOUT"]),
        thumbnail_timeout=_env_float(ENV_THUMBNAIL_TIMEOUT, SUBPROCESS_SETTINGS["THUMBNAIL_TIMEOUT"]),
        log_level=(log_level or os.environ.get(ENV_LOG_LEVEL) or default_log_level).upper(),
    )
    logger.debug(f"Capture command: {' '.join(config.capture_command)}")
    logger.debug(f"Settings path: {config.settings_path}")
    return config
