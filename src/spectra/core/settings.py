#!/usr/bin/env python3
"""
Settings Store

Persists the capture target as a small JSON document shared by the GUI (which
writes it on every selection) and the tool-call server (which reads it before
every capture and writes it from the settings_set tool).

Reads never fail: a missing, malformed or schema-invalid file yields the
default settings (primary display). Writes replace the whole file through a
temporary file, so readers see either the old or the new document. There is
no locking; the last writer wins.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- SettingsUpdate(target=TargetUpdate(type="window", window_id=4242))

Expected output:
- settings.json: {"target": {"type": "window", "windowId": 4242}}
"""

import json
import os
import tempfile

from loguru import logger
from pydantic import ValidationError

from spectra.core.models import CaptureTarget, Settings, SettingsUpdate, TargetUpdate, default_settings


def merge_target(current: CaptureTarget, update: TargetUpdate) -> CaptureTarget:
    """
    Apply a partial target update.

    Precedence:
        1. The update's ``type``, when present, wins over the current type.
        2. A type change starts a fresh target of the new type; ids and the
           region belonging to the old kind are dropped.
        3. Otherwise only the fields set in the update replace current ones;
           an explicit null clears a field.
        4. ``region`` is replaced as a whole.
    """
    new_type = update.type or current.type
    base = current if new_type == current.type else CaptureTarget(type=new_type)
    changes = {name: getattr(update, name) for name in update.model_fields_set if name != "type"}
    changes["type"] = new_type
    return base.model_copy(update=changes)


def apply_update(current: Settings, update: SettingsUpdate) -> Settings:
    """
    Merge a partial update into the current settings.

    Fields absent from the update keep their current values. ``target`` is
    merged by ``merge_target`` (a null target is ignored). The legacy
    top-level ``region`` is replaced when present; an explicit null clears it.

    Args:
        current: Settings as currently persisted
        update: Partial settings

    Returns:
        Settings: The merged settings
    """
    target = current.target
    if "target" in update.model_fields_set and update.target is not None:
        target = merge_target(current.target, update.target)

    region = current.region
    if "region" in update.model_fields_set:
        region = update.region

    return Settings(target=target, region=region)


class SettingsStore:
    """JSON settings file at a fixed path."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> Settings:
        """
        Read the settings file.

        Returns:
            Settings: Parsed settings, or the defaults when the file is missing or invalid
        """
        try:
            with open(self.path, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            logger.debug(f"No settings file at {self.path}, using defaults")
            return default_settings()
        except OSError as e:
            logger.warning(f"Cannot read settings file {self.path}, using defaults: {str(e)}")
            return default_settings()

        try:
            return Settings.model_validate_json(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            logger.warning(f"Settings file {self.path} is not UTF-8, using defaults: {str(e)}")
            return default_settings()
        except ValidationError as e:
            logger.warning(f"Invalid settings file {self.path}, using defaults: {e.error_count()} error(s)")
            return default_settings()

    def save(self, settings: Settings) -> None:
        """
        Write the full settings document, creating parent directories.

        Raises:
            OSError: The file could not be written
        """
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".settings-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(settings.to_dict(), f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

        logger.info(f"Saved settings to {self.path}: {settings.to_json()}")

    def update(self, update: SettingsUpdate) -> Settings:
        """Load, merge ``update`` with ``apply_update``, save, and return the result."""
        merged = apply_update(self.load(), update)
        self.save(merged)
        return merged
