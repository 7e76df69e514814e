#!/usr/bin/env python3
"""
Shared Schema for Spectra

Pydantic models for every record that crosses a process boundary: the JSON
printed by the capture backend, the settings document, and the arguments of
the tool-call server. The capture backend serializes these models and every
caller validates against the same models, so the two sides cannot drift.

JSON field names are camelCase (``ownerName``, ``windowId``); Python
attributes are snake_case with aliases. Models accept either form on input.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- '{"target": {"type": "window", "windowId": 4242}}'

Expected output:
- Settings(target=CaptureTarget(type='window', window_id=4242, ...), region=None)
"""

import base64
import json
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from spectra.core.constants import PRIMARY_DISPLAY, PRIMARY_DISPLAY_ALIASES

TargetType = Literal["window", "screen", "region"]


class SchemaModel(BaseModel):
    """Base model: camelCase aliases on the wire, snake_case in Python."""

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


class Bounds(SchemaModel):
    x: float
    y: float
    width: float
    height: float


class Region(SchemaModel):
    """A rectangle in global screen coordinates."""

    x: float
    y: float
    width: float
    height: float


class WindowDescriptor(SchemaModel):
    id: int
    owner_name: str = Field(default="", alias="ownerName")
    name: str = ""
    layer: int = 0
    bounds: Bounds
    thumbnail: Optional[str] = None


class DisplayDescriptor(SchemaModel):
    id: int
    name: str
    width: int
    height: int
    bounds: Bounds
    is_main: bool = Field(default=False, alias="isMain")
    thumbnail: Optional[str] = None


def normalize_screen_id(value: Any) -> Optional[Union[int, str]]:
    """
    Normalize a screenId to either a display id or the primary sentinel.

    Accepts ints, integral floats, numeric strings and the sentinels
    ``main``/``primary``/``default`` (any case).
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"screenId must be a display id or '{PRIMARY_DISPLAY}', got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in PRIMARY_DISPLAY_ALIASES:
            return PRIMARY_DISPLAY
        if text.lstrip("-").isdigit():
            return int(text)
    raise ValueError(f"screenId must be a display id or '{PRIMARY_DISPLAY}', got {value!r}")


class CaptureTarget(SchemaModel):
    """
    The configured source a screenshot request should capture.

    A window target should carry ``windowId``, a region target should carry
    ``region``. Missing fields are tolerated here and resolved by
    ``spectra.core.targets.resolve_capture_command``, which falls back to the
    primary display.
    """

    type: TargetType = "screen"
    window_id: Optional[int] = Field(default=None, alias="windowId")
    screen_id: Optional[Union[int, str]] = Field(default=None, alias="screenId")
    region: Optional[Region] = None

    @field_validator("screen_id", mode="before")
    @classmethod
    def _normalize_screen_id(cls, value: Any) -> Optional[Union[int, str]]:
        return normalize_screen_id(value)


class Settings(SchemaModel):
    """The persisted settings document."""

    target: CaptureTarget = Field(default_factory=CaptureTarget)
    # Legacy top-level override, see resolve_capture_command
    region: Optional[Region] = None


class TargetUpdate(SchemaModel):
    """A partial CaptureTarget; only the fields that are set are applied."""

    type: Optional[TargetType] = None
    window_id: Optional[int] = Field(default=None, alias="windowId")
    screen_id: Optional[Union[int, str]] = Field(default=None, alias="screenId")
    region: Optional[Region] = None

    @field_validator("screen_id", mode="before")
    @classmethod
    def _normalize_screen_id(cls, value: Any) -> Optional[Union[int, str]]:
        return normalize_screen_id(value)


class SettingsUpdate(SchemaModel):
    """A partial settings document for ``apply_update``."""

    target: Optional[TargetUpdate] = None
    region: Optional[Region] = None


class ImageEnvelope(SchemaModel):
    """The single-line JSON every capture subcommand prints."""

    type: Literal["image"] = "image"
    format: str = "jpeg"
    data: str

    def image_bytes(self) -> bytes:
        return base64.b64decode(self.data)


class ThumbnailEnvelope(SchemaModel):
    """Thumbnail for one window or display; empty string when unavailable."""

    id: int
    thumbnail: str = ""


WINDOW_LIST = TypeAdapter(List[WindowDescriptor])
DISPLAY_LIST = TypeAdapter(List[DisplayDescriptor])


def dump_windows(windows: List[WindowDescriptor]) -> str:
    return json.dumps([window.to_dict() for window in windows])


def dump_displays(displays: List[DisplayDescriptor]) -> str:
    return json.dumps([display.to_dict() for display in displays])


def default_settings() -> Settings:
    """Settings used when the file is missing or unreadable: the primary display."""
    return Settings(target=CaptureTarget(type="screen"))
