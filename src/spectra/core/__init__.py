"""
Core Layer for Spectra

This package contains the core logic shared by the capture backend, the
tool-call server and the settings GUI: native capture, thumbnails, the shared
schema, the settings store, target resolution and the capture client.

The core layer is designed to be:
1. Independent of UI or integration concerns
2. Fully testable in isolation with native frameworks mocked

Usage:
    from spectra.core import capture_display, SettingsStore
    envelope = capture_display(None)
    settings = SettingsStore(path).load()
"""

from spectra.core.constants import (
    IMAGE_SETTINGS,
    WINDOW_FILTER,
    MAX_DISPLAYS,
    PRIMARY_DISPLAY,
    SUBPROCESS_SETTINGS,
)

from spectra.core.errors import (
    SpectraError,
    CaptureError,
    WindowNotFoundError,
    DisplayNotFoundError,
    BackendUnavailableError,
    CaptureBackendError,
)

from spectra.core.models import (
    Bounds,
    Region,
    WindowDescriptor,
    DisplayDescriptor,
    CaptureTarget,
    Settings,
    TargetUpdate,
    SettingsUpdate,
    ImageEnvelope,
    ThumbnailEnvelope,
    default_settings,
)

from spectra.core.image_processing import (
    ensure_rgb,
    scale_to_fit,
    encode_jpeg,
    make_thumbnail,
)

from spectra.core.capture import (
    encode_capture,
    list_windows,
    list_displays,
    window_thumbnail,
    display_thumbnail,
    capture_window,
    capture_display,
    capture_region,
)

from spectra.core.windows import filter_windows, is_listable

from spectra.core.settings import SettingsStore, apply_update, merge_target

from spectra.core.targets import CaptureCommand, resolve_capture_command

from spectra.core.config import SpectraConfig, load_config

from spectra.core.client import CaptureClient

__all__ = [
    # Constants
    'IMAGE_SETTINGS',
    'WINDOW_FILTER',
    'MAX_DISPLAYS',
    'PRIMARY_DISPLAY',
    'SUBPROCESS_SETTINGS',

    # Errors
    'SpectraError',
    'CaptureError',
    'WindowNotFoundError',
    'DisplayNotFoundError',
    'BackendUnavailableError',
    'CaptureBackendError',

    # Schema
    'Bounds',
    'Region',
    'WindowDescriptor',
    'DisplayDescriptor',
    'CaptureTarget',
    'Settings',
    'TargetUpdate',
    'SettingsUpdate',
    'ImageEnvelope',
    'ThumbnailEnvelope',
    'default_settings',

    # Image processing
    'ensure_rgb',
    'scale_to_fit',
    'encode_jpeg',
    'make_thumbnail',

    # Capture
    'encode_capture',
    'list_windows',
    'list_displays',
    'window_thumbnail',
    'display_thumbnail',
    'capture_window',
    'capture_display',
    'capture_region',
    'filter_windows',
    'is_listable',

    # Settings and targets
    'SettingsStore',
    'apply_update',
    'merge_target',
    'CaptureCommand',
    'resolve_capture_command',

    # Configuration and client
    'SpectraConfig',
    'load_config',
    'CaptureClient',
]
