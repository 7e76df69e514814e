"""
GUI bridge.

The fixed set of operations the settings window may perform: list windows
and displays, fetch one thumbnail, read and save settings. Privileged work
(subprocesses and file I/O) happens only here. Every operation logs its
failure and substitutes an empty result, so the window keeps working when
the capture backend misbehaves.
"""

from typing import List

from loguru import logger

from spectra.core.client import CaptureClient
from spectra.core.errors import CaptureBackendError
from spectra.core.models import DisplayDescriptor, Settings, WindowDescriptor
from spectra.core.settings import SettingsStore


class GuiBridge:
    def __init__(self, client: CaptureClient, store: SettingsStore):
        self.client = client
        self.store = store

    def list_windows(self) -> List[WindowDescriptor]:
        try:
            return self.client.list_windows(include_thumbnails=False)
        except CaptureBackendError as e:
            logger.error(f"Failed to list windows: {str(e)}")
            return []

    def list_displays(self) -> List[DisplayDescriptor]:
        try:
            return self.client.list_displays(include_thumbnails=False)
        except CaptureBackendError as e:
            logger.error(f"Failed to list displays: {str(e)}")
            return []

    def get_window_thumbnail(self, window_id: int) -> str:
        """Base64 JPEG thumbnail, or an empty string."""
        try:
            return self.client.window_thumbnail(window_id).thumbnail
        except CaptureBackendError as e:
            logger.warning(f"No thumbnail for window {window_id}: {str(e)}")
            return ""

    def get_display_thumbnail(self, display_id: int) -> str:
        """Base64 JPEG thumbnail, or an empty string."""
        try:
            return self.client.display_thumbnail(display_id).thumbnail
        except CaptureBackendError as e:
            logger.warning(f"No thumbnail for display {display_id}: {str(e)}")
            return ""

    def fetch_thumbnail(self, kind: str, item_id: int) -> str:
        if kind == "display":
            return self.get_display_thumbnail(item_id)
        return self.get_window_thumbnail(item_id)

    def get_settings(self) -> Settings:
        return self.store.load()

    def save_settings(self, settings: Settings) -> bool:
        try:
            self.store.save(settings)
            return True
        except OSError as e:
            logger.error(f"Failed to save settings: {str(e)}")
            return False
