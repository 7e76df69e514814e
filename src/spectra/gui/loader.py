"""
Background loading for the settings window.

The initial load runs its three requests (windows, displays, settings) in
parallel. Thumbnails are then fetched strictly one at a time on a single
worker thread with a short pause between items, so the machine is never
flooded with capture processes. Starting a new load cancels the previous
one. Results are handed to callbacks; the window marshals them onto the Tk
main loop.
"""

import base64
import io
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

from PIL import Image
from loguru import logger

from spectra.core.constants import GUI_SETTINGS
from spectra.core.models import DisplayDescriptor, Settings, WindowDescriptor
from spectra.gui.bridge import GuiBridge

ThumbnailJob = Tuple[str, int]


class InitialState(NamedTuple):
    windows: List[WindowDescriptor]
    displays: List[DisplayDescriptor]
    settings: Settings


def load_initial(bridge: GuiBridge) -> InitialState:
    """Fetch windows, displays and settings concurrently."""
    with ThreadPoolExecutor(max_workers=GUI_SETTINGS["INITIAL_LOAD_WORKERS"]) as pool:
        windows = pool.submit(bridge.list_windows)
        displays = pool.submit(bridge.list_displays)
        settings = pool.submit(bridge.get_settings)
        state = InitialState(windows.result(), displays.result(), settings.result())

    logger.info(f"Loaded {len(state.windows)} windows and {len(state.displays)} displays")
    return state


def thumbnail_jobs(state: InitialState) -> List[ThumbnailJob]:
    """Displays first, then windows, in list order."""
    return [("display", d.id) for d in state.displays] + [("window", w.id) for w in state.windows]


class ThumbnailLoader:
    """Fetches thumbnails serially on one worker thread."""

    def __init__(self, delay: float = GUI_SETTINGS["THUMBNAIL_STEP_DELAY"]):
        self.delay = delay
        self._generation = 0
        self._lock = threading.Lock()

    def start(
        self,
        jobs: Sequence[ThumbnailJob],
        fetch: Callable[[str, int], str],
        on_loaded: Callable[[str, int, str], None],
    ) -> threading.Thread:
        """
        Cancel any running load and start fetching ``jobs`` in order.

        Args:
            jobs: (kind, id) pairs, kind being "display" or "window"
            fetch: Returns a base64 thumbnail or "" for one job
            on_loaded: Called from the worker thread for each non-empty thumbnail

        Returns:
            threading.Thread: The started worker
        """
        with self._lock:
            self._generation += 1
            generation = self._generation

        worker = threading.Thread(
            target=self._run,
            args=(generation, list(jobs), fetch, on_loaded),
            name="thumbnail-loader",
            daemon=True,
        )
        worker.start()
        return worker

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def _run(self, generation, jobs, fetch, on_loaded) -> None:
        for index, (kind, item_id) in enumerate(jobs):
            if not self._is_current(generation):
                logger.debug("Thumbnail load superseded")
                return

            thumbnail = fetch(kind, item_id)
            if thumbnail and self._is_current(generation):
                on_loaded(kind, item_id, thumbnail)

            if index < len(jobs) - 1:
                time.sleep(self.delay)


def decode_thumbnail(data: str, size: int = GUI_SETTINGS["ICON_SIZE"]) -> Optional[Image.Image]:
    """Decode a base64 thumbnail and shrink it to a list icon; None if undecodable."""
    try:
        img = Image.open(io.BytesIO(base64.b64decode(data)))
        img.load()
    except (ValueError, OSError) as e:
        logger.warning(f"Undecodable thumbnail: {str(e)}")
        return None
    img.thumbnail((size, size))
    return img
