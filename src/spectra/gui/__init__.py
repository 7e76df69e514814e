"""
GUI Layer for Spectra

A Tk settings window for choosing the capture target. The window itself
lives in ``spectra.gui.app`` and is imported only when launched, so the
bridge, loader and selection logic stay importable without Tk.

Usage:
    spectra-gui
    python -m spectra.gui.app --settings-path /tmp/settings.json
"""

from spectra.gui.bridge import GuiBridge
from spectra.gui.loader import InitialState, ThumbnailLoader, decode_thumbnail, load_initial, thumbnail_jobs
from spectra.gui.selection import (
    describe_target,
    same_target,
    selected_item,
    settings_for_selection,
    target_for_display,
    target_for_item,
    target_for_region,
    target_for_window,
    with_target,
)

__all__ = [
    'GuiBridge',
    'InitialState',
    'ThumbnailLoader',
    'decode_thumbnail',
    'load_initial',
    'thumbnail_jobs',
    'describe_target',
    'same_target',
    'selected_item',
    'settings_for_selection',
    'target_for_display',
    'target_for_item',
    'target_for_region',
    'target_for_window',
    'with_target',
]
