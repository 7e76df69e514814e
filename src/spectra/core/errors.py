"""
Exception types for Spectra.

Core functions raise these; each process boundary decides what to do with
them (the CLI prints and exits 1, the MCP server turns them into tool errors,
the GUI bridge logs them and substitutes an empty result).
"""


class SpectraError(Exception):
    """Base class for all Spectra errors."""


class CaptureError(SpectraError):
    """A native enumeration or capture call failed."""


class WindowNotFoundError(CaptureError):
    """The window id does not refer to a live window."""

    def __init__(self, window_id: int):
        self.window_id = window_id
        super().__init__(f"Failed to capture window {window_id}: window not found")


class DisplayNotFoundError(CaptureError):
    """The display id does not refer to an active display."""

    def __init__(self, display_id: int):
        self.display_id = display_id
        super().__init__(f"Failed to capture display {display_id}: display not found")


class BackendUnavailableError(CaptureError):
    """No native window backend exists for this platform."""


class CaptureBackendError(SpectraError):
    """Invoking the capture backend process failed or returned bad output."""
