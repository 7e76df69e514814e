"""
Spectra

Screen, window and region capture for AI agents, built as three cooperating
processes around one shared core:

1. Core Layer: native capture, thumbnails, shared schema, settings, capture client
2. Presentation Layer: ``spectra-capture``, the capture backend CLI
3. Integration Layer: ``spectra-mcp``, the MCP tool-call server
4. GUI: ``spectra-gui``, the settings window

Usage:
    # Direct API usage (Core Layer)
    from spectra.core import capture_display, SettingsStore
    envelope = capture_display(None)

    # Capture backend
    # spectra-capture list_windows

    # MCP server
    # spectra-mcp start
"""

__version__ = "1.0.0"

__all__ = ['__version__']
