"""
axe-browser

Runs the axe-core accessibility engine across every frame of a remotely
controlled browser window and merges the per-frame results into one report.
"""

from .builder import AxeBuilder
from .client import PlaywrightClient, RemoteClient
from .config import AxeConfig
from .errors import (
    AxeBrowserError,
    ConfigurationError,
    FrameTraversalError,
    MergeError,
    WindowLifecycleError,
)
from .models import AxeResults, FrameContext, NewWindow, RunOptions, ScanContext
from .result import AnalyzeResult

__version__ = "0.1.0"

__all__ = [
    "AxeBuilder",
    "AxeConfig",
    "AnalyzeResult",
    "RemoteClient",
    "PlaywrightClient",
    "AxeResults",
    "FrameContext",
    "NewWindow",
    "RunOptions",
    "ScanContext",
    "AxeBrowserError",
    "ConfigurationError",
    "FrameTraversalError",
    "MergeError",
    "WindowLifecycleError",
]
