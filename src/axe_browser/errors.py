"""
Error Types

Exception hierarchy raised by the scan orchestrator.

- ConfigurationError: unsupported client or missing axe-core source
- FrameTraversalError: a frame vanished or could not be entered
- WindowLifecycleError: the temporary finishing window could not be used
- MergeError: axe.finishRun() failed while merging partial results
"""

ERROR_HANDLING_DOCS = (
    "https://github.com/dequelabs/axe-core-npm/blob/develop/packages/webdriverio/error-handling.md"
)


class AxeBrowserError(Exception):
    """Base class for all scan errors."""


class ConfigurationError(AxeBrowserError):
    """Raised at construction time when the builder cannot be used."""


class FrameTraversalError(AxeBrowserError):
    """Raised when a frame no longer exists or cannot be entered."""


class WindowLifecycleError(AxeBrowserError):
    """Raised when a window or tab cannot be created or switched into."""


class MergeError(AxeBrowserError):
    """Raised when merging partial results fails."""

    def __init__(self, message: str):
        super().__init__(f"{message}\n Please check out {ERROR_HANDLING_DOCS}")
        self.original_message = message
