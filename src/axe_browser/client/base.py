"""
Remote Browser Client Interface

Defines the capability set the scan orchestrator needs from a remotely
controlled browser: script execution in the current browsing context,
element lookup, frame navigation and window lifecycle.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..models import NewWindow


class RemoteClient(ABC):
    """
    Abstract base class for remote browser clients.

    A client has exactly one active browsing context (a frame inside a
    window). Every method operates on that context, and frame and window
    switches move it. Implementations are not expected to be safe for
    concurrent use.
    """

    @abstractmethod
    async def execute(self, script: str, *args: Any) -> Any:
        """
        Run a script in the current browsing context.

        The script is a function body: it may `return` a value and read its
        positional arguments through `arguments[i]`. A returned promise is
        awaited.

        Args:
            script: JavaScript function body
            *args: JSON-serializable arguments

        Returns:
            The JSON-deserialized return value
        """
        pass

    @abstractmethod
    async def find_all(self, selector: str) -> list[Any]:
        """Return every element matching `selector`, in document order."""
        pass

    @abstractmethod
    async def find(self, selector: str) -> Optional[Any]:
        """Return the first element matching `selector`, or None."""
        pass

    @abstractmethod
    async def element_exists(self, element: Any) -> bool:
        """Check whether a previously found element is still attached."""
        pass

    @abstractmethod
    async def switch_to_frame(self, element: Any) -> None:
        """Make the frame owned by `element` the current browsing context."""
        pass

    @abstractmethod
    async def switch_to_parent_frame(self) -> None:
        """Move to the parent frame. A no-op at the top-level document."""
        pass

    @abstractmethod
    async def get_window_handle(self) -> str:
        """Return the handle of the active window."""
        pass

    @abstractmethod
    async def create_window(self, kind: str = "tab") -> NewWindow:
        """
        Open a new window or tab without switching to it.

        Returns:
            NewWindow whose handle is None when the browser refused to open it
        """
        pass

    @abstractmethod
    async def switch_to_window(self, handle: str) -> None:
        """Activate a window; its top-level document becomes current."""
        pass

    @abstractmethod
    async def navigate_to(self, url: str) -> None:
        """Load `url` in the active window."""
        pass

    @abstractmethod
    async def close_window(self) -> None:
        """Close the active window. No window is active afterwards."""
        pass
