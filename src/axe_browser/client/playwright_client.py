"""
Playwright Remote Client

Implements RemoteClient on top of the Playwright async API.

Playwright addresses frames directly instead of keeping a "current frame",
so this adapter keeps an explicit browsing-context stack: the bottom is the
active page's main frame and every switch_to_frame() pushes the child frame.
Windows are the pages of one BrowserContext, addressed by generated handles.
"""

import logging
import uuid
from typing import Any, Optional

from playwright.async_api import ElementHandle, Frame, Page
from playwright.async_api import Error as PlaywrightError

from ..errors import FrameTraversalError, WindowLifecycleError
from ..models import NewWindow
from .base import RemoteClient

logger = logging.getLogger(__name__)

# Runs a function body with `arguments` bound to the evaluate() argument list
_SCRIPT_WRAPPER_HEAD = "(args) => (function () {\n"
_SCRIPT_WRAPPER_TAIL = "\n}).apply(null, args)"


def _new_handle() -> str:
    return uuid.uuid4().hex


class PlaywrightClient(RemoteClient):
    """
    RemoteClient backed by a Playwright Page.

    Usage:
        >>> async with BrowserController(config) as browser:
        ...     client = PlaywrightClient(browser.current_page)
        ...     results = await AxeBuilder(client).analyze()
    """

    def __init__(self, page: Page):
        """
        Initialize the client with the window that should be scanned.

        Args:
            page: Playwright Page instance; new windows open in its BrowserContext
        """
        self._browser_context = page.context
        handle = _new_handle()
        self._windows: dict[str, Page] = {handle: page}
        self._current_handle: Optional[str] = handle
        self._frames: list[Frame] = []

    @property
    def page(self) -> Page:
        """The active window's Page."""
        if self._current_handle is None:
            raise WindowLifecycleError("no such window: the active window was closed")
        return self._windows[self._current_handle]

    @property
    def current_frame(self) -> Frame:
        """The current browsing context."""
        if self._frames:
            return self._frames[-1]
        return self.page.main_frame

    async def execute(self, script: str, *args: Any) -> Any:
        frame = self.current_frame
        expression = _SCRIPT_WRAPPER_HEAD + script + _SCRIPT_WRAPPER_TAIL
        try:
            return await frame.evaluate(expression, list(args))
        except PlaywrightError as e:
            if frame.is_detached():
                raise FrameTraversalError(f"no such frame: {e}") from e
            raise

    async def find_all(self, selector: str) -> list[ElementHandle]:
        return await self.current_frame.query_selector_all(selector)

    async def find(self, selector: str) -> Optional[ElementHandle]:
        return await self.current_frame.query_selector(selector)

    async def element_exists(self, element: ElementHandle) -> bool:
        try:
            return bool(await element.evaluate("node => node.isConnected"))
        except PlaywrightError as e:
            logger.debug(f"Element no longer reachable: {e}")
            return False

    async def switch_to_frame(self, element: ElementHandle) -> None:
        try:
            frame = await element.content_frame()
        except PlaywrightError as e:
            raise FrameTraversalError(f"element not attached: {e}") from e

        if frame is None or frame.is_detached():
            raise FrameTraversalError("no such frame: element does not own a live frame")

        self._frames.append(frame)
        logger.debug(f"Entered frame {frame.name or frame.url} (depth {len(self._frames)})")

    async def switch_to_parent_frame(self) -> None:
        if self._frames:
            self._frames.pop()

    async def get_window_handle(self) -> str:
        if self._current_handle is None:
            raise WindowLifecycleError("no such window: the active window was closed")
        return self._current_handle

    async def create_window(self, kind: str = "tab") -> NewWindow:
        try:
            page = await self._browser_context.new_page()
        except PlaywrightError as e:
            logger.warning(f"Could not open a new {kind}: {e}")
            return NewWindow(handle=None, type=kind)

        handle = _new_handle()
        self._windows[handle] = page
        return NewWindow(handle=handle, type=kind)

    async def switch_to_window(self, handle: str) -> None:
        page = self._windows.get(handle)
        if page is None or page.is_closed():
            raise WindowLifecycleError(f"no such window: {handle}")

        await page.bring_to_front()
        self._current_handle = handle
        self._frames.clear()

    async def navigate_to(self, url: str) -> None:
        await self.page.goto(url)
        self._frames.clear()

    async def close_window(self) -> None:
        page = self.page
        await page.close()
        del self._windows[self._current_handle]
        self._current_handle = None
        self._frames.clear()
