"""
Browser Controller

Launches the Playwright browser used by the command-line scanner.
"""

import os
from dataclasses import dataclass
from typing import Literal, Optional

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


BrowserType = Literal["chromium", "firefox", "webkit"]


@dataclass
class BrowserConfig:
    """
    Configuration for browser instance.

    Reads from environment variables with sensible defaults.
    """

    # Browser type (chromium is Playwright's Chrome-based browser)
    browser_type: BrowserType = "chromium"

    # Scans run headless unless asked otherwise
    headless: bool = True

    # Viewport size
    viewport_width: int = 1280
    viewport_height: int = 720

    # Slow motion delay in ms (useful for debugging)
    slow_mo: int = 0

    # Page load timeout in ms
    page_load_timeout: int = 30000

    # Navigation timeout in ms
    navigation_timeout: int = 30000

    @classmethod
    def from_env(cls) -> "BrowserConfig":
        """
        Create BrowserConfig from environment variables.

        Environment variables:
            BROWSER_TYPE: chromium, firefox, or webkit (default: chromium)
            BROWSER_HEADLESS: true/false (default: true)
            BROWSER_VIEWPORT_WIDTH: int (default: 1280)
            BROWSER_VIEWPORT_HEIGHT: int (default: 720)
            BROWSER_SLOW_MO: int in ms (default: 0)
            PAGE_LOAD_TIMEOUT: int in ms (default: 30000)
            NAVIGATION_TIMEOUT: int in ms (default: 30000)
        """
        # Map config browser type to Playwright's expected values
        env_type = os.getenv("BROWSER_TYPE", "chrome").lower()
        browser_type_map = {
            "chrome": "chromium",
            "chromium": "chromium",
            "firefox": "firefox",
            "webkit": "webkit",
            "safari": "webkit",
        }
        browser_type = browser_type_map.get(env_type, "chromium")

        headless_str = os.getenv("BROWSER_HEADLESS", "true").lower()
        headless = headless_str in ("true", "1", "yes")

        return cls(
            browser_type=browser_type,
            headless=headless,
            viewport_width=int(os.getenv("BROWSER_VIEWPORT_WIDTH", "1280")),
            viewport_height=int(os.getenv("BROWSER_VIEWPORT_HEIGHT", "720")),
            slow_mo=int(os.getenv("BROWSER_SLOW_MO", "0")),
            page_load_timeout=int(os.getenv("PAGE_LOAD_TIMEOUT", "30000")),
            navigation_timeout=int(os.getenv("NAVIGATION_TIMEOUT", "30000")),
        )


class BrowserController:
    """
    Controls the Playwright browser instance.

    Usage:
        >>> async with BrowserController(config) as browser:
        ...     page = browser.current_page
        ...     await page.goto("https://example.com")
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        """
        Initialize browser controller.

        Args:
            config: Browser configuration (uses env if None)
        """
        self.config = config or BrowserConfig.from_env()

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    @property
    def is_initialized(self) -> bool:
        """Check if browser is initialized."""
        return self._browser is not None

    @property
    def current_page(self) -> Optional[Page]:
        """The page created at startup."""
        return self._page

    async def initialize(self) -> None:
        """Initialize Playwright, launch the browser and open one page."""
        if self._playwright is not None:
            return

        self._playwright = await async_playwright().start()
        launcher = self._get_browser_launcher()

        self._browser = await launcher.launch(
            headless=self.config.headless,
            slow_mo=self.config.slow_mo,
        )
        self._context = await self._browser.new_context(
            viewport={
                "width": self.config.viewport_width,
                "height": self.config.viewport_height,
            },
        )
        self._context.set_default_timeout(self.config.page_load_timeout)
        self._context.set_default_navigation_timeout(self.config.navigation_timeout)

        self._page = await self._context.new_page()

    def _get_browser_launcher(self):
        """Get the appropriate browser launcher based on config."""
        if self._playwright is None:
            raise RuntimeError("Playwright not initialized")

        launchers = {
            "chromium": self._playwright.chromium,
            "firefox": self._playwright.firefox,
            "webkit": self._playwright.webkit,
        }
        return launchers.get(self.config.browser_type, self._playwright.chromium)

    async def close(self) -> None:
        """Close the browser and cleanup resources."""
        self._page = None

        if self._context:
            try:
                await self._context.close()
            except Exception:
                pass
            self._context = None

        if self._browser:
            try:
                await self._browser.close()
            except Exception:
                pass
            self._browser = None

        if self._playwright:
            try:
                await self._playwright.stop()
            except Exception:
                pass
            self._playwright = None

    async def __aenter__(self) -> "BrowserController":
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()


def create_browser(config: Optional[BrowserConfig] = None) -> BrowserController:
    """
    Factory function to create a browser controller.

    Use with async context manager:
        >>> async with create_browser() as browser:
        ...     page = browser.current_page

    Args:
        config: Browser configuration (uses env if None)

    Returns:
        BrowserController instance (not yet initialized)
    """
    return BrowserController(config)
