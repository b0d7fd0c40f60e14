"""
Browser Module

Provides Playwright browser management for the command-line scanner.
"""

from .controller import BrowserController, BrowserConfig, create_browser

__all__ = [
    "BrowserController",
    "BrowserConfig",
    "create_browser",
]
