"""
Remote Browser Clients

- RemoteClient: capability set required by the scan orchestrator
- PlaywrightClient: implementation over the Playwright async API
"""

from .base import RemoteClient
from .playwright_client import PlaywrightClient

__all__ = [
    "RemoteClient",
    "PlaywrightClient",
]
