#!/usr/bin/env python
"""
Scan Page Example

Demonstrates a full-page scan: open a site, limit the run to WCAG A/AA rules,
skip a third-party frame and print the violations.

Usage:
    python examples/scan_page.py

Requirements:
    - axe-core available at AXE_SOURCE_PATH (npm install axe-core)
    - axe-browser installed: pip install -e .
    - Playwright browsers installed: playwright install chromium
"""

import asyncio

from axe_browser import AxeBuilder
from axe_browser.browser import BrowserConfig, create_browser


async def main():
    """Scan example.com and list violations."""
    async with create_browser(BrowserConfig(headless=True)) as browser:
        page = browser.current_page
        await page.goto("https://example.com")

        results = await (
            AxeBuilder(page)
            .with_tags(["wcag2a", "wcag2aa"])
            .disable_frame("#ads")  # Never inject into the ad frame
            .analyze()
        )

        print(f"Scanned {results.url}")
        for violation in results.violations:
            print(f"  {violation['id']}: {len(violation['nodes'])} node(s)")


if __name__ == "__main__":
    asyncio.run(main())
