#!/usr/bin/env python
"""
Callback Scan Example

Demonstrates the callback and result-object styles of analyze(): errors
are delivered instead of raised.

Usage:
    python examples/callback_scan.py https://example.com

Requirements:
    - axe-core available at AXE_SOURCE_PATH (npm install axe-core)
    - axe-browser installed: pip install -e .
"""

import asyncio
import sys

from axe_browser import AxeBuilder
from axe_browser.browser import create_browser


def report(error, results):
    if error:
        print(f"Scan failed: {error}")
        return
    print(f"{len(results.violations)} violation(s), {len(results.passes)} pass(es)")


async def main(url: str):
    async with create_browser() as browser:
        page = browser.current_page
        await page.goto(url)

        # Callback style
        await AxeBuilder(page).include("main").analyze(report)

        # Result-object style
        outcome = await AxeBuilder(page).set_legacy_mode().analyze_result()
        print(outcome)


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "https://example.com"))
