"""
axe-browser CLI Entry Point

Scans a URL (and every frame on it) with axe-core and prints a summary.

Usage:
    axe-browser https://example.com
    axe-browser https://example.com --tags wcag2a,wcag2aa --exclude ".ads" --output results.json
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from axe_browser.browser import BrowserConfig, BrowserController
from axe_browser.builder import AxeBuilder
from axe_browser.client import PlaywrightClient, RemoteClient
from axe_browser.config import AxeConfig, configure_logging
from axe_browser.errors import AxeBrowserError
from axe_browser.tui import get_console, print_error, print_report

# Load environment variables
load_dotenv()

EXIT_CLEAN = 0
EXIT_VIOLATIONS = 1
EXIT_ERROR = 2


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run axe-core accessibility analysis across every frame of a page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    axe-browser https://example.com
    axe-browser https://example.com --include "#main" --disable-frame "#captcha"
    axe-browser https://example.com --rules color-contrast,label --legacy
        """,
    )

    parser.add_argument("url", help="URL to scan")

    parser.add_argument(
        "--include",
        action="append",
        default=[],
        metavar="SELECTOR",
        help="CSS selector to include (repeatable)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="SELECTOR",
        help="CSS selector to exclude (repeatable)",
    )
    parser.add_argument(
        "--disable-frame",
        action="append",
        default=[],
        metavar="SELECTOR",
        help="Do not inject axe-core into frames matching SELECTOR (repeatable)",
    )

    selection = parser.add_mutually_exclusive_group()
    selection.add_argument(
        "--tags",
        type=_split_csv,
        default=None,
        help="Comma-separated tags to run (e.g. wcag2a,wcag2aa)",
    )
    selection.add_argument(
        "--rules",
        type=_split_csv,
        default=None,
        help="Comma-separated rule ids to run",
    )

    parser.add_argument(
        "--disable-rules",
        type=_split_csv,
        default=None,
        help="Comma-separated rule ids to skip",
    )
    parser.add_argument(
        "--legacy",
        action="store_true",
        help="Use a single axe.run() (cross-origin frames are not tested)",
    )
    parser.add_argument(
        "--browser",
        choices=["chromium", "firefox", "webkit"],
        default=None,
        help="Browser to launch (default: BROWSER_TYPE or chromium)",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window",
    )
    parser.add_argument(
        "--axe-source",
        type=Path,
        default=None,
        help="Path to axe.min.js (default: AXE_SOURCE_PATH)",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Write the full results as JSON to this file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging with timestamps",
    )

    return parser.parse_args(argv)


def build_axe_builder(
    args: argparse.Namespace,
    client: RemoteClient,
    config: Optional[AxeConfig] = None,
) -> AxeBuilder:
    """Create an AxeBuilder configured from parsed arguments."""
    config = config or AxeConfig.from_env()
    if args.axe_source is not None:
        config.axe_source_path = args.axe_source

    builder = AxeBuilder(client, config=config)
    for selector in args.include:
        builder.include(selector)
    for selector in args.exclude:
        builder.exclude(selector)
    for selector in args.disable_frame:
        builder.disable_frame(selector)

    if args.tags:
        builder.with_tags(args.tags)
    if args.rules:
        builder.with_rules(args.rules)
    if args.disable_rules:
        builder.disable_rules(args.disable_rules)
    if args.legacy:
        builder.set_legacy_mode(True)

    return builder


async def run_scan(args: argparse.Namespace) -> int:
    """
    Launch a browser, scan the URL and report.

    Returns:
        Process exit code
    """
    console = get_console()

    browser_config = BrowserConfig.from_env()
    if args.browser:
        browser_config.browser_type = args.browser
    if args.headed:
        browser_config.headless = False

    try:
        async with BrowserController(browser_config) as browser:
            page = browser.current_page
            builder = build_axe_builder(args, PlaywrightClient(page))

            with console.status(f"Loading {args.url}..."):
                await page.goto(args.url)

            with console.status("Running axe-core..."):
                results = await builder.analyze()

    except AxeBrowserError as e:
        print_error(str(e), error_type=type(e).__name__)
        return EXIT_ERROR
    except Exception as e:
        print_error(str(e), error_type="ScanError")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return EXIT_ERROR

    print_report(results)

    if args.output:
        args.output.write_text(json.dumps(results.to_dict(), indent=2), encoding="utf-8")
        console.print(f"[dim]Results written to {args.output}[/dim]")

    return EXIT_VIOLATIONS if results.violations else EXIT_CLEAN


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        configure_logging(level=logging.DEBUG, verbose=True)
    else:
        configure_logging()

    return asyncio.run(run_scan(args))


if __name__ == "__main__":
    sys.exit(main())
