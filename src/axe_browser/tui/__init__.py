"""
Rich TUI Interface Module

Terminal output for scan results, built on the Rich library.
"""

from axe_browser.tui.console import (
    ReportConsole,
    TUIConfig,
    get_console,
)
from axe_browser.tui.report import (
    build_violation_table,
    print_error,
    print_report,
)

__all__ = [
    "ReportConsole",
    "TUIConfig",
    "get_console",
    "build_violation_table",
    "print_error",
    "print_report",
]
