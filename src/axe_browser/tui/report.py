"""
Scan report display.

Summarizes AxeResults in the terminal: counts per outcome and a table of
violations with their impact and affected node count.
"""

from typing import Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models import AxeResults
from .console import ReportConsole, get_console

IMPACT_STYLES = {
    "critical": "bold red",
    "serious": "red",
    "moderate": "yellow",
    "minor": "dim",
}


def build_violation_table(results: AxeResults) -> Table:
    """Build a table with one row per violated rule."""
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Rule")
    table.add_column("Impact")
    table.add_column("Nodes", justify="right")
    table.add_column("Description")

    for violation in results.violations:
        impact = violation.get("impact") or "unknown"
        table.add_row(
            violation.get("id", "?"),
            Text(impact, style=IMPACT_STYLES.get(impact, "")),
            str(len(violation.get("nodes", []))),
            violation.get("help") or violation.get("description", ""),
        )
    return table


def print_report(results: AxeResults, *, console: Optional[ReportConsole] = None) -> None:
    """
    Print a summary panel and, when present, the violation table.

    Args:
        results: Merged scan results
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    summary = Text()
    if results.url:
        summary.append(f"{results.url}\n", style="label")
    summary.append(f"{len(results.violations)} violation(s)", style="violation")
    summary.append("  ")
    summary.append(f"{len(results.passes)} pass(es)", style="pass")
    summary.append(f"  {len(results.incomplete)} incomplete")
    summary.append(f"  {len(results.inapplicable)} inapplicable")

    console.print(
        Panel(
            summary,
            title=console.title("[AXE]"),
            title_align="left",
            border_style=console.config.color_summary,
            padding=(0, 1),
        )
    )

    if results.violations:
        console.print(build_violation_table(results))


def print_error(
    error_message: str,
    *,
    error_type: Optional[str] = None,
    console: Optional[ReportConsole] = None,
) -> None:
    """
    Print an error panel.

    Args:
        error_message: The error message
        error_type: Type/category of error
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    content = Text()
    content.append("Error", style="bold red")
    if error_type:
        content.append(f" ({error_type})", style="dim red")
    content.append("\n\n")
    content.append(error_message)

    console.print(
        Panel(
            content,
            title=console.title("[AXE]"),
            title_align="left",
            border_style="red",
            padding=(0, 1),
        )
    )
