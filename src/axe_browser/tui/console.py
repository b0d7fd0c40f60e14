"""
Rich TUI Console Setup

Provides the console used to print scan reports.
Configured via environment variables for customizable appearance.
"""

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.style import Style
from rich.theme import Theme


@dataclass
class TUIConfig:
    """
    TUI configuration loaded from environment variables.

    Attributes:
        color_summary: Border color for the summary panel
        color_violation: Color for violation counts and table borders
        color_pass: Color for passing counts
        show_timestamps: Whether to display timestamps in panel titles
    """

    color_summary: str = "cyan"
    color_violation: str = "red"
    color_pass: str = "green"
    show_timestamps: bool = True

    @classmethod
    def from_env(cls) -> "TUIConfig":
        """Load configuration from environment variables."""
        return cls(
            color_summary=os.getenv("COLOR_SUMMARY", "cyan"),
            color_violation=os.getenv("COLOR_VIOLATION", "red"),
            color_pass=os.getenv("COLOR_PASS", "green"),
            show_timestamps=os.getenv("SHOW_TIMESTAMPS", "true").lower() == "true",
        )


def create_theme(config: TUIConfig) -> Theme:
    """Create a Rich theme from TUI configuration."""
    return Theme(
        {
            "summary": Style(color=config.color_summary, bold=True),
            "violation": Style(color=config.color_violation, bold=True),
            "pass": Style(color=config.color_pass, bold=True),
            "timestamp": Style(dim=True),
            "label": Style(bold=True),
        }
    )


class ReportConsole:
    """Rich console wrapper with themed output and optional timestamps."""

    def __init__(self, config: Optional[TUIConfig] = None, console: Optional[Console] = None):
        """
        Initialize the report console.

        Args:
            config: TUI configuration. If None, loads from environment.
            console: Underlying Rich console (a themed one is created if None)
        """
        self.config = config or TUIConfig.from_env()
        self._theme = create_theme(self.config)
        self.console = console or Console(theme=self._theme)

    def get_timestamp(self) -> str:
        """Get formatted timestamp if enabled."""
        if self.config.show_timestamps:
            return datetime.now().strftime("%H:%M:%S")
        return ""

    def title(self, label: str) -> str:
        timestamp = self.get_timestamp()
        return f"{timestamp} {label}" if timestamp else label

    def print(self, *args, **kwargs) -> None:
        """Passthrough to underlying Rich console."""
        self.console.print(*args, **kwargs)

    def status(self, message: str):
        """Create a status context for progress indication."""
        return self.console.status(message)


# Global console instance
_console: Optional[ReportConsole] = None


def get_console() -> ReportConsole:
    """Get or create the global console instance."""
    global _console
    if _console is None:
        _console = ReportConsole()
    return _console
