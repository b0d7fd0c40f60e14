"""
Configuration and Logging Setup

Provides centralized configuration and logging for axe-browser.
Reads settings from environment variables (and a `.env` file, if present).

Usage:
    import logging
    from axe_browser.config import AxeConfig, configure_logging

    # Configure at application startup
    configure_logging()

    # Scan settings
    config = AxeConfig.from_env()

    # Module loggers
    logger = logging.getLogger(__name__)
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .engine import DEFAULT_BRANDING, DEFAULT_CHUNK_SIZE

# Load environment variables
load_dotenv()

# Default configuration
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_AXE_SOURCE_PATH = "node_modules/axe-core/axe.min.js"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s: %(message)s"

# Valid log levels
VALID_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class AxeConfig:
    """
    Scan configuration.

    Reads from environment variables with sensible defaults.
    """

    # Where to read axe-core from when no source is passed explicitly
    axe_source_path: Path = field(default_factory=lambda: Path(DEFAULT_AXE_SOURCE_PATH))

    # Start builders in legacy (single axe.run) mode
    legacy_mode: bool = False

    # Application name reported in results
    branding: str = DEFAULT_BRANDING

    # Maximum characters per partial-results transfer when finishing
    finish_chunk_size: int = DEFAULT_CHUNK_SIZE

    @classmethod
    def from_env(cls) -> "AxeConfig":
        """
        Create AxeConfig from environment variables.

        Environment variables:
            AXE_SOURCE_PATH: path to axe.min.js (default: node_modules/axe-core/axe.min.js)
            AXE_LEGACY_MODE: true/false (default: false)
            AXE_BRANDING: application name (default: axe-browser)
            AXE_FINISH_CHUNK_SIZE: int (default: 60000000)
        """
        return cls(
            axe_source_path=Path(os.getenv("AXE_SOURCE_PATH", DEFAULT_AXE_SOURCE_PATH)),
            legacy_mode=_env_flag("AXE_LEGACY_MODE", "false"),
            branding=os.getenv("AXE_BRANDING", DEFAULT_BRANDING),
            finish_chunk_size=int(os.getenv("AXE_FINISH_CHUNK_SIZE", str(DEFAULT_CHUNK_SIZE))),
        )


def get_log_level() -> int:
    """
    Get the log level from LOG_LEVEL environment variable.

    Returns:
        Logging level constant (e.g., logging.INFO)

    Supported values:
        DEBUG, INFO, WARNING, ERROR, CRITICAL
    """
    level_str = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    if level_str not in VALID_LEVELS:
        # Warn about invalid level and use default
        print(
            f"Warning: Invalid LOG_LEVEL '{level_str}'. "
            f"Valid values: {', '.join(VALID_LEVELS.keys())}. "
            f"Using {DEFAULT_LOG_LEVEL}.",
            file=sys.stderr,
        )
        return VALID_LEVELS[DEFAULT_LOG_LEVEL]

    return VALID_LEVELS[level_str]


def configure_logging(
    level: Optional[int] = None,
    verbose: bool = False,
) -> None:
    """
    Configure logging for axe-browser.

    Should be called once at application startup.

    Args:
        level: Override log level (default: from LOG_LEVEL env var)
        verbose: Use detailed format with timestamps (default: simple format)
    """
    if level is None:
        level = get_log_level()

    log_format = LOG_FORMAT if verbose else LOG_FORMAT_SIMPLE

    logging.basicConfig(
        level=level,
        format=log_format,
        stream=sys.stderr,
        force=True,  # Override any existing configuration
    )

    logging.getLogger("axe_browser").setLevel(level)

    # Quiet noisy third-party loggers in non-debug mode
    if level > logging.DEBUG:
        logging.getLogger("playwright").setLevel(logging.WARNING)
        logging.getLogger("asyncio").setLevel(logging.WARNING)

