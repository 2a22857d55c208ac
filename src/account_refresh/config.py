"""
Configuration and Logging Setup

Provides centralized configuration and logging for the statement refresher.
Reads LOG_LEVEL and the pipeline tunables from environment variables.

Usage:
    from account_refresh.config import configure_logging, PipelineConfig

    # Configure at application startup
    configure_logging()
    config = PipelineConfig.from_env()
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Default configuration
DEFAULT_LOG_LEVEL = "INFO"
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

# Values that turn a stage timeout into unbounded polling
UNBOUNDED_VALUES = ("none", "unbounded", "inf", "infinite")


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
    Configure logging for the statement refresher.

    Should be called once at application startup.

    Args:
        level: Override log level (default: from LOG_LEVEL env var)
        verbose: Use detailed format with timestamps (default: simple format)

    Environment Variables:
        LOG_LEVEL: Set to DEBUG, INFO, WARNING, ERROR, or CRITICAL
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

    logging.getLogger("account_refresh").setLevel(level)

    # Quiet noisy third-party loggers in non-debug mode
    if level > logging.DEBUG:
        logging.getLogger("playwright").setLevel(logging.WARNING)
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def parse_timeout(value: Optional[str], default: Optional[int]) -> Optional[int]:
    """
    Parse a timeout setting in milliseconds.

    Args:
        value: Raw value (env var or CLI string), None if unset
        default: Value used when unset or empty

    Returns:
        Timeout in ms, or None for unbounded polling

    Raises:
        ValueError: If the value is neither an integer nor an unbounded keyword
    """
    if value is None or not value.strip():
        return default

    value = value.strip().lower()
    if value in UNBOUNDED_VALUES:
        return None

    timeout = int(value)
    if timeout < 0:
        raise ValueError(f"Timeout must be >= 0, got {timeout}")
    return timeout


@dataclass
class PipelineConfig:
    """
    Tunables for the account statement pipeline.

    Timeouts are in milliseconds. None means the stage polls until the
    element shows up or the run is cancelled.
    """

    # Single poll interval shared by every stage
    poll_interval_ms: int = 500

    # Stage timeouts
    link_timeout_ms: Optional[int] = 10000
    view_button_timeout_ms: Optional[int] = 60000
    data_view_timeout_ms: Optional[int] = 60000

    # Vertical scroll offset applied to the data view body
    scroll_offset: int = 1000

    # Page to open before running (optional)
    start_url: Optional[str] = None

    # Site-specific targets
    link_text: str = "Account Statement"
    view_button_name: str = "value(submit1)"
    data_layer_id: str = "DateTime"

    def __post_init__(self) -> None:
        """
        Reject values the waiter or the scroll action cannot use.

        Raises:
            ValueError: On a non-positive poll interval, a negative timeout
                or a negative scroll offset
        """
        if self.poll_interval_ms <= 0:
            raise ValueError(f"Poll interval must be > 0, got {self.poll_interval_ms}")
        if self.scroll_offset < 0:
            raise ValueError(f"Scroll offset must be >= 0, got {self.scroll_offset}")
        for name in ("link_timeout_ms", "view_button_timeout_ms", "data_view_timeout_ms"):
            timeout = getattr(self, name)
            if timeout is not None and timeout < 0:
                raise ValueError(f"{name} must be >= 0, got {timeout}")

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """
        Create PipelineConfig from environment variables.

        Environment variables:
            POLL_INTERVAL_MS: int (default: 500)
            LINK_TIMEOUT_MS: int or "none" (default: 10000)
            VIEW_BUTTON_TIMEOUT_MS: int or "none" (default: 60000)
            DATA_VIEW_TIMEOUT_MS: int or "none" (default: 60000)
            SCROLL_OFFSET: int (default: 1000)
            START_URL: url (default: unset)
        """
        defaults = cls()
        return cls(
            poll_interval_ms=int(os.getenv("POLL_INTERVAL_MS", str(defaults.poll_interval_ms))),
            link_timeout_ms=parse_timeout(
                os.getenv("LINK_TIMEOUT_MS"), defaults.link_timeout_ms
            ),
            view_button_timeout_ms=parse_timeout(
                os.getenv("VIEW_BUTTON_TIMEOUT_MS"), defaults.view_button_timeout_ms
            ),
            data_view_timeout_ms=parse_timeout(
                os.getenv("DATA_VIEW_TIMEOUT_MS"), defaults.data_view_timeout_ms
            ),
            scroll_offset=int(os.getenv("SCROLL_OFFSET", str(defaults.scroll_offset))),
            start_url=os.getenv("START_URL") or None,
        )
