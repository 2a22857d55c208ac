"""
Rich console shared by the stage panels and the login prompt.

Colors and timestamps come from COLOR_ACTION, COLOR_RESULT and
SHOW_TIMESTAMPS.
"""

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from rich.console import Console


@dataclass
class TUIConfig:
    """Panel colors and whether titles carry a timestamp."""

    color_action: str = "green"
    color_result: str = "yellow"
    show_timestamps: bool = True

    @classmethod
    def from_env(cls) -> "TUIConfig":
        return cls(
            color_action=os.getenv("COLOR_ACTION", "green"),
            color_result=os.getenv("COLOR_RESULT", "yellow"),
            show_timestamps=os.getenv("SHOW_TIMESTAMPS", "true").lower() == "true",
        )


class AgentConsole:
    """
    Thin wrapper over a Rich Console carrying the TUI configuration.

    Panel helpers in action.py and result.py render through `console`
    and build their titles with `title()`.
    """

    def __init__(self, config: Optional[TUIConfig] = None, console: Optional[Console] = None):
        self.config = config or TUIConfig.from_env()
        self.console = console or Console()

    def title(self, label: str) -> str:
        """Prefix a panel title with HH:MM:SS when timestamps are on."""
        if not self.config.show_timestamps:
            return label
        return f"{datetime.now():%H:%M:%S} {label}"

    def print(self, *args, **kwargs) -> None:
        self.console.print(*args, **kwargs)

    def input(self, prompt: str = "") -> str:
        return self.console.input(prompt)

    def status(self, message: str):
        """Spinner shown while a stage waits."""
        return self.console.status(message)


_console: Optional[AgentConsole] = None


def get_console() -> AgentConsole:
    """Get or create the process-wide console."""
    global _console
    if _console is None:
        _console = AgentConsole()
    return _console


def create_console(
    config: Optional[TUIConfig] = None,
    console: Optional[Console] = None,
) -> AgentConsole:
    """
    Create a standalone console, e.g. one recording output in tests.

    Args:
        config: TUI configuration. If None, loads from environment.
        console: Underlying Rich console
    """
    return AgentConsole(config, console)
