"""
Rich TUI Interface Module

Provides terminal output for the statement refresher.
Uses the Rich library for formatted, colorful output.

Components:
- AgentConsole: Console wrapper carrying colors and timestamps
- TUIConfig: Configuration for colors and display options
- ACTION/RESULT block display functions
"""

from account_refresh.tui.console import (
    AgentConsole,
    TUIConfig,
    create_console,
    get_console,
)
from account_refresh.tui.action import (
    format_action_params,
    print_action,
)
from account_refresh.tui.result import (
    print_error,
    print_result,
    print_stage_summary,
)

__all__ = [
    # Console infrastructure
    "AgentConsole",
    "TUIConfig",
    "create_console",
    "get_console",
    # Action block functions
    "format_action_params",
    "print_action",
    # Result block functions
    "print_error",
    "print_result",
    "print_stage_summary",
]
