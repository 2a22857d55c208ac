"""
ACTION block display for stage actions.

Shows which frame a stage matched in before it clicks or scrolls.
"""

from typing import Any, Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .console import AgentConsole, get_console


def format_action_params(params: dict[str, Any]) -> Table:
    """
    Format action parameters as a Rich table.

    Args:
        params: Dictionary of parameter names to values

    Returns:
        Rich Table renderable
    """
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Param", style="bold")
    table.add_column("Value")

    for key, value in params.items():
        if value is None:
            continue
        # Truncate long values
        str_value = str(value)
        if len(str_value) > 100:
            str_value = str_value[:97] + "..."
        table.add_row(key, str_value)

    return table


def print_action(
    action_name: str,
    *,
    params: Optional[dict[str, Any]] = None,
    console: Optional[AgentConsole] = None,
) -> None:
    """
    Print an ACTION block for a stage.

    Args:
        action_name: Name of the stage being acted on
        params: Details to display (frame, src, wait time)
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    content = Text()
    content.append("⚡ ", style="bold")
    content.append(action_name, style=f"bold {console.config.color_action}")

    panel = Panel(
        content,
        title=console.title("[ACTION]"),
        title_align="left",
        border_style=console.config.color_action,
        padding=(0, 1),
    )
    console.console.print(panel)

    # Print params table separately if present (for cleaner layout)
    if params:
        console.console.print(format_action_params(params))
