"""
RESULT block display for stage outcomes.
"""

from typing import Any, Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .console import AgentConsole, get_console


def print_result(
    content: str,
    *,
    success: bool = True,
    title: Optional[str] = None,
    console: Optional[AgentConsole] = None,
) -> None:
    """
    Print a RESULT block displaying an outcome.

    Args:
        content: The result content to display
        success: Whether the outcome was successful
        title: Custom title (overrides default "[RESULT]")
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    text = Text()
    status_icon = "✓" if success else "✗"
    status_style = "green" if success else "red"
    text.append(f"{status_icon} ", style=f"bold {status_style}")
    text.append(content)

    panel = Panel(
        text,
        title=console.title(title or "[RESULT]"),
        title_align="left",
        border_style=console.config.color_result,
        padding=(0, 1),
    )
    console.console.print(panel)


def print_error(
    error_message: str,
    *,
    error_type: Optional[str] = None,
    console: Optional[AgentConsole] = None,
) -> None:
    """
    Print an error result block.

    Args:
        error_message: The error message
        error_type: Exception class name, shown next to the heading
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    content = Text()
    content.append("❌ Error", style="bold red")
    if error_type:
        content.append(f" ({error_type})", style="dim red")
    content.append("\n\n")
    content.append(error_message)

    panel = Panel(
        content,
        title=console.title("[RESULT]"),
        title_align="left",
        border_style="red",
        padding=(0, 1),
    )
    console.console.print(panel)


def print_stage_summary(
    summary: dict[str, Any],
    *,
    title: Optional[str] = None,
    console: Optional[AgentConsole] = None,
) -> None:
    """
    Print a table of stage outcomes from PipelineReport.to_summary().

    Args:
        summary: Summary dict with "frames", "stages" and "completed"
        title: Custom title
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Stage")
    table.add_column("Status")
    table.add_column("Frame", style="dim")
    table.add_column("Waited", justify="right")

    for stage in summary.get("stages", []):
        status = "[green]ok[/green]" if stage["success"] else "[red]failed[/red]"
        table.add_row(
            stage["name"],
            status,
            stage.get("frame") or "-",
            f"{stage.get('elapsed_ms', 0)}ms",
        )

    border = console.config.color_result if summary.get("completed") else "red"
    panel = Panel(
        table,
        title=console.title(title or f"[RESULT] {summary.get('frames', 0)} frame(s)"),
        title_align="left",
        border_style=border,
        padding=(0, 1),
    )
    console.console.print(panel)
