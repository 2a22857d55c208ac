"""
Session Manager

Detects when the banking interface is showing its login page and pauses
until the user has authenticated manually in the visible browser.
"""

import asyncio
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from ..tui import AgentConsole, get_console, print_result


@dataclass
class SessionConfig:
    """
    Login detection configuration.
    """

    # Enable login page detection
    detect_login: bool = True

    # Login path segments, compared without extension (/Logon.do -> "logon")
    login_patterns: tuple[str, ...] = (
        "login",
        "log-in",
        "signin",
        "sign-in",
        "logon",
        "log-on",
    )

    # Login phrases looked for in the page title
    title_patterns: tuple[str, ...] = (
        "log in",
        "login",
        "log on",
        "logon",
        "sign in",
        "signin",
    )


def path_segments(url: str) -> list[str]:
    """
    Split a URL path into lowercase segments with extensions stripped.

    Query string and fragment are ignored, so a token parameter like
    ?authToken=... never counts as a login marker.
    """
    path = urlsplit(url).path.lower()
    return [re.sub(r"\.[a-z0-9]+$", "", segment) for segment in path.split("/") if segment]


class SessionManager:
    """
    Manages the manual login step before the statement flow runs.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        console: Optional[AgentConsole] = None,
    ):
        """
        Initialize session manager.

        Args:
            config: Session configuration
            console: Console used for the prompt
        """
        self.config = config or SessionConfig()
        self.console = console or get_console()

    def is_login_page(self, url: str, page_title: str = "") -> bool:
        """
        Check if URL or title looks like a login page.

        Args:
            url: Page URL
            page_title: Page title

        Returns:
            True if a path segment or the title matches a login pattern
        """
        if not self.config.detect_login:
            return False

        if any(segment in self.config.login_patterns for segment in path_segments(url)):
            return True

        title_lower = page_title.lower()
        return any(pattern in title_lower for pattern in self.config.title_patterns)

    async def wait_for_manual_login(self, url: str) -> bool:
        """
        Prompt the user to log in and wait for Enter.

        Args:
            url: Current page URL, shown in the prompt

        Returns:
            True once the user confirms, False if input was closed
        """
        self.console.print(
            f"[bold]Please log in manually:[/bold] {url}\n"
            "Navigate to the page showing the Account Statement link, "
            "then press Enter to continue."
        )
        try:
            # Console input blocks; keep the event loop free for the browser
            await asyncio.to_thread(self.console.input, "[dim]Press Enter when ready...[/dim] ")
        except EOFError:
            print_result("Login prompt closed", success=False, title="[LOGIN CANCELLED]")
            return False

        print_result("Continuing with the logged in session", success=True, title="[LOGIN COMPLETE]")
        return True


def create_session_manager(
    config: Optional[SessionConfig] = None,
    console: Optional[AgentConsole] = None,
) -> SessionManager:
    """
    Factory function to create a session manager.

    Args:
        config: Session configuration
        console: Console used for the prompt

    Returns:
        Configured SessionManager instance
    """
    return SessionManager(config=config, console=console)
