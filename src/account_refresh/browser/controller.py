"""
Browser Controller

Launches the Playwright browser the statement flow runs in and tears it
down afterwards. With session persistence on, the profile directory keeps
the bank login between runs.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from playwright.async_api import BrowserContext, Page, Playwright, async_playwright

load_dotenv()

logger = logging.getLogger(__name__)

BrowserType = Literal["chromium", "firefox", "webkit"]

# Accepted BROWSER_TYPE spellings
BROWSER_ALIASES: dict[str, BrowserType] = {
    "chrome": "chromium",
    "chromium": "chromium",
    "firefox": "firefox",
    "webkit": "webkit",
    "safari": "webkit",
}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class BrowserConfig:
    """
    Browser launch settings.

    Timeouts are Playwright defaults for the context, in milliseconds.
    """

    browser_type: BrowserType = "chromium"
    headless: bool = False
    viewport_width: int = 1280
    viewport_height: int = 720
    slow_mo: int = 0
    sessions_dir: Path = field(default_factory=lambda: Path(".browser-sessions"))
    persist_session: bool = True
    page_load_timeout: int = 30000
    navigation_timeout: int = 30000

    @classmethod
    def from_env(cls) -> "BrowserConfig":
        """
        Create BrowserConfig from environment variables.

        Environment variables:
            BROWSER_TYPE: chrome/chromium, firefox, webkit/safari (default: chromium)
            BROWSER_HEADLESS, SESSION_PERSIST: true/false
            BROWSER_VIEWPORT_WIDTH, BROWSER_VIEWPORT_HEIGHT, BROWSER_SLOW_MO: int
            SESSIONS_DIR: path (default: .browser-sessions)
            PAGE_LOAD_TIMEOUT, NAVIGATION_TIMEOUT: int in ms (default: 30000)

        Raises:
            ValueError: If a numeric variable is not an integer
        """
        return cls(
            browser_type=BROWSER_ALIASES.get(os.getenv("BROWSER_TYPE", "chromium").lower(), "chromium"),
            headless=_env_flag("BROWSER_HEADLESS", "false"),
            viewport_width=int(os.getenv("BROWSER_VIEWPORT_WIDTH", "1280")),
            viewport_height=int(os.getenv("BROWSER_VIEWPORT_HEIGHT", "720")),
            slow_mo=int(os.getenv("BROWSER_SLOW_MO", "0")),
            sessions_dir=Path(os.getenv("SESSIONS_DIR", ".browser-sessions")),
            persist_session=_env_flag("SESSION_PERSIST", "true"),
            page_load_timeout=int(os.getenv("PAGE_LOAD_TIMEOUT", "30000")),
            navigation_timeout=int(os.getenv("NAVIGATION_TIMEOUT", "30000")),
        )


class BrowserController:
    """
    Async context manager owning one browser context and its page.

    Usage:
        >>> async with BrowserController(config) as browser:
        ...     await browser.current_page.goto("https://bank.example.com")
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        self.config = config or BrowserConfig.from_env()
        self._playwright: Optional[Playwright] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    @property
    def current_page(self) -> Optional[Page]:
        """The page the flow runs in (None before launch)."""
        return self._page

    async def _open_context(self) -> BrowserContext:
        launcher = getattr(self._playwright, self.config.browser_type)
        options = {
            "headless": self.config.headless,
            "slow_mo": self.config.slow_mo,
            "viewport": {
                "width": self.config.viewport_width,
                "height": self.config.viewport_height,
            },
        }

        if self.config.persist_session:
            profile = self.config.sessions_dir / self.config.browser_type
            profile.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Launching {self.config.browser_type} with profile {profile}")
            return await launcher.launch_persistent_context(str(profile), **options)

        logger.debug(f"Launching {self.config.browser_type} without persistence")
        viewport = options.pop("viewport")
        browser = await launcher.launch(**options)
        return await browser.new_context(viewport=viewport)

    async def __aenter__(self) -> "BrowserController":
        self._playwright = await async_playwright().start()
        try:
            self._context = await self._open_context()
            self._context.set_default_timeout(self.config.page_load_timeout)
            self._context.set_default_navigation_timeout(self.config.navigation_timeout)
            # A persistent profile reopens with a blank page already
            pages = self._context.pages
            self._page = pages[0] if pages else await self._context.new_page()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the context, its browser and Playwright."""
        self._page = None

        if self._context is not None:
            browser = self._context.browser
            await self._context.close()
            self._context = None
            # Non-persistent contexts own a separately launched browser
            if browser is not None:
                await browser.close()

        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
