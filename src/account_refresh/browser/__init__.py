"""
Browser Module

Provides Playwright browser management and the manual login step.
"""

from .controller import BrowserController, BrowserConfig
from .session import SessionManager, SessionConfig, create_session_manager

__all__ = [
    "BrowserController",
    "BrowserConfig",
    "SessionManager",
    "SessionConfig",
    "create_session_manager",
]
