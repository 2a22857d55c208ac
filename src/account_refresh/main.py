"""
Account Refresh CLI Entry Point

Opens the banking interface in a Playwright browser and runs the account
statement flow: click "Account Statement", click "View Account Statement",
then scroll the statement data view.

Usage:
    python -m account_refresh.main --start-url https://bank.example.com
    python -m account_refresh.main -u https://bank.example.com --wait-for-login
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from typing import Optional

from account_refresh.browser import BrowserConfig, BrowserController, create_session_manager
from account_refresh.config import PipelineConfig, configure_logging, parse_timeout
from account_refresh.pipeline import refresh_account_statement
from account_refresh.tui import get_console, print_error, print_stage_summary

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Open the account statement view in a multi-frame banking interface",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m account_refresh.main -u https://bank.example.com --wait-for-login
    python -m account_refresh.main -u https://bank.example.com --button-timeout none
    python -m account_refresh.main --headless --poll-interval 1000 --verbose
        """,
    )

    parser.add_argument(
        "--start-url", "-u",
        type=str,
        default=None,
        help="URL to open before running (default: START_URL env var)",
    )

    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run browser in headless mode",
    )

    parser.add_argument(
        "--wait-for-login",
        action="store_true",
        help="Pause for manual login after opening the start URL",
    )

    parser.add_argument(
        "--poll-interval",
        type=int,
        default=None,
        help="Delay between frame polls in ms (default: 500)",
    )

    parser.add_argument(
        "--link-timeout",
        type=str,
        default=None,
        help='Timeout for the Account Statement link in ms, or "none" (default: 10000)',
    )

    parser.add_argument(
        "--button-timeout",
        type=str,
        default=None,
        help='Timeout for the View button in ms, or "none" (default: 60000)',
    )

    parser.add_argument(
        "--data-timeout",
        type=str,
        default=None,
        help='Timeout for the statement data view in ms, or "none" (default: 60000)',
    )

    parser.add_argument(
        "--unbounded",
        action="store_true",
        help="Wait without limit for the View button and the data view",
    )

    parser.add_argument(
        "--scroll-offset",
        type=int,
        default=None,
        help="Vertical scroll offset for the data view in px (default: 1000)",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Detailed log format with timestamps",
    )

    parser.add_argument(
        "--dev",
        action="store_true",
        help="Development mode with debug output",
    )

    return parser.parse_args(argv)


def build_pipeline_config(args: argparse.Namespace, base: Optional[PipelineConfig] = None) -> PipelineConfig:
    """
    Apply command line overrides on top of the environment configuration.

    Args:
        args: Parsed arguments
        base: Starting configuration (uses env if None)

    Returns:
        PipelineConfig with overrides applied
    """
    config = base or PipelineConfig.from_env()
    overrides = {}

    if args.start_url:
        overrides["start_url"] = args.start_url
    if args.poll_interval is not None:
        overrides["poll_interval_ms"] = args.poll_interval
    if args.scroll_offset is not None:
        overrides["scroll_offset"] = args.scroll_offset

    if args.link_timeout is not None:
        overrides["link_timeout_ms"] = parse_timeout(args.link_timeout, config.link_timeout_ms)
    if args.unbounded:
        overrides["view_button_timeout_ms"] = None
        overrides["data_view_timeout_ms"] = None
    if args.button_timeout is not None:
        overrides["view_button_timeout_ms"] = parse_timeout(
            args.button_timeout, config.view_button_timeout_ms
        )
    if args.data_timeout is not None:
        overrides["data_view_timeout_ms"] = parse_timeout(
            args.data_timeout, config.data_view_timeout_ms
        )

    return replace(config, **overrides)


async def run(
    pipeline_config: PipelineConfig,
    browser_config: BrowserConfig,
    wait_for_login: bool = False,
) -> bool:
    """
    Launch the browser and run the statement flow.

    Args:
        pipeline_config: Pipeline configuration
        browser_config: Browser configuration
        wait_for_login: Always pause for manual login after navigating

    Returns:
        True if every stage completed, False otherwise
    """
    console = get_console()
    session = create_session_manager(console=console)

    async with BrowserController(browser_config) as browser:
        page = browser.current_page

        if pipeline_config.start_url:
            console.print(f"[dim]Navigating to {pipeline_config.start_url}...[/dim]")
            await page.goto(pipeline_config.start_url)

        # A headless browser cannot be logged into by hand
        detect = not browser_config.headless
        if wait_for_login or (detect and session.is_login_page(page.url, await page.title())):
            if not await session.wait_for_manual_login(page.url):
                return False

        report = await refresh_account_statement(page, pipeline_config)
        print_stage_summary(report.to_summary())

        if report.completed and not browser_config.headless:
            # Leave the statement on screen until the user is done
            await asyncio.to_thread(console.input, "[dim]Press Enter to close the browser...[/dim] ")

        return report.completed


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.dev:
        configure_logging(level=logging.DEBUG, verbose=True)
    else:
        configure_logging(verbose=args.verbose)

    try:
        pipeline_config = build_pipeline_config(args)
        browser_config = BrowserConfig.from_env()
    except ValueError as e:
        print_error(str(e), error_type="ConfigError")
        return 2

    if args.headless:
        browser_config.headless = True

    try:
        success = asyncio.run(run(pipeline_config, browser_config, args.wait_for_login))
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Interrupted by user[/yellow]")
        return 1
    except Exception as e:
        logger.debug("Run failed", exc_info=True)
        print_error(str(e), error_type=type(e).__name__)
        return 1

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
