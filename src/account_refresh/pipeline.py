"""
Account Statement Pipeline

Expresses the statement refresh as a declarative list of stages, each a
predicate to wait for and an action to run on the match, and runs them
strictly in order against one frame snapshot.

Stages:
1. Click the "Account Statement" link
2. Click the "View Account Statement" submit button
3. Scroll the data view (the frame holding <layer id="DateTime">)

A stage that times out stops the run; later stages never execute and
nothing is rolled back.
"""

import asyncio
import logging
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence

from playwright.async_api import Error as PlaywrightError, Frame, Page

from .config import PipelineConfig
from .errors import AccessDeniedError, NotFoundError, WaitCancelledError
from .frames import enumerate_frames, read_access
from .models import PipelineReport, StageReport, WaitOutcome
from .predicates import ElementPredicate, anchor_with_text, element_with_id, submit_input_named
from .tui import print_action, print_error, print_result, get_console
from .waiter import find

logger = logging.getLogger(__name__)

StageAction = Callable[[WaitOutcome], Awaitable[None]]


@dataclass
class Stage:
    """
    One "wait, then act" step.

    Attributes:
        name: Stage name for logs and reports
        predicate: Element to wait for
        action: Coroutine run with the WaitOutcome once found
        timeout_ms: Wait timeout; None means poll without limit
    """

    name: str
    predicate: ElementPredicate
    action: StageAction
    timeout_ms: Optional[int]


async def click_element(outcome: WaitOutcome) -> None:
    """Click the matched element the way the page's own script would."""
    # DOM click, no actionability checks
    await outcome.element.evaluate("el => el.click()")


def scroll_body_to(offset: int) -> StageAction:
    """
    Build an action that sets the matched frame's body scrollTop.

    Args:
        offset: Vertical scroll offset in pixels
    """

    async def scroll_body(outcome: WaitOutcome) -> None:
        frame = await read_access(outcome.frame)
        position = await frame.evaluate(
            """(offset) => {
                document.body.scrollTop = offset;
                return document.body.scrollTop;
            }""",
            offset,
        )
        logger.debug(f"Body scrollTop is now {position} (requested {offset})")

    return scroll_body


def build_statement_stages(config: PipelineConfig) -> list[Stage]:
    """
    Build the account statement stages from configuration.

    Args:
        config: Pipeline configuration with targets and timeouts

    Returns:
        Ordered list of stages
    """
    return [
        Stage(
            name="Account Statement link",
            predicate=anchor_with_text(config.link_text),
            action=click_element,
            timeout_ms=config.link_timeout_ms,
        ),
        Stage(
            name="View Account Statement button",
            predicate=submit_input_named(config.view_button_name),
            action=click_element,
            timeout_ms=config.view_button_timeout_ms,
        ),
        Stage(
            name="Statement data view",
            predicate=element_with_id("layer", config.data_layer_id),
            action=scroll_body_to(config.scroll_offset),
            timeout_ms=config.data_view_timeout_ms,
        ),
    ]


async def run_stages(
    frames: Sequence[Frame],
    stages: Sequence[Stage],
    *,
    poll_interval_ms: int,
    cancel: Optional[asyncio.Event] = None,
    show_progress: bool = True,
) -> PipelineReport:
    """
    Run stages in order against a fixed frame list.

    Args:
        frames: Frame snapshot shared by every stage
        stages: Stages to run
        poll_interval_ms: Poll interval for every wait
        cancel: Optional event aborting the current wait
        show_progress: Print console panels and a spinner while waiting

    Returns:
        PipelineReport; failed_stage names the stage that stopped the run
    """
    report = PipelineReport(frame_count=len(frames))
    console = get_console()

    for stage in stages:
        logger.info(f"Waiting for {stage.predicate.description}...")
        if show_progress:
            progress = console.status(f"Waiting for {stage.predicate.description}...")
        else:
            progress = nullcontext()

        try:
            with progress:
                outcome = await find(
                    frames,
                    stage.predicate,
                    timeout_ms=stage.timeout_ms,
                    poll_interval_ms=poll_interval_ms,
                    cancel=cancel,
                )

            if show_progress:
                print_action(
                    stage.name,
                    params={
                        "frame": outcome.frame_context.label,
                        "src": outcome.frame_context.src,
                        "waited": f"{outcome.elapsed_ms}ms",
                    },
                )
            await stage.action(outcome)

        except (NotFoundError, WaitCancelledError, AccessDeniedError, PlaywrightError) as e:
            logger.error(f"{stage.name} failed: {e}")
            if show_progress:
                print_error(str(e), error_type=type(e).__name__)
            report.stages.append(StageReport(name=stage.name, success=False, error=str(e)))
            report.failed_stage = stage.name
            return report

        logger.info(f"{stage.name} done")
        report.stages.append(
            StageReport(
                name=stage.name,
                success=True,
                frame_context=outcome.frame_context,
                elapsed_ms=outcome.elapsed_ms,
            )
        )

    if show_progress:
        print_result(f"All {len(stages)} stage(s) completed", success=True)
    return report


async def refresh_account_statement(
    page: Page,
    config: Optional[PipelineConfig] = None,
    *,
    cancel: Optional[asyncio.Event] = None,
    show_progress: bool = True,
) -> PipelineReport:
    """
    Run the account statement flow on an already logged-in page.

    Frames are enumerated once here and reused by every stage.

    Args:
        page: Playwright Page showing the banking interface
        config: Pipeline configuration (uses env if None)
        cancel: Optional event aborting the current wait
        show_progress: Print console panels while running

    Returns:
        PipelineReport for the run
    """
    config = config or PipelineConfig.from_env()
    frames = enumerate_frames(page)
    return await run_stages(
        frames,
        build_statement_stages(config),
        poll_interval_ms=config.poll_interval_ms,
        cancel=cancel,
        show_progress=show_progress,
    )
