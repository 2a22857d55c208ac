"""
Frame-Scoped Element Waiter

Polls a fixed list of frames until a predicate matches in one of them.

Each poll probes the frames in input order; the first frame reporting a
match wins, so when two frames both contain the element the earlier one is
selected. Frames that cannot be read are skipped for that poll. The waiter
never mutates a frame; the caller acts on the returned element.
"""

import asyncio
import logging
from typing import Optional, Sequence

from playwright.async_api import Frame

from .errors import NotFoundError, WaitCancelledError
from .frames import describe_frame, frame_label
from .models import ProbeStatus, WaitOutcome
from .predicates import ElementPredicate

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_MS = 500


async def find(
    contexts: Sequence[Frame],
    predicate: ElementPredicate,
    *,
    timeout_ms: Optional[int],
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    cancel: Optional[asyncio.Event] = None,
) -> WaitOutcome:
    """
    Wait until predicate matches in one of the given frames.

    Args:
        contexts: Frames to search, in priority order. Copied at call start.
        predicate: Element predicate to probe each frame with
        timeout_ms: Maximum wait in milliseconds. Must be passed explicitly;
            None polls until a match is found or cancel is set.
        poll_interval_ms: Delay between polls in milliseconds
        cancel: Optional event that aborts the wait when set

    Returns:
        WaitOutcome with the selected frame and element

    Raises:
        NotFoundError: If timeout_ms elapses without a match
        WaitCancelledError: If cancel is set before a match

    Examples:
        >>> outcome = await find(page.frames, anchor_with_text("Account Statement"), timeout_ms=10000)
        >>> await outcome.element.click()
    """
    if poll_interval_ms <= 0:
        raise ValueError(f"poll_interval_ms must be > 0, got {poll_interval_ms}")
    if timeout_ms is not None and timeout_ms < 0:
        raise ValueError(f"timeout_ms must be >= 0, got {timeout_ms}")

    frames = list(contexts)
    loop = asyncio.get_running_loop()
    start_time = loop.time()
    polls = 0

    if timeout_ms is None:
        logger.warning(f"Waiting for {predicate.description} with no timeout")

    logger.debug(
        f"Waiting for {predicate.description} across {len(frames)} frame(s) "
        f"(timeout: {timeout_ms}ms, interval: {poll_interval_ms}ms)"
    )

    while True:
        if cancel is not None and cancel.is_set():
            raise WaitCancelledError(predicate.description)

        polls += 1
        for index, frame in enumerate(frames):
            result = await predicate.probe(frame)

            if result.status is ProbeStatus.INACCESSIBLE:
                logger.debug(f"Skipping frame {frame_label(frame)}: {result.reason}")
                continue

            if result.matched:
                elapsed_ms = int((loop.time() - start_time) * 1000)
                frame_context = describe_frame(frame, index, frames)
                logger.info(
                    f"Found {predicate.description} in frame {frame_context.label} "
                    f"after {polls} poll(s), {elapsed_ms}ms"
                )
                return WaitOutcome(
                    frame=frame,
                    element=result.element,
                    frame_context=frame_context,
                    predicate_description=predicate.description,
                    polls=polls,
                    elapsed_ms=elapsed_ms,
                )

        elapsed_ms = (loop.time() - start_time) * 1000
        if timeout_ms is None:
            delay_ms = poll_interval_ms
        else:
            remaining_ms = timeout_ms - elapsed_ms
            if remaining_ms <= 0:
                raise NotFoundError(
                    predicate.description,
                    timeout_ms=timeout_ms,
                    contexts_searched=len(frames),
                )
            delay_ms = min(poll_interval_ms, remaining_ms)

        if cancel is None:
            await asyncio.sleep(delay_ms / 1000)
        else:
            try:
                await asyncio.wait_for(cancel.wait(), timeout=delay_ms / 1000)
            except asyncio.TimeoutError:
                pass
