"""
Frame Enumeration

Snapshots the frames of a page and describes them for logging and reports.

Playwright's page.frames already flattens nested frames in document order
(main frame first), so a single snapshot covers every browsing context the
statement flow can render into. The snapshot is taken once per run and is
never re-enumerated.
"""

import logging
from typing import Sequence

from playwright.async_api import Error as PlaywrightError, Frame, Page

from .errors import AccessDeniedError
from .models import FrameContext

logger = logging.getLogger(__name__)


def enumerate_frames(page: Page) -> list[Frame]:
    """
    Take a snapshot of all frames on the page.

    Args:
        page: Playwright Page instance

    Returns:
        List of frames, main frame first
    """
    frames = list(page.frames)
    logger.info(f"Found {len(frames)} frames")
    for index, frame in enumerate(frames):
        logger.debug(f"Frame {describe_frame(frame, index, frames).label}: {frame.url or 'about:blank'}")
    return frames


def describe_frame(frame: Frame, index: int, frames: Sequence[Frame]) -> FrameContext:
    """
    Build FrameContext metadata for a frame in an enumerated list.

    Args:
        frame: Playwright Frame instance
        index: Position of frame in frames
        frames: The enumerated frame list

    Returns:
        FrameContext with name, src and parent index
    """
    parent_index = None
    parent = frame.parent_frame
    if parent is not None:
        try:
            parent_index = list(frames).index(parent)
        except ValueError:
            # Parent was not part of the snapshot
            parent_index = None

    return FrameContext(
        index=index,
        name=frame.name or None,
        src=frame.url or None,
        parent_index=parent_index,
    )


def frame_label(frame: Frame) -> str:
    """Best-effort label for a frame outside an enumerated list."""
    return frame.name or frame.url or "unnamed"


def check_accessible(frame: Frame) -> bool:
    """
    Capability check: can this frame's document be read right now?

    Only checks cheap local state. A frame can still turn out to be
    unreadable when queried (e.g. mid-navigation); probes handle that.
    """
    return not frame.is_detached()


async def read_access(frame: Frame) -> Frame:
    """
    Require that a frame's document can be evaluated.

    Args:
        frame: Playwright Frame instance

    Returns:
        The same frame, for chaining

    Raises:
        AccessDeniedError: If the frame is detached or refuses evaluation
    """
    if not check_accessible(frame):
        raise AccessDeniedError(frame_label(frame), "frame is detached")
    try:
        await frame.evaluate("() => document.readyState")
    except PlaywrightError as e:
        raise AccessDeniedError(frame_label(frame), str(e)) from e
    return frame
