"""
Element Predicates

A predicate describes the element a stage is waiting for and knows how to
probe one frame for it. Probing is read-only and never raises for an
unreadable frame: it reports ProbeStatus.INACCESSIBLE instead, so the waiter
can skip that frame for the current poll.
"""

import logging
from typing import Optional

from playwright.async_api import Error as PlaywrightError, ElementHandle, Frame

from .frames import check_accessible, frame_label
from .models import ProbeResult

logger = logging.getLogger(__name__)


class ElementPredicate:
    """
    Base class for element predicates.

    Subclasses implement _query(), returning the matching element or None.
    """

    description: str = "element"

    async def probe(self, frame: Frame) -> ProbeResult:
        """
        Probe a frame once.

        Args:
            frame: Playwright Frame instance

        Returns:
            ProbeResult with MATCH, NO_MATCH or INACCESSIBLE status
        """
        if not check_accessible(frame):
            return ProbeResult.inaccessible("frame is detached")

        try:
            element = await self._query(frame)
        except PlaywrightError as e:
            logger.debug(f"Frame {frame_label(frame)} not readable while probing for {self.description}: {e}")
            return ProbeResult.inaccessible(str(e))

        if element is None:
            return ProbeResult.no_match()
        return ProbeResult.match(element)

    async def _query(self, frame: Frame) -> Optional[ElementHandle]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description!r})"


class SelectorPredicate(ElementPredicate):
    """Matches the first element for a CSS selector."""

    def __init__(self, selector: str, description: Optional[str] = None):
        self.selector = selector
        self.description = description or f"'{selector}'"

    async def _query(self, frame: Frame) -> Optional[ElementHandle]:
        return await frame.query_selector(self.selector)


class AnchorTextPredicate(ElementPredicate):
    """Matches the first <a> whose trimmed text content equals text exactly."""

    def __init__(self, text: str):
        self.text = text
        self.description = f"link '{text}'"

    async def _query(self, frame: Frame) -> Optional[ElementHandle]:
        anchors = await frame.query_selector_all("a")
        match = None
        try:
            for anchor in anchors:
                content = await anchor.text_content()
                if content is not None and content.strip() == self.text:
                    match = anchor
                    break
        finally:
            # Every poll creates fresh handles; release all but the match
            for anchor in anchors:
                if anchor is not match:
                    await _release(anchor)
        return match


async def _release(handle: ElementHandle) -> None:
    try:
        await handle.dispose()
    except PlaywrightError as e:
        # Handles die with their frame's execution context
        logger.debug(f"Could not dispose element handle: {e}")


def _quote(value: str) -> str:
    """Quote a value for use inside a CSS attribute selector."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def anchor_with_text(text: str) -> AnchorTextPredicate:
    """Predicate for a link whose trimmed text is exactly text."""
    return AnchorTextPredicate(text)


def submit_input_named(name: str) -> SelectorPredicate:
    """Predicate for <input type="submit"> with the given name attribute."""
    return SelectorPredicate(
        f'input[type="submit"][name={_quote(name)}]',
        description=f"submit button '{name}'",
    )


def element_with_id(tag: str, element_id: str) -> SelectorPredicate:
    """Predicate for a <tag> element with the given id."""
    return SelectorPredicate(
        f"{tag}[id={_quote(element_id)}]",
        description=f"<{tag} id=\"{element_id}\">",
    )
