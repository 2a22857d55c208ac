"""
Unit tests for element predicates and frame metadata.
"""

import pytest

from account_refresh.frames import describe_frame, enumerate_frames, read_access
from account_refresh.errors import AccessDeniedError
from account_refresh.models import ProbeStatus
from account_refresh.predicates import (
    SelectorPredicate,
    anchor_with_text,
    element_with_id,
    submit_input_named,
)

from fake_frames import FakeElement, FakeFrame, FakePage


class TestPredicateSelectors:
    """Selectors built for the statement targets."""

    def test_submit_input_selector(self):
        predicate = submit_input_named("value(submit1)")
        assert predicate.selector == 'input[type="submit"][name="value(submit1)"]'
        assert predicate.description == "submit button 'value(submit1)'"

    def test_element_with_id_selector(self):
        predicate = element_with_id("layer", "DateTime")
        assert predicate.selector == 'layer[id="DateTime"]'
        assert predicate.description == '<layer id="DateTime">'

    def test_quotes_are_escaped(self):
        predicate = submit_input_named('say "hi"')
        assert predicate.selector == 'input[type="submit"][name="say \\"hi\\""]'

    def test_custom_description(self):
        predicate = SelectorPredicate("#main", description="main panel")
        assert predicate.description == "main panel"
        assert "main panel" in repr(predicate)


class TestProbe:
    """Probe results for single frames."""

    @pytest.mark.asyncio
    async def test_anchor_match(self):
        link = FakeElement("\tAccount Statement  ")
        frame = FakeFrame(anchors=[FakeElement("Home"), link])

        result = await anchor_with_text("Account Statement").probe(frame)

        assert result.status is ProbeStatus.MATCH
        assert result.matched
        assert result.element is link

    @pytest.mark.asyncio
    async def test_anchor_handles_released_except_match(self):
        home, link, help_link = FakeElement("Home"), FakeElement("Account Statement"), FakeElement("Help")
        frame = FakeFrame(anchors=[home, link, help_link])

        result = await anchor_with_text("Account Statement").probe(frame)

        assert result.element is link
        assert not link.disposed
        assert home.disposed
        assert help_link.disposed

    @pytest.mark.asyncio
    async def test_anchor_handles_released_without_match(self):
        anchors = [FakeElement("Home"), FakeElement("Help")]

        result = await anchor_with_text("Account Statement").probe(FakeFrame(anchors=anchors))

        assert result.status is ProbeStatus.NO_MATCH
        assert all(anchor.disposed for anchor in anchors)

    @pytest.mark.asyncio
    async def test_anchor_with_empty_text_content(self):
        frame = FakeFrame(anchors=[FakeElement(None)])

        result = await anchor_with_text("Account Statement").probe(frame)

        assert result.status is ProbeStatus.NO_MATCH
        assert result.element is None

    @pytest.mark.asyncio
    async def test_selector_match(self):
        predicate = element_with_id("layer", "DateTime")
        layer = FakeElement(tag="layer")
        frame = FakeFrame(selectors={predicate.selector: layer})

        result = await predicate.probe(frame)

        assert result.matched
        assert result.element is layer

    @pytest.mark.asyncio
    async def test_playwright_error_is_inaccessible(self):
        result = await submit_input_named("value(submit1)").probe(FakeFrame(broken=True))

        assert result.status is ProbeStatus.INACCESSIBLE
        assert "Execution context was destroyed" in result.reason

    @pytest.mark.asyncio
    async def test_detached_frame_is_inaccessible(self):
        frame = FakeFrame(anchors=[FakeElement("Account Statement")])
        frame.detached = True

        result = await anchor_with_text("Account Statement").probe(frame)

        assert result.status is ProbeStatus.INACCESSIBLE
        assert result.reason == "frame is detached"
        assert frame.queries == 0


class TestFrames:
    """Frame enumeration and access checks."""

    def test_enumerate_is_a_snapshot(self):
        page = FakePage([FakeFrame(name="main")])
        frames = enumerate_frames(page)
        page.frames.append(FakeFrame(name="late"))

        assert len(frames) == 1

    def test_describe_nested_frame(self):
        main = FakeFrame(url="https://bank.example.com/")
        nav = FakeFrame(name="nav", url="https://bank.example.com/nav", parent_frame=main)
        menu = FakeFrame(name="menu", parent_frame=nav)
        frames = [main, nav, menu]

        context = describe_frame(menu, 2, frames)

        assert context.index == 2
        assert context.name == "menu"
        assert context.src is None
        assert context.parent_index == 1
        assert context.label == "2:menu"
        assert describe_frame(main, 0, frames).parent_index is None
        assert describe_frame(main, 0, frames).label == "0"

    def test_describe_frame_with_unknown_parent(self):
        orphan = FakeFrame(name="orphan", parent_frame=FakeFrame())

        assert describe_frame(orphan, 0, [orphan]).parent_index is None

    @pytest.mark.asyncio
    async def test_read_access(self):
        frame = FakeFrame(name="data")
        assert await read_access(frame) is frame

    @pytest.mark.asyncio
    async def test_read_access_detached(self):
        frame = FakeFrame(name="data")
        frame.detached = True

        with pytest.raises(AccessDeniedError) as exc_info:
            await read_access(frame)

        assert exc_info.value.frame_label == "data"
        assert exc_info.value.reason == "frame is detached"

    @pytest.mark.asyncio
    async def test_read_access_error(self):
        with pytest.raises(AccessDeniedError):
            await read_access(FakeFrame(name="data", broken=True))
