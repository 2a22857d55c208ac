"""
Unit tests for the frame-scoped element waiter.

Uses in-memory frames, no browser required.
"""

import asyncio

import pytest

from account_refresh.errors import NotFoundError, WaitCancelledError
from account_refresh.predicates import anchor_with_text
from account_refresh.waiter import find

from fake_frames import FakeElement, FakeFrame

LINK_TEXT = "Account Statement"


def _link_frame(name: str, text: str = LINK_TEXT, **kwargs) -> tuple[FakeFrame, FakeElement]:
    link = FakeElement(f"  {text}\n ")
    return FakeFrame(name=name, anchors=[FakeElement("Home"), link], **kwargs), link


class TestFindMatching:
    """Selection of the matching frame."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("position", [0, 1, 2, 3])
    async def test_single_match_found_at_any_position(self, position):
        """The only frame holding the link is returned wherever it sits."""
        frames = [FakeFrame(name=f"empty{i}", anchors=[FakeElement("Logout")]) for i in range(3)]
        match, link = _link_frame("menu")
        frames.insert(position, match)

        outcome = await find(frames, anchor_with_text(LINK_TEXT), timeout_ms=1000, poll_interval_ms=50)

        assert outcome.frame is match
        assert outcome.element is link
        assert outcome.frame_context.index == position
        assert outcome.frame_context.name == "menu"
        assert outcome.polls == 1

    @pytest.mark.asyncio
    async def test_first_frame_wins_when_two_match(self):
        """Two matching frames: the earlier one in input order is selected."""
        first, first_link = _link_frame("first")
        second, _ = _link_frame("second")

        outcome = await find([FakeFrame(), first, second], anchor_with_text(LINK_TEXT), timeout_ms=1000)

        assert outcome.frame is first
        assert outcome.element is first_link
        # The later frame is never probed once the earlier one matched
        assert second.queries == 0

    @pytest.mark.asyncio
    async def test_text_must_match_exactly_after_trim(self):
        """Partial or differently cased link text does not match."""
        frames = [
            FakeFrame(anchors=[FakeElement("Account Statements")]),
            FakeFrame(anchors=[FakeElement("account statement")]),
        ]

        with pytest.raises(NotFoundError):
            await find(frames, anchor_with_text(LINK_TEXT), timeout_ms=0)

    @pytest.mark.asyncio
    async def test_scenario_no_match_match_throws(self):
        """[A no match, B link, C throws] resolves with B on the first poll."""
        frame_a = FakeFrame(name="A", anchors=[FakeElement("Transfers")])
        frame_b, link = _link_frame("B")
        frame_c = FakeFrame(name="C", broken=True)

        loop = asyncio.get_running_loop()
        start = loop.time()
        outcome = await find(
            [frame_a, frame_b, frame_c],
            anchor_with_text(LINK_TEXT),
            timeout_ms=5000,
            poll_interval_ms=500,
        )
        elapsed = loop.time() - start

        assert outcome.frame is frame_b
        assert outcome.element is link
        assert outcome.polls == 1
        assert frame_a.queries == 1
        assert elapsed < 0.5

    @pytest.mark.asyncio
    async def test_throwing_frame_is_skipped(self):
        """A frame raising on access is treated like a frame without a match."""
        broken = FakeFrame(name="broken", broken=True)
        match, link = _link_frame("menu")

        outcome = await find([broken, match], anchor_with_text(LINK_TEXT), timeout_ms=1000)

        assert outcome.element is link
        assert broken.queries == 1

    @pytest.mark.asyncio
    async def test_detached_frame_is_skipped(self):
        """Detached frames are skipped without being queried."""
        detached, _ = _link_frame("gone")
        detached.detached = True
        match, link = _link_frame("menu")

        outcome = await find([detached, match], anchor_with_text(LINK_TEXT), timeout_ms=1000)

        assert outcome.frame is match
        assert detached.queries == 0

    @pytest.mark.asyncio
    async def test_element_appearing_later_is_found(self):
        """Polling continues until the element renders."""
        late, link = _link_frame("content", appear_after=2)

        outcome = await find([FakeFrame(), late], anchor_with_text(LINK_TEXT), timeout_ms=2000, poll_interval_ms=20)

        assert outcome.element is link
        assert outcome.polls == 3

    @pytest.mark.asyncio
    async def test_unbounded_wait_finds_late_element(self):
        """timeout_ms=None keeps polling until the element shows up."""
        late, link = _link_frame("content", appear_after=4)

        outcome = await find([late], anchor_with_text(LINK_TEXT), timeout_ms=None, poll_interval_ms=10)

        assert outcome.element is link
        assert outcome.polls == 5

    @pytest.mark.asyncio
    async def test_repeated_calls_select_same_frame(self):
        """Stable inputs yield the same frame every time."""
        first, _ = _link_frame("first")
        second, _ = _link_frame("second")
        frames = [FakeFrame(broken=True), first, second]

        one = await find(frames, anchor_with_text(LINK_TEXT), timeout_ms=500)
        two = await find(frames, anchor_with_text(LINK_TEXT), timeout_ms=500)

        assert one.frame is two.frame is first
        assert one.frame_context == two.frame_context


class TestFindTimeout:
    """Timeout behaviour."""

    @pytest.mark.asyncio
    async def test_no_match_times_out_within_one_interval(self):
        """Fails no earlier than the timeout and no later than timeout + interval."""
        frames = [FakeFrame(anchors=[FakeElement("Home")]), FakeFrame(broken=True)]
        loop = asyncio.get_running_loop()

        start = loop.time()
        with pytest.raises(NotFoundError) as exc_info:
            await find(frames, anchor_with_text(LINK_TEXT), timeout_ms=300, poll_interval_ms=100)
        elapsed = loop.time() - start

        assert elapsed >= 0.3
        assert elapsed <= 0.3 + 0.1 + 0.1
        assert exc_info.value.description == "link 'Account Statement'"
        assert exc_info.value.timeout_ms == 300
        assert exc_info.value.contexts_searched == 2

    @pytest.mark.asyncio
    async def test_empty_frame_list_times_out(self):
        """No frames at all: NotFoundError once the timeout elapses."""
        loop = asyncio.get_running_loop()

        start = loop.time()
        with pytest.raises(NotFoundError) as exc_info:
            await find([], anchor_with_text(LINK_TEXT), timeout_ms=200, poll_interval_ms=500)
        elapsed = loop.time() - start

        assert 0.2 <= elapsed < 0.4
        assert exc_info.value.contexts_searched == 0

    @pytest.mark.asyncio
    async def test_zero_timeout_is_single_pass(self):
        """timeout_ms=0 probes every frame exactly once."""
        frames = [FakeFrame(), FakeFrame()]

        with pytest.raises(NotFoundError):
            await find(frames, anchor_with_text(LINK_TEXT), timeout_ms=0)

        assert [frame.queries for frame in frames] == [1, 1]

    @pytest.mark.asyncio
    async def test_frame_list_is_fixed_at_call_start(self):
        """Frames added to the caller's list after the call are not searched."""
        frames = [FakeFrame()]
        task = asyncio.create_task(
            find(frames, anchor_with_text(LINK_TEXT), timeout_ms=200, poll_interval_ms=20)
        )
        await asyncio.sleep(0.05)
        frames.append(_link_frame("late")[0])

        with pytest.raises(NotFoundError):
            await task

    @pytest.mark.asyncio
    async def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            await find([], anchor_with_text(LINK_TEXT), timeout_ms=100, poll_interval_ms=0)
        with pytest.raises(ValueError):
            await find([], anchor_with_text(LINK_TEXT), timeout_ms=-1)


class TestFindCancellation:
    """Cancel event handling."""

    @pytest.mark.asyncio
    async def test_cancel_event_stops_unbounded_wait(self):
        """An unbounded wait ends promptly once the cancel event is set."""
        cancel = asyncio.Event()
        loop = asyncio.get_running_loop()
        loop.call_later(0.05, cancel.set)

        start = loop.time()
        with pytest.raises(WaitCancelledError) as exc_info:
            await find(
                [FakeFrame()],
                anchor_with_text(LINK_TEXT),
                timeout_ms=None,
                poll_interval_ms=1000,
                cancel=cancel,
            )

        assert loop.time() - start < 0.5
        assert "Account Statement" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_already_set_cancel_event(self):
        cancel = asyncio.Event()
        cancel.set()
        frame, _ = _link_frame("menu")

        with pytest.raises(WaitCancelledError):
            await find([frame], anchor_with_text(LINK_TEXT), timeout_ms=None, cancel=cancel)

        assert frame.queries == 0

    @pytest.mark.asyncio
    async def test_task_cancellation_propagates(self):
        """Cancelling the task running the wait raises CancelledError."""
        task = asyncio.create_task(
            find([FakeFrame()], anchor_with_text(LINK_TEXT), timeout_ms=None, poll_interval_ms=10)
        )
        await asyncio.sleep(0.05)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
