"""
Unit tests for frame traversal.

This module contains unit tests for:
- run_partial_recursive: ordering, failure markers, context restoration
- inject_frames: disabled frames, error policy, sibling isolation
- frame_scope: parent restoration
"""

import pytest

from axe_browser.engine import axe_source_inject, compose_script
from axe_browser.errors import FrameTraversalError
from axe_browser.frames import (
    frame_scope,
    inject_frames,
    log_or_rethrow_error,
    run_partial_recursive,
)
from axe_browser.models import RunOptions, ScanContext

from fake_browser import AXE_SOURCE, FakeClient, FakeElement, FakeFrame

SCRIPT = compose_script(AXE_SOURCE)


async def collect(client: FakeClient, context: ScanContext = None) -> list:
    context = context or ScanContext()
    await axe_source_inject(client, SCRIPT)
    return await run_partial_recursive(client, context, RunOptions(), SCRIPT)


def frame_names(partials: list) -> list:
    return [partial["frame"] if partial else None for partial in partials]


class TestRunPartialRecursive:
    """Test the recursive partial-result collector."""

    @pytest.mark.asyncio
    async def test_single_frame_document(self):
        client = FakeClient(FakeFrame("top"))

        partials = await collect(client)

        assert frame_names(partials) == ["top"]

    @pytest.mark.asyncio
    async def test_pre_order_depth_first(self):
        top = FakeFrame(
            "top",
            [
                FakeFrame("a", [FakeFrame("a1"), FakeFrame("a2", [FakeFrame("a2x")])]),
                FakeFrame("b"),
            ],
        )
        client = FakeClient(top)

        partials = await collect(client)

        assert frame_names(partials) == ["top", "a", "a1", "a2", "a2x", "b"]

    @pytest.mark.asyncio
    async def test_vanished_frame_yields_single_marker(self):
        client = FakeClient(FakeFrame("top", [FakeFrame("gone", vanished=True)]))

        partials = await collect(client)

        assert frame_names(partials) == ["top", None]

    @pytest.mark.asyncio
    async def test_failed_subtree_yields_single_marker(self):
        # The failing frame has two children; they must not add entries
        broken = FakeFrame("broken", [FakeFrame("x"), FakeFrame("y")], fail_partial=True)
        top = FakeFrame("top", [FakeFrame("a"), broken, FakeFrame("c")])
        client = FakeClient(top)

        partials = await collect(client)

        assert frame_names(partials) == ["top", "a", None, "c"]

    @pytest.mark.asyncio
    async def test_unreachable_frame_does_not_move_parent_context(self):
        top = FakeFrame(
            "top",
            [FakeFrame("a", [FakeFrame("locked", unreachable=True), FakeFrame("a2")]), FakeFrame("b")],
        )
        client = FakeClient(top)

        partials = await collect(client)

        assert frame_names(partials) == ["top", "a", None, "a2", "b"]
        assert client.frame_stack == []

    @pytest.mark.asyncio
    async def test_length_matches_subtree_counts(self):
        top = FakeFrame(
            "top",
            [
                FakeFrame("ok", [FakeFrame("ok-child")]),
                FakeFrame("fails", [FakeFrame("never-1"), FakeFrame("never-2")], fail_partial=True),
                FakeFrame("gone", vanished=True),
            ],
        )
        client = FakeClient(top)

        partials = await collect(client)

        # 1 (self) + 2 (ok subtree) + 1 (failure) + 1 (failure)
        assert len(partials) == 5
        assert partials.count(None) == 2

    @pytest.mark.asyncio
    async def test_context_restored_to_entry_frame(self):
        top = FakeFrame("top", [FakeFrame("a", [FakeFrame("a1")])])
        client = FakeClient(top)

        await collect(client)

        assert client.current_frame is top

    @pytest.mark.asyncio
    async def test_script_reinjected_into_each_child(self):
        child = FakeFrame("child")
        client = FakeClient(FakeFrame("top", [child]))

        await collect(client)

        assert child.injections == 1
        assert child.allow_all_origins is True

    @pytest.mark.asyncio
    async def test_excluded_frames_not_discovered(self):
        top = FakeFrame("top", [FakeFrame("ads"), FakeFrame("content")])
        client = FakeClient(top)

        partials = await collect(client, ScanContext(exclude=[["#ads", "html"]]))

        assert frame_names(partials) == ["top", "content"]

    @pytest.mark.asyncio
    async def test_reinjection_does_not_change_partial_result(self):
        client = FakeClient(FakeFrame("top"))

        first = await collect(client)
        await axe_source_inject(client, SCRIPT)
        second = await collect(client)

        assert client.top.injections == 3
        assert first == second

    @pytest.mark.asyncio
    async def test_top_level_failure_propagates(self):
        client = FakeClient(FakeFrame("top", fail_partial=True))

        with pytest.raises(RuntimeError, match="runPartial failed"):
            await collect(client)


class TestInjectFrames:
    """Test injection into the whole frame tree (legacy path)."""

    @pytest.mark.asyncio
    async def test_injects_frames_and_iframes(self):
        nested = FakeFrame("nested")
        top = FakeFrame("top", [FakeFrame("old", [nested], tag="frame"), FakeFrame("new")])
        client = FakeClient(top)

        await inject_frames(client, SCRIPT)

        assert [f.injections for f in (top, top.children[0], nested, top.children[1])] == [1, 1, 1, 1]
        assert client.frame_stack == []

    @pytest.mark.asyncio
    async def test_skips_disabled_frames_and_descendants(self):
        hidden_child = FakeFrame("hidden-child")
        captcha = FakeFrame("captcha", [hidden_child])
        top = FakeFrame("top", [captcha, FakeFrame("content")])
        client = FakeClient(top)

        await inject_frames(client, SCRIPT, ["#captcha"])

        assert captcha.injections == 0
        assert hidden_child.injections == 0
        assert top.children[1].injections == 1

    @pytest.mark.asyncio
    async def test_unreachable_frame_logged_and_siblings_continue(self, caplog):
        locked = FakeFrame("locked", unreachable=True)
        after = FakeFrame("after")
        client = FakeClient(FakeFrame("top", [locked, after]))

        await inject_frames(client, SCRIPT)

        assert locked.injections == 0
        assert after.injections == 1
        assert "Failed to inject axe-core" in caplog.text

    @pytest.mark.asyncio
    async def test_failure_inside_child_restores_parent(self):
        grandchild = FakeFrame("grandchild", unreachable=True)
        top = FakeFrame("top", [FakeFrame("child", [grandchild]), FakeFrame("sibling")])
        client = FakeClient(top)

        await inject_frames(client, SCRIPT)

        assert top.children[1].injections == 1
        assert client.frame_stack == []

    @pytest.mark.asyncio
    async def test_custom_error_policy(self):
        seen = []
        client = FakeClient(FakeFrame("top", [FakeFrame("locked", unreachable=True)]))

        await inject_frames(client, SCRIPT, on_error=seen.append)

        assert len(seen) == 1
        assert isinstance(seen[0], FrameTraversalError)


class TestLogOrRethrow:
    def test_frame_errors_are_logged(self, caplog):
        log_or_rethrow_error(FrameTraversalError("gone"))
        log_or_rethrow_error(RuntimeError("no such frame: 42"))
        log_or_rethrow_error(RuntimeError("stale element: element not attached to the page document"))
        assert caplog.text.count("Failed to inject axe-core") == 3

    def test_other_errors_are_raised(self):
        with pytest.raises(ValueError):
            log_or_rethrow_error(ValueError("boom"))


class TestFrameScope:
    @pytest.mark.asyncio
    async def test_restores_parent_when_block_raises(self):
        child = FakeFrame("child")
        client = FakeClient(FakeFrame("top", [child]))

        with pytest.raises(RuntimeError):
            async with frame_scope(client, FakeElement(child)):
                assert client.current_frame is child
                raise RuntimeError("boom")

        assert client.frame_stack == []

    @pytest.mark.asyncio
    async def test_failed_switch_does_not_pop_parent(self):
        locked = FakeFrame("locked", unreachable=True)
        middle = FakeFrame("middle", [locked])
        client = FakeClient(FakeFrame("top", [middle]))
        client.frame_stack.append(middle)

        with pytest.raises(FrameTraversalError):
            async with frame_scope(client, FakeElement(locked)):
                pass

        assert client.frame_stack == [middle]
