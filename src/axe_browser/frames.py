"""
Frame Traversal

Implements recursive frame traversal for the two scan modes:
- inject_frames: load axe-core into every reachable frame (legacy mode)
- run_partial_recursive: collect one axe.runPartial() result per frame

Both walk the frame tree depth-first in document order. The client has a
single current browsing context, so every frame that is entered is left again
through frame_scope() before the next sibling is looked up.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Iterable

from .client.base import RemoteClient
from .context import frame_element_selector
from .engine import axe_get_frame_context, axe_run_partial, axe_source_inject
from .errors import FrameTraversalError
from .models import PartialResults, RunOptions, ScanContext, Selector

logger = logging.getLogger(__name__)

# Driver messages that mean a frame went away between lookup and use
FRAME_GONE_MESSAGES = ("no such frame", "element not attached", "detached")

FrameErrorPolicy = Callable[[Exception], None]


def log_or_rethrow_error(error: Exception) -> None:
    """
    Default policy for frames that fail during injection.

    Frames that vanished are logged and skipped; anything else is re-raised.
    """
    message = str(error).lower()
    if isinstance(error, FrameTraversalError) or any(m in message for m in FRAME_GONE_MESSAGES):
        logger.error(f"Failed to inject axe-core into one of the iframes! {error}")
        return
    raise error


@asynccontextmanager
async def frame_scope(client: RemoteClient, element: Any) -> AsyncIterator[None]:
    """
    Enter the frame owned by `element` for the duration of the block.

    The parent frame is restored on exit, also when the block raises. If the
    switch itself fails nothing was entered and nothing is restored.
    """
    await client.switch_to_frame(element)
    try:
        yield
    finally:
        await client.switch_to_parent_frame()


def _lookup_selector(selector: Selector) -> str:
    # Playwright-style CSS pierces open shadow roots, so a shadow path
    # becomes a descendant chain.
    if isinstance(selector, str):
        return selector
    return " ".join(selector)


async def inject_frames(
    client: RemoteClient,
    script: str,
    disabled_frame_selectors: Iterable[str] = (),
    on_error: FrameErrorPolicy = log_or_rethrow_error,
) -> None:
    """
    Execute `script` in the current frame and in every nested frame.

    Frames matching a disabled selector are skipped, together with their
    descendants. A failure on one frame element is handed to `on_error` and
    the remaining siblings are still attempted.

    Args:
        client: Remote browser client positioned on the starting frame
        script: Composed axe-core script
        disabled_frame_selectors: Escaped CSS selectors of frames to skip
        on_error: Policy for per-frame errors (default: log frame-gone errors, raise others)
    """
    disabled = list(disabled_frame_selectors)
    await client.execute(script)

    elements = await client.find_all(frame_element_selector("frame", disabled))
    elements += await client.find_all(frame_element_selector("iframe", disabled))

    for element in elements:
        try:
            if not await client.element_exists(element):
                continue
            async with frame_scope(client, element):
                await inject_frames(client, script, disabled, on_error)
        except Exception as error:
            on_error(error)


async def run_partial_recursive(
    client: RemoteClient,
    context: ScanContext,
    options: RunOptions,
    script: str,
) -> PartialResults:
    """
    Get partial results from the current frame and all frames in scope below it.

    The first element is the current frame's own result, followed by each
    child's results in the order axe-core reported the children. A child that
    cannot be located, entered or scanned contributes a single None.

    Args:
        client: Remote browser client positioned on the frame to scan
        context: Scan context for this frame
        options: Options forwarded to axe.runPartial()
        script: Composed axe-core script, re-injected into every child

    Returns:
        Ordered list of partial results (None for failed frames)
    """
    frame_contexts = await axe_get_frame_context(client, context)
    partials: PartialResults = [await axe_run_partial(client, context, options)]

    for frame_context in frame_contexts:
        selector = frame_context.frame_selector
        try:
            frame = await client.find(_lookup_selector(selector))
            if frame is None:
                raise FrameTraversalError(f'Expect frame of "{selector}" to be defined')

            async with frame_scope(client, frame):
                await axe_source_inject(client, script)
                partials.extend(
                    await run_partial_recursive(client, frame_context.frame_context, options, script)
                )
        except Exception as error:
            logger.warning(f"Could not scan frame {selector}: {error}")
            partials.append(None)

    return partials
