"""
Result Finisher

Merges partial results in a fresh blank tab so no page script can interfere
with axe.finishRun(), then returns to the window the scan started from.
"""

import logging
from typing import Optional

from .client.base import RemoteClient
from .engine import DEFAULT_BRANDING, DEFAULT_CHUNK_SIZE, axe_finish_run
from .errors import MergeError, WindowLifecycleError
from .models import AxeResults, PartialResults, RunOptions

logger = logging.getLogger(__name__)

BLANK_PAGE = "about:blank"


async def finish_run(
    client: RemoteClient,
    axe_source: str,
    partials: PartialResults,
    options: RunOptions,
    branding: str = DEFAULT_BRANDING,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> AxeResults:
    """
    Merge partial results into the final report in an isolated tab.

    The temporary tab is closed and the original window re-activated whether
    or not the merge succeeds.

    Args:
        client: Remote browser client
        axe_source: Raw axe-core source (loaded fresh into the blank tab)
        partials: Ordered partial results, None for failed frames
        options: Options forwarded to axe.finishRun()
        branding: Application name reported in results
        chunk_size: Maximum characters per partial-results transfer

    Returns:
        Merged AxeResults

    Raises:
        WindowLifecycleError: The tab could not be opened or switched into
        MergeError: axe.finishRun() failed
    """
    original_window = await client.get_window_handle()
    new_window = await client.create_window("tab")
    if not new_window.handle:
        raise WindowLifecycleError("Please make sure that you have popup blockers disabled.")

    logger.debug(f"Merging {len(partials)} partial result(s) in window {new_window.handle}")
    try:
        try:
            await client.switch_to_window(new_window.handle)
            await client.navigate_to(BLANK_PAGE)
        except Exception as e:
            raise WindowLifecycleError(
                "switch_to_window failed. Are you using updated browser drivers? "
                f"\nDriver reported:\n{e}"
            ) from e

        try:
            return await axe_finish_run(client, axe_source, partials, options, branding, chunk_size)
        except Exception as e:
            raise MergeError(str(e)) from e
    finally:
        await _restore_window(client, original_window, new_window.handle)


async def _restore_window(
    client: RemoteClient, original_window: str, temporary_window: Optional[str]
) -> None:
    """Close the temporary window if it is active, then re-activate the original."""
    current = None
    try:
        current = await client.get_window_handle()
    except WindowLifecycleError:
        logger.debug("No active window while cleaning up")

    if current is not None and current == temporary_window:
        try:
            await client.close_window()
        except Exception as e:
            logger.warning(f"Could not close temporary window {temporary_window}: {e}")
    await client.switch_to_window(original_window)
    logger.debug(f"Restored window {original_window}")
