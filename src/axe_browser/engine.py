"""
axe-core Engine Calls

Composes the injected script and wraps every call into the in-page axe-core
API. All calls go through RemoteClient.execute() and therefore run in the
client's current browsing context.
"""

import json
import logging
from typing import Any

from .client.base import RemoteClient
from .models import AxeResults, FrameContext, PartialResults, RunOptions, ScanContext

logger = logging.getLogger(__name__)

DEFAULT_BRANDING = "axe-browser"

# Upper bound for one execute() payload when shipping partial results
DEFAULT_CHUNK_SIZE = 60_000_000

RUN_PARTIAL_PROBE = "\nreturn typeof window.axe.runPartial === 'function';"

FRAME_CONTEXTS_SCRIPT = "return window.axe.utils.getFrameContexts(arguments[0]);"

RUN_PARTIAL_SCRIPT = """
return window.axe.runPartial(arguments[0], arguments[1]).then(function (result) {
  return JSON.parse(JSON.stringify(result));
});
"""

RUN_LEGACY_SCRIPT = """
return window.axe.run(arguments[0], arguments[1]).then(function (result) {
  return JSON.parse(JSON.stringify(result));
});
"""

RESET_PARTIALS_SCRIPT = "window.partialResults = '';"

STORE_PARTIALS_CHUNK_SCRIPT = "window.partialResults += arguments[0];"


def _configure_call(branding: str, allow_all_origins: bool) -> str:
    allowed_origins = "allowedOrigins: ['<unsafe_all_origins>'],\n  " if allow_all_origins else ""
    return (
        "axe.configure({\n"
        f"  {allowed_origins}branding: {{ application: {json.dumps(branding)} }}\n"
        "});"
    )


def compose_script(
    axe_source: str,
    legacy_mode: bool = False,
    branding: str = DEFAULT_BRANDING,
) -> str:
    """
    Append the configuration call to the axe-core source.

    Outside legacy mode every origin is whitelisted for frame messaging,
    which runPartial/finishRun need to reach cross-origin frames. Legacy mode
    keeps axe-core's same-origin default.

    Args:
        axe_source: axe-core source text
        legacy_mode: Whether legacy (single axe.run) mode is enabled
        branding: Application name reported in results

    Returns:
        Script to inject into each frame
    """
    return f"{axe_source}\n{_configure_call(branding, allow_all_origins=not legacy_mode)}\n"


def finish_script(axe_source: str, branding: str = DEFAULT_BRANDING) -> str:
    """Script merging the partial results stored in `window.partialResults`."""
    return (
        f"{axe_source}\n"
        f"{_configure_call(branding, allow_all_origins=False)}\n"
        "var partialResults = JSON.parse(window.partialResults);\n"
        "window.partialResults = undefined;\n"
        "return window.axe.finishRun(partialResults, arguments[0]);\n"
    )


async def axe_source_inject(client: RemoteClient, script: str) -> bool:
    """
    Inject the composed script into the current frame.

    Returns:
        True if the injected axe-core supports axe.runPartial()
    """
    supported = await client.execute(script + RUN_PARTIAL_PROBE)
    return bool(supported)


async def axe_get_frame_context(
    client: RemoteClient, context: ScanContext
) -> list[FrameContext]:
    """Ask axe-core which child frames of the current frame are in scope."""
    raw = await client.execute(FRAME_CONTEXTS_SCRIPT, context.to_engine())
    return [FrameContext.model_validate(entry) for entry in raw or []]


async def axe_run_partial(
    client: RemoteClient, context: ScanContext, options: RunOptions
) -> dict[str, Any]:
    """Run axe.runPartial() in the current frame."""
    return await client.execute(RUN_PARTIAL_SCRIPT, context.to_engine(), options.to_engine())


async def axe_finish_run(
    client: RemoteClient,
    axe_source: str,
    partials: PartialResults,
    options: RunOptions,
    branding: str = DEFAULT_BRANDING,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> AxeResults:
    """
    Merge partial results with axe.finishRun() in the current window.

    The serialized partials are shipped in chunks of at most `chunk_size`
    characters, since drivers cap the size of a single script argument.
    """
    payload = json.dumps(partials)
    await client.execute(RESET_PARTIALS_SCRIPT)

    chunks = 0
    for start in range(0, len(payload), chunk_size):
        await client.execute(STORE_PARTIALS_CHUNK_SCRIPT, payload[start:start + chunk_size])
        chunks += 1
    logger.debug(f"Shipped {len(partials)} partial result(s) in {chunks} chunk(s)")

    raw = await client.execute(finish_script(axe_source, branding), options.to_engine())
    return AxeResults.model_validate(raw)


async def axe_run_legacy(
    client: RemoteClient, context: ScanContext, options: RunOptions
) -> AxeResults:
    """Run a single whole-page axe.run() from the current frame."""
    raw = await client.execute(RUN_LEGACY_SCRIPT, context.to_engine(), options.to_engine())
    return AxeResults.model_validate(raw)
