"""
AxeBuilder

Chainable builder that configures and runs an axe-core analysis across every
frame of a remotely controlled browser window.

Usage:
    >>> builder = AxeBuilder(client).include("#main").with_tags(["wcag2a"])
    >>> results = await builder.analyze()
    >>> print(len(results.violations))
"""

import copy
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Union

from playwright.async_api import Page

from .client.base import RemoteClient
from .client.playwright_client import PlaywrightClient
from .config import AxeConfig
from .context import as_selector_path, css_escape, normalize_context
from .engine import axe_run_legacy, axe_source_inject, compose_script
from .errors import ConfigurationError
from .finisher import finish_run
from .frames import inject_frames, run_partial_recursive
from .models import AxeResults, RunOptions, ScanContext, Selector
from .result import AnalyzeResult

logger = logging.getLogger(__name__)

# callback(error_message, results): exactly one of the two is None
AnalyzeCallback = Callable[[Optional[str], Optional[AxeResults]], Optional[Awaitable[None]]]


def _as_list(values: Union[str, list[str]]) -> list[str]:
    return [values] if isinstance(values, str) else list(values)


class AxeBuilder:
    """
    Runs axe-core against a page and all of its frames.

    When the injected axe-core supports axe.runPartial(), each frame is
    scanned separately and the partial results are merged with
    axe.finishRun() in a blank tab. Otherwise, or in legacy mode, axe-core is
    injected into every frame and a single axe.run() is performed.
    """

    def __init__(
        self,
        client: Union[RemoteClient, Page],
        axe_source: Optional[str] = None,
        config: Optional[AxeConfig] = None,
    ):
        """
        Initialize the builder.

        Args:
            client: RemoteClient, or a Playwright Page (wrapped in PlaywrightClient)
            axe_source: axe-core source text (read from config.axe_source_path if None)
            config: Scan configuration (uses env if None)

        Raises:
            ConfigurationError: Unsupported client or unreadable axe-core source
        """
        self.config = config or AxeConfig.from_env()

        if isinstance(client, Page):
            client = PlaywrightClient(client)
        if not isinstance(client, RemoteClient):
            raise ConfigurationError("An instantiated remote browser client is required")
        self.client = client

        if axe_source is None:
            try:
                axe_source = self.config.axe_source_path.read_text(encoding="utf-8")
            except OSError as e:
                raise ConfigurationError(
                    "Unable to find axe-core source. Is axe-core installed?"
                ) from e
        self.axe_source = axe_source

        self._includes: list[list[str]] = []
        self._excludes: list[list[str]] = []
        self._option = RunOptions()
        self._disable_frame_selectors: list[str] = []
        self._legacy_mode = self.config.legacy_mode

    def disable_frame(self, selector: str) -> "AxeBuilder":
        """
        Disable injecting axe-core into frame(s) matching the given CSS
        `selector`. This method may be called any number of times.
        """
        self._disable_frame_selectors.append(css_escape(selector))
        return self

    def include(self, selector: Selector) -> "AxeBuilder":
        """
        Selector to include in analysis.
        This may be called any number of times.
        """
        self._includes.append(as_selector_path(selector))
        return self

    def exclude(self, selector: Selector) -> "AxeBuilder":
        """
        Selector to exclude from analysis.
        This may be called any number of times.
        """
        self._excludes.append(as_selector_path(selector))
        return self

    def options(self, options: Union[RunOptions, dict[str, Any]]) -> "AxeBuilder":
        """Set options to be passed into axe-core."""
        if isinstance(options, RunOptions):
            self._option = options.model_copy(deep=True)
        else:
            self._option = RunOptions.model_validate(copy.deepcopy(options))
        return self

    def with_rules(self, rules: Union[str, list[str]]) -> "AxeBuilder":
        """
        Limit analysis to only the specified rules.
        Replaces any earlier `with_tags` selection.
        """
        self._option.run_only = {"type": "rule", "values": _as_list(rules)}
        return self

    def with_tags(self, tags: Union[str, list[str]]) -> "AxeBuilder":
        """
        Limit analysis to only the specified tags.
        Replaces any earlier `with_rules` selection.
        """
        self._option.run_only = {"type": "tag", "values": _as_list(tags)}
        return self

    def disable_rules(self, rules: Union[str, list[str]]) -> "AxeBuilder":
        """Set the list of rules to skip when running an analysis."""
        self._option.rules = {rule: {"enabled": False} for rule in _as_list(rules)}
        return self

    def set_legacy_mode(self, legacy_mode: bool = True) -> "AxeBuilder":
        """
        Use axe.run() with same-origin frame messaging only.

        This disables axe.runPartial() (called in each frame) and
        axe.finishRun() (called in a blank page). Cross-origin frames are not
        tested in legacy mode.
        """
        self._legacy_mode = legacy_mode
        return self

    @property
    def legacy_mode(self) -> bool:
        return self._legacy_mode

    @property
    def run_options(self) -> RunOptions:
        """Copy of the options that will be forwarded to axe-core."""
        return self._option.model_copy(deep=True)

    @property
    def script(self) -> str:
        """axe-core source plus configuration."""
        return compose_script(self.axe_source, self._legacy_mode, self.config.branding)

    def build_context(self) -> ScanContext:
        return normalize_context(self._includes, self._excludes, self._disable_frame_selectors)

    async def analyze(self, callback: Optional[AnalyzeCallback] = None) -> Optional[AxeResults]:
        """
        Perform an analysis and retrieve results.

        With a callback, errors are only reported through it:
        `callback(None, results)` on success, `callback(message, None)` on
        failure, in which case None is returned instead of raising.

        Args:
            callback: Optional function or coroutine function

        Returns:
            AxeResults, or None when a callback received an error

        Raises:
            AxeBrowserError: Without a callback, whatever ended the scan
        """
        outcome = await self.analyze_result()
        if callback is None:
            return outcome.unwrap()

        if outcome.success:
            await _invoke(callback, None, outcome.data)
            return outcome.data

        await _invoke(callback, outcome.error, None)
        return None

    async def analyze_result(self) -> AnalyzeResult:
        """Perform an analysis and return an explicit success/failure value."""
        try:
            return AnalyzeResult.ok(await self._analyze())
        except Exception as e:
            logger.debug(f"Analysis failed: {e}")
            return AnalyzeResult.failed(e)

    async def _analyze(self) -> AxeResults:
        context = self.build_context()
        options = self.run_options
        script = self.script

        run_partial_supported = await axe_source_inject(self.client, script)
        if not run_partial_supported or self._legacy_mode:
            logger.debug(
                "Running legacy analysis "
                f"(runPartial supported: {run_partial_supported}, legacy mode: {self._legacy_mode})"
            )
            return await self._run_legacy(context, options, script)

        partials = await run_partial_recursive(self.client, context, options, script)
        failed = sum(1 for partial in partials if partial is None)
        logger.info(f"Collected {len(partials)} partial result(s), {failed} frame(s) failed")

        return await finish_run(
            self.client,
            self.axe_source,
            partials,
            options,
            branding=self.config.branding,
            chunk_size=self.config.finish_chunk_size,
        )

    async def _run_legacy(self, context: ScanContext, options: RunOptions, script: str) -> AxeResults:
        await inject_frames(self.client, script, self._disable_frame_selectors)
        return await axe_run_legacy(self.client, context, options)


async def _invoke(callback: AnalyzeCallback, error: Optional[str], results: Optional[AxeResults]) -> None:
    outcome = callback(error, results)
    if inspect.isawaitable(outcome):
        await outcome
