"""
Data models for the scan orchestrator.

This module defines Pydantic models exchanged with the in-page axe-core engine:
- ScanContext: include/exclude selectors describing what to scan
- RunOptions: options forwarded verbatim to axe.run / axe.runPartial
- FrameContext: one child frame still to be scanned, as reported by axe-core
- AxeResults: the final merged report
- NewWindow: handle returned when a window or tab is opened

Field names follow the engine's camelCase JSON through aliases, so models
validate directly from `execute()` return values and dump back with
`by_alias=True`.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# A single CSS selector, or a path of selectors narrowing through nested
# frames / shadow roots.
Selector = Union[str, list[str]]

# One frame's partial result, or None when the frame could not be scanned.
PartialResult = Optional[dict[str, Any]]
PartialResults = list[PartialResult]


class ScanContext(BaseModel):
    """What to scan in the current frame.

    Validation Rules:
    - include is None when the whole document is in scope
    - exclude entries only ever narrow the scan
    """

    model_config = ConfigDict(extra="allow")

    include: Optional[list[Any]] = None
    """Selectors to include. None means the whole document."""

    exclude: list[Any] = Field(default_factory=list)
    """Selectors to exclude, in insertion order."""

    def to_engine(self) -> dict[str, Any]:
        """Serialize for axe-core, omitting an unset include."""
        return self.model_dump(exclude_none=True)


class RunOptions(BaseModel):
    """Options forwarded to axe-core.

    Values are opaque: axe-core accepts several shapes for runOnly (a list or
    string of tags, `{type, values}` with singular or plural types, tag values
    given as `{include, exclude}`), so nothing is validated here. Only keys the
    caller or the builder actually set are forwarded, explicit nulls included.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    run_only: Any = Field(default=None, alias="runOnly")
    rules: Any = None

    def to_engine(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class FrameContext(BaseModel):
    """A child frame that still needs scanning, produced by axe-core itself."""

    model_config = ConfigDict(populate_by_name=True)

    frame_selector: Selector = Field(alias="frameSelector")
    """Selector locating the frame element in the current document."""

    frame_context: ScanContext = Field(alias="frameContext")
    """Context scoped to the inside of that frame."""


class AxeResults(BaseModel):
    """Final merged report returned by axe.finishRun() or axe.run()."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    violations: list[dict[str, Any]] = Field(default_factory=list)
    passes: list[dict[str, Any]] = Field(default_factory=list)
    incomplete: list[dict[str, Any]] = Field(default_factory=list)
    inapplicable: list[dict[str, Any]] = Field(default_factory=list)
    url: Optional[str] = None
    timestamp: Optional[str] = None
    test_engine: Optional[dict[str, Any]] = Field(default=None, alias="testEngine")
    tool_options: Optional[dict[str, Any]] = Field(default=None, alias="toolOptions")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class NewWindow(BaseModel):
    """Result of opening a window or tab. handle is None when it was blocked."""

    handle: Optional[str] = None
    type: str = "tab"
