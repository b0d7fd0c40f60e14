"""
Scan Context Builder

Turns the selectors accumulated on the builder into the context object
axe-core expects, and builds the CSS selectors used to enumerate frames.
"""

import re
from typing import Iterable, Sequence

from .models import ScanContext, Selector

# Matches the trailing space of a hex escape that is not needed to terminate it.
_EXCESSIVE_SPACES = re.compile(r"(^|\\+)?(\\[A-F0-9]{1,6}) (?![a-fA-F0-9 ])")


def css_escape(value: str, quote: str = "'") -> str:
    """
    Escape a string for safe embedding inside a CSS selector.

    Control and non-ASCII code points become hex escapes, backslashes and the
    quote character are backslash-escaped. Everything else is left untouched
    so selectors such as `#id` or `[name=x]` keep their meaning.

    Args:
        value: Raw string
        quote: Quote character to escape (default: single quote)

    Returns:
        Escaped string
    """
    output = []
    for char in value:
        code_point = ord(char)
        if code_point < 0x20 or code_point > 0x7E:
            output.append(f"\\{code_point:X} ")
        elif char == "\\" or char == quote:
            output.append("\\" + char)
        else:
            output.append(char)

    def _trim(match: re.Match) -> str:
        prefix = match.group(1)
        # An odd run of backslashes means the escape itself is escaped
        if prefix and len(prefix) % 2:
            return match.group(0)
        return (prefix or "") + match.group(2)

    return _EXCESSIVE_SPACES.sub(_trim, "".join(output))


def as_selector_path(selector: Selector) -> list[str]:
    """Normalize a bare selector string to a one-element path."""
    if isinstance(selector, str):
        return [selector]
    return list(selector)


def normalize_context(
    includes: Sequence[Selector],
    excludes: Sequence[Selector],
    disabled_frame_selectors: Iterable[str],
) -> ScanContext:
    """
    Merge include, exclude and disabled-frame selectors into one ScanContext.

    Disabled frames are excluded by their `html` element, which keeps axe-core
    from descending into them. When nothing is included the include list is
    left unset and axe-core scans the whole document.

    Args:
        includes: Include selectors, in insertion order
        excludes: Exclude selectors, in insertion order
        disabled_frame_selectors: Escaped CSS selectors of frames to skip

    Returns:
        Normalized ScanContext
    """
    exclude: list[list[str]] = [as_selector_path(selector) for selector in excludes]
    exclude.extend([selector, "html"] for selector in disabled_frame_selectors)

    include = [as_selector_path(selector) for selector in includes] or None
    return ScanContext(include=include, exclude=exclude)


def frame_element_selector(tag: str, disabled_frame_selectors: Iterable[str]) -> str:
    """
    Build a selector for `frame` or `iframe` elements not matching any
    disabled selector, e.g. `iframe:not(#ads):not(.captcha)`.
    """
    selector = tag
    for disabled in disabled_frame_selectors:
        selector += f":not({disabled})"
    return selector
