"""
Analyze Result

Explicit success/failure value returned by AxeBuilder.analyze_result().
"""

from dataclasses import dataclass
from typing import Optional

from .models import AxeResults


@dataclass
class AnalyzeResult:
    """
    Outcome of one analysis.

    Attributes:
        success: Whether the scan completed
        data: Merged report on success
        error: Error message on failure
        exception: The exception that ended the scan
    """

    success: bool
    data: Optional[AxeResults] = None
    error: Optional[str] = None
    exception: Optional[BaseException] = None

    @classmethod
    def ok(cls, data: AxeResults) -> "AnalyzeResult":
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, exception: BaseException) -> "AnalyzeResult":
        return cls(success=False, error=str(exception), exception=exception)

    def unwrap(self) -> AxeResults:
        """Return the report, or raise the exception that ended the scan."""
        if not self.success:
            raise self.exception
        return self.data

    def __str__(self) -> str:
        if self.success:
            return f"Success: {len(self.data.violations)} violation(s)"
        return f"Error: {self.error}"
