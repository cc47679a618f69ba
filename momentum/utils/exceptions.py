"""Custom exception classes."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from momentum.services.json_robustness import RobustnessScore


class MomentumException(Exception):
    """Base exception for Momentum application."""

    pass


class ValidationError(MomentumException):
    """Raised when input validation fails."""

    pass


class GeminiError(MomentumException):
    """Raised when Gemini API call fails."""

    pass


class AnalysisParseError(MomentumException):
    """
    Raised when a model response cannot be turned into a validated analysis.

    The robustness score of the failed attempt is always attached so callers
    can log it before deciding what to do with the failure.
    """

    kind = "parse_error"

    def __init__(
        self,
        message: str,
        *,
        robustness: Optional["RobustnessScore"] = None,
        raw_text: str = "",
    ) -> None:
        super().__init__(message)
        self.robustness = robustness
        self.raw_text = raw_text


class SeverelyTruncatedError(AnalysisParseError):
    """Raised when the response holds no closing brace or bracket at all."""

    kind = "severely_truncated"


class ResponseSyntaxError(AnalysisParseError):
    """Raised when the repaired response is not valid JSON."""

    kind = "syntax_error"

    def __init__(self, message: str, *, position: Optional[int] = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.position = position


class SchemaValidationError(AnalysisParseError):
    """Raised when the response parses but does not match the expected schema."""

    kind = "schema_error"

    def __init__(self, message: str, *, errors: Optional[List[str]] = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.errors = errors or []
