"""Custom exceptions for attribute ranking.

Provides a small hierarchy of exceptions carrying contextual information
for debugging. Hard errors abort a whole ranking request; numerical
anomalies (division by a zero entropy) are not exceptions and are returned
as non-finite scores instead.
"""

from __future__ import annotations

from typing import Any


class RankingError(Exception):
    """Base exception for ranking errors.

    Attributes:
        message: Human-readable error message.
        context: Additional context dictionary.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize ranking error.

        Args:
            message: Human-readable error message.
            context: Additional context for debugging.
        """
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context."""
        if not self.context:
            return self.message
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} ({context_str})"


class InvalidArgumentError(RankingError, ValueError):
    """Raised when a configuration value or argument is malformed.

    This occurs when:
    - nbins is not positive or exceeds the number of distinct values
    - conf_int is outside (0, 1]
    - n_boot is not positive
    - the attribute container type is not supported

    Attributes:
        parameter: Parameter name that is invalid.
        value: Invalid value provided.
        valid_range: Description of valid values.
    """

    def __init__(
        self,
        message: str,
        parameter: str,
        value: Any,
        valid_range: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.parameter = parameter
        self.value = value
        self.valid_range = valid_range
        full_context: dict[str, Any] = {"parameter": parameter, "value": value}
        if valid_range is not None:
            full_context["valid_range"] = valid_range
        if context:
            full_context.update(context)
        super().__init__(message, full_context)


class ShapeMismatchError(RankingError, ValueError):
    """Raised when attributes and class labels are not row-aligned.

    Also raised for an empty attribute set, where ``expected`` is the
    minimum column count.

    Attributes:
        expected: Expected length (rows or columns).
        actual: Actual length.
    """

    def __init__(
        self,
        message: str,
        expected: int,
        actual: int,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        full_context: dict[str, Any] = {"expected": expected, "actual": actual}
        if context:
            full_context.update(context)
        super().__init__(message, full_context)
