"""Custom exception hierarchy for kuiperQL.

All public errors inherit from :class:`KuiperQLError` so callers can catch
the base class for any kuiperQL-specific failure.

SQL generation itself never raises: a half-edited wizard degrades to a
shorter statement (or the empty-source sentinel).  Errors are only raised
at the boundaries - parsing a serialized wizard snapshot and assembling a
rule-creation payload.
"""
from __future__ import annotations

from typing import Any


class KuiperQLError(Exception):
    """Base exception for all kuiperQL errors."""


class ParseError(KuiperQLError):
    """Raised when input cannot be parsed as a valid wizard snapshot.

    Args:
        message: Human-readable description.
        raw: The raw value that failed to parse.
    """

    def __init__(self, message: str, raw: Any = None) -> None:
        super().__init__(message)
        self.raw = raw


class PayloadError(KuiperQLError):
    """Raised when a rule-creation payload cannot be assembled.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. ``MISSING_RULE_ID``).
        details: Extra context for the caller's error display.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response suitable for display."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class MissingRuleIdError(PayloadError):
    """Raised when a deployable payload is requested without a rule id."""

    def __init__(self) -> None:
        super().__init__(
            "A rule id is required before the rule can be created.",
            code="MISSING_RULE_ID",
            details={"field": "ruleId"},
        )
