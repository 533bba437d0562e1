"""
errors/taxonomy.py - Structured error types

Every exception carries a stable code, a category, a severity and a
recovery hint so the API and CLI layers can report it uniformly.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, Optional
from enum import Enum


# =============================================================================
# ERROR CATEGORIES AND SEVERITY
# =============================================================================

class ErrorCategory(Enum):
    """Categories of advisor errors."""
    INPUT = "input"             # Malformed or out-of-range input
    LOOKUP = "lookup"           # Unknown identifier
    CONFIGURATION = "configuration"


class ErrorSeverity(Enum):
    """Severity levels for advisor errors."""
    ERROR = "error"
    WARNING = "warning"


# =============================================================================
# BASE ERROR CLASS
# =============================================================================

class ManorError(Exception):
    """
    Base class for advisor errors.

    Provides structured error information with:
    - Error code for programmatic handling
    - Human-readable message
    - Recovery hint for the caller
    - Detail mapping for debugging
    """

    code: str = "MANOR_000"
    category: ErrorCategory = ErrorCategory.INPUT
    severity: ErrorSeverity = ErrorSeverity.ERROR
    http_status: int = 400

    def __init__(
        self,
        message: str = "",
        *,
        recovery_hint: str = "",
        details: Optional[Dict[str, Any]] = None,
        **kwargs,
    ):
        self.message = message or self.__class__.__doc__ or "Advisor error"
        self.recovery_hint = recovery_hint
        self.details = details or {}
        self.details.update(kwargs)

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "recovery_hint": self.recovery_hint,
            "details": self.details,
        }

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.recovery_hint:
            parts.append(f"Hint: {self.recovery_hint}")
        return " ".join(parts)


# =============================================================================
# SPECIFIC ERROR TYPES
# =============================================================================

class ProgramInputError(ManorError):
    """Program payload could not be interpreted."""

    code = "MANOR_001"
    category = ErrorCategory.INPUT

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            recovery_hint="Check the program payload against the documented schema.",
            **kwargs,
        )


class InvalidEnumValueError(ManorError):
    """Value is not a member of the expected enumeration."""

    code = "MANOR_002"
    category = ErrorCategory.INPUT

    def __init__(self, enum_name: str, value: Any, allowed: Iterable[str], **kwargs):
        allowed = list(allowed)
        super().__init__(
            message=f"Invalid {enum_name} value: {value!r}",
            recovery_hint=f"Use one of: {', '.join(allowed)}",
            enum=enum_name,
            value=value,
            allowed=allowed,
            **kwargs,
        )


class UnknownTierError(ManorError):
    """Requested benchmark tier does not exist."""

    code = "MANOR_101"
    category = ErrorCategory.LOOKUP
    http_status = 404

    def __init__(self, tier: str, available: Iterable[str] = (), **kwargs):
        available = list(available)
        super().__init__(
            message=f"Unknown program tier: {tier}",
            recovery_hint=f"Available tiers: {', '.join(available)}" if available else "",
            tier=tier,
            available=available,
            **kwargs,
        )


class UnknownDecisionError(ManorError):
    """Adjacency decision id is not in the decision library."""

    code = "MANOR_102"
    category = ErrorCategory.LOOKUP
    http_status = 404

    def __init__(self, decision_id: str, **kwargs):
        super().__init__(
            message=f"Unknown adjacency decision: {decision_id}",
            recovery_hint="List decisions for the tier to find valid ids.",
            decision_id=decision_id,
            **kwargs,
        )


class UnknownOptionError(ManorError):
    """Option id does not belong to the given decision."""

    code = "MANOR_103"
    category = ErrorCategory.LOOKUP
    http_status = 404

    def __init__(self, decision_id: str, option_id: str, **kwargs):
        super().__init__(
            message=f"Option {option_id} is not defined for decision {decision_id}",
            decision_id=decision_id,
            option_id=option_id,
            **kwargs,
        )


class InvalidFactorScoreError(ManorError):
    """Site factor score is unknown or outside the 1-5 scale."""

    code = "MANOR_201"
    category = ErrorCategory.INPUT

    def __init__(self, factor_id: str, value: Any = None, reason: str = "", **kwargs):
        message = f"Invalid score for site factor {factor_id}"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message,
            recovery_hint="Factor scores must be numbers between 1 and 5.",
            factor_id=factor_id,
            value=value,
            **kwargs,
        )
