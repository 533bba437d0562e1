"""
errors/ - Error Taxonomy

Structured exceptions raised for ill-typed input. Well-typed but
inconsistent programs never raise; they surface as red flags instead.
"""

from .taxonomy import (
    ErrorSeverity,
    ErrorCategory,
    ManorError,
    ProgramInputError,
    InvalidEnumValueError,
    UnknownTierError,
    UnknownDecisionError,
    UnknownOptionError,
    InvalidFactorScoreError,
)

__all__ = [
    "ErrorSeverity",
    "ErrorCategory",
    "ManorError",
    "ProgramInputError",
    "InvalidEnumValueError",
    "UnknownTierError",
    "UnknownDecisionError",
    "UnknownOptionError",
    "InvalidFactorScoreError",
]
