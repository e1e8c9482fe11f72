#!/usr/bin/env python3
"""
Domain Exceptions

Every error raised by the statement parser, the currency arithmetic and the
FIRE engine derives from FireplanError, so callers can catch one base type.
"""

from typing import Any


class FireplanError(Exception):
    """Base exception for the fireplan package."""

    pass


class MalformedDocumentError(FireplanError):
    """A CAMT.053 document is structurally invalid or has an unparseable required amount."""

    pass


class AssumptionsError(FireplanError):
    """A FIRE assumptions file could not be loaded or contains invalid values."""

    pass


class DataFileError(FireplanError):
    """A transactions, goals or accounts JSON file has an unexpected shape."""

    pass


class CurrencyError(FireplanError, ValueError):
    """
    Base class for currency arithmetic failures.

    Carries a machine-readable code and the offending value so the error can
    be logged without re-deriving it.
    """

    code = "CURRENCY_ERROR"

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, value={self.value!r})"


class InvalidFormatError(CurrencyError):
    """Amount text is not a plain signed decimal number."""

    code = "INVALID_FORMAT"


class NotFiniteError(CurrencyError):
    """Amount or factor is NaN or infinite."""

    code = "NOT_FINITE"


class CurrencyOverflowError(CurrencyError):
    """Amount or arithmetic result exceeds MAX_SAFE_AMOUNT."""

    code = "OVERFLOW"


class UnsafeIntegerError(CurrencyError):
    """Cents value is not an integer or is beyond the exact-integer range."""

    code = "UNSAFE_INTEGER"


class InvalidPercentageError(CurrencyError):
    """Percentage outside [0, 100]."""

    code = "INVALID_PERCENTAGE"


class InvalidWeightError(CurrencyError):
    """Distribution weight that is not a finite positive number."""

    code = "INVALID_WEIGHT"


class CurrencyMismatchError(CurrencyError):
    """Arithmetic between amounts of different currencies."""

    code = "CURRENCY_MISMATCH"
