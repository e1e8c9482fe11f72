#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from .currency import (
    MAX_SAFE_CENTS,
    AmountLike,
    format_cents,
    from_cents,
    multiply_cents,
    to_cents,
)
from .errors import CurrencyMismatchError, CurrencyOverflowError

DEFAULT_CURRENCY = "EUR"


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents with an ISO 4217 currency code.

    Supports both positive (income/credits) and negative (expense/debits) amounts.
    Uses integer arithmetic throughout to prevent floating-point errors.

    Examples:
        >>> salary = Money.from_decimal_str("2500.00")
        >>> str(salary)
        '2500.00'

        >>> rent = Money.from_decimal_str("-900.50")
        >>> (salary + rent).to_decimal_str()
        '1599.50'

        >>> rent.abs()
        Money(cents=90050, currency='EUR')
    """

    cents: int
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if abs(self.cents) > MAX_SAFE_CENTS:
            raise CurrencyOverflowError(f"Money value overflows the safe amount range: {self.cents}", self.cents)

    @classmethod
    def from_cents(cls, cents: int, currency: str = DEFAULT_CURRENCY) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents, currency=currency)

    @classmethod
    def from_decimal_str(cls, amount: AmountLike, currency: str = DEFAULT_CURRENCY) -> "Money":
        """
        Parse a decimal amount like "12.34" or "-40".

        Raises:
            CurrencyError: If the amount is not a plain decimal in the safe range
        """
        return cls(cents=to_cents(amount), currency=currency)

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> "Money":
        """Zero in the given currency."""
        return cls(cents=0, currency=currency)

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_decimal_str(self) -> str:
        """Get the wire format: decimal string with two fraction digits."""
        return from_cents(self.cents)

    def to_decimal(self) -> Decimal:
        """Get an exact Decimal in major units."""
        return Decimal(self.to_decimal_str())

    def is_positive(self) -> bool:
        return self.cents > 0

    def is_negative(self) -> bool:
        return self.cents < 0

    def is_zero(self) -> bool:
        return self.cents == 0

    def abs(self) -> "Money":
        """
        Return absolute value of Money.

        Useful for expense magnitudes where the sign is already known.
        """
        return Money(cents=abs(self.cents), currency=self.currency)

    def multiply(self, factor: Union[int, float, Decimal]) -> "Money":
        """Multiply by a (possibly fractional) factor, rounding half-up to the cent."""
        return Money(cents=multiply_cents(self.cents, factor), currency=self.currency)

    def format(self) -> str:
        """Display string with grouping and currency code: '1,234.56 EUR'."""
        return format_cents(self.cents, self.currency)

    def _check_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                f"Cannot combine {self.currency} with {other.currency}", (self.currency, other.currency)
            )

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects of the same currency."""
        self._check_currency(other)
        return Money(cents=self.cents + other.cents, currency=self.currency)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects of the same currency."""
        self._check_currency(other)
        return Money(cents=self.cents - other.cents, currency=self.currency)

    def __neg__(self) -> "Money":
        return Money(cents=-self.cents, currency=self.currency)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(cents=self.cents * scalar, currency=self.currency)

    def __lt__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as wire decimal string."""
        return self.to_decimal_str()
