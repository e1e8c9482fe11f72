#!/usr/bin/env python3
"""
Currency Arithmetic

Exact money handling for statement import and FIRE calculations.
All amounts are converted to integer minor units (cents) before any
arithmetic happens, so binary floating point never touches money.

Currency Representations:
- Wire/storage uses decimal strings with two fraction digits: "-40.00"
- Internal calculations use cents: 100 cents = 1.00
- Display uses grouped strings: "1,234.56 EUR"

Key Principles:
- Never multiply a float by 100 to get cents; parse through Decimal
- Reject anything that is not a plain signed decimal (no symbols, no separators)
- Bound every magnitude by MAX_SAFE_AMOUNT so results stay exact everywhere
- The last share of a distribution absorbs the rounding residual
"""

import math
import re
from dataclasses import dataclass
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Hashable, Iterable, Sequence, Union

from .errors import (
    CurrencyError,
    CurrencyOverflowError,
    InvalidFormatError,
    InvalidPercentageError,
    InvalidWeightError,
    NotFiniteError,
    UnsafeIntegerError,
)

DECIMAL_PLACES = 2

# Largest exact integer of an IEEE double; kept as the ceiling so amounts
# exchanged with JavaScript clients never lose precision.
MAX_SAFE_INTEGER = 2**53 - 1
MAX_SAFE_AMOUNT = Decimal("9007199254740.99")
MAX_SAFE_CENTS = 900719925474099

MIN_TRANSFER_AMOUNT = Decimal("0.01")
MAX_TRANSFER_AMOUNT = Decimal("1000000.00")

# Allowed drift in validate_sum, absorbs per-item rounding
SUM_TOLERANCE_CENTS = 2

_CENT = Decimal("0.01")
_WORKING_PRECISION = 60
_AMOUNT_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")
_NON_FINITE_SPELLINGS = {"nan", "snan", "inf", "infinity"}

AmountLike = Union[str, int, float, Decimal]


@dataclass(frozen=True)
class WeightedAllocation:
    """One recipient of a proportional distribution."""

    id: Hashable
    weight: Union[int, float, Decimal]


@dataclass(frozen=True)
class AllocatedAmount:
    """A recipient's share of a distributed total, as a decimal string."""

    id: Hashable
    amount: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "amount": self.amount}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a user-input check; carries a readable reason when invalid."""

    valid: bool
    error: str | None = None

    def __bool__(self) -> bool:
        return self.valid


def _to_decimal(value: AmountLike) -> Decimal:
    """
    Read an amount into a finite Decimal without rounding.

    Raises:
        InvalidFormatError: Non-numeric text, symbols, separators, wrong type
        NotFiniteError: NaN or infinity in any spelling
    """
    if isinstance(value, bool):
        raise InvalidFormatError(f"Invalid currency amount: {value!r}", value)

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise NotFiniteError(f"Amount is not finite: {value}", value)
        return value

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        if not math.isfinite(value):
            raise NotFiniteError(f"Amount is not finite: {value}", value)
        # repr gives the shortest string that round-trips the float
        return Decimal(repr(value))

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidFormatError("Invalid currency string: empty string", value)
        if text.lstrip("+-").lower() in _NON_FINITE_SPELLINGS:
            raise NotFiniteError(f"Amount is not finite: {value}", value)
        if not _AMOUNT_PATTERN.match(text):
            raise InvalidFormatError(f"Invalid currency string: {value}", value)
        return Decimal(text)

    raise InvalidFormatError(f"Unsupported amount type: {type(value).__name__}", value)


def _check_magnitude(amount: Decimal, original: Any) -> None:
    if amount > MAX_SAFE_AMOUNT:
        raise CurrencyOverflowError(f"Amount exceeds maximum safe value: {original}", original)
    if amount < -MAX_SAFE_AMOUNT:
        raise CurrencyOverflowError(f"Amount is below minimum safe value: {original}", original)


def _check_cents(cents: int, description: str) -> int:
    if abs(cents) > MAX_SAFE_CENTS:
        raise CurrencyOverflowError(f"{description} overflows the safe amount range", cents)
    return cents


def to_cents(value: AmountLike) -> int:
    """
    Convert a decimal amount to integer cents, rounding half-up.

    Args:
        value: Decimal string like "12.34", "-40", "000561.54"; or an int,
               float or Decimal in major units

    Returns:
        Amount in cents (1234 for "12.34")

    Raises:
        InvalidFormatError: For "abc", "€10", "1,000.00", "1.2.3"
        NotFiniteError: For NaN / Infinity
        CurrencyOverflowError: If the magnitude exceeds MAX_SAFE_AMOUNT

    Examples:
        to_cents("12.345") -> 1235
        to_cents("-0.005") -> -1
    """
    amount = _to_decimal(value)
    _check_magnitude(amount, value)
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        quantized = amount.quantize(_CENT, rounding=ROUND_HALF_UP)
        return int(quantized.scaleb(DECIMAL_PLACES))


def from_cents(cents: int) -> str:
    """
    Convert integer cents to a decimal string with two fraction digits.

    Uses integer arithmetic only.

    Raises:
        UnsafeIntegerError: If cents is not integral or beyond MAX_SAFE_INTEGER

    Example:
        from_cents(-4000) -> "-40.00"
    """
    if isinstance(cents, bool):
        raise UnsafeIntegerError(f"Cents value is not an integer: {cents!r}", cents)
    if isinstance(cents, float):
        if not cents.is_integer():
            raise UnsafeIntegerError(f"Cents value is not an integer: {cents}", cents)
        cents = int(cents)
    if not isinstance(cents, int):
        raise UnsafeIntegerError(f"Cents value is not an integer: {cents!r}", cents)
    if abs(cents) > MAX_SAFE_INTEGER:
        raise UnsafeIntegerError(f"Cents value is not a safe integer: {cents}", cents)

    sign = "-" if cents < 0 else ""
    units, remainder = divmod(abs(cents), 100)
    return f"{sign}{units}.{remainder:02d}"


def cents_to_decimal(cents: int) -> Decimal:
    """Convert cents to an exact Decimal in major units."""
    return Decimal(from_cents(cents))


def add_currency(a: AmountLike, b: AmountLike) -> str:
    """Add two amounts exactly."""
    return from_cents(_check_cents(to_cents(a) + to_cents(b), f"Addition {a} + {b}"))


def subtract_currency(a: AmountLike, b: AmountLike) -> str:
    """Subtract b from a exactly."""
    return from_cents(_check_cents(to_cents(a) - to_cents(b), f"Subtraction {a} - {b}"))


def multiply_cents(cents: int, factor: Union[int, float, Decimal]) -> int:
    """
    Multiply a cents value by a factor, rounding half-up to a whole cent.

    Raises:
        NotFiniteError: If the factor is NaN or infinite
        CurrencyOverflowError: If the product leaves the safe range
    """
    factor_decimal = _to_decimal(factor)
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        product = (Decimal(cents) * factor_decimal).to_integral_value(rounding=ROUND_HALF_UP)
    return _check_cents(int(product), f"Multiplication {cents} * {factor}")


def multiply_currency(amount: AmountLike, factor: Union[int, float, Decimal]) -> str:
    """Multiply an amount by a factor, rounding to the nearest cent."""
    return from_cents(multiply_cents(to_cents(amount), factor))


def compare_currency(a: AmountLike, b: AmountLike) -> int:
    """
    Compare two amounts after rounding each to cents.

    Returns:
        -1 if a < b, 0 if equal to the cent, 1 if a > b
    """
    cents_a = to_cents(a)
    cents_b = to_cents(b)
    if cents_a < cents_b:
        return -1
    if cents_a > cents_b:
        return 1
    return 0


def round_currency(amount: AmountLike, precision: int = DECIMAL_PLACES) -> str:
    """
    Round an amount to a fixed number of fraction digits (half-up).

    Example:
        round_currency("2.675") -> "2.68"
        round_currency("10", 0) -> "10"
    """
    if precision < 0:
        raise ValueError(f"Precision must be non-negative: {precision}")
    value = _to_decimal(amount)
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        rounded = value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = abs(rounded)
    return f"{rounded:f}"


def calculate_percentage(amount: AmountLike, percentage: Union[int, float, Decimal]) -> str:
    """
    Take a percentage of an amount, rounded to the cent.

    Raises:
        InvalidPercentageError: If percentage is outside [0, 100]
    """
    try:
        pct = _to_decimal(percentage)
    except CurrencyError as e:
        raise InvalidPercentageError(f"Invalid percentage: {percentage}", percentage) from e
    if pct < 0 or pct > 100:
        raise InvalidPercentageError(f"Invalid percentage: {percentage}", percentage)
    return from_cents(multiply_cents(to_cents(amount), pct / 100))


def distribute_cents(total_cents: int, weights: Sequence[Decimal]) -> list[int]:
    """
    Split total_cents proportionally to already-validated positive weights.

    Each share except the last is floored, and the last share takes
    the residual, so the result always sums to total_cents.
    """
    if not weights:
        return []

    total_weight = sum(weights, Decimal(0))
    shares: list[int] = []
    distributed = 0
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        for weight in weights[:-1]:
            share = (Decimal(total_cents) * weight / total_weight).to_integral_value(rounding=ROUND_FLOOR)
            shares.append(int(share))
            distributed += int(share)
    shares.append(total_cents - distributed)
    return shares


def _validated_weight(allocation: WeightedAllocation) -> Decimal:
    try:
        weight = _to_decimal(allocation.weight)
    except CurrencyError as e:
        raise InvalidWeightError(
            f"Allocation weight must be a positive number: {allocation.id}={allocation.weight!r}",
            allocation.weight,
        ) from e
    if weight <= 0:
        raise InvalidWeightError(
            f"Allocation weight must be positive: {allocation.id}={allocation.weight}", allocation.weight
        )
    return weight


def distribute_amount(total: AmountLike, allocations: Iterable[WeightedAllocation]) -> list[AllocatedAmount]:
    """
    Distribute a total proportionally across weighted allocations.

    The final allocation in iteration order absorbs the rounding residual,
    so the returned amounts always sum to the total to the cent.

    Args:
        total: Amount to split
        allocations: Recipients with positive weights

    Returns:
        One AllocatedAmount per allocation, in input order; [] for no allocations

    Raises:
        InvalidWeightError: If any weight is zero, negative or not finite

    Example:
        distribute_amount("100.01", [WeightedAllocation("a", 1)] * 3)
        -> amounts "33.33", "33.33", "33.35"
    """
    allocations = list(allocations)
    if not allocations:
        return []

    weights = [_validated_weight(allocation) for allocation in allocations]
    shares = distribute_cents(to_cents(total), weights)
    return [
        AllocatedAmount(id=allocation.id, amount=from_cents(share))
        for allocation, share in zip(allocations, shares)
    ]


def validate_sum(amounts: Iterable[AmountLike], expected_total: AmountLike) -> bool:
    """
    Check that amounts sum to the expected total within SUM_TOLERANCE_CENTS.

    Returns False instead of raising when any amount cannot be parsed.
    """
    try:
        total_cents = sum(to_cents(amount) for amount in amounts)
        expected_cents = to_cents(expected_total)
    except CurrencyError:
        return False
    return abs(total_cents - expected_cents) <= SUM_TOLERANCE_CENTS


def validate_transfer_amount(amount: AmountLike) -> ValidationResult:
    """
    Validate an amount a user wants to transfer.

    Returns:
        ValidationResult(valid=True) or ValidationResult(valid=False, error=reason)
    """
    try:
        value = _to_decimal(amount)
    except NotFiniteError:
        return ValidationResult(False, "Amount must be finite")
    except CurrencyError:
        return ValidationResult(False, "Amount is not a valid number")

    if value <= 0:
        return ValidationResult(False, "Amount must be positive")
    if value < MIN_TRANSFER_AMOUNT:
        return ValidationResult(False, f"Amount must be at least {MIN_TRANSFER_AMOUNT}")
    if value > MAX_TRANSFER_AMOUNT:
        return ValidationResult(False, f"Amount exceeds maximum transfer limit of {MAX_TRANSFER_AMOUNT}")

    try:
        to_cents(value)
    except CurrencyError as e:
        return ValidationResult(False, str(e))
    return ValidationResult(True)


def format_cents(cents: int, currency: str | None = None) -> str:
    """
    Format cents for display with thousands separators.

    Example:
        format_cents(123456, "EUR") -> "1,234.56 EUR"
    """
    sign = "-" if cents < 0 else ""
    units, remainder = divmod(abs(int(cents)), 100)
    text = f"{sign}{units:,}.{remainder:02d}"
    return f"{text} {currency}" if currency else text
