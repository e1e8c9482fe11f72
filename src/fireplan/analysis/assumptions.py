#!/usr/bin/env python3
"""
FIRE Engine Assumptions

All tunables of the FIRE metrics and allocation engine live in one frozen
struct that is passed into FireCalculator. Alternate assumptions can be
loaded from a YAML file for what-if runs and tests.
"""

import logging
from dataclasses import dataclass, fields, replace
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from ..core.currency import multiply_cents, to_cents
from ..core.errors import AssumptionsError, CurrencyError
from ..core.money import DEFAULT_CURRENCY

logger = logging.getLogger(__name__)

_MONEY_FIELDS = ("pocket_money_per_adult", "buffer_min", "buffer_max")
_FLOAT_FIELDS = (
    "safe_withdrawal_rate",
    "expected_return",
    "buffer_income_share",
    "volatility_medium_threshold",
    "volatility_high_threshold",
)
_INT_FIELDS = ("fire_target_multiple", "lookback_months")


@dataclass(frozen=True)
class FireAssumptions:
    """
    Tunables for FIRE metrics and allocation.

    Money values are in major units of `currency`.
    """

    pocket_money_per_adult: Decimal = Decimal("150")
    buffer_min: Decimal = Decimal("3000")
    buffer_max: Decimal = Decimal("4000")
    fire_target_multiple: int = 25
    safe_withdrawal_rate: float = 0.04
    expected_return: float = 0.07
    buffer_income_share: float = 0.10
    lookback_months: int = 6
    volatility_medium_threshold: float = 0.1
    volatility_high_threshold: float = 0.2
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        errors = self.validate()
        if errors:
            raise AssumptionsError(f"Invalid FIRE assumptions: {'; '.join(errors)}")

    def validate(self) -> list[str]:
        """Return a list of problems; empty when the assumptions are usable."""
        errors = []

        for name in _MONEY_FIELDS:
            try:
                if to_cents(getattr(self, name)) < 0:
                    errors.append(f"{name} must not be negative")
            except CurrencyError as e:
                errors.append(f"{name}: {e}")

        if not errors and to_cents(self.buffer_min) > to_cents(self.buffer_max):
            errors.append("buffer_min must not exceed buffer_max")
        if self.fire_target_multiple <= 0:
            errors.append("fire_target_multiple must be positive")
        if self.safe_withdrawal_rate <= 0:
            errors.append("safe_withdrawal_rate must be positive")
        if self.expected_return <= 0:
            errors.append("expected_return must be positive")
        if not 0 <= self.buffer_income_share <= 1:
            errors.append("buffer_income_share must be between 0 and 1")
        if self.lookback_months < 1:
            errors.append("lookback_months must be at least 1")
        if self.volatility_medium_threshold > self.volatility_high_threshold:
            errors.append("volatility_medium_threshold must not exceed volatility_high_threshold")

        return errors

    @property
    def pocket_money_per_adult_cents(self) -> int:
        return to_cents(self.pocket_money_per_adult)

    @property
    def buffer_min_cents(self) -> int:
        return to_cents(self.buffer_min)

    @property
    def buffer_max_cents(self) -> int:
        return to_cents(self.buffer_max)

    @property
    def buffer_target_cents(self) -> int:
        """Midpoint of the buffer band."""
        return multiply_cents(self.buffer_min_cents + self.buffer_max_cents, Decimal("0.5"))

    def with_overrides(self, **overrides: Any) -> "FireAssumptions":
        """Copy with some fields replaced (values are coerced like YAML input)."""
        return replace(self, **_coerce(overrides))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FireAssumptions":
        """Build from a mapping; missing keys keep their defaults."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise AssumptionsError(f"Unknown assumption keys: {', '.join(unknown)}")
        return cls(**_coerce(data))

    @classmethod
    def from_yaml(cls, path: str | Path) -> "FireAssumptions":
        """
        Load assumptions from a YAML mapping.

        Example file:
            pocket_money_per_adult: 200
            buffer_min: 5000
            buffer_max: 6000
            expected_return: 0.05

        Raises:
            AssumptionsError: If the file is missing, not a mapping, or invalid
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise AssumptionsError(f"Cannot read assumptions file {path}: {e}") from e

        if not isinstance(data, dict):
            raise AssumptionsError(f"Assumptions file {path} must contain a mapping")

        assumptions = cls.from_dict(data)
        logger.info(f"Loaded FIRE assumptions from {path}")
        return assumptions

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = str(value) if isinstance(value, Decimal) else value
        return result


def _coerce(data: dict[str, Any]) -> dict[str, Any]:
    coerced: dict[str, Any] = {}
    for key, value in data.items():
        try:
            if key in _MONEY_FIELDS:
                coerced[key] = Decimal(str(value))
            elif key in _FLOAT_FIELDS:
                coerced[key] = float(value)
            elif key in _INT_FIELDS:
                coerced[key] = int(value)
            else:
                coerced[key] = value
        except (ArithmeticError, TypeError, ValueError) as e:
            raise AssumptionsError(f"Invalid value for {key}: {value!r}") from e
    return coerced
