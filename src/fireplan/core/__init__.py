"""
Core Utilities Package

Shared business logic, data models, and utilities used by statement import
and the FIRE engine.

This package provides:
- Currency handling with integer arithmetic for precision
- Common data models for accounts, transactions and goals
- Configuration management for environment-specific settings
- Transaction fingerprinting for duplicate detection
"""

from .config import Config, Environment, get_config, reload_config
from .currency import (
    AllocatedAmount,
    ValidationResult,
    WeightedAllocation,
    add_currency,
    calculate_percentage,
    compare_currency,
    distribute_amount,
    format_cents,
    from_cents,
    multiply_currency,
    round_currency,
    subtract_currency,
    to_cents,
    validate_sum,
    validate_transfer_amount,
)
from .dates import FinancialDate
from .dedup import DuplicateFilterResult, filter_duplicates, transaction_fingerprint
from .errors import (
    AssumptionsError,
    CurrencyError,
    CurrencyMismatchError,
    CurrencyOverflowError,
    DataFileError,
    FireplanError,
    InvalidFormatError,
    InvalidPercentageError,
    InvalidWeightError,
    MalformedDocumentError,
    NotFiniteError,
    UnsafeIntegerError,
)
from .models import Account, Goal, Transaction
from .money import Money

__all__ = [
    # Data models
    "Account",
    "Goal",
    "Transaction",
    "FinancialDate",
    "Money",
    # Configuration
    "Config",
    "Environment",
    "get_config",
    "reload_config",
    # Currency utilities
    "AllocatedAmount",
    "ValidationResult",
    "WeightedAllocation",
    "add_currency",
    "calculate_percentage",
    "compare_currency",
    "distribute_amount",
    "format_cents",
    "from_cents",
    "multiply_currency",
    "round_currency",
    "subtract_currency",
    "to_cents",
    "validate_sum",
    "validate_transfer_amount",
    # Duplicate detection
    "DuplicateFilterResult",
    "filter_duplicates",
    "transaction_fingerprint",
    # Errors
    "AssumptionsError",
    "CurrencyError",
    "CurrencyMismatchError",
    "CurrencyOverflowError",
    "DataFileError",
    "FireplanError",
    "InvalidFormatError",
    "InvalidPercentageError",
    "InvalidWeightError",
    "MalformedDocumentError",
    "NotFiniteError",
    "UnsafeIntegerError",
]
