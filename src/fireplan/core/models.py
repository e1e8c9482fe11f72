#!/usr/bin/env python3
"""
Core Data Models for fireplan

Accounts and transactions produced by statement import, and the savings
goals consumed by the FIRE engine. Money fields use the Money type and
serialize as decimal strings with two fraction digits.
"""

from dataclasses import dataclass
from typing import Any

from .dates import FinancialDate
from .money import DEFAULT_CURRENCY, Money


@dataclass
class Account:
    """
    Bank account described by one CAMT statement.

    custom_name, role and id belong to the storage layer; they are carried
    through unchanged and never interpreted here.
    """

    iban: str
    balance: Money
    account_holder_name: str = "Unknown"
    bank_name: str = "Unknown Bank"
    bic: str | None = None
    account_type: str = "checking"
    currency: str = DEFAULT_CURRENCY
    is_active: bool = True

    # Storage-layer pass-through
    id: Any = None
    custom_name: str | None = None
    role: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "iban": self.iban,
            "bic": self.bic,
            "account_holder_name": self.account_holder_name,
            "bank_name": self.bank_name,
            "custom_name": self.custom_name,
            "account_type": self.account_type,
            "role": self.role,
            "balance": self.balance.to_decimal_str(),
            "currency": self.currency,
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Account":
        """Create Account from dictionary (inverse of to_dict)."""
        currency = data.get("currency", DEFAULT_CURRENCY)
        return cls(
            id=data.get("id"),
            iban=data["iban"],
            bic=data.get("bic"),
            account_holder_name=data.get("account_holder_name", "Unknown"),
            bank_name=data.get("bank_name", "Unknown Bank"),
            custom_name=data.get("custom_name"),
            account_type=data.get("account_type", "checking"),
            role=data.get("role"),
            balance=Money.from_decimal_str(data.get("balance", "0"), currency),
            currency=currency,
            is_active=data.get("is_active", True),
        )


@dataclass(frozen=True)
class Transaction:
    """
    One booked statement entry.

    Immutable once parsed. The amount is signed: credits are positive,
    debits negative.
    """

    account_iban: str
    date: FinancialDate
    amount: Money
    description: str
    merchant: str
    statement_id: str

    # Optional fields
    counterparty_name: str | None = None
    counterparty_iban: str | None = None
    reference: str | None = None
    booking_date: FinancialDate | None = None

    @property
    def currency(self) -> str:
        return self.amount.currency

    @property
    def is_income(self) -> bool:
        """Income means a strictly positive amount."""
        return self.amount.is_positive()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "account_iban": self.account_iban,
            "date": self.date.to_iso_string(),
            "booking_date": self.booking_date.to_iso_string() if self.booking_date else None,
            "amount": self.amount.to_decimal_str(),
            "currency": self.currency,
            "description": self.description,
            "merchant": self.merchant,
            "is_income": self.is_income,
            "counterparty_name": self.counterparty_name,
            "counterparty_iban": self.counterparty_iban,
            "reference": self.reference,
            "statement_id": self.statement_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        """Create Transaction from dictionary (inverse of to_dict)."""
        return cls(
            account_iban=data.get("account_iban", ""),
            date=FinancialDate.from_iso_datetime(data["date"]),
            amount=Money.from_decimal_str(data["amount"], data.get("currency", DEFAULT_CURRENCY)),
            description=data.get("description", "Transaction"),
            merchant=data.get("merchant", ""),
            statement_id=data.get("statement_id", ""),
            counterparty_name=data.get("counterparty_name"),
            counterparty_iban=data.get("counterparty_iban"),
            reference=data.get("reference"),
            booking_date=(
                FinancialDate.from_iso_datetime(data["booking_date"]) if data.get("booking_date") else None
            ),
        )


@dataclass
class Goal:
    """
    Savings goal supplied by the storage layer (read-only here).

    Lower priority values are funded first.
    """

    id: Any
    name: str
    target_amount: Money
    current_amount: Money
    priority: int = 1
    target_date: FinancialDate | None = None
    linked_account_iban: str | None = None
    is_completed: bool = False

    @property
    def deficit(self) -> Money:
        """Amount still missing, never negative."""
        missing = self.target_amount - self.current_amount
        return missing if missing.is_positive() else Money.zero(missing.currency)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "target_amount": self.target_amount.to_decimal_str(),
            "current_amount": self.current_amount.to_decimal_str(),
            "currency": self.target_amount.currency,
            "priority": self.priority,
            "target_date": self.target_date.to_iso_string() if self.target_date else None,
            "linked_account_iban": self.linked_account_iban,
            "is_completed": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Goal":
        """Create Goal from dictionary (inverse of to_dict)."""
        currency = data.get("currency", DEFAULT_CURRENCY)
        return cls(
            id=data["id"],
            name=data["name"],
            target_amount=Money.from_decimal_str(data["target_amount"], currency),
            current_amount=Money.from_decimal_str(data.get("current_amount", "0"), currency),
            priority=int(data.get("priority", 1)),
            target_date=FinancialDate.from_iso_datetime(data["target_date"]) if data.get("target_date") else None,
            linked_account_iban=data.get("linked_account_iban"),
            is_completed=bool(data.get("is_completed", False)),
        )
