#!/usr/bin/env python3
"""
CAMT.053 Parsing Models

Amount encodings seen on the wire and the parsed statement handed to the
storage layer.
"""

from dataclasses import dataclass, field
from typing import Any, Union

from ..core.models import Account, Transaction
from ..core.money import Money


@dataclass(frozen=True)
class PlainAmount:
    """Amount element with bare decimal text: <Amt>12.50</Amt>."""

    text: str


@dataclass(frozen=True)
class AnnotatedAmount:
    """Amount element carrying a currency attribute: <Amt Ccy="EUR">12.50</Amt>."""

    text: str
    currency: str


EncodedAmount = Union[PlainAmount, AnnotatedAmount]


@dataclass
class ParsedStatement:
    """One CAMT <Stmt> normalized into an account and its transactions."""

    statement_id: str
    account: Account
    transactions: list[Transaction] = field(default_factory=list)

    # Informational only, never used as the account balance
    opening_balance: Money | None = None
    created_at: str | None = None

    @property
    def transaction_count(self) -> int:
        return len(self.transactions)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "statement_id": self.statement_id,
            "created_at": self.created_at,
            "account": self.account.to_dict(),
            "opening_balance": self.opening_balance.to_decimal_str() if self.opening_balance else None,
            "transactions": [transaction.to_dict() for transaction in self.transactions],
        }
