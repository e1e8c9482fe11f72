#!/usr/bin/env python3
"""
Synthetic Test Data Generators

Builds accounts, transactions and goals for engine tests. All amounts, dates,
IBANs and names are synthetic.
"""

import json
from pathlib import Path
from typing import Any

from fireplan.core.dates import FinancialDate
from fireplan.core.models import Account, Goal, Transaction
from fireplan.core.money import Money

HOUSEHOLD_IBAN = "DE89370400440532013000"
SAVINGS_IBAN = "DE44500105175407324931"


def make_transaction(
    date: str,
    amount: str,
    merchant: str = "Test Merchant",
    account_iban: str = HOUSEHOLD_IBAN,
    currency: str = "EUR",
    statement_id: str = "STMT-TEST",
    reference: str | None = None,
) -> Transaction:
    """Create a transaction with a signed decimal amount."""
    return Transaction(
        account_iban=account_iban,
        date=FinancialDate.from_string(date),
        amount=Money.from_decimal_str(amount, currency),
        description=f"Payment {merchant}",
        merchant=merchant,
        statement_id=statement_id,
        reference=reference,
    )


def make_goal(
    goal_id: Any,
    name: str,
    target: str,
    current: str = "0.00",
    priority: int = 1,
    target_date: str | None = None,
    linked_account_iban: str | None = None,
    is_completed: bool = False,
) -> Goal:
    return Goal(
        id=goal_id,
        name=name,
        target_amount=Money.from_decimal_str(target),
        current_amount=Money.from_decimal_str(current),
        priority=priority,
        target_date=FinancialDate.from_string(target_date) if target_date else None,
        linked_account_iban=linked_account_iban,
        is_completed=is_completed,
    )


def make_account(
    iban: str = HOUSEHOLD_IBAN, account_type: str = "checking", is_active: bool = True, balance: str = "0.00"
) -> Account:
    return Account(
        iban=iban,
        balance=Money.from_decimal_str(balance),
        account_type=account_type,
        is_active=is_active,
    )


def monthly_history(months: list[str], incomes: list[str], expenses: list[str]) -> list[Transaction]:
    """
    One salary credit on the 1st and one expense debit on the 15th per month.

    Zero amounts are skipped so a month can have income or expenses only.
    """
    transactions = []
    for month, income, expense in zip(months, incomes, expenses):
        if Money.from_decimal_str(income).is_positive():
            transactions.append(make_transaction(f"{month}-01", income, merchant="Example Employer"))
        if Money.from_decimal_str(expense).is_positive():
            transactions.append(make_transaction(f"{month}-15", f"-{expense}", merchant="Generic Grocery Store"))
    return transactions


def write_records(path: Path, key: str, records: list[Any]) -> Path:
    """Write domain objects as {key: [...]} JSON, like the storage layer exports them."""
    path.write_text(json.dumps({key: [record.to_dict() for record in records]}, indent=2), encoding="utf-8")
    return path
