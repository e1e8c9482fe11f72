#!/usr/bin/env python3
"""
Transaction Fingerprinting

Stable hashes for imported transactions so the storage layer can skip
entries it has already seen when the same statement is uploaded twice.
"""

import hashlib
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .models import Transaction

logger = logging.getLogger(__name__)


def transaction_fingerprint(transaction: Transaction) -> str:
    """
    SHA-256 over the fields that identify a statement entry.

    Uses value date, amount, merchant, counterparty IBAN, reference and the
    statement id. The owning account is left out because imports fingerprint
    entries before the account has a storage id.
    """
    parts = [
        transaction.date.to_iso_string(),
        transaction.amount.to_decimal_str(),
        transaction.merchant or "",
        transaction.counterparty_iban or "",
        transaction.reference or "",
        transaction.statement_id or "",
    ]
    return hashlib.sha256("|".join(parts).encode("utf-8")).hexdigest()


@dataclass
class DuplicateFilterResult:
    """Transactions split into new entries and already-known ones."""

    unique: list[Transaction] = field(default_factory=list)
    duplicates: list[Transaction] = field(default_factory=list)
    unique_hashes: list[str] = field(default_factory=list)

    @property
    def duplicate_count(self) -> int:
        return len(self.duplicates)


def filter_duplicates(transactions: Iterable[Transaction], existing_hashes: Iterable[str]) -> DuplicateFilterResult:
    """
    Drop transactions whose fingerprint is already known.

    Entries repeated inside the batch itself are also reported as duplicates,
    keeping the first occurrence.
    """
    seen = set(existing_hashes)
    result = DuplicateFilterResult()

    for transaction in transactions:
        digest = transaction_fingerprint(transaction)
        if digest in seen:
            result.duplicates.append(transaction)
            continue
        seen.add(digest)
        result.unique.append(transaction)
        result.unique_hashes.append(digest)

    if result.duplicates:
        logger.info(f"Skipped {result.duplicate_count} duplicate transactions")
    return result
