#!/usr/bin/env python3
"""
Engine Input Loader

Utilities for loading transactions, goals and accounts from local JSON files
as domain models.

Each file may hold a bare list, an object with a "transactions", "goals" or
"accounts" key, or (for transactions and accounts) the output of
`fireplan parse`.

Functions:
- load_transactions: Load transactions as domain models
- load_goals: Load goals as domain models
- load_accounts: Load accounts as domain models
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, TypeVar

from ..core.errors import CurrencyError, DataFileError
from ..core.json_utils import read_json
from ..core.models import Account, Goal, Transaction

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _records(data: Any, key: str, path: Path) -> list[dict[str, Any]]:
    """Extract the record list from array format or object format."""
    if isinstance(data, list):
        records = data
    elif isinstance(data, dict):
        records = data.get(key, [])
    else:
        raise DataFileError(f"{path}: expected a JSON array or object, got {type(data).__name__}")

    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise DataFileError(f"{path}: '{key}' must be a list of objects")
    return records


def _convert(records: list[dict[str, Any]], factory: Callable[[dict[str, Any]], T], path: Path) -> list[T]:
    items = []
    for index, record in enumerate(records):
        try:
            items.append(factory(record))
        except KeyError as e:
            raise DataFileError(f"{path}: record {index} is missing field {e}") from e
        except (CurrencyError, TypeError, ValueError) as e:
            raise DataFileError(f"{path}: record {index} is invalid: {e}") from e
    return items


def _read(path: str | Path) -> tuple[Path, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")
    try:
        return path, read_json(path)
    except json.JSONDecodeError as e:
        raise DataFileError(f"{path}: invalid JSON: {e}") from e


def load_transactions(path: str | Path) -> list[Transaction]:
    """
    Load transactions from a JSON file as domain models.

    Args:
        path: JSON file with transaction records

    Returns:
        List of Transaction domain models

    Raises:
        FileNotFoundError: If the file does not exist
        DataFileError: If the file is not valid JSON or a record has an unexpected shape
    """
    path, data = _read(path)
    transactions = _convert(_records(data, "transactions", path), Transaction.from_dict, path)
    logger.info(f"Loaded {len(transactions)} transactions from {path}")
    return transactions


def load_goals(path: str | Path) -> list[Goal]:
    """
    Load savings goals from a JSON file as domain models.

    Raises:
        FileNotFoundError: If the file does not exist
        DataFileError: If the file is not valid JSON or a record has an unexpected shape
    """
    path, data = _read(path)
    goals = _convert(_records(data, "goals", path), Goal.from_dict, path)
    logger.info(f"Loaded {len(goals)} goals from {path}")
    return goals


def load_accounts(path: str | Path) -> list[Account]:
    """
    Load accounts from a JSON file as domain models.

    A parsed statement contributes its single account.

    Raises:
        FileNotFoundError: If the file does not exist
        DataFileError: If the file is not valid JSON or a record has an unexpected shape
    """
    path, data = _read(path)
    if isinstance(data, dict) and "accounts" not in data and isinstance(data.get("account"), dict):
        records = [data["account"]]
    else:
        records = _records(data, "accounts", path)

    accounts = _convert(records, Account.from_dict, path)
    logger.info(f"Loaded {len(accounts)} accounts from {path}")
    return accounts
