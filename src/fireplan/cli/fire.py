#!/usr/bin/env python3
"""
FIRE CLI - Metrics and Monthly Allocation

Command-line access to the FIRE engine over local JSON files produced by
`fireplan parse` or exported from the storage layer.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

import click

from ..analysis import FireAssumptions, FireCalculator, load_accounts, load_goals, load_transactions
from ..core.dates import FinancialDate
from ..core.errors import FireplanError
from ..core.json_utils import format_json

_existing_file = click.Path(exists=True, dir_okay=False, path_type=Path)


def _calculator(assumptions_file: Optional[Path]) -> FireCalculator:
    if assumptions_file is None:
        return FireCalculator()
    return FireCalculator(FireAssumptions.from_yaml(assumptions_file))


def _parse_as_of(value: Optional[str]) -> Optional[FinancialDate]:
    if value is None:
        return None
    try:
        return FinancialDate(date=datetime.strptime(value, "%Y-%m-%d").date())
    except ValueError as e:
        raise click.BadParameter(f"Expected YYYY-MM-DD, got {value!r}", param_hint="--as-of") from e


@click.command()
@click.option("--transactions", "transactions_file", type=_existing_file, required=True, help="Transactions JSON")
@click.option("--goals", "goals_file", type=_existing_file, help="Goals JSON")
@click.option("--accounts", "accounts_file", type=_existing_file, help="Accounts JSON")
@click.option("--adults", type=click.IntRange(min=1), default=2, show_default=True, help="Adults in household")
@click.option("--as-of", help="End of the look-back window (YYYY-MM-DD)")
@click.option("--assumptions", "assumptions_file", type=_existing_file, help="YAML file overriding assumptions")
def metrics(
    transactions_file: Path,
    goals_file: Optional[Path],
    accounts_file: Optional[Path],
    adults: int,
    as_of: Optional[str],
    assumptions_file: Optional[Path],
) -> None:
    """
    Calculate FIRE metrics and print them as JSON.

    Example:
      fireplan metrics --transactions statement.json --goals goals.json --as-of 2024-06-30
    """
    as_of_date = _parse_as_of(as_of)
    try:
        calculator = _calculator(assumptions_file)
        transactions = load_transactions(transactions_file)
        goals = load_goals(goals_file) if goals_file else []
        accounts = load_accounts(accounts_file) if accounts_file else []
        result = calculator.calculate_metrics(transactions, goals, accounts, adults=adults, as_of=as_of_date)
    except FireplanError as e:
        raise click.ClickException(str(e)) from e

    click.echo(format_json(result.to_dict()))


@click.command()
@click.option("--income", required=True, help="Monthly income, e.g. 5000.00")
@click.option("--expenses", required=True, help="Monthly essential expenses")
@click.option("--buffer", "current_buffer", default="0", show_default=True, help="Current emergency buffer")
@click.option("--goals", "goals_file", type=_existing_file, help="Goals JSON")
@click.option("--accounts", "accounts_file", type=_existing_file, help="Accounts JSON")
@click.option("--adults", type=click.IntRange(min=1), default=2, show_default=True, help="Adults in household")
@click.option("--assumptions", "assumptions_file", type=_existing_file, help="YAML file overriding assumptions")
def allocate(
    income: str,
    expenses: str,
    current_buffer: str,
    goals_file: Optional[Path],
    accounts_file: Optional[Path],
    adults: int,
    assumptions_file: Optional[Path],
) -> None:
    """
    Plan this month's allocation and suggest transfers.

    Example:
      fireplan allocate --income 5000 --expenses 3000 --buffer 2500 --goals goals.json
    """
    try:
        calculator = _calculator(assumptions_file)
        goals = load_goals(goals_file) if goals_file else []
        accounts = load_accounts(accounts_file) if accounts_file else []
        plan = calculator.calculate_allocation(income, expenses, current_buffer, goals, adults=adults)
        transfers = calculator.recommend_transfers(plan, goals, accounts)
    except FireplanError as e:
        raise click.ClickException(str(e)) from e

    click.echo(
        format_json(
            {
                "plan": plan.to_dict(),
                "transfers": [transfer.to_dict() for transfer in transfers],
            }
        )
    )
