#!/usr/bin/env python3
"""
Statement CLI - CAMT.053 Import

Parses a bank statement and emits the normalized account and transactions
as JSON for the storage layer.
"""

from pathlib import Path
from typing import Optional

import click

from ..camt import CamtParser
from ..core.config import get_config
from ..core.errors import MalformedDocumentError
from ..core.json_utils import format_json, write_json


@click.command()
@click.argument("statement", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write JSON to this file instead of stdout",
)
@click.option("--save", is_flag=True, help="Write JSON to <data dir>/imports/<statement id>.json")
@click.pass_context
def parse(ctx: click.Context, statement: Path, output: Optional[Path], save: bool) -> None:
    """
    Parse a CAMT.053 statement into account and transaction JSON.

    Examples:
      fireplan parse statement.xml -o statement.json
      fireplan parse statement.xml --save
    """
    if output and save:
        raise click.UsageError("--output and --save cannot be used together")

    try:
        parsed = CamtParser().parse_file(statement)
    except MalformedDocumentError as e:
        raise click.ClickException(str(e)) from e

    data = parsed.to_dict()

    if save:
        config = ctx.obj["config"] if ctx.obj and "config" in ctx.obj else get_config()
        output = config.statement_path(parsed.statement_id)

    if output is None:
        click.echo(format_json(data))
        return

    write_json(output, data)
    click.echo(f"Parsed {parsed.transaction_count} transactions for statement {parsed.statement_id}")
    click.echo(f"Closing balance: {parsed.account.balance.format()}")
    click.echo(f"Saved to: {output}")

    if ctx.obj and ctx.obj.get("verbose"):
        click.echo(f"Account holder: {parsed.account.account_holder_name}")
        click.echo(f"Bank: {parsed.account.bank_name}")
