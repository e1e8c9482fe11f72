"""
fireplan - Bank Statement Import and FIRE Planning

Imports ISO 20022 CAMT.053 bank statements and derives financial
independence metrics and a monthly savings allocation from them.

Key Features:
- Defensive CAMT.053 parsing with plain and currency-annotated amounts
- Exact decimal currency arithmetic in integer cents
- FIRE metrics: savings rate, income volatility, time to FIRE
- Proportional goal allocation with cent-exact rounding

Domain Packages:
- core: Currency handling, data models, configuration
- camt: CAMT.053 statement parsing
- analysis: FIRE metrics, allocation and transfer recommendations
- cli: Command-line interface

Example Usage:
    from fireplan.camt import CamtParser
    from fireplan.analysis import FireCalculator

    statement = CamtParser().parse_file("statement.xml")
    metrics = FireCalculator().calculate_metrics(statement.transactions, goals=[])
"""

__version__ = "0.1.0"
__author__ = "Karl Davis"

from .core.config import Environment, get_config
from .core.currency import distribute_amount, from_cents, to_cents
from .core.errors import CurrencyError, FireplanError, MalformedDocumentError
from .core.models import Account, Goal, Transaction
from .core.money import Money

__all__ = [
    # Currency
    "distribute_amount",
    "from_cents",
    "to_cents",
    "Money",
    # Models
    "Account",
    "Goal",
    "Transaction",
    # Errors
    "CurrencyError",
    "FireplanError",
    "MalformedDocumentError",
    # Configuration
    "Environment",
    "get_config",
]
