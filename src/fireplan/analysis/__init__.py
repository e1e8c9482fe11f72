"""
FIRE Analysis Package

Financial-independence metrics and monthly allocation planning over
imported transactions and savings goals.

Key Components:
- FireCalculator: metrics, allocation plans and transfer recommendations
- FireAssumptions: every engine tunable, optionally loaded from YAML
- loader: JSON input files for the command line

Features:
- Monthly income/expense aggregation over a look-back window
- Income volatility via coefficient of variation
- Emergency buffer tracking against a configurable band
- Deficit-weighted goal allocation that never over-funds a goal
"""

from .assumptions import FireAssumptions
from .fire import FireCalculator
from .loader import load_accounts, load_goals, load_transactions
from .models import (
    AllocationPlan,
    BufferLevel,
    BufferStatus,
    FireMetrics,
    GoalAllocation,
    IncomeVolatility,
    MonthlySummary,
    TransferRecommendation,
    VolatilityScore,
)

__all__ = [
    "AllocationPlan",
    "BufferLevel",
    "BufferStatus",
    "FireAssumptions",
    "FireCalculator",
    "FireMetrics",
    "GoalAllocation",
    "IncomeVolatility",
    "MonthlySummary",
    "TransferRecommendation",
    "VolatilityScore",
    "load_accounts",
    "load_goals",
    "load_transactions",
]
