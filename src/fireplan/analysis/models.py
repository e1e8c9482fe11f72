#!/usr/bin/env python3
"""
FIRE Engine Result Models

Value objects returned by FireCalculator. Each exposes to_dict() with money
as two-digit decimal strings, ready for the API layer.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..core.money import Money


class VolatilityScore(Enum):
    """Income volatility tiers by coefficient of variation."""

    LOW = "low"  # cv <= 0.1
    MEDIUM = "medium"  # 0.1 < cv <= 0.2
    HIGH = "high"  # cv > 0.2


class BufferLevel(Enum):
    """Emergency buffer relative to its band."""

    BELOW = "below"
    OPTIMAL = "optimal"
    ABOVE = "above"


@dataclass(frozen=True)
class MonthlySummary:
    """Income, expenses and savings of one calendar month."""

    month: str  # YYYY-MM
    income: Money
    expenses: Money

    @property
    def savings(self) -> Money:
        return self.income - self.expenses

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "income": self.income.to_decimal_str(),
            "expenses": self.expenses.to_decimal_str(),
            "savings": self.savings.to_decimal_str(),
        }


@dataclass(frozen=True)
class BufferStatus:
    current: Money
    target: Money
    status: BufferLevel

    def to_dict(self) -> dict[str, Any]:
        return {
            "current": self.current.to_decimal_str(),
            "target": self.target.to_decimal_str(),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class IncomeVolatility:
    """Spread of monthly income and its classification."""

    average: Money
    standard_deviation: Money
    coefficient_of_variation: float
    score: VolatilityScore

    def to_dict(self) -> dict[str, Any]:
        return {
            "average": self.average.to_decimal_str(),
            "standard_deviation": self.standard_deviation.to_decimal_str(),
            "coefficient_of_variation": self.coefficient_of_variation,
            "score": self.score.value,
        }


@dataclass(frozen=True)
class FireMetrics:
    """
    Financial-independence snapshot for one household.

    time_to_fire is math.inf when the savings rate is not positive.
    """

    monthly_income: Money
    monthly_expenses: Money
    savings_rate: float
    fire_target: Money
    fire_progress: float
    time_to_fire: float
    current_month: str
    monthly_breakdown: list[MonthlySummary]
    buffer_status: BufferStatus
    volatility: IncomeVolatility
    adults: int
    pocket_money: Money

    @property
    def can_reach_fire(self) -> bool:
        return not math.isinf(self.time_to_fire)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary; an unreachable FIRE date becomes None."""
        return {
            "monthly_income": self.monthly_income.to_decimal_str(),
            "monthly_expenses": self.monthly_expenses.to_decimal_str(),
            "savings_rate": self.savings_rate,
            "fire_target": self.fire_target.to_decimal_str(),
            "fire_progress": self.fire_progress,
            "time_to_fire": self.time_to_fire if self.can_reach_fire else None,
            "current_month": self.current_month,
            "monthly_breakdown": [month.to_dict() for month in self.monthly_breakdown],
            "buffer_status": self.buffer_status.to_dict(),
            "volatility": self.volatility.to_dict(),
            "adults": self.adults,
            "pocket_money": self.pocket_money.to_decimal_str(),
        }


@dataclass(frozen=True)
class GoalAllocation:
    goal_id: Any
    amount: Money

    def to_dict(self) -> dict[str, Any]:
        return {"goal_id": self.goal_id, "amount": self.amount.to_decimal_str()}


@dataclass(frozen=True)
class AllocationPlan:
    """
    How one month's income is split.

    goal_allocations never sum to more than excess_for_goals; whatever the
    per-goal caps left over is reported in unallocated.
    """

    pocket_money: Money
    essential_expenses: Money
    buffer_allocation: Money
    excess_for_goals: Money
    goal_allocations: list[GoalAllocation] = field(default_factory=list)
    unallocated: Money | None = None

    @property
    def total_goal_allocation(self) -> Money:
        total = Money.zero(self.excess_for_goals.currency)
        for allocation in self.goal_allocations:
            total = total + allocation.amount
        return total

    def to_dict(self) -> dict[str, Any]:
        unallocated = self.unallocated or Money.zero(self.excess_for_goals.currency)
        return {
            "pocket_money": self.pocket_money.to_decimal_str(),
            "essential_expenses": self.essential_expenses.to_decimal_str(),
            "buffer_allocation": self.buffer_allocation.to_decimal_str(),
            "excess_for_goals": self.excess_for_goals.to_decimal_str(),
            "goal_allocations": [allocation.to_dict() for allocation in self.goal_allocations],
            "unallocated": unallocated.to_decimal_str(),
        }


@dataclass(frozen=True)
class TransferRecommendation:
    """A suggested transfer funding one goal."""

    goal_id: Any
    goal_name: str
    amount: Money
    from_iban: str | None
    to_iban: str | None
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "goal_id": self.goal_id,
            "goal_name": self.goal_name,
            "amount": self.amount.to_decimal_str(),
            "currency": self.amount.currency,
            "from_iban": self.from_iban,
            "to_iban": self.to_iban,
            "reason": self.reason,
        }
