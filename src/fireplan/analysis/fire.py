#!/usr/bin/env python3
"""
FIRE Metrics and Allocation Engine

Derives financial-independence metrics from booked transactions and splits a
month's income into pocket money, emergency buffer and savings goals.

Money is summed in integer cents throughout; floats appear only in the
ratios (savings rate, progress, coefficient of variation) and the
time-to-FIRE estimate.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

import numpy as np
import pandas as pd
from scipy import stats

from ..core.currency import AmountLike, multiply_cents, to_cents
from ..core.dates import FinancialDate
from ..core.models import Account, Goal, Transaction
from ..core.money import Money
from . import allocation
from .assumptions import FireAssumptions
from .models import (
    AllocationPlan,
    BufferLevel,
    BufferStatus,
    FireMetrics,
    IncomeVolatility,
    MonthlySummary,
    TransferRecommendation,
    VolatilityScore,
)

logger = logging.getLogger(__name__)

EMERGENCY_GOAL_KEYWORD = "emergency"
MONTHS_PER_YEAR = 12


def _mean_cents(values: list[int]) -> int:
    """Arithmetic mean of cent values, rounded half-up to the cent; 0 if empty."""
    if not values:
        return 0
    mean = Decimal(sum(values)) / Decimal(len(values))
    return int(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _float_to_cents(value: float) -> int:
    return int(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


class FireCalculator:
    """
    Computes FIRE metrics, allocation plans and transfer recommendations.

    Holds nothing but its assumptions, so instances with different
    assumptions can be used side by side.

    Example:
        calculator = FireCalculator()
        metrics = calculator.calculate_metrics(transactions, goals, accounts)
        plan = calculator.calculate_allocation(metrics.monthly_income, metrics.monthly_expenses,
                                               metrics.buffer_status.current, goals)
    """

    def __init__(self, assumptions: Optional[FireAssumptions] = None):
        self.assumptions = assumptions or FireAssumptions()

    @property
    def currency(self) -> str:
        return self.assumptions.currency

    def _money(self, cents: int) -> Money:
        return Money.from_cents(cents, self.currency)

    def _as_money(self, value: Union[Money, AmountLike]) -> Money:
        if isinstance(value, Money):
            return value
        return self._money(to_cents(value))

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def calculate_metrics(
        self,
        transactions: list[Transaction],
        goals: list[Goal],
        accounts: Optional[list[Account]] = None,
        adults: int = 2,
        as_of: Optional[FinancialDate] = None,
    ) -> FireMetrics:
        """
        Calculate FIRE metrics for a household.

        Args:
            transactions: Booked transactions of the household's accounts
            goals: Savings goals; their current amounts count as FIRE savings
            accounts: When given, transactions of inactive accounts are ignored
            adults: Number of adults drawing pocket money
            as_of: Restrict to the look-back window ending on this date

        Returns:
            FireMetrics snapshot
        """
        selected = self._select_transactions(transactions, accounts or [], as_of)
        monthly = self._monthly_totals(selected)

        income_values = [int(v) for v in monthly["income"] if v > 0]
        expense_values = [int(v) for v in monthly["expenses"] if v > 0]
        avg_income = _mean_cents(income_values)
        avg_expenses = _mean_cents(expense_values)

        volatility = self._income_volatility(income_values, avg_income)
        buffer_status = self._buffer_status(goals)

        fire_target = multiply_cents(avg_expenses, MONTHS_PER_YEAR * self.assumptions.fire_target_multiple)
        fire_progress = self._fire_progress(goals, fire_target)
        savings_rate = self._savings_rate(avg_income, avg_expenses)
        time_to_fire = self.calculate_time_to_fire(savings_rate, fire_progress)

        breakdown = [
            MonthlySummary(month=month, income=self._money(int(row.income)), expenses=self._money(int(row.expenses)))
            for month, row in monthly.tail(self.assumptions.lookback_months).iterrows()
        ]

        if as_of is not None:
            current_month = as_of.month_key()
        elif selected:
            current_month = max(t.date for t in selected).month_key()
        else:
            current_month = FinancialDate.today().month_key()

        logger.info(
            f"FIRE metrics for {current_month}: {len(selected)} transactions over {len(monthly)} months, "
            f"savings rate {savings_rate:.1%}, progress {fire_progress:.1%}"
        )

        return FireMetrics(
            monthly_income=self._money(avg_income),
            monthly_expenses=self._money(avg_expenses),
            savings_rate=savings_rate,
            fire_target=self._money(fire_target),
            fire_progress=fire_progress,
            time_to_fire=time_to_fire,
            current_month=current_month,
            monthly_breakdown=breakdown,
            buffer_status=buffer_status,
            volatility=volatility,
            adults=adults,
            pocket_money=self._money(self.assumptions.pocket_money_per_adult_cents * adults),
        )

    def _select_transactions(
        self, transactions: list[Transaction], accounts: list[Account], as_of: Optional[FinancialDate]
    ) -> list[Transaction]:
        inactive = {account.iban for account in accounts if not account.is_active}
        selected = []
        skipped_currency = 0
        for transaction in transactions:
            if transaction.account_iban in inactive:
                continue
            if transaction.currency != self.currency:
                skipped_currency += 1
                continue
            selected.append(transaction)

        if skipped_currency:
            logger.warning(f"Ignored {skipped_currency} transactions not in {self.currency}")

        if as_of is not None:
            start = as_of.add_months(-self.assumptions.lookback_months)
            selected = [t for t in selected if start <= t.date <= as_of]
            logger.debug(f"Look-back window {start} to {as_of}: {len(selected)} transactions")

        return selected

    def _monthly_totals(self, transactions: list[Transaction]) -> pd.DataFrame:
        """Income and expense magnitude per YYYY-MM, in cents, sorted by month."""
        if not transactions:
            return pd.DataFrame({"income": pd.Series(dtype="int64"), "expenses": pd.Series(dtype="int64")})

        df = pd.DataFrame(
            {
                "month": [t.date.month_key() for t in transactions],
                "cents": [t.amount.cents for t in transactions],
            }
        )
        df["income"] = df["cents"].where(df["cents"] > 0, 0)
        df["expenses"] = (-df["cents"]).where(df["cents"] < 0, 0)

        monthly = df.groupby("month")[["income", "expenses"]].sum().sort_index()
        return monthly.astype("int64")

    def _income_volatility(self, income_values: list[int], avg_income: int) -> IncomeVolatility:
        if not income_values or avg_income == 0:
            return IncomeVolatility(
                average=self._money(avg_income),
                standard_deviation=self._money(0),
                coefficient_of_variation=0.0,
                score=VolatilityScore.LOW,
            )

        incomes = np.array(income_values, dtype=float)
        std_dev = float(np.std(incomes, ddof=0))
        cv = float(stats.variation(incomes))
        if not math.isfinite(cv):
            cv = 0.0

        return IncomeVolatility(
            average=self._money(avg_income),
            standard_deviation=self._money(_float_to_cents(std_dev)),
            coefficient_of_variation=cv,
            score=self.classify_volatility(cv),
        )

    def classify_volatility(self, cv: float) -> VolatilityScore:
        """Map a coefficient of variation to a score; both thresholds are exclusive."""
        if cv > self.assumptions.volatility_high_threshold:
            return VolatilityScore.HIGH
        if cv > self.assumptions.volatility_medium_threshold:
            return VolatilityScore.MEDIUM
        return VolatilityScore.LOW

    def find_emergency_goal(self, goals: list[Goal]) -> Optional[Goal]:
        for goal in goals:
            if EMERGENCY_GOAL_KEYWORD in goal.name.lower():
                return goal
        return None

    def _buffer_status(self, goals: list[Goal]) -> BufferStatus:
        emergency = self.find_emergency_goal(goals)
        current = emergency.current_amount.cents if emergency else 0

        if current < self.assumptions.buffer_min_cents:
            level = BufferLevel.BELOW
        elif current > self.assumptions.buffer_max_cents:
            level = BufferLevel.ABOVE
        else:
            level = BufferLevel.OPTIMAL

        return BufferStatus(
            current=self._money(current),
            target=self._money(self.assumptions.buffer_target_cents),
            status=level,
        )

    def _fire_progress(self, goals: list[Goal], fire_target: int) -> float:
        savings = sum(goal.current_amount.cents for goal in goals if goal.current_amount.currency == self.currency)
        if fire_target <= 0:
            # Without expenses any savings already cover the target
            return 1.0 if savings > 0 else 0.0
        progress = min(savings, fire_target) / fire_target
        return min(max(progress, 0.0), 1.0)

    @staticmethod
    def _savings_rate(avg_income: int, avg_expenses: int) -> float:
        if avg_income <= 0:
            return 0.0
        rate = (avg_income - avg_expenses) / avg_income
        return rate if math.isfinite(rate) else 0.0

    def calculate_time_to_fire(self, savings_rate: float, fire_progress: float) -> float:
        """
        Years until the FIRE target is reached.

        Uses ln(1 + (1 - progress) * multiple * swr / savings_rate) / ln(1 + return).

        Returns:
            Non-negative years, or math.inf when nothing is being saved
        """
        if not math.isfinite(savings_rate) or savings_rate <= 0:
            return math.inf

        a = self.assumptions
        remaining = 1.0 - min(max(fire_progress, 0.0), 1.0)
        years = math.log(1 + remaining * a.fire_target_multiple * a.safe_withdrawal_rate / savings_rate) / math.log(
            1 + a.expected_return
        )
        return max(years, 0.0)

    # ------------------------------------------------------------------
    # Allocation
    # ------------------------------------------------------------------

    def calculate_allocation(
        self,
        monthly_income: Union[Money, AmountLike],
        monthly_expenses: Union[Money, AmountLike],
        current_buffer: Union[Money, AmountLike],
        goals: list[Goal],
        adults: int = 2,
    ) -> AllocationPlan:
        """
        Split one month's income.

        Order: essential expenses, pocket money for each adult, a top-up of
        the emergency buffer (at most buffer_income_share of income), then
        the rest across open goals by deficit.

        Args:
            monthly_income: Income for the month (Money or decimal amount)
            monthly_expenses: Essential expenses for the month
            current_buffer: Current emergency buffer balance
            goals: Savings goals; completed ones are ignored
            adults: Number of adults drawing pocket money

        Returns:
            AllocationPlan; goal allocations never exceed excess_for_goals
        """
        income = self._as_money(monthly_income)
        expenses = self._as_money(monthly_expenses)
        buffer = self._as_money(current_buffer)
        zero = self._money(0)

        pocket_money = self._money(self.assumptions.pocket_money_per_adult_cents * adults)

        buffer_gap = max(self.assumptions.buffer_target_cents - buffer.cents, 0)
        buffer_cap = max(multiply_cents(income.cents, self.assumptions.buffer_income_share), 0)
        buffer_allocation = self._money(min(buffer_gap, buffer_cap))

        excess = income - expenses - pocket_money - buffer_allocation
        if not excess.is_positive():
            logger.info(f"No excess for goals this month ({excess.format()})")
            return AllocationPlan(
                pocket_money=pocket_money,
                essential_expenses=expenses,
                buffer_allocation=buffer_allocation,
                excess_for_goals=zero,
                goal_allocations=[],
                unallocated=zero,
            )

        candidates = allocation.fundable_goals(goals)
        goal_allocations, unallocated = allocation.split_excess(excess, candidates)

        logger.info(
            f"Allocated {excess.format()} excess across {len(goal_allocations)} goals, "
            f"{unallocated.format()} unallocated"
        )

        return AllocationPlan(
            pocket_money=pocket_money,
            essential_expenses=expenses,
            buffer_allocation=buffer_allocation,
            excess_for_goals=excess,
            goal_allocations=goal_allocations,
            unallocated=unallocated,
        )

    def recommend_transfers(
        self, plan: AllocationPlan, goals: list[Goal], accounts: list[Account]
    ) -> list[TransferRecommendation]:
        """Transfer suggestions for a plan; see allocation.recommend_transfers."""
        return allocation.recommend_transfers(plan, goals, accounts)
