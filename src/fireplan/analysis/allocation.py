#!/usr/bin/env python3
"""
Goal Allocation

Orders savings goals, splits the monthly excess across them by deficit and
turns the resulting plan into transfer recommendations.
"""

import logging
from datetime import date

from ..core.currency import (
    WeightedAllocation,
    distribute_amount,
    from_cents,
    to_cents,
    validate_transfer_amount,
)
from ..core.models import Account, Goal
from ..core.money import Money
from .models import AllocationPlan, GoalAllocation, TransferRecommendation

logger = logging.getLogger(__name__)


def goal_sort_key(goal: Goal) -> tuple[int, bool, date]:
    """Ascending priority, then earliest target date; undated goals last."""
    target = goal.target_date.date if goal.target_date else date.max
    return (goal.priority, goal.target_date is None, target)


def fundable_goals(goals: list[Goal]) -> list[Goal]:
    """Incomplete goals with a positive deficit, in funding order."""
    open_goals = [goal for goal in goals if not goal.is_completed and goal.deficit.is_positive()]
    return sorted(open_goals, key=goal_sort_key)


def split_excess(excess: Money, goals: list[Goal]) -> tuple[list[GoalAllocation], Money]:
    """
    Distribute the excess across goals proportionally to their deficits.

    Each share is capped at the goal's deficit. The capped remainder is not
    handed to other goals; it comes back as the second element.

    Args:
        excess: Positive amount available for goals
        goals: Goals in funding order, each with a positive deficit

    Returns:
        Tuple of (non-zero allocations in goal order, unallocated remainder)
    """
    if not goals or not excess.is_positive():
        return [], excess

    weights = [WeightedAllocation(id=goal.id, weight=goal.deficit.cents) for goal in goals]
    shares = distribute_amount(from_cents(excess.cents), weights)

    allocations = []
    allocated = 0
    for goal, share in zip(goals, shares):
        cents = min(to_cents(share.amount), goal.deficit.cents)
        if cents <= 0:
            continue
        if cents < to_cents(share.amount):
            logger.debug(f"Capped allocation for goal {goal.id} at its deficit {goal.deficit.to_decimal_str()}")
        allocations.append(GoalAllocation(goal_id=goal.id, amount=Money.from_cents(cents, excess.currency)))
        allocated += cents

    return allocations, Money.from_cents(excess.cents - allocated, excess.currency)


def find_source_account(accounts: list[Account]) -> Account | None:
    """First active checking account, the default source of goal transfers."""
    for account in accounts:
        if account.is_active and account.account_type == "checking":
            return account
    return None


def recommend_transfers(
    plan: AllocationPlan, goals: list[Goal], accounts: list[Account]
) -> list[TransferRecommendation]:
    """
    Turn goal allocations into transfer suggestions.

    Allocations whose amount is outside the transfer limits are skipped.

    Args:
        plan: Result of FireCalculator.calculate_allocation
        goals: The goals the plan was computed for
        accounts: Household accounts; the first active checking account is the source

    Returns:
        One recommendation per transferable allocation, in plan order
    """
    goals_by_id = {goal.id: goal for goal in goals}
    source = find_source_account(accounts)
    if source is None and plan.goal_allocations:
        logger.warning("No active checking account found; transfers have no source account")

    recommendations = []
    for allocation in plan.goal_allocations:
        goal = goals_by_id.get(allocation.goal_id)
        if goal is None:
            logger.warning(f"Allocation references unknown goal {allocation.goal_id}, skipping")
            continue

        check = validate_transfer_amount(allocation.amount.to_decimal_str())
        if not check:
            logger.warning(f"Skipping transfer for goal {goal.id}: {check.error}")
            continue

        recommendations.append(
            TransferRecommendation(
                goal_id=goal.id,
                goal_name=goal.name,
                amount=allocation.amount,
                from_iban=source.iban if source else None,
                to_iban=goal.linked_account_iban,
                reason=(
                    f"Monthly contribution of {allocation.amount.format()} towards '{goal.name}' "
                    f"(priority {goal.priority}, {goal.deficit.format()} remaining)"
                ),
            )
        )

    logger.info(f"Recommended {len(recommendations)} transfers for {len(plan.goal_allocations)} allocations")
    return recommendations
