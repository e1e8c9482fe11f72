#!/usr/bin/env python3
"""Tests for FIRE metrics calculation."""

import math

import pytest

from fireplan.analysis import BufferLevel, FireAssumptions, FireCalculator, VolatilityScore
from fireplan.core.dates import FinancialDate
from tests.fixtures.synthetic_data import SAVINGS_IBAN, make_account, make_goal, make_transaction, monthly_history

MONTHS = ["2024-01", "2024-02", "2024-03", "2024-04", "2024-05", "2024-06", "2024-07", "2024-08"]


def expected_years(savings_rate: float, progress: float, multiple: int = 25) -> float:
    return math.log(1 + (1 - progress) * multiple * 0.04 / savings_rate) / math.log(1.07)


@pytest.fixture
def calculator() -> FireCalculator:
    return FireCalculator()


@pytest.mark.fire
class TestAverages:
    """Monthly bucketing and averages."""

    def test_stable_household(self, calculator, six_month_transactions, sample_goals):
        metrics = calculator.calculate_metrics(six_month_transactions, sample_goals, [])

        assert metrics.monthly_income.to_decimal_str() == "5000.00"
        assert metrics.monthly_expenses.to_decimal_str() == "3000.00"
        assert metrics.savings_rate == pytest.approx(0.4)
        assert metrics.current_month == "2024-06"

    def test_averages_round_half_up_to_the_cent(self, calculator):
        transactions = monthly_history(["2024-01", "2024-02"], ["100.00", "100.01"], ["0", "0"])
        metrics = calculator.calculate_metrics(transactions, [])

        assert metrics.monthly_income.to_decimal_str() == "100.01"

    def test_series_averaged_over_their_own_months(self, calculator):
        # Income in three months, expenses in one
        transactions = monthly_history(
            ["2024-01", "2024-02", "2024-03"], ["3000.00", "3000.00", "3000.00"], ["0", "0", "600.00"]
        )
        metrics = calculator.calculate_metrics(transactions, [])

        assert metrics.monthly_income.to_decimal_str() == "3000.00"
        assert metrics.monthly_expenses.to_decimal_str() == "600.00"

    def test_several_entries_per_month_are_summed(self, calculator):
        transactions = [
            make_transaction("2024-03-01", "1000.00"),
            make_transaction("2024-03-20", "500.00"),
            make_transaction("2024-03-05", "-200.00"),
            make_transaction("2024-03-06", "-50.50"),
        ]
        metrics = calculator.calculate_metrics(transactions, [])

        assert metrics.monthly_income.to_decimal_str() == "1500.00"
        assert metrics.monthly_expenses.to_decimal_str() == "250.50"
        assert len(metrics.monthly_breakdown) == 1
        assert metrics.monthly_breakdown[0].savings.to_decimal_str() == "1249.50"


@pytest.mark.fire
class TestWindowAndFiltering:
    """Look-back window, inactive accounts and foreign currencies."""

    def test_as_of_restricts_window(self, calculator):
        transactions = monthly_history(MONTHS, ["1000.00"] * 6 + ["9000.00"] * 2, ["500.00"] * 8)
        metrics = calculator.calculate_metrics(transactions, [], as_of=FinancialDate.from_string("2024-06-30"))

        assert metrics.monthly_income.to_decimal_str() == "1000.00"
        assert metrics.current_month == "2024-06"
        assert [m.month for m in metrics.monthly_breakdown] == MONTHS[:6]

    def test_window_start_is_lookback_months_before_as_of(self, calculator):
        transactions = monthly_history(MONTHS, ["1000.00"] * 8, ["500.00"] * 8)
        metrics = calculator.calculate_metrics(transactions, [], as_of=FinancialDate.from_string("2024-08-31"))

        # Window starts 2024-02-29, so January and all of February's entries fall outside
        assert [m.month for m in metrics.monthly_breakdown] == MONTHS[2:]

    def test_breakdown_limited_to_recent_months_without_as_of(self, calculator):
        transactions = monthly_history(MONTHS, ["1000.00"] * 8, ["500.00"] * 8)
        metrics = calculator.calculate_metrics(transactions, [])

        assert len(metrics.monthly_breakdown) == 6
        assert metrics.monthly_breakdown[0].month == "2024-03"
        assert metrics.monthly_breakdown[-1].month == "2024-08"
        assert metrics.current_month == "2024-08"

    def test_breakdown_is_chronological(self, calculator):
        transactions = [
            make_transaction("2024-05-01", "10.00"),
            make_transaction("2024-03-01", "10.00"),
            make_transaction("2023-12-01", "10.00"),
        ]
        metrics = calculator.calculate_metrics(transactions, [])
        assert [m.month for m in metrics.monthly_breakdown] == ["2023-12", "2024-03", "2024-05"]

    def test_inactive_accounts_are_ignored(self, calculator):
        transactions = [
            make_transaction("2024-03-01", "1000.00"),
            make_transaction("2024-03-02", "5000.00", account_iban=SAVINGS_IBAN),
        ]
        accounts = [make_account(), make_account(iban=SAVINGS_IBAN, is_active=False)]

        metrics = calculator.calculate_metrics(transactions, [], accounts)

        assert metrics.monthly_income.to_decimal_str() == "1000.00"

    def test_foreign_currency_transactions_are_ignored(self, calculator):
        transactions = [
            make_transaction("2024-03-01", "1000.00"),
            make_transaction("2024-03-02", "5000.00", currency="USD"),
        ]
        metrics = calculator.calculate_metrics(transactions, [])
        assert metrics.monthly_income.to_decimal_str() == "1000.00"


@pytest.mark.fire
class TestVolatility:
    """Income volatility classification."""

    @pytest.mark.parametrize(
        "cv,expected",
        [
            (0.05, VolatilityScore.LOW),
            (0.1, VolatilityScore.LOW),
            (0.15, VolatilityScore.MEDIUM),
            (0.2, VolatilityScore.MEDIUM),
            (0.25, VolatilityScore.HIGH),
            (0.0, VolatilityScore.LOW),
        ],
    )
    def test_classify_volatility(self, calculator, cv, expected):
        assert calculator.classify_volatility(cv) == expected

    def test_stable_income_is_low(self, calculator, six_month_transactions):
        volatility = calculator.calculate_metrics(six_month_transactions, []).volatility

        assert volatility.standard_deviation.is_zero()
        assert volatility.coefficient_of_variation == 0.0
        assert volatility.score == VolatilityScore.LOW

    def test_population_standard_deviation(self, calculator):
        transactions = monthly_history(MONTHS[:3], ["4000.00", "5000.00", "6000.00"], ["0"] * 3)
        volatility = calculator.calculate_metrics(transactions, []).volatility

        assert volatility.average.to_decimal_str() == "5000.00"
        assert volatility.standard_deviation.to_decimal_str() == "816.50"
        assert volatility.coefficient_of_variation == pytest.approx(math.sqrt(2 / 3) / 5)
        assert volatility.score == VolatilityScore.MEDIUM

    def test_highly_variable_income(self, calculator):
        transactions = monthly_history(MONTHS[:3], ["2000.00", "5000.00", "8000.00"], ["0"] * 3)
        assert calculator.calculate_metrics(transactions, []).volatility.score == VolatilityScore.HIGH

    def test_custom_thresholds(self):
        calculator = FireCalculator(FireAssumptions(volatility_medium_threshold=0.01, volatility_high_threshold=0.02))
        assert calculator.classify_volatility(0.05) == VolatilityScore.HIGH


@pytest.mark.fire
class TestBufferStatus:
    """Emergency buffer detection and classification."""

    @pytest.mark.parametrize(
        "current,expected",
        [
            ("2999.99", BufferLevel.BELOW),
            ("3000.00", BufferLevel.OPTIMAL),
            ("4000.00", BufferLevel.OPTIMAL),
            ("4000.01", BufferLevel.ABOVE),
        ],
    )
    def test_levels(self, calculator, current, expected):
        goals = [make_goal(1, "My EMERGENCY fund", target="4000.00", current=current)]
        status = calculator.calculate_metrics([], goals).buffer_status

        assert status.status == expected
        assert status.current.to_decimal_str() == current
        assert status.target.to_decimal_str() == "3500.00"

    def test_first_matching_goal_is_used(self, calculator):
        goals = [
            make_goal(1, "Vacation", target="1000.00", current="900.00"),
            make_goal(2, "Emergency", target="4000.00", current="100.00"),
            make_goal(3, "Emergency backup", target="4000.00", current="3500.00"),
        ]
        assert calculator.calculate_metrics([], goals).buffer_status.current.to_decimal_str() == "100.00"

    def test_no_emergency_goal(self, calculator):
        status = calculator.calculate_metrics([], [make_goal(1, "Car", target="100.00")]).buffer_status

        assert status.current.is_zero()
        assert status.status == BufferLevel.BELOW


@pytest.mark.fire
class TestFireProgress:
    """FIRE target, progress and time to FIRE."""

    def test_target_and_progress(self, calculator, six_month_transactions, sample_goals):
        metrics = calculator.calculate_metrics(six_month_transactions, sample_goals)

        # 3000.00 * 12 * 25
        assert metrics.fire_target.to_decimal_str() == "900000.00"
        assert metrics.fire_progress == pytest.approx(5000 / 900000)
        assert metrics.time_to_fire == pytest.approx(expected_years(0.4, 5000 / 900000))

    def test_progress_is_capped_at_one(self, calculator, six_month_transactions):
        goals = [make_goal(1, "Portfolio", target="2000000.00", current="1000000.00")]
        metrics = calculator.calculate_metrics(six_month_transactions, goals)

        assert metrics.fire_progress == 1.0
        assert metrics.time_to_fire == 0.0

    def test_negative_savings_never_reach_fire(self, calculator):
        transactions = monthly_history(MONTHS[:2], ["1000.00"] * 2, ["2000.00"] * 2)
        metrics = calculator.calculate_metrics(transactions, [])

        assert metrics.savings_rate == pytest.approx(-1.0)
        assert math.isinf(metrics.time_to_fire)
        assert metrics.can_reach_fire is False

    def test_zero_savings_rate_never_reaches_fire(self, calculator):
        transactions = monthly_history(MONTHS[:2], ["1000.00"] * 2, ["1000.00"] * 2)
        assert math.isinf(calculator.calculate_metrics(transactions, []).time_to_fire)

    def test_zero_expenses_with_savings_is_complete(self, calculator):
        transactions = monthly_history(MONTHS[:3], ["3000.00"] * 3, ["0"] * 3)
        goals = [make_goal(1, "Portfolio", target="10000.00", current="5000.00")]
        metrics = calculator.calculate_metrics(transactions, goals)

        assert metrics.fire_target.is_zero()
        assert metrics.savings_rate == 1.0
        assert metrics.fire_progress == 1.0
        assert metrics.time_to_fire == 0.0

    def test_zero_expenses_without_savings(self, calculator):
        transactions = monthly_history(MONTHS[:3], ["3000.00"] * 3, ["0"] * 3)
        metrics = calculator.calculate_metrics(transactions, [make_goal(1, "Car", target="100.00")])

        assert metrics.fire_target.is_zero()
        assert metrics.fire_progress == 0.0

    def test_time_to_fire_formula(self, calculator):
        assert calculator.calculate_time_to_fire(0.5, 0.0) == pytest.approx(math.log(3) / math.log(1.07))
        assert math.isinf(calculator.calculate_time_to_fire(0.0, 0.5))
        assert math.isinf(calculator.calculate_time_to_fire(-0.2, 0.5))
        assert math.isinf(calculator.calculate_time_to_fire(float("nan"), 0.5))

    def test_custom_multiple(self, six_month_transactions):
        calculator = FireCalculator(FireAssumptions(fire_target_multiple=30))
        metrics = calculator.calculate_metrics(six_month_transactions, [])

        assert metrics.fire_target.to_decimal_str() == "1080000.00"
        assert metrics.time_to_fire == pytest.approx(expected_years(0.4, 0.0, multiple=30))


@pytest.mark.fire
class TestEmptyInput:
    """Division-by-zero guards."""

    def test_no_transactions(self, calculator):
        metrics = calculator.calculate_metrics([], [])

        assert metrics.monthly_income.is_zero()
        assert metrics.monthly_expenses.is_zero()
        assert metrics.savings_rate == 0.0
        assert metrics.fire_target.is_zero()
        assert metrics.fire_progress == 0.0
        assert math.isinf(metrics.time_to_fire)
        assert metrics.monthly_breakdown == []
        assert metrics.volatility.coefficient_of_variation == 0.0
        assert metrics.current_month == FinancialDate.today().month_key()

    def test_expenses_only(self, calculator):
        transactions = [make_transaction("2024-03-05", "-200.00")]
        metrics = calculator.calculate_metrics(transactions, [])

        assert metrics.savings_rate == 0.0
        assert math.isinf(metrics.time_to_fire)
        assert metrics.volatility.score == VolatilityScore.LOW

    def test_as_of_month_used_without_transactions(self, calculator, as_of_june):
        assert calculator.calculate_metrics([], [], as_of=as_of_june).current_month == "2024-06"


@pytest.mark.fire
class TestSerialization:
    def test_to_dict(self, calculator, six_month_transactions, sample_goals):
        data = calculator.calculate_metrics(six_month_transactions, sample_goals, adults=1).to_dict()

        assert data["monthly_income"] == "5000.00"
        assert data["fire_target"] == "900000.00"
        assert data["pocket_money"] == "150.00"
        assert data["adults"] == 1
        assert data["buffer_status"] == {"current": "3500.00", "target": "3500.00", "status": "optimal"}
        assert data["volatility"]["score"] == "low"
        assert data["monthly_breakdown"][0] == {
            "month": "2024-01",
            "income": "5000.00",
            "expenses": "3000.00",
            "savings": "2000.00",
        }

    def test_infinite_time_to_fire_serializes_as_none(self, calculator):
        assert calculator.calculate_metrics([], []).to_dict()["time_to_fire"] is None

    def test_deterministic(self, calculator, six_month_transactions, sample_goals, as_of_june):
        first = calculator.calculate_metrics(six_month_transactions, sample_goals, as_of=as_of_june).to_dict()
        second = calculator.calculate_metrics(six_month_transactions, sample_goals, as_of=as_of_june).to_dict()
        assert first == second
