"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from fireplan.core import config as config_module
from fireplan.core.dates import FinancialDate
from fireplan.core.models import Goal, Transaction

from .fixtures.camt_samples import SAMPLE_STATEMENT
from .fixtures.synthetic_data import make_goal, monthly_history


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def sample_statement_file(temp_dir: Path) -> Path:
    path = temp_dir / "statement.xml"
    path.write_text(SAMPLE_STATEMENT, encoding="utf-8")
    return path


@pytest.fixture
def sample_goals() -> list[Goal]:
    """Emergency fund plus two savings goals of different priority."""
    return [
        make_goal(1, "Emergency Fund", target="4000.00", current="3500.00", priority=1),
        make_goal(2, "Vacation", target="2000.00", current="500.00", priority=2, target_date="2025-06-01"),
        make_goal(3, "New Car", target="10000.00", current="1000.00", priority=3),
    ]


@pytest.fixture
def six_month_transactions() -> list[Transaction]:
    """Stable income of 5000.00 and expenses of 3000.00 for January to June 2024."""
    return monthly_history(
        months=["2024-01", "2024-02", "2024-03", "2024-04", "2024-05", "2024-06"],
        incomes=["5000.00"] * 6,
        expenses=["3000.00"] * 6,
    )


@pytest.fixture
def as_of_june() -> FinancialDate:
    return FinancialDate.from_string("2024-06-30")


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Point configuration at a throwaway test environment."""
    # Ensure tests never touch real data
    monkeypatch.setenv("FIREPLAN_ENV", "test")
    monkeypatch.setenv("FIREPLAN_DATA_DIR", str(tmp_path / "fireplan_data"))
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)

    # Drop any configuration cached by an earlier test
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "camt: Tests for CAMT.053 statement parsing")
    config.addinivalue_line("markers", "fire: Tests for FIRE metrics and allocation")
    config.addinivalue_line("markers", "slow: Tests that take significant time to run")
