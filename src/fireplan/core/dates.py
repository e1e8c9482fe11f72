#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable date wrapper with consistent formatting for financial operations.
Provides standardized date handling for statement entries, goals and
monthly aggregation.
"""

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True, order=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        return cls(date=datetime.strptime(date_str.strip(), format).date())

    @classmethod
    def from_iso_datetime(cls, value: str) -> "FinancialDate":
        """
        Parse an ISO 8601 date or date-time, keeping only the calendar date.

        CAMT uses both "2024-03-01" and "2024-03-01T10:15:00+01:00".
        """
        text = value.strip()
        if "T" in text:
            text = text.split("T", 1)[0]
        return cls.from_string(text)

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def month_key(self) -> str:
        """Calendar month bucket as YYYY-MM."""
        return f"{self.date.year:04d}-{self.date.month:02d}"

    def add_months(self, months: int) -> "FinancialDate":
        """
        Shift by whole calendar months, clamping the day to the target month's length.

        Example:
            2024-08-31 minus 6 months -> 2024-02-29
        """
        month_index = self.date.year * 12 + (self.date.month - 1) + months
        year, month = divmod(month_index, 12)
        day = min(self.date.day, monthrange(year, month + 1)[1])
        return FinancialDate(date=date(year, month + 1, day))

    def __str__(self) -> str:
        """String representation."""
        return self.to_iso_string()

    def __repr__(self) -> str:
        """Repr format."""
        return f"FinancialDate(date={self.date!r})"
