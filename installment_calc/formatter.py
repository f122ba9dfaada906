"""Output helpers for the installment calculator.

This module renders a calculation summary and the monthly breakdown as plain
text tables for the terminal.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from .data_models import CalculationResult, PaymentBreakdownEntry


def format_percentage(value: object) -> str:
    if value is None:
        return "N/A"
    return f"{value:.2f}%"


def print_summary(original_price: Decimal, result: CalculationResult) -> None:
    """Print the summary metrics in a human-readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Original price     : {original_price:.2f}")
    print(f"Total payment      : {result.total_payment:.2f}")
    print(f"Total interest     : {result.total_interest:.2f}")
    print(f"Interest rate      : {format_percentage(result.interest_percentage)}")
    print(f"Months             : {len(result.monthly_breakdown)}")
    for note in result.warnings:
        print(f"Warning            : {note}")
    print("-" * 72)


def print_schedule(schedule: Iterable[PaymentBreakdownEntry]) -> None:
    """Print the monthly breakdown as a tab separated table."""
    headers = ["Month", "Payment", "Principal", "Interest", "Balance"]
    print("\t".join(headers))
    for entry in schedule:
        row = [
            str(entry.month),
            f"{entry.payment:.2f}",
            f"{entry.principal_paid:.2f}",
            f"{entry.interest_paid:.2f}",
            f"{entry.remaining_balance:.2f}",
        ]
        print("\t".join(row))
