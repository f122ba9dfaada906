"""Exceptions raised by the installment calculator.

All errors derive from ``ValueError`` so callers that already guard numeric
parsing with ``except ValueError`` keep working. None of them are fatal: the
form reducer, the CLI and the web layer each turn them into a message.
"""

from __future__ import annotations


class CalculatorError(ValueError):
    """Base class for calculator errors."""


class FieldFormatError(CalculatorError):
    """Raw text for a single input field is not an unsigned decimal number."""

    def __init__(self, field: str, label: str, raw: str) -> None:
        self.field = field
        self.label = label
        self.raw = raw
        super().__init__(f"Please enter a valid number for {label}")


class DegenerateInputError(CalculatorError):
    """Inputs that cannot produce a usable schedule (e.g. an absurd term)."""
