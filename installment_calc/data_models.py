"""Data models for the installment calculator.

This module defines dataclasses for the calculation input, the individual
month entries of the payment breakdown and the overall result. Results are
frozen: a recalculation produces a new ``CalculationResult`` rather than
mutating the previous one.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


@dataclass(frozen=True)
class CalculationInput:
    """The three numbers a calculation starts from.

    Attributes
    ----------
    original_price: Decimal
        Price of the purchased item, i.e. the principal being repaid.
    monthly_payment: Decimal
        The fixed installment paid every month except the last one.
    months: int
        Number of payment periods.
    """

    original_price: Decimal
    monthly_payment: Decimal
    months: int


@dataclass(frozen=True)
class PaymentBreakdownEntry:
    """One month of the payment breakdown.

    Monetary values are already rounded to two decimal places. The
    ``remaining_balance`` is floored at zero for display; the engine keeps
    accumulating on the unfloored value.
    """

    month: int
    payment: Decimal
    principal_paid: Decimal
    interest_paid: Decimal
    remaining_balance: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "payment": _money(self.payment),
            "principal_paid": _money(self.principal_paid),
            "interest_paid": _money(self.interest_paid),
            "remaining_balance": _money(self.remaining_balance),
        }


@dataclass(frozen=True)
class CalculationResult:
    """Summary metrics plus the month-by-month breakdown.

    ``interest_percentage`` is ``None`` when it is undefined, which happens
    when the original price is zero. ``warnings`` collects notes about
    degenerate input (zero price, negative values) that did not stop the
    calculation.
    """

    total_payment: Decimal
    total_interest: Decimal
    interest_percentage: Optional[Decimal]
    monthly_breakdown: Tuple[PaymentBreakdownEntry, ...]
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable representation.

        Monetary values are rendered as two-decimal strings so that repeated
        calculations serialize identically.
        """
        return {
            "total_payment": _money(self.total_payment),
            "total_interest": _money(self.total_interest),
            "interest_percentage": (
                _money(self.interest_percentage)
                if self.interest_percentage is not None
                else None
            ),
            "monthly_breakdown": [e.to_dict() for e in self.monthly_breakdown],
            "warnings": list(self.warnings),
        }
