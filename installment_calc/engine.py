"""Core calculation engine for the installment calculator.

This module turns an original price, a fixed monthly payment and a number of
months into a payment breakdown. Interest is spread evenly: every month
carries ``total_interest / months`` of interest, regardless of the balance
still outstanding. The last month absorbs whatever balance is left so that the
schedule always ends at exactly zero.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional

from .data_models import CalculationInput, CalculationResult, PaymentBreakdownEntry
from .errors import DegenerateInputError
from .utils import ZERO, Number, coerce_months, coerce_number, round_money

logger = logging.getLogger(__name__)

# Upper bound on the number of periods; keeps the schedule loop bounded.
MAX_MONTHS = 1200

# Largest accepted price or payment. Totals stay well inside the 28 digit
# decimal context, so every amount can be rounded to cents.
MAX_AMOUNT = Decimal(10) ** 15

# Percentages at or above this cannot be rounded to cents in the context.
PERCENTAGE_LIMIT = Decimal(10) ** 24


def build_input(original_price: Number, monthly_payment: Number, months: Number) -> CalculationInput:
    """Coerce raw text or numbers into a ``CalculationInput``.

    Empty or unparsable values are treated as zero.
    """
    return CalculationInput(
        original_price=coerce_number(original_price),
        monthly_payment=coerce_number(monthly_payment),
        months=coerce_months(months),
    )


def _interest_percentage(total_interest: Decimal, original_price: Decimal) -> Optional[Decimal]:
    if original_price == 0:
        return None
    return total_interest / original_price * 100


def compute_breakdown(inputs: CalculationInput, total_interest: Decimal) -> List[PaymentBreakdownEntry]:
    """Build the month-by-month breakdown.

    The running balance is never floored; only the value stored in each entry
    is clamped at zero.
    """
    months = inputs.months
    breakdown: List[PaymentBreakdownEntry] = []
    if months <= 0:
        return breakdown

    interest_for_month = total_interest / Decimal(months)
    remaining = inputs.original_price
    for month in range(1, months + 1):
        if month == months:
            # Final payment clears whatever is left, drift included.
            principal_for_month = remaining
            payment = remaining + interest_for_month
            remaining = ZERO
        else:
            payment = inputs.monthly_payment
            principal_for_month = payment - interest_for_month
            remaining -= principal_for_month
        breakdown.append(
            PaymentBreakdownEntry(
                month=month,
                payment=round_money(payment),
                principal_paid=round_money(principal_for_month),
                interest_paid=round_money(interest_for_month),
                remaining_balance=round_money(max(ZERO, remaining)),
            )
        )
    return breakdown


def compute(
    original_price: Number,
    monthly_payment: Number,
    months: Number,
    *,
    max_months: int = MAX_MONTHS,
) -> CalculationResult:
    """Compute the payment summary and breakdown.

    Parameters
    ----------
    original_price, monthly_payment, months:
        Raw strings or numbers. Anything empty or unparsable counts as zero.
    max_months: int
        Largest accepted number of months.

    Returns
    -------
    CalculationResult
        Totals rounded to cents and one breakdown entry per month. When the
        original price is zero, or so small that the percentage cannot be
        rounded to cents, the interest percentage is ``None``.

    Raises
    ------
    DegenerateInputError
        If ``months`` exceeds ``max_months``, or the price or the monthly
        payment is larger than ``MAX_AMOUNT`` in absolute value. No other
        input raises.
    """
    inputs = build_input(original_price, monthly_payment, months)
    warnings: List[str] = []

    if inputs.months > max_months:
        raise DegenerateInputError(
            f"Number of months must not exceed {max_months}; got {inputs.months}"
        )
    for label, amount in (
        ("Original price", inputs.original_price),
        ("Monthly payment", inputs.monthly_payment),
    ):
        if abs(amount) > MAX_AMOUNT:
            raise DegenerateInputError(f"{label} must not exceed {MAX_AMOUNT}; got {amount}")
    if inputs.months < 0:
        warnings.append("Negative number of months treated as 0")
        inputs = CalculationInput(inputs.original_price, inputs.monthly_payment, 0)
    if inputs.original_price < 0:
        warnings.append("Original price is negative")
    if inputs.monthly_payment < 0:
        warnings.append("Monthly payment is negative")

    total_payment = inputs.monthly_payment * inputs.months
    total_interest = total_payment - inputs.original_price
    interest_percentage = _interest_percentage(total_interest, inputs.original_price)
    if interest_percentage is None:
        warnings.append("Interest percentage is undefined for an original price of 0")
    elif abs(interest_percentage) >= PERCENTAGE_LIMIT:
        warnings.append("Interest percentage is too large to report")
        interest_percentage = None

    breakdown = compute_breakdown(inputs, total_interest)

    for note in warnings:
        logger.warning("Degenerate input %s: %s", inputs, note)
    logger.debug(
        "Computed %d-month breakdown: total_payment=%s total_interest=%s",
        len(breakdown),
        total_payment,
        total_interest,
    )

    return CalculationResult(
        total_payment=round_money(total_payment),
        total_interest=round_money(total_interest),
        interest_percentage=(
            round_money(interest_percentage) if interest_percentage is not None else None
        ),
        monthly_breakdown=tuple(breakdown),
        warnings=tuple(warnings),
    )
