"""Utility functions for the installment calculator.

This module provides the field validator used while the user is typing, and
helpers for turning user input into ``Decimal`` values and rounding money
amounts to cents.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext
from typing import Dict, Union

from .errors import FieldFormatError

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

CENT = Decimal("0.01")
ZERO = Decimal("0")

# Optional integer part, optional single decimal point, optional fraction.
# The empty string is a valid "still typing" state.
FIELD_PATTERN = re.compile(r"[0-9]*\.?[0-9]*")

FIELD_LABELS: Dict[str, str] = {
    "original_price": "Original Price",
    "monthly_payment": "Monthly Payment",
    "months": "Months",
}

Number = Union[str, int, float, Decimal, None]


def is_valid_field_text(raw: str) -> bool:
    """Return ``True`` if ``raw`` is an unsigned decimal number (or empty)."""
    return FIELD_PATTERN.fullmatch(raw) is not None


def validate_field(field: str, raw: str) -> str:
    """Validate the raw text of one input field.

    Parameters
    ----------
    field: str
        One of ``original_price``, ``monthly_payment`` or ``months``.
    raw: str
        The text as typed by the user.

    Returns
    -------
    str
        ``raw`` unchanged when it is acceptable.

    Raises
    ------
    FieldFormatError
        If the text contains letters, signs, exponents or more than one
        decimal point.
    ValueError
        If ``field`` is not a known field name.
    """
    try:
        label = FIELD_LABELS[field]
    except KeyError:
        raise ValueError(f"Unknown field: {field}") from None
    if not is_valid_field_text(raw):
        raise FieldFormatError(field, label, raw)
    return raw


def coerce_number(value: Number) -> Decimal:
    """Convert user input into a finite ``Decimal``.

    Empty, missing, unparsable or non-finite values become zero, so a form
    that is still being filled in never makes the calculation fail. Floats are
    converted through ``str`` to avoid carrying binary noise into the result.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, float):
        number = Decimal(str(value))
    elif isinstance(value, int):
        number = Decimal(value)
    else:
        text = str(value).strip()
        if not text:
            return ZERO
        try:
            number = Decimal(text)
        except InvalidOperation:
            return ZERO
    if not number.is_finite():
        return ZERO
    return number


def coerce_months(value: Number) -> int:
    """Convert user input into a whole number of months (truncating)."""
    return int(coerce_number(value))


def round_money(value: Decimal) -> Decimal:
    """Round a money amount to cents, half up, without a negative zero."""
    rounded = value.quantize(CENT, rounding=ROUND_HALF_UP)
    if rounded == 0:
        return rounded.copy_abs()
    return rounded
