"""Caller-owned state of the calculator form.

The presentation layer keeps one ``FormState`` per form instance and replaces
it with the values returned by :func:`apply_edit`, :func:`apply_edits` and
:func:`submit`. Only one validation message is kept at a time: whichever field
was rejected most recently owns the shared ``error`` slot, and any accepted
edit clears it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .data_models import CalculationResult
from .engine import MAX_MONTHS, compute
from .errors import DegenerateInputError, FieldFormatError
from .utils import FIELD_LABELS, validate_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormState:
    original_price: str = "0"
    monthly_payment: str = "0"
    months: str = "0"
    result: Optional[CalculationResult] = None
    error: str = ""

    def field_values(self) -> dict:
        return {name: getattr(self, name) for name in FIELD_LABELS}


def apply_edit(state: FormState, field: str, raw: str) -> FormState:
    """Apply one keystroke-level edit to ``field``."""
    try:
        validate_field(field, raw)
    except FieldFormatError as exc:
        logger.info("Rejected %s input %r", field, raw)
        return replace(state, error=str(exc))
    return replace(state, error="", **{field: raw})


def apply_edits(state: FormState, edits: Mapping[str, str]) -> FormState:
    """Apply a full-form submission.

    Fields are processed in form order. Accepted fields are stored; the
    resulting error is the message of the last rejected field, or empty when
    every field was accepted.
    """
    error = ""
    for field in FIELD_LABELS:
        if field not in edits:
            continue
        state = apply_edit(state, field, edits[field])
        if state.error:
            error = state.error
    return replace(state, error=error)


def submit(state: FormState, max_months: int = MAX_MONTHS) -> FormState:
    """Run the calculation on the stored field values."""
    try:
        result = compute(
            state.original_price,
            state.monthly_payment,
            state.months,
            max_months=max_months,
        )
    except DegenerateInputError as exc:
        logger.warning("Calculation rejected: %s", exc)
        return replace(state, result=None, error=str(exc))
    return replace(state, result=result, error="")
