"""Command-line interface for the installment calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can print the full monthly breakdown or only the summary.
Results can be printed to the terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click

from .data_models import CalculationResult
from .engine import MAX_MONTHS, compute
from .errors import DegenerateInputError, FieldFormatError
from .formatter import print_schedule, print_summary
from .utils import coerce_number, validate_field


def run_calculation(
    original_price: str, monthly_payment: str, months: str, max_months: int
) -> Tuple[Dict[str, str], CalculationResult]:
    """Validate the option values and run the engine.

    Returns the validated field texts together with the result.
    """
    fields = {
        "original_price": original_price,
        "monthly_payment": monthly_payment,
        "months": months,
    }
    for name, raw in fields.items():
        try:
            validate_field(name, raw)
        except FieldFormatError as exc:
            raise click.BadParameter(str(exc), param_hint=f"'{exc.label}'")
    try:
        result = compute(original_price, monthly_payment, months, max_months=max_months)
    except DegenerateInputError as exc:
        raise click.UsageError(str(exc))
    return fields, result


def summary_to_dict(fields: Dict[str, str], result: CalculationResult) -> Dict[str, Any]:
    data = result.to_dict()
    data.pop("monthly_breakdown")
    data["original_price"] = f"{coerce_number(fields['original_price']):.2f}"
    data["months"] = len(result.monthly_breakdown)
    return data


def export_to_json(path: Path, fields: Dict[str, str], result: CalculationResult) -> None:
    """Export summary and breakdown to a JSON file."""
    data = {
        "summary": summary_to_dict(fields, result),
        "schedule": [e.to_dict() for e in result.monthly_breakdown],
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, result: CalculationResult) -> None:
    """Export the monthly breakdown to a CSV file."""
    header = [
        "Month",
        "Payment",
        "Principal",
        "Interest",
        "Remaining_Balance",
    ]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for e in result.monthly_breakdown:
            row = e.to_dict()
            writer.writerow(
                [
                    row["month"],
                    row["payment"],
                    row["principal_paid"],
                    row["interest_paid"],
                    row["remaining_balance"],
                ]
            )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """An installment payment calculator."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.option("--price", "-p", "original_price", required=True, help="Original price of the item")
@click.option("--monthly-payment", "-m", "monthly_payment", required=True, help="Fixed monthly payment")
@click.option("--months", "-n", "months", required=True, help="Number of monthly payments")
@click.option("--max-months", "max_months", type=int, default=MAX_MONTHS, show_default=True, help="Largest accepted number of months")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(
    original_price: str,
    monthly_payment: str,
    months: str,
    max_months: int,
    output: Optional[str],
) -> None:
    """Compute and print the monthly payment breakdown."""
    fields, result = run_calculation(original_price, monthly_payment, months, max_months)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, fields, result)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, result)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Schedule exported to {path}")
        return

    print_summary(coerce_number(original_price), result)
    # Limit schedule length printed to avoid flooding the terminal
    max_rows = 120
    entries = result.monthly_breakdown
    if len(entries) > max_rows:
        click.echo(f"Schedule has {len(entries)} rows; showing first {max_rows} rows.")
        entries = entries[:max_rows]
    print_schedule(entries)


@cli.command()
@click.option("--price", "-p", "original_price", required=True, help="Original price of the item")
@click.option("--monthly-payment", "-m", "monthly_payment", required=True, help="Fixed monthly payment")
@click.option("--months", "-n", "months", required=True, help="Number of monthly payments")
@click.option("--max-months", "max_months", type=int, default=MAX_MONTHS, show_default=True, help="Largest accepted number of months")
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(
    original_price: str,
    monthly_payment: str,
    months: str,
    max_months: int,
    output: Optional[str],
) -> None:
    """Compute and print only the summary metrics."""
    fields, result = run_calculation(original_price, monthly_payment, months, max_months)
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"summary": summary_to_dict(fields, result)}, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(coerce_number(original_price), result)


if __name__ == "__main__":
    cli()
