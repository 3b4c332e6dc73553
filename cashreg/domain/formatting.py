"""Pure functions for rendering change results.

Three renderings are supported:
- standard: "3 quarters,1 dime,3 pennies" or "No change"
- json: the breakdown as a JSON object
- verbose: transaction, change due, strategy and denominations on one line
"""

import json

from cashreg.domain.denominations import DENOMINATIONS, get_denomination, ordered
from cashreg.domain.models import ChangeBreakdown, OutputFormat
from cashreg.domain.parsing import cents_to_dollars
from cashreg.domain.register import TransactionResult

NO_CHANGE = "No change"


def format_standard(breakdown: ChangeBreakdown) -> str:
    """Format a breakdown as comma-joined counts, highest denomination first.

    Args:
        breakdown: Denomination counts.

    Returns:
        Formatted string (e.g., "1 dollar,2 quarters,3 pennies"), or
        "No change" if the breakdown is empty.
    """
    parts = [
        f"{breakdown[d.name]} {d.display_name(breakdown[d.name])}"
        for d in DENOMINATIONS
        if breakdown.get(d.name, 0) > 0
    ]
    if not parts:
        return NO_CHANGE
    return ",".join(parts)


def format_json(breakdown: ChangeBreakdown) -> str:
    """Format a breakdown as an indented JSON object in table order."""
    return json.dumps(ordered(breakdown), indent=2)


def format_verbose(result: TransactionResult) -> str:
    """Format a result with its transaction details and strategy.

    Args:
        result: Processed transaction.

    Returns:
        Single line with fields separated by " | ".
    """
    transaction = result.transaction
    fields = [
        f"Transaction: ${transaction.amount_owed:.2f} owed, ${transaction.amount_paid:.2f} paid",
        f"Change Due: ${cents_to_dollars(transaction.change_due)}",
        f"Strategy: {result.strategy.value}",
        f"Denominations: {format_standard(result.breakdown)}",
    ]
    return " | ".join(fields)


def format_result(result: TransactionResult, output_format: OutputFormat) -> str:
    """Render a result in the configured output format."""
    if output_format == OutputFormat.JSON:
        return format_json(result.breakdown)
    if output_format == OutputFormat.VERBOSE:
        return format_verbose(result)
    return format_standard(result.breakdown)


def parse_standard(text: str) -> ChangeBreakdown:
    """Read a standard rendering back into a breakdown.

    Args:
        text: Output of format_standard.

    Returns:
        Breakdown in table order.

    Raises:
        ValueError: If an entry is not "<count> <denomination>".
    """
    text = text.strip()
    if text == NO_CHANGE:
        return {}

    breakdown: ChangeBreakdown = {}
    for entry in text.split(","):
        count_text, _, name = entry.strip().partition(" ")
        try:
            denomination = get_denomination(name)
            count = int(count_text)
        except (KeyError, ValueError):
            raise ValueError(f"Invalid change entry: {entry!r}") from None
        breakdown[denomination.name] = breakdown.get(denomination.name, 0) + count

    return ordered(breakdown)
