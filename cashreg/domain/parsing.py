"""Pure functions for parsing transaction input lines.

Each line has the form "amount_owed,amount_paid" in dollars. Parsing
converts dollars to cents exactly once, here, and rejects anything the
change engine must never see:
- wrong field count or empty lines
- non-numeric, non-finite or negative amounts
- underscore digit grouping such as "1_000"
- amounts above MAX_AMOUNT dollars
- payments smaller than the amount owed
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from cashreg.domain.errors import EmptyInputError, InsufficientPaymentError, MalformedLineError
from cashreg.domain.models import Cents
from cashreg.domain.register import Transaction

CENTS_PER_DOLLAR = Decimal(100)

# Largest accepted amount per field, in dollars. Keeps change due within
# a million cents so random change finishes promptly.
MAX_AMOUNT = Decimal(10_000)


def dollars_to_cents(dollars: Decimal) -> Cents:
    """Convert dollars to cents, rounding half up to the nearest cent.

    Args:
        dollars: Amount in dollars.

    Returns:
        Amount in cents.
    """
    cents = (dollars * CENTS_PER_DOLLAR).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return Cents(int(cents))


def cents_to_dollars(cents: Cents) -> Decimal:
    """Convert cents to dollars for display."""
    return (Decimal(cents) / CENTS_PER_DOLLAR).quantize(Decimal("0.01"))


def parse_amount(raw: str, label: str, line_number: int) -> Decimal:
    """Parse a dollar amount field.

    Args:
        raw: Raw field text.
        label: Field name used in error messages.
        line_number: 1-based line number for error context.

    Returns:
        Parsed amount.

    Raises:
        MalformedLineError: If the field is not a finite, non-negative number
            no larger than MAX_AMOUNT.
    """
    text = raw.strip()
    if "_" in text:
        raise MalformedLineError(line_number, f"Invalid {label}: {text!r}")

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise MalformedLineError(line_number, f"Invalid {label}: {text!r}") from None

    if not amount.is_finite() or amount < 0:
        raise MalformedLineError(line_number, f"Invalid {label}: {text!r}")

    if amount > MAX_AMOUNT:
        raise MalformedLineError(line_number, f"Invalid {label}: {text!r} exceeds ${MAX_AMOUNT}")

    return amount


def parse_transaction_line(line: str, line_number: int) -> Transaction:
    """Parse one "amount_owed,amount_paid" line into a Transaction.

    Args:
        line: Raw input line.
        line_number: 1-based line number for error context.

    Returns:
        Transaction with change_due in cents.

    Raises:
        MalformedLineError: If the line is empty or malformed.
        InsufficientPaymentError: If amount paid is less than amount owed.
    """
    stripped = line.strip()
    if not stripped:
        raise MalformedLineError(line_number, "Empty line")

    parts = stripped.split(",")
    if len(parts) != 2:
        raise MalformedLineError(line_number, 'Invalid format. Expected "amount_owed,amount_paid"')

    owed = parse_amount(parts[0], "amount owed", line_number)
    paid = parse_amount(parts[1], "amount paid", line_number)

    change = paid - owed
    if change < 0:
        raise InsufficientPaymentError(line_number, f"Insufficient payment. Paid: ${paid}, Owed: ${owed}")

    return Transaction(
        amount_owed=owed,
        amount_paid=paid,
        change_due=dollars_to_cents(change),
        line_number=line_number,
    )


def parse_transaction_lines(lines: Iterable[str]) -> list[Transaction]:
    """Parse every non-blank line, stopping at the first bad one.

    Blank lines are skipped but still counted, so error line numbers match
    the physical line in the input.

    Args:
        lines: Raw input lines.

    Returns:
        Transactions in input order.

    Raises:
        EmptyInputError: If there are no non-blank lines.
        MalformedLineError: On the first malformed line.
        InsufficientPaymentError: On the first underpaid line.
    """
    transactions = [
        parse_transaction_line(line, line_number)
        for line_number, line in enumerate(lines, start=1)
        if line.strip()
    ]

    if not transactions:
        raise EmptyInputError("Input file is empty")

    return transactions
