"""Transaction processing for the cash register.

Orchestrates strategy selection, change calculation and result packaging
for one transaction or a sequence of them. No I/O.
"""

import random
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from cashreg.domain.change import Chooser, make_change, select_strategy
from cashreg.domain.models import Cents, ChangeBreakdown, OutputFormat, Strategy

DEFAULT_RANDOM_DIVISOR = 3


@dataclass(frozen=True)
class Transaction:
    """Immutable validated transaction.

    Amounts owed and paid are kept in dollars for display only; all change
    arithmetic uses change_due in cents.
    """

    amount_owed: Decimal
    amount_paid: Decimal
    change_due: Cents
    line_number: int = 0


@dataclass(frozen=True)
class RegisterSettings:
    """Immutable register configuration, resolved once per run."""

    enable_random_mode: bool = True
    random_divisor: int = DEFAULT_RANDOM_DIVISOR
    output_format: OutputFormat = OutputFormat.STANDARD


@dataclass(frozen=True)
class TransactionResult:
    """Immutable result of processing one transaction."""

    transaction: Transaction
    breakdown: ChangeBreakdown
    strategy: Strategy


@dataclass(frozen=True)
class CashRegister:
    """Processes transactions with fixed settings and its own randomness source."""

    settings: RegisterSettings = field(default_factory=RegisterSettings)
    rng: Chooser = field(default_factory=random.Random)

    def process(self, transaction: Transaction) -> TransactionResult:
        """Compute change for a single transaction.

        Zero change never consults the strategy selector: it always yields
        an empty breakdown tagged minimum.

        Args:
            transaction: Validated transaction with non-negative change_due.

        Returns:
            TransactionResult with breakdown and strategy used.

        Raises:
            ValueError: If change_due is negative.
        """
        if transaction.change_due < 0:
            raise ValueError(f"Change due must not be negative: {transaction.change_due}")

        if transaction.change_due == 0:
            return TransactionResult(transaction=transaction, breakdown={}, strategy=Strategy.MINIMUM)

        strategy = select_strategy(
            transaction.change_due,
            self.settings.enable_random_mode,
            self.settings.random_divisor,
        )
        breakdown = make_change(strategy, transaction.change_due, self.rng)

        return TransactionResult(transaction=transaction, breakdown=breakdown, strategy=strategy)

    def process_all(self, transactions: Iterable[Transaction]) -> list[TransactionResult]:
        """Process transactions independently, preserving input order."""
        return [self.process(transaction) for transaction in transactions]
