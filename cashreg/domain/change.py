"""Pure functions for change calculation.

This module contains the functional core for making change:
- No I/O operations (no console, no files, no environment)
- Randomness is injected, never global
- Easy to test

All monetary amounts are in cents (Cents type).
"""

import random
from collections.abc import Callable, Sequence
from typing import Protocol

from cashreg.domain.denominations import DENOMINATIONS, Denomination, ordered
from cashreg.domain.models import Cents, ChangeBreakdown, Strategy


class Chooser(Protocol):
    """Anything that can pick one item from a sequence (random.Random does)."""

    def choice(self, seq: Sequence[Denomination]) -> Denomination: ...


def minimum_change(amount: Cents) -> ChangeBreakdown:
    """Calculate change using the fewest coins and bills.

    Greedy selection is optimal here only because of the structure of the
    US denomination set; it is not optimal for arbitrary coin systems.

    Args:
        amount: Change due in cents.

    Returns:
        Sparse breakdown in table order ({} for zero).

    Raises:
        ValueError: If amount is negative.
    """
    if amount < 0:
        raise ValueError(f"Change amount must not be negative: {amount}")

    breakdown: ChangeBreakdown = {}
    remaining = amount

    for denomination in DENOMINATIONS:
        count = remaining // denomination.value
        if count > 0:
            breakdown[denomination.name] = count
            remaining -= count * denomination.value

    assert remaining == 0, f"greedy change left {remaining} cents unallocated"
    return breakdown


def random_change(amount: Cents, rng: Chooser | None = None) -> ChangeBreakdown:
    """Calculate change from a random sequence of denomination picks.

    Each step picks uniformly among the denominations that still fit in the
    remaining amount. The result always sums to the amount; the mix varies.
    Runs one pick per coin, so cost grows linearly with the amount; input
    parsing caps change due at a million cents.

    Args:
        amount: Change due in cents.
        rng: Randomness source with a choice() method. Defaults to a fresh
            random.Random().

    Returns:
        Sparse breakdown in table order.

    Raises:
        ValueError: If amount is negative.
    """
    if amount < 0:
        raise ValueError(f"Change amount must not be negative: {amount}")

    if rng is None:
        rng = random.Random()

    counts: ChangeBreakdown = {}
    remaining = amount

    while remaining > 0:
        candidates = [d for d in DENOMINATIONS if d.value <= remaining]
        # Unreachable while the table contains a 1-cent denomination
        assert candidates, f"no denomination fits {remaining} cents"

        picked = rng.choice(candidates)
        counts[picked.name] = counts.get(picked.name, 0) + 1
        remaining -= picked.value

    return ordered(counts)


def select_strategy(amount: Cents, random_mode: bool, divisor: int) -> Strategy:
    """Choose the change algorithm for an amount.

    The divisor must already be validated as a positive integer.

    Args:
        amount: Change due in cents.
        random_mode: Whether random mode is enabled.
        divisor: Amounts divisible by this use random change.

    Returns:
        Strategy.RANDOM if random mode is on and amount is divisible by the
        divisor, otherwise Strategy.MINIMUM.
    """
    if random_mode and amount % divisor == 0:
        return Strategy.RANDOM
    return Strategy.MINIMUM


def make_change(strategy: Strategy, amount: Cents, rng: Chooser | None = None) -> ChangeBreakdown:
    """Run the algorithm for a strategy.

    Args:
        strategy: Which algorithm to run.
        amount: Change due in cents.
        rng: Randomness source, used by the random strategy only.

    Returns:
        Breakdown produced by the selected algorithm.
    """
    algorithms: dict[Strategy, Callable[[Cents], ChangeBreakdown]] = {
        Strategy.MINIMUM: minimum_change,
        Strategy.RANDOM: lambda cents: random_change(cents, rng),
    }
    return algorithms[strategy](amount)
