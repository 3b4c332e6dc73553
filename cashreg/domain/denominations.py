"""The US denomination table.

The table is ordered from highest to lowest value. Both change algorithms
and the formatter rely on that order.
"""

from dataclasses import dataclass

from cashreg.domain.models import Cents, ChangeBreakdown, DenominationName


@dataclass(frozen=True)
class Denomination:
    """Immutable coin or bill."""

    name: DenominationName
    value: Cents
    plural: str

    def display_name(self, count: int) -> str:
        """Singular for one, plural otherwise."""
        return self.name if count == 1 else self.plural


DENOMINATIONS: tuple[Denomination, ...] = (
    Denomination(DenominationName("dollar"), Cents(100), "dollars"),
    Denomination(DenominationName("quarter"), Cents(25), "quarters"),
    Denomination(DenominationName("dime"), Cents(10), "dimes"),
    Denomination(DenominationName("nickel"), Cents(5), "nickels"),
    Denomination(DenominationName("penny"), Cents(1), "pennies"),
)

_BY_NAME: dict[DenominationName, Denomination] = {d.name: d for d in DENOMINATIONS}
_BY_PLURAL: dict[str, Denomination] = {d.plural: d for d in DENOMINATIONS}


def get_denomination(name: str) -> Denomination:
    """Look up a denomination by its singular or plural name.

    Args:
        name: Denomination name, e.g. "penny" or "pennies".

    Returns:
        Matching Denomination.

    Raises:
        KeyError: If no denomination has that name.
    """
    key = name.strip().lower()
    if key in _BY_NAME:
        return _BY_NAME[DenominationName(key)]
    return _BY_PLURAL[key]


def breakdown_total(breakdown: ChangeBreakdown) -> Cents:
    """Sum count * value over a breakdown.

    Args:
        breakdown: Denomination counts.

    Returns:
        Total in cents.
    """
    return Cents(sum(_BY_NAME[name].value * count for name, count in breakdown.items()))


def coin_count(breakdown: ChangeBreakdown) -> int:
    """Total number of coins and bills in a breakdown."""
    return sum(breakdown.values())


def ordered(breakdown: ChangeBreakdown) -> ChangeBreakdown:
    """Return the breakdown with keys in table order and zero counts dropped."""
    return {d.name: breakdown[d.name] for d in DENOMINATIONS if breakdown.get(d.name, 0) > 0}
