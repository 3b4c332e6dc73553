"""Domain type definitions for cashreg.

These types provide semantic clarity and help with type checking:
- Cents: Amount in cents (minor units)
- DenominationName: Name of a coin or bill in the denomination table
- ChangeBreakdown: Denomination name -> count, summing to the change due
- Strategy: Which change algorithm produced a breakdown
- OutputFormat: How results are rendered
"""

from enum import Enum
from typing import NewType

# Money amounts are stored as cents (minor units) to avoid floating point errors
Cents = NewType("Cents", int)

# Denomination name from the denomination table (e.g., "quarter")
DenominationName = NewType("DenominationName", str)

# Sparse mapping: zero counts are never stored
ChangeBreakdown = dict[DenominationName, int]


class Strategy(str, Enum):
    """Change algorithm variant chosen for a transaction."""

    MINIMUM = "minimum"
    RANDOM = "random"


class OutputFormat(str, Enum):
    """Rendering used for the output file."""

    STANDARD = "standard"
    JSON = "json"
    VERBOSE = "verbose"
