"""Domain models and types for cashreg.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Change logic separated from files, console and configuration
"""

from cashreg.domain.models import Cents, ChangeBreakdown, DenominationName, OutputFormat, Strategy

__all__ = ["Cents", "ChangeBreakdown", "DenominationName", "OutputFormat", "Strategy"]
