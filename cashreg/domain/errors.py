"""Error types raised by the cashreg functional core.

Every error carries a human-readable message. The command layer catches
CashRegisterError, prints it and exits with a non-zero status.
"""


class CashRegisterError(Exception):
    """Base class for all recoverable cashreg errors."""


class ConfigError(CashRegisterError):
    """Invalid configuration, fatal before any transaction is processed."""


class EmptyInputError(CashRegisterError):
    """Input contained no transaction lines."""


class InputError(CashRegisterError):
    """A single input line could not be turned into a transaction."""

    def __init__(self, line_number: int, message: str) -> None:
        self.line_number = line_number
        self.reason = message
        super().__init__(f"Line {line_number}: {message}")


class MalformedLineError(InputError):
    """Wrong field count, empty line, or an invalid amount."""


class InsufficientPaymentError(InputError):
    """Amount paid is less than amount owed."""
