"""
Errors raised while building or settling a group tab.
"""


class SettlementError(Exception):
    """Base exception for settlement errors."""
    pass


class InvalidInputError(SettlementError, ValueError):
    """Raised when participants or expenses break the input contract."""
    pass


class ArithmeticInvariantError(SettlementError):
    """Raised when balances do not sum to zero within the rounding tolerance.

    This points at a bug in how the caller computed paid/owed, not at bad user
    input.
    """
    pass
