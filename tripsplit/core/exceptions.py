class LedgerError(Exception):
    """Base class for everything the settlement engine raises."""


class InvalidExpenseError(LedgerError, ValueError):
    pass


class NoExpensesError(LedgerError):
    def __init__(self, message: str = "No transactions found for this trip."):
        super().__init__(message)


class SettlementError(LedgerError):
    """The resolver broke its own step bound. Should never happen."""
