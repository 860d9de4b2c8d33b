from __future__ import annotations


class BudgetError(Exception):
    """Base class for budget calculator errors."""


class InvalidInput(BudgetError, ValueError):
    """
    Raised at the call boundary for a non-positive total, an unknown style,
    or any other argument the calculator refuses to guess about.
    """


class AllocationTableError(BudgetError):
    pass


class CurrencyError(BudgetError):
    pass
