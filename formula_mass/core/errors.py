"""
Exceptions raised while parsing formulae and computing their masses.

There are two disjoint categories:
- DataInputError: the formula itself is malformed (user mistake)
- anything else, PreconditionError in particular: a bug in this package
"""
from __future__ import annotations

from enum import Enum


class FormulaError(Exception):
    """Base class for all errors raised by formula_mass."""


class DataInputError(FormulaError, ValueError):
    """The formula string cannot be turned into a mass report."""


class UnbalancedBracketsError(DataInputError):
    def __init__(self, bracket: str, position: int, found: str | None = None):
        self.bracket = bracket
        self.position = position
        # Only set in strict mode, where a group closed by the wrong
        # bracket style is an error
        self.found = found
        if found is None:
            detail = "is never closed"
        else:
            detail = f"closed by '{found}'"
        super().__init__(
            f"Unbalanced brackets: '{bracket}' at position {position} {detail}"
        )


class InvalidCharacterError(DataInputError):
    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"Invalid character: {char}")


class UnknownElementError(DataInputError):
    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Unknown element: {symbol}")


class NestingTooDeepError(DataInputError):
    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(
            f"Brackets nested deeper than the allowed {max_depth} levels"
        )


class CountTooLargeError(DataInputError):
    """An atom count, or the mass it implies, cannot be represented."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Count too large: {detail}")


class PreconditionError(FormulaError, TypeError):
    """An internal function was called with arguments it does not accept."""


class ErrorKind(Enum):
    DATA_INPUT = 'data_input'
    INTERNAL = 'internal'

    @classmethod
    def of(cls, error: BaseException) -> 'ErrorKind':
        """Classify an exception caught at the top level."""
        if isinstance(error, DataInputError):
            return cls.DATA_INPUT
        return cls.INTERNAL


INTERNAL_ERROR_PREFIX = "INTERNAL BUG: "
