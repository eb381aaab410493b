"""
Main API entry point for formula_mass

This module contains FormulaCalculator, which orchestrates
- input normalization
- formula parsing
- mass aggregation
- error classification and rendering
"""
import logging
import re
from typing import Mapping, Optional, Union

from .aggregator import molecular_mass
from .elements import ATOMIC_MASSES
from .errors import ErrorKind, PreconditionError
from .parser import FormulaParser
from .results import FormulaResult

_lgr = logging.getLogger(__name__)

# Unicode White_Space: \s without the separators \x1c-\x1f
_WHITESPACE = re.compile(r'[^\S\x1c-\x1f]+')


def strip_whitespace(formula: str) -> str:
    """Remove every (Unicode) whitespace character from a formula string."""
    if not isinstance(formula, str):
        raise PreconditionError(
            f"not a string, but a {type(formula).__name__}"
        )
    return _WHITESPACE.sub('', formula)


class FormulaCalculator:
    """
    API for computing molecular masses from formula strings

    This class should be initialized once with the desired options, and
    then be used to evaluate any number of formulae. It holds no mutable
    state, so one instance can be shared between threads.

    Example:
        >>> calculator = FormulaCalculator()
        >>>
        >>> # Just the number; 0 for malformed input
        >>> calculator.compute('Ca(OH)2')
        74.092
        >>>
        >>> # Full breakdown
        >>> result = calculator.evaluate('K4[Fe(CN)6]')
        >>> if result.ok:
        >>>     print(result.report)
        >>> else:
        >>>     print(result.error_kind, result.message)
    """

    def __init__(
        self,
        strict_brackets: bool = False,
        max_depth: Optional[int] = None,
        masses: Mapping[str, float] = ATOMIC_MASSES,
        html: bool = True,
    ):
        """
        Initialize FormulaCalculator.

        Args:
            strict_brackets: Reject groups closed by a different bracket
                style, e.g. '(H]O)'. Default False accepts them as in the
                lenient legacy behaviour.

            max_depth: Maximum bracket nesting depth. Deeper formulae fail
                with NestingTooDeepError. Default None (no limit).

            masses: Atomic mass table used to resolve element symbols.
                Default is the IUPAC standard atomic weights.

            html: Whether verbose output is HTML (default) or plain text.
        """
        self.parser = FormulaParser(
            strict_brackets=strict_brackets,
            max_depth=max_depth,
        )
        self.masses = masses
        self.html = html

    def evaluate(self, formula: str) -> FormulaResult:
        """
        Parse a formula and compute its mass report.

        Whitespace is stripped first; that is the only normalization.
        Any failure is caught here, once, and recorded on the result
        together with its ErrorKind.

        Args:
            formula: Formula string, e.g. 'Ca(OH)2'

        Returns:
            FormulaResult; check `.ok` before using `.report`
        """
        result = FormulaResult(formula=formula)
        try:
            result.formula = strip_whitespace(formula)
            result.terms = self.parser.parse(result.formula)
            result.report = molecular_mass(result.terms, masses=self.masses)

        except Exception as e:
            result.report = None
            result.error = e
            result.error_kind = ErrorKind.of(e)

            if result.error_kind is ErrorKind.INTERNAL:
                _lgr.warning(
                    f'Internal error evaluating {formula!r}', exc_info=True,
                )
            else:
                _lgr.debug(f'Rejected formula {formula!r}: {e}')

        return result

    def compute(
        self,
        formula: str,
        verbose: bool = False,
    ) -> Union[float, str]:
        """
        Evaluate a formula the way a template macro would.

        Args:
            formula: Formula string
            verbose: If False, return only the total mass (0 on any
                failure). If True, return the rendered formula and mass
                table, or the error message.

        Returns:
            float when not verbose, str when verbose
        """
        result = self.evaluate(formula)
        if not verbose:
            return result.total_mass
        return result.render(html=self.html)
