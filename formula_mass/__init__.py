"""
formula_mass: A Python package for computing molecular masses from
chemical formulae.

Formulae are written as linear strings such as 'Ca(OH)2' or
'K4[Fe(CN)6]', with (), [] and {} accepted for (nested) groups. The
package parses them into a tree of element/count terms, expands the
groups into per-element atom counts, and reports the total mass together
with each element's mass contribution and percentage.
"""

__version__ = "0.1.0"

# Main API
from .core.calculator import FormulaCalculator
from .core.results import FormulaResult, MassReport, ElementMass

# Lower-level components
from .core.parser import (
    FormulaParser,
    FormulaTerm,
    Element,
    Group,
    parse_formula,
)
from .core.aggregator import tally_elements, mass_report, molecular_mass
from .core.elements import ATOMIC_MASSES, atomic_mass

# Errors
from .core.errors import (
    ErrorKind,
    FormulaError,
    DataInputError,
    UnbalancedBracketsError,
    InvalidCharacterError,
    UnknownElementError,
    NestingTooDeepError,
    CountTooLargeError,
    PreconditionError,
)

# Utility funcs
from .utils.formulae import (
    hill_formula,
    empirical_formula,
    tally_match,
    to_molmass,
)
from .utils.formatting import formula_to_html, formula_to_text

# Module-level singleton for convenience function
_default_calculator = None


def compute_formula(
    formula: str,
    verbose: bool = False,
):
    """
    Convenience function for computing a molecular mass right away.

    Calling this function is equivalent to creating a FormulaCalculator
    with default options then calling FormulaCalculator.compute().

    Args:
        formula: Formula string. Whitespace is ignored.

        verbose: If False, return the total mass as a float, or 0 if the
            formula could not be parsed or contains an unknown element.
            If True, return an HTML rendering: the formula with <sub>
            counts above a per-element mass table, or the HTML-escaped
            error message. Messages for bugs in this package (as opposed
            to malformed input) start with 'INTERNAL BUG: '.
            Default: False

    Returns:
        float (not verbose) or str (verbose)

    Example:
        >>> from formula_mass import compute_formula
        >>>
        >>> round(compute_formula('H2SO4'), 3)
        98.072
        >>> compute_formula('Xx2')
        0
        >>> html = compute_formula('Ca(OH)2', verbose=True)
    """
    global _default_calculator
    if _default_calculator is None:
        _default_calculator = FormulaCalculator()

    return _default_calculator.compute(formula, verbose=verbose)


__all__ = [
    # Primary API
    "FormulaCalculator",
    "FormulaResult",
    "MassReport",
    "ElementMass",

    # Convenience function
    "compute_formula",

    # Core components
    "FormulaParser",
    "FormulaTerm",
    "Element",
    "Group",
    "parse_formula",
    "tally_elements",
    "mass_report",
    "molecular_mass",
    "ATOMIC_MASSES",
    "atomic_mass",

    # Errors
    "ErrorKind",
    "FormulaError",
    "DataInputError",
    "UnbalancedBracketsError",
    "InvalidCharacterError",
    "UnknownElementError",
    "NestingTooDeepError",
    "CountTooLargeError",
    "PreconditionError",

    # Utilities
    "hill_formula",
    "empirical_formula",
    "tally_match",
    "to_molmass",
    "formula_to_html",
    "formula_to_text",
]
