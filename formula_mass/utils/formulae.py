"""
This module contains functions for manipulating/comparing element tallies
"""
from functools import reduce
from math import gcd
from typing import Mapping

from molmass import Formula


def _hill_key(symbol: str, has_carbon: bool):
    if has_carbon:
        if symbol == 'C':
            return (0,)
        if symbol == 'H':
            return (1,)
    return (2, symbol)


def _nonzero(tally: Mapping[str, int]) -> dict[str, int]:
    return {s: c for s, c in tally.items() if c > 0}


def hill_formula(tally: Mapping[str, int]) -> str:
    """
    Hill-notation formula string for a tally.

    With carbon present: C first, H second, rest alphabetical. Without
    carbon every element is alphabetical (so water is 'H2O' and ammonia
    is 'H3N').

    Examples:
        >>> hill_formula({'Ca': 1, 'O': 2, 'H': 2})
        'CaH2O2'
        >>> hill_formula({'O': 6, 'C': 6, 'H': 12})
        'C6H12O6'
    """
    nonzero = _nonzero(tally)
    has_carbon = 'C' in nonzero

    parts: list[str] = []
    for sym in sorted(nonzero, key=lambda s: _hill_key(s, has_carbon)):
        cnt = nonzero[sym]
        parts.append(sym if cnt == 1 else f'{sym}{cnt}')
    return ''.join(parts)


def empirical_formula(tally: Mapping[str, int]) -> str:
    """Empirical (simplest ratio) formula string, in Hill order."""
    nonzero = _nonzero(tally)
    if not nonzero:
        return ''
    g = reduce(gcd, nonzero.values())
    return hill_formula({s: c // g for s, c in nonzero.items()})


def tally_match(
    tally_a: Mapping[str, int],
    tally_b: Mapping[str, int],
) -> bool:
    """
    Returns true if two tallies describe the same composition

    Element order and zero counts are ignored.
    """
    return _nonzero(tally_a) == _nonzero(tally_b)


def to_molmass(tally: Mapping[str, int]) -> Formula:
    """
    Convert a tally to a molmass.Formula, e.g. for isotope or
    monoisotopic mass calculations this package does not do itself.

    Note that molmass uses its own atomic weights, so
    Formula.mass differs slightly from MassReport.total_mass.

    Raises:
        ValueError: If the tally has no atoms
    """
    formula = hill_formula(tally)
    if not formula:
        raise ValueError(
            "Cannot convert an empty tally to a molmass Formula"
        )
    return Formula(formula)
