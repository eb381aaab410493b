"""
Expands parsed formulae into per-element atom counts and masses.
"""
from __future__ import annotations

from typing import Iterable, Mapping

import numpy as np

from .elements import ATOMIC_MASSES, atomic_mass
from .errors import CountTooLargeError, PreconditionError
from .parser import Element, FormulaTerm, Group
from .results import ElementMass, MassReport


def tally_elements(
    terms: Iterable[FormulaTerm],
) -> dict[str, int]:
    """
    Count atoms per element across a parsed formula.

    Groups are expanded recursively: every count inside a group is
    multiplied by the group's own count. Repeated occurrences of the same
    element are summed regardless of where they appear.

    Args:
        terms: Parsed formula, as returned by FormulaParser.parse()

    Returns:
        Dict of symbol -> atom count, ordered by first encounter

    Example:
        >>> tally_elements(parse_formula('K4[Fe(CN)6]'))
        {'K': 4, 'Fe': 1, 'C': 6, 'N': 6}
    """
    tally: dict[str, int] = {}

    for term in terms:
        if isinstance(term.unit, Group):
            inner = tally_elements(term.unit.terms)
            for symbol, count in inner.items():
                tally[symbol] = tally.get(symbol, 0) + count * term.count

        elif isinstance(term.unit, Element):
            symbol = term.unit.symbol
            tally[symbol] = tally.get(symbol, 0) + term.count

        else:
            raise PreconditionError(
                f"unit should be an Element or Group, "
                f"got {type(term.unit).__name__}"
            )

    return tally


def mass_report(
    tally: Mapping[str, int],
    masses: Mapping[str, float] = ATOMIC_MASSES,
) -> MassReport:
    """
    Resolve atomic masses for a tally and compute mass fractions.

    Args:
        tally: Symbol -> atom count, e.g. from tally_elements()
        masses: Atomic mass table

    Returns:
        MassReport with one row per element, in tally order

    Raises:
        UnknownElementError: For the first symbol missing from `masses`
        CountTooLargeError: If a count or the total mass overflows a float
    """
    symbols = list(tally)
    atom_masses = np.array(
        [atomic_mass(s, masses) for s in symbols],
        dtype=np.float64,
    )

    counts = np.empty(len(symbols), dtype=np.float64)
    for i, symbol in enumerate(symbols):
        try:
            counts[i] = float(tally[symbol])
        except OverflowError:
            raise CountTooLargeError(
                f"atom count of {symbol} does not fit in a float"
            ) from None

    with np.errstate(over='ignore'):
        element_masses = counts * atom_masses
        total_mass = float(element_masses.sum())

    if not np.isfinite(total_mass):
        raise CountTooLargeError("total mass does not fit in a float")

    # Only an empty (or all-zero) formula has no mass
    if total_mass > 0:
        percents = 100.0 * element_masses / total_mass
    else:
        percents = np.zeros_like(element_masses)

    rows = [
        ElementMass(
            symbol=symbol,
            count=tally[symbol],
            atom_mass=float(atom_masses[i]),
            total_mass=float(element_masses[i]),
            percent_mass=float(percents[i]),
        )
        for i, symbol in enumerate(symbols)
    ]
    return MassReport(elements=rows, total_mass=total_mass)


def molecular_mass(
    terms: Iterable[FormulaTerm],
    masses: Mapping[str, float] = ATOMIC_MASSES,
) -> MassReport:
    """
    Compute the molecular mass of a parsed formula.

    Unknown symbols are only detected after the whole formula has been
    expanded, so each distinct bad symbol is reported once no matter how
    deeply it is nested.

    Args:
        terms: Parsed formula
        masses: Atomic mass table

    Returns:
        MassReport
    """
    return mass_report(tally_elements(terms), masses=masses)
