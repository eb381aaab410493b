"""
Formula manipulation and display helpers
"""

from formula_mass.utils.formulae import (
    hill_formula,
    empirical_formula,
    tally_match,
    to_molmass,
)
from formula_mass.utils.formatting import (
    formula_to_html,
    formula_to_text,
    report_to_html,
)

__all__ = [
    "hill_formula",
    "empirical_formula",
    "tally_match",
    "to_molmass",
    "formula_to_html",
    "formula_to_text",
    "report_to_html",
]
