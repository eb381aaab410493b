"""
This module has the MassReport class, which holds per-element
ElementMass rows, and FormulaResult, the outcome of evaluating one
formula string. They provide convenience methods for:
- lookup by element symbol
- display
- export
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, overload, TYPE_CHECKING

from .errors import ErrorKind, INTERNAL_ERROR_PREFIX
from ..utils.formatting import (
    escape_message,
    formula_to_html,
    formula_to_text,
    report_to_html,
)
from ..utils.formulae import empirical_formula, hill_formula

if TYPE_CHECKING:
    import pandas as pd
    from .parser import ParsedFormula


@dataclass(slots=True)
class ElementMass:
    """
    Mass contribution of one element to a formula.

    Attributes:
        symbol: Element symbol
        count: Number of atoms of this element in the expanded formula
        atom_mass: Standard atomic weight of the element
        total_mass: count * atom_mass
        percent_mass: Share of the formula's total mass, 0-100
    """
    symbol: str
    count: int
    atom_mass: float
    total_mass: float
    percent_mass: float


@dataclass
class MassReport:
    """
    Per-element mass breakdown of a formula.

    Rows are kept in the order each element was first encountered in the
    formula, not alphabetically.

    Attributes:
        elements: ElementMass rows
        total_mass: Molecular mass of the whole formula

    Example:
        >>> report = compute_formula('H2SO4', verbose=True).report
        >>> round(report.total_mass, 3)
        98.072
        >>> report['O'].percent_mass
        65.254...
        >>> print(report)  # Gives a summary table
    """
    elements: list[ElementMass]
    total_mass: float
    _index: dict[str, int] = field(init=False, repr=False)

    def __post_init__(self):
        self._index = {row.symbol: i for i, row in enumerate(self.elements)}

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self):
        return iter(self.elements)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    @overload
    def __getitem__(self, key: int) -> ElementMass: ...

    @overload
    def __getitem__(self, key: str) -> ElementMass: ...

    def __getitem__(self, key: int | str) -> ElementMass:
        if isinstance(key, str):
            return self.elements[self._index[key]]
        return self.elements[key]

    @property
    def tally(self) -> dict[str, int]:
        """Symbol -> atom count, in encounter order."""
        return {row.symbol: row.count for row in self.elements}

    @property
    def percent_total(self) -> float:
        """Sum of all percentages: 100 (up to rounding), or 0 if massless."""
        return sum(row.percent_mass for row in self.elements)

    @property
    def formula(self) -> str:
        """Hill-notation formula of the expanded composition."""
        return hill_formula(self.tally)

    @property
    def empirical(self) -> str:
        return empirical_formula(self.tally)

    def __repr__(self) -> str:
        summary = (
            f"MassReport(formula={self.formula!r}, "
            f"total_mass={self.total_mass:.3f}, "
            f"n_elements={len(self)})"
        )
        if len(self) == 0:
            return summary
        return "\n".join([summary, "", self.to_table()])

    # === FORMATTING METHODS ===
    def to_table(self) -> str:
        """
        Return formatted text table of all elements plus a totals row
        """
        header = (
            f"{'Atom':<6} {'#':>6} {'Atom Mass':>12} "
            f"{'Mass (g)':>12} {'Mass %':>9}"
        )
        sep_len = len(header)
        lines: list[str] = [header, "-" * sep_len]

        for row in self.elements:
            lines.append(
                f"{row.symbol:<6} {row.count:>6} {row.atom_mass:>12} "
                f"{row.total_mass:>12.3f} {row.percent_mass:>8.3f}%"
            )

        lines.append("-" * sep_len)
        lines.append(
            f"{'Total Mass':<26} {self.total_mass:>12.3f} "
            f"{self.percent_total:>8.3f}%"
        )
        return "\n".join(lines)

    def to_html(self, title: str = '') -> str:
        return report_to_html(self, title=title)

    def to_dataframe(self) -> 'pd.DataFrame':
        """
        Convert the report to a pandas DataFrame, if pandas is installed.

        Returns:
            pandas.DataFrame with one row per element and columns symbol,
            count, atom_mass, total_mass and percent_mass

        Raises:
            ImportError: If pandas is not installed
        """
        try:
            import pandas as pd
        except ImportError:
            raise ImportError(
                "pandas is required for to_dataframe(). "
                "Install with: pip install pandas"
            )

        data = [
            {
                'symbol': row.symbol,
                'count': row.count,
                'atom_mass': row.atom_mass,
                'total_mass': row.total_mass,
                'percent_mass': row.percent_mass,
            }
            for row in self.elements
        ]
        return pd.DataFrame(
            data,
            columns=['symbol', 'count', 'atom_mass', 'total_mass', 'percent_mass'],
        )


@dataclass
class FormulaResult:
    """
    Outcome of evaluating one formula string.

    Exactly one of `report` and `error` is set. Callers should branch on
    `ok` / `error_kind` rather than on the exception type.

    Attributes:
        formula: The formula after whitespace was stripped
        terms: Parsed formula (None if parsing failed)
        report: MassReport (None on failure)
        error: The exception that stopped evaluation, if any
        error_kind: ErrorKind.DATA_INPUT for malformed input,
            ErrorKind.INTERNAL for bugs in this package
    """
    formula: str
    terms: Optional['ParsedFormula'] = None
    report: Optional[MassReport] = None
    error: Optional[BaseException] = None
    error_kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def total_mass(self) -> float:
        """Molecular mass, or 0 if evaluation failed."""
        if self.report is None:
            return 0
        return self.report.total_mass

    @property
    def message(self) -> str:
        """
        Error message for display; empty on success. Internal errors are
        prefixed so users can tell them apart from mistakes in their input.
        """
        if self.error is None:
            return ''
        message = str(self.error)
        if self.error_kind is ErrorKind.INTERNAL:
            message = INTERNAL_ERROR_PREFIX + message
        return message

    def pretty_formula(self, html: bool = True) -> str:
        if self.terms is None:
            return ''
        if html:
            return formula_to_html(self.terms)
        return formula_to_text(self.terms)

    def render(self, html: bool = True) -> str:
        """
        Verbose rendering: the pretty-printed formula with its mass table,
        or the (escaped, when html=True) error message.
        """
        if not self.ok:
            return escape_message(self.message) if html else self.message

        if html:
            return self.report.to_html(title=self.pretty_formula(html=True))
        return "\n".join([
            self.pretty_formula(html=False),
            "",
            self.report.to_table(),
        ])
