"""
This module renders parsed formulae and mass reports for display:
- formulae as HTML (with <sub> counts) or plain/Unicode text
- mass reports as an HTML table
"""
from __future__ import annotations

import html
from typing import Iterable, TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.parser import FormulaTerm
    from ..core.results import MassReport

_SUBSCRIPT_DIGITS = str.maketrans('0123456789', '₀₁₂₃₄₅₆₇₈₉')


def _render_terms(terms: Iterable['FormulaTerm'], count_fmt) -> str:
    tokens: list[str] = []
    for term in terms:
        if term.is_group:
            # Every group is shown with round brackets, whatever the input used
            tokens.append('(')
            tokens.append(_render_terms(term.unit.terms, count_fmt))
            tokens.append(')')
        else:
            tokens.append(term.unit.symbol)

        if term.count > 1:
            tokens.append(count_fmt(term.count))
    return ''.join(tokens)


def formula_to_html(terms: Iterable['FormulaTerm']) -> str:
    """
    Render a parsed formula as HTML, e.g. 'Ca(OH)<sub>2</sub>'.

    Counts of 1 are omitted.
    """
    return _render_terms(terms, lambda n: f'<sub>{n}</sub>')


def formula_to_text(
    terms: Iterable['FormulaTerm'],
    subscripts: bool = True,
) -> str:
    """
    Render a parsed formula as text.

    Args:
        terms: Parsed formula
        subscripts: Use Unicode subscript digits ('Ca(OH)₂'). With False,
            counts are written as plain digits ('Ca(OH)2'), which parses
            back to the same element tally.
    """
    if subscripts:
        return _render_terms(terms, lambda n: str(n).translate(_SUBSCRIPT_DIGITS))
    return _render_terms(terms, str)


def report_to_html(
    report: 'MassReport',
    title: str = '',
) -> str:
    """
    Render a mass report as an HTML table.

    Columns are Atom, #, Atom Mass, Mass (g) and Mass %, one row per
    element in encounter order, followed by a totals row.

    Args:
        report: MassReport to render
        title: Header cell spanning the table, usually the output of
            formula_to_html(). Inserted as-is (not escaped).
    """
    rows: list[str] = [
        "<table>",
        f"<tr><th colspan='5'>{title}</th></tr>",
        "<tr>"
        "<th>Atom</th>"
        "<th>#</th>"
        "<th>Atom Mass</th>"
        "<th>Mass (g)</th>"
        "<th>Mass %</th>"
        "</tr>",
    ]
    for row in report:
        rows.append(
            "<tr>"
            f"<td>{row.symbol}</td>"
            f"<td>{row.count}</td>"
            f"<td>{row.atom_mass}</td>"
            f"<td>{row.total_mass:.3f}</td>"
            f"<td>{row.percent_mass:.3f}%</td>"
            "</tr>"
        )
    rows.append(
        "<tr>"
        "<th colspan='3'>Total Mass</th>"
        f"<th>{report.total_mass:.3f}</th>"
        f"<th>{report.percent_total:.0f}%</th>"
        "</tr>"
    )
    rows.append("</table>")
    return ''.join(rows)


def escape_message(message: str) -> str:
    """HTML-escape an error message for display."""
    return html.escape(message)
