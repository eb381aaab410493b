"""
Command-line interface: python -m formula_mass FORMULA [FORMULA ...]
"""
import argparse
import logging
import sys

from .core.calculator import FormulaCalculator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='formula_mass',
        description="Compute molecular masses of chemical formulae",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Total mass only
  python -m formula_mass H2SO4

  # Per-element breakdown as a text table
  python -m formula_mass 'K4[Fe(CN)6]' --verbose --text

  # Reject groups closed by the wrong bracket style
  python -m formula_mass '(H]O)2' --strict-brackets
        """)

    parser.add_argument('formulae', nargs='+', metavar='FORMULA',
                        help='Chemical formula (e.g. H2O, Ca(OH)2, K4[Fe(CN)6])')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Show the per-element mass table or the error message')
    parser.add_argument('--text', action='store_true',
                        help='Render verbose output as plain text instead of HTML')
    parser.add_argument('--strict-brackets', action='store_true',
                        help='Track every bracket style when matching groups')
    parser.add_argument('--max-depth', type=int, default=None,
                        help='Maximum bracket nesting depth')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    calculator = FormulaCalculator(
        strict_brackets=args.strict_brackets,
        max_depth=args.max_depth,
        html=not args.text,
    )

    failed = False
    for formula in args.formulae:
        result = calculator.evaluate(formula)
        failed = failed or not result.ok

        if args.verbose:
            print(result.render(html=calculator.html))
        else:
            print(f"{formula}\t{result.total_mass:.3f}")

    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
