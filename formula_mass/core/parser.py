"""
Recursive-descent parser for linear chemical formulae.

Grammar:
    Formula := Term*
    Term    := (Element | Group) Count?
    Element := UpperLetter LowerLetter?
    Group   := OpenBracket Formula CloseBracket
    Count   := Digit+

Three bracket styles are accepted: (), [] and {}. Whether an element
symbol actually exists is not checked here; that happens when the mass
is computed.

***NOTE***: a second letter is only ever read as part of the current
symbol, so two one-letter elements where the second is written in
lowercase cannot be expressed without brackets. This matches the
accepted-input rules of the tool this package replaces and must not be
"fixed" with a dictionary-aware tokenizer.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .errors import (
    CountTooLargeError,
    InvalidCharacterError,
    NestingTooDeepError,
    PreconditionError,
    UnbalancedBracketsError,
)

BRACKETS: dict[str, str] = {'(': ')', '[': ']', '{': '}'}
CLOSING_BRACKETS: frozenset[str] = frozenset(BRACKETS.values())


@dataclass(frozen=True, slots=True)
class Element:
    """A bare element symbol such as 'H' or 'Fe'."""
    symbol: str

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True, slots=True)
class Group:
    """A bracketed sub-formula, e.g. the (OH) in Ca(OH)2."""
    terms: tuple['FormulaTerm', ...]

    def __iter__(self):
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self.terms)


FormulaUnit = Union[Element, Group]


@dataclass(frozen=True, slots=True)
class FormulaTerm:
    """
    One constituent of a formula together with its repeat count.

    Attributes:
        unit: Either an Element or a nested Group
        count: Trailing multiplier; 1 when the formula gives none
    """
    unit: FormulaUnit
    count: int = 1

    @property
    def is_group(self) -> bool:
        return isinstance(self.unit, Group)


ParsedFormula = tuple[FormulaTerm, ...]


# ---------------------------------------------------------------------------
# Character classification
# ---------------------------------------------------------------------------

def _require_char(c) -> None:
    if not isinstance(c, str):
        raise PreconditionError(f"not a string, but a {type(c).__name__}")
    if len(c) != 1:
        raise PreconditionError(
            f"should only get a single character, got {len(c)}"
        )


def is_digit(c: str) -> bool:
    """True for the ASCII digits 0-9 only."""
    _require_char(c)
    return '0' <= c <= '9'


def is_ascii_upper(c: str) -> bool:
    _require_char(c)
    return 'A' <= c <= 'Z'


def is_ascii_lower(c: str) -> bool:
    _require_char(c)
    return 'a' <= c <= 'z'


# ---------------------------------------------------------------------------
# Token extraction
# ---------------------------------------------------------------------------

def _resolve_end(fs, start: int, end: Optional[int]) -> int:
    if not isinstance(fs, str):
        raise PreconditionError(f"not a string, but a {type(fs).__name__}")
    if end is None:
        end = len(fs)
    if not 0 <= start <= end <= len(fs):
        raise PreconditionError(
            f"invalid span [{start}, {end}) for a string of length {len(fs)}"
        )
    return end


def extract_element(
    fs: str,
    start: int = 0,
    end: Optional[int] = None,
) -> str:
    """
    Read an element symbol starting at `start`.

    The character at `start` must be an uppercase ASCII letter. The next
    character is taken as part of the symbol only if it is a lowercase
    ASCII letter, so 'H2' gives 'H' and 'He' gives 'He'.

    Args:
        fs: Formula string
        start: Index of the uppercase letter
        end: Exclusive end of the span being parsed (default: len(fs))

    Returns:
        Symbol of length 1 or 2

    Raises:
        PreconditionError: If the span is empty or does not start with an
            uppercase letter
    """
    end = _resolve_end(fs, start, end)
    if start >= end:
        raise PreconditionError(
            "should have at least 1 char, but got empty string"
        )
    if not is_ascii_upper(fs[start]):
        raise PreconditionError(
            f"should have received an uppercase letter, got {fs[start]}"
        )

    if start + 1 < end and is_ascii_lower(fs[start + 1]):
        return fs[start:start + 2]
    return fs[start]


def extract_count(
    fs: str,
    start: int = 0,
    end: Optional[int] = None,
) -> tuple[int, int]:
    """
    Read a run of ASCII digits starting at `start`.

    Returns:
        Tuple of (characters consumed, count). When there are no digits
        at `start` this is (0, 1).

    Raises:
        CountTooLargeError: If the digit run is longer than the
            interpreter allows for int() conversion
    """
    end = _resolve_end(fs, start, end)

    pos = start
    while pos < end and is_digit(fs[pos]):
        pos += 1

    if pos == start:
        return 0, 1
    try:
        count = int(fs[start:pos])
    except ValueError:
        # CPython's int_max_str_digits limit
        raise CountTooLargeError(
            f"{pos - start} digits at position {start}"
        ) from None
    return pos - start, count


def find_closing_bracket(
    fs: str,
    start: int = 0,
    end: Optional[int] = None,
    strict: bool = False,
) -> int:
    """
    Find the index of the bracket that closes the one at `start`.

    By default only the bracket style that was opened is tracked: closers
    of other styles are skipped over like any other character (so the
    ']' in '(H]O)' does not end the group). With strict=True every style
    is tracked and a closer that does not match the innermost open
    bracket raises.

    Raises:
        UnbalancedBracketsError: If the bracket is never closed, or (strict
            mode) is closed by the wrong style
        PreconditionError: If `fs[start]` is not an opening bracket
    """
    end = _resolve_end(fs, start, end)
    if start >= end:
        raise PreconditionError(
            "should have at least 1 char, but got empty string"
        )

    left = fs[start]
    if left not in BRACKETS:
        raise PreconditionError(
            f"string should start with a bracket, starts instead with {left}"
        )

    if strict:
        return _find_closing_strict(fs, start, end)

    right = BRACKETS[left]
    depth = 0
    for i in range(start, end):
        if fs[i] == left:
            depth += 1
        elif fs[i] == right:
            depth -= 1

        if depth == 0:
            return i

    raise UnbalancedBracketsError(left, start)


def _find_closing_strict(fs: str, start: int, end: int) -> int:
    # Stack of (opening bracket, position)
    stack: list[tuple[str, int]] = []
    for i in range(start, end):
        c = fs[i]
        if c in BRACKETS:
            stack.append((c, i))
        elif c in CLOSING_BRACKETS:
            opener, position = stack.pop()
            if BRACKETS[opener] != c:
                raise UnbalancedBracketsError(opener, position, found=c)
            if not stack:
                return i

    raise UnbalancedBracketsError(fs[start], start)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class FormulaParser:
    """
    Turns formula strings into nested tuples of FormulaTerm.

    The parser walks an index cursor over the input rather than slicing
    off the consumed prefix; recursion only happens when entering a
    bracketed group, so call depth equals bracket nesting depth.

    Example:
        >>> parser = FormulaParser()
        >>> parser.parse('Ca(OH)2')
        (FormulaTerm(unit=Element(symbol='Ca'), count=1),
         FormulaTerm(unit=Group(terms=(...)), count=2))
    """

    def __init__(
        self,
        strict_brackets: bool = False,
        max_depth: Optional[int] = None,
    ):
        """
        Args:
            strict_brackets: Track every bracket style while matching a
                group, rejecting e.g. '(H]O)'. Default False keeps the
                lenient behaviour where only the opened style is tracked.

            max_depth: Maximum bracket nesting depth accepted. None means
                no limit beyond the interpreter's recursion limit.
        """
        if max_depth is not None and max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")

        self.strict_brackets = strict_brackets
        self.max_depth = max_depth

    def parse(self, formula: str) -> ParsedFormula:
        """
        Parse a whole formula string.

        Args:
            formula: Formula without whitespace, e.g. 'K4[Fe(CN)6]'

        Returns:
            Tuple of FormulaTerm in the order they appear. An empty string
            gives an empty tuple.

        Raises:
            UnbalancedBracketsError: A bracket is never closed
            InvalidCharacterError: A term starts with something other than
                an uppercase letter or an opening bracket
            NestingTooDeepError: Nesting exceeds max_depth
        """
        if not isinstance(formula, str):
            raise PreconditionError(
                f"not a string, but a {type(formula).__name__}"
            )
        return self._parse_span(formula, 0, len(formula), depth=0)

    def _parse_span(
        self,
        fs: str,
        start: int,
        end: int,
        depth: int,
    ) -> ParsedFormula:
        terms: list[FormulaTerm] = []
        pos = start

        while pos < end:
            char = fs[pos]

            if char in BRACKETS:
                if self.max_depth is not None and depth >= self.max_depth:
                    raise NestingTooDeepError(self.max_depth)
                close = find_closing_bracket(
                    fs, pos, end, strict=self.strict_brackets,
                )
                unit = Group(self._parse_span(fs, pos + 1, close, depth + 1))
                pos = close + 1

            elif is_ascii_upper(char):
                symbol = extract_element(fs, pos, end)
                unit = Element(symbol)
                pos += len(symbol)

            else:
                raise InvalidCharacterError(char, pos)

            consumed, count = extract_count(fs, pos, end)
            pos += consumed

            terms.append(FormulaTerm(unit=unit, count=count))

        return tuple(terms)


def parse_formula(
    formula: str,
    strict_brackets: bool = False,
    max_depth: Optional[int] = None,
) -> ParsedFormula:
    """Convenience wrapper around FormulaParser(...).parse(formula)."""
    return FormulaParser(
        strict_brackets=strict_brackets,
        max_depth=max_depth,
    ).parse(formula)
