"""
Tests for formula parsing
"""
import sys

import pytest

from formula_mass.core.parser import (
    Element,
    FormulaParser,
    FormulaTerm,
    Group,
    extract_count,
    extract_element,
    find_closing_bracket,
    is_ascii_lower,
    is_ascii_upper,
    is_digit,
    parse_formula,
)
from formula_mass.core.errors import (
    CountTooLargeError,
    DataInputError,
    InvalidCharacterError,
    NestingTooDeepError,
    PreconditionError,
    UnbalancedBracketsError,
)


def _el(symbol: str, count: int = 1) -> FormulaTerm:
    return FormulaTerm(unit=Element(symbol), count=count)


def _grp(*terms: FormulaTerm, count: int = 1) -> FormulaTerm:
    return FormulaTerm(unit=Group(tuple(terms)), count=count)


class TestCharacterClassification:
    @pytest.mark.parametrize("char,expected", [
        ('0', True), ('5', True), ('9', True),
        ('a', False), ('/', False), (':', False),
        ('٣', False),  # Arabic-Indic digit three is not ASCII
    ])
    def test_is_digit(self, char, expected):
        assert is_digit(char) is expected

    @pytest.mark.parametrize("char,expected", [
        ('A', True), ('Z', True), ('a', False), ('Ü', False), ('(', False),
    ])
    def test_is_ascii_upper(self, char, expected):
        assert is_ascii_upper(char) is expected

    @pytest.mark.parametrize("char,expected", [
        ('a', True), ('z', True), ('A', False), ('é', False), ('1', False),
    ])
    def test_is_ascii_lower(self, char, expected):
        assert is_ascii_lower(char) is expected

    @pytest.mark.parametrize("func", [is_digit, is_ascii_upper, is_ascii_lower])
    @pytest.mark.parametrize("bad", ['', 'ab', 1, None])
    def test_preconditions(self, func, bad):
        """
        Anything other than a one-character string is a programming error
        """
        with pytest.raises(PreconditionError):
            func(bad)

    def test_precondition_error_is_not_data_input_error(self):
        with pytest.raises(TypeError) as excinfo:
            is_digit('12')
        assert not isinstance(excinfo.value, DataInputError)


class TestExtractElement:
    @pytest.mark.parametrize("fs,expected", [
        ('H', 'H'),
        ('H2', 'H'),
        ('He', 'He'),
        ('He2', 'He'),
        ('CO', 'C'),
        ('Co', 'Co'),
        ('Cl2', 'Cl'),
        ('C(', 'C'),
        ('Fe]', 'Fe'),
    ])
    def test_extract(self, fs, expected):
        assert extract_element(fs) == expected

    def test_lowercase_pair_is_one_symbol(self):
        """
        'Ch' is read as a single (unknown) symbol, never as C + h
        """
        assert extract_element('Ch4') == 'Ch'

    def test_respects_start_and_end(self):
        assert extract_element('H2He', start=2) == 'He'
        assert extract_element('HeH', start=0, end=1) == 'H'

    @pytest.mark.parametrize("fs", ['', 'h2', '2H', '(H)'])
    def test_preconditions(self, fs):
        with pytest.raises(PreconditionError):
            extract_element(fs)

    def test_non_string(self):
        with pytest.raises(PreconditionError, match="not a string"):
            extract_element(['H'])


class TestExtractCount:
    @pytest.mark.parametrize("fs,expected", [
        ('', (0, 1)),
        ('O', (0, 1)),
        ('2', (1, 2)),
        ('12O', (2, 12)),
        ('007', (3, 7)),
        ('0', (1, 0)),
    ])
    def test_extract(self, fs, expected):
        assert extract_count(fs) == expected

    def test_from_offset(self):
        assert extract_count('H2O', start=1) == (1, 2)
        assert extract_count('H2O', start=2) == (0, 1)

    def test_large_count(self):
        digits = '123456789012345678901234567890'
        assert extract_count(digits) == (len(digits), int(digits))

    def test_digit_run_past_int_conversion_limit(self):
        """
        CPython refuses int() on very long digit strings; that is bad
        input, not a bug
        """
        limit = getattr(sys, "get_int_max_str_digits", lambda: 0)()
        if not limit:
            pytest.skip("interpreter has no int string conversion limit")
        with pytest.raises(CountTooLargeError, match="Count too large"):
            extract_count("1" * (limit + 1))

    def test_stops_at_end(self):
        assert extract_count('H123', start=1, end=3) == (2, 12)


class TestFindClosingBracket:
    @pytest.mark.parametrize("fs,expected", [
        ('()', 1),
        ('(OH)2', 3),
        ('(a(b)c)d', 6),
        ('[Fe(CN)6]', 8),
        ('{H}{O}', 2),
    ])
    def test_find(self, fs, expected):
        assert find_closing_bracket(fs) == expected

    def test_other_styles_ignored_by_default(self):
        """
        Only the opened style is tracked, so ']' does not end a '(' group
        """
        assert find_closing_bracket('(H]O)') == 4
        assert find_closing_bracket('(H[O)]') == 4

    def test_strict_rejects_mismatched_closer(self):
        with pytest.raises(UnbalancedBracketsError) as excinfo:
            find_closing_bracket('(H]O)', strict=True)
        assert excinfo.value.bracket == '('
        assert excinfo.value.found == ']'

    def test_strict_accepts_well_nested(self):
        assert find_closing_bracket('{[()]}', strict=True) == 5

    def test_unclosed(self):
        with pytest.raises(UnbalancedBracketsError) as excinfo:
            find_closing_bracket('(OH2')
        assert excinfo.value.position == 0
        assert excinfo.value.found is None

    def test_closer_beyond_end_is_not_seen(self):
        with pytest.raises(UnbalancedBracketsError):
            find_closing_bracket('(OH)', end=3)

    @pytest.mark.parametrize("fs", ['', 'H', ')'])
    def test_preconditions(self, fs):
        with pytest.raises(PreconditionError):
            find_closing_bracket(fs)


class TestFormulaParser:

    def setup_method(self):
        self.parser = FormulaParser()

    def test_empty(self):
        assert self.parser.parse('') == ()

    def test_simple(self):
        assert self.parser.parse('H2O') == (_el('H', 2), _el('O'))

    def test_one_term_per_element_run(self):
        terms = self.parser.parse('C6H12O6')
        assert terms == (_el('C', 6), _el('H', 12), _el('O', 6))

    def test_two_letter_symbols(self):
        assert self.parser.parse('NaCl') == (_el('Na'), _el('Cl'))
        assert self.parser.parse('CoCO3') == (_el('Co'), _el('C'), _el('O', 3))

    def test_group(self):
        assert self.parser.parse('Ca(OH)2') == (
            _el('Ca'),
            _grp(_el('O'), _el('H'), count=2),
        )

    def test_nested_groups(self):
        assert self.parser.parse('K4[Fe(CN)6]') == (
            _el('K', 4),
            _grp(
                _el('Fe'),
                _grp(_el('C'), _el('N'), count=6),
            ),
        )

    @pytest.mark.parametrize("formula", ['(OH)2', '[OH]2', '{OH}2'])
    def test_bracket_styles_equivalent(self, formula):
        assert self.parser.parse(formula) == (
            _grp(_el('O'), _el('H'), count=2),
        )

    def test_empty_groups(self):
        assert self.parser.parse('{[()]}') == (_grp(_grp(_grp())),)

    def test_repeated_element_kept_in_order(self):
        terms = self.parser.parse('CH3COOH')
        assert [t.unit.symbol for t in terms] == ['C', 'H', 'C', 'O', 'O', 'H']

    def test_deep_nesting(self):
        formula = '(' * 50 + 'H' + ')' * 50
        terms = self.parser.parse(formula)
        for _ in range(50):
            assert len(terms) == 1
            assert terms[0].is_group
            terms = terms[0].unit.terms
        assert terms == (_el('H'),)

    def test_unbalanced(self):
        with pytest.raises(UnbalancedBracketsError) as excinfo:
            self.parser.parse('Ca(OH2')
        assert excinfo.value.bracket == '('
        assert excinfo.value.position == 2
        assert "Unbalanced" in str(excinfo.value)

    def test_unbalanced_inner_group(self):
        with pytest.raises(UnbalancedBracketsError) as excinfo:
            self.parser.parse('(H[O)]')
        assert excinfo.value.bracket == '['

    @pytest.mark.parametrize("formula,char,position", [
        ('h2o', 'h', 0),
        ('2H', '2', 0),
        (')H', ')', 0),
        ('H2-O', '-', 2),
        ('H٣', '٣', 1),
        ('Ca(OH)2+', '+', 7),
    ])
    def test_invalid_character(self, formula, char, position):
        with pytest.raises(InvalidCharacterError) as excinfo:
            self.parser.parse(formula)
        assert excinfo.value.char == char
        assert excinfo.value.position == position
        assert str(excinfo.value) == f"Invalid character: {char}"

    def test_mismatched_closer_lenient(self):
        """
        The stray ']' is skipped while matching, then fails as an
        ordinary character inside the group
        """
        with pytest.raises(InvalidCharacterError) as excinfo:
            self.parser.parse('(H]O)')
        assert excinfo.value.char == ']'

    def test_mismatched_closer_strict(self):
        parser = FormulaParser(strict_brackets=True)
        with pytest.raises(UnbalancedBracketsError):
            parser.parse('(H]O)')

    def test_strict_accepts_valid_formula(self):
        parser = FormulaParser(strict_brackets=True)
        assert parser.parse('K4[Fe(CN)6]') == self.parser.parse('K4[Fe(CN)6]')

    def test_max_depth(self):
        parser = FormulaParser(max_depth=1)
        assert parser.parse('Ca(OH)2')
        with pytest.raises(NestingTooDeepError):
            parser.parse('K4[Fe(CN)6]')

    def test_max_depth_zero(self):
        parser = FormulaParser(max_depth=0)
        assert parser.parse('H2O') == (_el('H', 2), _el('O'))
        with pytest.raises(NestingTooDeepError):
            parser.parse('(H)')

    def test_negative_max_depth(self):
        with pytest.raises(ValueError):
            FormulaParser(max_depth=-1)

    def test_non_string(self):
        with pytest.raises(PreconditionError):
            self.parser.parse(None)

    def test_parse_formula_wrapper(self):
        assert parse_formula('H2O') == self.parser.parse('H2O')
        with pytest.raises(UnbalancedBracketsError):
            parse_formula('(H]O)', strict_brackets=True)
