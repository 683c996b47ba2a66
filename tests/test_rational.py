# tests/test_rational.py
"""
Rational: normalisation, string forms, arithmetic, decimal output and
continued fractions.
"""

import pytest

from RatMath import error as E
from RatMath import decimal_conversion as DC
from RatMath import decimal_parser as DP
from RatMath.MathEngine import parse
from RatMath.rational import Rational


class TestNormalisation:

    def test_reduced_with_positive_denominator(self):
        value = Rational(2, 4)
        assert (value.numerator, value.denominator) == (1, 2)
        value = Rational(1, -2)
        assert (value.numerator, value.denominator) == (-1, 2)

    def test_zero_is_zero_over_one(self):
        value = Rational(0, 5)
        assert (value.numerator, value.denominator) == (0, 1)

    def test_zero_denominator_fails(self):
        with pytest.raises(E.DivisionByZero, match="Denominator cannot be zero"):
            Rational(1, 0)

    def test_copy_with_denominator(self):
        assert Rational(Rational(3, 4), 3) == Rational(1, 4)


class TestStringForms:

    def test_fraction_and_integer(self):
        assert Rational("3/4") == Rational(3, 4)
        assert Rational("-7") == Rational(-7)

    def test_mixed_numbers(self):
        assert Rational("5..2/3") == Rational(17, 3)
        assert Rational("-1..1/2") == Rational(-3, 2)
        # The sign sits on the whole part even when it is zero
        assert Rational("-0..1/2") == Rational(-1, 2)

    def test_exact_decimals(self):
        assert Rational("1.25") == Rational(5, 4)
        assert Rational("-.5") == Rational(-1, 2)

    def test_run_length_digits(self):
        assert Rational("0.1{0~3}2") == Rational(10002, 100000)

    def test_invalid(self):
        with pytest.raises(E.MalformedLiteral, match="Invalid rational format"):
            Rational("abc")
        with pytest.raises(E.MalformedLiteral, match="Invalid decimal format"):
            Rational("1.2.3")


class TestArithmetic:

    def test_operations(self):
        assert Rational(1, 2) + Rational(3, 4) == Rational(5, 4)
        assert Rational(1, 2) - Rational(3, 4) == Rational(-1, 4)
        assert Rational(2, 3) * Rational(3, 4) == Rational(1, 2)
        assert Rational(1, 2) / Rational(1, 4) == Rational(2)
        assert 1 - Rational(1, 3) == Rational(2, 3)

    def test_division_by_zero(self):
        with pytest.raises(E.DivisionByZero, match="Division by zero"):
            Rational(1, 2) / Rational(0)

    def test_reciprocal(self):
        assert Rational(-2, 3).reciprocal() == Rational(-3, 2)
        with pytest.raises(E.DivisionByZero, match="reciprocal of zero"):
            Rational(0).reciprocal()

    def test_pow(self):
        assert Rational(2, 3).pow(2) == Rational(4, 9)
        assert Rational(2, 3).pow(-2) == Rational(9, 4)
        assert Rational(5, 7).pow(0) == Rational(1)

    def test_zero_to_zero_fails(self):
        with pytest.raises(E.UndefinedPower, match="power of zero"):
            Rational(0).pow(0)

    def test_comparisons(self):
        assert Rational(1, 3) < Rational(1, 2)
        assert Rational(1, 2).compare_to(Rational(2, 4)) == 0
        assert Rational(3, 4).greater_than(Rational(2, 3))
        assert Rational(4, 2) == 2

    def test_e_notation(self):
        assert Rational(3, 2).E(3) == Rational(1500)
        assert Rational(3, 2).E(-1) == Rational(3, 20)


class TestDecimalOutput:

    @pytest.mark.parametrize("value, expected", [
        (Rational(1, 3), ("0.#3", 1)),
        (Rational(1, 7), ("0.#142857", 6)),
        (Rational(1, 4), ("0.25#0", 0)),
        (Rational(1, 6), ("0.1#6", 1)),
        (Rational(-1, 3), ("-0.#3", 1)),
        (Rational(22, 7), ("3.#142857", 6)),
        (Rational(5), ("5", 0)),
        (Rational(0), ("0", 0)),
    ])
    def test_repeating_decimal_with_period(self, value, expected):
        assert value.to_repeating_decimal_with_period() == expected

    def test_long_runs_use_run_length_notation(self):
        text, period = Rational(1, 9999999).to_repeating_decimal_with_period()
        assert text == "0.#{0~6}1"
        assert period == 7

    def test_period_search_limit(self):
        text, period = Rational(1, 7).to_repeating_decimal_with_period(True, 3)
        assert period == -1
        assert text == "0.#14285714285714285714..."
        with pytest.raises(E.MalformedLiteral):
            parse(text)
        with pytest.raises(E.MalformedLiteral):
            DP.parse_repeating_decimal(text)

    def test_long_period_is_written_in_full(self):
        text, period = Rational(1, 1019).to_repeating_decimal_with_period()
        assert period == 1018
        assert not text.endswith("...")
        assert len(DC.expand_repeated_digits(text)) == len("0.#") + 1018

    @pytest.mark.parametrize("value", [
        Rational(1, 3),
        Rational(-1, 7),
        Rational(22, 7),
        Rational(-5, 12),
        Rational(123456789, 1000),
        Rational(1, 10 ** 6),
        Rational(1, 9999999),
        Rational(355, 113),
        Rational(1, 1019),
        Rational(-7, 1019 * 40),
    ])
    def test_repeating_decimal_reads_back(self, value):
        text = value.to_repeating_decimal()
        assert parse(text) == value
        assert DP.parse_repeating_decimal(text) == value

    def test_truncated_decimal(self):
        assert Rational(1, 3).to_decimal() == "0." + "3" * 20
        assert Rational(-5, 4).to_decimal() == "-1.25"

    def test_mixed_string(self):
        assert Rational(7, 2).to_mixed_string() == "3..1/2"
        assert Rational(-7, 2).to_mixed_string() == "-3..1/2"
        assert Rational(1, 2).to_mixed_string() == "1/2"

    def test_scientific_notation(self):
        assert Rational(120).to_scientific_notation() == "1.20E+2"
        assert Rational(5).to_scientific_notation() == "5E+0"
        assert Rational(1, 4).to_scientific_notation() == "2.5E-1"

    def test_metadata(self):
        meta = Rational(1, 6).compute_decimal_metadata()
        assert meta["initial_segment"] == "1"
        assert meta["period_digits"] == "6"
        assert meta["period_length"] == 1
        assert not meta["is_terminating"]


class TestContinuedFractions:

    def test_coefficients(self):
        assert Rational(415, 93).to_continued_fraction() == [4, 2, 6, 7]
        assert Rational(-8, 3).to_continued_fraction() == [-3, 3]

    @pytest.mark.parametrize("value", [
        Rational(415, 93), Rational(-8, 3), Rational(355, 113), Rational(7), Rational(-1, 2),
    ])
    def test_round_trip(self, value):
        assert Rational.from_continued_fraction(value.to_continued_fraction()) == value
        assert Rational.from_continued_fraction_string(value.to_continued_fraction_string()) == value

    def test_string_form(self):
        assert Rational(355, 113).to_continued_fraction_string() == "3.~7~16"
        assert Rational(5).to_continued_fraction_string() == "5.~0"
        assert Rational.from_continued_fraction_string("3.~7~16") == Rational(355, 113)

    def test_convergents(self):
        assert Rational(355, 113).convergents() == [Rational(3), Rational(22, 7), Rational(355, 113)]

    def test_best_approximation(self):
        assert Rational(355, 113).best_approximation(10) == Rational(22, 7)
        assert Rational(355, 113).best_approximation(200) == Rational(355, 113)

    def test_approximation_error(self):
        assert Rational(355, 113).approximation_error(Rational(22, 7)) == Rational(1, 791)
