# tests/test_integer.py
"""
Integer arithmetic, number theory helpers and promotion into Rational and
RationalInterval through the reflected operators.
"""

import pytest

from RatMath import error as E
from RatMath.integer import Integer
from RatMath.rational import Rational
from RatMath.rational_interval import RationalInterval


class TestConstruction:

    def test_from_int_and_string(self):
        assert Integer(42).value == 42
        assert Integer(" -7 ").value == -7
        assert Integer(Integer(3)).value == 3

    def test_rejects_non_integers(self):
        with pytest.raises(E.MalformedLiteral, match="Invalid integer format"):
            Integer("4.2")
        with pytest.raises(E.MalformedLiteral):
            Integer(1.5)
        with pytest.raises(E.MalformedLiteral):
            Integer(True)


class TestArithmetic:

    def test_basic_operations(self):
        assert Integer(7) + Integer(5) == Integer(12)
        assert Integer(7) - 10 == Integer(-3)
        assert 3 * Integer(4) == Integer(12)
        assert -Integer(5) == Integer(-5)
        assert abs(Integer(-5)) == Integer(5)

    def test_exact_division_stays_integer(self):
        result = Integer(6) / Integer(3)
        assert isinstance(result, Integer)
        assert result == 2

    def test_inexact_division_promotes(self):
        result = Integer(7) / Integer(2)
        assert isinstance(result, Rational)
        assert result == Rational(7, 2)

    def test_division_by_zero(self):
        with pytest.raises(E.DivisionByZero, match="Division by zero"):
            Integer(5) / Integer(0)

    def test_modulo_keeps_sign_of_dividend(self):
        assert Integer(-7).modulo(3) == Integer(-1)
        assert Integer(7).modulo(-3) == Integer(1)
        assert Integer(7) % 4 == Integer(3)
        with pytest.raises(E.DivisionByZero, match="Modulo by zero"):
            Integer(7).modulo(0)

    def test_pow(self):
        assert Integer(2).pow(10) == Integer(1024)
        assert Integer(2).pow(-2) == Rational(1, 4)
        assert Integer(5).pow(0) == Integer(1)
        assert Integer(3) ** Rational(2) == Integer(9)

    def test_zero_to_zero_fails(self):
        with pytest.raises(E.UndefinedPower, match="Zero cannot be raised to the power of zero"):
            Integer(0).pow(0)

    def test_zero_to_negative_power_fails(self):
        with pytest.raises(E.UndefinedPower, match="negative power"):
            Integer(0).pow(-1)

    def test_fractional_exponent_fails(self):
        with pytest.raises(E.UndefinedPower, match="Exponent must be an integer"):
            Integer(4).pow(Rational(1, 2))

    def test_e_notation(self):
        assert Integer(3).E(2) == Integer(300)
        assert Integer(3).E(-2) == Rational(3, 100)

    def test_reciprocal(self):
        result = Integer(4).reciprocal()
        assert isinstance(result, Rational)
        assert result == Rational(1, 4)
        assert Integer(-3).reciprocal() == Rational(-1, 3)
        with pytest.raises(E.DivisionByZero, match="Cannot take reciprocal of zero"):
            Integer(0).reciprocal()


class TestPromotion:

    def test_mixing_with_rational(self):
        result = Integer(1) + Rational(1, 2)
        assert isinstance(result, Rational)
        assert result == Rational(3, 2)
        assert Integer(1) - Rational(1, 2) == Rational(1, 2)

    def test_mixing_with_interval(self):
        result = Integer(1) + RationalInterval(0, 1)
        assert result == RationalInterval(1, 2)
        assert Integer(2) * RationalInterval(1, 3) == RationalInterval(2, 6)

    def test_equality_and_hash_match_rational(self):
        assert Integer(3) == Rational(3)
        assert hash(Integer(3)) == hash(Rational(3))
        assert Integer(3) < Integer(4)

    def test_named_comparisons(self):
        assert Integer(3).less_than(4)
        assert Integer(3).less_than_or_equal(Integer(3))
        assert Integer(2).greater_than(Rational(3, 2))
        assert Integer(2).greater_than_or_equal(Rational(2))
        assert not Integer(1).greater_than(Rational(3, 2))
        assert not Integer(5).less_than(Integer(-5))


class TestNumberTheory:

    def test_gcd_lcm(self):
        assert Integer(12).gcd(18) == Integer(6)
        assert Integer(4).lcm(6) == Integer(12)
        assert Integer(0).lcm(6) == Integer(0)

    def test_predicates(self):
        assert Integer(4).is_even()
        assert Integer(-3).is_odd()
        assert Integer(-3).is_negative()
        assert Integer(0).is_zero()
        assert Integer(-9).sign() == -1
        assert Integer(255).bit_length() == 8

    def test_factorials(self):
        assert Integer(0).factorial() == 1
        assert Integer(5).factorial() == 120
        assert Integer(7).double_factorial() == 105
        assert Integer(8).double_factorial() == 384

    def test_negative_factorial(self):
        with pytest.raises(E.NegativeFactorial, match="negative integers"):
            Integer(-1).factorial()
        with pytest.raises(E.NegativeFactorial, match="Double factorial"):
            Integer(-2).double_factorial()


class TestConversion:

    def test_rational_round_trip(self):
        assert Integer(5).to_rational() == Rational(5)
        assert Integer.from_rational(Rational(10, 2)) == Integer(5)

    def test_from_non_whole_rational_fails(self):
        with pytest.raises(E.CalculationError, match="not a whole number"):
            Integer.from_rational(Rational(3, 2))

    def test_output(self):
        assert Integer(-12).to_string() == "-12"
        assert Integer(3).to_number() == 3.0
