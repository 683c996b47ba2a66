# tests/test_type_promotion.py

import pytest

from RatMath import error as E
from RatMath import type_promotion as TP
from RatMath.MathEngine import keep
from RatMath.integer import Integer
from RatMath.rational import Rational
from RatMath.rational_interval import RationalInterval


class TestLevels:

    def test_get_type_level(self):
        assert TP.get_type_level(Integer(1)) == TP.INTEGER
        assert TP.get_type_level(Rational(1, 2)) == TP.RATIONAL
        assert TP.get_type_level(RationalInterval(0, 1)) == TP.INTERVAL
        with pytest.raises(E.CalculationError, match="Unknown type"):
            TP.get_type_level(1.5)

    def test_promote(self):
        assert TP.promote_to_level(Integer(2), TP.INTERVAL) == RationalInterval(2, 2)
        assert isinstance(TP.promote_to_level(Integer(2), TP.RATIONAL), Rational)

    def test_promote_never_demotes(self):
        with pytest.raises(E.CalculationError, match="Cannot demote"):
            TP.promote_to_level(Rational(1, 2), TP.INTEGER)

    def test_common_type(self):
        a, b = TP.promote_to_common_type(Integer(1), Rational(1, 2))
        assert isinstance(a, Rational) and isinstance(b, Rational)
        assert a == Rational(1)


class TestOperations:

    def test_mixed_operations(self):
        assert TP.add(Integer(1), RationalInterval(0, 1)) == RationalInterval(1, 2)
        assert TP.subtract(Rational(1, 2), Integer(1)) == Rational(-1, 2)
        assert TP.multiply(Integer(2), Rational(3, 4)) == Rational(3, 2)

    def test_integer_division(self):
        assert TP.divide(Integer(6), Integer(4)) == Rational(3, 2)
        assert isinstance(TP.divide(Integer(6), Integer(3)), Integer)

    def test_powers(self):
        assert TP.power(Rational(1, 2), 2) == Rational(1, 4)
        assert TP.multiply_power(Integer(2), 3) == RationalInterval(8, 8)
        assert TP.e_notation(Integer(3), 2) == Integer(300)
        assert TP.negate(Rational(1, 2)) == Rational(-1, 2)


class TestDemote:

    def test_point_interval_becomes_integer(self):
        result = TP.demote(RationalInterval(3, 3))
        assert isinstance(result, Integer)
        assert result == 3

    def test_point_interval_becomes_rational(self):
        result = TP.demote(RationalInterval(Rational(1, 2), Rational(1, 2)))
        assert isinstance(result, Rational)

    def test_wide_interval_stays(self):
        value = RationalInterval(1, 2)
        assert TP.demote(value) is value

    def test_kept_values_stay(self):
        assert isinstance(TP.demote(keep(Rational(4))), Rational)
        assert isinstance(TP.demote(keep(RationalInterval(2, 2))), RationalInterval)


class TestTypeFromString:

    @pytest.mark.parametrize("text, expected", [
        ("1:2", "interval"),
        ("1.5[+-1]", "interval"),
        ("1/2", "rational"),
        ("0.#3", "rational"),
        ("5", "integer"),
    ])
    def test_determine_type(self, text, expected):
        assert TP.determine_type_from_string(text) == expected
