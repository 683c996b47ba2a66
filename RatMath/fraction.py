# fraction.py
"""""
Unreduced fraction a/b.

Unlike Rational the numerator and denominator are kept exactly as written,
so 2/4 and 1/2 are different Fractions with the same value. Addition and
subtraction are only defined for equal denominators. Used for mediant
computations (Stern-Brocot style partitioning).
"""""

import re

from . import error as E
from . import integer as I
from . import rational as R

FRACTION_PATTERN = re.compile(r"^([+-]?\d+)(?:/([+-]?\d+))?$")


def _whole(value):
    """int for int/Integer components; anything else is rejected."""
    if isinstance(value, I.Integer):
        return value.value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise E.MalformedLiteral(f"Invalid fraction component: {value!r}", code="3014")


class Fraction:
    def __init__(self, numerator=0, denominator=1):
        if isinstance(numerator, str):
            match = FRACTION_PATTERN.match(numerator.strip())
            if not match:
                raise E.MalformedLiteral("Invalid fraction format. Use 'a/b' or 'a'", code="3014")
            numerator = int(match.group(1))
            denominator = int(match.group(2)) if match.group(2) is not None else 1
        else:
            numerator = _whole(numerator)
            denominator = _whole(denominator)

        if denominator == 0:
            raise E.DivisionByZero("Denominator cannot be zero", code="3101")
        self._numerator = numerator
        self._denominator = denominator

    @property
    def numerator(self):
        return self._numerator

    @property
    def denominator(self):
        return self._denominator

    def add(self, other):
        if self._denominator != other.denominator:
            raise E.CalculationError("Addition only supported for equal denominators", code="3600")
        return Fraction(self._numerator + other.numerator, self._denominator)

    def subtract(self, other):
        if self._denominator != other.denominator:
            raise E.CalculationError("Subtraction only supported for equal denominators", code="3600")
        return Fraction(self._numerator - other.numerator, self._denominator)

    def multiply(self, other):
        return Fraction(self._numerator * other.numerator, self._denominator * other.denominator)

    def divide(self, other):
        if other.numerator == 0:
            raise E.DivisionByZero("Division by zero", code="3100")
        return Fraction(self._numerator * other.denominator, self._denominator * other.numerator)

    def pow(self, exponent):
        exponent = I._exponent_value(exponent)
        if exponent == 0:
            if self._numerator == 0:
                raise E.UndefinedPower("Zero cannot be raised to the power of zero", code="3200")
            return Fraction(1, 1)
        if exponent < 0:
            if self._numerator == 0:
                raise E.UndefinedPower("Zero cannot be raised to a negative power", code="3201")
            return Fraction(self._denominator ** -exponent, self._numerator ** -exponent)
        return Fraction(self._numerator ** exponent, self._denominator ** exponent)

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply
    __truediv__ = divide
    __pow__ = pow

    def scale(self, factor):
        """Multiply numerator and denominator by factor (same value)."""
        factor = I._exponent_value(factor)
        return Fraction(self._numerator * factor, self._denominator * factor)

    def reduce(self):
        rational = self.to_rational()
        return Fraction(rational.numerator, rational.denominator)

    def E(self, exponent):
        exponent = I._exponent_value(exponent)
        if exponent >= 0:
            return Fraction(self._numerator * 10 ** exponent, self._denominator)
        return Fraction(self._numerator, self._denominator * 10 ** -exponent)

    @staticmethod
    def mediant(a, b):
        return Fraction(a.numerator + b.numerator, a.denominator + b.denominator)

    def to_rational(self):
        return R.Rational(self._numerator, self._denominator)

    @staticmethod
    def from_rational(rational):
        return Fraction(rational.numerator, rational.denominator)

    # -----------------------------
    # Comparison
    # -----------------------------

    def equals(self, other):
        """Structural equality: 1/2 does not equal 2/4."""
        return (isinstance(other, Fraction) and self._numerator == other.numerator
                and self._denominator == other.denominator)

    __eq__ = equals

    def __hash__(self):
        return hash((self._numerator, self._denominator))

    def compare_to(self, other):
        return self.to_rational().compare_to(other.to_rational())

    def less_than(self, other):
        return self.compare_to(other) < 0

    def less_than_or_equal(self, other):
        return self.compare_to(other) <= 0

    def greater_than(self, other):
        return self.compare_to(other) > 0

    def greater_than_or_equal(self, other):
        return self.compare_to(other) >= 0

    __lt__ = less_than
    __le__ = less_than_or_equal
    __gt__ = greater_than
    __ge__ = greater_than_or_equal

    def to_string(self):
        return f"{self._numerator}/{self._denominator}"

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"Fraction({self._numerator}, {self._denominator})"
