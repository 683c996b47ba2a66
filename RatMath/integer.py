# integer.py
"""""
Arbitrary precision integer value for the calculator.

Integer sits at the bottom of the promotion chain Integer -> Rational ->
RationalInterval. Operators return NotImplemented for higher tiers so that
Python falls back to the reflected operator of the richer type.
"""""

import re

from . import error as E
from . import rational as R

INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


def _coerce(other):
    """Return a plain int for int/Integer operands, None otherwise."""
    if isinstance(other, Integer):
        return other.value
    if isinstance(other, int) and not isinstance(other, bool):
        return other
    return None


class Integer:
    # Set by the parser on values whose written form must survive simplification
    keep_form = False

    def __init__(self, value=0):
        if isinstance(value, Integer):
            value = value.value
        elif isinstance(value, str):
            text = value.strip()
            if not INTEGER_PATTERN.match(text):
                raise E.MalformedLiteral("Invalid integer format. Must be a whole number", code="3004")
            value = int(text)
        elif isinstance(value, bool) or not isinstance(value, int):
            raise E.MalformedLiteral("Invalid integer format. Must be a whole number", code="3004")
        self._value = value

    @property
    def value(self):
        return self._value

    # -----------------------------
    # Arithmetic
    # -----------------------------

    def __add__(self, other):
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return Integer(self._value + other_value)

    __radd__ = __add__

    def __sub__(self, other):
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return Integer(self._value - other_value)

    def __rsub__(self, other):
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return Integer(other_value - self._value)

    def __mul__(self, other):
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return Integer(self._value * other_value)

    __rmul__ = __mul__

    def __truediv__(self, other):
        """Exact quotient: Integer when divisible, Rational otherwise."""
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        if other_value == 0:
            raise E.DivisionByZero("Division by zero", code="3100")
        if self._value % other_value == 0:
            return Integer(self._value // other_value)
        return R.Rational(self._value, other_value)

    def __rtruediv__(self, other):
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return Integer(other_value) / self

    def __mod__(self, other):
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self.modulo(other_value)

    def __neg__(self):
        return Integer(-self._value)

    def __pos__(self):
        return self

    def __abs__(self):
        return Integer(abs(self._value))

    def __pow__(self, exponent):
        return self.pow(exponent)

    def add(self, other):
        return self + other

    def subtract(self, other):
        return self - other

    def multiply(self, other):
        return self * other

    def divide(self, other):
        return self / other

    def modulo(self, other):
        """Remainder with the sign of the dividend (truncated division)."""
        other_value = _coerce(other)
        if other_value is None:
            raise E.CalculationError("Modulo requires an integer operand", code="3603")
        if other_value == 0:
            raise E.DivisionByZero("Modulo by zero", code="3104")
        remainder = abs(self._value) % abs(other_value)
        return Integer(-remainder if self._value < 0 else remainder)

    def negate(self):
        return -self

    def abs(self):
        return abs(self)

    def reciprocal(self):
        """1/n as a Rational."""
        if self._value == 0:
            raise E.DivisionByZero("Cannot take reciprocal of zero", code="3103")
        return R.Rational(1, self._value)

    def pow(self, exponent):
        exponent = _exponent_value(exponent)

        if exponent == 0:
            if self._value == 0:
                raise E.UndefinedPower("Zero cannot be raised to the power of zero", code="3200")
            return Integer(1)
        if exponent < 0:
            if self._value == 0:
                raise E.UndefinedPower("Zero cannot be raised to a negative power", code="3201")
            return R.Rational(1, self._value ** -exponent)
        return Integer(self._value ** exponent)

    def E(self, exponent):
        """Multiply by 10^exponent; Integer for exponent >= 0, Rational below."""
        exponent = _exponent_value(exponent)
        if exponent >= 0:
            return Integer(self._value * 10 ** exponent)
        return R.Rational(self._value, 10 ** -exponent)

    # -----------------------------
    # Comparison
    # -----------------------------

    def compare_to(self, other):
        other_value = _coerce(other)
        if other_value is None:
            return -R.Rational(other).compare_to(self)
        return (self._value > other_value) - (self._value < other_value)

    def equals(self, other):
        return self == other

    def less_than(self, other):
        return self.compare_to(other) < 0

    def less_than_or_equal(self, other):
        return self.compare_to(other) <= 0

    def greater_than(self, other):
        return self.compare_to(other) > 0

    def greater_than_or_equal(self, other):
        return self.compare_to(other) >= 0

    def __eq__(self, other):
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self._value == other_value

    def __lt__(self, other):
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self._value < other_value

    def __le__(self, other):
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self._value <= other_value

    def __gt__(self, other):
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self._value > other_value

    def __ge__(self, other):
        other_value = _coerce(other)
        if other_value is None:
            return NotImplemented
        return self._value >= other_value

    def __hash__(self):
        return hash(self._value)

    def __int__(self):
        return self._value

    __index__ = __int__

    def __bool__(self):
        return self._value != 0

    # -----------------------------
    # Number theory helpers
    # -----------------------------

    def sign(self):
        return (self._value > 0) - (self._value < 0)

    def is_zero(self):
        return self._value == 0

    def is_positive(self):
        return self._value > 0

    def is_negative(self):
        return self._value < 0

    def is_even(self):
        return self._value % 2 == 0

    def is_odd(self):
        return self._value % 2 != 0

    def gcd(self, other):
        a, b = abs(self._value), abs(_coerce(other))
        while b:
            a, b = b, a % b
        return Integer(a)

    def lcm(self, other):
        other_value = _coerce(other)
        if self._value == 0 or other_value == 0:
            return Integer(0)
        return Integer(abs(self._value * other_value) // self.gcd(other_value).value)

    def bit_length(self):
        return self._value.bit_length()

    def factorial(self):
        if self._value < 0:
            raise E.NegativeFactorial("Factorial is not defined for negative integers", code="3300")
        result = 1
        for i in range(2, self._value + 1):
            result *= i
        return Integer(result)

    def double_factorial(self):
        if self._value < 0:
            raise E.NegativeFactorial("Double factorial is not defined for negative integers", code="3300")
        result = 1
        for i in range(self._value, 1, -2):
            result *= i
        return Integer(result)

    # -----------------------------
    # Conversion
    # -----------------------------

    def to_rational(self):
        return R.Rational(self._value, 1)

    @staticmethod
    def from_rational(rational):
        if rational.denominator != 1:
            raise E.CalculationError("Rational is not a whole number", code="3601")
        return Integer(rational.numerator)

    def to_number(self):
        return float(self._value)

    def to_string(self):
        return str(self._value)

    def __str__(self):
        return str(self._value)

    def __repr__(self):
        return f"Integer({self._value})"


def _exponent_value(exponent):
    """Return exponent as int; Integer and whole Rationals are accepted."""
    if isinstance(exponent, R.Rational):
        if exponent.denominator != 1:
            raise E.UndefinedPower("Exponent must be an integer", code="3204")
        return exponent.numerator
    value = _coerce(exponent)
    if value is None:
        raise E.UndefinedPower("Exponent must be an integer", code="3204")
    return value


Integer.zero = Integer(0)
Integer.one = Integer(1)
