# rational.py
"""""
Exact rational number numerator/denominator.

Invariants: denominator > 0, gcd(|numerator|, denominator) == 1 and zero is
stored as 0/1. Every operation returns a new Rational.

Accepted string forms: "3/4", "-7", "5..2/3" (mixed number), "1.25" (exact
decimal) and run-length digits like "0.1{0~3}2".
"""""

import math
import re

from . import error as E
from . import integer as I
from . import decimal_conversion as DC
from . import continued_fraction as CF

DEFAULT_PERIOD_DIGITS = DC.DEFAULT_PERIOD_DIGITS
MAX_PERIOD_DIGITS = DC.MAX_PERIOD_DIGITS
MAX_PERIOD_CHECK = DC.MAX_PERIOD_CHECK

FRACTION_PATTERN = re.compile(r"^([+-]?\d+)(?:/(\d+))?$")
MIXED_PATTERN = re.compile(r"^([+-]?\d+)\.\.(\d+)/(\d+)$")
DECIMAL_PATTERN = re.compile(r"^([+-]?)(\d*)\.(\d*)$")


def _as_int(value):
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, I.Integer):
        return value.value
    return None


def _parse_string(text):
    """Return (numerator, denominator) for the string forms listed above."""
    text = DC.expand_repeated_digits(text.strip())

    match = MIXED_PATTERN.match(text)
    if match:
        whole = int(match.group(1))
        numerator = int(match.group(2))
        denominator = int(match.group(3))
        if denominator == 0:
            raise E.DivisionByZero("Denominator cannot be zero", code="3101")
        negative = match.group(1).startswith("-")
        value = abs(whole) * denominator + numerator
        return (-value if negative else value), denominator

    if "." in text:
        match = DECIMAL_PATTERN.match(text)
        if not match or (match.group(2) == "" and match.group(3) == ""):
            raise E.MalformedLiteral("Invalid decimal format", code="3005")
        digits = match.group(2) + match.group(3)
        numerator = int(digits)
        if match.group(1) == "-":
            numerator = -numerator
        return numerator, 10 ** len(match.group(3))

    match = FRACTION_PATTERN.match(text)
    if not match:
        raise E.MalformedLiteral("Invalid rational format. Use 'a/b', 'a', or 'a..b/c'", code="3003")
    denominator = int(match.group(2)) if match.group(2) is not None else 1
    return int(match.group(1)), denominator


class Rational:
    # Set by the parser on values whose written form must survive simplification
    keep_form = False

    def __init__(self, numerator=0, denominator=1):
        if isinstance(numerator, Rational):
            numerator, denominator = numerator.numerator, numerator.denominator * _require_int(denominator)
        elif isinstance(numerator, str):
            parsed_num, parsed_den = _parse_string(numerator)
            numerator, denominator = parsed_num, parsed_den * _require_int(denominator)
        else:
            numerator = _require_int(numerator)
            denominator = _require_int(denominator)

        if denominator == 0:
            raise E.DivisionByZero("Denominator cannot be zero", code="3101")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator

        divisor = math.gcd(numerator, denominator)
        self._numerator = numerator // divisor
        self._denominator = denominator // divisor

    @property
    def numerator(self):
        return self._numerator

    @property
    def denominator(self):
        return self._denominator

    @property
    def whole_part(self):
        """Whole part of |self|."""
        return abs(self._numerator) // self._denominator

    @property
    def remainder(self):
        """Numerator of the fractional part of |self|."""
        return abs(self._numerator) % self._denominator

    # -----------------------------
    # Arithmetic
    # -----------------------------

    def __add__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return Rational(self._numerator * other.denominator + other.numerator * self._denominator,
                        self._denominator * other.denominator)

    __radd__ = __add__

    def __sub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return Rational(self._numerator * other.denominator - other.numerator * self._denominator,
                        self._denominator * other.denominator)

    def __rsub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return Rational(self._numerator * other.numerator, self._denominator * other.denominator)

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        if other.numerator == 0:
            raise E.DivisionByZero("Division by zero", code="3100")
        return Rational(self._numerator * other.denominator, self._denominator * other.numerator)

    def __rtruediv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other / self

    def __neg__(self):
        return Rational(-self._numerator, self._denominator)

    def __pos__(self):
        return self

    def __abs__(self):
        return Rational(abs(self._numerator), self._denominator)

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

    def negate(self):
        return -self

    def abs(self):
        return abs(self)

    def reciprocal(self):
        if self._numerator == 0:
            raise E.DivisionByZero("Cannot take reciprocal of zero", code="3103")
        return Rational(self._denominator, self._numerator)

    def pow(self, exponent):
        exponent = I._exponent_value(exponent)

        if exponent == 0:
            if self._numerator == 0:
                raise E.UndefinedPower("Zero cannot be raised to the power of zero", code="3200")
            return Rational(1)
        if exponent < 0:
            if self._numerator == 0:
                raise E.UndefinedPower("Zero cannot be raised to a negative power", code="3201")
            return Rational(self._denominator ** -exponent, self._numerator ** -exponent)
        return Rational(self._numerator ** exponent, self._denominator ** exponent)

    def E(self, exponent):
        """Shift the decimal point: self * 10^exponent."""
        exponent = I._exponent_value(exponent)
        if exponent >= 0:
            return self * Rational(10 ** exponent)
        return self * Rational(1, 10 ** -exponent)

    # -----------------------------
    # Comparison
    # -----------------------------

    def compare_to(self, other):
        other = _coerce(other)
        left = self._numerator * other.denominator
        right = other.numerator * self._denominator
        return (left > right) - (left < right)

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
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self._numerator == other.numerator and self._denominator == other.denominator

    def __lt__(self, other):
        if _coerce(other) is None:
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other):
        if _coerce(other) is None:
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other):
        if _coerce(other) is None:
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other):
        if _coerce(other) is None:
            return NotImplemented
        return self.compare_to(other) >= 0

    def __hash__(self):
        if self._denominator == 1:
            return hash(self._numerator)
        return hash((self._numerator, self._denominator))

    def __bool__(self):
        return self._numerator != 0

    # -----------------------------
    # Output
    # -----------------------------

    def to_string(self):
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"Rational({self._numerator}, {self._denominator})"

    def to_mixed_string(self):
        """"a..b/c" form; proper fractions keep the plain "b/c" form."""
        if self._denominator == 1 or self._numerator == 0:
            return str(self._numerator)

        sign = "-" if self._numerator < 0 else ""
        if self.whole_part == 0:
            return f"{sign}{self.remainder}/{self._denominator}"
        return f"{sign}{self.whole_part}..{self.remainder}/{self._denominator}"

    def to_number(self):
        return self._numerator / self._denominator

    def __float__(self):
        return self.to_number()

    def to_decimal(self):
        """Decimal string truncated after 20 fractional digits."""
        return DC.to_decimal(self._numerator, self._denominator, DEFAULT_PERIOD_DIGITS)

    def to_repeating_decimal(self):
        return self.to_repeating_decimal_with_period()[0]

    def to_repeating_decimal_with_period(self, use_repeat_notation=True, max_period_check=MAX_PERIOD_CHECK):
        """Return (decimal, period): ("0.#3", 1), ("0.25#0", 0), ("5", 0).

        The whole period is written out, so the text parses back to this
        value. period is -1 when the search passes max_period_check; the
        text then ends in "..." and is not a readable literal.
        """
        return DC.repeating_decimal(self._numerator, self._denominator, use_repeat_notation,
                                    max_period_check)

    def compute_decimal_metadata(self, max_period_digits=DEFAULT_PERIOD_DIGITS):
        return DC.decimal_metadata(self._numerator, self._denominator, max_period_digits)

    def extract_period_segment(self, initial_segment, period_length, digits_requested):
        return DC.extract_period_segment(self._numerator, self._denominator, initial_segment,
                                         period_length, digits_requested)

    def to_scientific_notation(self, use_repeat_notation=True, precision=11, show_period_info=False):
        return DC.scientific_notation(self._numerator, self._denominator, use_repeat_notation,
                                      precision, show_period_info)

    # -----------------------------
    # Continued fractions
    # -----------------------------

    def to_continued_fraction(self):
        return CF.coefficients(self._numerator, self._denominator)

    @staticmethod
    def from_continued_fraction(coefficients):
        numerator, denominator = CF.evaluate([_require_int(term) for term in coefficients])
        return Rational(numerator, denominator)

    def to_continued_fraction_string(self):
        return CF.format_terms(self.to_continued_fraction())

    @staticmethod
    def from_continued_fraction_string(text):
        return Rational.from_continued_fraction(CF.parse(text))

    def convergents(self):
        return [Rational(h, k) for h, k in CF.convergents(self.to_continued_fraction())]

    def best_approximation(self, max_denominator):
        numerator, denominator = CF.best_approximation(self._numerator, self._denominator,
                                                       _require_int(max_denominator))
        return Rational(numerator, denominator)

    def approximation_error(self, other):
        return abs(self - other)

    @staticmethod
    def from_value(value):
        if isinstance(value, Rational):
            return Rational(value.numerator, value.denominator)
        return Rational(value)


def _require_int(value):
    result = _as_int(value)
    if result is None:
        raise E.MalformedLiteral(f"Invalid rational component: {value!r}", code="3003")
    return result


def _coerce(other):
    """Return other as a Rational for int/Integer/Rational operands, None otherwise."""
    if isinstance(other, Rational):
        return other
    value = _as_int(other)
    if value is None:
        return None
    return Rational(value)


Rational.zero = Rational(0)
Rational.one = Rational(1)
