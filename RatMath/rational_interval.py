# rational_interval.py
"""""
Closed interval [low, high] with Rational endpoints.

The constructor orders its endpoints, so low <= high always holds. Integer
and Rational operands are promoted to point intervals.

pow(n) is the exact image {x^n : x in [low, high]}, while mpow(n) multiplies
the interval with itself n times (interval arithmetic treats the factors as
independent, so mpow is usually wider).
"""""

import random

from . import error as E
from . import integer as I
from . import rational as R


def _to_rational(value):
    if isinstance(value, R.Rational):
        return value
    if isinstance(value, (I.Integer, int, str)) and not isinstance(value, bool):
        return R.Rational(value)
    raise E.MalformedLiteral(f"Invalid interval endpoint: {value!r}", code="3011")


def _floor(value):
    return value.numerator // value.denominator


def _ceil(value):
    return -((-value.numerator) // value.denominator)


class RationalInterval:
    # Set by the parser on values whose written form must survive simplification
    keep_form = False

    def __init__(self, a, b):
        low = _to_rational(a)
        high = _to_rational(b)
        if low > high:
            low, high = high, low
        self._low = low
        self._high = high

    @property
    def low(self):
        return self._low

    @property
    def high(self):
        return self._high

    @staticmethod
    def point(value=0):
        value = _to_rational(value)
        return RationalInterval(value, value)

    @staticmethod
    def from_string(text):
        parts = text.split(":")
        if len(parts) != 2:
            raise E.MalformedLiteral("Invalid interval format. Use 'a:b'", code="3011")
        return RationalInterval(parts[0].strip(), parts[1].strip())

    def is_point(self):
        return self._low == self._high

    def width(self):
        return self._high - self._low

    # -----------------------------
    # Arithmetic
    # -----------------------------

    def __add__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return RationalInterval(self._low + other.low, self._high + other.high)

    __radd__ = __add__

    def __sub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return RationalInterval(self._low - other.high, self._high - other.low)

    def __rsub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        products = [self._low * other.low, self._low * other.high,
                    self._high * other.low, self._high * other.high]
        return RationalInterval(min(products), max(products))

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        if other.low == 0 and other.high == 0:
            raise E.DivisionByZero("Division by zero", code="3100")
        if other.contains_zero():
            raise E.DivisionByZero("Cannot divide by an interval containing zero", code="3102")
        quotients = [self._low / other.low, self._low / other.high,
                     self._high / other.low, self._high / other.high]
        return RationalInterval(min(quotients), max(quotients))

    def __rtruediv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other / self

    def __neg__(self):
        return RationalInterval(-self._high, -self._low)

    def __pos__(self):
        return self

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

    def reciprocate(self):
        if self.contains_zero():
            raise E.DivisionByZero("Cannot reciprocate an interval containing zero", code="3102")
        return RationalInterval(self._high.reciprocal(), self._low.reciprocal())

    def pow(self, exponent):
        """Element-wise power {x^n : x in self}."""
        n = I._exponent_value(exponent)

        if n == 0:
            if self._low == 0 and self._high == 0:
                raise E.UndefinedPower("Zero cannot be raised to the power of zero", code="3200")
            return RationalInterval(R.Rational.one, R.Rational.one)

        if n < 0:
            if self.contains_zero():
                raise E.UndefinedPower("Cannot raise an interval containing zero to a negative power",
                                       code="3202")
            return self.reciprocate().pow(-n)

        low_power = self._low.pow(n)
        high_power = self._high.pow(n)

        if n % 2 == 1:
            return RationalInterval(low_power, high_power)

        # Even exponent
        if self.contains_zero():
            return RationalInterval(R.Rational.zero, max(low_power, high_power))
        if self._high < 0:
            return RationalInterval(high_power, low_power)
        return RationalInterval(low_power, high_power)

    def mpow(self, exponent):
        """Repeated multiplication self * self * ... (n factors)."""
        n = I._exponent_value(exponent)

        if n == 0:
            raise E.UndefinedPower("Multiplicative exponentiation requires at least one factor", code="3203")

        base = self
        if n < 0:
            base = self.reciprocate()
            n = -n

        result = base
        for _ in range(n - 1):
            result = result * base
        return result

    def E(self, exponent):
        return RationalInterval(self._low.E(exponent), self._high.E(exponent))

    # -----------------------------
    # Predicates / set operations
    # -----------------------------

    def overlaps(self, other):
        return not (self._high < other.low or other.high < self._low)

    def contains(self, other):
        return self._low <= other.low and other.high <= self._high

    def contains_value(self, value):
        value = _to_rational(value)
        return self._low <= value <= self._high

    def contains_zero(self):
        return self._low <= 0 <= self._high

    def equals(self, other):
        return self == other

    def intersection(self, other):
        if not self.overlaps(other):
            return None
        return RationalInterval(max(self._low, other.low), min(self._high, other.high))

    def union(self, other):
        """Hull of both intervals, or None when they neither overlap nor touch."""
        if not self.overlaps(other):
            return None
        return RationalInterval(min(self._low, other.low), max(self._high, other.high))

    def __eq__(self, other):
        if not isinstance(other, RationalInterval):
            return NotImplemented
        return self._low == other.low and self._high == other.high

    def __hash__(self):
        return hash((self._low, self._high))

    # -----------------------------
    # Points inside the interval
    # -----------------------------

    def mediant(self):
        return R.Rational(self._low.numerator + self._high.numerator,
                          self._low.denominator + self._high.denominator)

    def midpoint(self):
        return (self._low + self._high) / 2

    def shortest_decimal(self, base=10):
        """Rational in the interval whose denominator is the smallest power of base.

        A point interval without such a representation (checked up to
        base^50) gives None.
        """
        base = I._exponent_value(base)
        if base <= 1:
            raise E.InvalidBase("Base must be greater than 1", code="3400")

        if self.is_point():
            denominator = 1
            for _ in range(51):
                scaled = self._low * denominator
                if scaled.denominator == 1:
                    return R.Rational(scaled.numerator, denominator)
                denominator *= base
            return None

        denominator = 1
        while True:
            min_numerator = _ceil(self._low * denominator)
            max_numerator = _floor(self._high * denominator)
            if min_numerator <= max_numerator:
                return R.Rational(min_numerator, denominator)
            denominator *= base

    def random_rational(self, max_denominator=1000):
        """Uniform choice among the reduced fractions in the interval."""
        max_denominator = I._exponent_value(max_denominator)
        if max_denominator <= 0:
            raise E.CalculationError("maxDenominator must be positive", code="3603")

        candidates = []
        for denominator in range(1, max_denominator + 1):
            low = _ceil(self._low * denominator)
            high = _floor(self._high * denominator)
            for numerator in range(low, high + 1):
                candidate = R.Rational(numerator, denominator)
                if candidate.denominator == denominator:
                    candidates.append(candidate)

        if not candidates:
            return self.midpoint()
        return random.choice(candidates)

    def find_shortest_precise_decimal(self):
        """Fewest-digit decimal inside the interval, nearest the midpoint (lower on ties)."""
        midpoint = self.midpoint()
        for precision in range(21):
            scale = 10 ** precision
            min_int = _ceil(self._low * scale)
            max_int = _floor(self._high * scale)
            if min_int > max_int:
                continue

            # Candidates closest to the midpoint
            center = _floor(midpoint * scale)
            best = None
            for numerator in (center, center + 1):
                if min_int <= numerator <= max_int:
                    candidate = R.Rational(numerator, scale)
                    if best is None or abs(candidate - midpoint) < abs(best - midpoint):
                        best = candidate
            if best is None:
                best = R.Rational(min_int if center < min_int else max_int, scale)
            return best
        return midpoint

    # -----------------------------
    # Output
    # -----------------------------

    def to_string(self):
        return f"{self._low.to_string()}:{self._high.to_string()}"

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"RationalInterval({self._low!r}, {self._high!r})"

    def to_mixed_string(self):
        return f"{self._low.to_mixed_string()}:{self._high.to_mixed_string()}"

    def to_repeating_decimal(self, use_repeat_notation=True):
        low = self._low.to_repeating_decimal_with_period(use_repeat_notation)[0]
        high = self._high.to_repeating_decimal_with_period(use_repeat_notation)[0]
        return f"{low}:{high}"

    def compacted_decimal_interval(self):
        """"1.2356:1.2367" -> "1.23[56,67]"; falls back to "low:high"."""
        low_text = self._low.to_decimal()
        high_text = self._high.to_decimal()

        prefix_length = 0
        for low_char, high_char in zip(low_text, high_text):
            if low_char != high_char:
                break
            prefix_length += 1
        common = low_text[:prefix_length]
        fallback = f"{low_text}:{high_text}"

        if len(common) <= 1 or (common.startswith("-") and len(common) <= 2):
            return fallback

        low_suffix = low_text[prefix_length:]
        high_suffix = high_text[prefix_length:]
        if not low_suffix or not high_suffix or len(low_suffix) != len(high_suffix):
            return fallback
        if not (low_suffix.isdigit() and high_suffix.isdigit()):
            return fallback
        return f"{common}[{low_suffix},{high_suffix}]"

    def relative_mid_decimal_interval(self):
        midpoint = self.midpoint()
        offset = self._high - midpoint
        return f"{midpoint.to_decimal()}[+-{offset.to_decimal()}]"

    def relative_decimal_interval(self):
        """Shortest decimal in the interval with offsets, e.g. "1.23[+5,-6]".

        Offsets are scaled to the digit after the base's last place, as the
        uncertainty parser reads them back.
        """
        base = self.find_shortest_precise_decimal()
        offset_low = base - self._low
        offset_high = self._high - base

        base_text = base.to_decimal()
        places = len(base_text.split(".")[1]) if "." in base_text else 0
        if places > 0:
            scale = R.Rational(10) ** (places + 1)
            scaled_low = offset_low * scale
            scaled_high = offset_high * scale
        else:
            scaled_low = offset_low
            scaled_high = offset_high

        if abs(offset_low - offset_high) < R.Rational(1, 1000000):
            average = (scaled_low + scaled_high) / 2
            return f"{base_text}[+-{average.to_decimal()}]"
        return f"{base_text}[+{scaled_high.to_decimal()},-{scaled_low.to_decimal()}]"


def _coerce(other):
    if isinstance(other, RationalInterval):
        return other
    if isinstance(other, (R.Rational, I.Integer)) or (isinstance(other, int) and not isinstance(other, bool)):
        return RationalInterval.point(other)
    return None


RationalInterval.zero = RationalInterval(0, 0)
RationalInterval.one = RationalInterval(1, 1)
RationalInterval.unit_interval = RationalInterval(0, 1)
