# fraction_interval.py
"""""
Interval between two unreduced Fractions, used for mediant partitioning.
"""""

from . import error as E
from . import fraction as F
from . import rational_interval as RI


class FractionInterval:
    def __init__(self, a, b):
        if not isinstance(a, F.Fraction) or not isinstance(b, F.Fraction):
            raise E.CalculationError("FractionInterval endpoints must be Fraction objects", code="3603")
        if a > b:
            a, b = b, a
        self._low = a
        self._high = b

    @property
    def low(self):
        return self._low

    @property
    def high(self):
        return self._high

    def mediant_split(self):
        """Split at the mediant of the endpoints into two intervals."""
        mediant = F.Fraction.mediant(self._low, self._high)
        return [FractionInterval(self._low, mediant), FractionInterval(mediant, self._high)]

    def partition_with_mediants(self, depth=1):
        """Split depth times at mediants, giving 2^depth intervals."""
        if depth < 0:
            raise E.CalculationError("Depth of mediant partitioning must be non-negative", code="3602")
        if depth == 0:
            return [self]

        intervals = [self]
        for _ in range(depth):
            next_level = []
            for interval in intervals:
                next_level.extend(interval.mediant_split())
            intervals = next_level
        return intervals

    def partition_with(self, partition_function):
        """Split at the points returned by partition_function(low, high)."""
        points = partition_function(self._low, self._high)
        if not isinstance(points, (list, tuple)):
            raise E.CalculationError("Partition function must return an array of Fractions", code="3602")
        for point in points:
            if not isinstance(point, F.Fraction):
                raise E.CalculationError("Partition function must return an array of Fraction objects",
                                         code="3602")

        ordered = sorted(points, key=lambda point: point.to_rational())
        for point in ordered:
            if point < self._low or point > self._high:
                raise E.CalculationError("Partition points should be within the interval", code="3602")

        boundaries = [self._low]
        for point in ordered + [self._high]:
            if point.to_rational() != boundaries[-1].to_rational():
                boundaries.append(point)

        return [FractionInterval(boundaries[i], boundaries[i + 1]) for i in range(len(boundaries) - 1)]

    def to_rational_interval(self):
        return RI.RationalInterval(self._low.to_rational(), self._high.to_rational())

    @staticmethod
    def from_rational_interval(interval):
        return FractionInterval(F.Fraction.from_rational(interval.low), F.Fraction.from_rational(interval.high))

    def E(self, exponent):
        return FractionInterval(self._low.E(exponent), self._high.E(exponent))

    def equals(self, other):
        return (isinstance(other, FractionInterval) and self._low.equals(other.low)
                and self._high.equals(other.high))

    __eq__ = equals

    def __hash__(self):
        return hash((self._low, self._high))

    def to_string(self):
        return f"{self._low.to_string()}:{self._high.to_string()}"

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"FractionInterval({self._low!r}, {self._high!r})"
