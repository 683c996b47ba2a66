# type_promotion.py
"""""
Promotion helpers for the value tower Integer (0) -> Rational (1) ->
RationalInterval (2).

The operators of the value classes already promote on their own; these
functions make the levels explicit for the parser and implement demote(),
the simplification applied to results in type aware mode.
"""""

from . import error as E
from . import integer as I
from . import rational as R
from . import rational_interval as RI

INTEGER = 0
RATIONAL = 1
INTERVAL = 2


def get_type_level(value):
    if isinstance(value, I.Integer):
        return INTEGER
    if isinstance(value, R.Rational):
        return RATIONAL
    if isinstance(value, RI.RationalInterval):
        return INTERVAL
    raise E.CalculationError(f"Unknown type: {type(value).__name__}", code="3603")


def integer_to_rational(integer):
    return R.Rational(integer.value, 1)


def rational_to_interval(rational):
    return RI.RationalInterval(rational, rational)


def integer_to_interval(integer):
    return rational_to_interval(integer_to_rational(integer))


def promote_to_level(value, target_level):
    if target_level not in (INTEGER, RATIONAL, INTERVAL):
        raise E.CalculationError(f"Invalid target level: {target_level}", code="3603")

    current_level = get_type_level(value)
    if current_level > target_level:
        raise E.CalculationError(f"Cannot demote from level {current_level} to level {target_level}",
                                 code="3603")
    if current_level == target_level:
        return value

    if current_level == INTEGER:
        value = integer_to_rational(value)
    if target_level == INTERVAL:
        value = rational_to_interval(value)
    return value


def promote_to_common_type(a, b):
    level = max(get_type_level(a), get_type_level(b))
    return promote_to_level(a, level), promote_to_level(b, level)


def add(a, b):
    a, b = promote_to_common_type(a, b)
    return a.add(b)


def subtract(a, b):
    a, b = promote_to_common_type(a, b)
    return a.subtract(b)


def multiply(a, b):
    a, b = promote_to_common_type(a, b)
    return a.multiply(b)


def divide(a, b):
    # Integer / Integer decides itself between Integer and Rational
    if isinstance(a, I.Integer) and isinstance(b, I.Integer):
        return a.divide(b)
    a, b = promote_to_common_type(a, b)
    return a.divide(b)


def e_notation(base, exponent):
    return base.E(exponent)


def power(base, exponent):
    return base.pow(exponent)


def multiply_power(base, exponent):
    """mpow for intervals; Integer and Rational are promoted to a point interval first."""
    return promote_to_level(base, INTERVAL).mpow(exponent)


def negate(value):
    get_type_level(value)
    return value.negate()


def demote(value):
    """Simplify a result to the tightest exact type.

    A point interval becomes a Rational and a Rational with denominator 1
    becomes an Integer, unless the value carries keep_form.
    """
    if value.keep_form:
        return value

    if isinstance(value, RI.RationalInterval):
        if not value.is_point():
            return value
        value = value.low

    if isinstance(value, R.Rational) and value.denominator == 1 and not value.keep_form:
        return I.Integer(value.numerator)
    return value


def determine_type_from_string(text):
    """Guess 'integer', 'rational' or 'interval' from the literal text."""
    if ":" in text:
        return "interval"
    if "[" in text and "]" in text:
        return "interval"
    if "/" in text or "." in text:
        return "rational"
    return "integer"
