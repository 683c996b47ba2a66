# continued_fraction.py
"""""
Simple continued fractions [a0; a1, a2, ...] over plain ints.

String notation: "a0.~a1~a2~..." (e.g. "3.~7~15~1"). An integer is written
"a0.~0". Only the first term may be negative, later terms are positive.
"""""

import re

from . import error as E

CF_PATTERN = re.compile(r"^(-?\d+)\.~(\d+(?:~\d+)*)$")


def coefficients(numerator, denominator):
    """Floor based Euclid: -8/3 -> [-3, 3]."""
    if denominator == 0:
        raise E.DivisionByZero("Denominator cannot be zero", code="3101")
    if denominator < 0:
        numerator, denominator = -numerator, -denominator

    terms = []
    while denominator != 0:
        quotient = numerator // denominator
        terms.append(quotient)
        numerator, denominator = denominator, numerator - quotient * denominator
    return terms


def convergents(terms):
    """Return the list of (h_k, k_k) convergent pairs of terms."""
    h_prev, h_prev2 = 1, 0
    k_prev, k_prev2 = 0, 1
    result = []
    for term in terms:
        h = term * h_prev + h_prev2
        k = term * k_prev + k_prev2
        result.append((h, k))
        h_prev2, h_prev = h_prev, h
        k_prev2, k_prev = k_prev, k
    return result


def evaluate(terms):
    """Return (numerator, denominator) of the continued fraction terms."""
    if not terms:
        raise E.MalformedLiteral("Continued fraction must have at least one term", code="3013")
    for term in terms[1:]:
        if term <= 0:
            raise E.MalformedLiteral("Continued fraction terms after the first must be positive", code="3013")
    return convergents(terms)[-1]


def parse(text):
    """Parse "a0.~a1~a2" into a list of ints."""
    text = text.strip()
    match = CF_PATTERN.match(text)
    if not match:
        raise E.MalformedLiteral(f"Invalid continued fraction format: {text}", code="3013")

    terms = [int(match.group(1))]
    tail = [int(part) for part in match.group(2).split("~")]

    # "a.~0" is the integer a
    if tail == [0]:
        return terms
    if 0 in tail:
        raise E.MalformedLiteral("Continued fraction terms after the first must be positive", code="3013")
    return terms + tail


def format_terms(terms):
    if len(terms) == 1:
        return f"{terms[0]}.~0"
    return f"{terms[0]}.~" + "~".join(str(term) for term in terms[1:])


def best_approximation(numerator, denominator, max_denominator):
    """Closest fraction with denominator <= max_denominator.

    Candidates are the last convergent that fits and the largest
    semiconvergent after it. Ties go to the smaller denominator.
    """
    if max_denominator < 1:
        raise E.CalculationError("Maximum denominator must be positive", code="3603")
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    if denominator <= max_denominator:
        return numerator, denominator

    h_prev, h_prev2 = 1, 0
    k_prev, k_prev2 = 0, 1
    for term in coefficients(numerator, denominator):
        k = term * k_prev + k_prev2
        if k > max_denominator:
            steps = (max_denominator - k_prev2) // k_prev
            best = (h_prev, k_prev)
            if steps > 0:
                semi = (steps * h_prev + h_prev2, steps * k_prev + k_prev2)
                if _error_cmp(semi, best, numerator, denominator) < 0:
                    best = semi
            return best
        h = term * h_prev + h_prev2
        h_prev2, h_prev = h_prev, h
        k_prev2, k_prev = k_prev, k
    return h_prev, k_prev


def _error_cmp(first, second, numerator, denominator):
    """Compare |first - x| with |second - x| for x = numerator/denominator."""
    first_error = abs(first[0] * denominator - numerator * first[1]) * second[1]
    second_error = abs(second[0] * denominator - numerator * second[1]) * first[1]
    return (first_error > second_error) - (first_error < second_error)
