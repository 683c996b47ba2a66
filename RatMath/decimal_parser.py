# decimal_parser.py
"""""
Reading decimal literals into exact values.

    "0.12#45"       repeating decimal -> Rational (exact)
    "1.25#0"        terminating decimal -> Rational (exact)
    "1.23"          plain decimal -> RationalInterval [1.225, 1.235]
    "0.#3:0.5#0"    interval of repeating decimals
    "1.23[56,67]"   uncertainty: range, "[+-5]" symmetric, "[+5,-6]" relative

A#B with non repeating digits AB (n fractional digits) and repeat C
(m digits) is (ABC - AB) / (10^n * (10^m - 1)).
"""""

import re

from . import error as E
from . import rational as R
from . import rational_interval as RI
from . import decimal_conversion as DC

UNCERTAINTY_PATTERN = re.compile(r"^(-?\d*\.?\d*)\[([^\]]+)\]$")
DECIMAL_POINT_BASE = re.compile(r"^-?\d+\.$")
DIGITS = re.compile(r"^\d*$")
RANGE_VALUE = re.compile(r"^\d+(\.\d+)?$")
PLAIN_NUMBER = re.compile(r"^-?(\d+\.?\d*|\.\d+)$")
EXPONENT = re.compile(r"^-?\d+$")


def repeating_fraction(ab, abc, n, m, base=10):
    """Exact value of a repeating expansion given the digit values AB and ABC."""
    return R.Rational(abc - ab, base ** n * (base ** m - 1))


def _split_decimal(text):
    parts = text.split(".")
    if len(parts) > 2:
        raise E.MalformedLiteral("Invalid decimal format - multiple decimal points", code="3005")
    integer_part = parts[0] or "0"
    fractional_part = parts[1] if len(parts) == 2 else ""
    return integer_part, fractional_part


# -----------------------------
# Repeating decimals
# -----------------------------

def parse_repeating_decimal(text):
    """Parse any decimal literal form listed in the module docstring."""
    if not text or not isinstance(text, str):
        raise E.MalformedLiteral("Input must be a non-empty string", code="3006")

    text = DC.expand_repeated_digits(text.strip())
    if "[" in text and "]" in text:
        return parse_decimal_uncertainty(text, allow_integer_range_notation=False)
    if ":" in text:
        return parse_repeating_decimal_interval(text)

    negative = text.startswith("-")
    if negative:
        text = text[1:]

    if "#" not in text:
        return parse_non_repeating_decimal(text, negative)

    parts = text.split("#")
    if len(parts) != 2:
        raise E.MalformedLiteral('Invalid repeating decimal format. Use format like "0.12#45"', code="3006")
    non_repeating, repeating = parts
    if not repeating.isdigit():
        raise E.MalformedLiteral("Repeating part must contain only digits", code="3006")

    integer_part, fractional_part = _split_decimal(non_repeating)
    if not DIGITS.match(integer_part) or not DIGITS.match(fractional_part):
        raise E.MalformedLiteral("Non-repeating part must contain only digits and at most one decimal point",
                                 code="3006")

    if repeating == "0":
        result = R.Rational(int(integer_part + fractional_part), 10 ** len(fractional_part))
    else:
        ab = int(integer_part + fractional_part)
        abc = int(integer_part + fractional_part + repeating)
        result = repeating_fraction(ab, abc, len(fractional_part), len(repeating))
    return -result if negative else result


def parse_non_repeating_decimal(text, negative=False):
    """"1.23" -> [1.225, 1.235]; an integer stays exact."""
    integer_part, fractional_part = _split_decimal(text)
    if not integer_part.isdigit() or not DIGITS.match(fractional_part):
        raise E.MalformedLiteral("Decimal must contain only digits and at most one decimal point", code="3005")

    if not fractional_part:
        value = R.Rational(int(integer_part))
        return -value if negative else value

    place = 10 ** (len(fractional_part) + 1)
    scaled = int(integer_part + fractional_part) * 10
    if negative:
        return RI.RationalInterval(R.Rational(-(scaled + 5), place), R.Rational(-(scaled - 5), place))
    return RI.RationalInterval(R.Rational(scaled - 5, place), R.Rational(scaled + 5, place))


def parse_repeating_decimal_interval(text):
    parts = text.split(":")
    if len(parts) != 2:
        raise E.MalformedLiteral('Invalid interval format. Use format like "0.#3:0.5#0"', code="3011")

    left = parse_repeating_decimal(parts[0].strip())
    right = parse_repeating_decimal(parts[1].strip())
    if isinstance(left, RI.RationalInterval) or isinstance(right, RI.RationalInterval):
        raise E.MalformedLiteral("Nested intervals are not supported", code="3012")
    return RI.RationalInterval(left, right)


# -----------------------------
# Uncertainty brackets
# -----------------------------

def _scale_offset(offset, places):
    """Offsets count units of the digit after the base's last place."""
    if places == 0:
        return offset
    return offset / (10 ** (places + 1))


def parse_decimal_uncertainty(text, allow_integer_range_notation=True):
    match = UNCERTAINTY_PATTERN.match(text)
    if not match:
        raise E.InvalidUncertaintyFormat("Invalid uncertainty format", code="3500")

    base_text = match.group(1)
    payload = match.group(2)

    if DECIMAL_POINT_BASE.match(base_text) and not payload.startswith(("+-", "-+")):
        return parse_decimal_point_uncertainty(base_text, payload)

    if base_text in ("", "-", ".", "-."):
        raise E.InvalidUncertaintyFormat("Uncertainty notation requires a base number", code="3500")
    base = R.Rational(base_text)
    places = len(base_text.split(".")[1]) if "." in base_text else 0

    if ("," in payload or ":" in payload) and "+" not in payload and "-" not in payload:
        return _parse_range(base_text, payload, places, allow_integer_range_notation)

    if payload.startswith(("+-", "-+")):
        offset_text = payload[2:]
        if not offset_text:
            raise E.InvalidUncertaintyFormat("Symmetric notation must have a valid number after +- or -+",
                                             code="3503")
        offset = _scale_offset(parse_offset(offset_text), places)
        return RI.RationalInterval(base - offset, base + offset)

    return _parse_relative(base, payload, places)


def _parse_range(base_text, payload, places, allow_integer_range_notation):
    if places == 0 and not allow_integer_range_notation:
        raise E.InvalidUncertaintyFormat("Range notation on integer bases is not supported in this context",
                                         code="3501")

    parts = re.split(r"[,:]", payload)
    if len(parts) != 2:
        raise E.InvalidUncertaintyFormat("Range notation must have exactly two values separated by comma",
                                         code="3501")
    lower_text = parts[0].strip()
    upper_text = parts[1].strip()
    if not RANGE_VALUE.match(lower_text) or not RANGE_VALUE.match(upper_text):
        raise E.InvalidUncertaintyFormat("Range values must be valid decimal numbers", code="3501")

    if places == 0:
        lower_int = lower_text.split(".")[0]
        upper_int = upper_text.split(".")[0]
        if len(lower_int) != len(upper_int):
            raise E.InvalidUncertaintyFormat(
                f"Invalid range notation: {base_text}[{lower_text},{upper_text}] - integer parts of range "
                f"values must have the same number of digits ({lower_int} has {len(lower_int)}, "
                f"{upper_int} has {len(upper_int)})", code="3501")

    # Reversed endpoints are ordered by the interval constructor
    lower = R.Rational(base_text + lower_text)
    upper = R.Rational(base_text + upper_text)
    return RI.RationalInterval(lower, upper)


def _parse_relative(base, payload, places):
    parts = [part.strip() for part in payload.split(",")]
    if len(parts) != 2:
        raise E.InvalidUncertaintyFormat("Relative notation must have exactly two values separated by comma",
                                         code="3502")

    positive = None
    negative = None
    for part in parts:
        if part.startswith("+"):
            if positive is not None:
                raise E.InvalidUncertaintyFormat("Only one positive offset allowed", code="3502")
            if not part[1:]:
                raise E.InvalidUncertaintyFormat("Offset must be a valid number", code="3502")
            positive = parse_offset(part[1:])
        elif part.startswith("-"):
            if negative is not None:
                raise E.InvalidUncertaintyFormat("Only one negative offset allowed", code="3502")
            if not part[1:]:
                raise E.InvalidUncertaintyFormat("Offset must be a valid number", code="3502")
            negative = parse_offset(part[1:])
        else:
            raise E.InvalidUncertaintyFormat("Relative notation values must start with + or -", code="3502")

    if positive is None or negative is None:
        raise E.InvalidUncertaintyFormat("Relative notation must have exactly one + and one - value", code="3502")

    return RI.RationalInterval(base - _scale_offset(negative, places), base + _scale_offset(positive, places))


def parse_decimal_point_uncertainty(base_text, payload):
    """Base ending in "." with endpoints like "1.[#3,5]" -> 1.#3 : 1.5."""
    if "," not in payload:
        raise E.InvalidUncertaintyFormat("Invalid uncertainty format for decimal point notation", code="3501")
    parts = payload.split(",")
    if len(parts) != 2:
        raise E.InvalidUncertaintyFormat("Range notation must have exactly two values separated by comma",
                                         code="3501")

    lower = _decimal_point_endpoint(base_text, parts[0].strip())
    upper = _decimal_point_endpoint(base_text, parts[1].strip())
    return RI.RationalInterval(lower, upper)


def _decimal_point_endpoint(base_text, endpoint):
    if endpoint.startswith("#"):
        return parse_repeating_decimal(base_text + endpoint)
    if endpoint.isdigit():
        return R.Rational(base_text + endpoint)
    raise E.InvalidUncertaintyFormat(f"Invalid endpoint format: {endpoint}", code="3501")


def parse_offset(text):
    """Offset value: plain number, repeating decimal, either with an optional E exponent."""
    exponent = 0
    if "E" in text:
        text, exponent_text = text.split("E", 1)
        if not EXPONENT.match(exponent_text):
            raise E.InvalidUncertaintyFormat("E notation exponent must be an integer", code="3500")
        exponent = int(exponent_text)

    if "#" in text:
        value = parse_repeating_decimal(text)
    else:
        if not PLAIN_NUMBER.match(text):
            raise E.InvalidUncertaintyFormat("Symmetric notation must have a valid number after +- or -+",
                                             code="3503")
        value = R.Rational(text)

    if isinstance(value, RI.RationalInterval):
        raise E.InvalidUncertaintyFormat("Offset must be a single value", code="3500")
    return value.E(exponent) if exponent else value
