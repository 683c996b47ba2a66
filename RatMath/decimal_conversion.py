# decimal_conversion.py
"""""
Exact decimal expansion of numerator/denominator pairs.

All routines here work on plain Python ints, so the value classes can call
them without importing each other.

Layout of an expansion
----------------------
    whole_part . initial_segment # period_digits

- initial_segment: the non repeating digits, max(factors of 2, factors of 5)
  of the denominator long.
- period: multiplicative order of 10 modulo the denominator with all 2s and
  5s removed. Searching stops at the limit (10^7 by default) and reports -1.
- {d~k} run-length notation stands for k copies of d.
"""""

import re

DEFAULT_PERIOD_DIGITS = 20
MAX_PERIOD_DIGITS = 1000
MAX_PERIOD_CHECK = 10000000

REPEAT_PATTERN = re.compile(r"\{(.+?)~(\d+)\}")


# -----------------------------
# Small helpers
# -----------------------------

def count_factor(n, factor):
    """Return how often factor divides n."""
    if n == 0:
        return 0
    count = 0
    while n % factor == 0:
        n //= factor
        count += 1
    return count


def long_division(remainder, denominator, count):
    """Return (digit_string, remainder) after count steps of long division."""
    digits = []
    for _ in range(count):
        if remainder == 0:
            break
        remainder *= 10
        digits.append(str(remainder // denominator))
        remainder %= denominator
    return "".join(digits), remainder


def period_length(reduced_denominator, limit=MAX_PERIOD_CHECK):
    """Multiplicative order of 10 modulo reduced_denominator, -1 once limit is reached."""
    if limit is None:
        limit = MAX_PERIOD_CHECK
    if reduced_denominator == 1:
        return 0
    length = 1
    remainder = 10 % reduced_denominator
    while remainder != 1 and length < limit:
        length += 1
        remainder = (remainder * 10) % reduced_denominator
    return -1 if length >= limit else length


def split_leading_zeros(digits):
    stripped = digits.lstrip("0")
    return len(digits) - len(stripped), stripped


def format_repeated_digits(digits, threshold=6):
    """Compress runs of at least threshold equal digits into {d~k}."""
    if not digits:
        return digits

    result = []
    i = 0
    while i < len(digits):
        current = digits[i]
        count = 1
        while i + count < len(digits) and digits[i + count] == current:
            count += 1

        if count >= threshold:
            result.append("{" + current + "~" + str(count) + "}")
        else:
            result.append(current * count)
        i += count

    return "".join(result)


def expand_repeated_digits(text):
    """Expand {d~k} run-length notation back into plain digits."""
    if not text or "{" not in text:
        return text
    return REPEAT_PATTERN.sub(lambda match: match.group(1) * int(match.group(2)), text)


# -----------------------------
# Metadata
# -----------------------------

def decimal_metadata(numerator, denominator, max_period_digits=DEFAULT_PERIOD_DIGITS, limit=None):
    """Describe the decimal expansion of numerator/denominator (denominator > 0).

    At most max_period_digits digits of the period are produced.
    """
    whole_part, remainder = divmod(abs(numerator), denominator)
    meta = {
        "negative": numerator < 0,
        "whole_part": whole_part,
        "remainder": remainder,
        "initial_segment": "",
        "period_digits": "",
        "period_length": 0,
        "is_terminating": True,
        "factors_of_2": 0,
        "factors_of_5": 0,
    }

    if remainder != 0:
        factors_of_2 = count_factor(denominator, 2)
        factors_of_5 = count_factor(denominator, 5)
        initial_length = max(factors_of_2, factors_of_5)
        reduced = denominator // (2 ** factors_of_2 * 5 ** factors_of_5)

        initial_segment, rest = long_division(remainder, denominator, initial_length)
        meta["factors_of_2"] = factors_of_2
        meta["factors_of_5"] = factors_of_5
        meta["initial_segment"] = initial_segment

        if reduced != 1:
            length = period_length(reduced, limit)
            if length == -1 or length > max_period_digits:
                digits_to_compute = max_period_digits
            else:
                digits_to_compute = length
            meta["period_length"] = length
            meta["is_terminating"] = False
            meta["period_digits"], _ = long_division(rest, denominator, digits_to_compute)

    initial_zeros, initial_rest = split_leading_zeros(meta["initial_segment"])
    period_zeros, period_rest = split_leading_zeros(meta["period_digits"])
    meta["initial_segment_leading_zeros"] = initial_zeros
    meta["initial_segment_rest"] = initial_rest
    meta["leading_zeros_in_period"] = period_zeros
    meta["period_digits_rest"] = period_rest
    return meta


def extract_period_segment(numerator, denominator, initial_segment, length, digits_requested):
    """Return the first digits_requested digits of the period (capped at the period)."""
    if length in (0, -1):
        return ""

    remainder = abs(numerator) % denominator
    for _ in range(len(initial_segment)):
        remainder = (remainder * 10) % denominator

    digits = []
    for _ in range(min(digits_requested, length)):
        remainder *= 10
        digits.append(str(remainder // denominator))
        remainder %= denominator
    return "".join(digits)


# -----------------------------
# Renderers
# -----------------------------

def to_decimal(numerator, denominator, max_digits=DEFAULT_PERIOD_DIGITS):
    """Decimal string truncated after max_digits fractional digits."""
    if numerator == 0:
        return "0"
    sign = "-" if numerator < 0 else ""
    whole_part, remainder = divmod(abs(numerator), denominator)
    digits, _ = long_division(remainder, denominator, max_digits)
    if digits:
        return f"{sign}{whole_part}.{digits}"
    return f"{sign}{whole_part}"


def repeating_decimal(numerator, denominator, use_repeat_notation=True, limit=None,
                      max_period_digits=None):
    """Return (decimal_string, period) such as ("0.#3", 1) or ("0.25#0", 0).

    A known period is written out in full unless max_period_digits is given
    and shorter. A shortened period, or one the search gave up on (period
    -1), ends in "..." so the text never reads back as a different value.
    """
    if numerator == 0:
        return "0", 0

    meta = decimal_metadata(numerator, denominator, 0, limit)
    result = ("-" if meta["negative"] else "") + str(meta["whole_part"])
    initial_segment = meta["initial_segment"]
    formatted_initial = format_repeated_digits(initial_segment, 4) if use_repeat_notation else initial_segment

    if meta["is_terminating"]:
        if initial_segment:
            result += "." + formatted_initial + "#0"
        return result, 0

    length = meta["period_length"]
    if length == -1:
        count = DEFAULT_PERIOD_DIGITS
    elif max_period_digits is not None and length > max_period_digits:
        count = max_period_digits
    else:
        count = length
    _, rest = long_division(meta["remainder"], denominator, len(initial_segment))
    period_digits, _ = long_division(rest, denominator, count)

    display_period = format_repeated_digits(period_digits, 6) if use_repeat_notation else period_digits
    if count != length:
        display_period += "..."

    if initial_segment:
        result += "." + formatted_initial + "#" + display_period
    else:
        result += ".#" + display_period
    return result, length


def _period_info(meta, show_period_info):
    if not show_period_info or meta["is_terminating"]:
        return ""

    info = []
    if meta["initial_segment_leading_zeros"] > 0:
        info.append(f"initial: {meta['initial_segment_leading_zeros']} zeros")
    if meta["leading_zeros_in_period"] > 0:
        info.append(f"period starts: +{meta['leading_zeros_in_period']} zeros")
    if meta["period_length"] == -1:
        info.append("period: >10^7")
    elif meta["period_length"] > 0:
        info.append(f"period: {meta['period_length']}")

    return " {" + ", ".join(info) + "}" if info else ""


def scientific_notation(numerator, denominator, use_repeat_notation=True, precision=11,
                        show_period_info=False, limit=None):
    """Render as mantissa E exponent, e.g. "1.20E+2" or "2.5E-1"."""
    if numerator == 0:
        return "0"

    meta = decimal_metadata(numerator, denominator, 100, limit)
    prefix = "-" if meta["negative"] else ""
    period_info = _period_info(meta, show_period_info)

    # Value >= 1
    if meta["whole_part"] > 0:
        whole = str(meta["whole_part"])
        mantissa = whole[0]
        if len(whole) > 1 or meta["remainder"] > 0:
            mantissa += "." + whole[1:]
            if meta["remainder"] > 0:
                initial = meta["initial_segment"]
                mantissa += format_repeated_digits(initial, 4) if use_repeat_notation else initial
                if not meta["is_terminating"]:
                    period_digits = meta["period_digits"]
                    if use_repeat_notation:
                        mantissa += "#" + format_repeated_digits(period_digits, 6)
                    else:
                        mantissa += "#" + period_digits[:max(1, precision - len(mantissa))]
        return f"{prefix}{mantissa}E+{len(whole) - 1}{period_info}"

    # Value < 1, terminating
    if meta["is_terminating"]:
        rest = meta["initial_segment_rest"]
        if rest == "":
            return prefix + "0"
        mantissa = rest[0]
        if len(rest) > 1:
            mantissa += "." + rest[1:max(1, precision)]
        return f"{prefix}{mantissa}E{-(meta['initial_segment_leading_zeros'] + 1)}"

    # Value < 1, first significant digit before the period
    period_rest = meta["period_digits_rest"]
    if meta["initial_segment_rest"] != "":
        initial_rest = meta["initial_segment_rest"]
        mantissa = initial_rest[0] + "." + initial_rest[1:] + "#"
        zeros = meta["leading_zeros_in_period"]
        if use_repeat_notation and zeros >= 6:
            mantissa += "{0~" + str(zeros) + "}"
        elif zeros > 0:
            mantissa += "0" * min(zeros, 10)
        if period_rest:
            mantissa += period_rest[:max(1, precision - len(mantissa) + 1)]
        return f"{prefix}{mantissa}E{-(meta['initial_segment_leading_zeros'] + 1)}{period_info}"

    # Value < 1, first significant digit inside the period
    if period_rest == "":
        return prefix + "0"
    total_zeros = meta["initial_segment_leading_zeros"] + meta["leading_zeros_in_period"]
    mantissa = period_rest[0]
    if len(period_rest) > 1:
        mantissa += "." + period_rest[1:max(1, precision)]
    return f"{prefix}{mantissa}E{-(total_zeros + 1)}{period_info}"
