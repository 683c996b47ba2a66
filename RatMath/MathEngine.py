# MathEngine.py
"""""
Expression parser and calculator front for RatMath.

Grammar, lowest binding first:

    sum      = term (("+" | "-") term)*
    term     = factor (("*" | "/" | "E" | " E") factor)*
    factor   = "(" sum ")" postfix
             | uncertainty postfix
             | "-" factor
             | literal postfix
    postfix  = ["E" exponent] ["!!" | "!"] [("^" | "**") exponent]
    literal  = rational [":" rational]

Rationals are integers, fractions "a/b", mixed numbers "a..b/c", decimals,
repeating decimals "0.#3", continued fractions "3.~7~16" and base prefixed
integers like "0xff". Whitespace is stripped, except that "a E b" turns E
into a low precedence operator and "a/ b" is always a division.

In type aware mode results are simplified (point interval -> Rational ->
Integer). Otherwise every number is an interval and plain decimals carry
their half unit uncertainty, "1.23" -> 1.225:1.235.
"""""

import re

from . import error as E
from . import config_manager
from . import integer as I
from . import rational as R
from . import rational_interval as RI
from . import decimal_parser as DP
from . import decimal_conversion as DC
from . import type_promotion as TP
from .base_system import BaseSystem

debug = False

DIGITS = "0123456789"

# Markers left behind by the whitespace preprocessing
SPACED_E = "\x01"
DIVISION_MARKER = "\x02"

RUN = r"(?:\d|\{\d+~\d+\})"
REPEATING_PATTERN = re.compile(r"(?:\d+\.?" + RUN + r"*|\." + RUN + r"+)#" + RUN + "*")
CONTINUED_FRACTION_PATTERN = re.compile(r"-?\d+\.~\d+(?:~\d+)*")
DECIMAL_PATTERN = re.compile(r"\d*\.\d+")
UNCERTAINTY_PATTERN = re.compile(r"-?\d*\.?\d*\[[^\]]+\]")
PREFIX_PATTERN = re.compile(r"0([a-zA-Z])")


def keep(value):
    """Mark value so that simplification leaves its type alone."""
    value.keep_form = True
    return value


class ExpressionParser:
    def __init__(self, expression, type_aware=True, input_base=None):
        if isinstance(input_base, int) and not isinstance(input_base, bool):
            input_base = BaseSystem.from_base(input_base)
        elif input_base is not None and not isinstance(input_base, BaseSystem):
            raise E.InvalidBase("Input base must be a BaseSystem or an integer", code="3400")
        if input_base is not None and input_base == BaseSystem.DECIMAL:
            input_base = None

        self.base = input_base
        self.type_aware = type_aware
        self.e_marker = input_base.e_notation_marker if input_base is not None else "E"

        text = re.sub(r"\s+" + re.escape(self.e_marker), SPACED_E, expression)
        text = re.sub(r"/\s+", "/" + DIVISION_MARKER, text)
        self.text = re.sub(r"\s+", "", text)
        self.pos = 0

    # -----------------------------
    # Cursor helpers
    # -----------------------------

    def peek(self, offset=0):
        index = self.pos + offset
        if index < len(self.text):
            return self.text[index]
        return ""

    def at_end(self):
        return self.pos >= len(self.text)

    def startswith(self, token):
        return self.text.startswith(token, self.pos)

    def is_digit(self, char):
        if self.base is None:
            return char != "" and char in DIGITS
        return self.base.is_valid_digit_string(char)

    def digit_run_end(self, pos):
        while pos < len(self.text) and self.is_digit(self.text[pos]):
            pos += 1
        return pos

    def read_digits(self):
        start = self.pos
        self.pos = self.digit_run_end(self.pos)
        # A letter right after the digits is a digit this base does not have
        if self.base is not None and not self.at_end():
            char = self.peek()
            if char.isalnum() and not self.startswith(self.e_marker):
                self.base.digit_to_value(char)
        return self.text[start:self.pos]

    def digits_value(self, digits):
        if not digits:
            return 0
        if self.base is None:
            return int(digits)
        return self.base.to_decimal(digits)

    def e_exponent_follows(self):
        """True when an E marker directly followed by a literal exponent is next."""
        if not self.startswith(self.e_marker):
            return False
        after = self.pos + len(self.e_marker)
        if after < len(self.text) and self.text[after] == "-":
            after += 1
        return after < len(self.text) and self.is_digit(self.text[after])

    def display(self, text):
        return text.replace(SPACED_E, " " + self.e_marker).replace(DIVISION_MARKER, " ")

    def simplify(self, value):
        if self.type_aware:
            return TP.demote(value)
        return value

    # -----------------------------
    # Grammar
    # -----------------------------

    def parse(self):
        if not self.text:
            raise E.MalformedLiteral("Expression cannot be empty", code="3000")

        value = self.parse_sum()
        if not self.at_end():
            raise E.MalformedLiteral(f"Unexpected token at end: {self.display(self.text[self.pos:])}",
                                     code="3001")

        if debug == True:
            print(f"Parsed {self.display(self.text)!r} -> {value!r}")
        return value

    def parse_sum(self):
        """Addition and subtraction."""
        value = self.parse_term()
        while self.peek() in ("+", "-"):
            operator = self.peek()
            self.pos += 1
            right = self.parse_term()
            value = value + right if operator == "+" else value - right
            if debug == True:
                print("Currently at: " + operator + " in parse_sum")
        return self.simplify(value)

    def parse_term(self):
        """Multiplication, division and E as an operator."""
        value = self.parse_factor()
        while not self.at_end():
            if self.peek() == "*":
                self.pos += 1
                value = value * self.parse_factor()
            elif self.peek() == "/":
                self.pos += 1
                if self.peek() == DIVISION_MARKER:
                    self.pos += 1
                value = value / self.parse_factor()
            elif self.peek() == SPACED_E or self.startswith(self.e_marker):
                self.pos += 1 if self.peek() == SPACED_E else len(self.e_marker)
                exponent = self.integer_exponent(self.parse_factor())
                value = self.apply_e(value, exponent)
            else:
                break
            value = self.simplify(value)
        return value

    def parse_factor(self):
        """Parenthesised sub-expressions, uncertainty literals, unary minus and literals."""
        if self.at_end():
            raise E.MalformedLiteral("Unexpected end of expression", code="3002")

        if self.peek() == "(":
            self.pos += 1
            value = self.parse_sum()
            if self.peek() != ")":
                raise E.MalformedLiteral("Missing closing parenthesis", code="3009")
            self.pos += 1
            return self.parse_postfix(value)

        match = UNCERTAINTY_PATTERN.match(self.text, self.pos)
        if match:
            if self.base is not None:
                raise E.InvalidUncertaintyFormat("Uncertainty notation is only supported in base 10",
                                                 code="3500")
            self.pos = match.end()
            value = DP.parse_decimal_uncertainty(match.group(0), allow_integer_range_notation=True)
            return self.parse_postfix(self.simplify(value))

        if self.peek() == "-":
            start = self.pos
            if self.base is None and CONTINUED_FRACTION_PATTERN.match(self.text, self.pos):
                value, _ = self.parse_interval()
                return self.parse_postfix(value)
            # "-1:2" is a literal with a signed endpoint, "-2^2" negates 2^2
            if self.is_digit(self.peek(1)) or self.peek(1) == ".":
                value, explicit = self.parse_interval()
                if explicit:
                    return self.parse_postfix(value)
                self.pos = start
            self.pos += 1
            return self.negate(self.parse_factor())

        value, _ = self.parse_interval()
        return self.parse_postfix(value)

    def parse_postfix(self, value):
        if self.e_exponent_follows():
            self.pos += len(self.e_marker)
            value = self.simplify(self.apply_e(value, self.parse_exponent()))

        if self.startswith("!!"):
            self.pos += 2
            value = self.factorial(value, double=True)
        elif self.peek() == "!":
            self.pos += 1
            value = self.factorial(value, double=False)

        if self.startswith("**"):
            self.pos += 2
            value = keep(TP.multiply_power(value, self.parse_exponent()))
        elif self.peek() == "^":
            self.pos += 1
            exponent = self.parse_exponent()
            if exponent == 0 and is_zero(value):
                raise E.UndefinedPower("Zero cannot be raised to the power of zero", code="3200")
            value = value.pow(exponent)
        return value

    def parse_exponent(self):
        """Literal integer exponent, written in the input base."""
        negative = self.peek() == "-"
        if negative:
            self.pos += 1
        digits = self.read_digits()
        if not digits:
            raise E.MalformedLiteral("Invalid exponent", code="3008")
        value = self.digits_value(digits)
        return -value if negative else value

    # -----------------------------
    # Literals
    # -----------------------------

    def parse_interval(self):
        """Return (value, explicit) where explicit means an "a:b" literal was read."""
        if not self.type_aware:
            end = self.plain_decimal_end()
            if end is not None:
                return self.parse_uncertain_decimal(end), False

        first = self.parse_endpoint_exponent(self.parse_rational(), before_colon=True)

        if self.peek() != ":":
            if not self.type_aware:
                return RI.RationalInterval.point(first), False
            if first.denominator == 1 and not first.keep_form:
                return I.Integer(first.numerator), False
            return first, False

        self.pos += 1
        second = self.parse_endpoint_exponent(self.parse_rational(), before_colon=False)
        return keep(RI.RationalInterval(first, second)), True

    def parse_endpoint_exponent(self, value, before_colon):
        # Before a colon the exponent belongs to the endpoint, otherwise it
        # is left for parse_postfix and applies to the whole literal
        if not self.e_exponent_follows():
            return value
        start = self.pos
        self.pos += len(self.e_marker)
        exponent = self.parse_exponent()
        if before_colon and self.peek() != ":":
            self.pos = start
            return value
        return self.apply_e(value, exponent)

    def plain_decimal_end(self):
        """End of a decimal like "1.23" without repeat, interval or bracket, else None."""
        pos = self.pos + 1 if self.peek() == "-" else self.pos
        point = self.digit_run_end(pos)
        if point >= len(self.text) or self.text[point] != ".":
            return None
        end = self.digit_run_end(point + 1)
        if end == point + 1:
            return None
        if end < len(self.text) and self.text[end] in "#:~[.":
            return None
        return end

    def parse_uncertain_decimal(self, end):
        literal = self.text[self.pos:end]
        negative = literal.startswith("-")
        if self.base is None:
            self.pos = end
            return DP.parse_non_repeating_decimal(literal.lstrip("-"), negative)

        exact = self.parse_rational()
        places = len(literal) - literal.index(".") - 1
        radius = R.Rational(1, 2 * self.base.base ** places)
        return RI.RationalInterval(exact - radius, exact + radius)

    def parse_rational(self):
        """Signed rational literal; keep_form marks an explicit "n/1" fraction."""
        # The sign of a continued fraction belongs to its first term: -2.~2 is -3/2
        if self.base is None:
            match = CONTINUED_FRACTION_PATTERN.match(self.text, self.pos)
            if match:
                self.pos = match.end()
                return R.Rational.from_continued_fraction_string(match.group(0))

        negative = self.peek() == "-"
        if negative:
            self.pos += 1
        value = self.parse_unsigned_rational()
        if negative:
            negated = -value
            negated.keep_form = value.keep_form
            return negated
        return value

    def parse_unsigned_rational(self):
        if self.at_end():
            raise E.MalformedLiteral("Unexpected end of expression", code="3002")

        value = self.parse_prefixed_integer()
        if value is not None:
            return value

        if self.base is not None:
            value = self.parse_base_decimal()
            if value is not None:
                return value
            return self.parse_fraction()

        match = REPEATING_PATTERN.match(self.text, self.pos)
        if match:
            self.pos = match.end()
            try:
                return DP.parse_repeating_decimal(match.group(0))
            except E.MathError as error:
                raise E.MalformedLiteral(f"Invalid repeating decimal: {error.message}", code="3006")

        match = DECIMAL_PATTERN.match(self.text, self.pos)
        if match:
            self.pos = match.end()
            return R.Rational(match.group(0))

        return self.parse_fraction()

    def parse_prefixed_integer(self):
        """"0x1f", "0b101", "0o17", "0d42" via the BaseSystem prefix registry."""
        if self.base is not None:
            return None
        match = PREFIX_PATTERN.match(self.text, self.pos)
        if not match:
            return None
        system = BaseSystem.get_system_for_prefix(match.group(1))
        if system is None:
            return None

        end = match.end()
        while end < len(self.text) and system.is_valid_digit_string(self.text[end]):
            end += 1
        if end == match.end():
            return None

        digits = self.text[match.end():end]
        self.pos = end
        return R.Rational(system.to_decimal(digits))

    def parse_base_decimal(self):
        """Decimal point and repeating forms with digits of the input base."""
        start = self.pos
        whole = self.read_digits()
        if self.peek() != "." or self.peek(1) in (".", "~"):
            self.pos = start
            return None
        self.pos += 1
        fraction = self.read_digits()

        repeat = None
        if self.peek() == "#":
            self.pos += 1
            repeat = self.read_digits()
            if not repeat:
                raise E.MalformedLiteral("Invalid repeating decimal: Repeating part must contain only digits",
                                         code="3006")
        if not whole and not fraction:
            raise E.MalformedLiteral("Invalid decimal format", code="3005")

        base = self.base.base
        ab = self.digits_value(whole + fraction)
        if repeat is None:
            return R.Rational(ab, base ** len(fraction))
        abc = self.digits_value(whole + fraction + repeat)
        return DP.repeating_fraction(ab, abc, len(fraction), len(repeat), base)

    def parse_fraction(self):
        """Integer, "a/b" or "a..b/c". A slash before "(" or " " is left as division."""
        whole_text = self.read_digits()
        if not whole_text:
            raise E.MalformedLiteral(f"Unexpected token: {self.display(self.peek())}", code="3001")
        whole = self.digits_value(whole_text)

        mixed = self.startswith("..")
        if mixed:
            self.pos += 2
            numerator_text = self.read_digits()
            if not numerator_text:
                raise E.MalformedLiteral('Invalid mixed number format: missing numerator after ".."',
                                         code="3007")
            numerator = self.digits_value(numerator_text)
        else:
            numerator = whole

        if self.peek() != "/" or self.peek(1) in (DIVISION_MARKER, "("):
            if mixed:
                raise E.MalformedLiteral("Invalid mixed number format: missing denominator", code="3007")
            return R.Rational(numerator)

        self.pos += 1
        denominator_text = self.read_digits()
        if not denominator_text:
            if mixed:
                raise E.MalformedLiteral("Invalid mixed number format: missing denominator", code="3007")
            raise E.MalformedLiteral("Invalid rational number format", code="3003")

        if self.startswith(self.e_marker):
            kind = "mixed number" if mixed else "fraction"
            raise E.MalformedLiteral(f"E notation not allowed directly after {kind} without parentheses",
                                     code="3010")

        denominator = self.digits_value(denominator_text)
        if denominator == 0:
            raise E.DivisionByZero("Denominator cannot be zero", code="3101")

        if mixed:
            return R.Rational(whole * denominator + numerator, denominator)
        value = R.Rational(numerator, denominator)
        if denominator == 1:
            keep(value)
        return value

    # -----------------------------
    # Operations used by the grammar
    # -----------------------------

    def apply_e(self, value, exponent):
        """value * base^exponent for the active input base."""
        if self.base is None:
            return value.E(exponent)
        return value * R.Rational(self.base.base) ** exponent

    def integer_exponent(self, value):
        if isinstance(value, I.Integer):
            return value.value
        if isinstance(value, R.Rational) and value.denominator == 1:
            return value.numerator
        if isinstance(value, RI.RationalInterval) and value.is_point() and value.low.denominator == 1:
            return value.low.numerator
        raise E.MalformedLiteral("E notation exponent must be an integer", code="3008")

    def negate(self, value):
        if self.type_aware and isinstance(value, (I.Integer, R.Rational)):
            negated = -value
            negated.keep_form = value.keep_form
            return negated
        return RI.RationalInterval.point(-1) * value

    def factorial(self, value, double):
        name = "Double factorial" if double else "Factorial"

        if isinstance(value, RI.RationalInterval):
            if not value.is_point():
                raise E.NegativeFactorial(f"{name} is only defined for integers", code="3301")
            return RI.RationalInterval.point(self.factorial(value.low, double))

        if isinstance(value, R.Rational):
            if value.denominator != 1:
                raise E.NegativeFactorial(f"{name} is only defined for integers", code="3301")
            value = I.Integer(value.numerator)

        if double:
            return value.double_factorial()
        return value.factorial()


def is_zero(value):
    if isinstance(value, RI.RationalInterval):
        return value.low == 0 and value.high == 0
    return value == 0


def parse(expression, type_aware=True, input_base=None):
    """Parse and evaluate expression into an Integer, Rational or RationalInterval."""
    return ExpressionParser(expression, type_aware, input_base).parse()


# -----------------------------
# Output formatting
# -----------------------------

def truncate_decimal(text, limit):
    """Cut a plain decimal after limit fractional digits, marking the cut with "..."."""
    point = text.find(".")
    if point != -1 and len(text) - point - 1 > limit:
        return text[:point + limit + 1] + "..."
    return text


def truncate_repeating_decimal(text, limit):
    """Shorten "a.b#c" notation to roughly limit digits; "#0" endings are dropped.

    A period that already ends in "..." keeps the marker.
    """
    if "#" not in text:
        return text
    if text.endswith("#0"):
        return truncate_decimal(text[:-2], limit)

    cut = text.endswith("...")
    if cut:
        text = text[:-3]
    if len(text) > limit + 2:
        before, after = text.split("#", 1)
        if len(before) > limit + 1:
            return before[:limit + 1] + "..."
        space = limit + 2 - len(before)
        if space <= 1:
            return before + "#..."
        if len(after) > space - 1:
            return before + "#" + after[:space - 1] + "..."
    return text + "..." if cut else text


def period_suffix(period):
    if period == -1:
        return " [period > 10^7]"
    if period > 0:
        return f" {{period: {period}}}"
    return ""


def format_rational(rational, output_mode="BOTH", limit=20, max_period_digits=DC.MAX_PERIOD_DIGITS,
                    max_period_check=DC.MAX_PERIOD_CHECK):
    repeating, period = DC.repeating_decimal(rational.numerator, rational.denominator, True,
                                             max_period_check, max_period_digits)
    fraction = rational.to_string()
    shown = repeating if repeating.endswith("#0") else truncate_repeating_decimal(repeating, limit)

    if output_mode == "DECI":
        return shown + period_suffix(period)
    if output_mode == "RAT":
        return fraction
    if "/" in fraction:
        return f"{shown}{period_suffix(period)} ({fraction})"
    return truncate_decimal(DC.to_decimal(rational.numerator, rational.denominator, limit + 1), limit)


def format_interval(interval, output_mode="BOTH", limit=20, max_period_digits=DC.MAX_PERIOD_DIGITS,
                    max_period_check=DC.MAX_PERIOD_CHECK):
    shown = []
    periods = []
    for name, endpoint in (("low", interval.low), ("high", interval.high)):
        repeating, period = DC.repeating_decimal(endpoint.numerator, endpoint.denominator, True,
                                                 max_period_check, max_period_digits)
        # Interval endpoints are already inexact, so "#0" adds nothing
        if repeating.endswith("#0"):
            shown.append(repeating[:-2])
        else:
            shown.append(truncate_repeating_decimal(repeating, limit))
        if period == -1:
            periods.append(f"{name}: > 10^7")
        elif period > 0:
            periods.append(f"{name}: {period}")

    period_info = f" {{period: {', '.join(periods)}}}" if periods else ""
    decimal_range = f"{shown[0]}:{shown[1]}{period_info}"
    rational_range = interval.to_string()

    if output_mode == "DECI":
        return decimal_range
    if output_mode == "RAT":
        return rational_range
    if decimal_range != rational_range:
        return f"{decimal_range} ({rational_range})"
    return decimal_range


def format_result(value, output_mode="BOTH", limit=20, max_period_digits=DC.MAX_PERIOD_DIGITS,
                  max_period_check=DC.MAX_PERIOD_CHECK):
    """Display string of a calculation result for DECI, RAT or BOTH output."""
    if isinstance(value, RI.RationalInterval):
        return format_interval(value, output_mode, limit, max_period_digits, max_period_check)
    if isinstance(value, R.Rational):
        return format_rational(value, output_mode, limit, max_period_digits, max_period_check)
    return value.to_string()


# -----------------------------
# Calculator API
# -----------------------------

def evaluate(problem, settings=None):
    """Parse problem with the configured mode and base; returns the value."""
    global debug
    if settings is None:
        settings = config_manager.load_settings_with_defaults()
    settings = config_manager.validate_settings(settings)

    debug = settings["debug"]
    return parse(problem, settings["type_aware"], settings["input_base"])


def calculate(problem, settings=None):
    """Main API: parse -> evaluate -> format, returns the display string."""
    try:
        if settings is None:
            settings = config_manager.load_settings_with_defaults()
        settings = config_manager.validate_settings(settings)
        ergebnis = evaluate(problem, settings)
        ausgabe_string = format_result(ergebnis, settings["output_mode"], settings["decimal_limit"],
                                       settings["max_period_digits"], settings["max_period_check"])
        return "= " + ausgabe_string

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise e
    # Convert unexpected Python exceptions to our unified error type
    except (ValueError, ArithmeticError, TypeError, RecursionError) as e:
        error_message = str(e).strip()
        parts = error_message.split(maxsplit=1)
        code = "9999"
        message = error_message

        # If an error string already begins with a 4-digit code, respect it
        if parts and parts[0].isdigit() and len(parts[0]) == 4:
            code = parts[0]
            if len(parts) > 1:
                message = parts[1]
        raise E.MathError(message=message, code=code, equation=problem)


def test_main():
    """Simple REPL-like runner for manual testing of the engine."""
    print("Enter the problem: ")
    problem = input()
    ergebnis = calculate(problem)
    print(ergebnis)


if __name__ == "__main__":
    test_main()
