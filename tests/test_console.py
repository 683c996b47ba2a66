# tests/test_console.py
"""
Result formatting, the calculate() API and the terminal command loop.
"""

import pytest

from RatMath import error as E
from RatMath import MathEngine
from RatMath.Console import Console, HELP_TEXT
from RatMath.integer import Integer
from RatMath.rational import Rational
from RatMath.rational_interval import RationalInterval


@pytest.fixture
def console():
    return Console(settings={"output_mode": "BOTH", "decimal_limit": 20})


class TestFormatResult:

    def test_repeating_with_period(self):
        assert MathEngine.format_result(Rational(1, 3)) == "0.#3 {period: 1} (1/3)"
        assert MathEngine.format_result(Rational(1, 3), "DECI") == "0.#3 {period: 1}"
        assert MathEngine.format_result(Rational(1, 3), "RAT") == "1/3"

    def test_terminating(self):
        assert MathEngine.format_result(Rational(1, 4)) == "0.25#0 (1/4)"

    def test_whole_values(self):
        assert MathEngine.format_result(Integer(42)) == "42"
        assert MathEngine.format_result(Rational(4)) == "4"

    def test_limit_truncates_period(self):
        assert MathEngine.format_result(Rational(1, 7), "DECI", 5) == "0.#1428... {period: 6}"

    def test_interval(self):
        value = RationalInterval(Rational(1, 2), Rational(3, 4))
        assert MathEngine.format_result(value) == "0.5:0.75 (1/2:3/4)"
        value = RationalInterval(Rational(1, 3), Rational(1, 2))
        assert MathEngine.format_result(value, "DECI") == "0.#3:0.5 {period: low: 1}"

    def test_integer_interval_is_not_repeated(self):
        assert MathEngine.format_result(RationalInterval(1, 2)) == "1:2"

    def test_period_beyond_display_digits(self):
        text = MathEngine.format_result(Rational(1, 1019), "DECI", 10, max_period_digits=100)
        assert text == "0.#000981354... {period: 1018}"

    def test_period_search_limit(self):
        text = MathEngine.format_result(Rational(1, 7), "DECI", 20, max_period_check=3)
        assert text == "0.#1428571428571428571... [period > 10^7]"

    def test_helpers(self):
        assert MathEngine.truncate_decimal("3.14159", 3) == "3.141..."
        assert MathEngine.truncate_decimal("3.14", 3) == "3.14"
        assert MathEngine.period_suffix(-1) == " [period > 10^7]"
        assert MathEngine.period_suffix(0) == ""


class TestCalculate:

    def test_result_string(self):
        assert MathEngine.calculate("1/2 + 3/4", settings={}) == "= 1.25#0 (5/4)"

    def test_output_mode_setting(self):
        assert MathEngine.calculate("1/2 + 3/4", settings={"output_mode": "RAT"}) == "= 5/4"

    def test_non_type_aware_setting(self):
        assert MathEngine.calculate("1.5", settings={"type_aware": False, "output_mode": "RAT"}) == "= 29/20:31/20"

    def test_errors_carry_equation_and_code(self):
        with pytest.raises(E.DivisionByZero) as error:
            MathEngine.calculate("1/0", settings={})
        assert error.value.equation == "1/0"
        assert error.value.code == "3101"

    def test_invalid_settings(self):
        with pytest.raises(E.ConfigurationError):
            MathEngine.calculate("1", settings={"output_mode": "HEX"})

    def test_evaluate_returns_value(self):
        assert MathEngine.evaluate("0x10", settings={}) == 16

    def test_period_search_setting_stays_local(self):
        result = MathEngine.calculate("1/7", settings={"max_period_check": 3, "output_mode": "DECI"})
        assert result.endswith("... [period > 10^7]")
        assert Rational(1, 7).to_repeating_decimal_with_period() == ("0.#142857", 6)
        assert MathEngine.calculate("1/7", settings={"output_mode": "DECI"}) == "= 0.#142857 {period: 6}"


class TestConsoleCommands:

    def test_help_and_blank(self, console):
        assert console.process_input("help") == HELP_TEXT
        assert console.process_input("   ") is None

    def test_output_modes(self, console):
        assert console.process_input("DECI") == "Output mode set to decimal"
        assert console.process_input("1/3") == "0.#3 {period: 1}"
        assert console.process_input("RAT") == "Output mode set to rational"
        assert console.process_input("1/3") == "1/3"
        assert console.process_input("BOTH") == "Output mode set to both decimal and rational"

    def test_limit(self, console):
        assert console.process_input("LIMIT") == "Current decimal display limit: 20 digits"
        assert console.process_input("LIMIT 5") == "Decimal display limit set to 5 digits"
        assert console.process_input("LIMIT x") == "Error: LIMIT must be a positive integer"
        assert console.process_input("LIMIT 0") == "Error: LIMIT must be a positive integer"
        assert console.decimal_limit == 5

    def test_variables(self, console):
        assert console.process_input("VARS") == "No variables or functions defined"
        assert console.process_input("x = 1/2") == "x = 0.5#0 (1/2)"
        assert console.process_input("x + 1/2") == "1"
        assert console.process_input("y = x*4") == "y = 2"
        assert console.process_input("VARS") == "Variables:\n  x = 0.5#0 (1/2)\n  y = 2"

    def test_negative_variable(self, console):
        console.process_input("n = -1/2")
        assert console.process_input("n*n") == "0.25#0 (1/4)"

    def test_variables_in_input_base(self):
        console = Console(settings={"input_base": 16})
        assert console.process_input("x = 10") == "x = 16"
        assert console.process_input("x - 10") == "0"
        console.process_input("y = 1/3")
        assert console.process_input("y * 3") == "1"
        console.process_input("z = -ff/10")
        assert console.process_input("z * 10") == "-255"

    def test_exit(self, console):
        assert console.process_input("quit") == "Goodbye!"
        assert console.running is False


class TestFriendlyErrors:

    @pytest.mark.parametrize("expression, expected", [
        ("1/0", "Error: Division by zero is undefined"),
        ("1/(1-1)", "Error: Division by zero is undefined"),
        ("0^0", "Error: 0^0 is undefined"),
        ("(-3)!", "Error: Factorial is not defined for negative numbers"),
        ("(2", "Error: Missing closing parenthesis"),
    ])
    def test_messages(self, console, expression, expected):
        assert console.process_input(expression) == expected
