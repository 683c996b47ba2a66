# Console.py
"""""
Terminal front end for RatMath.

Commands: HELP, DECI, RAT, BOTH, LIMIT [n], VARS, EXIT/QUIT/BYE.
"x = expression" stores a result under a single lowercase letter; later
expressions may use the letter in place of the value.
"""""

import re

from . import error as E
from . import config_manager
from . import MathEngine
from .base_system import BaseSystem

ASSIGNMENT_PATTERN = re.compile(r"^\s*([a-z])\s*=\s*(.+)$")
VARIABLE_PATTERN = re.compile(r"(?<![A-Za-z0-9_])([a-z])(?![A-Za-z0-9_])")
NUMBER_PATTERN = re.compile(r"\d+")

HELP_TEXT = """\
RatMath Terminal Calculator

Numbers:
  42, -7            Integers
  3/4, 1..1/2       Fractions and mixed numbers (1..1/2 = 3/2)
  1.25, 0.#3        Decimals, repeating decimals (0.#3 = 1/3)
  0.12#45           Repeating part after #
  3.~7~15~1         Continued fraction
  0xff, 0b101       Base prefixed integers
  1/2:3/4           Interval
  1.23[56,67]       Uncertainty: range, [+-5] symmetric, [+5,-6] relative
  1.5E3, 2 E-1      Scientific notation

Operators:
  + - * /           Arithmetic
  ^                 Power {x^n : x in interval}
  **                Repeated interval multiplication
  ! !!              Factorial, double factorial

Commands:
  DECI | RAT | BOTH Output as decimal, fraction or both
  LIMIT [n]         Show or set the decimal display limit
  x = expression    Store a value in a single letter variable
  VARS              List stored variables
  HELP              This text
  EXIT              Quit"""


class Console:
    def __init__(self, settings=None):
        if settings is None:
            settings = config_manager.load_settings_with_defaults()
        self.settings = config_manager.validate_settings(settings)
        self.output_mode = self.settings["output_mode"]
        self.decimal_limit = self.settings["decimal_limit"]
        self.variables = {}
        self.running = True

    def format(self, value):
        return MathEngine.format_result(value, self.output_mode, self.decimal_limit,
                                        self.settings["max_period_digits"], self.settings["max_period_check"])

    def literal(self, value):
        """Text of a stored value that reads back the same in the input base."""
        text = value.to_string()
        if self.settings["input_base"] == 10:
            return text
        base = BaseSystem.from_base(self.settings["input_base"])
        return NUMBER_PATTERN.sub(lambda match: base.from_decimal(int(match.group(0))), text)

    def substitute_variables(self, expression):
        def replace(match):
            name = match.group(1)
            if name not in self.variables:
                return name
            return "(" + self.literal(self.variables[name]) + ")"

        return VARIABLE_PATTERN.sub(replace, expression)

    def evaluate(self, expression):
        return MathEngine.evaluate(self.substitute_variables(expression), self.settings)

    def process_input(self, line):
        """Handle one line of input and return the text to print (None for blank lines)."""
        line = line.strip()
        if not line:
            return None

        command = line.upper()
        if command == "HELP":
            return HELP_TEXT
        if command == "DECI":
            self.output_mode = "DECI"
            return "Output mode set to decimal"
        if command == "RAT":
            self.output_mode = "RAT"
            return "Output mode set to rational"
        if command == "BOTH":
            self.output_mode = "BOTH"
            return "Output mode set to both decimal and rational"
        if command.startswith("LIMIT"):
            return self.set_limit(command[5:].strip())
        if command == "VARS":
            return self.show_variables()
        if command in ("EXIT", "QUIT", "BYE"):
            self.running = False
            return "Goodbye!"

        try:
            assignment = ASSIGNMENT_PATTERN.match(line)
            if assignment:
                name = assignment.group(1)
                value = self.evaluate(assignment.group(2))
                self.variables[name] = value
                return f"{name} = {self.format(value)}"
            return self.format(self.evaluate(line))
        except E.MathError as error:
            return friendly_error(error)

    def set_limit(self, argument):
        if argument == "":
            return f"Current decimal display limit: {self.decimal_limit} digits"
        if not argument.isdigit() or int(argument) < 1:
            return "Error: LIMIT must be a positive integer"
        self.decimal_limit = int(argument)
        return f"Decimal display limit set to {self.decimal_limit} digits"

    def show_variables(self):
        if not self.variables:
            return "No variables or functions defined"
        lines = ["Variables:"]
        for name in sorted(self.variables):
            lines.append(f"  {name} = {self.format(self.variables[name])}")
        return "\n".join(lines)


def friendly_error(error):
    message = error.message
    if "Division by zero" in message or "Denominator cannot be zero" in message:
        return "Error: Division by zero is undefined"
    if "Factorial" in message and "negative" in message:
        return "Error: Factorial is not defined for negative numbers"
    if "Zero cannot be raised to the power of zero" in message:
        return "Error: 0^0 is undefined"
    return f"Error: {message}"


def main():
    console = Console()
    print("RatMath Terminal Calculator")
    print("Type HELP for help, EXIT to quit")

    while console.running:
        try:
            line = input("> ")
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye!")
            break

        output = console.process_input(line)
        if output is not None:
            print(output)


if __name__ == "__main__":
    main()
