# error.py
"""""
Error taxonomy for the RatMath calculator.

Every failure raised by the arithmetic core or the parser is a MathError
subclass carrying a human readable message, a 4-digit code and (once it
passed MathEngine.calculate) the equation that produced it.
"""""


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

class MalformedLiteral(MathError):
    pass

class DivisionByZero(MathError):
    pass

class UndefinedPower(MathError):
    pass

class NegativeFactorial(MathError):
    pass

class InvalidBase(MathError):
    pass

class InvalidUncertaintyFormat(MathError):
    pass

class CalculationError(MathError):
    pass

class ConfigurationError(MathError):
    pass




Error_Dictionary= {

    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Unexpected Error"

}

# Calculator errors (3xxx), 2. Digit:
Error_Kinds = {

    "0" : "Malformed Literal",
    "1" : "Division by Zero",
    "2" : "Undefined Power",
    "3" : "Factorial",
    "4" : "Base System",
    "5" : "Uncertainty Format",
    "6" : "Calculation"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "3000" : "Expression cannot be empty.",
    "3001" : "Unexpected token: ", # + Token
    "3002" : "Unexpected end of expression.",
    "3003" : "Invalid rational number format.",
    "3004" : "Invalid integer format.",
    "3005" : "Invalid decimal format.",
    "3006" : "Invalid repeating decimal.",
    "3007" : "Invalid mixed number.",
    "3008" : "Invalid exponent.",
    "3009" : "Missing ')'. ",
    "3010" : "E notation not allowed directly after a fraction.",
    "3011" : "Invalid interval format.",
    "3012" : "Nested intervals are not supported.",
    "3013" : "Invalid continued fraction.",
    "3014" : "Invalid fraction format.",

    "3100" : "Division by Zero",
    "3101" : "Denominator cannot be zero.",
    "3102" : "Cannot divide by an interval containing zero.",
    "3103" : "Cannot take reciprocal of zero.",
    "3104" : "Modulo by zero.",

    "3200" : "0^0 is undefined.",
    "3201" : "Zero cannot be raised to a negative power.",
    "3202" : "Interval containing zero raised to a negative power.",
    "3203" : "Multiplicative exponentiation requires at least one factor.",
    "3204" : "Exponent must be an integer.",

    "3300" : "Factorial is not defined for negative numbers.",
    "3301" : "Factorial is only defined for integers.",

    "3400" : "Invalid base system.",
    "3401" : "Invalid digit for base: ", # + Character
    "3402" : "Base system characters conflict with parser symbols.",

    "3500" : "Invalid uncertainty notation.",
    "3501" : "Invalid range notation.",
    "3502" : "Invalid relative notation.",
    "3503" : "Invalid symmetric notation.",

    "3600" : "Calculation Error: ", # + Message
    "3601" : "Rational is not a whole number.",
    "3602" : "Invalid partition.",
    "3603" : "Invalid arguments.",

    "4000" : "Calculation already Running!",
    "4501" : "Not all Settings could be saved: ", # + Error raising setting

    "5000" : "Invalid configuration value: ", # + Key

    "9999" : "Unexpected Error: " #+error
}
