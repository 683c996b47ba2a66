# base_system.py
"""""
Numeral systems defined by an ordered character list.

The position of a character in the list is its digit value, so
BaseSystem("01") is binary and BaseSystem.from_base(16) is lowercase
hexadecimal. Characters that the expression parser uses as symbols cannot be
digits.
"""""

import re

from . import error as E

RESERVED_SYMBOLS = ["+", "-", "*", "/", "^", "!", "(", ")", "[", "]", ":", ".", "#", "~"]

PREFIX_PATTERN = re.compile(r"^[a-zA-Z]$")


class BaseSystem:
    # prefix letter -> BaseSystem
    _prefix_map = {}

    def __init__(self, characters, name=None):
        if isinstance(characters, str):
            characters = list(characters)
        elif isinstance(characters, (list, tuple)):
            characters = list(characters)
        else:
            raise E.InvalidBase("Characters must be a string or array of strings", code="3400")

        if len(characters) < 2:
            raise E.InvalidBase("Base system must have at least 2 characters", code="3400")
        if len(set(characters)) != len(characters):
            raise E.InvalidBase("Character set contains duplicate characters", code="3400")

        conflicts = [char for char in characters if char in RESERVED_SYMBOLS]
        if conflicts:
            raise E.InvalidBase(
                "Base system characters conflict with parser symbols: " + ", ".join(conflicts)
                + ". Reserved symbols are: " + ", ".join(RESERVED_SYMBOLS), code="3402")

        self._characters = characters
        self._char_map = {char: index for index, char in enumerate(characters)}
        self._name = name or f"Base {len(characters)}"

    @property
    def base(self):
        return len(self._characters)

    @property
    def characters(self):
        return list(self._characters)

    @property
    def char_map(self):
        return dict(self._char_map)

    @property
    def name(self):
        return self._name

    @property
    def e_notation_marker(self):
        """Marker for scientific notation; "_^" when E is a digit of this base."""
        return "_^" if "E" in self._char_map else "E"

    # -----------------------------
    # Digit access
    # -----------------------------

    def digit_to_value(self, char):
        if char not in self._char_map:
            raise E.InvalidBase(f"Invalid character '{char}' for {self._name} (base {self.base})", code="3401")
        return self._char_map[char]

    def value_to_digit(self, value):
        return self.get_char(value)

    def get_char(self, value):
        index = int(value)
        if index < 0 or index >= self.base:
            raise E.InvalidBase(f"Value {value} is out of range for base {self.base}", code="3400")
        return self._characters[index]

    def get_max_digit(self):
        return self._characters[-1]

    def get_min_digit(self):
        return self._characters[0]

    def is_valid_digit_string(self, text):
        """True when text is non-empty and made of this base's digits only (no sign)."""
        return bool(text) and all(char in self._char_map for char in text)

    def is_valid_string(self, text):
        if not isinstance(text, str):
            return False
        if text.startswith("-"):
            text = text[1:]
        return self.is_valid_digit_string(text)

    # -----------------------------
    # Conversion
    # -----------------------------

    def to_decimal(self, text):
        """Value of a (optionally negative) digit string as an int."""
        if not isinstance(text, str) or len(text) == 0:
            raise E.InvalidBase("Input must be a non-empty string", code="3400")

        negative = text.startswith("-")
        if negative:
            text = text[1:]

        result = 0
        for char in text:
            result = result * self.base + self.digit_to_value(char)
        return -result if negative else result

    def from_decimal(self, value):
        """Digit string of an int in this base."""
        value = int(value)
        if value == 0:
            return self._characters[0]

        negative = value < 0
        value = abs(value)
        digits = []
        while value > 0:
            value, remainder = divmod(value, self.base)
            digits.append(self._characters[remainder])
        result = "".join(reversed(digits))
        return "-" + result if negative else result

    # -----------------------------
    # Factories
    # -----------------------------

    @staticmethod
    def from_base(base, name=None):
        """Standard characters: 0-9, then a-z, then A-Z (up to base 62)."""
        if isinstance(base, bool) or not isinstance(base, int) or base < 2:
            raise E.InvalidBase("Base must be an integer >= 2", code="3400")
        if base > 62:
            raise E.InvalidBase(
                "BaseSystem.from_base() only supports bases up to 62. "
                "Use the constructor with a custom character sequence for larger bases.", code="3400")

        alphabet = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
        return BaseSystem(alphabet[:base], name or f"Base {base}")

    @staticmethod
    def create_pattern(pattern, size, name=None):
        pattern = pattern.lower()

        if pattern == "alphanumeric":
            if size > 62:
                raise E.InvalidBase(f"Alphanumeric pattern only supports up to base 62, got {size}", code="3400")
            return BaseSystem.from_base(size, name)

        if pattern == "digits-only":
            if size > 10:
                raise E.InvalidBase(f"Digits-only pattern only supports up to base 10, got {size}", code="3400")
            return BaseSystem("0123456789"[:size], name or f"Base {size} (digits only)")

        if pattern == "letters-only":
            if size > 52:
                raise E.InvalidBase(f"Letters-only pattern only supports up to base 52, got {size}", code="3400")
            letters = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"[:size]
            default_name = f"Base {size} (lowercase letters)" if size <= 26 else f"Base {size} (mixed case letters)"
            return BaseSystem(letters, name or default_name)

        if pattern == "uppercase-only":
            if size > 26:
                raise E.InvalidBase(f"Uppercase-only pattern only supports up to base 26, got {size}", code="3400")
            return BaseSystem("ABCDEFGHIJKLMNOPQRSTUVWXYZ"[:size], name or f"Base {size} (uppercase letters)")

        raise E.InvalidBase(f"Unknown pattern: {pattern}. Supported patterns: alphanumeric, digits-only, "
                            "letters-only, uppercase-only", code="3400")

    def with_case_sensitivity(self, case_sensitive):
        if case_sensitive:
            return self

        lowered = []
        for char in self._characters:
            if char.lower() not in lowered:
                lowered.append(char.lower())
        return BaseSystem(lowered, f"{self._name} (case-insensitive)")

    # -----------------------------
    # Prefix registry
    # -----------------------------

    @classmethod
    def register_prefix(cls, prefix, base_system):
        if not isinstance(prefix, str) or len(prefix) != 1:
            raise E.InvalidBase("Prefix must be a single character", code="3400")
        if not isinstance(base_system, BaseSystem):
            raise E.InvalidBase("Must provide a valid BaseSystem", code="3400")
        if not PREFIX_PATTERN.match(prefix):
            raise E.InvalidBase("Prefix must be a letter", code="3400")
        cls._prefix_map[prefix] = base_system

    @classmethod
    def unregister_prefix(cls, prefix):
        cls._prefix_map.pop(prefix, None)

    @classmethod
    def get_system_for_prefix(cls, prefix):
        if prefix in cls._prefix_map:
            return cls._prefix_map[prefix]
        for registered, system in cls._prefix_map.items():
            if registered.lower() == prefix.lower():
                return system
        return None

    @classmethod
    def get_prefix_for_system(cls, base_system):
        for prefix, system in cls._prefix_map.items():
            if system == base_system:
                return prefix
        return None

    # -----------------------------
    # Misc
    # -----------------------------

    def __eq__(self, other):
        if not isinstance(other, BaseSystem):
            return NotImplemented
        return self._characters == other.characters

    def __hash__(self):
        return hash(tuple(self._characters))

    def equals(self, other):
        return self == other

    def to_string(self):
        if len(self._characters) <= 20:
            preview = "".join(self._characters)
        else:
            preview = "".join(self._characters[:10]) + "..." + "".join(self._characters[-10:])
        return f"{self._name} ({preview})"

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"BaseSystem({''.join(self._characters)!r}, {self._name!r})"


BaseSystem.BINARY = BaseSystem("01", "Binary")
BaseSystem.OCTAL = BaseSystem("01234567", "Octal")
BaseSystem.DECIMAL = BaseSystem("0123456789", "Decimal")
BaseSystem.HEXADECIMAL = BaseSystem("0123456789abcdef", "Hexadecimal")
BaseSystem.BASE36 = BaseSystem("0123456789abcdefghijklmnopqrstuvwxyz", "Base 36")
BaseSystem.BASE62 = BaseSystem("0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ", "Base 62")
BaseSystem.BASE60 = BaseSystem("0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWX", "Base 60 (Sexagesimal)")
BaseSystem.ROMAN = BaseSystem(["I", "V", "X", "L", "C", "D", "M"], "Roman Numerals")

BaseSystem.register_prefix("x", BaseSystem.HEXADECIMAL)
BaseSystem.register_prefix("b", BaseSystem.BINARY)
BaseSystem.register_prefix("o", BaseSystem.OCTAL)
BaseSystem.register_prefix("d", BaseSystem.DECIMAL)
