# tests/test_base_system.py

import pytest

from RatMath import error as E
from RatMath.base_system import BaseSystem


class TestConversion:

    def test_to_decimal(self):
        assert BaseSystem.BINARY.to_decimal("1011") == 11
        assert BaseSystem.HEXADECIMAL.to_decimal("-ff") == -255

    def test_from_decimal(self):
        assert BaseSystem.BINARY.from_decimal(-5) == "-101"
        assert BaseSystem.HEXADECIMAL.from_decimal(255) == "ff"
        assert BaseSystem.OCTAL.from_decimal(0) == "0"

    def test_invalid_digit(self):
        with pytest.raises(E.InvalidBase, match="Invalid character '2' for Binary"):
            BaseSystem.BINARY.to_decimal("102")

    def test_digit_access(self):
        assert BaseSystem.HEXADECIMAL.digit_to_value("a") == 10
        assert BaseSystem.HEXADECIMAL.get_char(15) == "f"
        assert BaseSystem.BINARY.get_max_digit() == "1"
        with pytest.raises(E.InvalidBase, match="out of range"):
            BaseSystem.BINARY.get_char(2)

    def test_valid_strings(self):
        assert BaseSystem.OCTAL.is_valid_string("-17")
        assert not BaseSystem.OCTAL.is_valid_string("18")
        assert not BaseSystem.OCTAL.is_valid_digit_string("")


class TestConstruction:

    def test_too_few_characters(self):
        with pytest.raises(E.InvalidBase, match="at least 2"):
            BaseSystem("0")

    def test_duplicates(self):
        with pytest.raises(E.InvalidBase, match="duplicate"):
            BaseSystem("0011")

    def test_reserved_symbols(self):
        with pytest.raises(E.InvalidBase, match="conflict with parser symbols") as error:
            BaseSystem("01+")
        assert error.value.code == "3402"

    def test_from_base(self):
        assert BaseSystem.from_base(16) == BaseSystem.HEXADECIMAL
        assert BaseSystem.from_base(62).base == 62
        with pytest.raises(E.InvalidBase):
            BaseSystem.from_base(63)
        with pytest.raises(E.InvalidBase):
            BaseSystem.from_base(1)

    def test_patterns(self):
        assert BaseSystem.create_pattern("digits-only", 8).characters == list("01234567")
        assert BaseSystem.create_pattern("uppercase-only", 3).characters == ["A", "B", "C"]
        with pytest.raises(E.InvalidBase, match="Unknown pattern"):
            BaseSystem.create_pattern("emoji", 4)

    def test_case_insensitive_copy(self):
        lowered = BaseSystem("abC").with_case_sensitivity(False)
        assert lowered.characters == ["a", "b", "c"]


class TestNotationHelpers:

    def test_e_marker(self):
        assert BaseSystem.HEXADECIMAL.e_notation_marker == "E"
        assert BaseSystem.BASE62.e_notation_marker == "_^"

    def test_prefix_registry(self):
        assert BaseSystem.get_system_for_prefix("x") is BaseSystem.HEXADECIMAL
        assert BaseSystem.get_system_for_prefix("X") is BaseSystem.HEXADECIMAL
        assert BaseSystem.get_prefix_for_system(BaseSystem.BINARY) == "b"
        assert BaseSystem.get_system_for_prefix("q") is None

    def test_register_and_unregister(self):
        BaseSystem.register_prefix("t", BaseSystem.from_base(3))
        try:
            assert BaseSystem.get_system_for_prefix("t").base == 3
        finally:
            BaseSystem.unregister_prefix("t")
        assert BaseSystem.get_system_for_prefix("t") is None
        with pytest.raises(E.InvalidBase, match="letter"):
            BaseSystem.register_prefix("1", BaseSystem.BINARY)
