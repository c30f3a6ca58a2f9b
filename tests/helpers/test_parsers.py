"""Tests for parsing utilities."""

import pytest

from beacon_rewards.helpers.errors import InvalidSlotError
from beacon_rewards.helpers.parsers import format_gwei, parse_hex_int, parse_slot


class TestParseHexInt:
    """Tests for parse_hex_int function."""

    def test_parses_prefixed_hex(self) -> None:
        """Test parsing 0x-prefixed quantities."""
        assert parse_hex_int("0xff") == 255
        assert parse_hex_int("0x0") == 0

    def test_none_returns_default(self) -> None:
        """Test that None returns the default."""
        assert parse_hex_int(None) == 0
        assert parse_hex_int(None, 7) == 7

    def test_invalid_hex_raises(self) -> None:
        """Test that non-hex text raises ValueError."""
        with pytest.raises(ValueError):
            parse_hex_int("0xzz")


class TestParseSlot:
    """Tests for parse_slot function."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("5000000", 5_000_000), ("0", 0), ("+12", 12), ("-1", -1), ("007", 7)],
    )
    def test_valid_slots(self, text: str, expected: int) -> None:
        """Test base-10 integers with an optional sign."""
        assert parse_slot(text) == expected

    def test_no_digit_limit(self) -> None:
        """Test that slots longer than 4300 digits are parsed exactly."""
        assert parse_slot("1" + "0" * 5000) == 10**5000
        assert parse_slot("-" + "0" * 4999 + "3") == -3

    @pytest.mark.parametrize(
        "text", ["", "abc", "12a", "1.5", " 12", "12 ", "1_000", "0x10", "١٢"]
    )
    def test_invalid_slots_raise(self, text: str) -> None:
        """Test that anything but base-10 digits raises InvalidSlotError."""
        with pytest.raises(InvalidSlotError, match="cannot convert slot"):
            parse_slot(text)


class TestFormatGwei:
    """Tests for format_gwei function."""

    @pytest.mark.parametrize(
        ("wei", "expected"),
        [
            (0, "0.000000000"),
            (1, "0.000000001"),
            (1_500_000_000, "1.500000000"),
            (-30, "-0.000000030"),
            (-1_000_000_000, "-1.000000000"),
            (123_456_789_012_345_678_901, "123456789012.345678901"),
        ],
    )
    def test_renders_nine_fraction_digits(self, wei: int, expected: str) -> None:
        """Test exact rendering with nine digits after the point."""
        assert format_gwei(wei) == expected

    def test_large_amounts_are_exact(self) -> None:
        """Test that amounts beyond float precision are not rounded."""
        wei = 10**30 + 1

        assert format_gwei(wei) == "1000000000000000000000.000000001"
