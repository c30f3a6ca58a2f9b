"""Parsing utilities for common data transformations."""

import re
from decimal import Decimal, localcontext

from beacon_rewards.helpers.constants import GWEI, REWARD_DECIMALS
from beacon_rewards.helpers.errors import InvalidSlotError


SLOT_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_hex_int(hex_value: str | None, default: int = 0) -> int:
    """Parse hex string to integer.

    Args:
        hex_value: Hex-encoded string or None
        default: Default value if hex_value is None

    Returns:
        int: Parsed integer value

    Example:
        >>> parse_hex_int("0xff")
        255
        >>> parse_hex_int(None, 0)
        0
    """
    if hex_value is None:
        return default
    return int(hex_value, 16)


def parse_slot(slot_text: str) -> int:
    """Parse a slot number given as base-10 text.

    An optional sign is accepted; whitespace, underscores and non-ASCII
    digits are not.

    Args:
        slot_text: Slot as received from the caller

    Returns:
        int: Slot number

    Raises:
        InvalidSlotError: If the text is not a base-10 integer

    Example:
        >>> parse_slot("5000000")
        5000000
    """
    if not SLOT_PATTERN.fullmatch(slot_text):
        msg = f"cannot convert slot {slot_text!r} to an integer"
        raise InvalidSlotError(msg)
    # int() refuses decimal strings longer than 4300 digits
    return int(Decimal(slot_text))


def format_gwei(wei: int) -> str:
    """Render a wei amount as Gwei with exactly nine fraction digits.

    Args:
        wei: Amount in wei, may be negative

    Returns:
        str: Decimal string in Gwei

    Example:
        >>> format_gwei(1_500_000_000)
        '1.500000000'
        >>> format_gwei(-30)
        '-0.000000030'
    """
    with localcontext() as ctx:
        # Enough precision that the division is exact for any wei amount
        ctx.prec = len(str(abs(wei))) + REWARD_DECIMALS + 1
        gwei = Decimal(wei) / Decimal(GWEI)
        return f"{gwei:.{REWARD_DECIMALS}f}"


__all__ = [
    "format_gwei",
    "parse_hex_int",
    "parse_slot",
]
