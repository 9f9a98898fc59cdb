"""Scaled-integer conversions for token amounts.

Ledger values are ints scaled by the token's decimals (1 token = 10**decimals units).
User input and display values are decimal strings. Amounts sent to the ledger
always go through parse_units; floats are only used for UI proposals.
"""

import logging
import math
import re

logger = logging.getLogger(__name__)

ZERO_DISPLAY = "0.0"
DISPLAY_PLACES = 4

_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$")


def parse_units(value: str, decimals: int) -> int:
    """Parse a decimal string into scaled units: ('1.5', 6) -> 1500000.

    Fraction digits beyond `decimals` are rounded half-up.
    Raises ValueError on malformed input.
    """
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got {decimals}")
    text = value.strip()
    if not _DECIMAL_RE.match(text):
        raise ValueError(f"Invalid decimal amount: {value!r}")

    negative = text.startswith("-")
    whole, _, frac = text.lstrip("+-").partition(".")
    whole = whole or "0"
    if len(frac) > decimals:
        units = int(whole + frac[:decimals])
        if frac[decimals] >= "5":
            units += 1
    else:
        units = int(whole + frac.ljust(decimals, "0"))
    return -units if negative else units


def format_units(value: int, decimals: int) -> str:
    """Exact inverse of parse_units, trailing zeros trimmed: (1500000, 6) -> '1.5'."""
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got {decimals}")
    sign = "-" if value < 0 else ""
    whole, frac = divmod(abs(value), 10**decimals)
    frac_str = str(frac).rjust(decimals, "0").rstrip("0") if decimals else ""
    if frac_str:
        return f"{sign}{whole}.{frac_str}"
    return f"{sign}{whole}"


def format_balance(value: int | None, decimals: int) -> str:
    """Display string for a scaled balance.

    None/0 -> '0.0'; values >= 1 token -> 4 fractional digits (half-up);
    values < 1 token -> full precision. Never raises.
    """
    if not value:
        return ZERO_DISPLAY
    try:
        if decimals < 0:
            raise ValueError(f"decimals must be >= 0, got {decimals}")
        one = 10**decimals
        if value >= one:
            quotient, remainder = divmod(value * 10**DISPLAY_PLACES, one)
            if 2 * remainder >= one:
                quotient += 1
            whole, frac = divmod(quotient, 10**DISPLAY_PLACES)
            return f"{whole}.{frac:0{DISPLAY_PLACES}d}"
        return format_units(value, decimals)
    except (TypeError, ValueError) as exc:
        logger.warning("Cannot format balance %r (decimals=%r): %s", value, decimals, exc)
        return ZERO_DISPLAY


def to_human(value: str | None) -> float | None:
    """Float reading of a user-typed amount, or None when empty/malformed/non-finite."""
    if not value:
        return None
    text = value.strip()
    if not _DECIMAL_RE.match(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def is_positive_amount(value: str | None) -> bool:
    """True when the field holds a well-formed amount > 0."""
    number = to_human(value)
    return number is not None and number > 0


def positive_units(value: str | None, decimals: int) -> int | None:
    """Scaled units for a typed amount when they come out > 0, else None.

    Stricter than is_positive_amount: '0.0000001' at 6 decimals rounds to 0.
    """
    if not value:
        return None
    try:
        units = parse_units(value, decimals)
    except ValueError:
        return None
    return units if units > 0 else None
